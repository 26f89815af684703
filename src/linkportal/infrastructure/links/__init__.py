"""Link provider implementations."""

from linkportal.infrastructure.links.base import LinkProvider
from linkportal.infrastructure.links.sql_link_provider import SqlLinkProvider

__all__ = ["LinkProvider", "SqlLinkProvider"]
