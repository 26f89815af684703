"""SQLAlchemy models for the LinkPortal tables.

All models inherit from the Base class defined in database.py and are
created on application startup.
"""

from linkportal.infrastructure.persistence.models.api_key import APIKeyModel
from linkportal.infrastructure.persistence.models.corporate_link import CorporateLinkModel

__all__ = [
    "APIKeyModel",
    "CorporateLinkModel",
]
