"""Domain services for LinkPortal.

Services hold the account workflows and the collaborators they run against.
"""

from linkportal.domain.services.account import Account, MembershipRemovalResult
from linkportal.domain.services.link_cache import LinkCache
from linkportal.domain.services.operations import Operations
from linkportal.domain.services.organization import Organization

__all__ = [
    "Account",
    "LinkCache",
    "MembershipRemovalResult",
    "Operations",
    "Organization",
]
