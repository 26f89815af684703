"""Domain entities for LinkPortal.

Entities are pure Python dataclasses that represent core business concepts.
They have no dependencies on infrastructure or external frameworks.
"""

from linkportal.domain.entities.corporate_link import CorporateLink
from linkportal.domain.entities.github_account import GitHubAccountFields
from linkportal.domain.entities.hook_context import (
    AbortHookException,
    HookContext,
    HookResult,
)
from linkportal.domain.entities.organization_membership import (
    MembershipState,
    OrganizationMembership,
)

__all__ = [
    "AbortHookException",
    "CorporateLink",
    "GitHubAccountFields",
    "HookContext",
    "HookResult",
    "MembershipState",
    "OrganizationMembership",
]
