"""Organization membership entity."""

from dataclasses import dataclass
from enum import Enum


class MembershipState(str, Enum):
    """Membership states that count as a managed membership."""

    ACTIVE = "active"
    PENDING = "pending"


@dataclass(frozen=True)
class OrganizationMembership:
    """Result of a membership query against one organization.

    Attributes:
        organization: Organization name.
        username: GitHub login the query was made for.
        state: Raw state reported by GitHub ("active", "pending", ...), or None.
        role: Membership role ("admin", "member"), if reported.
    """

    organization: str
    username: str
    state: str | None = None
    role: str | None = None

    @property
    def is_managed(self) -> bool:
        """Only active or pending memberships are removed on termination."""
        return self.state in (MembershipState.ACTIVE.value, MembershipState.PENDING.value)
