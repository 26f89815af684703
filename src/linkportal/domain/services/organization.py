"""Handle for one managed GitHub organization."""

from typing import Callable

from linkportal.core.errors import status_code_of
from linkportal.core.logging import get_logger
from linkportal.domain.entities.organization_membership import OrganizationMembership
from linkportal.infrastructure.github.cache import CacheOptions
from linkportal.infrastructure.github.client import GitHubClient

logger = get_logger(__name__)


class Organization:
    """Membership lookup and removal for a single organization.

    Calls are made with the central operations token, which must belong to
    an organization owner for removals to succeed.
    """

    def __init__(
        self,
        name: str,
        github: GitHubClient,
        get_token: Callable[[], str | None],
        membership_max_age_seconds: int = 60,
    ) -> None:
        self.name = name
        self._github = github
        self._get_token = get_token
        self._membership_max_age_seconds = membership_max_age_seconds

    async def get_operational_membership(self, username: str) -> OrganizationMembership | None:
        """Look up ``username``'s membership.

        Returns:
            The membership, or None when GitHub reports no membership (404).

        Raises:
            GitHubError: Any other upstream failure.
        """
        try:
            entity = await self._github.call(
                self._get_token(),
                "orgs.getMembershipForUser",
                {"org": self.name, "username": username},
                CacheOptions(max_age_seconds=self._membership_max_age_seconds),
            )
        except Exception as e:
            if status_code_of(e) == 404:
                return None
            raise

        if not entity:
            return None
        return OrganizationMembership(
            organization=self.name,
            username=username,
            state=entity.get("state"),
            role=entity.get("role"),
        )

    async def remove_member(self, username: str) -> None:
        """Remove ``username`` from the organization.

        Raises:
            GitHubError: The removal failed.
        """
        await self._github.call(
            self._get_token(),
            "orgs.removeMembershipForUser",
            {"org": self.name, "username": username},
        )
        self._github.invalidate(
            "orgs.getMembershipForUser", {"org": self.name, "username": username}
        )
        logger.info("Organization member removed", organization=self.name, login=username)

    def __repr__(self) -> str:
        return f"<Organization(name={self.name})>"
