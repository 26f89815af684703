"""Operations facade.

Bundles the collaborators the account workflows depend on (GitHub client,
link provider, managed organizations, telemetry, hooks) and exposes the
link lookups and the unlink event.
"""

import asyncio
from typing import Any, Mapping

from linkportal.core.config import Settings
from linkportal.core.errors import NotFoundError
from linkportal.core.hooks import HookEvent, HookRegistry
from linkportal.core.logging import get_logger
from linkportal.domain.entities.corporate_link import CorporateLink
from linkportal.domain.entities.hook_context import HookContext
from linkportal.domain.services.account import Account
from linkportal.domain.services.link_cache import LinkCache
from linkportal.domain.services.organization import Organization
from linkportal.infrastructure.github.client import GitHubClient
from linkportal.infrastructure.links.base import LinkProvider
from linkportal.infrastructure.telemetry import StructlogInsights, TelemetrySink

logger = get_logger(__name__)


class Operations:
    """Entry point for account workflows."""

    def __init__(
        self,
        settings: Settings,
        github: GitHubClient,
        link_provider: LinkProvider | None,
        insights: TelemetrySink | None = None,
        hook_registry: HookRegistry | None = None,
        organizations: list[Organization] | None = None,
        link_cache: LinkCache | None = None,
    ) -> None:
        self.settings = settings
        self.github = github
        self.link_provider = link_provider
        self.insights = insights if insights is not None else StructlogInsights()
        self.hook_registry = hook_registry if hook_registry is not None else HookRegistry()
        self.link_cache = (
            link_cache if link_cache is not None else LinkCache(settings.link_cache_ttl_seconds)
        )
        self._link_cache_lock = asyncio.Lock()
        if organizations is None:
            organizations = [
                Organization(
                    name,
                    github,
                    self.central_operations_token,
                    settings.org_membership_stale_seconds,
                )
                for name in settings.organizations
            ]
        self.organizations = organizations

    def central_operations_token(self) -> str | None:
        return self.settings.github_token

    def get_organization(self, name: str) -> Organization:
        """Find a managed organization by name (case-insensitive).

        Raises:
            NotFoundError: The organization is not managed here.
        """
        for organization in self.organizations:
            if organization.name.lower() == name.lower():
                return organization
        raise NotFoundError(f"The organization {name} is not managed by this system")

    def get_account(self, github_id: str | int) -> Account:
        """Account handle for a GitHub id; nothing is fetched yet."""
        return self.create_account({"id": github_id})

    def create_account(self, entity: Mapping[str, Any]) -> Account:
        """Account handle from a raw GitHub user payload."""
        return Account(entity, self, self.central_operations_token)

    async def get_link_with_overhead(
        self,
        github_id: str | None,
        max_age_seconds: int | None = None,
    ) -> CorporateLink | None:
        """Cached link lookup served from a snapshot of all links.

        Args:
            github_id: GitHub account id.
            max_age_seconds: Reload the snapshot if it is older than this.
        """
        if not github_id or self.link_provider is None:
            return None

        links = self.link_cache.get_all(max_age_seconds)
        if links is None:
            async with self._link_cache_lock:
                links = self.link_cache.get_all(max_age_seconds)
                if links is None:
                    links = self.link_cache.set_all(await self.link_provider.get_links())
                    logger.debug("Link snapshot loaded", link_count=len(links))
        return links.get(str(github_id))

    async def get_link_by_third_party_id(self, github_id: str | None) -> CorporateLink | None:
        """Direct, uncached link lookup."""
        if not github_id or self.link_provider is None:
            return None
        return await self.link_provider.get_by_third_party_id(str(github_id))

    async def fire_unlink_event(self, payload: dict[str, Any]) -> None:
        """Announce a deleted link to hooks and telemetry."""
        github_id = str(payload.get("github", {}).get("id") or "")
        if github_id:
            self.link_cache.invalidate(github_id)

        self.insights.track_event(
            "UserUnlinked",
            {
                "id": github_id,
                "login": payload.get("github", {}).get("login"),
                "corporateId": (payload.get("aad") or {}).get("id"),
            },
        )

        result = await self.hook_registry.trigger(
            event=HookEvent.ON_ACCOUNT_AFTER_UNLINK,
            data=payload,
            context=HookContext(github_id=github_id or None),
        )
        if result.errors:
            logger.warning(
                "Unlink hooks reported errors",
                github_id=github_id,
                errors=result.errors,
            )
