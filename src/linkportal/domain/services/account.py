"""GitHub account and its termination workflow.

An Account is built per request from a raw GitHub user payload. Its details
and corporate link are filled in only through explicit async calls. The
destructive workflows (unlinking, removing organization memberships,
terminating) return an ordered audit history of what happened.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any, Callable, Mapping

from linkportal.core.concurrency import each_limit
from linkportal.core.errors import (
    AccountPreconditionError,
    LinkNotFoundError,
    LinkPortalError,
    LinkRemovalError,
    MembershipRemovalError,
    NoLinkError,
    status_code_of,
    wrap_error,
)
from linkportal.core.logging import get_logger
from linkportal.domain.entities.corporate_link import CorporateLink
from linkportal.domain.entities.github_account import GitHubAccountFields
from linkportal.infrastructure.github.cache import CacheOptions

if TYPE_CHECKING:
    from linkportal.domain.services.operations import Operations
    from linkportal.domain.services.organization import Organization

logger = get_logger(__name__)


@dataclass
class MembershipRemovalResult:
    """Outcome of removing an account from the managed organizations.

    Attributes:
        history: Audit messages, in processing order.
        error: The first error encountered, or None.
    """

    history: list[str] = field(default_factory=list)
    error: BaseException | None = None


class Account:
    """A GitHub account, optionally linked to a corporate identity."""

    def __init__(
        self,
        entity: Mapping[str, Any] | None,
        operations: "Operations",
        get_central_operations_token: Callable[[], str | None],
    ) -> None:
        fields = GitHubAccountFields.from_entity(entity)
        self._id = fields.id
        self._login = fields.login
        self._avatar_url = fields.avatar_url
        self._created_at = fields.created_at
        self._updated_at = fields.updated_at

        self._operations = operations
        self._get_central_operations_token = get_central_operations_token

        self._link: CorporateLink | None = None
        self._link_resolved = False
        self.warnings: list[str] = []

    @property
    def id(self) -> str | None:
        return self._id

    @property
    def login(self) -> str | None:
        return self._login

    @property
    def avatar_url(self) -> str | None:
        return self._avatar_url

    @property
    def created_at(self) -> str | None:
        return self._created_at

    @property
    def updated_at(self) -> str | None:
        return self._updated_at

    @property
    def link(self) -> CorporateLink | None:
        return self._link

    @property
    def link_resolved(self) -> bool:
        """True once a link lookup has completed, whether or not a link exists."""
        return self._link_resolved

    # Presentation helpers

    def contact_name(self) -> str | None:
        if self._link is not None and self._link.corporate_display_name:
            return self._link.corporate_display_name
        return self._login

    def contact_email(self) -> str | None:
        # The directory display name stands in for the address.
        return self._link.corporate_display_name if self._link is not None else None

    def corporate_alias(self) -> str | None:
        if self._link is None or not self._link.corporate_username:
            return None
        return self._link.corporate_username.split("@", 1)[0]

    def corporate_profile_url(self) -> str | None:
        alias = self.corporate_alias()
        prefix = self._operations.settings.corporate_profile_prefix
        if alias and prefix:
            return prefix + alias
        return None

    def avatar(self, size: int = 80) -> str | None:
        if not self._avatar_url:
            return None
        return f"{self._avatar_url}&s={size}"

    def profile_created_at(self) -> datetime | None:
        return _parse_timestamp(self._created_at)

    def profile_updated_at(self) -> datetime | None:
        return _parse_timestamp(self._updated_at)

    # Detail and link resolution

    async def get_details(
        self,
        max_age_seconds: int | None = None,
        background_refresh: bool | None = None,
    ) -> dict[str, Any]:
        """Fetch the account from GitHub and refresh the profile fields.

        Args:
            max_age_seconds: Accept a cached response up to this age.
            background_refresh: Serve a stale cached response while refreshing it.

        Returns:
            The raw GitHub user payload.

        Raises:
            AccountPreconditionError: The account has no id.
            UpstreamError: The GitHub call failed.
        """
        if not self._id:
            raise AccountPreconditionError(
                "Must provide a GitHub user ID to retrieve account information."
            )

        settings = self._operations.settings
        cache_options = CacheOptions(
            max_age_seconds=(
                max_age_seconds
                if max_age_seconds is not None
                else settings.account_detail_stale_seconds
            ),
            background_refresh=background_refresh,
        )
        try:
            entity = await self._operations.github.call(
                self._get_central_operations_token(),
                "users.getById",
                {"id": self._id},
                cache_options,
            )
        except Exception as e:
            raise wrap_error(e, f'Could not get details about account "{self._id}".') from e

        fields = GitHubAccountFields.from_entity(entity or {})
        self._login = fields.login
        self._avatar_url = fields.avatar_url
        self._created_at = fields.created_at
        self._updated_at = fields.updated_at
        return entity

    async def get_details_and_link(self) -> "Account":
        """Best-effort detail fetch plus the cached link lookup."""
        await self._try_get_details("account.get_details_and_link")
        await self._try_resolve_link(
            self._operations.get_link_with_overhead, "account.get_details_and_link"
        )
        return self

    async def get_details_and_direct_link(self) -> "Account":
        """Best-effort detail fetch plus an uncached link lookup."""
        await self._try_get_details("account.get_details_and_direct_link")
        await self._try_resolve_link(
            self._operations.get_link_by_third_party_id,
            "account.get_details_and_direct_link",
        )
        return self

    async def _try_get_details(self, location: str) -> None:
        try:
            await self.get_details()
        except Exception as e:
            self._warn(f"Could not retrieve GitHub details for account {self._id}: {e}", e, location)

    async def _try_resolve_link(
        self,
        lookup: Callable[[str | None], Any],
        location: str,
    ) -> None:
        try:
            link = await lookup(self._id)
        except Exception as e:
            self._warn(f"Could not retrieve the link for account {self._id}: {e}", e, location)
            return
        if link is not None:
            self._link = link
        self._link_resolved = True

    def _warn(self, message: str, error: BaseException, location: str) -> None:
        self.warnings.append(message)
        logger.warning(message, github_id=self._id, location=location, error=str(error))
        self._operations.insights.track_exception(
            error, {"id": self._id, "location": location}
        )

    # Unlink

    async def remove_link(self) -> list[str]:
        """Delete the account's corporate link.

        Returns:
            Audit history.

        Raises:
            AccountPreconditionError: The account has no id.
            NoLinkError: No link is associated with the account.
            LinkRemovalError: The link provider failed; carries partial history.
        """
        if not self._id:
            raise AccountPreconditionError("No user id known")
        link_provider = self._operations.link_provider
        if link_provider is None:
            raise LinkPortalError("No link provider")

        history: list[str] = []
        try:
            await self.get_details_and_direct_link()
        except Exception as e:
            self._operations.insights.track_exception(
                e, {"id": self._id, "location": "account.remove_link"}
            )

        link = self._link
        if link is None:
            raise NoLinkError(
                f"No link is associated with the instance for account {self._id}"
            )

        payload = {
            "github": {"id": self._id, "login": self._login},
            "aad": link.to_identity(),
        }

        try:
            await link_provider.delete_link(link)
        except Exception as e:
            if isinstance(e, LinkNotFoundError) or status_code_of(e) == 404:
                message = f"The link for ID {self._id} no longer exists: {e}"
            else:
                message = f"The link for ID {self._id} could not be removed: {e}"
            history.append(message)
            logger.warning(message, github_id=self._id)
            raise LinkRemovalError(message, error=e, history=history) from e

        await self._operations.fire_unlink_event(payload)
        history.append(f"The link for ID {self._id} has been removed from the link service")
        logger.info("Account unlinked", github_id=self._id, login=self._login)
        return history

    # Organization memberships

    async def get_operational_organization_memberships(self) -> list["Organization"]:
        """Managed organizations where the account is an active or pending member.

        Raises:
            AccountPreconditionError: No login could be resolved.
            UpstreamError: The detail fetch failed.
        """
        await self.get_details()
        username = self._login
        if not username:
            raise AccountPreconditionError(
                f"No GitHub username available for user ID {self._id}"
            )

        async def lookup(organization: "Organization") -> bool:
            try:
                membership = await organization.get_operational_membership(username)
            except Exception as e:
                logger.debug(
                    "Membership lookup failed",
                    organization=organization.name,
                    login=username,
                    error=str(e),
                )
                return False
            return membership is not None and membership.is_managed

        organizations = list(self._operations.organizations)
        found = await each_limit(
            organizations,
            self._operations.settings.membership_lookup_concurrency,
            lookup,
        )
        return [org for org, is_member in zip(organizations, found) if is_member]

    async def remove_managed_organization_memberships(self) -> MembershipRemovalResult:
        """Remove the account from every managed organization it belongs to.

        Removal runs one organization at a time, in configured order. A
        failure is recorded and the next organization is still attempted.
        """
        result = MembershipRemovalResult()
        organizations: list["Organization"] = []
        try:
            organizations = await self.get_operational_organization_memberships()
        except Exception as e:
            if status_code_of(e) != 404:
                result.error = e
                return result
            result.history.append(
                f"Could not get organization membership information because: {e}"
            )

        username = self._login
        if organizations:
            logger.info(
                f"{username} is a member of the following organizations: "
                + ", ".join(org.name for org in organizations),
                github_id=self._id,
            )
        else:
            logger.info(
                f"{username} is not a member of any managed organizations",
                github_id=self._id,
            )

        async def remove(organization: "Organization") -> None:
            try:
                await organization.remove_member(username)
            except Exception as e:
                result.history.append(
                    f"Error while removing {username} from {organization.name}: {e}"
                )
                if result.error is None:
                    result.error = e
                return
            result.history.append(f"Removed {username} from {organization.name}")

        await each_limit(organizations, 1, remove)
        return result

    # Termination

    async def terminate(
        self,
        reason: str | None = None,
        continue_on_error: bool = False,
    ) -> list[str]:
        """Remove organization memberships, then the corporate link.

        Args:
            reason: Recorded with the start event.
            continue_on_error: Remove the link even when membership removal failed.

        Returns:
            Membership history followed by link history.

        Raises:
            MembershipRemovalError: Membership removal failed and
                ``continue_on_error`` is False. The link is left in place.
        """
        insights = self._operations.insights
        insights.track_event(
            "UserUnlinkStart",
            {
                "id": self._id,
                "login": self._login,
                "reason": reason or "account.terminate called",
                "continueOnError": (
                    "continue on errors" if continue_on_error else "halt on errors"
                ),
            },
        )

        membership = await self.remove_managed_organization_memberships()
        history = membership.history
        if membership.error is not None:
            insights.track_exception(
                membership.error, {"id": self._id, "location": "account.terminate"}
            )
            if not continue_on_error:
                raise MembershipRemovalError(membership.error, membership.history)
            logger.warning(
                "Continuing termination after membership removal failed",
                github_id=self._id,
                error=str(membership.error),
                dropped_history=membership.history,
            )
            history = []

        try:
            history.extend(await self.remove_link())
        except LinkRemovalError as e:
            insights.track_exception(e, {"id": self._id, "location": "account.terminate"})
            logger.warning("Link removal failed", github_id=self._id, error=str(e))
            history.extend(e.history)
        except Exception as e:
            insights.track_exception(e, {"id": self._id, "location": "account.terminate"})
            logger.warning("Link removal failed", github_id=self._id, error=str(e))

        insights.track_event("UserUnlink", {"id": self._id, "login": self._login})
        return history

    def __repr__(self) -> str:
        return f"<Account(id={self._id}, login={self._login})>"


def _parse_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
