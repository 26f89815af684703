"""Projection of raw GitHub account payloads onto known fields."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class GitHubAccountFields:
    """The account fields LinkPortal keeps from a GitHub user payload.

    Unknown keys in the payload are ignored and missing keys default to
    None, so partially populated entities (a bare id from a link record,
    for example) map cleanly.
    """

    id: str | None = None
    login: str | None = None
    avatar_url: str | None = None
    created_at: str | None = None
    updated_at: str | None = None

    @classmethod
    def from_entity(cls, entity: Mapping[str, Any] | None) -> "GitHubAccountFields":
        """Build the projection from a raw entity.

        Args:
            entity: GitHub user payload (dict-like) or None.

        Returns:
            GitHubAccountFields with the known fields populated.

        Raises:
            ValueError: If the entity is not a mapping or the id is unusable.
        """
        if entity is None:
            return cls()
        if not isinstance(entity, Mapping):
            raise ValueError(
                f"Account entity must be a mapping, got {type(entity).__name__}"
            )

        raw_id = entity.get("id")
        if isinstance(raw_id, bool) or isinstance(raw_id, (dict, list)):
            raise ValueError(f"Invalid account id: {raw_id!r}")

        return cls(
            id=str(raw_id) if raw_id not in (None, "") else None,
            login=_optional_str(entity.get("login")),
            avatar_url=_optional_str(entity.get("avatar_url")),
            created_at=_optional_str(entity.get("created_at")),
            updated_at=_optional_str(entity.get("updated_at")),
        )


def _optional_str(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)
