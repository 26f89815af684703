"""Corporate link entity.

A link associates one GitHub account with one corporate identity. The link
record is owned by the link provider; accounts only hold a reference to it.
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class CorporateLink:
    """Association between a GitHub account and a corporate identity.

    Attributes:
        corporate_id: Directory object id of the corporate identity.
        corporate_username: Corporate user principal name (usually an email).
        corporate_display_name: Display name from the corporate directory.
        third_party_id: GitHub account id.
        third_party_username: GitHub login at the time of linking.
        third_party_avatar: GitHub avatar URL at the time of linking.
        is_service_account: Whether the link belongs to a service account.
        created_at: When the link was created.
    """

    corporate_id: str
    corporate_username: str | None
    corporate_display_name: str | None
    third_party_id: str
    third_party_username: str | None = None
    third_party_avatar: str | None = None
    is_service_account: bool = False
    created_at: datetime | None = None

    def __post_init__(self) -> None:
        if not self.corporate_id:
            raise ValueError("Corporate id is required")
        if not self.third_party_id:
            raise ValueError("Third-party id is required")

    def to_identity(self) -> dict[str, str | None]:
        """Corporate identity record published with unlink events."""
        return {
            "preferredName": self.corporate_display_name,
            "userPrincipalName": self.corporate_username,
            "id": self.corporate_id,
        }
