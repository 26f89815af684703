"""Base abstraction for link providers."""

from abc import ABC, abstractmethod

from linkportal.domain.entities.corporate_link import CorporateLink


class LinkProvider(ABC):
    """Abstract base class for corporate link storage."""

    @abstractmethod
    async def get_links(self) -> list[CorporateLink]:
        """Return every stored link."""
        ...

    @abstractmethod
    async def get_by_third_party_id(self, third_party_id: str) -> CorporateLink | None:
        """Return the link for a GitHub account id, or None."""
        ...

    @abstractmethod
    async def create_link(self, link: CorporateLink) -> CorporateLink:
        """Store a new link."""
        ...

    @abstractmethod
    async def delete_link(self, link: CorporateLink) -> None:
        """Delete a link.

        Raises:
            LinkNotFoundError: No stored link matches.
        """
        ...
