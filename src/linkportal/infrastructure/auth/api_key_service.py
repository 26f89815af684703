import hashlib
import secrets

from sqlalchemy.ext.asyncio import AsyncSession

from linkportal.core.logging import get_logger
from linkportal.infrastructure.persistence.models.api_key import APIKeyModel
from linkportal.infrastructure.persistence.repositories.api_key_repository import (
    APIKeyRepository,
)

logger = get_logger(__name__)

API_KEY_PREFIX = "lp_"


class APIKeyService:
    """Service for managing API keys."""

    @staticmethod
    def hash_key(key: str) -> str:
        """Compute SHA-256 hash of a key.

        Args:
            key: Plaintext API key.

        Returns:
            SHA-256 hex digest.
        """
        return hashlib.sha256(key.encode()).hexdigest()

    async def create_api_key(
        self,
        session: AsyncSession,
        name: str,
        apis: list[str],
        orgs: list[str] | str = "*",
    ) -> tuple[str, APIKeyModel]:
        """Create a new API key and store its hash.

        Args:
            session: SQLAlchemy async session.
            name: Human-readable name for the key.
            apis: API scopes granted to the key ("people", "unlink").
            orgs: "*" or the organizations the key may act on.

        Returns:
            tuple: (plaintext_key, APIKeyModel)
        """
        plaintext_key = API_KEY_PREFIX + secrets.token_urlsafe(32)
        model = APIKeyModel(
            name=name,
            key_hash=self.hash_key(plaintext_key),
            apis=",".join(api.strip() for api in apis if api.strip()) or None,
            orgs=orgs if isinstance(orgs, str) else ",".join(orgs),
        )
        await APIKeyRepository(session).create(model)

        logger.info("API Key created", key_id=model.id, name=name)
        return plaintext_key, model

    async def authenticate(self, session: AsyncSession, key: str) -> APIKeyModel | None:
        """Look up an active key and record its use.

        Returns:
            The key record, or None if the key is unknown or revoked.
        """
        repository = APIKeyRepository(session)
        model = await repository.get_by_hash(self.hash_key(key))
        if model is None:
            return None
        await repository.update_last_used(model.id)
        return model


api_key_service = APIKeyService()
