"""
API-Key Resolver - finds a usable credential for a (provider, user) pair

Precedence: the user's own stored key, then the shared key from the
environment, then nothing. "Nothing" is not an error here; the provider
client factory decides what a missing key means.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from backend.config import Settings, settings as default_settings
from backend.core.crypto import decrypt_api_key, encrypt_api_key
from backend.core.exceptions import DecryptionError
from backend.database import utcnow
from backend.models.user_api_key import UserApiKey
from backend.services.providers import Provider, get_provider_info

logger = logging.getLogger(__name__)

SOURCE_USER = "user"
SOURCE_ENVIRONMENT = "environment"


@dataclass(frozen=True)
class ResolvedCredential:
    """A usable API key and where it came from"""
    value: str
    source: str

    @property
    def is_user_key(self) -> bool:
        return self.source == SOURCE_USER


class APIKeyResolver:
    """
    Resolve, store and list provider API keys

    Key material is encrypted at rest (see backend.core.crypto) and never
    leaves this class except as the return value of get_api_key.
    """

    def __init__(self, db: Session, settings: Optional[Settings] = None):
        """
        Args:
            db: Database session
            settings: Settings holding the shared provider keys
        """
        self.db = db
        self.settings = settings or default_settings

    def get_environment_key(self, provider: Provider) -> Optional[str]:
        """Shared key for a provider from process configuration"""
        info = get_provider_info(provider)
        return getattr(self.settings, info.requires_key, "") or None

    def get_user_key(self, provider: Provider, user_id: UUID) -> Optional[str]:
        """
        Decrypted user-specific key, or None when the user has not stored one

        Raises:
            DecryptionError: The stored value cannot be decrypted
        """
        row = self._get_row(provider, user_id)
        if row is None:
            return None

        try:
            return decrypt_api_key(row.encrypted_key, self.settings.encryption_secret)
        except DecryptionError:
            logger.warning(
                f"Stored {Provider(provider).value} key for user {user_id} could not be decrypted"
            )
            raise

    def get_api_key(
        self,
        provider: Provider,
        user_id: Optional[UUID] = None
    ) -> Optional[ResolvedCredential]:
        """
        Resolve the credential for a provider

        Args:
            provider: Provider to resolve for
            user_id: Requesting user, if any

        Returns:
            ResolvedCredential, or None when neither source has a key

        Raises:
            DecryptionError: A user key exists but is unreadable
        """
        if user_id is not None:
            user_key = self.get_user_key(provider, user_id)
            if user_key:
                return ResolvedCredential(user_key, SOURCE_USER)

        env_key = self.get_environment_key(provider)
        if env_key:
            return ResolvedCredential(env_key, SOURCE_ENVIRONMENT)

        return None

    def save_api_key(self, provider: Provider, user_id: UUID, api_key: str) -> UserApiKey:
        """
        Store a user key, replacing any existing one for the same provider

        Every save re-encrypts with a fresh IV, so the stored string changes
        even when the plaintext does not.
        """
        encrypted = encrypt_api_key(api_key, self.settings.encryption_secret)
        row = self._get_row(provider, user_id)

        if row is None:
            row = UserApiKey(
                user_id=user_id,
                provider=Provider(provider).value,
                encrypted_key=encrypted
            )
            self.db.add(row)
        else:
            row.encrypted_key = encrypted
            row.updated_at = utcnow()

        self.db.commit()
        self.db.refresh(row)
        logger.info(f"Saved {Provider(provider).value} key for user {user_id}")
        return row

    def delete_api_key(self, provider: Provider, user_id: UUID) -> bool:
        """Remove a user key; returns False if there was none"""
        row = self._get_row(provider, user_id)
        if row is None:
            return False

        self.db.delete(row)
        self.db.commit()
        logger.info(f"Deleted {Provider(provider).value} key for user {user_id}")
        return True

    def list_user_keys(self, user_id: UUID) -> List[UserApiKey]:
        """Stored key rows for a user (ciphertext only)"""
        return self.db.query(UserApiKey).filter(
            UserApiKey.user_id == user_id
        ).order_by(UserApiKey.provider).all()

    def list_user_providers(self, user_id: UUID) -> List[str]:
        return [row.provider for row in self.list_user_keys(user_id)]

    def is_provider_configured(self, provider: Provider) -> bool:
        """Whether the environment holds a shared key for the provider"""
        return self.get_environment_key(provider) is not None

    def available_providers(self) -> List[str]:
        """Providers usable by everyone through environment keys"""
        return [p.value for p in Provider if self.is_provider_configured(p)]

    def configured_providers(self, user_id: UUID) -> List[str]:
        """
        Providers usable by this user (own key or environment key)

        A stored key that fails to decrypt does not count.
        """
        configured = []
        for provider in Provider:
            try:
                if self.get_api_key(provider, user_id) is not None:
                    configured.append(provider.value)
            except DecryptionError:
                continue
        return configured

    def _get_row(self, provider: Provider, user_id: UUID) -> Optional[UserApiKey]:
        return self.db.query(UserApiKey).filter(
            UserApiKey.user_id == user_id,
            UserApiKey.provider == Provider(provider).value
        ).first()
