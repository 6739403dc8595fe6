"""
Unit tests for APIKeyResolver

Tests:
- User key preferred over the environment key
- Environment fallback and "no key"
- Upsert idempotence
- Undecryptable stored keys
"""

import pytest

from backend.core.crypto import decrypt_api_key
from backend.core.exceptions import DecryptionError
from backend.models.user_api_key import UserApiKey
from backend.services.key_resolver import APIKeyResolver, SOURCE_ENVIRONMENT, SOURCE_USER
from backend.services.providers import Provider


@pytest.mark.unit
class TestAPIKeyResolver:

    def test_user_key_preferred_over_environment(self, make_settings, db_session, test_user):
        resolver = APIKeyResolver(db_session, make_settings(OPENAI_API_KEY="sk-env-key"))
        resolver.save_api_key(Provider.OPENAI, test_user.id, "sk-user-key")

        credential = resolver.get_api_key(Provider.OPENAI, test_user.id)

        assert credential.value == "sk-user-key"
        assert credential.source == SOURCE_USER
        assert credential.is_user_key

    def test_environment_fallback(self, make_settings, db_session, test_user):
        resolver = APIKeyResolver(db_session, make_settings(OPENAI_API_KEY="sk-env-key"))

        credential = resolver.get_api_key(Provider.OPENAI, test_user.id)

        assert credential.value == "sk-env-key"
        assert credential.source == SOURCE_ENVIRONMENT

    def test_environment_only_without_user(self, make_settings, db_session):
        resolver = APIKeyResolver(db_session, make_settings(XAI_API_KEY="xai-env"))

        assert resolver.get_api_key(Provider.XAI).value == "xai-env"

    def test_no_key(self, make_settings, db_session, test_user):
        resolver = APIKeyResolver(db_session, make_settings())

        assert resolver.get_api_key(Provider.ANTHROPIC, test_user.id) is None

    def test_other_users_key_not_used(self, make_settings, db_session, test_user):
        from backend.models.user import User

        other = User(email="someone@example.com")
        db_session.add(other)
        db_session.commit()

        resolver = APIKeyResolver(db_session, make_settings())
        resolver.save_api_key(Provider.OPENAI, other.id, "sk-other-user")

        assert resolver.get_api_key(Provider.OPENAI, test_user.id) is None

    def test_save_twice_keeps_one_row(self, make_settings, db_session, test_user):
        settings = make_settings()
        resolver = APIKeyResolver(db_session, settings)

        first = resolver.save_api_key(Provider.OPENROUTER, test_user.id, "sk-or-same")
        first_cipher = first.encrypted_key
        resolver.save_api_key(Provider.OPENROUTER, test_user.id, "sk-or-same")

        rows = db_session.query(UserApiKey).filter(UserApiKey.user_id == test_user.id).all()
        assert len(rows) == 1
        assert rows[0].encrypted_key != first_cipher
        assert decrypt_api_key(rows[0].encrypted_key, settings.encryption_secret) == "sk-or-same"

    def test_save_replaces_value(self, make_settings, db_session, test_user):
        resolver = APIKeyResolver(db_session, make_settings())
        resolver.save_api_key(Provider.OPENAI, test_user.id, "sk-first")
        resolver.save_api_key(Provider.OPENAI, test_user.id, "sk-second")

        assert resolver.get_user_key(Provider.OPENAI, test_user.id) == "sk-second"

    def test_key_stored_encrypted(self, make_settings, db_session, test_user):
        resolver = APIKeyResolver(db_session, make_settings())
        row = resolver.save_api_key(Provider.OPENAI, test_user.id, "sk-plaintext-value")

        assert "sk-plaintext-value" not in row.encrypted_key
        assert ":" in row.encrypted_key

    def test_unreadable_stored_key_raises_decryption_error(self, make_settings, db_session, test_user):
        APIKeyResolver(db_session, make_settings()).save_api_key(Provider.OPENAI, test_user.id, "sk-stored")
        db_session.query(UserApiKey).update({"encrypted_key": "not-a-valid-value"})
        db_session.commit()

        resolver = APIKeyResolver(db_session, make_settings())

        with pytest.raises(DecryptionError):
            resolver.get_api_key(Provider.OPENAI, test_user.id)

    def test_delete(self, make_settings, db_session, test_user):
        resolver = APIKeyResolver(db_session, make_settings())
        resolver.save_api_key(Provider.OPENAI, test_user.id, "sk-delete-me")

        assert resolver.delete_api_key(Provider.OPENAI, test_user.id) is True
        assert resolver.delete_api_key(Provider.OPENAI, test_user.id) is False
        assert resolver.list_user_providers(test_user.id) == []

    def test_configured_providers(self, make_settings, db_session, test_user):
        resolver = APIKeyResolver(db_session, make_settings(GOOGLE_GENERATIVE_AI_API_KEY="AIza-env"))
        resolver.save_api_key(Provider.XAI, test_user.id, "xai-user")

        assert resolver.available_providers() == ["google"]
        assert resolver.configured_providers(test_user.id) == ["google", "x-ai"]
        assert resolver.is_provider_configured(Provider.GOOGLE)
        assert not resolver.is_provider_configured(Provider.XAI)

    def test_configured_providers_skips_undecryptable_keys(self, make_settings, db_session, test_user):
        resolver = APIKeyResolver(db_session, make_settings())
        resolver.save_api_key(Provider.OPENAI, test_user.id, "sk-user")
        db_session.query(UserApiKey).update({"encrypted_key": "garbage"})
        db_session.commit()

        assert resolver.configured_providers(test_user.id) == []
