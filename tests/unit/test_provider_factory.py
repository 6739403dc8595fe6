"""
Unit tests for ProviderClientFactory

Tests:
- Unknown model and missing credential
- Per-request client construction with the resolved key
- User keys for providers that only take the shared key
- Gateway routing and attribution headers
"""

import pytest
from unittest.mock import patch

from backend.core.exceptions import (
    CredentialMissingError,
    ModelNotFoundError,
    ScopedCredentialUnsupportedError,
)
from backend.models.user_api_key import UserApiKey
from backend.services.key_resolver import APIKeyResolver
from backend.services.provider_factory import ProviderClientFactory
from backend.services.providers import Provider


@pytest.fixture
def factory_for(db_session, make_settings):
    def _build(**settings_overrides):
        settings = make_settings(**settings_overrides)
        return ProviderClientFactory(APIKeyResolver(db_session, settings), settings)

    return _build


@pytest.mark.unit
class TestProviderClientFactory:

    def test_unknown_model(self, factory_for, test_user, fake_llm):
        with pytest.raises(ModelNotFoundError) as exc_info:
            factory_for(OPENAI_API_KEY="sk-env").create("gpt-99", user_id=test_user.id)

        assert exc_info.value.model_id == "gpt-99"
        assert fake_llm.instances == []

    def test_missing_credential_carries_provider_details(self, factory_for, test_user, fake_llm):
        with pytest.raises(CredentialMissingError) as exc_info:
            factory_for().create("claude-3.5-sonnet", user_id=test_user.id)

        error = exc_info.value
        assert error.provider == "anthropic"
        assert error.provider_name == "Anthropic"
        assert error.required_key == "ANTHROPIC_API_KEY"
        assert error.website == "https://console.anthropic.com"
        assert error.details["providerName"] == "Anthropic"
        assert fake_llm.instances == []

    def test_environment_key_client(self, factory_for, test_user, fake_llm):
        handle = factory_for(OPENAI_API_KEY="sk-env-openai").create("gpt-4o", user_id=test_user.id)

        assert handle.credential_source == "environment"
        assert fake_llm.last.kwargs["model"] == "openai/gpt-4o"
        assert fake_llm.last.kwargs["api_key"] == "sk-env-openai"
        assert fake_llm.last.kwargs["streaming"] is True
        assert "api_base" not in fake_llm.last.kwargs

    def test_fresh_client_per_request_with_user_key(self, factory_for, db_session, test_user, fake_llm):
        factory = factory_for(OPENAI_API_KEY="sk-env-openai")
        factory.resolver.save_api_key(Provider.OPENAI, test_user.id, "sk-user-openai")

        first = factory.create("gpt-4o", user_id=test_user.id)
        second = factory.create("gpt-4o")

        assert first.llm is not second.llm
        assert first.llm.kwargs["api_key"] == "sk-user-openai"
        assert second.llm.kwargs["api_key"] == "sk-env-openai"

    def test_user_key_for_unscoped_provider_fails(self, factory_for, test_user, fake_llm):
        factory = factory_for(ANTHROPIC_API_KEY="sk-ant-env")
        factory.resolver.save_api_key(Provider.ANTHROPIC, test_user.id, "sk-ant-user")

        with pytest.raises(ScopedCredentialUnsupportedError) as exc_info:
            factory.create("claude-3.5-sonnet", user_id=test_user.id)

        assert exc_info.value.required_key == "ANTHROPIC_API_KEY"
        assert fake_llm.instances == []

    def test_user_key_equal_to_shared_key_is_allowed(self, factory_for, test_user, fake_llm):
        factory = factory_for(GOOGLE_GENERATIVE_AI_API_KEY="AIza-shared")
        factory.resolver.save_api_key(Provider.GOOGLE, test_user.id, "AIza-shared")

        handle = factory.create("gemini-2.5-pro", user_id=test_user.id)

        assert handle.llm.kwargs["model"] == "gemini/gemini-2.5-pro-exp-03"

    def test_undecryptable_key_reported_as_missing(self, factory_for, db_session, test_user, fake_llm):
        factory = factory_for()
        factory.resolver.save_api_key(Provider.OPENAI, test_user.id, "sk-user-openai")
        db_session.query(UserApiKey).update({"encrypted_key": "garbage"})
        db_session.commit()

        with pytest.raises(CredentialMissingError):
            factory.create("gpt-4o", user_id=test_user.id)

    def test_xai_routes_through_openai_compatible_base(self, factory_for, fake_llm):
        factory_for(XAI_API_KEY="xai-env").create("grok-2-1212")

        kwargs = fake_llm.last.kwargs
        assert kwargs["model"] == "openai/x-ai/grok-2-1212"
        assert kwargs["api_base"] == "https://api.x.ai/v1"
        assert "model_kwargs" not in kwargs

    def test_gateway_attribution_headers(self, factory_for, fake_llm):
        factory_for(
            OPENROUTER_API_KEY="sk-or-env",
            PUBLIC_APP_URL="https://studio.example.com",
            APP_TITLE="Studio",
        ).create("deepseek-v3")

        kwargs = fake_llm.last.kwargs
        assert kwargs["api_base"] == "https://openrouter.ai/api/v1"
        assert kwargs["model_kwargs"]["extra_headers"] == {
            "HTTP-Referer": "https://studio.example.com",
            "X-Title": "Studio",
        }

    def test_generation_options(self, factory_for, fake_llm):
        factory = factory_for(OPENAI_API_KEY="sk-env", DEFAULT_MAX_TOKENS=100_000)

        factory.create("gpt-4o")
        assert fake_llm.last.kwargs["temperature"] == 0.7
        assert fake_llm.last.kwargs["max_tokens"] == 16384  # capped at the model's max output

        factory.create("gpt-4o", temperature=0.1, max_tokens=256)
        assert fake_llm.last.kwargs["temperature"] == 0.1
        assert fake_llm.last.kwargs["max_tokens"] == 256

    def test_key_never_logged(self, factory_for, fake_llm):
        with patch("backend.services.provider_factory.logger") as mock_logger:
            factory_for(OPENAI_API_KEY="sk-env-very-secret-value").create("gpt-4o")

        logged = " ".join(str(call) for call in mock_logger.info.call_args_list)
        assert "sk-env-very-secret-value" not in logged
