"""
Provider Client Factory - builds a per-request language model handle

The model id is resolved once against the registry, the provider is
dispatched once through the PROVIDERS table, and a fresh ChatLiteLLM is
constructed with the resolved credential for every request. No client is
cached, so one user's key can never be reused for another user's call.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional
from uuid import UUID

import litellm
from langchain_litellm import ChatLiteLLM

from backend.config import Settings, settings as default_settings
from backend.core.exceptions import (
    CredentialMissingError,
    DecryptionError,
    ModelNotFoundError,
    ScopedCredentialUnsupportedError,
)
from backend.services.key_resolver import APIKeyResolver, ResolvedCredential
from backend.services.model_registry import AIModel, get_model_by_id
from backend.services.providers import ProviderInfo, get_provider_info
from backend.utils.sanitize import mask_secret

# Configure litellm to automatically drop unsupported parameters
litellm.drop_params = True

logger = logging.getLogger(__name__)


@dataclass
class ProviderHandle:
    """Everything the relay needs to stream from one model"""
    model: AIModel
    provider: ProviderInfo
    credential_source: str
    llm: ChatLiteLLM


class ProviderClientFactory:
    """Create ChatLiteLLM handles bound to a model and a resolved credential"""

    def __init__(self, resolver: APIKeyResolver, settings: Optional[Settings] = None):
        self.resolver = resolver
        self.settings = settings or default_settings

    def resolve_model(self, model_id: str) -> AIModel:
        model = get_model_by_id(model_id)
        if model is None:
            raise ModelNotFoundError(model_id)
        return model

    def resolve_credential(self, info: ProviderInfo, user_id: Optional[UUID]) -> ResolvedCredential:
        """
        Resolve the key for a provider or fail with CredentialMissingError

        An unreadable stored key is reported as missing so the user is asked
        to enter it again.
        """
        try:
            credential = self.resolver.get_api_key(info.id, user_id)
        except DecryptionError:
            logger.warning(f"Treating undecryptable {info.id.value} key for user {user_id} as missing")
            credential = None

        if credential is None:
            raise CredentialMissingError(
                provider=info.id.value,
                provider_name=info.name,
                required_key=info.requires_key,
                website=info.website,
            )

        if credential.is_user_key and not info.supports_scoped_credentials:
            env_key = self.resolver.get_environment_key(info.id)
            if credential.value != env_key:
                raise ScopedCredentialUnsupportedError(
                    provider=info.id.value,
                    provider_name=info.name,
                    required_key=info.requires_key,
                    website=info.website,
                    message=(
                        f"Per-user {info.name} API keys are not supported yet; "
                        f"configure {info.requires_key} on the server or choose another model"
                    ),
                )

        return credential

    def build_llm_kwargs(
        self,
        model: AIModel,
        info: ProviderInfo,
        credential: ResolvedCredential,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> Dict[str, Any]:
        """Keyword arguments for ChatLiteLLM for one request"""
        final_temp = temperature if temperature is not None else self.settings.DEFAULT_TEMPERATURE
        final_max_tokens = (
            max_tokens
            if max_tokens is not None
            else min(self.settings.DEFAULT_MAX_TOKENS, model.max_output)
        )

        litellm_kwargs: Dict[str, Any] = {
            "model": f"{info.route_prefix}/{model.model_id}",
            "temperature": final_temp,
            "max_tokens": final_max_tokens,
            "timeout": self.settings.CHAT_REQUEST_TIMEOUT,
            "streaming": True,
            "api_key": credential.value,
        }

        if info.api_base:
            litellm_kwargs["api_base"] = info.api_base

        if info.gateway_headers:
            litellm_kwargs["model_kwargs"] = {
                "extra_headers": {
                    "HTTP-Referer": self.settings.PUBLIC_APP_URL,
                    "X-Title": self.settings.APP_TITLE,
                }
            }

        return litellm_kwargs

    def create(
        self,
        model_id: str,
        user_id: Optional[UUID] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> ProviderHandle:
        """
        Build a language model handle for a request

        Args:
            model_id: Registry id of the model
            user_id: Requesting user (enables user-specific keys)
            temperature: Sampling temperature override
            max_tokens: Output cap override

        Returns:
            ProviderHandle with a freshly constructed ChatLiteLLM

        Raises:
            ModelNotFoundError: Unknown model id
            CredentialMissingError: No key for the model's provider
            ScopedCredentialUnsupportedError: User key for a provider that
                only takes the shared key
        """
        model = self.resolve_model(model_id)
        info = get_provider_info(model.provider)
        credential = self.resolve_credential(info, user_id)

        litellm_kwargs = self.build_llm_kwargs(model, info, credential, temperature, max_tokens)
        logger.info(
            f"Creating LLM for request: model={litellm_kwargs['model']}, "
            f"key={mask_secret(credential.value)} ({credential.source})"
        )

        return ProviderHandle(
            model=model,
            provider=info,
            credential_source=credential.source,
            llm=ChatLiteLLM(**litellm_kwargs),
        )
