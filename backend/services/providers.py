"""
Provider catalog - the closed set of LLM vendors the studio can call

Every provider-specific detail (display data, which setting holds the
shared key, how litellm routes it, whether a per-request credential can be
injected) lives in PROVIDERS. The factory dispatches on this table once per
request instead of branching on provider names.
"""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class Provider(str, Enum):
    """Hosted LLM vendors"""
    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GOOGLE = "google"
    XAI = "x-ai"
    OPENROUTER = "openrouter"


class ProviderInfo(BaseModel):
    """Static description of one provider"""
    id: Provider
    name: str = Field(..., description="Display name")
    description: str
    requires_key: str = Field(..., description="Environment setting holding the shared key")
    website: str = Field(..., description="Where a user obtains a key")
    route_prefix: str = Field(..., description="litellm provider prefix used to route calls")
    api_base: Optional[str] = Field(None, description="Base URL for OpenAI-compatible gateways")
    supports_scoped_credentials: bool = Field(
        ...,
        description="Whether a per-request API key can be injected into the client"
    )
    gateway_headers: bool = Field(False, description="Send app attribution headers")

    class Config:
        frozen = True


PROVIDERS: Dict[Provider, ProviderInfo] = {
    Provider.OPENAI: ProviderInfo(
        id=Provider.OPENAI,
        name="OpenAI",
        description="GPT-4o, o1 and GPT-5 models",
        requires_key="OPENAI_API_KEY",
        website="https://platform.openai.com",
        route_prefix="openai",
        supports_scoped_credentials=True,
    ),
    Provider.ANTHROPIC: ProviderInfo(
        id=Provider.ANTHROPIC,
        name="Anthropic",
        description="Claude models",
        requires_key="ANTHROPIC_API_KEY",
        website="https://console.anthropic.com",
        route_prefix="anthropic",
        supports_scoped_credentials=False,
    ),
    Provider.GOOGLE: ProviderInfo(
        id=Provider.GOOGLE,
        name="Google AI",
        description="Gemini models",
        requires_key="GOOGLE_GENERATIVE_AI_API_KEY",
        website="https://aistudio.google.com",
        route_prefix="gemini",
        supports_scoped_credentials=False,
    ),
    Provider.XAI: ProviderInfo(
        id=Provider.XAI,
        name="X.AI",
        description="Grok models",
        requires_key="XAI_API_KEY",
        website="https://x.ai",
        # OpenAI-compatible endpoint
        route_prefix="openai",
        api_base="https://api.x.ai/v1",
        supports_scoped_credentials=True,
    ),
    Provider.OPENROUTER: ProviderInfo(
        id=Provider.OPENROUTER,
        name="OpenRouter",
        description="Gateway to open-weight and third-party models",
        requires_key="OPENROUTER_API_KEY",
        website="https://openrouter.ai",
        route_prefix="openai",
        api_base="https://openrouter.ai/api/v1",
        supports_scoped_credentials=True,
        gateway_headers=True,
    ),
}


def get_provider_info(provider: Provider) -> ProviderInfo:
    """Look up the static info for a provider"""
    return PROVIDERS[Provider(provider)]


def parse_provider(value: str) -> Optional[Provider]:
    """Return the Provider for a wire value, or None if it is not one"""
    try:
        return Provider(value)
    except ValueError:
        return None


def provider_ids() -> List[str]:
    """All provider ids in declaration order"""
    return [p.value for p in Provider]
