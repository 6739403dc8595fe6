"""
Model Registry - static catalog of the models the studio can talk to

Pure data plus linear-scan accessors. Lookups never raise: an unknown id
gives None, an unknown filter gives an empty list.
"""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from backend.services.providers import Provider


class Capability(str, Enum):
    """Capability tags shown in the model picker"""
    TEXT = "text"
    CODE = "code"
    VISION = "vision"
    REASONING = "reasoning"
    FUNCTION_CALLING = "function-calling"
    JSON_MODE = "json-mode"
    STREAMING = "streaming"
    AGENTS = "agents"


class ModelCategory(str, Enum):
    """UI groupings"""
    FLAGSHIP = "flagship"
    FAST = "fast"
    SPECIALIZED = "specialized"


class Pricing(BaseModel):
    """USD per 1M tokens"""
    input: float
    output: float


class AIModel(BaseModel):
    """One catalog entry"""
    id: str = Field(..., description="Short id used by clients")
    name: str
    provider: Provider
    model_id: str = Field(..., serialization_alias="modelId", description="Vendor model string")
    description: str
    context_window: int = Field(..., serialization_alias="contextWindow")
    max_output: int = Field(..., serialization_alias="maxOutput")
    capabilities: List[Capability]
    best_for: List[str] = Field(default_factory=list, serialization_alias="bestFor")
    pricing: Optional[Pricing] = None

    class Config:
        frozen = True


T, C, V, R = Capability.TEXT, Capability.CODE, Capability.VISION, Capability.REASONING
FC, JSON, S, AG = Capability.FUNCTION_CALLING, Capability.JSON_MODE, Capability.STREAMING, Capability.AGENTS


FLAGSHIP_MODELS: List[AIModel] = [
    AIModel(
        id="gemini-2.5-pro",
        name="Gemini 2.5 Pro",
        provider=Provider.GOOGLE,
        model_id="gemini-2.5-pro-exp-03",
        description="Google's most capable model with a 2M token context window",
        context_window=2_000_000,
        max_output=16_384,
        capabilities=[T, C, V, R, FC, JSON, S, AG],
        best_for=["Large codebases", "Long documents", "Multimodal tasks"],
        pricing=Pricing(input=1.25, output=5),
    ),
    AIModel(
        id="claude-sonnet-4.5",
        name="Claude Sonnet 4.5",
        provider=Provider.ANTHROPIC,
        model_id="claude-sonnet-4.5-20250514",
        description="Anthropic's balanced model for coding and agentic work",
        context_window=200_000,
        max_output=16_384,
        capabilities=[T, C, V, R, FC, JSON, S, AG],
        best_for=["Complex coding", "Agents", "Careful reasoning"],
        pricing=Pricing(input=3, output=15),
    ),
    AIModel(
        id="claude-sonnet-4.5-thinking",
        name="Claude Sonnet 4.5 Thinking",
        provider=Provider.ANTHROPIC,
        model_id="claude-sonnet-4.5-thinking-32k-20250514",
        description="Claude Sonnet 4.5 with an extended thinking budget",
        context_window=32_000,
        max_output=16_384,
        capabilities=[T, C, R, S],
        best_for=["Hard problems", "Step-by-step analysis"],
        pricing=Pricing(input=4, output=20),
    ),
    AIModel(
        id="gpt-5",
        name="GPT-5",
        provider=Provider.OPENAI,
        model_id="gpt-5",
        description="OpenAI's flagship general model",
        context_window=200_000,
        max_output=32_768,
        capabilities=[T, C, V, R, FC, JSON, S, AG],
        best_for=["General tasks", "Coding", "Tool use"],
        pricing=Pricing(input=5, output=20),
    ),
    AIModel(
        id="chatgpt-5-high",
        name="ChatGPT-5 High",
        provider=Provider.OPENAI,
        model_id="chatgpt-5-high",
        description="GPT-5 tuned for high reasoning effort",
        context_window=200_000,
        max_output=32_768,
        capabilities=[T, C, R, FC, S],
        best_for=["Deep reasoning", "Planning"],
        pricing=Pricing(input=4, output=16),
    ),
    AIModel(
        id="chatgpt-5-chat",
        name="ChatGPT-5 Chat",
        provider=Provider.OPENAI,
        model_id="chatgpt-5-chat",
        description="GPT-5 tuned for conversation",
        context_window=128_000,
        max_output=16_384,
        capabilities=[T, C, S],
        best_for=["Conversation", "Drafting"],
        pricing=Pricing(input=3, output=12),
    ),
    AIModel(
        id="grok-2-1212",
        name="Grok 2",
        provider=Provider.XAI,
        model_id="x-ai/grok-2-1212",
        description="X.AI's Grok 2 model",
        context_window=131_072,
        max_output=16_384,
        capabilities=[T, C, R, FC, S],
        best_for=["Current events", "Conversation"],
        pricing=Pricing(input=2, output=10),
    ),
    AIModel(
        id="grok-2-vision-1212",
        name="Grok 2 Vision",
        provider=Provider.XAI,
        model_id="x-ai/grok-2-vision-1212",
        description="Grok 2 with image understanding",
        context_window=32_768,
        max_output=16_384,
        capabilities=[T, V, S],
        best_for=["Image analysis"],
        pricing=Pricing(input=2, output=10),
    ),
    AIModel(
        id="gpt-4o",
        name="GPT-4o",
        provider=Provider.OPENAI,
        model_id="gpt-4o",
        description="OpenAI's multimodal workhorse",
        context_window=128_000,
        max_output=16_384,
        capabilities=[T, C, V, FC, JSON, S],
        best_for=["General tasks", "Vision"],
        pricing=Pricing(input=2.5, output=10),
    ),
    AIModel(
        id="o1",
        name="o1",
        provider=Provider.OPENAI,
        model_id="o1",
        description="OpenAI reasoning model",
        context_window=200_000,
        max_output=100_000,
        capabilities=[T, C, R],
        best_for=["Math", "Science", "Hard coding problems"],
        pricing=Pricing(input=15, output=60),
    ),
    AIModel(
        id="o1-mini",
        name="o1-mini",
        provider=Provider.OPENAI,
        model_id="o1-mini",
        description="Smaller, faster OpenAI reasoning model",
        context_window=128_000,
        max_output=65_536,
        capabilities=[T, C, R],
        best_for=["Coding", "STEM reasoning"],
        pricing=Pricing(input=3, output=12),
    ),
    AIModel(
        id="claude-3.5-sonnet",
        name="Claude 3.5 Sonnet",
        provider=Provider.ANTHROPIC,
        model_id="claude-3-5-sonnet-20241022",
        description="Previous-generation Claude Sonnet",
        context_window=200_000,
        max_output=8_192,
        capabilities=[T, C, V, FC, S],
        best_for=["Coding", "Writing"],
        pricing=Pricing(input=3, output=15),
    ),
    AIModel(
        id="claude-3-opus",
        name="Claude 3 Opus",
        provider=Provider.ANTHROPIC,
        model_id="claude-3-opus-20240229",
        description="Claude 3 family's largest model",
        context_window=200_000,
        max_output=4_096,
        capabilities=[T, C, V, R, S],
        best_for=["Research", "Long-form analysis"],
        pricing=Pricing(input=15, output=75),
    ),
    AIModel(
        id="gemini-2.0-flash",
        name="Gemini 2.0 Flash",
        provider=Provider.GOOGLE,
        model_id="gemini-2.0-flash-exp",
        description="Experimental fast Gemini model",
        context_window=1_000_000,
        max_output=8_192,
        capabilities=[T, C, V, FC, S],
        best_for=["Fast multimodal tasks"],
        pricing=Pricing(input=0, output=0),
    ),
    AIModel(
        id="gemini-1.5-pro",
        name="Gemini 1.5 Pro",
        provider=Provider.GOOGLE,
        model_id="gemini-1.5-pro-002",
        description="Long-context Gemini model",
        context_window=2_000_000,
        max_output=8_192,
        capabilities=[T, C, V, FC, JSON, S],
        best_for=["Long documents", "Video and audio"],
        pricing=Pricing(input=1.25, output=5),
    ),
]

FAST_MODELS: List[AIModel] = [
    AIModel(
        id="gpt-4o-mini",
        name="GPT-4o mini",
        provider=Provider.OPENAI,
        model_id="gpt-4o-mini",
        description="Cheap, fast OpenAI model",
        context_window=128_000,
        max_output=16_384,
        capabilities=[T, C, V, FC, JSON, S],
        best_for=["High volume", "Simple tasks"],
        pricing=Pricing(input=0.15, output=0.6),
    ),
    AIModel(
        id="claude-3-haiku",
        name="Claude 3 Haiku",
        provider=Provider.ANTHROPIC,
        model_id="claude-3-haiku-20240307",
        description="Fastest Claude 3 model",
        context_window=200_000,
        max_output=4_096,
        capabilities=[T, C, V, S],
        best_for=["Quick answers", "Classification"],
        pricing=Pricing(input=0.25, output=1.25),
    ),
    AIModel(
        id="gemini-1.5-flash",
        name="Gemini 1.5 Flash",
        provider=Provider.GOOGLE,
        model_id="gemini-1.5-flash-002",
        description="Fast Gemini model with a 1M token context",
        context_window=1_000_000,
        max_output=8_192,
        capabilities=[T, C, V, FC, JSON, S],
        best_for=["Summaries", "High volume"],
        pricing=Pricing(input=0.075, output=0.3),
    ),
]

SPECIALIZED_MODELS: List[AIModel] = [
    AIModel(
        id="deepseek-v3",
        name="DeepSeek V3",
        provider=Provider.OPENROUTER,
        model_id="deepseek/deepseek-chat",
        description="Open-weight model strong at code",
        context_window=64_000,
        max_output=8_192,
        capabilities=[T, C, R, S],
        best_for=["Coding", "Math"],
        pricing=Pricing(input=0.27, output=1.10),
    ),
    AIModel(
        id="llama-3.3-70b",
        name="Llama 3.3 70B",
        provider=Provider.OPENROUTER,
        model_id="meta-llama/llama-3.3-70b-instruct",
        description="Meta's open-weight instruction model",
        context_window=128_000,
        max_output=8_192,
        capabilities=[T, C, S],
        best_for=["General tasks", "Multilingual"],
        pricing=Pricing(input=0.35, output=0.4),
    ),
    AIModel(
        id="qwen-2.5-coder",
        name="Qwen 2.5 Coder 32B",
        provider=Provider.OPENROUTER,
        model_id="qwen/qwen-2.5-coder-32b-instruct",
        description="Open-weight model specialised for code",
        context_window=32_768,
        max_output=8_192,
        capabilities=[T, C, S],
        best_for=["Code generation", "Code review"],
        pricing=Pricing(input=0.14, output=0.14),
    ),
]

ALL_MODELS: List[AIModel] = FLAGSHIP_MODELS + FAST_MODELS + SPECIALIZED_MODELS

DEFAULT_MODEL = "gemini-2.5-pro"

MODEL_CATEGORIES: Dict[ModelCategory, Dict] = {
    ModelCategory.FLAGSHIP: {
        "label": "Flagship Models",
        "description": "Most capable models for complex tasks",
        "models": FLAGSHIP_MODELS,
    },
    ModelCategory.FAST: {
        "label": "Fast & Efficient",
        "description": "Optimized for speed and cost",
        "models": FAST_MODELS,
    },
    ModelCategory.SPECIALIZED: {
        "label": "Specialized",
        "description": "Models optimized for specific tasks",
        "models": SPECIALIZED_MODELS,
    },
}


def get_model_by_id(model_id: str) -> Optional[AIModel]:
    """Find a model by its short id, None if unknown"""
    for model in ALL_MODELS:
        if model.id == model_id:
            return model
    return None


def get_models_by_provider(provider: str) -> List[AIModel]:
    return [m for m in ALL_MODELS if m.provider.value == provider]


def get_models_by_capability(capability: str) -> List[AIModel]:
    return [m for m in ALL_MODELS if any(c.value == capability for c in m.capabilities)]


def get_models_by_category(category: str) -> List[AIModel]:
    for key, group in MODEL_CATEGORIES.items():
        if key.value == category:
            return list(group["models"])
    return []
