"""Type definitions for the model catalog"""

from pydantic import BaseModel, Field
from typing import Dict, List, Optional


class Pricing(BaseModel):
    input: float
    output: float


class ModelInfo(BaseModel):
    """One catalog entry"""

    id: str
    name: str
    provider: str
    model_id: str = Field(..., alias="modelId")
    description: str = ""
    context_window: int = Field(..., alias="contextWindow")
    max_output: int = Field(..., alias="maxOutput")
    capabilities: List[str] = Field(default_factory=list)
    best_for: List[str] = Field(default_factory=list, alias="bestFor")
    pricing: Optional[Pricing] = None

    class Config:
        populate_by_name = True


class ModelCatalog(BaseModel):
    """Full catalog with provider availability"""

    models: List[ModelInfo] = Field(default_factory=list)
    available_providers: List[str] = Field(default_factory=list, alias="availableProviders")
    configured_providers: List[str] = Field(default_factory=list, alias="configuredProviders")
    default_model: Optional[str] = Field(None, alias="defaultModel")
    statistics: Dict[str, int] = Field(default_factory=dict)

    class Config:
        populate_by_name = True


class ModelList(BaseModel):
    """Filtered slice of the catalog"""

    models: List[ModelInfo] = Field(default_factory=list)
    count: int = 0
