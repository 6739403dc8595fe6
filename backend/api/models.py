"""
Model catalog API endpoints
"""

import logging
from fastapi import APIRouter, Depends, Query
from typing import Any, Dict, List, Optional

from backend.core.exceptions import http_400_bad_request
from backend.api.deps import AuthenticatedRoute, get_current_user, get_key_resolver
from backend.models.user import User
from backend.services.key_resolver import APIKeyResolver
from backend.services.model_registry import (
    ALL_MODELS,
    DEFAULT_MODEL,
    MODEL_CATEGORIES,
    AIModel,
    Capability,
    ModelCategory,
    get_models_by_capability,
    get_models_by_category,
    get_models_by_provider,
)
from backend.services.providers import PROVIDERS, Provider

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/models", tags=["models"], route_class=AuthenticatedRoute)


def _dump(models: List[AIModel]) -> List[Dict[str, Any]]:
    return [m.model_dump(mode="json", by_alias=True) for m in models]


def _providers() -> Dict[str, Dict[str, str]]:
    return {
        provider.value: {
            "name": info.name,
            "description": info.description,
            "requiresKey": info.requires_key,
            "website": info.website,
        }
        for provider, info in PROVIDERS.items()
    }


def _categories() -> Dict[str, Dict[str, Any]]:
    return {
        key.value: {
            "label": group["label"],
            "description": group["description"],
            "models": _dump(group["models"]),
        }
        for key, group in MODEL_CATEGORIES.items()
    }


@router.get("")
async def list_models(
    provider: Optional[str] = Query(None, description="Filter by provider id"),
    capability: Optional[str] = Query(None, description="Filter by capability tag"),
    category: Optional[str] = Query(None, description="flagship, fast or specialized"),
    current_user: User = Depends(get_current_user),
    resolver: APIKeyResolver = Depends(get_key_resolver)
):
    """
    List the model catalog, optionally filtered

    Only the first filter given is applied, checked in the order
    provider, capability, category.

    Returns:
        Filtered slice with a count, or the full catalog with categories,
        provider info, configured providers and statistics

    Raises:
        HTTPException: 400 for an unknown filter value
    """
    if provider:
        if provider not in {p.value for p in Provider}:
            raise http_400_bad_request(f"Unknown provider '{provider}'")
        models = get_models_by_provider(provider)
        return {"provider": provider, "models": _dump(models), "count": len(models)}

    if capability:
        if capability not in {c.value for c in Capability}:
            raise http_400_bad_request(f"Unknown capability '{capability}'")
        models = get_models_by_capability(capability)
        return {"capability": capability, "models": _dump(models), "count": len(models)}

    if category:
        if category not in {c.value for c in ModelCategory}:
            raise http_400_bad_request(f"Unknown category '{category}'")
        group = MODEL_CATEGORIES[ModelCategory(category)]
        models = get_models_by_category(category)
        return {
            "category": category,
            "label": group["label"],
            "description": group["description"],
            "models": _dump(models),
            "count": len(models)
        }

    return {
        "models": _dump(ALL_MODELS),
        "categories": _categories(),
        "providers": _providers(),
        "availableProviders": resolver.available_providers(),
        "configuredProviders": resolver.configured_providers(current_user.id),
        "defaultModel": DEFAULT_MODEL,
        "statistics": {
            "totalModels": len(ALL_MODELS),
            "flagshipModels": len(MODEL_CATEGORIES[ModelCategory.FLAGSHIP]["models"]),
            "fastModels": len(MODEL_CATEGORIES[ModelCategory.FAST]["models"]),
            "specializedModels": len(MODEL_CATEGORIES[ModelCategory.SPECIALIZED]["models"]),
        }
    }
