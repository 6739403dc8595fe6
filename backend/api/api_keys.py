"""
Provider API-key endpoints
Users store their own provider keys; key material is never returned
"""

import logging
from fastapi import APIRouter, Depends, Query

from backend.core.exceptions import http_400_bad_request, http_404_not_found
from backend.api.deps import AuthenticatedRoute, get_current_user, get_key_resolver
from backend.models.user import User
from backend.schemas.api_key import (
    APIKeySave,
    APIKeyDetail,
    APIKeyListResponse,
    APIKeySaveResponse,
)
from backend.services.key_resolver import APIKeyResolver
from backend.services.providers import parse_provider

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/user/api-keys", tags=["api-keys"], route_class=AuthenticatedRoute)


@router.post("", response_model=APIKeySaveResponse)
async def save_api_key(
    body: APIKeySave,
    current_user: User = Depends(get_current_user),
    resolver: APIKeyResolver = Depends(get_key_resolver)
):
    """
    Store (or replace) the user's key for a provider

    Saving twice for the same provider keeps a single row.
    """
    resolver.save_api_key(body.provider, current_user.id, body.api_key)
    return APIKeySaveResponse(success=True, provider=body.provider.value)


@router.get("", response_model=APIKeyListResponse)
async def list_api_keys(
    current_user: User = Depends(get_current_user),
    resolver: APIKeyResolver = Depends(get_key_resolver)
):
    """List providers for which the user stored a key"""
    return APIKeyListResponse(
        providers=resolver.list_user_providers(current_user.id),
        details=[APIKeyDetail.model_validate(row) for row in resolver.list_user_keys(current_user.id)]
    )


@router.delete("")
async def delete_api_key(
    provider: str = Query(..., description="Provider id"),
    current_user: User = Depends(get_current_user),
    resolver: APIKeyResolver = Depends(get_key_resolver)
):
    """
    Remove the user's key for a provider

    Raises:
        HTTPException: 400 for an unknown provider, 404 if no key stored
    """
    parsed = parse_provider(provider)
    if parsed is None:
        raise http_400_bad_request(f"Unknown provider '{provider}'")

    if not resolver.delete_api_key(parsed, current_user.id):
        raise http_404_not_found("API key not found")

    return {"success": True}
