"""
FastAPI dependencies
Authentication, database session, per-request services
"""

from fastapi import Depends, Header, Request, Response
from fastapi.routing import APIRoute
from sqlalchemy.orm import Session
from typing import Any, AsyncGenerator, Callable, Coroutine, Optional

from backend.database import get_db, get_session_factory, utcnow
from backend.models.user import User
from backend.models.access_token import AccessToken
from backend.core.security import hash_token
from backend.core.exceptions import http_401_unauthorized
from backend.services.chat_relay import ChatRelay
from backend.services.github_service import GitHubService
from backend.services.key_resolver import APIKeyResolver
from backend.services.provider_factory import ProviderClientFactory


def bearer_token(authorization: Optional[str]) -> str:
    """
    Extract the token from an Authorization header

    Raises:
        HTTPException: 401 if the header is missing or malformed
    """
    if not authorization:
        raise http_401_unauthorized("Not authenticated")

    # Validate header format
    if not authorization.startswith("Bearer "):
        raise http_401_unauthorized("Invalid authorization header format")

    token = authorization[7:].strip()  # Remove "Bearer " prefix

    if not token:
        raise http_401_unauthorized("Token missing")

    return token


class AuthenticatedRoute(APIRoute):
    """
    Route that rejects requests without a bearer token up front

    FastAPI decodes the JSON body before it resolves dependencies, so a
    request with no credentials and a malformed body would otherwise get a
    400. The header shape is checked here; the token itself is still
    verified by get_current_user.
    """

    def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
        handler = super().get_route_handler()

        async def authenticated_handler(request: Request) -> Response:
            bearer_token(request.headers.get("Authorization"))
            return await handler(request)

        return authenticated_handler


async def get_current_user(
    authorization: Optional[str] = Header(None, description="Bearer token"),
    db: Session = Depends(get_db)
) -> User:
    """
    Get current authenticated user from a bearer token

    Args:
        authorization: Authorization header (format: "Bearer sk_studio_...")
        db: Database session

    Returns:
        User: Authenticated user

    Raises:
        HTTPException: 401 if authentication fails
    """
    token = bearer_token(authorization)

    token_obj = db.query(AccessToken).filter(
        AccessToken.token_hash == hash_token(token),
        AccessToken.is_active.is_(True)
    ).first()

    if not token_obj:
        raise http_401_unauthorized("Invalid token")

    # Update last used timestamp
    token_obj.last_used_at = utcnow()
    db.commit()

    user = db.query(User).filter(User.id == token_obj.user_id).first()

    if not user:
        raise http_401_unauthorized("User not found")

    if not user.is_active:
        raise http_401_unauthorized("User account is inactive")

    return user


def get_key_resolver(db: Session = Depends(get_db)) -> APIKeyResolver:
    return APIKeyResolver(db)


def get_provider_factory(
    resolver: APIKeyResolver = Depends(get_key_resolver)
) -> ProviderClientFactory:
    """Provider factory bound to this request's resolver (never shared)"""
    return ProviderClientFactory(resolver)


def get_chat_relay(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    factory: ProviderClientFactory = Depends(get_provider_factory),
    session_factory=Depends(get_session_factory)
) -> ChatRelay:
    return ChatRelay(db, current_user, factory=factory, session_factory=session_factory)


async def get_github_service() -> AsyncGenerator[GitHubService, None]:
    """GitHub client for one request, closed afterwards"""
    service = GitHubService()
    try:
        yield service
    finally:
        await service.close()
