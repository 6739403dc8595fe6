"""
Security utilities for authentication
Access token generation and hashing
"""

import secrets
import hashlib
from backend.config import settings


def generate_access_token() -> tuple[str, str]:
    """
    Generate a new access token and its hash

    Returns:
        tuple: (token, token_hash)
            - token: Full token to show user (only once)
            - token_hash: SHA-256 hash to store in database

    Example:
        >>> token, token_hash = generate_access_token()
        >>> token
        'sk_studio_abc123def456...'
    """
    # Generate secure random token
    random_token = secrets.token_urlsafe(32)

    # Create token with prefix
    token = f"{settings.ACCESS_TOKEN_PREFIX}{random_token}"

    return token, hash_token(token)


def hash_token(token: str) -> str:
    """
    Hash an access token using SHA-256

    Args:
        token: The token to hash

    Returns:
        str: SHA-256 hash of the token
    """
    return hashlib.sha256(token.encode()).hexdigest()


def verify_token(token: str, token_hash: str) -> bool:
    """
    Verify a token against its stored hash

    Args:
        token: The token to verify
        token_hash: The stored hash to compare against

    Returns:
        bool: True if token matches hash
    """
    return secrets.compare_digest(hash_token(token), token_hash)
