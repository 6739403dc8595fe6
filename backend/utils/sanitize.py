"""
Security utility for sanitizing sensitive data in logs and errors
Prevents provider keys and access tokens from being exposed in logs
"""

from typing import Dict, Any
import re

# Headers that contain sensitive information
SENSITIVE_HEADERS = {
    "authorization",
    "x-api-key",
    "cookie",
    "x-goog-api-key",
    "api-key",
    "apikey"
}

# Patterns to detect and redact sensitive data
SENSITIVE_PATTERNS = [
    (re.compile(r'(sk_studio_[a-zA-Z0-9_\-]{16,})'), 'sk_studio_***REDACTED***'),  # Studio access tokens
    (re.compile(r'(sk-or-[a-zA-Z0-9\-]{16,})'), 'sk-or-***REDACTED***'),  # OpenRouter keys
    (re.compile(r'(sk-ant-[a-zA-Z0-9_\-]{16,})'), 'sk-ant-***REDACTED***'),  # Anthropic keys
    (re.compile(r'(sk-[a-zA-Z0-9_\-]{20,})'), 'sk-***REDACTED***'),  # OpenAI keys
    (re.compile(r'(xai-[a-zA-Z0-9]{16,})'), 'xai-***REDACTED***'),  # X.AI keys
    (re.compile(r'(AIza[0-9A-Za-z_\-]{20,})'), 'AIza***REDACTED***'),  # Google keys
    (re.compile(r'(Bearer\s+[a-zA-Z0-9_\-\.]+)'), 'Bearer ***REDACTED***'),  # Bearer tokens
]


def sanitize_headers(headers: Dict[str, Any]) -> Dict[str, Any]:
    """
    Remove sensitive headers from dict

    Args:
        headers: Dictionary of headers

    Returns:
        Sanitized headers with sensitive values redacted
    """
    if not isinstance(headers, dict):
        return headers

    sanitized = {}
    for key, value in headers.items():
        if key.lower() in SENSITIVE_HEADERS:
            sanitized[key] = "***REDACTED***"
        else:
            sanitized[key] = value

    return sanitized


def sanitize_string(text: str) -> str:
    """
    Remove sensitive patterns from string

    Args:
        text: String that may contain sensitive data

    Returns:
        Sanitized string with patterns redacted
    """
    if not isinstance(text, str):
        return text

    sanitized = text
    for pattern, replacement in SENSITIVE_PATTERNS:
        sanitized = pattern.sub(replacement, sanitized)

    return sanitized


def mask_secret(secret: str) -> str:
    """
    Get safe version of a key for logging (prefix only)

    Args:
        secret: Full key or token

    Returns:
        Safe display string (e.g., "sk-proj-abc...***")
    """
    if not secret or not isinstance(secret, str):
        return "***INVALID***"

    if len(secret) < 12:
        return "***REDACTED***"

    return f"{secret[:8]}...***"
