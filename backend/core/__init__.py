"""
Core Utilities

Modules:
    - security: Access token generation and hashing
    - crypto: Encryption of stored provider API keys
    - exceptions: Custom exceptions and HTTP helpers
"""

from backend.core import security, crypto, exceptions

__all__ = ["security", "crypto", "exceptions"]
