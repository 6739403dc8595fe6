"""
Business Logic Services

Includes:
- providers: Provider sum type and static provider info
- model_registry: Static model catalog
- key_resolver: User-over-environment API key resolution
- provider_factory: Per-request ChatLiteLLM construction
- chat_relay: Streaming chat turn with persistence
- github_service: Read-only GitHub REST access
"""

# Lazy imports to avoid circular dependencies
# Import services directly from their modules instead

__all__ = [
    "providers",
    "model_registry",
    "key_resolver",
    "provider_factory",
    "chat_relay",
    "github_service"
]
