"""Chat resource implementation - plain-text streaming"""

from typing import AsyncIterator, Optional, TYPE_CHECKING
from uuid import UUID

from ..types.chat import ChatRequest, RegenerateRequest

if TYPE_CHECKING:
    from ..async_client import AsyncClient


class AsyncChatResource:
    """Asynchronous Chat resource"""

    def __init__(self, client: "AsyncClient"):
        self._client = client

    def stream(
        self,
        project_id: UUID,
        message: str,
        model: str,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> AsyncIterator[str]:
        """
        Send a message and stream the model's answer.

        The server saves the user message before generation and the
        assistant message only when the stream completes. Breaking out of
        the loop (or closing the iterator) stops the generation and no
        assistant message is saved.

        Args:
            project_id: Project the conversation belongs to
            message: User message
            model: Registry model id (e.g. "gpt-4o")
            temperature: Sampling temperature override (0.0-2.0)
            max_tokens: Output cap override

        Yields:
            Text chunks as they arrive

        Raises:
            CredentialMissingError: No key for the model's provider (402)
            NotFoundError: Project not found
            ValidationError: Empty message or unknown model
            RateLimitError: Provider rate limit
            APIError: Provider or server failure

        Example:
            >>> async for text in client.chat.stream(project.id, "Add a footer", "gpt-4o"):
            ...     print(text, end="", flush=True)
        """
        data = ChatRequest(
            project_id=project_id,
            message=message,
            model=model,
            temperature=temperature,
            max_tokens=max_tokens,
        ).model_dump(mode="json", by_alias=True, exclude_none=True)

        return self._client.stream_text("POST", "/chat", json=data)

    def regenerate(
        self,
        project_id: UUID,
        message_id: UUID,
        model: str,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> AsyncIterator[str]:
        """
        Drop a user message and everything after it, then answer it again.

        Yields:
            Text chunks as they arrive
        """
        data = RegenerateRequest(
            project_id=project_id,
            message_id=message_id,
            model=model,
            temperature=temperature,
            max_tokens=max_tokens,
        ).model_dump(mode="json", by_alias=True, exclude_none=True)

        return self._client.stream_text("POST", "/chat/regenerate", json=data)

    async def send(
        self,
        project_id: UUID,
        message: str,
        model: str,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> str:
        """Send a message and return the complete answer (non-streaming convenience)"""
        parts = []
        async for text in self.stream(project_id, message, model, temperature, max_tokens):
            parts.append(text)
        return "".join(parts)
