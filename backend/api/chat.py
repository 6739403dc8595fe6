"""
Chat API endpoints
Streaming chat relay over plain-text responses
"""

import logging
from fastapi import APIRouter, Depends, Request
from fastapi.responses import StreamingResponse

from backend.core.exceptions import http_400_bad_request, http_404_not_found, NotFoundError
from backend.api.deps import AuthenticatedRoute, get_chat_relay
from backend.middleware.rate_limiter import chat_rate_limit
from backend.schemas.chat import ChatRequest, RegenerateRequest
from backend.services.chat_relay import ChatRelay, PreparedChat

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/chat", tags=["chat"], route_class=AuthenticatedRoute)

ERROR_RESPONSES = {
    400: {"description": "Validation error or unknown model"},
    401: {"description": "Not authenticated"},
    402: {"description": "No API key configured for the model's provider"},
    404: {"description": "Project not found"},
    429: {"description": "Provider rate limit, try again later"},
    502: {"description": "Provider error"},
}


def _streaming_response(relay: ChatRelay, prepared: PreparedChat) -> StreamingResponse:
    return StreamingResponse(
        relay.stream(prepared),
        media_type="text/plain; charset=utf-8",
        headers={
            "Cache-Control": "no-cache",
            "X-Accel-Buffering": "no",
            "X-Model-Id": prepared.model_id,
        }
    )


@router.post(
    "",
    response_class=StreamingResponse,
    responses={
        200: {
            "description": "Generated text, streamed as it is produced",
            "content": {"text/plain": {"schema": {"type": "string"}}}
        },
        **ERROR_RESPONSES
    }
)
@chat_rate_limit()
async def chat(
    request: Request,
    body: ChatRequest,
    relay: ChatRelay = Depends(get_chat_relay)
) -> StreamingResponse:
    """
    Stream a model's answer for a project conversation

    The user message is saved before generation starts. The assistant
    message is saved only when the stream completes; a stopped generation
    leaves no assistant message behind.

    Request:
        ```json
        {
          "projectId": "uuid-here",
          "message": "Add a dark mode toggle",
          "model": "gpt-4o",
          "temperature": 0.7,
          "maxTokens": 4096
        }
        ```

    Response:
        text/plain body carrying the raw generated text. Failures detected
        before the first chunk are JSON errors; later failures drop the
        connection before the body completes.

    Args:
        request: Incoming request (used by the rate limiter)
        body: Chat request
        relay: Chat relay bound to the current user

    Returns:
        StreamingResponse (text/plain)
    """
    prepared = await relay.prepare(
        project_id=body.project_id,
        message=body.message,
        model_id=body.model,
        temperature=body.temperature,
        max_tokens=body.max_tokens,
    )
    return _streaming_response(relay, prepared)


@router.post(
    "/regenerate",
    response_class=StreamingResponse,
    responses=ERROR_RESPONSES
)
@chat_rate_limit()
async def regenerate(
    request: Request,
    body: RegenerateRequest,
    relay: ChatRelay = Depends(get_chat_relay)
) -> StreamingResponse:
    """
    Answer an earlier user message again

    Drops the target user message and every later message, then runs a
    normal chat turn with the same text.

    Args:
        request: Incoming request (used by the rate limiter)
        body: Project, user message id and generation options
        relay: Chat relay bound to the current user

    Returns:
        StreamingResponse (text/plain)

    Raises:
        HTTPException: 404 if project or message not found
        HTTPException: 400 if the message is not a user message
    """
    try:
        content = relay.drop_from_message(body.project_id, body.message_id)
    except NotFoundError as e:
        raise http_404_not_found(e.message)
    except ValueError as e:
        raise http_400_bad_request(str(e))

    prepared = await relay.prepare(
        project_id=body.project_id,
        message=content,
        model_id=body.model,
        temperature=body.temperature,
        max_tokens=body.max_tokens,
    )
    return _streaming_response(relay, prepared)
