"""
Chat Relay - streams a model's answer for a project conversation

Phases:
    prepare():  load project, history and files, persist the user message,
                build the provider handle and pull the first chunk. Every
                failure here is raised, so the endpoint can still answer
                with a JSON error.
    stream():   forward chunks as they arrive, accumulate the full text and,
                only on natural completion, save the assistant message.

Aborts (client disconnect, task cancellation) close the upstream call and
save nothing. Errors after the first byte abort the response without its
terminating chunk, so clients see a failed transfer. Concurrent
requests on the same project are not serialized: their messages may
interleave.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, AsyncGenerator, AsyncIterator, Callable, List, Optional
from uuid import UUID

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.config import Settings, settings as default_settings
from backend.core.exceptions import NotFoundError, PersistenceError, StreamInterruptedError
from backend.database import SessionLocal
from backend.models.chat_message import ChatMessage
from backend.models.file import File
from backend.models.project import Project
from backend.models.user import User
from backend.services.key_resolver import APIKeyResolver
from backend.services.provider_factory import ProviderClientFactory, ProviderHandle
from backend.utils.error_handlers import ErrorHandler

logger = logging.getLogger(__name__)

SYSTEM_PROMPT_INTRO = "You are an AI assistant helping with code development."
FILE_CONTEXT_HEADER = "Here's the current project context:"
SYSTEM_PROMPT_OUTRO = (
    "Please provide helpful, accurate responses. When suggesting code changes, "
    "be specific about which files to modify and provide complete code examples."
)


def build_system_prompt(files: List[File]) -> str:
    """
    System prompt with every file embedded verbatim

    The file-context section is left out entirely when the project has no
    files.
    """
    if not files:
        return f"{SYSTEM_PROMPT_INTRO}\n\n{SYSTEM_PROMPT_OUTRO}"

    context = "\n\n".join(f"File: {f.path}\n{f.content}" for f in files)
    return f"{SYSTEM_PROMPT_INTRO} {FILE_CONTEXT_HEADER}\n\n{context}\n\n{SYSTEM_PROMPT_OUTRO}"


def build_messages(system_prompt: str, history: List[ChatMessage], user_message: str) -> List[BaseMessage]:
    """[system prompt, prior messages oldest first, new user message]"""
    messages: List[BaseMessage] = [SystemMessage(content=system_prompt)]

    for msg in history:
        if msg.role == "user":
            messages.append(HumanMessage(content=msg.content))
        elif msg.role == "assistant":
            messages.append(AIMessage(content=msg.content))

    messages.append(HumanMessage(content=user_message))
    return messages


def chunk_text(chunk: Any) -> str:
    """Text carried by a streamed chunk ('' for non-text chunks)"""
    content = getattr(chunk, "content", chunk)
    return content if isinstance(content, str) else ""


@dataclass
class PreparedChat:
    """State handed from prepare() to stream()"""
    project_id: UUID
    user_message: ChatMessage
    handle: ProviderHandle
    upstream: AsyncIterator[Any]
    first_chunk: str = ""
    exhausted: bool = False
    messages: List[BaseMessage] = field(default_factory=list)

    @property
    def model_id(self) -> str:
        return self.handle.model.id


class ChatRelay:
    """
    Relay one chat turn between a project and a provider

    Key features:
    - Owner-scoped project lookup (missing and foreign projects look the same)
    - User message saved before any provider call
    - Fresh provider client per request with the resolved credential
    - Assistant message saved best-effort after the stream completes
    """

    def __init__(
        self,
        db: Session,
        user: User,
        factory: Optional[ProviderClientFactory] = None,
        session_factory: Callable[[], Session] = SessionLocal,
        settings: Optional[Settings] = None,
    ):
        """
        Initialize chat relay

        Args:
            db: Request database session
            user: Authenticated user
            factory: Provider client factory (built from db when omitted)
            session_factory: Opens the session used for the assistant save
            settings: Application settings
        """
        self.db = db
        self.user = user
        self.settings = settings or default_settings
        self.factory = factory or ProviderClientFactory(APIKeyResolver(db, self.settings), self.settings)
        self.session_factory = session_factory

    def get_project(self, project_id: UUID) -> Project:
        project = self.db.query(Project).filter(
            Project.id == project_id,
            Project.user_id == self.user.id
        ).first()

        if not project:
            raise NotFoundError("Project not found")
        return project

    def get_history(self, project_id: UUID) -> List[ChatMessage]:
        """Most recent messages, oldest first"""
        messages = self.db.query(ChatMessage).filter(
            ChatMessage.project_id == project_id
        ).order_by(ChatMessage.created_at.desc()).limit(self.settings.CHAT_HISTORY_LIMIT).all()
        return messages[::-1]

    def get_files(self, project_id: UUID) -> List[File]:
        """Files in stored (insertion) order"""
        return self.db.query(File).filter(
            File.project_id == project_id
        ).order_by(File.created_at, File.path).all()

    def save_user_message(self, project_id: UUID, content: str, model_id: str) -> ChatMessage:
        """
        Persist the incoming user message

        Raises:
            PersistenceError: The write failed; generation must not start
        """
        msg = ChatMessage(project_id=project_id, role="user", content=content, model=model_id)
        try:
            self.db.add(msg)
            self.db.commit()
            self.db.refresh(msg)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to save user message for project {project_id}: {e}")
            raise PersistenceError("Failed to save message") from e
        return msg

    def save_assistant_message(self, project_id: UUID, content: str, model_id: str) -> Optional[ChatMessage]:
        """
        Persist the completed assistant message

        Best-effort: the caller already received the text, so a failure is
        logged and swallowed.
        """
        db = self.session_factory()
        try:
            msg = ChatMessage(project_id=project_id, role="assistant", content=content, model=model_id)
            db.add(msg)
            db.commit()
            logger.info(f"Saved assistant message for project {project_id} ({len(content)} chars)")
            return msg
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to save assistant message for project {project_id}: {e}")
            return None
        finally:
            db.close()

    def drop_from_message(self, project_id: UUID, message_id: UUID) -> str:
        """
        Delete a user message and everything after it

        Used by regeneration, which then runs a normal turn with the
        returned content.

        Returns:
            Content of the dropped user message

        Raises:
            NotFoundError: Project or message not found
            ValueError: The message is not a user message
        """
        self.get_project(project_id)

        target = self.db.query(ChatMessage).filter(
            ChatMessage.id == message_id,
            ChatMessage.project_id == project_id
        ).first()
        if not target:
            raise NotFoundError("Message not found")
        if target.role != "user":
            raise ValueError("Only user messages can be regenerated")

        content = target.content
        deleted = self.db.query(ChatMessage).filter(
            ChatMessage.project_id == project_id,
            ChatMessage.created_at >= target.created_at
        ).delete(synchronize_session=False)
        self.db.commit()

        logger.info(f"Dropped {deleted} messages from project {project_id} for regeneration")
        return content

    async def prepare(
        self,
        project_id: UUID,
        message: str,
        model_id: str,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> PreparedChat:
        """
        Run every step that can still fail with a JSON error

        Raises:
            NotFoundError: Project missing or not owned by the user
            PersistenceError: User message could not be saved
            ModelNotFoundError: Unknown model id
            CredentialMissingError: No key for the model's provider
            UpstreamProviderError: Provider failed before the first chunk
        """
        project = self.get_project(project_id)
        history = self.get_history(project.id)
        files = self.get_files(project.id)

        user_message = self.save_user_message(project.id, message, model_id)

        handle = self.factory.create(
            model_id,
            user_id=self.user.id,
            temperature=temperature,
            max_tokens=max_tokens,
        )

        messages = build_messages(build_system_prompt(files), history, message)
        logger.info(
            f"Chat turn: project={project.id}, model={handle.model.id}, "
            f"history={len(history)}, files={len(files)}"
        )

        upstream = handle.llm.astream(messages).__aiter__()
        prepared = PreparedChat(
            project_id=project.id,
            user_message=user_message,
            handle=handle,
            upstream=upstream,
            messages=messages,
        )

        try:
            first = await upstream.__anext__()
            prepared.first_chunk = chunk_text(first)
        except StopAsyncIteration:
            prepared.exhausted = True
        except Exception as e:
            await self._close_upstream(upstream)
            raise ErrorHandler.classify_provider_error(e, handle.provider.id.value) from e

        return prepared

    async def stream(self, prepared: PreparedChat) -> AsyncGenerator[str, None]:
        """
        Forward chunks and save the assistant message on completion

        Yields:
            Text chunks in arrival order

        Raises:
            StreamInterruptedError: The provider failed mid-stream
        """
        parts: List[str] = []
        completed = False

        try:
            if prepared.first_chunk:
                parts.append(prepared.first_chunk)
                yield prepared.first_chunk

            if not prepared.exhausted:
                async for chunk in prepared.upstream:
                    text = chunk_text(chunk)
                    if text:
                        parts.append(text)
                        yield text

            completed = True
        except Exception as e:
            # Bytes already went out; aborting the response is the only signal left
            error = ErrorHandler.classify_provider_error(e, prepared.handle.provider.id.value)
            logger.error(f"Stream for project {prepared.project_id} aborted: {error.message}")
            raise StreamInterruptedError(error) from e
        finally:
            if not completed:
                await self._close_upstream(prepared.upstream)
                logger.info(f"Generation for project {prepared.project_id} not completed; nothing saved")

        if completed:
            self.save_assistant_message(prepared.project_id, "".join(parts), prepared.model_id)

    @staticmethod
    async def _close_upstream(upstream: AsyncIterator[Any]) -> None:
        aclose = getattr(upstream, "aclose", None)
        if aclose is None:
            return
        try:
            await aclose()
        except Exception as e:
            logger.debug(f"Error closing upstream stream: {e}")
