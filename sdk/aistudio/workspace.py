"""
Workspace - client-side state for one open project

Mirrors what an editor UI keeps in memory: the open project, its files,
the conversation and the text of the answer being streamed. File edits
are applied locally at once and saved after a quiet period; switching
file or project saves pending edits before the switch completes.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import AsyncIterator, Callable, Dict, List, Optional
from uuid import UUID

from .async_client import AsyncClient
from .exceptions import AIStudioError, CredentialMissingError
from .types.chat import ChatMessageResponse
from .types.files import FileResponse
from .types.projects import ProjectResponse

logger = logging.getLogger(__name__)

AUTOSAVE_DELAY = 1.0
DEFAULT_MODEL = "gemini-2.5-pro"


@dataclass
class Message:
    """A conversation entry; id is None until the server's copy is loaded"""
    role: str
    content: str
    model: Optional[str] = None
    id: Optional[UUID] = None

    @classmethod
    def from_response(cls, msg: ChatMessageResponse) -> "Message":
        return cls(role=msg.role, content=msg.content, model=msg.model, id=msg.id)


class Workspace:
    """
    Optimistic state sync for one project at a time

    Example:
        >>> async with AsyncClient(api_key="sk_studio_...") as client:
        ...     ws = Workspace(client, model="gpt-4o", fallback_model="gemini-2.5-pro")
        ...     await ws.open_project(project_id)
        ...     ws.edit_file("<h1>Hello</h1>")
        ...     reply = await ws.send_message("Make the heading blue")
        ...     await ws.aclose()
    """

    def __init__(
        self,
        client: AsyncClient,
        model: str = DEFAULT_MODEL,
        fallback_model: Optional[str] = None,
        autosave_delay: float = AUTOSAVE_DELAY,
        on_chunk: Optional[Callable[[str], None]] = None,
    ):
        """
        Args:
            client: API client (not closed by the workspace)
            model: Model used when send_message gets none
            fallback_model: Model tried once when the chosen model's
                provider has no API key configured
            autosave_delay: Quiet period in seconds before an edit is saved
            on_chunk: Called with every streamed chunk
        """
        self.client = client
        self.model = model
        self.fallback_model = fallback_model
        self.autosave_delay = autosave_delay
        self.on_chunk = on_chunk

        self.project: Optional[ProjectResponse] = None
        self.files: Dict[UUID, FileResponse] = {}
        self.active_file_id: Optional[UUID] = None
        self.messages: List[Message] = []
        self.streaming_text = ""
        self.is_streaming = False

        self._pending: Dict[UUID, str] = {}
        self._timers: Dict[UUID, asyncio.Task] = {}
        self._inflight: Dict[UUID, asyncio.Task] = {}
        self._generation: Optional[asyncio.Task] = None

    @property
    def active_file(self) -> Optional[FileResponse]:
        if self.active_file_id is None:
            return None
        return self.files.get(self.active_file_id)

    @property
    def has_pending_edits(self) -> bool:
        return bool(self._pending)

    # Projects and files

    async def open_project(self, project_id: UUID) -> ProjectResponse:
        """
        Switch to a project

        Pending edits of the previous project are saved first and any
        generation in progress is stopped; nothing carries over.
        """
        await self.flush()
        await self.stop()

        project = await self.client.projects.get(project_id)

        self.project = project
        self.files = {f.id: f for f in project.files}
        self.active_file_id = project.files[0].id if project.files else None
        self.messages = [Message.from_response(m) for m in project.messages]
        self.streaming_text = ""
        return project

    async def select_file(self, file_id: UUID) -> FileResponse:
        """Make a file active, saving the previous file's pending edit first"""
        if file_id not in self.files:
            raise KeyError(f"File {file_id} is not part of the open project")

        if self.active_file_id is not None and self.active_file_id != file_id:
            await self.flush(self.active_file_id)

        self.active_file_id = file_id
        return self.files[file_id]

    def edit_file(self, content: str, file_id: Optional[UUID] = None) -> FileResponse:
        """
        Apply an edit locally and schedule its save

        Every edit restarts the quiet period, so a burst of keystrokes
        becomes a single save of the last content.
        """
        file_id = file_id or self.active_file_id
        if file_id is None or file_id not in self.files:
            raise KeyError("No file selected")

        updated = self.files[file_id].model_copy(update={"content": content})
        self.files[file_id] = updated
        self._pending[file_id] = content
        self._schedule_save(file_id)
        return updated

    async def flush(self, file_id: Optional[UUID] = None) -> None:
        """
        Save pending edits now (one file, or all)

        Returns once every pending edit, including saves already in
        progress, has reached the server.
        """
        if file_id is not None:
            file_ids = [file_id]
        else:
            file_ids = list(set(self._pending) | set(self._timers) | set(self._inflight))

        for fid in file_ids:
            timer = self._timers.pop(fid, None)
            if timer is not None:
                timer.cancel()

            inflight = self._inflight.get(fid)
            if inflight is not None:
                await asyncio.wait({inflight})

            await self._save(fid)

    def _schedule_save(self, file_id: UUID) -> None:
        timer = self._timers.pop(file_id, None)
        if timer is not None:
            timer.cancel()
        self._timers[file_id] = asyncio.create_task(self._save_after_delay(file_id))

    async def _save_after_delay(self, file_id: UUID) -> None:
        await asyncio.sleep(self.autosave_delay)

        # Past this point flush() waits for the save instead of cancelling it
        self._timers.pop(file_id, None)
        self._inflight[file_id] = asyncio.current_task()
        try:
            await self._save(file_id)
        except AIStudioError as e:
            logger.error(f"Autosave of file {file_id} failed, will retry on next flush: {e.message}")
        finally:
            self._inflight.pop(file_id, None)

    async def _save(self, file_id: UUID) -> None:
        content = self._pending.pop(file_id, None)
        if content is None:
            return

        try:
            saved = await self.client.files.update(file_id, content=content)
        except AIStudioError:
            # Keep the edit unless a newer one arrived meanwhile
            self._pending.setdefault(file_id, content)
            raise

        if file_id in self.files and file_id not in self._pending:
            self.files[file_id] = saved
        logger.debug(f"Saved file {file_id} ({len(content)} chars)")

    # Conversation

    async def send_message(self, content: str, model: Optional[str] = None) -> Optional[Message]:
        """
        Send a message and stream the answer into streaming_text

        The user message is shown at once; the assistant message is
        appended when the stream completes. If the model's provider has no
        key and a fallback model is set, the turn is answered once more
        with the fallback model.

        Returns:
            The assistant message, or None if the generation was stopped

        Raises:
            CredentialMissingError: No key and no usable fallback
            APIError: The stream failed or was cut off; no answer is kept
            RuntimeError: No project open or a generation already running
        """
        project = self._require_project()
        model = model or self.model

        await self.flush()
        self.messages.append(Message(role="user", content=content, model=model))

        return await self._run_generation(
            lambda m: self.client.chat.stream(project.id, content, model=m),
            model,
        )

    async def regenerate(self, message_id: Optional[UUID] = None, model: Optional[str] = None) -> Optional[Message]:
        """
        Answer a user message again (the latest one by default)

        The message and everything after it are dropped server-side before
        the new answer is generated.
        """
        project = self._require_project()
        model = model or self.model

        await self.flush()
        history = await self.client.projects.messages(project.id)

        if message_id is None:
            message_id = self._last_user_message_id(history)
        index = next((i for i, m in enumerate(history) if m.id == message_id), None)
        if index is None:
            raise KeyError(f"Message {message_id} is not part of the open project")

        target = history[index]
        self.messages = [Message.from_response(m) for m in history[:index]]
        self.messages.append(Message(role="user", content=target.content, model=model))

        return await self._run_generation(
            lambda m: self.client.chat.regenerate(project.id, message_id, model=m),
            model,
        )

    async def stop(self) -> bool:
        """
        Stop the generation in progress

        The partial answer is discarded; the server saves no assistant
        message for it.

        Returns:
            True if a generation was running
        """
        task = self._generation
        if task is None or task.done():
            return False

        task.cancel()
        await asyncio.wait({task})

        self.streaming_text = ""
        self.is_streaming = False
        logger.info("Generation stopped")
        return True

    async def aclose(self) -> None:
        """Save pending edits and stop any generation"""
        await self.stop()
        await self.flush()

    async def _run_generation(
        self,
        open_stream: Callable[[str], AsyncIterator[str]],
        model: str,
    ) -> Optional[Message]:
        if self._generation is not None and not self._generation.done():
            raise RuntimeError("A generation is already in progress")

        task = asyncio.create_task(self._generate(open_stream, model))
        self._generation = task
        try:
            await asyncio.wait({task})
        except asyncio.CancelledError:
            task.cancel()
            raise

        if task.cancelled():
            return None
        return task.result()

    async def _generate(
        self,
        open_stream: Callable[[str], AsyncIterator[str]],
        model: str,
    ) -> Message:
        project = self._require_project()
        try:
            text = await self._consume(open_stream(model))
        except CredentialMissingError as e:
            if not self.fallback_model or self.fallback_model == model:
                raise
            logger.warning(f"{e.provider_name or e.provider} key missing, retrying with {self.fallback_model}")

            # The user message is already stored; answer that one again
            history = await self.client.projects.messages(project.id)
            message_id = self._last_user_message_id(history)
            model = self.fallback_model
            text = await self._consume(self.client.chat.regenerate(project.id, message_id, model=model))

        message = Message(role="assistant", content=text, model=model)
        self.messages.append(message)
        self.streaming_text = ""
        return message

    async def _consume(self, stream: AsyncIterator[str]) -> str:
        self.streaming_text = ""
        self.is_streaming = True
        try:
            async for text in stream:
                self.streaming_text += text
                if self.on_chunk is not None:
                    self.on_chunk(text)
            return self.streaming_text
        except AIStudioError:
            # A failed or truncated answer is never kept
            self.streaming_text = ""
            raise
        finally:
            self.is_streaming = False
            aclose = getattr(stream, "aclose", None)
            if aclose is not None:
                await aclose()

    @staticmethod
    def _last_user_message_id(history: List[ChatMessageResponse]) -> UUID:
        for msg in reversed(history):
            if msg.role == "user":
                return msg.id
        raise KeyError("No user message to regenerate")

    def _require_project(self) -> ProjectResponse:
        if self.project is None:
            raise RuntimeError("No project open")
        return self.project
