"""
Chat service - the dispatch orchestrator.

Processing a message:
1. Resolve or create the conversation
2. Save the user message (before anything reads history)
3. Classify intent
4. Load and compact conversation history
5. Gather grounding for the routed agent
6. Return the reply stream with routing metadata

The assistant reply is persisted by a detached task once the stream ends.
"""

import asyncio
import enum
from dataclasses import dataclass
from typing import AsyncIterator, Awaitable, Callable, List, Optional, Set

from langchain_core.language_models import BaseChatModel
from loguru import logger

from support_dispatch.agents.grounding import ContextAggregator
from support_dispatch.agents.registry import AgentType, get_agent
from support_dispatch.agents.router import IntentRouter
from support_dispatch.agents.streamer import ResponseStreamer
from support_dispatch.config.settings import settings
from support_dispatch.memory.context_window import to_model_messages
from support_dispatch.memory.record_store import RecordStore
from support_dispatch.models.domain import Conversation, MessageRole
from support_dispatch.utils.errors import NotFoundError


class DispatchStage(str, enum.Enum):
    """Lifecycle of one dispatched message"""
    RESOLVING_CONVERSATION = "resolving_conversation"
    CLASSIFYING = "classifying"
    AGGREGATING = "aggregating"
    STREAMING = "streaming"
    PERSISTING = "persisting"
    DONE = "done"
    FAILED = "failed"


@dataclass
class DispatchResult:
    """Routing metadata plus the reply stream. The stream starts with the status line."""
    conversation_id: str
    agent_type: AgentType
    stream: AsyncIterator[str]


def derive_title(content: str, max_length: Optional[int] = None) -> str:
    """Conversation title from the first user message, truncated with an ellipsis."""
    limit = max_length or settings.title_max_length
    return content[:limit] + "..." if len(content) > limit else content


async def retry_async(
    operation: Callable[[], Awaitable[None]],
    description: str,
    attempts: int,
    delay: float,
) -> bool:
    """
    Run an async operation, retrying on failure.

    Returns:
        True on success, False once all attempts have failed (the failure is logged)
    """
    for attempt in range(1, attempts + 1):
        try:
            await operation()
            return True
        except Exception as e:
            if attempt == attempts:
                logger.exception(f"{description} failed after {attempts} attempt(s), dropping: {e}")
                return False
            logger.warning(f"{description} failed (attempt {attempt}/{attempts}): {e}")
            await asyncio.sleep(delay)
    return False


class ChatService:
    """Orchestrates classification, grounding, streaming and persistence."""

    def __init__(
        self,
        store: RecordStore,
        llm: Optional[BaseChatModel] = None,
        router_llm: Optional[BaseChatModel] = None,
        router: Optional[IntentRouter] = None,
        aggregator: Optional[ContextAggregator] = None,
        streamer: Optional[ResponseStreamer] = None,
        persist_partial_on_disconnect: Optional[bool] = None,
        persist_retry_attempts: Optional[int] = None,
        persist_retry_delay: Optional[float] = None,
    ):
        self.store = store
        self.router = router or IntentRouter(store, llm=router_llm)
        self.aggregator = aggregator or ContextAggregator(store)
        self.streamer = streamer or ResponseStreamer(llm)

        self.persist_partial_on_disconnect = (
            settings.persist_partial_on_disconnect
            if persist_partial_on_disconnect is None else persist_partial_on_disconnect
        )
        self.persist_retry_attempts = max(1, persist_retry_attempts or settings.persist_retry_attempts)
        self.persist_retry_delay = (
            settings.persist_retry_delay if persist_retry_delay is None else persist_retry_delay
        )

        # Detached persistence tasks; held so they are not garbage collected
        self._pending: Set[asyncio.Task] = set()

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    async def process_message(self, content: str, conversation_id: Optional[str] = None) -> DispatchResult:
        """
        Dispatch a user message.

        Args:
            content: Trimmed, non-empty user message
            conversation_id: Existing conversation to continue (a new one is created when omitted)

        Raises:
            NotFoundError: conversation_id does not resolve
        """
        stage = DispatchStage.RESOLVING_CONVERSATION
        try:
            self._log_stage(stage, conversation_id)
            conversation_id = await self._resolve_conversation(conversation_id)
            await self.store.append_message(conversation_id, MessageRole.USER.value, content)

            stage = DispatchStage.CLASSIFYING
            self._log_stage(stage, conversation_id)
            classification = await self.router.classify(content, conversation_id)
            agent_type = classification.agent_type

            stage = DispatchStage.AGGREGATING
            self._log_stage(stage, conversation_id)
            history = to_model_messages(await self.store.list_messages(conversation_id))
            grounding = await self.aggregator.gather(agent_type, content, conversation_id)

            stage = DispatchStage.STREAMING
            self._log_stage(stage, conversation_id)
            stream = self.streamer.stream(
                get_agent(agent_type),
                grounding,
                history,
                on_finish=self._persist_callback(conversation_id, agent_type),
            )
        except Exception as e:
            logger.error(f"[{conversation_id}] Dispatch failed during {stage.value}: {e}")
            self._log_stage(DispatchStage.FAILED, conversation_id)
            raise

        return DispatchResult(conversation_id=conversation_id, agent_type=agent_type, stream=stream)

    async def _resolve_conversation(self, conversation_id: Optional[str]) -> str:
        if not conversation_id:
            conversation = await self.store.create_conversation()
            logger.info(f"Started conversation {conversation.id}")
            return conversation.id

        if await self.store.get_conversation(conversation_id) is None:
            raise NotFoundError("Conversation not found")
        return conversation_id

    def _log_stage(self, stage: DispatchStage, conversation_id: Optional[str]) -> None:
        logger.debug(f"[{conversation_id or 'new'}] stage={stage.value}")

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def _persist_callback(self, conversation_id: str, agent_type: AgentType) -> Callable[[str, bool], None]:
        def on_finish(text: str, completed: bool) -> None:
            if not completed and not (text and self.persist_partial_on_disconnect):
                logger.info(f"[{conversation_id}] Stream ended early, nothing persisted")
                return
            self._log_stage(DispatchStage.PERSISTING, conversation_id)
            task = asyncio.create_task(self.save_assistant_message(conversation_id, text, agent_type))
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)

        return on_finish

    async def save_assistant_message(self, conversation_id: str, content: str, agent_type: AgentType) -> bool:
        """
        Persist the assistant reply, then bump the conversation and set its title.

        Failures are retried and finally logged; they never reach the caller.

        Returns:
            True when every step succeeded
        """
        saved = await retry_async(
            lambda: self.store.append_message(
                conversation_id, MessageRole.ASSISTANT.value, content, agent_type.value
            ),
            f"[{conversation_id}] Saving assistant message",
            self.persist_retry_attempts,
            self.persist_retry_delay,
        )
        if not saved:
            return False

        titled = await retry_async(
            lambda: self._update_title(conversation_id),
            f"[{conversation_id}] Updating conversation title",
            self.persist_retry_attempts,
            self.persist_retry_delay,
        )
        if titled:
            self._log_stage(DispatchStage.DONE, conversation_id)
        return titled

    async def _update_title(self, conversation_id: str) -> None:
        await self.store.touch_conversation(conversation_id)
        conversation = await self.store.get_conversation(conversation_id)
        if conversation is None or conversation.title:
            return
        first_user = next((m for m in conversation.messages if m.role == MessageRole.USER.value), None)
        if first_user is not None:
            await self.store.update_conversation_title(conversation_id, derive_title(first_user.content))

    async def drain(self) -> None:
        """Wait for all detached persistence tasks to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    # ------------------------------------------------------------------
    # Conversations
    # ------------------------------------------------------------------

    async def list_conversations(self) -> List[Conversation]:
        return await self.store.list_conversations()

    async def get_conversation(self, conversation_id: str) -> Conversation:
        conversation = await self.store.get_conversation(conversation_id)
        if conversation is None:
            raise NotFoundError("Conversation not found")
        return conversation

    async def delete_conversation(self, conversation_id: str) -> None:
        if not await self.store.delete_conversation(conversation_id):
            raise NotFoundError("Conversation not found")
