"""
Context carryover - routes terse follow-ups ("yes", "ok", "and the amount?")
to the agent the previous assistant reply was about.
"""

import re
from typing import Optional

from loguru import logger

from support_dispatch.agents.registry import AgentType
from support_dispatch.agents.router.state import StageResult
from support_dispatch.config.settings import settings
from support_dispatch.memory.record_store import RecordStore

STAGE = "carryover"

BILLING_TOPIC = re.compile(r"invoice|billing|payment|amount")
ORDER_TOPIC = re.compile(r"order|tracking|shipped|delivery")


def is_carryover_candidate(text: str, conversation_id: Optional[str], max_length: Optional[int] = None) -> bool:
    """Only short messages inside an existing conversation inherit the previous topic."""
    limit = max_length if max_length is not None else settings.carryover_max_length
    return bool(conversation_id) and len(text) < limit


async def resolve_carryover(text: str, conversation_id: str, store: RecordStore) -> StageResult:
    """
    Infer intent from the most recent assistant reply in the conversation.

    Args:
        text: Short user message that the keyword stage left unresolved
        conversation_id: Conversation to inspect
        store: Record store (one read)
    """
    last_reply = await store.most_recent_assistant_message(conversation_id)
    if last_reply is None:
        return StageResult.unresolved(STAGE)

    previous = last_reply.content.lower()
    if BILLING_TOPIC.search(previous):
        return StageResult(STAGE, AgentType.BILLING)
    if ORDER_TOPIC.search(previous):
        return StageResult(STAGE, AgentType.ORDER)

    logger.debug(f"No carryover topic in previous reply for '{text}'")
    return StageResult.unresolved(STAGE)
