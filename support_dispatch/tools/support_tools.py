"""
Support tools - FAQ lookup and conversation history.
"""

from typing import Optional

from support_dispatch.config.constants import FAQ_ANSWERS, FAQ_FALLBACK
from support_dispatch.memory.record_store import RecordStore
from support_dispatch.models.domain import Conversation


def answer_faq(question: str) -> str:
    """
    Answer a FAQ by keyword match.

    Keys are checked in FAQ_ANSWERS order and the first one contained in
    the lowercased question wins. Unmatched questions get an escalation notice.
    """
    q = question.lower()
    for key, answer in FAQ_ANSWERS.items():
        if key in q:
            return answer
    return FAQ_FALLBACK


async def get_conversation_history(store: RecordStore, conversation_id: str) -> Optional[Conversation]:
    """Conversation with its messages, oldest first."""
    return await store.get_conversation(conversation_id)
