"""
Conversation context window - turns stored messages into model turns.
"""

from typing import List, Optional, Sequence

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage

from support_dispatch.config.settings import settings
from support_dispatch.models.domain import Message, MessageRole


def truncate_messages(messages: Sequence, max_messages: int) -> List:
    """
    Keep the most recent max_messages entries.

    Args:
        messages: Messages ordered oldest first
        max_messages: Maximum number of messages to keep

    Returns:
        Truncated list of messages (most recent N messages)
    """
    if not messages:
        return list(messages)
    return list(messages[-max_messages:]) if len(messages) > max_messages else list(messages)


def to_model_messages(history: Sequence[Message], max_messages: Optional[int] = None) -> List[BaseMessage]:
    """
    Convert stored history into LangChain chat turns, compacted to the window size.

    Args:
        history: Stored messages, oldest first
        max_messages: Window size (defaults to settings.max_conversation_messages)
    """
    window = truncate_messages(history, max_messages or settings.max_conversation_messages)
    turns: List[BaseMessage] = []
    for message in window:
        if message.role == MessageRole.USER.value:
            turns.append(HumanMessage(content=message.content))
        else:
            turns.append(AIMessage(content=message.content))
    return turns
