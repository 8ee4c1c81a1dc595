"""
Memory layer - Record store and conversation context window
"""

from support_dispatch.memory.record_store import RecordStore
from support_dispatch.memory.context_window import truncate_messages, to_model_messages

__all__ = [
    "RecordStore",
    "truncate_messages",
    "to_model_messages",
]
