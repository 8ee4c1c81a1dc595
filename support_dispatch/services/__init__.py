"""
Services - dispatch orchestration and demo data
"""

from support_dispatch.services.chat_service import ChatService, DispatchResult, DispatchStage, derive_title
from support_dispatch.services.seed_data import seed_database

__all__ = [
    "ChatService",
    "DispatchResult",
    "DispatchStage",
    "derive_title",
    "seed_database",
]
