"""
Domain models - ORM tables for orders, invoices and conversations
"""

from support_dispatch.models.domain import (
    Base,
    Order,
    Invoice,
    Conversation,
    Message,
    MessageRole,
)

__all__ = ["Base", "Order", "Invoice", "Conversation", "Message", "MessageRole"]
