"""
Record store - the narrow data-access interface used by the dispatcher.

Provides:
- Key lookups and listings of orders and invoices
- Conversation lifecycle (create, resume, title, delete with messages)
- Append-only message history ordered by creation time
"""

from datetime import datetime, timezone
from typing import List, Optional

from loguru import logger
from sqlalchemy import delete, select, text, update
from sqlalchemy.orm import selectinload

from support_dispatch.infra.database import Database
from support_dispatch.models.domain import Conversation, Invoice, Message, MessageRole, Order


class RecordStore:
    """Async record store backed by SQLAlchemy"""

    def __init__(self, database: Database):
        self.db = database

    # ------------------------------------------------------------------
    # Orders
    # ------------------------------------------------------------------

    async def get_order(self, order_id: str) -> Optional[Order]:
        async with self.db.session() as session:
            return await session.get(Order, order_id.upper())

    async def list_orders(self) -> List[Order]:
        """All orders, newest first."""
        async with self.db.session() as session:
            result = await session.execute(select(Order).order_by(Order.created_at.desc()))
            return list(result.scalars().all())

    # ------------------------------------------------------------------
    # Invoices
    # ------------------------------------------------------------------

    async def get_invoice(self, invoice_id: str) -> Optional[Invoice]:
        async with self.db.session() as session:
            return await session.get(Invoice, invoice_id.upper())

    async def list_invoices(self) -> List[Invoice]:
        """All invoices, newest first."""
        async with self.db.session() as session:
            result = await session.execute(select(Invoice).order_by(Invoice.created_at.desc()))
            return list(result.scalars().all())

    # ------------------------------------------------------------------
    # Conversations
    # ------------------------------------------------------------------

    async def create_conversation(self, conversation_id: Optional[str] = None) -> Conversation:
        """
        Create an empty conversation.

        Args:
            conversation_id: Explicit identifier (a uuid4 is generated when omitted)
        """
        conversation = Conversation(messages=[])
        if conversation_id:
            conversation.id = conversation_id
        async with self.db.session() as session:
            session.add(conversation)
            await session.flush()
        logger.debug(f"Created conversation {conversation.id}")
        return conversation

    async def get_conversation(self, conversation_id: str) -> Optional[Conversation]:
        """Conversation with its messages loaded, or None."""
        async with self.db.session() as session:
            result = await session.execute(
                select(Conversation)
                .where(Conversation.id == conversation_id)
                .options(selectinload(Conversation.messages))
            )
            return result.scalar_one_or_none()

    async def list_conversations(self) -> List[Conversation]:
        """All conversations newest first, each with its messages."""
        async with self.db.session() as session:
            result = await session.execute(
                select(Conversation)
                .order_by(Conversation.created_at.desc())
                .options(selectinload(Conversation.messages))
            )
            return list(result.scalars().all())

    async def delete_conversation(self, conversation_id: str) -> bool:
        """
        Delete a conversation and all of its messages in one transaction.

        Returns:
            True if a conversation was removed
        """
        async with self.db.session() as session:
            await session.execute(delete(Message).where(Message.conversation_id == conversation_id))
            result = await session.execute(delete(Conversation).where(Conversation.id == conversation_id))
            deleted = result.rowcount > 0
        if deleted:
            logger.info(f"Deleted conversation {conversation_id}")
        return deleted

    async def update_conversation_title(self, conversation_id: str, title: str) -> None:
        async with self.db.session() as session:
            await session.execute(
                update(Conversation)
                .where(Conversation.id == conversation_id)
                .values(title=title, updated_at=datetime.now(timezone.utc))
            )

    async def touch_conversation(self, conversation_id: str) -> None:
        """Bump updated_at after new activity."""
        async with self.db.session() as session:
            await session.execute(
                update(Conversation)
                .where(Conversation.id == conversation_id)
                .values(updated_at=datetime.now(timezone.utc))
            )

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------

    async def append_message(
        self,
        conversation_id: str,
        role: str,
        content: str,
        agent_type: Optional[str] = None,
    ) -> Message:
        """Persist a new message. agent_type is only kept on assistant messages."""
        role = MessageRole(role).value
        message = Message(
            conversation_id=conversation_id,
            role=role,
            content=content,
            agent_type=agent_type if role == MessageRole.ASSISTANT.value else None,
        )
        async with self.db.session() as session:
            session.add(message)
            await session.flush()
        return message

    async def list_messages(self, conversation_id: str) -> List[Message]:
        """Messages of a conversation, oldest first."""
        async with self.db.session() as session:
            result = await session.execute(
                select(Message)
                .where(Message.conversation_id == conversation_id)
                .order_by(Message.created_at.asc(), Message.id.asc())
            )
            return list(result.scalars().all())

    async def most_recent_assistant_message(self, conversation_id: str) -> Optional[Message]:
        async with self.db.session() as session:
            result = await session.execute(
                select(Message)
                .where(
                    Message.conversation_id == conversation_id,
                    Message.role == MessageRole.ASSISTANT.value,
                )
                .order_by(Message.created_at.desc(), Message.id.desc())
                .limit(1)
            )
            return result.scalar_one_or_none()

    # ------------------------------------------------------------------
    # Health
    # ------------------------------------------------------------------

    async def ping(self) -> None:
        """Round-trip a trivial query. Raises when the database is unreachable."""
        async with self.db.session() as session:
            await session.execute(text("SELECT 1"))
