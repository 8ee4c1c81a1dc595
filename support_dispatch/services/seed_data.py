"""
Demo data for the customer support dispatcher.
Creates the sample orders, invoices and conversations used in development.
"""

from datetime import datetime, timedelta, timezone
from typing import List

from loguru import logger
from sqlalchemy import func, select

from support_dispatch.infra.database import Database
from support_dispatch.models.domain import Conversation, Invoice, Message, Order


def _day(year: int, month: int, day: int) -> datetime:
    return datetime(year, month, day, tzinfo=timezone.utc)


def build_orders() -> List[Order]:
    return [
        Order(
            id="ORD-1001", customer_name="Alice Johnson", customer_email="alice@example.com",
            status="shipped", tracking="TRK-ABC123",
            items=[
                {"name": "Wireless Headphones", "quantity": 1, "price": 79.99},
                {"name": "USB-C Cable", "quantity": 2, "price": 9.99},
            ],
            total=99.97, created_at=_day(2026, 1, 15), delivery_date=_day(2026, 2, 14),
        ),
        Order(
            id="ORD-1002", customer_name="Bob Smith", customer_email="bob@example.com",
            status="processing", tracking="",
            items=[{"name": "Mechanical Keyboard", "quantity": 1, "price": 149.99}],
            total=149.99, created_at=_day(2026, 2, 8), delivery_date=None,
        ),
        Order(
            id="ORD-1003", customer_name="Carol Davis", customer_email="carol@example.com",
            status="delivered", tracking="TRK-XYZ789",
            items=[
                {"name": "Monitor Stand", "quantity": 1, "price": 45.00},
                {"name": "Desk Lamp", "quantity": 1, "price": 32.50},
            ],
            total=77.50, created_at=_day(2026, 1, 20), delivery_date=_day(2026, 1, 28),
        ),
        Order(
            id="ORD-1004", customer_name="David Lee", customer_email="david@example.com",
            status="shipped", tracking="TRK-DEF456",
            items=[
                {"name": "Laptop Backpack", "quantity": 1, "price": 59.99},
                {"name": "Mouse Pad XL", "quantity": 1, "price": 19.99},
                {"name": "Webcam HD", "quantity": 1, "price": 44.99},
            ],
            total=124.97, created_at=_day(2026, 2, 1), delivery_date=_day(2026, 2, 12),
        ),
        Order(
            id="ORD-1005", customer_name="Eva Martinez", customer_email="eva@example.com",
            status="cancelled", tracking="",
            items=[{"name": "Smart Watch", "quantity": 1, "price": 299.99}],
            total=299.99, created_at=_day(2026, 2, 5), delivery_date=None,
        ),
        Order(
            id="ORD-1006", customer_name="Frank Wilson", customer_email="frank@example.com",
            status="processing", tracking="",
            items=[{"name": "Noise Cancelling Earbuds", "quantity": 2, "price": 129.99}],
            total=259.98, created_at=_day(2026, 2, 10), delivery_date=None,
        ),
        Order(
            id="ORD-1007", customer_name="Alice Johnson", customer_email="alice@example.com",
            status="delivered", tracking="TRK-GHI012",
            items=[
                {"name": "Phone Case", "quantity": 1, "price": 24.99},
                {"name": "Screen Protector", "quantity": 2, "price": 12.99},
            ],
            total=50.97, created_at=_day(2025, 12, 20), delivery_date=_day(2025, 12, 27),
        ),
    ]


def build_invoices() -> List[Invoice]:
    rows = [
        ("INV-2001", "Alice Johnson", "alice@example.com", 99.97, "paid",
         "Payment for order ORD-1001 - Wireless Headphones + USB-C Cables", _day(2026, 1, 15), _day(2026, 2, 15)),
        ("INV-2002", "Bob Smith", "bob@example.com", 149.99, "pending",
         "Payment for order ORD-1002 - Mechanical Keyboard", _day(2026, 2, 8), _day(2026, 3, 8)),
        ("INV-2003", "Carol Davis", "carol@example.com", 77.50, "paid",
         "Payment for order ORD-1003 - Monitor Stand + Desk Lamp", _day(2026, 1, 20), _day(2026, 2, 20)),
        ("INV-2004", "David Lee", "david@example.com", 124.97, "pending",
         "Payment for order ORD-1004 - Laptop Backpack + Mouse Pad + Webcam", _day(2026, 2, 1), _day(2026, 3, 1)),
        ("INV-2005", "Eva Martinez", "eva@example.com", 299.99, "refunded",
         "Refund for cancelled order ORD-1005 - Smart Watch", _day(2026, 2, 5), _day(2026, 3, 5)),
        ("INV-2006", "Frank Wilson", "frank@example.com", 259.98, "pending",
         "Payment for order ORD-1006 - Noise Cancelling Earbuds x2", _day(2026, 2, 10), _day(2026, 3, 10)),
        ("INV-2007", "Alice Johnson", "alice@example.com", 50.97, "overdue",
         "Payment for order ORD-1007 - Phone Case + Screen Protectors", _day(2025, 12, 20), _day(2026, 1, 20)),
    ]
    return [
        Invoice(
            id=inv_id, customer_name=name, customer_email=email, amount=amount, status=status,
            description=description, created_at=created_at, due_date=due_date,
        )
        for inv_id, name, email, amount, status, description, created_at, due_date in rows
    ]


def _conversation(title: str, turns: List[tuple], started: datetime) -> Conversation:
    messages = [
        Message(role=role, content=content, agent_type=agent_type, created_at=started + timedelta(seconds=i))
        for i, (role, content, agent_type) in enumerate(turns)
    ]
    return Conversation(title=title, created_at=started, updated_at=started, messages=messages)


def build_conversations() -> List[Conversation]:
    now = datetime.now(timezone.utc)
    return [
        _conversation("Order ORD-1001 status inquiry", [
            ("user", "Hi, I need help with my order ORD-1001.", None),
            ("assistant", "I found your order ORD-1001. It is currently shipped with tracking number TRK-ABC123. "
                          "The estimated delivery date is February 14, 2026.", "order"),
            ("user", "When will it arrive?", None),
            ("assistant", "Your order ORD-1001 is expected to be delivered by February 14, 2026. "
                          "The tracking number is TRK-ABC123.", "order"),
        ], now - timedelta(minutes=30)),
        _conversation("Invoice INV-2002 payment question", [
            ("user", "Can you show me the details for invoice INV-2002?", None),
            ("assistant", "Invoice INV-2002 is for $149.99 and is currently pending. "
                          "The due date is March 8, 2026.", "billing"),
        ], now - timedelta(minutes=20)),
        _conversation("Password reset help", [
            ("user", "How do I reset my password?", None),
            ("assistant", "To reset your password, go to Settings > Account > Change Password.", "support"),
        ], now - timedelta(minutes=10)),
    ]


async def seed_database(database: Database, include_conversations: bool = True) -> bool:
    """
    Insert demo records unless orders already exist.

    Returns:
        True if data was inserted
    """
    async with database.session() as session:
        existing = await session.scalar(select(func.count()).select_from(Order))
        if existing:
            logger.debug(f"Seed skipped: {existing} orders already present")
            return False

        orders = build_orders()
        invoices = build_invoices()
        session.add_all(orders)
        session.add_all(invoices)
        conversations = build_conversations() if include_conversations else []
        session.add_all(conversations)

    logger.success(f"Seeded {len(orders)} orders, {len(invoices)} invoices, {len(conversations)} conversations")
    return True
