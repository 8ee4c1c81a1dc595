"""
Order lookup tools.
Read-only access to orders through the record store.
"""

from typing import List, Optional

from support_dispatch.memory.record_store import RecordStore
from support_dispatch.models.domain import Order


async def get_order_details(store: RecordStore, order_id: str) -> Optional[Order]:
    """Look up an order by its ID."""
    return await store.get_order(order_id)


async def list_orders(store: RecordStore) -> List[Order]:
    """All orders, newest first."""
    return await store.list_orders()
