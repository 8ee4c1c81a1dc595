"""
Billing lookup tools.
Read-only access to invoices through the record store.
"""

from typing import List, Optional

from support_dispatch.memory.record_store import RecordStore
from support_dispatch.models.domain import Invoice


async def get_invoice_details(store: RecordStore, invoice_id: str) -> Optional[Invoice]:
    """Look up an invoice by its ID."""
    return await store.get_invoice(invoice_id)


async def list_invoices(store: RecordStore) -> List[Invoice]:
    """All invoices, newest first."""
    return await store.list_invoices()
