"""
Domain tools - read-only lookups the agents are grounded with
"""

from support_dispatch.tools.order_tools import get_order_details, list_orders
from support_dispatch.tools.billing_tools import get_invoice_details, list_invoices
from support_dispatch.tools.support_tools import answer_faq, get_conversation_history

__all__ = [
    "get_order_details",
    "list_orders",
    "get_invoice_details",
    "list_invoices",
    "answer_faq",
    "get_conversation_history",
]
