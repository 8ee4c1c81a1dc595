"""
Context Aggregator - grounds an agent with record data before generation.

Extracts order and invoice identifiers from the user's message, looks the
records up through the domain tools and formats one fragment per result.
Fragments are joined under GROUNDING_HEADER and appended to the agent's
instructions. No fragments means no header.
"""

from datetime import datetime
from typing import List, Optional, Tuple

from loguru import logger

from support_dispatch.agents.registry import AgentType
from support_dispatch.config.constants import GROUNDING_HEADER, INVOICE_ID_PATTERN, ORDER_ID_PATTERN
from support_dispatch.memory.record_store import RecordStore
from support_dispatch.models.domain import Invoice, Order
from support_dispatch.tools import (
    answer_faq,
    get_conversation_history,
    get_invoice_details,
    get_order_details,
    list_invoices,
    list_orders,
)


def _unique_upper(matches: List[str]) -> List[str]:
    seen = []
    for match in matches:
        ident = match.upper()
        if ident not in seen:
            seen.append(ident)
    return seen


def extract_ids(text: str) -> Tuple[List[str], List[str]]:
    """
    Pull order and invoice identifiers out of free text.

    Returns:
        (order_ids, invoice_ids), uppercased, first-seen order, duplicates dropped
    """
    return (
        _unique_upper(ORDER_ID_PATTERN.findall(text)),
        _unique_upper(INVOICE_ID_PATTERN.findall(text)),
    )


def _money(value: float) -> str:
    return f"${value:.2f}"


def _day(value: Optional[datetime], missing: str = "TBD") -> str:
    return value.date().isoformat() if value else missing


def format_order(order: Order) -> str:
    items = ", ".join(
        f"{item.get('name')} x{item.get('quantity', 1)} ({_money(float(item.get('price', 0)))})"
        for item in order.items or []
    )
    return (
        f'[Tool Result] Order {order.id}: customer="{order.customer_name}", '
        f'email="{order.customer_email}", status="{order.status}", '
        f'tracking="{order.tracking or "N/A"}", items=[{items}], '
        f"total={_money(order.computed_total)}, ordered={_day(order.created_at)}, "
        f"delivery={_day(order.delivery_date)}"
    )


def format_order_listing(orders: List[Order]) -> str:
    rows = "\n".join(
        f'- {o.id}: customer="{o.customer_name}", status="{o.status}", total={_money(o.total)}'
        for o in orders
    )
    return f"[Tool Result] No specific order ID was mentioned. Available orders:\n{rows}"


def format_invoice(invoice: Invoice) -> str:
    return (
        f'[Tool Result] Invoice {invoice.id}: customer="{invoice.customer_name}", '
        f'amount={_money(invoice.amount)}, status="{invoice.status}", '
        f'description="{invoice.description}", created={_day(invoice.created_at)}, '
        f"due={_day(invoice.due_date)}"
    )


def format_invoice_listing(invoices: List[Invoice]) -> str:
    rows = "\n".join(
        f'- {i.id}: customer="{i.customer_name}", amount={_money(i.amount)}, '
        f'status="{i.status}", due={_day(i.due_date)}'
        for i in invoices
    )
    return f"[Tool Result] All invoices in the system:\n{rows}"


def not_found(kind: str, ident: str) -> str:
    return f"[Tool Result] {kind} {ident}: not found in the system."


class ContextAggregator:
    """Builds the grounding payload for a routed message."""

    def __init__(self, store: RecordStore):
        self.store = store

    async def gather(
        self,
        agent_type: AgentType,
        text: str,
        conversation_id: Optional[str] = None,
    ) -> str:
        """
        Gather record data for an agent.

        Args:
            agent_type: Agent the message was routed to
            text: User message (identifiers are extracted from it)
            conversation_id: Conversation to summarize for the support agent

        Returns:
            Grounding payload, or "" when nothing was retrieved
        """
        order_ids, invoice_ids = extract_ids(text)
        parts: List[str] = []

        # Explicit ids are looked up whichever agent handles the message
        parts.extend(await self._order_fragments(agent_type, order_ids))
        parts.extend(await self._invoice_fragments(agent_type, invoice_ids))

        if agent_type == AgentType.SUPPORT:
            parts.extend(await self._support_fragments(text, conversation_id))
        elif agent_type not in (AgentType.ORDER, AgentType.BILLING):
            raise ValueError(f"Unknown agent type: {agent_type}")

        logger.debug(
            f"Grounding for {agent_type.value}: {len(parts)} fragment(s), "
            f"orders={order_ids}, invoices={invoice_ids}"
        )
        if not parts:
            return ""
        return GROUNDING_HEADER + "\n".join(parts)

    async def _order_fragments(self, agent_type: AgentType, order_ids: List[str]) -> List[str]:
        if not order_ids:
            if agent_type == AgentType.ORDER:
                return [format_order_listing(await list_orders(self.store))]
            return []

        fragments = []
        for order_id in order_ids:
            order = await get_order_details(self.store, order_id)
            fragments.append(format_order(order) if order else not_found("Order", order_id))
        return fragments

    async def _invoice_fragments(self, agent_type: AgentType, invoice_ids: List[str]) -> List[str]:
        if not invoice_ids:
            if agent_type == AgentType.BILLING:
                return [format_invoice_listing(await list_invoices(self.store))]
            return []

        fragments = []
        for invoice_id in invoice_ids:
            invoice = await get_invoice_details(self.store, invoice_id)
            fragments.append(format_invoice(invoice) if invoice else not_found("Invoice", invoice_id))
        return fragments

    async def _support_fragments(self, text: str, conversation_id: Optional[str]) -> List[str]:
        fragments = [f'[Tool Result] FAQ lookup: "{answer_faq(text)}"']
        if conversation_id:
            conversation = await get_conversation_history(self.store, conversation_id)
            if conversation and conversation.messages:
                summary = "\n".join(f"{m.role}: {m.content}" for m in conversation.messages)
                fragments.append(f"[Tool Result] Conversation history:\n{summary}")
        return fragments
