"""
Context aggregator tests - identifier extraction and grounding fragments
"""

import pytest

from support_dispatch.agents.grounding import ContextAggregator, extract_ids
from support_dispatch.agents.registry import AgentType
from support_dispatch.config.constants import FAQ_ANSWERS, GROUNDING_HEADER


def test_extract_ids_uppercases_and_dedupes():
    order_ids, invoice_ids = extract_ids("ord-1001, ORD-1003 and again ORD-1001; inv-2002")
    assert order_ids == ["ORD-1001", "ORD-1003"]
    assert invoice_ids == ["INV-2002"]


def test_extract_ids_none():
    assert extract_ids("nothing here") == ([], [])


async def test_order_detail_fragment(store):
    payload = await ContextAggregator(store).gather(AgentType.ORDER, "Where is ORD-1001?")

    assert payload.startswith(GROUNDING_HEADER)
    assert (
        '[Tool Result] Order ORD-1001: customer="Alice Johnson", email="alice@example.com", '
        'status="shipped", tracking="TRK-ABC123", '
        "items=[Wireless Headphones x1 ($79.99), USB-C Cable x2 ($9.99)], "
        "total=$99.97, ordered=2026-01-15, delivery=2026-02-14"
    ) in payload
    assert "Available orders" not in payload


async def test_order_without_tracking_or_delivery(store):
    payload = await ContextAggregator(store).gather(AgentType.ORDER, "status of ORD-1002")
    assert 'tracking="N/A"' in payload
    assert "delivery=TBD" in payload


async def test_unknown_order_fragment(store):
    payload = await ContextAggregator(store).gather(AgentType.ORDER, "Where is ORD-9999?")
    assert "[Tool Result] Order ORD-9999: not found in the system." in payload


async def test_duplicate_ids_produce_one_fragment(store):
    payload = await ContextAggregator(store).gather(AgentType.ORDER, "ORD-1001 ord-1001 ORD-1001")
    assert payload.count("Order ORD-1001:") == 1


async def test_order_agent_without_id_lists_orders(store):
    payload = await ContextAggregator(store).gather(AgentType.ORDER, "where are my things?")

    assert "[Tool Result] No specific order ID was mentioned. Available orders:" in payload
    assert '- ORD-1003: customer="Carol Davis", status="delivered", total=$77.50' in payload
    assert payload.count("\n- ORD-") == 7


async def test_billing_agent_without_id_lists_invoices(store):
    payload = await ContextAggregator(store).gather(AgentType.BILLING, "show my invoices")

    assert "[Tool Result] All invoices in the system:" in payload
    assert '- INV-2002: customer="Bob Smith", amount=$149.99, status="pending", due=2026-03-08' in payload


async def test_invoice_detail_fragment(store):
    payload = await ContextAggregator(store).gather(AgentType.BILLING, "details for inv-2005")

    assert (
        '[Tool Result] Invoice INV-2005: customer="Eva Martinez", amount=$299.99, status="refunded", '
        'description="Refund for cancelled order ORD-1005 - Smart Watch", created=2026-02-05, due=2026-03-05'
    ) in payload
    assert "All invoices" not in payload


async def test_ids_are_grounded_for_any_agent(store):
    """Explicit ids are looked up even when another agent handles the message"""
    payload = await ContextAggregator(store).gather(AgentType.BILLING, "INV-2001 covers ORD-1001")
    assert "Order ORD-1001: customer=" in payload
    assert "Invoice INV-2001: customer=" in payload
    assert payload.index("Order ORD-1001") < payload.index("Invoice INV-2001")


async def test_unknown_invoice_fragment(store):
    payload = await ContextAggregator(store).gather(AgentType.BILLING, "INV-0042?")
    assert "[Tool Result] Invoice INV-0042: not found in the system." in payload


async def test_support_gets_faq(store):
    payload = await ContextAggregator(store).gather(AgentType.SUPPORT, "How do I reset my password?")
    assert f'[Tool Result] FAQ lookup: "{FAQ_ANSWERS["password"]}"' in payload
    assert "Conversation history" not in payload


async def test_support_gets_conversation_history(store):
    conversation = await store.create_conversation()
    await store.append_message(conversation.id, "user", "Hi there")
    await store.append_message(conversation.id, "assistant", "Hello! How can I help?", "support")

    payload = await ContextAggregator(store).gather(AgentType.SUPPORT, "thanks", conversation.id)

    assert "[Tool Result] Conversation history:\nuser: Hi there\nassistant: Hello! How can I help?" in payload


async def test_support_skips_empty_history(store):
    conversation = await store.create_conversation()
    payload = await ContextAggregator(store).gather(AgentType.SUPPORT, "thanks", conversation.id)
    assert "Conversation history" not in payload


async def test_fragments_are_newline_joined(store):
    payload = await ContextAggregator(store).gather(AgentType.ORDER, "ORD-1001 and ORD-9999")
    body = payload[len(GROUNDING_HEADER):]
    assert body.split("\n")[1] == "[Tool Result] Order ORD-9999: not found in the system."


async def test_unknown_agent_type_rejected(store):
    with pytest.raises(ValueError):
        await ContextAggregator(store).gather("refunds", "hello")
