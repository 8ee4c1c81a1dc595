"""
Domain tool tests - FAQ lookup and record lookups
"""

from support_dispatch.config.constants import FAQ_ANSWERS, FAQ_FALLBACK
from support_dispatch.tools import (
    answer_faq,
    get_conversation_history,
    get_invoice_details,
    get_order_details,
    list_invoices,
    list_orders,
)


def test_faq_matches_keyword():
    assert answer_faq("What shipping options do you have?") == FAQ_ANSWERS["shipping"]


def test_faq_is_case_insensitive():
    assert answer_faq("HOW DO I CONTACT YOU") == FAQ_ANSWERS["contact"]


def test_faq_first_listed_key_wins():
    """'password' is listed before 'account', so it wins when both appear"""
    assert answer_faq("my account password is not working") == FAQ_ANSWERS["password"]
    assert answer_faq("refund my payment") == FAQ_ANSWERS["refund"]


def test_faq_fallback():
    assert answer_faq("Tell me a joke") == FAQ_FALLBACK


async def test_order_lookup_is_case_insensitive(store):
    order = await get_order_details(store, "ord-1001")
    assert order is not None
    assert order.customer_name == "Alice Johnson"


async def test_unknown_order(store):
    assert await get_order_details(store, "ORD-9999") is None


async def test_invoice_lookup(store):
    invoice = await get_invoice_details(store, "inv-2002")
    assert invoice.status == "pending"
    assert invoice.amount == 149.99
    assert await get_invoice_details(store, "INV-9999") is None


async def test_listings_cover_seeded_records(store):
    assert len(await list_orders(store)) == 7
    assert len(await list_invoices(store)) == 7


async def test_conversation_history(store):
    conversation = await store.create_conversation()
    await store.append_message(conversation.id, "user", "first")
    await store.append_message(conversation.id, "assistant", "second", "support")

    history = await get_conversation_history(store, conversation.id)

    assert [m.content for m in history.messages] == ["first", "second"]
    assert await get_conversation_history(store, "missing") is None
