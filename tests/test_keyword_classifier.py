"""
Keyword classifier tests

The first, I/O-free stage of intent routing.
"""

import pytest

from support_dispatch.agents.registry import AgentType
from support_dispatch.agents.router.keywords import classify_by_keywords


@pytest.mark.parametrize("text, expected", [
    ("How can I track my package?", AgentType.SUPPORT),
    ("Where is my tracking number?", AgentType.ORDER),
    ("Cancel my subscription", AgentType.BILLING),
    ("I need help troubleshooting my account", AgentType.SUPPORT),
    ("I forgot my password", AgentType.SUPPORT),
    ("Why was there an extra charge on my card?", AgentType.BILLING),
    ("Show me my invoices", AgentType.BILLING),
    ("When is the delivery?", AgentType.ORDER),
    ("What is your return policy?", AgentType.SUPPORT),
])
def test_vocabulary_routing(text, expected):
    """Test each vocabulary routes to its agent"""
    result = classify_by_keywords(text)
    assert result.agent_type == expected, f"{text!r} should route to {expected.value}"
    assert result.stage == "keywords"


def test_invoice_id_beats_order_vocabulary():
    """An explicit invoice id wins even when the text talks about an order"""
    assert classify_by_keywords("Check order INV-2001").agent_type == AgentType.BILLING


def test_order_id_beats_billing_vocabulary():
    assert classify_by_keywords("Payment for ORD-1001").agent_type == AgentType.ORDER


def test_invoice_id_checked_before_order_id():
    assert classify_by_keywords("ORD-1001 was billed on INV-2001").agent_type == AgentType.BILLING


def test_ids_are_case_insensitive():
    assert classify_by_keywords("status of ord-1003 please").agent_type == AgentType.ORDER
    assert classify_by_keywords("what about inv-2005").agent_type == AgentType.BILLING


def test_matching_uses_word_boundaries():
    """'passwordless' must not trigger the 'password' support keyword"""
    result = classify_by_keywords("Do you support passwordless login")
    assert not result.resolved


def test_unmatched_text_is_unresolved():
    result = classify_by_keywords("Hello there")
    assert not result.resolved
    assert result.agent_type is None
    assert result.stage == "keywords"
