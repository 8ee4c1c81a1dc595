"""
Model fallback tests - label parsing and upstream failure handling
"""

from unittest.mock import AsyncMock

import pytest
from langchain_core.language_models.fake_chat_models import FakeListChatModel

from support_dispatch.agents.registry import AgentType
from support_dispatch.agents.router.fallback import classify_via_model, parse_label, request_label
from support_dispatch.utils.errors import UpstreamError


def test_parse_label_trims_and_lowercases():
    assert parse_label("  Billing\n") == AgentType.BILLING
    assert parse_label("ORDER") == AgentType.ORDER


def test_parse_label_defaults_to_support():
    """Anything outside the three labels becomes support"""
    assert parse_label("refunds") == AgentType.SUPPORT
    assert parse_label("I think billing") == AgentType.SUPPORT
    assert parse_label("") == AgentType.SUPPORT


async def test_model_label_is_used():
    llm = FakeListChatModel(responses=["order"])
    result = await classify_via_model("hmm, what now", llm)
    assert result.agent_type == AgentType.ORDER
    assert result.stage == "model"


async def test_upstream_failure_resolves_to_support():
    """A failing backend never propagates; the fallback label is support"""
    llm = AsyncMock()
    llm.ainvoke.side_effect = ConnectionError("backend unreachable")

    result = await classify_via_model("hmm, what now", llm)

    assert result.agent_type == AgentType.SUPPORT
    llm.ainvoke.assert_awaited_once()


async def test_request_label_wraps_backend_failure():
    llm = AsyncMock()
    llm.ainvoke.side_effect = TimeoutError("read timed out")

    with pytest.raises(UpstreamError) as exc_info:
        await request_label("hmm, what now", llm)

    assert exc_info.value.status_code == 502
    assert isinstance(exc_info.value.__cause__, TimeoutError)


async def test_empty_model_output_resolves_to_support():
    """Blank output is treated as a malformed backend response"""
    llm = FakeListChatModel(responses=["   "])

    with pytest.raises(UpstreamError):
        await request_label("hmm, what now", llm)

    result = await classify_via_model("hmm, what now", FakeListChatModel(responses=["   "]))
    assert result.agent_type == AgentType.SUPPORT
