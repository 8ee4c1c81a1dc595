"""
Agent registry tests
"""

from support_dispatch.agents.registry import (
    AGENT_REGISTRY,
    AgentType,
    find_agent,
    get_agent,
    list_agents,
)


def test_every_agent_type_is_registered():
    assert set(AGENT_REGISTRY) == set(AgentType)


def test_listing_order():
    assert [a.type for a in list_agents()] == [AgentType.ORDER, AgentType.BILLING, AgentType.SUPPORT]


def test_find_agent_by_wire_name():
    assert find_agent("billing") is get_agent(AgentType.BILLING)
    assert find_agent("refunds") is None
    assert find_agent("Billing") is None


def test_capabilities():
    tools = {agent.type: [c.tool for c in agent.capabilities] for agent in list_agents()}
    assert tools[AgentType.ORDER] == ["getOrderDetails", "checkDeliveryStatus", "getTrackingInfo"]
    assert "checkRefundStatus" in tools[AgentType.BILLING]
    assert tools[AgentType.SUPPORT] == ["searchFAQ", "getConversationHistory"]


def test_prompts_are_read_only():
    """Every agent is told it cannot modify records or invent data"""
    for agent in list_agents():
        assert "READ-ONLY" in agent.system_prompt
        assert "Do NOT make up" in agent.system_prompt
