"""
Agent registry - the closed set of domain agents and what each can do.
"""

import enum
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from support_dispatch.agents.prompts import (
    BILLING_AGENT_PROMPT,
    ORDER_AGENT_PROMPT,
    SUPPORT_AGENT_PROMPT,
)


class AgentType(str, enum.Enum):
    """Domain agents a message can be routed to. SUPPORT is the universal fallback."""
    ORDER = "order"
    BILLING = "billing"
    SUPPORT = "support"

    @classmethod
    def parse(cls, value: str) -> Optional["AgentType"]:
        """Exact label lookup; returns None for anything outside the three labels."""
        try:
            return cls(value)
        except ValueError:
            return None


@dataclass(frozen=True)
class Capability:
    """Tool name and description exposed by an agent"""
    tool: str
    description: str


@dataclass(frozen=True)
class AgentDefinition:
    """Static description of a domain agent"""
    type: AgentType
    name: str
    description: str
    system_prompt: str
    capabilities: Tuple[Capability, ...]


ORDER_AGENT = AgentDefinition(
    type=AgentType.ORDER,
    name="Order Agent",
    description="Handles order status, tracking, and delivery inquiries",
    system_prompt=ORDER_AGENT_PROMPT,
    capabilities=(
        Capability("getOrderDetails", "Look up an order by its ID and return full order details (status, tracking, etc.)"),
        Capability("checkDeliveryStatus", "Check the current delivery/shipping status of an order"),
        Capability("getTrackingInfo", "Get the tracking number/information for a shipped order"),
    ),
)

BILLING_AGENT = AgentDefinition(
    type=AgentType.BILLING,
    name="Billing Agent",
    description="Handles invoice lookups, payment status, and billing inquiries",
    system_prompt=BILLING_AGENT_PROMPT,
    capabilities=(
        Capability("getInvoiceDetails", "Look up an invoice by its ID and return full details (amount, status, etc.)"),
        Capability("checkPaymentStatus", "Check the payment status of a specific invoice"),
        Capability("checkRefundStatus", "Check whether an invoice has been refunded"),
        Capability("listAllInvoices", "List all invoices in the system"),
    ),
)

SUPPORT_AGENT = AgentDefinition(
    type=AgentType.SUPPORT,
    name="Support Agent",
    description="Handles general support inquiries, FAQs, and troubleshooting",
    system_prompt=SUPPORT_AGENT_PROMPT,
    capabilities=(
        Capability("searchFAQ", "Search the FAQ knowledge base for an answer to a customer question"),
        Capability("getConversationHistory", "Retrieve the full message history of a conversation for context"),
    ),
)

# Registry order is the listing order of the agents endpoint
AGENT_REGISTRY: Dict[AgentType, AgentDefinition] = {
    AgentType.ORDER: ORDER_AGENT,
    AgentType.BILLING: BILLING_AGENT,
    AgentType.SUPPORT: SUPPORT_AGENT,
}

_unregistered = set(AgentType) - set(AGENT_REGISTRY)
if _unregistered:
    raise RuntimeError(f"Agent types without a definition: {sorted(t.value for t in _unregistered)}")


def get_agent(agent_type: AgentType) -> AgentDefinition:
    return AGENT_REGISTRY[agent_type]


def find_agent(type_name: str) -> Optional[AgentDefinition]:
    """Look up an agent by its wire name, or None for unknown names."""
    agent_type = AgentType.parse(type_name)
    return AGENT_REGISTRY[agent_type] if agent_type else None


def list_agents() -> List[AgentDefinition]:
    return list(AGENT_REGISTRY.values())
