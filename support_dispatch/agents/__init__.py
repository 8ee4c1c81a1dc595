"""
Agents - registry, intent routing, grounding and response streaming
"""

from support_dispatch.agents.registry import (
    AgentType,
    AgentDefinition,
    Capability,
    AGENT_REGISTRY,
    get_agent,
    find_agent,
    list_agents,
)
from support_dispatch.agents.router import IntentRouter, Classification
from support_dispatch.agents.grounding import ContextAggregator, extract_ids
from support_dispatch.agents.streamer import ResponseStreamer, status_line

__all__ = [
    "AgentType",
    "AgentDefinition",
    "Capability",
    "AGENT_REGISTRY",
    "get_agent",
    "find_agent",
    "list_agents",
    "IntentRouter",
    "Classification",
    "ContextAggregator",
    "extract_ids",
    "ResponseStreamer",
    "status_line",
]
