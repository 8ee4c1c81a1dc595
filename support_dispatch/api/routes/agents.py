"""
Agent endpoints - read-only projections of the agent registry
"""

from fastapi import APIRouter

from support_dispatch.agents.registry import find_agent, list_agents
from support_dispatch.api.models import (
    AgentCapabilitiesResponse,
    AgentListResponse,
    AgentSummary,
    CapabilityOut,
    ErrorResponse,
)
from support_dispatch.utils.errors import NotFoundError


router = APIRouter(prefix="/agents", tags=["agents"])


@router.get("", response_model=AgentListResponse)
async def get_agents():
    """Available agents in registry order."""
    return AgentListResponse(agents=[
        AgentSummary(type=a.type.value, name=a.name, description=a.description)
        for a in list_agents()
    ])


@router.get(
    "/{agent_type}/capabilities",
    response_model=AgentCapabilitiesResponse,
    responses={404: {"model": ErrorResponse, "description": "Unknown agent type"}},
)
async def get_agent_capabilities(agent_type: str):
    agent = find_agent(agent_type)
    if agent is None:
        raise NotFoundError(f"Agent type '{agent_type}' not found")

    return AgentCapabilitiesResponse(
        type=agent.type.value,
        name=agent.name,
        description=agent.description,
        capabilities=[CapabilityOut(tool=c.tool, description=c.description) for c in agent.capabilities],
    )
