"""
Router workflow state and stage results
"""

from dataclasses import dataclass
from typing import Optional, TypedDict

from support_dispatch.agents.registry import AgentType


class RouterState(TypedDict):
    """State for the classification workflow"""
    question: str
    conversation_id: Optional[str]
    agent_type: Optional[AgentType]
    classified_by: Optional[str]  # Stage that produced agent_type


@dataclass(frozen=True)
class StageResult:
    """Outcome of one classification stage: a label, or unresolved."""
    stage: str
    agent_type: Optional[AgentType] = None

    @property
    def resolved(self) -> bool:
        return self.agent_type is not None

    @classmethod
    def unresolved(cls, stage: str) -> "StageResult":
        return cls(stage=stage)


@dataclass(frozen=True)
class Classification:
    """Final routing decision for a message"""
    agent_type: AgentType
    stage: str
