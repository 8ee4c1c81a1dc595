"""
Intent Router - Routes messages to the order, billing or support agent
"""

from support_dispatch.agents.router.agent import IntentRouter
from support_dispatch.agents.router.state import Classification, RouterState, StageResult

__all__ = ["IntentRouter", "Classification", "RouterState", "StageResult"]
