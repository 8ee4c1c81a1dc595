"""
Intent Router - LangGraph classification workflow

Routes a message to the order, billing or support agent.
"""

from typing import Optional

from langchain_core.language_models import BaseChatModel
from langgraph.graph import StateGraph, END
from loguru import logger

from support_dispatch.agents.registry import AgentType
from support_dispatch.agents.router.carryover import is_carryover_candidate, resolve_carryover
from support_dispatch.agents.router.fallback import classify_via_model
from support_dispatch.agents.router.keywords import classify_by_keywords
from support_dispatch.agents.router.state import Classification, RouterState, StageResult
from support_dispatch.config.settings import settings
from support_dispatch.llm.client import create_llm
from support_dispatch.memory.record_store import RecordStore


def _stage_update(result: StageResult) -> dict:
    if not result.resolved:
        return {}
    return {"agent_type": result.agent_type, "classified_by": result.stage}


class IntentRouter:
    """
    Layered intent classifier.

    Workflow: START → keywords → [END | carryover | model]
              carryover → [END | model]
              model → END
    """

    def __init__(
        self,
        store: RecordStore,
        llm: Optional[BaseChatModel] = None,
        carryover_max_length: Optional[int] = None,
    ):
        self.store = store
        self.llm = llm if llm is not None else create_llm(
            temperature=0,
            max_completion_tokens=settings.router_max_output_tokens,
        )
        self.carryover_max_length = (
            carryover_max_length if carryover_max_length is not None else settings.carryover_max_length
        )
        self.workflow = self._build_workflow()
        logger.info("Initialized IntentRouter")

    def _build_workflow(self):
        """Build the LangGraph workflow."""
        workflow = StateGraph(RouterState)

        workflow.add_node("keywords", self._keywords_node)
        workflow.add_node("carryover", self._carryover_node)
        workflow.add_node("model", self._model_node)

        workflow.set_entry_point("keywords")
        workflow.add_conditional_edges(
            "keywords",
            self._route_after_keywords,
            {"end": END, "carryover": "carryover", "model": "model"},
        )
        workflow.add_conditional_edges(
            "carryover",
            self._route_after_carryover,
            {"end": END, "model": "model"},
        )
        workflow.add_edge("model", END)

        return workflow.compile()

    async def _keywords_node(self, state: RouterState) -> dict:
        return _stage_update(classify_by_keywords(state["question"]))

    async def _carryover_node(self, state: RouterState) -> dict:
        result = await resolve_carryover(state["question"], state["conversation_id"], self.store)
        return _stage_update(result)

    async def _model_node(self, state: RouterState) -> dict:
        return _stage_update(await classify_via_model(state["question"], self.llm))

    def _route_after_keywords(self, state: RouterState) -> str:
        if state.get("agent_type"):
            return "end"
        if is_carryover_candidate(state["question"], state.get("conversation_id"), self.carryover_max_length):
            return "carryover"
        return "model"

    def _route_after_carryover(self, state: RouterState) -> str:
        return "end" if state.get("agent_type") else "model"

    async def classify(self, question: str, conversation_id: Optional[str] = None) -> Classification:
        """
        Classify a message.

        Args:
            question: User message
            conversation_id: Conversation the message belongs to (enables carryover)

        Returns:
            Classification with the agent and the stage that decided
        """
        initial_state: RouterState = {
            "question": question,
            "conversation_id": conversation_id,
            "agent_type": None,
            "classified_by": None,
        }
        final_state = await self.workflow.ainvoke(initial_state)

        agent_type = final_state.get("agent_type") or AgentType.SUPPORT
        stage = final_state.get("classified_by") or "default"
        logger.info(f"Message classified as: {AgentType(agent_type).value} (stage={stage})")
        return Classification(agent_type=AgentType(agent_type), stage=stage)
