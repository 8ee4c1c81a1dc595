"""
Model fallback - asks the language model for a one-word label when the
deterministic stages are inconclusive. Always returns a label.
"""

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import HumanMessage, SystemMessage
from loguru import logger

from support_dispatch.agents.prompts import ROUTER_SYSTEM_PROMPT
from support_dispatch.agents.registry import AgentType
from support_dispatch.agents.router.state import StageResult
from support_dispatch.llm.response_utils import extract_text_from_response
from support_dispatch.utils.errors import UpstreamError

STAGE = "model"


def parse_label(raw: str) -> AgentType:
    """Trim and lowercase model output; anything outside the three labels becomes SUPPORT."""
    agent_type = AgentType.parse(raw.strip().lower())
    if agent_type is None:
        logger.warning(f"Invalid classification '{raw[:50]}', defaulting to support")
        return AgentType.SUPPORT
    return agent_type


async def request_label(text: str, llm: BaseChatModel) -> str:
    """
    Ask the model for a raw label.

    Raises:
        UpstreamError: the backend call failed or returned no text
    """
    try:
        response = await llm.ainvoke([
            SystemMessage(content=ROUTER_SYSTEM_PROMPT),
            HumanMessage(content=text),
        ])
    except Exception as e:
        raise UpstreamError(f"Router model call failed: {e}") from e

    raw = extract_text_from_response(response)
    if not raw.strip():
        raise UpstreamError("Router model returned no text")
    return raw


async def classify_via_model(text: str, llm: BaseChatModel) -> StageResult:
    """
    Classify with the language model.

    Upstream failures never propagate: they are logged and resolve to SUPPORT.
    """
    try:
        raw = await request_label(text, llm)
    except UpstreamError as e:
        logger.warning(f"{e.message}, defaulting to support")
        return StageResult(STAGE, AgentType.SUPPORT)

    return StageResult(STAGE, parse_label(raw))
