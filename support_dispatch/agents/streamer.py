"""
Response Streamer - relays generated text to the caller.

The first chunk of every stream is the routing status line. After that the
model's chunks are written one at a time and the next chunk is not read until
the previous one has been consumed. The accumulated text is handed to a
completion callback exactly once, whether the stream finished, failed
upstream or was closed by the caller.
"""

import asyncio
from contextlib import aclosing
from typing import AsyncIterator, Callable, List, Optional, Sequence

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import BaseMessage, SystemMessage
from loguru import logger

from support_dispatch.agents.registry import AgentDefinition, AgentType
from support_dispatch.config.constants import STATUS_PREFIX
from support_dispatch.config.settings import settings
from support_dispatch.llm.client import create_llm
from support_dispatch.llm.response_utils import extract_text_from_response

# Called with (accumulated_text, completed)
CompletionCallback = Callable[[str, bool], None]


def status_line(agent_type: AgentType) -> str:
    """In-band routing notice written before any generated text."""
    return f"{STATUS_PREFIX}Routed to {agent_type.value} agent\n"


def build_prompt(agent: AgentDefinition, grounding: str, history: Sequence[BaseMessage]) -> List[BaseMessage]:
    """Agent instructions plus grounding as the system turn, followed by the conversation."""
    return [SystemMessage(content=agent.system_prompt + grounding), *history]


class ResponseStreamer:
    """Streams an agent's reply from the chat model."""

    def __init__(self, llm: Optional[BaseChatModel] = None):
        self.llm = llm if llm is not None else create_llm(
            temperature=settings.llm_temperature,
            max_completion_tokens=settings.max_output_tokens,
        )

    async def stream(
        self,
        agent: AgentDefinition,
        grounding: str,
        history: Sequence[BaseMessage],
        on_finish: Optional[CompletionCallback] = None,
    ) -> AsyncIterator[str]:
        """
        Stream the status line and then the model's reply.

        Args:
            agent: Agent the message was routed to
            grounding: Payload from the context aggregator ("" for none)
            history: Conversation turns, oldest first
            on_finish: Receives the accumulated text and whether generation completed
        """
        chunks: List[str] = []
        completed = False

        try:
            yield status_line(agent.type)
            async with aclosing(self.llm.astream(build_prompt(agent, grounding, history))) as upstream:
                async for chunk in upstream:
                    text = extract_text_from_response(chunk)
                    if not text:
                        continue
                    chunks.append(text)
                    yield text
            completed = True
        except (asyncio.CancelledError, GeneratorExit):
            logger.info(f"Stream for {agent.type.value} agent closed by caller after {len(chunks)} chunk(s)")
            raise
        except Exception:
            logger.exception(f"Generation failed mid-stream for {agent.type.value} agent")
        finally:
            if on_finish is not None:
                on_finish("".join(chunks), completed)
