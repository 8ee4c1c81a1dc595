"""
LLM response utilities.

Chat models return either a plain string or a list of typed content blocks
(reasoning models put their thinking in "reasoning" blocks). Both the router
label and streamed reply chunks go through extract_text_from_response.
"""

from typing import Any

from loguru import logger

_SKIPPED_BLOCK_TYPES = {"reasoning", "thinking"}


def _block_text(block: Any) -> str:
    if isinstance(block, str):
        return block
    if isinstance(block, dict) and block.get("type") not in _SKIPPED_BLOCK_TYPES:
        return block.get("text") or ""
    return ""


def extract_text_from_response(response: Any) -> str:
    """
    Text of a model response or streamed chunk.

    Args:
        response: AIMessage, AIMessageChunk, str, or list of content blocks

    Returns:
        Visible text only; reasoning blocks are dropped

    Example:
        response.content = [
            {'type': 'reasoning', 'text': '...'},
            {'type': 'text', 'text': 'billing'}
        ]
        extract_text_from_response(response) -> "billing"
    """
    content = getattr(response, "content", response)

    if not content:
        return ""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        text = "".join(_block_text(block) for block in content)
        if not text:
            logger.debug(f"No text blocks in structured response: {str(content)[:200]}")
        return text

    return str(content)
