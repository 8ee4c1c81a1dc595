"""
LLM layer - Client factory and response utilities
"""

from support_dispatch.llm.client import create_llm
from support_dispatch.llm.response_utils import extract_text_from_response

__all__ = [
    "create_llm",
    "extract_text_from_response",
]
