"""
Keyword classifier - deterministic first stage of intent routing.

Checks run in a fixed order and the first match wins:
explicit invoice id, explicit order id, support phrasing,
billing vocabulary, order vocabulary.
"""

import re
from typing import List, Tuple

from support_dispatch.agents.registry import AgentType
from support_dispatch.agents.router.state import StageResult
from support_dispatch.config.constants import INVOICE_ID_PATTERN, ORDER_ID_PATTERN

STAGE = "keywords"

SUPPORT_PATTERNS = [
    re.compile(r"\bpassword\b"),
    re.compile(r"\breset\b"),
    re.compile(r"\btroubleshoot"),
    re.compile(r"\bfaq\b"),
    re.compile(r"\baccount\s*(issue|problem|help|lock|access)"),
    re.compile(r"\bhow\s+(do|can|to)\b"),
    re.compile(r"\bhelp\s+(with|me)\b"),
    re.compile(r"\breturn\s?policy\b"),
    re.compile(r"\bhow\s+long\b"),
]

BILLING_PATTERNS = [
    re.compile(r"\binvoices?\b"),
    re.compile(r"\bpayment\b"),
    re.compile(r"\bcharge\b"),
    re.compile(r"\bbilling\b"),
    re.compile(r"\bsubscription\b"),
]

ORDER_PATTERNS = [
    re.compile(r"\borders?\b"),
    re.compile(r"\btracking\b"),
    re.compile(r"\bshipment\b"),
    re.compile(r"\bdelivery\b"),
    re.compile(r"\bshipping\b"),
]

# Vocabulary stages, in priority order
KEYWORD_STAGES: List[Tuple[AgentType, List[re.Pattern]]] = [
    (AgentType.SUPPORT, SUPPORT_PATTERNS),
    (AgentType.BILLING, BILLING_PATTERNS),
    (AgentType.ORDER, ORDER_PATTERNS),
]


def classify_by_keywords(text: str) -> StageResult:
    """
    Classify a message without any I/O.

    Args:
        text: Raw user message

    Returns:
        StageResult with the matched agent, or unresolved
    """
    # Explicit ids dominate every other signal; invoices before orders
    if INVOICE_ID_PATTERN.search(text):
        return StageResult(STAGE, AgentType.BILLING)
    if ORDER_ID_PATTERN.search(text):
        return StageResult(STAGE, AgentType.ORDER)

    lower = text.lower()
    for agent_type, patterns in KEYWORD_STAGES:
        if any(p.search(lower) for p in patterns):
            return StageResult(STAGE, agent_type)

    return StageResult.unresolved(STAGE)
