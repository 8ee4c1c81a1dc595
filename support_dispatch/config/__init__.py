"""
Configuration layer - Settings and constants
"""

from support_dispatch.config.settings import settings, Settings, PROJECT_ROOT
from support_dispatch.config.constants import (
    STATUS_PREFIX,
    GROUNDING_HEADER,
    ORDER_ID_PATTERN,
    INVOICE_ID_PATTERN,
    FAQ_ANSWERS,
    FAQ_FALLBACK,
)

__all__ = [
    "settings",
    "Settings",
    "PROJECT_ROOT",
    "STATUS_PREFIX",
    "GROUNDING_HEADER",
    "ORDER_ID_PATTERN",
    "INVOICE_ID_PATTERN",
    "FAQ_ANSWERS",
    "FAQ_FALLBACK",
]
