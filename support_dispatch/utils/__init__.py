"""
Utilities - logging setup and error taxonomy
"""

from support_dispatch.utils.errors import (
    DispatchError,
    ValidationError,
    NotFoundError,
    UpstreamError,
    RateLimitExceeded,
)
from support_dispatch.utils.logger import setup_logger

__all__ = [
    "DispatchError",
    "ValidationError",
    "NotFoundError",
    "UpstreamError",
    "RateLimitExceeded",
    "setup_logger",
]
