"""
Custom error classes for the application

Each error carries the HTTP status it maps to and a message that is
safe to show to the caller.
"""

from typing import Optional


class DispatchError(Exception):
    """Base exception for dispatch errors"""

    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(DispatchError):
    """Request content failed validation"""

    status_code = 400


class NotFoundError(DispatchError):
    """Conversation or agent type does not exist"""

    status_code = 404


class UpstreamError(DispatchError):
    """Generative backend unreachable or returned something unusable"""

    status_code = 502


class RateLimitExceeded(DispatchError):
    """Caller exceeded the request budget for the current window"""

    status_code = 429

    def __init__(self, retry_after: int, message: str = "Too many requests. Please try again later."):
        super().__init__(message)
        self.retry_after = retry_after
