"""
HTTP surface - FastAPI application factory
"""

from support_dispatch.api.app import create_app

__all__ = ["create_app"]
