"""
Infrastructure layer - Database connections
"""

from support_dispatch.infra.database import Database

__all__ = ["Database"]
