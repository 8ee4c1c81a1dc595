"""
API routes
"""

from support_dispatch.api.routes import agents, chat, health

__all__ = ["agents", "chat", "health"]
