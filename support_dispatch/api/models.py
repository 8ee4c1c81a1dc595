"""
Pydantic models for the public API contract

Field names are camelCase on the wire.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys and built from ORM objects"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class SendMessageRequest(CamelModel):
    """Body of POST /api/chat/messages. Content is validated by the route so it can be trimmed first."""
    conversation_id: Optional[str] = Field(None, description="Existing conversation to continue")
    content: Optional[str] = Field(None, description="The user's message")

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"content": "Where is my order ORD-1001?"},
                {"conversationId": "3f0c6c1e-0000-4000-8000-000000000000", "content": "And the tracking?"},
            ]
        },
    )


class MessageOut(CamelModel):
    id: int
    conversation_id: str
    role: str
    content: str
    agent_type: Optional[str] = None
    created_at: datetime


class ConversationOut(CamelModel):
    id: str
    title: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    messages: List[MessageOut] = []


class ConversationListResponse(CamelModel):
    conversations: List[ConversationOut]


class ConversationResponse(CamelModel):
    conversation: ConversationOut


class MessageResponse(CamelModel):
    message: str


class AgentSummary(CamelModel):
    type: str
    name: str
    description: str


class AgentListResponse(CamelModel):
    agents: List[AgentSummary]


class CapabilityOut(CamelModel):
    tool: str
    description: str


class AgentCapabilitiesResponse(AgentSummary):
    capabilities: List[CapabilityOut]


class HealthResponse(CamelModel):
    """Health check response"""
    status: str = Field(..., description="ok or degraded")
    uptime: float = Field(..., description="Seconds since the application started")
    timestamp: str
    database: str = Field(..., description="connected or disconnected")
    error: Optional[str] = None


class ErrorResponse(CamelModel):
    error: str
