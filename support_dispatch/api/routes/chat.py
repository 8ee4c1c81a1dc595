"""
Chat endpoints - message dispatch with a streamed reply, and conversation history
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import StreamingResponse
from loguru import logger

from support_dispatch.api.models import (
    ConversationListResponse,
    ConversationOut,
    ConversationResponse,
    ErrorResponse,
    MessageResponse,
    SendMessageRequest,
)
from support_dispatch.services.chat_service import ChatService
from support_dispatch.utils.errors import ValidationError


router = APIRouter(prefix="/chat", tags=["chat"])

CONVERSATION_NOT_FOUND = {404: {"model": ErrorResponse, "description": "Conversation not found"}}


def get_chat_service(request: Request) -> ChatService:
    return request.app.state.chat_service


@router.post("/messages", responses=CONVERSATION_NOT_FOUND)
async def send_message(body: SendMessageRequest, service: ChatService = Depends(get_chat_service)):
    """
    Send a user message and stream the routed agent's reply.

    **Response:** `text/plain` chunked body. The first line is
    `__STATUS__:Routed to <agent> agent`; everything after it is the reply.

    **Headers:** `X-Conversation-Id`, `X-Agent-Type`
    """
    content = (body.content or "").strip()
    if not content:
        raise ValidationError("Content is required")

    result = await service.process_message(content, body.conversation_id)
    logger.info(f"Streaming reply - conversation={result.conversation_id}, agent={result.agent_type.value}")

    return StreamingResponse(
        result.stream,
        media_type="text/plain; charset=utf-8",
        headers={
            "X-Conversation-Id": result.conversation_id,
            "X-Agent-Type": result.agent_type.value,
        },
    )


@router.get("/conversations", response_model=ConversationListResponse)
async def list_conversations(service: ChatService = Depends(get_chat_service)):
    """All conversations, newest first, with their messages."""
    conversations = await service.list_conversations()
    return ConversationListResponse(
        conversations=[ConversationOut.model_validate(c) for c in conversations]
    )


@router.get(
    "/conversations/{conversation_id}",
    response_model=ConversationResponse,
    responses=CONVERSATION_NOT_FOUND,
)
async def get_conversation(conversation_id: str, service: ChatService = Depends(get_chat_service)):
    conversation = await service.get_conversation(conversation_id)
    return ConversationResponse(conversation=ConversationOut.model_validate(conversation))


@router.delete(
    "/conversations/{conversation_id}",
    response_model=MessageResponse,
    responses=CONVERSATION_NOT_FOUND,
)
async def delete_conversation(conversation_id: str, service: ChatService = Depends(get_chat_service)):
    await service.delete_conversation(conversation_id)
    return MessageResponse(message="Conversation deleted")
