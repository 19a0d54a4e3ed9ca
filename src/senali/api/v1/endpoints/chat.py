"""
Chat Endpoints

Conversation with the Senali assistant. Each answered message costs
one credit.
"""

from datetime import datetime
from typing import Literal, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, ConfigDict, Field

from senali.api.dependencies import get_chat_service, get_current_user
from senali.domain.models.chat import ChatTurn
from senali.infrastructure.database.models.user_model import UserModel
from senali.services.chat import ChatService

router = APIRouter()


class ContextMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str = Field(..., max_length=8000)


class ChatRequest(BaseModel):
    """A parent's message with optional client-held context."""

    message: str = Field(..., min_length=1, max_length=4000, description="User message")
    context: Optional[list[ContextMessage]] = Field(
        default=None,
        description="Prior turns; stored history is used when omitted",
    )


class ChatResponse(BaseModel):
    """Senali's reply."""

    response: str
    model: str
    tokens: int
    processing_time_ms: int
    remaining_credits: int
    timestamp: datetime

    model_config = ConfigDict(
        protected_namespaces=(),
        json_schema_extra={
            "example": {
                "response": "It sounds like mornings are really hard right now...",
                "model": "gpt-4o",
                "tokens": 412,
                "processing_time_ms": 1830,
                "remaining_credits": 24,
                "timestamp": "2025-01-01T08:00:00Z",
            }
        },
    )


class ChatMessageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    role: str
    content: str
    tokens: Optional[int] = None
    created_at: datetime


class ClearHistoryResponse(BaseModel):
    deleted: int


@router.post(
    "",
    response_model=ChatResponse,
    summary="Send a message to Senali",
)
async def send_message(
    request: ChatRequest,
    user: UserModel = Depends(get_current_user),
    service: ChatService = Depends(get_chat_service),
) -> ChatResponse:
    """
    Answer a message.

    Fails with 402 when out of credits; no credit is charged when the
    model fails or answers empty.
    """
    context = None
    if request.context is not None:
        context = [ChatTurn(role=m.role, content=m.content) for m in request.context]

    reply = await service.send_message(user, request.message, context=context)

    return ChatResponse(
        response=reply.response,
        model=reply.model,
        tokens=reply.tokens,
        processing_time_ms=reply.processing_time_ms,
        remaining_credits=reply.remaining_credits,
        timestamp=reply.timestamp,
    )


@router.get(
    "/history",
    response_model=list[ChatMessageResponse],
    summary="Stored conversation, oldest first",
)
async def get_history(
    limit: int = Query(default=50, ge=1, le=200),
    user: UserModel = Depends(get_current_user),
    service: ChatService = Depends(get_chat_service),
) -> list[ChatMessageResponse]:
    messages = await service.history(user, limit=limit)
    return [ChatMessageResponse.model_validate(m) for m in messages]


@router.delete(
    "/history",
    response_model=ClearHistoryResponse,
    summary="Delete the stored conversation",
)
async def clear_history(
    user: UserModel = Depends(get_current_user),
    service: ChatService = Depends(get_chat_service),
) -> ClearHistoryResponse:
    deleted = await service.clear_history(user)
    return ClearHistoryResponse(deleted=deleted)
