"""
Taskie Backend - Message Route Handlers
=========================================

What:  Sending, the conversation list, one conversation, and read marking.
       Any authenticated user; no role gate.
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from taskie.auth import get_current_user
from taskie.database import get_db_session
from taskie.models.user import User
from taskie.schemas.common import (
    ErrorResponse,
    ListEnvelope,
    MessageDataEnvelope,
    MessageEnvelope,
)
from taskie.schemas.message import (
    ConversationDetail,
    ConversationSummary,
    MessageOut,
    SendMessageRequest,
)
from taskie.services.message_service import message_service

router = APIRouter(prefix="/api/messages", tags=["Messages"])


@router.post(
    "",
    status_code=201,
    response_model=MessageDataEnvelope[MessageOut],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Send a message about a task",
)
async def send_message(
    body: SendMessageRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> MessageDataEnvelope[MessageOut]:
    message = await message_service.send_message(db, user, body)
    return MessageDataEnvelope[MessageOut](message="Message sent successfully", data=message)


@router.get(
    "/conversations",
    response_model=ListEnvelope[List[ConversationSummary]],
    summary="Conversations, most recent first, with unread counts",
)
async def get_conversations(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> ListEnvelope[List[ConversationSummary]]:
    conversations = await message_service.get_conversations(db, user)
    return ListEnvelope[List[ConversationSummary]](count=len(conversations), data=conversations)


@router.get(
    "/{task_id}/{user_id}",
    response_model=ListEnvelope[ConversationDetail],
    summary="Messages with one user about one task; marks them read",
)
async def get_conversation(
    task_id: UUID,
    user_id: UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> ListEnvelope[ConversationDetail]:
    detail = await message_service.get_conversation(db, user, task_id, user_id)
    return ListEnvelope[ConversationDetail](count=len(detail.messages), data=detail)


@router.put(
    "/{message_id}/read",
    response_model=MessageEnvelope,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Mark a received message as read",
)
async def mark_as_read(
    message_id: UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> MessageEnvelope:
    await message_service.mark_as_read(db, user, message_id)
    return MessageEnvelope(message="Message marked as read")
