"""
Taskie Backend - Message Service
==================================

What:  Sending messages, the conversation list, the conversation detail and
       the per-message read flag.
Who:   Called by the messages router. Any authenticated user may use it.

Conversation Aggregation (get_conversations):
    A conversation is a (task, counterpart) pair with at least one message
    involving the user on a task that still exists.

    Pass 1  SELECT messages WHERE sender = U OR receiver = U
            ORDER BY created_at DESC         (task, sender, receiver joined)
            Walking newest-first, the first message seen for a key is the
            latest one, so it alone seeds the summary.
    Pass 2  per conversation:
            SELECT COUNT(*) WHERE task = T AND sender = C AND receiver = U
                              AND is_read = false

    The two passes are separate reads. A message arriving between them can
    be reflected in the unread count but not in last_message (or the other
    way round); the count is an advisory badge, so that window is accepted.
"""

import logging
import uuid
from typing import Dict, List, Optional, Tuple

from sqlalchemy import and_, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from taskie.exceptions import ForbiddenError, NotFoundError, ValidationError
from taskie.models.message import Message
from taskie.models.task import Task
from taskie.models.user import User
from taskie.schemas.message import (
    ConversationDetail,
    ConversationSummary,
    MessageOut,
    SendMessageRequest,
)
from taskie.schemas.task import TaskOut
from taskie.schemas.user import UserSummary

logger = logging.getLogger(__name__)


class MessageService:
    """Messaging between a requester and taskers, scoped per task."""

    async def send_message(
        self, db: AsyncSession, sender: User, data: SendMessageRequest
    ) -> MessageOut:
        """
        Raises:
            ValidationError: taskId, receiverId or content missing/blank
            NotFoundError: task or receiver does not exist
        """
        content = (data.content or "").strip()
        if data.task_id is None or data.receiver_id is None or not content:
            raise ValidationError("Please provide taskId, receiverId, and content")

        task = await db.get(Task, data.task_id)
        if task is None:
            raise NotFoundError(resource="task", resource_id=str(data.task_id))

        receiver = await db.get(User, data.receiver_id)
        if receiver is None:
            raise NotFoundError(resource="receiver", resource_id=str(data.receiver_id))

        message = Message(
            task_id=task.id,
            sender_id=sender.id,
            receiver_id=receiver.id,
            content=content,
            is_read=False,
        )
        message.task = task
        message.sender = sender
        message.receiver = receiver
        db.add(message)
        await db.flush()

        logger.info("Message %s sent on task %s", message.id, task.id)
        return MessageOut.model_validate(message)

    async def get_conversations(self, db: AsyncSession, user: User) -> List[ConversationSummary]:
        # Pass 1: newest first, both directions
        result = await db.execute(
            select(Message)
            .where(or_(Message.sender_id == user.id, Message.receiver_id == user.id))
            .order_by(Message.created_at.desc())
            .execution_options(populate_existing=True)
        )
        messages = result.scalars().all()

        conversations: Dict[Tuple[uuid.UUID, uuid.UUID], ConversationSummary] = {}
        for msg in messages:
            if msg.task is None:
                continue

            counterpart = msg.receiver if msg.sender_id == user.id else msg.sender
            key = (msg.task.id, counterpart.id)
            if key in conversations:
                continue

            conversations[key] = ConversationSummary(
                task_id=msg.task.id,
                task_title=msg.task.title,
                task_status=msg.task.status,
                other_user=UserSummary.model_validate(counterpart),
                last_message=msg.content,
                last_message_time=msg.created_at,
            )

        # Pass 2: unread count per conversation, only messages addressed to the user
        for (task_id, counterpart_id), conversation in conversations.items():
            count_result = await db.execute(
                select(func.count(Message.id)).where(
                    Message.task_id == task_id,
                    Message.sender_id == counterpart_id,
                    Message.receiver_id == user.id,
                    Message.is_read.is_(False),
                )
            )
            conversation.unread_count = count_result.scalar() or 0

        return list(conversations.values())

    async def get_conversation(
        self,
        db: AsyncSession,
        user: User,
        task_id: uuid.UUID,
        other_user_id: uuid.UUID,
    ) -> ConversationDetail:
        """
        Messages on `task_id` between `user` and `other_user_id`, oldest first,
        then every unread one addressed to `user` is marked read.

        Only messages where `user` is a participant are selected, so a caller
        can never read or mark another pair's messages. The returned messages
        show the read flags as they were before this call.
        """
        result = await db.execute(
            select(Message)
            .where(
                Message.task_id == task_id,
                or_(
                    and_(Message.sender_id == user.id, Message.receiver_id == other_user_id),
                    and_(Message.sender_id == other_user_id, Message.receiver_id == user.id),
                ),
            )
            .order_by(Message.created_at.asc())
            .execution_options(populate_existing=True)
        )
        messages = [MessageOut.model_validate(m) for m in result.scalars().all()]

        marked = await db.execute(
            update(Message)
            .where(
                Message.task_id == task_id,
                Message.sender_id == other_user_id,
                Message.receiver_id == user.id,
                Message.is_read.is_(False),
            )
            .values(is_read=True)
            .execution_options(synchronize_session=False)
        )
        if marked.rowcount:
            logger.info("Marked %d messages read for user %s", marked.rowcount, user.id)

        task: Optional[Task] = await db.get(Task, task_id)
        return ConversationDetail(
            messages=messages,
            task=TaskOut.model_validate(task) if task is not None else None,
        )

    async def mark_as_read(self, db: AsyncSession, user: User, message_id: uuid.UUID) -> None:
        message = await db.get(Message, message_id)
        if message is None:
            raise NotFoundError(resource="message", resource_id=str(message_id))
        if message.receiver_id != user.id:
            raise ForbiddenError("Not authorized to mark this message as read")

        message.is_read = True
        await db.flush()


# ── Singleton Instance ────────────────────────────────────────────────────
message_service = MessageService()
