"""
Taskie Backend - Message Schemas
==================================

What:  Message projections, the conversation summary produced by the
       aggregator and the conversation detail payload.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from taskie.schemas.common import CamelModel
from taskie.schemas.task import TaskOut, TaskRef
from taskie.schemas.user import UserContact, UserSummary


class SendMessageRequest(CamelModel):
    task_id: Optional[uuid.UUID] = None
    receiver_id: Optional[uuid.UUID] = None
    content: Optional[str] = None


class MessageOut(CamelModel):
    id: uuid.UUID
    task_id: Optional[uuid.UUID] = None
    task: Optional[TaskRef] = None
    sender: UserContact
    receiver: UserContact
    content: str
    is_read: bool
    created_at: datetime
    updated_at: datetime


class ConversationSummary(CamelModel):
    """One (task, counterpart) pair with its latest message and unread count."""
    task_id: uuid.UUID
    task_title: str
    task_status: str
    other_user: UserSummary
    last_message: str
    last_message_time: datetime
    unread_count: int = 0


class ConversationDetail(CamelModel):
    messages: List[MessageOut]
    # None when the task has been deleted
    task: Optional[TaskOut] = None
