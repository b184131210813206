"""
Taskie Backend - Message SQLAlchemy Model
===========================================

What:  ORM model for the `messages` table, one chat line about a task.

A message is written once by its sender; afterwards only `is_read` changes,
and only the receiver changes it. `task_id` is a plain column with no foreign
key: deleting the task leaves it pointing at nothing, `task` loads as None,
conversation listings skip the row and the detail view still returns it.
"""

import uuid
from typing import Optional

from sqlalchemy import Boolean, ForeignKey, Index, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from taskie.database import Base
from taskie.models.base import TimestampMixin, UUIDPrimaryKeyMixin
from taskie.models.task import Task
from taskie.models.user import User


class Message(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "messages"

    task_id: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid, nullable=True)
    sender_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    receiver_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    is_read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    task: Mapped[Optional[Task]] = relationship(
        primaryjoin="foreign(Message.task_id) == Task.id",
        lazy="joined",
    )
    sender: Mapped[User] = relationship(foreign_keys=[sender_id], lazy="joined")
    receiver: Mapped[User] = relationship(foreign_keys=[receiver_id], lazy="joined")

    __table_args__ = (
        Index("idx_messages_task_sender_receiver", "task_id", "sender_id", "receiver_id"),
    )

    def __repr__(self) -> str:
        return f"<Message(id={self.id}, task_id={self.task_id}, is_read={self.is_read})>"
