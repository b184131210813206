"""
Taskie Backend - Favorite SQLAlchemy Model
============================================

What:  A tasker bookmarking a task. One row per (tasker, task) pair.
"""

import uuid
from typing import Optional

from sqlalchemy import ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from taskie.database import Base
from taskie.models.base import TimestampMixin, UUIDPrimaryKeyMixin
from taskie.models.task import Task


class Favorite(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "favorites"

    tasker_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    task_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("tasks.id", ondelete="CASCADE"),
        nullable=False,
    )

    task: Mapped[Optional[Task]] = relationship(lazy="joined")

    __table_args__ = (
        UniqueConstraint("tasker_id", "task_id", name="uq_favorites_tasker_task"),
    )
