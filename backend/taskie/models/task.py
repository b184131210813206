"""
Taskie Backend - Task SQLAlchemy Model
========================================

What:  ORM model for the `tasks` table, a job posted by a requester.

Lifecycle:
    1. Created by a requester with >= 2 images (status = 'pending')
    2. Owner may edit description/price while pending
    3. Owner marks it completed (one way, never back to pending)
    4. Owner may delete it; messages keep pointing at nothing and drop out
       of conversation lists, uploaded images stay on disk

Query Patterns:
    - Requester's own tasks: WHERE requester_id = :id [AND status = :s]
    - Search: WHERE status = 'pending' AND ... ORDER BY created_at DESC
"""

import uuid
from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy import JSON, DateTime, Float, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from taskie.database import Base
from taskie.models.base import TimestampMixin, UUIDPrimaryKeyMixin
from taskie.models.user import User

STATUS_PENDING = "pending"
STATUS_COMPLETED = "completed"
TASK_STATUSES = (STATUS_PENDING, STATUS_COMPLETED)


class Task(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "tasks"

    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)

    # Category name; the matching JobCategory decides posting_fee at creation
    category: Mapped[str] = mapped_column(String(100), nullable=False, index=True)

    # Relative /uploads/tasks/... paths, at least two
    images: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)

    location_province: Mapped[str] = mapped_column(Text, nullable=False)
    location_ward: Mapped[str] = mapped_column(Text, nullable=False)

    price: Mapped[float] = mapped_column(Float, nullable=False)
    # Copied from the category when the task is created; later fee changes
    # do not touch existing tasks
    posting_fee: Mapped[float] = mapped_column(Float, nullable=False)

    deadline: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    # Accepted without verification
    payment_proof_url: Mapped[Optional[str]] = mapped_column(String(255), nullable=True, default=None)

    status: Mapped[str] = mapped_column(String(20), nullable=False, default=STATUS_PENDING)

    requester_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    requester: Mapped[User] = relationship(lazy="joined")

    __table_args__ = (
        Index("idx_tasks_requester_status", "requester_id", "status"),
        Index("idx_tasks_location", "location_province", "location_ward"),
        Index("idx_tasks_price", "price"),
    )

    @property
    def location(self) -> Dict[str, str]:
        return {"province": self.location_province, "ward": self.location_ward}

    def __repr__(self) -> str:
        return f"<Task(id={self.id}, status='{self.status}')>"
