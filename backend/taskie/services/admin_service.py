"""
Taskie Backend - Admin Service
================================

What:  Admin-only listings, aggregate statistics and the data reset.
Who:   Called by the admin router behind the admin role gate.

Reset deletes table by table in dependency order. Each DELETE is its own
statement; there is no attempt to undo earlier tables if a later one fails.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import List

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from taskie.models.favorite import Favorite
from taskie.models.message import Message
from taskie.models.reference import JobCategory, Location
from taskie.models.task import STATUS_COMPLETED, STATUS_PENDING, Task
from taskie.models.user import ROLE_ADMIN, ROLE_REQUESTER, ROLE_TASKER, User
from taskie.schemas.admin import (
    AdminStats,
    MessageStats,
    ResetReport,
    TaskStats,
    UserStats,
)
from taskie.schemas.task import TaskOut
from taskie.schemas.user import UserProfile

logger = logging.getLogger(__name__)

RECENT_WINDOW = timedelta(days=7)

# Children before parents
RESET_ORDER = (
    ("messages", Message),
    ("favorites", Favorite),
    ("tasks", Task),
    ("users", User),
    ("job_categories", JobCategory),
    ("locations", Location),
)


class AdminService:

    async def list_users(self, db: AsyncSession) -> List[UserProfile]:
        result = await db.execute(select(User).order_by(User.created_at.desc()))
        return [UserProfile.model_validate(u) for u in result.scalars().all()]

    async def list_tasks(self, db: AsyncSession) -> List[TaskOut]:
        result = await db.execute(select(Task).order_by(Task.created_at.desc()))
        return [TaskOut.model_validate(t) for t in result.scalars().all()]

    async def _count(self, db: AsyncSession, column, *criteria) -> int:
        result = await db.execute(select(func.count(column)).where(*criteria))
        return result.scalar() or 0

    async def get_stats(self, db: AsyncSession) -> AdminStats:
        since = datetime.now(timezone.utc) - RECENT_WINDOW

        users = UserStats(
            total=await self._count(db, User.id),
            requesters=await self._count(db, User.id, User.current_role == ROLE_REQUESTER),
            taskers=await self._count(db, User.id, User.current_role == ROLE_TASKER),
            admins=await self._count(db, User.id, User.current_role == ROLE_ADMIN),
            recent=await self._count(db, User.id, User.created_at >= since),
        )
        tasks = TaskStats(
            total=await self._count(db, Task.id),
            pending=await self._count(db, Task.id, Task.status == STATUS_PENDING),
            completed=await self._count(db, Task.id, Task.status == STATUS_COMPLETED),
            recent=await self._count(db, Task.id, Task.created_at >= since),
        )
        messages = MessageStats(total=await self._count(db, Message.id))
        return AdminStats(users=users, tasks=tasks, messages=messages)

    async def reset(self, db: AsyncSession) -> ResetReport:
        deleted = {}
        for name, model in RESET_ORDER:
            result = await db.execute(
                delete(model).execution_options(synchronize_session=False)
            )
            deleted[name] = result.rowcount or 0
            logger.warning("Reset: deleted %d rows from %s", deleted[name], name)

        # Bulk deletes bypass the identity map
        db.expunge_all()
        return ResetReport(deleted=deleted)


admin_service = AdminService()
