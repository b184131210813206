"""
Taskie Backend - Favorite Service
===================================

What:  A tasker's bookmarked tasks: add, list, check, remove.
Who:   Called by the favorites router (tasker role only).

The (tasker, task) pair is unique. The service checks first so the common
case gets a clean ConflictError; the unique constraint covers the race.
"""

import logging
import uuid
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from taskie.exceptions import ConflictError, NotFoundError, ValidationError
from taskie.models.favorite import Favorite
from taskie.models.task import Task
from taskie.models.user import User
from taskie.schemas.favorite import FavoriteOut

logger = logging.getLogger(__name__)

ALREADY_FAVORITED_MESSAGE = "Task already in favorites"


class FavoriteService:

    async def _find(
        self, db: AsyncSession, tasker: User, task_id: uuid.UUID
    ) -> Optional[Favorite]:
        result = await db.execute(
            select(Favorite).where(Favorite.tasker_id == tasker.id, Favorite.task_id == task_id)
        )
        return result.scalar_one_or_none()

    async def add_favorite(
        self, db: AsyncSession, tasker: User, task_id: Optional[uuid.UUID]
    ) -> FavoriteOut:
        """
        Raises:
            ValidationError: taskId missing
            NotFoundError: task does not exist
            ConflictError: already favorited
        """
        if task_id is None:
            raise ValidationError("Please provide taskId", field="taskId")

        task = await db.get(Task, task_id)
        if task is None:
            raise NotFoundError(resource="task", resource_id=str(task_id))

        if await self._find(db, tasker, task_id) is not None:
            raise ConflictError(ALREADY_FAVORITED_MESSAGE)

        favorite = Favorite(tasker_id=tasker.id, task_id=task.id)
        favorite.task = task
        db.add(favorite)
        try:
            await db.flush()
        except IntegrityError:
            raise ConflictError(ALREADY_FAVORITED_MESSAGE)

        logger.info("Tasker %s favorited task %s", tasker.id, task.id)
        return FavoriteOut.model_validate(favorite)

    async def list_favorites(self, db: AsyncSession, tasker: User) -> List[FavoriteOut]:
        """Newest first; favorites whose task has gone are skipped."""
        result = await db.execute(
            select(Favorite)
            .where(Favorite.tasker_id == tasker.id)
            .order_by(Favorite.created_at.desc())
            .execution_options(populate_existing=True)
        )
        return [
            FavoriteOut.model_validate(fav)
            for fav in result.scalars().all()
            if fav.task is not None
        ]

    async def is_favorited(self, db: AsyncSession, tasker: User, task_id: uuid.UUID) -> bool:
        return await self._find(db, tasker, task_id) is not None

    async def remove_favorite(self, db: AsyncSession, tasker: User, task_id: uuid.UUID) -> None:
        favorite = await self._find(db, tasker, task_id)
        if favorite is None:
            raise NotFoundError(resource="favorite", resource_id=str(task_id))
        await db.delete(favorite)
        await db.flush()


# ── Singleton Instance ────────────────────────────────────────────────────
favorite_service = FavoriteService()
