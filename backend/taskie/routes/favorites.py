"""
Taskie Backend - Favorite Route Handlers
==========================================

What:  A tasker's bookmarked tasks. Every route requires the tasker role.
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from taskie.auth import require_tasker
from taskie.database import get_db_session
from taskie.models.user import User
from taskie.schemas.common import (
    DataEnvelope,
    ErrorResponse,
    ListEnvelope,
    MessageDataEnvelope,
    MessageEnvelope,
)
from taskie.schemas.favorite import FavoriteCheck, FavoriteOut, FavoriteRequest
from taskie.services.favorite_service import favorite_service

router = APIRouter(prefix="/api/favorites", tags=["Favorites"])


@router.post(
    "",
    status_code=201,
    response_model=MessageDataEnvelope[FavoriteOut],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def add_favorite(
    body: FavoriteRequest,
    user: User = Depends(require_tasker),
    db: AsyncSession = Depends(get_db_session),
) -> MessageDataEnvelope[FavoriteOut]:
    favorite = await favorite_service.add_favorite(db, user, body.task_id)
    return MessageDataEnvelope[FavoriteOut](message="Task added to favorites", data=favorite)


@router.get("", response_model=ListEnvelope[List[FavoriteOut]])
async def list_favorites(
    user: User = Depends(require_tasker),
    db: AsyncSession = Depends(get_db_session),
) -> ListEnvelope[List[FavoriteOut]]:
    favorites = await favorite_service.list_favorites(db, user)
    return ListEnvelope[List[FavoriteOut]](count=len(favorites), data=favorites)


@router.get("/check/{task_id}", response_model=DataEnvelope[FavoriteCheck])
async def check_favorite(
    task_id: UUID,
    user: User = Depends(require_tasker),
    db: AsyncSession = Depends(get_db_session),
) -> DataEnvelope[FavoriteCheck]:
    favorited = await favorite_service.is_favorited(db, user, task_id)
    return DataEnvelope[FavoriteCheck](data=FavoriteCheck(is_favorited=favorited))


@router.delete("/{task_id}", response_model=MessageEnvelope, responses={404: {"model": ErrorResponse}})
async def remove_favorite(
    task_id: UUID,
    user: User = Depends(require_tasker),
    db: AsyncSession = Depends(get_db_session),
) -> MessageEnvelope:
    await favorite_service.remove_favorite(db, user, task_id)
    return MessageEnvelope(message="Task removed from favorites")
