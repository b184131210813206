"""
Taskie Backend - Admin Route Handlers
=======================================

What:  Admin-only inspection and data management.

Note: reset deletes every user, the calling admin included. After
reset-and-seed the default admin exists again under a new id, so the
caller has to log in again.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from taskie.auth import require_admin
from taskie.database import get_db_session
from taskie.models.user import User
from taskie.schemas.admin import (
    AdminStats,
    ResetAndSeedRequest,
    ResetReport,
    SeedReport,
    SeedRequest,
)
from taskie.schemas.common import DataEnvelope, ListEnvelope, MessageDataEnvelope
from taskie.schemas.task import TaskOut
from taskie.schemas.user import UserProfile
from taskie.services.admin_service import admin_service
from taskie.services.seed_service import seed_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["Admin"])


@router.get("/users", response_model=ListEnvelope[List[UserProfile]])
async def get_users(
    user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db_session),
) -> ListEnvelope[List[UserProfile]]:
    users = await admin_service.list_users(db)
    return ListEnvelope[List[UserProfile]](count=len(users), data=users)


@router.get("/tasks", response_model=ListEnvelope[List[TaskOut]])
async def get_tasks(
    user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db_session),
) -> ListEnvelope[List[TaskOut]]:
    tasks = await admin_service.list_tasks(db)
    return ListEnvelope[List[TaskOut]](count=len(tasks), data=tasks)


@router.get("/stats", response_model=DataEnvelope[AdminStats])
async def get_stats(
    user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db_session),
) -> DataEnvelope[AdminStats]:
    return DataEnvelope[AdminStats](data=await admin_service.get_stats(db))


@router.post("/seed", response_model=MessageDataEnvelope[SeedReport])
async def seed(
    body: Optional[SeedRequest] = Body(default=None),
    user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db_session),
) -> MessageDataEnvelope[SeedReport]:
    body = body or SeedRequest()
    logger.info("Admin %s seeding (force=%s, comprehensive=%s)", user.id, body.force, body.comprehensive)
    report = await seed_service.seed(db, force=body.force, comprehensive=body.comprehensive)
    return MessageDataEnvelope[SeedReport](message="Database seeding completed successfully", data=report)


@router.post("/reset", response_model=MessageDataEnvelope[ResetReport])
async def reset(
    user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db_session),
) -> MessageDataEnvelope[ResetReport]:
    logger.warning("Admin %s is resetting all data", user.id)
    report = await admin_service.reset(db)
    return MessageDataEnvelope[ResetReport](message="Database reset successfully", data=report)


@router.post("/reset-and-seed", response_model=MessageDataEnvelope[SeedReport])
async def reset_and_seed(
    body: Optional[ResetAndSeedRequest] = Body(default=None),
    user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db_session),
) -> MessageDataEnvelope[SeedReport]:
    body = body or ResetAndSeedRequest()
    logger.warning("Admin %s is resetting and reseeding (comprehensive=%s)", user.id, body.comprehensive)
    await admin_service.reset(db)
    report = await seed_service.seed(db, force=True, comprehensive=body.comprehensive)
    return MessageDataEnvelope[SeedReport](message="Database reset and seeded successfully", data=report)
