"""
Taskie Backend - Reference Data Service
=========================================

What:  Read access to job categories and locations (public endpoints).
"""

from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taskie.models.reference import JobCategory, Location
from taskie.schemas.reference import CategoryOut, LocationOut


class ReferenceService:

    async def list_categories(self, db: AsyncSession) -> List[CategoryOut]:
        result = await db.execute(select(JobCategory).order_by(JobCategory.name))
        return [CategoryOut.model_validate(c) for c in result.scalars().all()]

    async def list_locations(self, db: AsyncSession) -> List[LocationOut]:
        result = await db.execute(select(Location).order_by(Location.province))
        return [LocationOut.model_validate(loc) for loc in result.scalars().all()]


reference_service = ReferenceService()
