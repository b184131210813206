"""
Taskie Backend - Reference Data Routes
========================================

What:  Public lists of job categories and locations. No auth.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from taskie.database import get_db_session
from taskie.schemas.common import ListEnvelope
from taskie.schemas.reference import CategoryOut, LocationOut
from taskie.services.reference_service import reference_service

router = APIRouter(prefix="/api", tags=["Reference"])


@router.get("/categories", response_model=ListEnvelope[List[CategoryOut]], summary="Job categories")
async def get_categories(db: AsyncSession = Depends(get_db_session)) -> ListEnvelope[List[CategoryOut]]:
    categories = await reference_service.list_categories(db)
    return ListEnvelope[List[CategoryOut]](count=len(categories), data=categories)


@router.get("/locations", response_model=ListEnvelope[List[LocationOut]], summary="Provinces and wards")
async def get_locations(db: AsyncSession = Depends(get_db_session)) -> ListEnvelope[List[LocationOut]]:
    locations = await reference_service.list_locations(db)
    return ListEnvelope[List[LocationOut]](count=len(locations), data=locations)
