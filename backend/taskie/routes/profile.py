"""
Taskie Backend - Profile Route Handlers
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from taskie.auth import get_current_user
from taskie.database import get_db_session
from taskie.models.user import User
from taskie.schemas.common import DataEnvelope, MessageDataEnvelope
from taskie.schemas.user import AvatarResult, ProfileUpdateRequest, UserProfile
from taskie.services.file_service import read_upload
from taskie.services.user_service import user_service

router = APIRouter(prefix="/api/profile", tags=["Profile"])


@router.get("", response_model=DataEnvelope[UserProfile], summary="Get own profile")
async def get_profile(user: User = Depends(get_current_user)) -> DataEnvelope[UserProfile]:
    return DataEnvelope[UserProfile](data=user_service.get_profile(user))


@router.put("", response_model=MessageDataEnvelope[UserProfile], summary="Update own profile")
async def update_profile(
    body: ProfileUpdateRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> MessageDataEnvelope[UserProfile]:
    profile = await user_service.update_profile(db, user, body)
    return MessageDataEnvelope[UserProfile](message="Profile updated successfully", data=profile)


@router.post(
    "/avatar",
    response_model=MessageDataEnvelope[AvatarResult],
    summary="Upload avatar image (JPEG/PNG, max 5MB)",
)
async def upload_avatar(
    avatar: Optional[UploadFile] = File(default=None),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> MessageDataEnvelope[AvatarResult]:
    image = await read_upload(avatar) if avatar is not None and avatar.filename else None
    avatar_url = await user_service.upload_avatar(db, user, image)
    return MessageDataEnvelope[AvatarResult](
        message="Avatar uploaded successfully",
        data=AvatarResult(avatar_url=avatar_url),
    )
