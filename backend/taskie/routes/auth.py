"""
Taskie Backend - Auth Route Handlers
======================================

What:  Registration, login and the current user's account settings.

POST /api/auth/register accepts JSON, or multipart/form-data when a
`proofOfExperience` image is attached. Both are read into the same
RegisterRequest so validation messages do not depend on the encoding.
"""

import logging
from typing import Optional, Tuple

import pydantic
from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.datastructures import UploadFile as StarletteUploadFile

from taskie.auth import get_current_user
from taskie.database import get_db_session
from taskie.exceptions import ValidationError
from taskie.models.user import User
from taskie.schemas.common import (
    DataEnvelope,
    ErrorResponse,
    MessageDataEnvelope,
    MessageEnvelope,
)
from taskie.schemas.user import (
    AuthResult,
    ChangePasswordRequest,
    LoginRequest,
    RegisterRequest,
    RoleResult,
    SwitchRoleRequest,
    UserProfile,
)
from taskie.services.file_service import UploadedImage, read_upload
from taskie.services.user_service import user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])

FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


async def _read_register_body(request: Request) -> Tuple[RegisterRequest, Optional[UploadedImage]]:
    content_type = request.headers.get("content-type", "")
    proof: Optional[UploadedImage] = None

    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        fields = {key: value for key, value in form.items() if isinstance(value, str)}
        upload = form.get("proofOfExperience")
        if isinstance(upload, StarletteUploadFile) and upload.filename:
            proof = await read_upload(upload)
    else:
        try:
            fields = await request.json()
        except ValueError:
            raise ValidationError("Request body must be valid JSON")
        if not isinstance(fields, dict):
            raise ValidationError("Request body must be a JSON object")

    # Empty form values mean "not provided"
    fields = {key: value for key, value in fields.items() if value not in ("", None)}
    try:
        return RegisterRequest.model_validate(fields), proof
    except pydantic.ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ()))
        raise ValidationError(f"Invalid value for {field}", field=field)


@router.post(
    "/register",
    status_code=201,
    response_model=MessageDataEnvelope[AuthResult],
    responses={400: {"model": ErrorResponse}},
    summary="Register a new user",
)
async def register(
    request: Request,
    db: AsyncSession = Depends(get_db_session),
) -> MessageDataEnvelope[AuthResult]:
    data, proof = await _read_register_body(request)
    result = await user_service.register(db, data, proof)
    return MessageDataEnvelope[AuthResult](message="User registered successfully", data=result)


@router.post(
    "/login",
    response_model=MessageDataEnvelope[AuthResult],
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
    summary="Log in with email or phone number",
)
async def login(
    body: LoginRequest,
    db: AsyncSession = Depends(get_db_session),
) -> MessageDataEnvelope[AuthResult]:
    result = await user_service.login(db, body)
    return MessageDataEnvelope[AuthResult](message="Login successful", data=result)


@router.get("/me", response_model=DataEnvelope[UserProfile], summary="Current user")
async def me(user: User = Depends(get_current_user)) -> DataEnvelope[UserProfile]:
    return DataEnvelope[UserProfile](data=user_service.get_profile(user))


@router.put("/role", response_model=MessageDataEnvelope[RoleResult], summary="Switch role")
async def switch_role(
    body: SwitchRoleRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> MessageDataEnvelope[RoleResult]:
    role = await user_service.switch_role(db, user, body.role)
    return MessageDataEnvelope[RoleResult](
        message=f"Role switched to {role} successfully",
        data=RoleResult(current_role=role),
    )


@router.put("/password", response_model=MessageEnvelope, summary="Change password")
async def change_password(
    body: ChangePasswordRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> MessageEnvelope:
    await user_service.change_password(db, user, body)
    return MessageEnvelope(message="Password changed successfully")
