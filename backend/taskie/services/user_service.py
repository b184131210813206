"""
Taskie Backend - User Service
===============================

What:  Registration, login, role switching, password change and profile
       editing.
Who:   Called by the auth and profile routers.

Validation rules (checked here, not in the schemas, so JSON and multipart
bodies fail the same way):
    - fullName, dateOfBirth, password required
    - email or phone required; email lower-cased and trimmed
    - email  ^\\w+([.-]?\\w+)*@\\w+([.-]?\\w+)*(\\.\\w{2,3})+$
    - phone  10-11 digits
    - password at least 6 characters, equal to confirmPassword
    - email and phone each unique across users
"""

import logging
import re
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from taskie.exceptions import (
    ConflictError,
    UnauthenticatedError,
    ValidationError,
)
from taskie.models.user import SWITCHABLE_ROLES, User
from taskie.schemas.user import (
    AuthResult,
    ChangePasswordRequest,
    LoginRequest,
    ProfileUpdateRequest,
    RegisterRequest,
    UserProfile,
)
from taskie.security import create_access_token
from taskie.services.file_service import UploadedImage, file_service

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^\w+([.-]?\w+)*@\w+([.-]?\w+)*(\.\w{2,3})+$")
PHONE_RE = re.compile(r"^[0-9]{10,11}$")
MIN_PASSWORD_LENGTH = 6

DUPLICATE_USER_MESSAGE = "User already exists with this email or phone number"


def normalize_email(email: Optional[str]) -> Optional[str]:
    if email is None:
        return None
    email = email.strip().lower()
    return email or None


def normalize_phone(phone: Optional[str]) -> Optional[str]:
    if phone is None:
        return None
    phone = phone.strip()
    return phone or None


def validate_email(email: str) -> None:
    if not EMAIL_RE.match(email):
        raise ValidationError("Please enter a valid email", field="email")


def validate_phone(phone: str) -> None:
    if not PHONE_RE.match(phone):
        raise ValidationError("Please enter a valid phone number (10-11 digits)", field="phone")


class UserService:
    """
    Account lifecycle operations.

    Every method receives the request's AsyncSession; commits happen in the
    session dependency after the handler returns.
    """

    async def _find_by_email(self, db: AsyncSession, email: str) -> Optional[User]:
        result = await db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def _find_by_phone(self, db: AsyncSession, phone: str) -> Optional[User]:
        result = await db.execute(select(User).where(User.phone == phone))
        return result.scalar_one_or_none()

    async def _ensure_unique(
        self,
        db: AsyncSession,
        email: Optional[str],
        phone: Optional[str],
        exclude: Optional[User] = None,
    ) -> None:
        for existing in (
            await self._find_by_email(db, email) if email else None,
            await self._find_by_phone(db, phone) if phone else None,
        ):
            if existing is not None and existing is not exclude:
                raise ConflictError(DUPLICATE_USER_MESSAGE)

    async def _flush_user(self, db: AsyncSession, user: User) -> None:
        # The unique columns still catch a concurrent registration that slipped
        # past _ensure_unique
        try:
            await db.flush()
        except IntegrityError:
            logger.info("Unique violation writing user %s", user.id)
            raise ConflictError(DUPLICATE_USER_MESSAGE)

    async def register(
        self,
        db: AsyncSession,
        data: RegisterRequest,
        proof: Optional[UploadedImage] = None,
    ) -> AuthResult:
        """
        Create an account and issue its first token.

        Raises:
            ValidationError: missing/malformed fields, password mismatch
            ConflictError: email or phone already registered
        """
        full_name = (data.full_name or "").strip()
        if not full_name or data.date_of_birth is None or not data.password:
            raise ValidationError("Please provide full name, date of birth, and password")

        email = normalize_email(data.email)
        phone = normalize_phone(data.phone)
        if not email and not phone:
            raise ValidationError("Please provide either email or phone number")

        if data.password != data.confirm_password:
            raise ValidationError("Passwords do not match", field="confirmPassword")
        if len(data.password) < MIN_PASSWORD_LENGTH:
            raise ValidationError("Password must be at least 6 characters", field="password")
        if email:
            validate_email(email)
        if phone:
            validate_phone(phone)

        await self._ensure_unique(db, email, phone)

        proof_url = await file_service.store("proofs", proof) if proof is not None else None

        user = User(
            full_name=full_name,
            date_of_birth=data.date_of_birth,
            email=email,
            phone=phone,
            proof_of_experience_url=proof_url,
        )
        user.set_password(data.password)
        db.add(user)
        await self._flush_user(db, user)

        logger.info("User registered: %s", user.id)
        return self._auth_result(user)

    async def login(self, db: AsyncSession, data: LoginRequest) -> AuthResult:
        """
        Look the identifier up as an email first, then as a phone number.

        Raises:
            ValidationError: identifier or password missing
            UnauthenticatedError: no such user or wrong password
        """
        identifier = (data.email_or_phone or "").strip()
        if not identifier or not data.password:
            raise ValidationError("Please enter email/phone number and password")

        user = await self._find_by_email(db, identifier.lower())
        if user is None:
            user = await self._find_by_phone(db, identifier)

        if user is None or not user.check_password(data.password):
            raise UnauthenticatedError("Email/phone number or password is incorrect")

        logger.info("User logged in: %s", user.id)
        return self._auth_result(user)

    def _auth_result(self, user: User) -> AuthResult:
        return AuthResult(
            id=user.id,
            full_name=user.full_name,
            email=user.email,
            phone=user.phone,
            current_role=user.current_role,
            avatar_url=user.avatar_url,
            token=create_access_token(user.id),
        )

    def get_profile(self, user: User) -> UserProfile:
        return UserProfile.model_validate(user)

    async def switch_role(self, db: AsyncSession, user: User, role: Optional[str]) -> str:
        if role not in SWITCHABLE_ROLES:
            raise ValidationError("Please provide a valid role (requester or tasker)", field="role")
        user.current_role = role
        await db.flush()
        logger.info("User %s switched role to %s", user.id, role)
        return role

    async def change_password(
        self, db: AsyncSession, user: User, data: ChangePasswordRequest
    ) -> None:
        if not data.current_password or not data.new_password:
            raise ValidationError("Please provide both current and new password")
        if len(data.new_password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                "New password must be at least 6 characters long", field="newPassword"
            )
        if not user.check_password(data.current_password):
            raise UnauthenticatedError("Current password is incorrect")

        user.set_password(data.new_password)
        await db.flush()
        logger.info("Password changed for user %s", user.id)

    async def update_profile(
        self, db: AsyncSession, user: User, data: ProfileUpdateRequest
    ) -> UserProfile:
        """Apply only the non-empty fields; email/phone are re-validated and re-checked."""
        email = normalize_email(data.email)
        phone = normalize_phone(data.phone)
        if email:
            validate_email(email)
        if phone:
            validate_phone(phone)
        await self._ensure_unique(db, email, phone, exclude=user)

        if data.full_name and data.full_name.strip():
            user.full_name = data.full_name.strip()
        if data.date_of_birth is not None:
            user.date_of_birth = data.date_of_birth
        if email:
            user.email = email
        if phone:
            user.phone = phone

        await self._flush_user(db, user)
        return UserProfile.model_validate(user)

    async def upload_avatar(
        self, db: AsyncSession, user: User, image: Optional[UploadedImage]
    ) -> str:
        if image is None:
            raise ValidationError("Please upload an image file", field="avatar")
        user.avatar_url = await file_service.store("avatars", image)
        await db.flush()
        return user.avatar_url


# ── Singleton Instance ────────────────────────────────────────────────────
user_service = UserService()
