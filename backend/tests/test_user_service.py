"""
Taskie Backend - User Service Unit Tests
==========================================

What:  Registration rules, login lookup order, role switching, password change
       and profile editing against a real (SQLite) session.
Why:   Account rules decide who can log in and which role gate applies.
How:   Service calls with request models built in the test; tokens are
       decoded to check the subject.

What we test:
    ✅ Registration validation and uniqueness of email and phone
    ✅ Login by email (any case) or phone, generic failure message
    ✅ Role switch, password change, profile edits and avatar upload
"""

from datetime import date

import pytest
from sqlalchemy import Text

from conftest import image
from taskie.exceptions import ConflictError, UnauthenticatedError, ValidationError
from taskie.models.user import ROLE_REQUESTER, ROLE_TASKER, User
from taskie.schemas.user import (
    ChangePasswordRequest,
    LoginRequest,
    ProfileUpdateRequest,
    RegisterRequest,
)
from taskie.security import decode_access_token
from taskie.services.user_service import user_service


def register_request(**overrides):
    values = {
        "full_name": "Nguyen Van A",
        "date_of_birth": date(1995, 5, 1),
        "email": "a@x.com",
        "phone": "0912345678",
        "password": "secret123",
        "confirm_password": "secret123",
    }
    values.update(overrides)
    return RegisterRequest(**values)


class TestRegister:
    """Tests for registration."""

    @pytest.mark.asyncio
    async def test_register_issues_token_for_new_user(self, db_session):
        """Registration should normalize the email and issue a token."""
        result = await user_service.register(db_session, register_request(email="  A@X.com "))

        assert result.email == "a@x.com"
        assert result.current_role is None
        assert decode_access_token(result.token) == result.id

    @pytest.mark.asyncio
    async def test_duplicate_email_rejected(self, db_session):
        """A taken email should raise ConflictError."""
        await user_service.register(db_session, register_request())
        with pytest.raises(ConflictError, match="already exists"):
            await user_service.register(db_session, register_request(phone="0987654321"))

    @pytest.mark.asyncio
    async def test_duplicate_phone_rejected(self, db_session):
        """A taken phone should raise ConflictError."""
        await user_service.register(db_session, register_request())
        with pytest.raises(ConflictError):
            await user_service.register(db_session, register_request(email="b@x.com"))

    @pytest.mark.asyncio
    async def test_email_or_phone_required(self, db_session):
        """Without email and phone registration should fail."""
        with pytest.raises(ValidationError, match="either email or phone"):
            await user_service.register(db_session, register_request(email=None, phone=None))

    @pytest.mark.asyncio
    async def test_phone_only_registration(self, db_session):
        """A phone alone should be enough."""
        result = await user_service.register(db_session, register_request(email=None))
        assert result.email is None
        assert result.phone == "0912345678"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "overrides, message",
        [
            ({"full_name": "  "}, "full name"),
            ({"date_of_birth": None}, "date of birth"),
            ({"confirm_password": "other123"}, "do not match"),
            ({"password": "abc", "confirm_password": "abc"}, "at least 6"),
            ({"email": "not-an-email"}, "valid email"),
            ({"phone": "12345"}, "valid phone"),
        ],
    )
    async def test_invalid_input(self, db_session, overrides, message):
        """Each invalid field should raise its own message."""
        with pytest.raises(ValidationError, match=message):
            await user_service.register(db_session, register_request(**overrides))

    @pytest.mark.asyncio
    async def test_proof_of_experience_stored(self, db_session, storage):
        """The proof image should be stored under proofs."""
        result = await user_service.register(db_session, register_request(), proof=image())
        profile = await user_service.login(
            db_session, LoginRequest(email_or_phone="a@x.com", password="secret123")
        )
        assert profile.id == result.id
        assert len(list((storage / "proofs").iterdir())) == 1


class TestLogin:
    """Tests for login lookup and password checks."""

    @pytest.mark.asyncio
    async def test_login_by_email_is_case_insensitive(self, db_session, make_user):
        """Email lookup should ignore case."""
        user = await make_user(email="mixed@x.com")
        result = await user_service.login(
            db_session, LoginRequest(email_or_phone="MIXED@x.com", password="secret123")
        )
        assert result.id == user.id

    @pytest.mark.asyncio
    async def test_login_by_phone(self, db_session, make_user):
        """Phone numbers should log in too."""
        user = await make_user(phone="0911111111")
        result = await user_service.login(
            db_session, LoginRequest(email_or_phone="0911111111", password="secret123")
        )
        assert result.id == user.id

    @pytest.mark.asyncio
    async def test_wrong_password(self, db_session, make_user):
        """A wrong password should raise UnauthenticatedError."""
        await make_user(email="u@x.com")
        with pytest.raises(UnauthenticatedError, match="incorrect"):
            await user_service.login(
                db_session, LoginRequest(email_or_phone="u@x.com", password="wrong-one")
            )

    @pytest.mark.asyncio
    async def test_unknown_identifier(self, db_session):
        """Unknown identifiers should get the same generic error."""
        with pytest.raises(UnauthenticatedError):
            await user_service.login(
                db_session, LoginRequest(email_or_phone="ghost@x.com", password="secret123")
            )

    @pytest.mark.asyncio
    async def test_missing_fields(self, db_session):
        """Missing credentials should raise ValidationError."""
        with pytest.raises(ValidationError):
            await user_service.login(db_session, LoginRequest(email_or_phone="u@x.com"))


class TestAccount:
    """Tests for role switch, password change and profile editing."""

    @pytest.mark.asyncio
    async def test_switch_role(self, db_session, make_user):
        """Switching between requester and tasker should persist."""
        user = await make_user()
        assert await user_service.switch_role(db_session, user, ROLE_TASKER) == ROLE_TASKER
        assert await user_service.switch_role(db_session, user, ROLE_REQUESTER) == ROLE_REQUESTER
        assert user.current_role == ROLE_REQUESTER

    @pytest.mark.asyncio
    @pytest.mark.parametrize("role", ["admin", "owner", None])
    async def test_switch_to_invalid_role(self, db_session, make_user, role):
        """Admin and unknown roles should be rejected."""
        user = await make_user()
        with pytest.raises(ValidationError, match="valid role"):
            await user_service.switch_role(db_session, user, role)

    @pytest.mark.asyncio
    async def test_change_password(self, db_session, make_user):
        """The new password should replace the old one."""
        user = await make_user()
        await user_service.change_password(
            db_session, user,
            ChangePasswordRequest(current_password="secret123", new_password="newsecret"),
        )
        assert user.check_password("newsecret")
        assert not user.check_password("secret123")

    @pytest.mark.asyncio
    async def test_change_password_checks_current(self, db_session, make_user):
        """A wrong current password should raise UnauthenticatedError."""
        user = await make_user()
        with pytest.raises(UnauthenticatedError, match="Current password"):
            await user_service.change_password(
                db_session, user,
                ChangePasswordRequest(current_password="nope123", new_password="newsecret"),
            )

    @pytest.mark.asyncio
    async def test_change_password_min_length(self, db_session, make_user):
        """Short new passwords should be rejected."""
        user = await make_user()
        with pytest.raises(ValidationError, match="at least 6"):
            await user_service.change_password(
                db_session, user,
                ChangePasswordRequest(current_password="secret123", new_password="short"),
            )

    @pytest.mark.asyncio
    async def test_update_profile_applies_present_fields(self, db_session, make_user):
        """Only fields present in the request should change."""
        user = await make_user(email="old@x.com")
        profile = await user_service.update_profile(
            db_session, user, ProfileUpdateRequest(full_name="New Name", phone="0933333333")
        )
        assert profile.full_name == "New Name"
        assert profile.phone == "0933333333"
        assert profile.email == "old@x.com"

    @pytest.mark.asyncio
    async def test_long_full_name_accepted(self, db_session, make_user):
        """Long names should be stored on register and profile update."""
        long_name = "Nguyen " * 40
        result = await user_service.register(db_session, register_request(full_name=long_name))
        assert result.full_name == long_name.strip()

        user = await make_user()
        profile = await user_service.update_profile(
            db_session, user, ProfileUpdateRequest(full_name="B" * 300)
        )
        assert profile.full_name == "B" * 300
        for column in ("full_name", "email"):
            assert isinstance(User.__table__.c[column].type, Text)

    @pytest.mark.asyncio
    async def test_update_profile_keeps_own_email(self, db_session, make_user):
        """Re-submitting one's own email should not conflict."""
        user = await make_user(email="me@x.com")
        profile = await user_service.update_profile(
            db_session, user, ProfileUpdateRequest(email="ME@x.com")
        )
        assert profile.email == "me@x.com"

    @pytest.mark.asyncio
    async def test_update_profile_rejects_taken_email(self, db_session, make_user):
        """Another user's email should raise ConflictError."""
        await make_user(email="taken@x.com")
        user = await make_user(email="me@x.com")
        with pytest.raises(ConflictError):
            await user_service.update_profile(
                db_session, user, ProfileUpdateRequest(email="taken@x.com")
            )

    @pytest.mark.asyncio
    async def test_upload_avatar(self, db_session, make_user, storage):
        """The avatar should be stored and set on the profile."""
        user = await make_user()
        url = await user_service.upload_avatar(db_session, user, image("me.png", content_type="image/png"))
        assert url.startswith("/uploads/avatars/avatar-")
        assert user.avatar_url == url

    @pytest.mark.asyncio
    async def test_upload_avatar_requires_file(self, db_session, make_user):
        """A missing avatar should raise ValidationError."""
        user = await make_user()
        with pytest.raises(ValidationError, match="upload an image"):
            await user_service.upload_avatar(db_session, user, None)
