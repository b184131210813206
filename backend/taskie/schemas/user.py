"""
Taskie Backend - User Schemas
===============================

What:  Request bodies for auth/profile endpoints and the user projections
       returned to clients. No projection ever carries the password hash.

Request fields are all optional at the schema level; the user service checks
presence itself so that a missing field produces the same message whether the
body came in as JSON or multipart.
"""

import uuid
from datetime import date, datetime
from typing import Optional

from pydantic import Field

from taskie.schemas.common import CamelModel


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class UserSummary(CamelModel):
    """Counterpart shown in a conversation list."""
    id: uuid.UUID
    full_name: str
    avatar_url: Optional[str] = None


class UserContact(CamelModel):
    """Sender/receiver of a message, requester of a task."""
    id: uuid.UUID
    full_name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    avatar_url: Optional[str] = None


class UserProfile(CamelModel):
    id: uuid.UUID
    full_name: str
    date_of_birth: date
    email: Optional[str] = None
    phone: Optional[str] = None
    avatar_url: Optional[str] = None
    proof_of_experience_url: Optional[str] = None
    current_role: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class AuthResult(CamelModel):
    """Returned by register and login."""
    id: uuid.UUID
    full_name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    current_role: Optional[str] = None
    avatar_url: Optional[str] = None
    token: str


class RoleResult(CamelModel):
    current_role: str


class AvatarResult(CamelModel):
    avatar_url: str


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class RegisterRequest(CamelModel):
    full_name: Optional[str] = None
    date_of_birth: Optional[date] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    password: Optional[str] = None
    confirm_password: Optional[str] = None


class LoginRequest(CamelModel):
    email_or_phone: Optional[str] = Field(default=None, description="Email address or phone number")
    password: Optional[str] = None


class SwitchRoleRequest(CamelModel):
    role: Optional[str] = Field(default=None, description="requester or tasker")


class ChangePasswordRequest(CamelModel):
    current_password: Optional[str] = None
    new_password: Optional[str] = None


class ProfileUpdateRequest(CamelModel):
    """Only fields present in the body are changed."""
    full_name: Optional[str] = None
    date_of_birth: Optional[date] = None
    email: Optional[str] = None
    phone: Optional[str] = None
