"""
Taskie Backend - User SQLAlchemy Model
========================================

What:  ORM model for the `users` table.
How:   Password hashing goes through werkzeug (PBKDF2 with a random salt);
       only the hash is ever stored.

Table Design:
    - email / phone: both optional, each unique when present; a CHECK
      constraint mirrors the service rule that at least one is set
    - current_role: NULL until the user picks requester or tasker; admin is
      only assigned by the seeder
    - avatar_url / proof_of_experience_url: relative /uploads/... paths
"""

from datetime import date
from typing import Optional

from sqlalchemy import CheckConstraint, Date, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from werkzeug.security import check_password_hash, generate_password_hash

from taskie.database import Base
from taskie.models.base import TimestampMixin, UUIDPrimaryKeyMixin

ROLE_REQUESTER = "requester"
ROLE_TASKER = "tasker"
ROLE_ADMIN = "admin"
ROLES = (ROLE_REQUESTER, ROLE_TASKER, ROLE_ADMIN)
SWITCHABLE_ROLES = (ROLE_REQUESTER, ROLE_TASKER)


class User(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """
    A registered person. The same account acts as requester or tasker
    depending on `current_role`, which the user may switch at any time.
    """

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint(
            "email IS NOT NULL OR phone IS NOT NULL",
            name="ck_users_email_or_phone",
        ),
    )

    full_name: Mapped[str] = mapped_column(Text, nullable=False)
    date_of_birth: Mapped[date] = mapped_column(Date, nullable=False)

    # Stored lower-cased; uniqueness checked in the service before insert
    email: Mapped[Optional[str]] = mapped_column(Text, unique=True, nullable=True)
    # 10-11 digits, enforced by the user service
    phone: Mapped[Optional[str]] = mapped_column(String(11), unique=True, nullable=True)

    password_hash: Mapped[str] = mapped_column(String(256), nullable=False)

    avatar_url: Mapped[Optional[str]] = mapped_column(String(255), nullable=True, default=None)
    proof_of_experience_url: Mapped[Optional[str]] = mapped_column(
        String(255), nullable=True, default=None
    )

    current_role: Mapped[Optional[str]] = mapped_column(String(20), nullable=True, default=None)

    def set_password(self, password: str) -> None:
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        return check_password_hash(self.password_hash, password)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, role='{self.current_role}')>"
