"""
Taskie Backend - Reference Data Models
========================================

What:  Job categories (with their posting fee) and locations (province with
       its ordered ward list). Public, read-mostly data maintained by the
       seeder.
"""

from typing import List

from sqlalchemy import JSON, Float, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from taskie.database import Base
from taskie.models.base import TimestampMixin, UUIDPrimaryKeyMixin


class JobCategory(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "job_categories"

    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    # Fee in VND charged per task posted in this category
    posting_fee: Mapped[float] = mapped_column(Float, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")


class Location(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "locations"

    province: Mapped[str] = mapped_column(String(120), unique=True, nullable=False)
    wards: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
