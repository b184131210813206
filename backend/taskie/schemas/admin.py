"""
Taskie Backend - Admin Schemas
================================

What:  Aggregate statistics, seed/reset bodies and their reports.
"""

from typing import Dict

from pydantic import Field

from taskie.schemas.common import CamelModel


class UserStats(CamelModel):
    total: int
    requesters: int
    taskers: int
    admins: int
    # Registered in the last 7 days
    recent: int


class TaskStats(CamelModel):
    total: int
    pending: int
    completed: int
    recent: int


class MessageStats(CamelModel):
    total: int


class AdminStats(CamelModel):
    users: UserStats
    tasks: TaskStats
    messages: MessageStats


class SeedRequest(CamelModel):
    force: bool = Field(default=False, description="Clear and reinsert categories and locations")
    comprehensive: bool = Field(default=False, description="Also create demo users, tasks, messages")


class ResetAndSeedRequest(CamelModel):
    comprehensive: bool = False


class SeedReport(CamelModel):
    """Rows inserted per kind."""
    categories: int = 0
    locations: int = 0
    admin_created: bool = False
    users: int = 0
    tasks: int = 0
    messages: int = 0
    favorites: int = 0


class ResetReport(CamelModel):
    # table name -> rows deleted
    deleted: Dict[str, int]
