"""
Taskie Backend - ORM Models
=============================

Importing this package registers every table on `Base.metadata`, which
Alembic autogenerate and `init_models()` rely on.
"""

from taskie.models.favorite import Favorite
from taskie.models.message import Message
from taskie.models.reference import JobCategory, Location
from taskie.models.task import Task
from taskie.models.user import User

__all__ = ["User", "Task", "Message", "Favorite", "JobCategory", "Location"]
