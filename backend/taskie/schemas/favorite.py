"""
Taskie Backend - Favorite Schemas
"""

import uuid
from datetime import datetime
from typing import Optional

from taskie.schemas.common import CamelModel
from taskie.schemas.task import TaskOut


class FavoriteRequest(CamelModel):
    task_id: Optional[uuid.UUID] = None


class FavoriteOut(CamelModel):
    id: uuid.UUID
    tasker_id: uuid.UUID
    task: TaskOut
    created_at: datetime


class FavoriteCheck(CamelModel):
    is_favorited: bool
