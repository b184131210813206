"""
Taskie Backend - Task Schemas
===============================

What:  Task projections and the JSON bodies of the task endpoints. Task
       creation is multipart, so its fields arrive as form values and are
       collected into TaskCreateData by the route.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import Field

from taskie.schemas.common import CamelModel
from taskie.schemas.user import UserContact


class TaskLocation(CamelModel):
    province: str
    ward: str


class TaskRef(CamelModel):
    id: uuid.UUID
    title: str


class TaskOut(CamelModel):
    id: uuid.UUID
    title: str
    description: str
    category: str
    images: List[str]
    location: TaskLocation
    price: float
    posting_fee: float
    deadline: datetime
    payment_proof_url: Optional[str] = None
    status: str
    requester: UserContact
    created_at: datetime
    updated_at: datetime


class TaskCreateData(CamelModel):
    """
    Raw form values of POST /api/tasks.

    `location` is a JSON string {"province": ..., "ward": ...}; `price` and
    `deadline` are parsed by the task service so that bad values produce the
    task-specific messages.
    """
    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    location: Optional[str] = None
    price: Optional[str] = None
    deadline: Optional[str] = None


class TaskUpdateRequest(CamelModel):
    description: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)


class TaskStatusRequest(CamelModel):
    status: Optional[str] = Field(default=None, description="pending or completed")


class TaskSearchParams(CamelModel):
    keyword: Optional[str] = None
    category: Optional[str] = None
    province: Optional[str] = None
    ward: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None


class PaymentProofResult(CamelModel):
    payment_proof_url: str
