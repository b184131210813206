"""
Taskie Backend - Reference Data Schemas
"""

import uuid
from typing import List

from taskie.schemas.common import CamelModel


class CategoryOut(CamelModel):
    id: uuid.UUID
    name: str
    posting_fee: float
    description: str


class LocationOut(CamelModel):
    id: uuid.UUID
    province: str
    wards: List[str]
