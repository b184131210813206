"""
Taskie Backend - Task Route Handlers
======================================

What:  Task creation (multipart), listing, search and owner-only mutations.

Role gates:
    POST /api/tasks, GET /api/tasks/my    requester role
    everything else                       any authenticated user; mutations
                                          are further limited to the owner
                                          by the task service

Declaration order matters: /my and /search are registered before /{task_id}
so they are not captured by the path parameter.
"""

import logging
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from taskie.auth import get_current_user, require_requester
from taskie.database import get_db_session
from taskie.models.user import User
from taskie.schemas.common import (
    DataEnvelope,
    ErrorResponse,
    ListEnvelope,
    MessageDataEnvelope,
    MessageEnvelope,
)
from taskie.schemas.task import (
    PaymentProofResult,
    TaskCreateData,
    TaskOut,
    TaskSearchParams,
    TaskStatusRequest,
    TaskUpdateRequest,
)
from taskie.services.file_service import read_upload
from taskie.services.task_service import task_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/tasks", tags=["Tasks"])


@router.post(
    "",
    status_code=201,
    response_model=MessageDataEnvelope[TaskOut],
    responses={400: {"model": ErrorResponse}, 403: {"model": ErrorResponse}},
    summary="Create a task (2-10 images, JPEG/PNG, max 5MB each)",
)
async def create_task(
    title: Optional[str] = Form(default=None),
    description: Optional[str] = Form(default=None),
    category: Optional[str] = Form(default=None),
    location: Optional[str] = Form(default=None, description='JSON: {"province": ..., "ward": ...}'),
    price: Optional[str] = Form(default=None),
    deadline: Optional[str] = Form(default=None, description="ISO 8601 date or datetime"),
    images: List[UploadFile] = File(default=[]),
    user: User = Depends(require_requester),
    db: AsyncSession = Depends(get_db_session),
) -> MessageDataEnvelope[TaskOut]:
    data = TaskCreateData(
        title=title,
        description=description,
        category=category,
        location=location,
        price=price,
        deadline=deadline,
    )
    uploads = [await read_upload(f) for f in images if f.filename]
    logger.info("Create task request: %d images from %s", len(uploads), user.id)

    task = await task_service.create_task(db, user, data, uploads)
    return MessageDataEnvelope[TaskOut](message="Task created successfully", data=task)


@router.get("/my", response_model=ListEnvelope[List[TaskOut]], summary="Own tasks")
async def get_my_tasks(
    status: Optional[str] = Query(default=None, description="pending, completed or all"),
    user: User = Depends(require_requester),
    db: AsyncSession = Depends(get_db_session),
) -> ListEnvelope[List[TaskOut]]:
    tasks = await task_service.get_my_tasks(db, user, status)
    return ListEnvelope[List[TaskOut]](count=len(tasks), data=tasks)


@router.get("/search", response_model=ListEnvelope[List[TaskOut]], summary="Search pending tasks")
async def search_tasks(
    keyword: Optional[str] = Query(default=None),
    category: Optional[str] = Query(default=None),
    province: Optional[str] = Query(default=None),
    ward: Optional[str] = Query(default=None),
    min_price: Optional[float] = Query(default=None, alias="minPrice"),
    max_price: Optional[float] = Query(default=None, alias="maxPrice"),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> ListEnvelope[List[TaskOut]]:
    params = TaskSearchParams(
        keyword=keyword,
        category=category,
        province=province,
        ward=ward,
        min_price=min_price,
        max_price=max_price,
    )
    tasks = await task_service.search_tasks(db, params)
    return ListEnvelope[List[TaskOut]](count=len(tasks), data=tasks)


@router.get(
    "/{task_id}",
    response_model=DataEnvelope[TaskOut],
    responses={404: {"model": ErrorResponse}},
    summary="Get a task",
)
async def get_task(
    task_id: UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> DataEnvelope[TaskOut]:
    return DataEnvelope[TaskOut](data=await task_service.get_task(db, task_id))


@router.put("/{task_id}", response_model=MessageDataEnvelope[TaskOut], summary="Edit description/price")
async def update_task(
    task_id: UUID,
    body: TaskUpdateRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> MessageDataEnvelope[TaskOut]:
    task = await task_service.update_task(db, user, task_id, body)
    return MessageDataEnvelope[TaskOut](message="Task updated successfully", data=task)


@router.delete("/{task_id}", response_model=MessageEnvelope, summary="Delete a task")
async def delete_task(
    task_id: UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> MessageEnvelope:
    await task_service.delete_task(db, user, task_id)
    return MessageEnvelope(message="Task deleted successfully")


@router.put("/{task_id}/status", response_model=MessageDataEnvelope[TaskOut], summary="Set status")
async def update_task_status(
    task_id: UUID,
    body: TaskStatusRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> MessageDataEnvelope[TaskOut]:
    task = await task_service.update_status(db, user, task_id, body.status)
    return MessageDataEnvelope[TaskOut](
        message=f"Task status updated to {task.status} successfully",
        data=task,
    )


@router.put("/{task_id}/complete", response_model=MessageDataEnvelope[TaskOut], summary="Mark completed")
async def complete_task(
    task_id: UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> MessageDataEnvelope[TaskOut]:
    task = await task_service.complete_task(db, user, task_id)
    return MessageDataEnvelope[TaskOut](message="Task marked as completed successfully", data=task)


@router.post(
    "/{task_id}/payment-proof",
    response_model=MessageDataEnvelope[PaymentProofResult],
    summary="Upload payment proof (accepted without verification)",
)
async def upload_payment_proof(
    task_id: UUID,
    payment_proof: Optional[UploadFile] = File(default=None, alias="paymentProof"),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> MessageDataEnvelope[PaymentProofResult]:
    image = (
        await read_upload(payment_proof)
        if payment_proof is not None and payment_proof.filename
        else None
    )
    url = await task_service.upload_payment_proof(db, user, task_id, image)
    return MessageDataEnvelope[PaymentProofResult](
        message="Payment proof uploaded and approved successfully",
        data=PaymentProofResult(payment_proof_url=url),
    )
