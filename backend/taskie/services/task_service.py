"""
Taskie Backend - Task Service
===============================

What:  Task creation, listing, search, editing and the status lifecycle.
Who:   Called by the tasks router; ownership is checked here, role gates in
       the router.

Status lifecycle:
    pending ──(owner: PUT /status or PUT /complete)──▶ completed

    The move is one way. Setting a task to the status it already has is a
    no-op; completed → pending is rejected.

Query Patterns:
    - my tasks:  WHERE requester_id = :me [AND status = :s] ORDER BY created_at DESC
    - search:    WHERE status = 'pending' [AND filters...] ORDER BY created_at DESC
"""

import json
import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from taskie.config import settings
from taskie.exceptions import DatabaseError, ForbiddenError, NotFoundError, ValidationError
from taskie.models.reference import JobCategory
from taskie.models.task import STATUS_COMPLETED, STATUS_PENDING, TASK_STATUSES, Task
from taskie.models.user import User
from taskie.schemas.task import (
    TaskCreateData,
    TaskOut,
    TaskSearchParams,
    TaskUpdateRequest,
)
from taskie.services.file_service import UploadedImage, file_service

logger = logging.getLogger(__name__)

MIN_TASK_IMAGES = 2


def parse_location(raw: Optional[str]) -> dict:
    """Decode the JSON-string location sent in multipart bodies."""
    try:
        location = json.loads(raw) if raw else None
    except ValueError:
        raise ValidationError(
            "Invalid location format. Please select province and ward again.",
            field="location",
        )
    if (
        not isinstance(location, dict)
        or not location.get("province")
        or not location.get("ward")
    ):
        raise ValidationError("Please provide both province and ward", field="location")
    return {"province": str(location["province"]), "ward": str(location["ward"])}


def parse_price(raw: Optional[str]) -> float:
    try:
        price = float(raw)
    except (TypeError, ValueError):
        raise ValidationError("Please provide a valid price", field="price")
    if price != price or price < 0:
        raise ValidationError("Please provide a valid price", field="price")
    return price


def parse_deadline(raw: Optional[str]) -> datetime:
    """ISO 8601 date or datetime; naive values are taken as UTC."""
    value = (raw or "").strip()
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    try:
        deadline = datetime.fromisoformat(value)
    except ValueError:
        raise ValidationError("Please provide a valid deadline", field="deadline")
    if deadline.tzinfo is None:
        deadline = deadline.replace(tzinfo=timezone.utc)
    return deadline


class TaskService:
    """
    Business logic for tasks.

    Error Handling Strategy:
        Missing rows become NotFoundError, foreign owners ForbiddenError,
        state violations ValidationError. A failed task insert becomes
        DatabaseError after the written images are removed.
    """

    async def _get_task(self, db: AsyncSession, task_id: uuid.UUID) -> Task:
        task = await db.get(Task, task_id)
        if task is None:
            raise NotFoundError(resource="task", resource_id=str(task_id))
        return task

    async def _get_owned_task(
        self, db: AsyncSession, user: User, task_id: uuid.UUID, action: str
    ) -> Task:
        task = await self._get_task(db, task_id)
        if task.requester_id != user.id:
            raise ForbiddenError(
                f"Not authorized to {action} this task",
                context={"task_id": str(task_id)},
            )
        return task

    async def create_task(
        self,
        db: AsyncSession,
        requester: User,
        data: TaskCreateData,
        images: Sequence[UploadedImage],
    ) -> TaskOut:
        """
        Create a pending task owned by `requester`.

        Workflow:
            1. Required fields, location, price, deadline, image count
            2. Category lookup; its posting fee is copied onto the task
            3. Images validated then written to /uploads/tasks
            4. Row inserted; on failure the written images are removed

        Raises:
            ValidationError: any input rule, unknown category
        """
        title = (data.title or "").strip()
        description = (data.description or "").strip()
        category_name = (data.category or "").strip()
        if not title or not description or not category_name or not data.price or not data.deadline:
            raise ValidationError("Please provide all required fields")

        location = parse_location(data.location)
        price = parse_price(data.price)
        deadline = parse_deadline(data.deadline)

        if len(images) < MIN_TASK_IMAGES:
            raise ValidationError("Please upload at least 2 images of the task", field="images")
        if len(images) > settings.max_task_images:
            raise ValidationError(
                f"You can upload at most {settings.max_task_images} images",
                field="images",
            )

        result = await db.execute(select(JobCategory).where(JobCategory.name == category_name))
        category = result.scalar_one_or_none()
        if category is None:
            raise ValidationError("Invalid job category", field="category")

        image_urls = await file_service.store_many("tasks", images)

        task = Task(
            title=title,
            description=description,
            category=category.name,
            images=image_urls,
            location_province=location["province"],
            location_ward=location["ward"],
            price=price,
            posting_fee=category.posting_fee,
            deadline=deadline,
            requester_id=requester.id,
            status=STATUS_PENDING,
        )
        task.requester = requester
        db.add(task)
        try:
            await db.flush()
        except SQLAlchemyError as e:
            await file_service.cleanup(image_urls)
            raise DatabaseError(
                message="Failed to save task",
                context={"requester_id": str(requester.id), "error": str(e)},
            )

        logger.info("Task %s created by %s (%d images)", task.id, requester.id, len(image_urls))
        return TaskOut.model_validate(task)

    async def get_my_tasks(
        self, db: AsyncSession, requester: User, status: Optional[str] = None
    ) -> List[TaskOut]:
        query = select(Task).where(Task.requester_id == requester.id)
        if status and status != "all":
            query = query.where(Task.status == status)
        query = query.order_by(Task.created_at.desc())

        result = await db.execute(query)
        return [TaskOut.model_validate(t) for t in result.scalars().all()]

    async def search_tasks(self, db: AsyncSession, params: TaskSearchParams) -> List[TaskOut]:
        """
        Filter pending tasks. Every supplied filter narrows the result:
            keyword   case-insensitive substring of title OR description
            category  exact
            province, ward  exact
            min_price, max_price  inclusive bounds
        Completed tasks are never returned.
        """
        query = select(Task).where(Task.status == STATUS_PENDING)

        if params.keyword:
            query = query.where(
                or_(
                    Task.title.icontains(params.keyword, autoescape=True),
                    Task.description.icontains(params.keyword, autoescape=True),
                )
            )
        if params.category:
            query = query.where(Task.category == params.category)
        if params.province:
            query = query.where(Task.location_province == params.province)
        if params.ward:
            query = query.where(Task.location_ward == params.ward)
        if params.min_price is not None:
            query = query.where(Task.price >= params.min_price)
        if params.max_price is not None:
            query = query.where(Task.price <= params.max_price)

        result = await db.execute(query.order_by(Task.created_at.desc()))
        return [TaskOut.model_validate(t) for t in result.scalars().all()]

    async def get_task(self, db: AsyncSession, task_id: uuid.UUID) -> TaskOut:
        return TaskOut.model_validate(await self._get_task(db, task_id))

    async def update_task(
        self, db: AsyncSession, user: User, task_id: uuid.UUID, data: TaskUpdateRequest
    ) -> TaskOut:
        """Only description and price are editable, and only while pending."""
        task = await self._get_owned_task(db, user, task_id, "update")
        if task.status == STATUS_COMPLETED:
            raise ValidationError("Cannot edit a completed task")

        if data.description and data.description.strip():
            task.description = data.description.strip()
        if data.price is not None:
            task.price = data.price

        await db.flush()
        return TaskOut.model_validate(task)

    async def delete_task(self, db: AsyncSession, user: User, task_id: uuid.UUID) -> None:
        """
        Remove the task row. Favorites go with it; messages keep the stale
        task id, drop out of conversation lists and stay readable in the
        conversation detail. Image files are
        left on disk.
        """
        task = await self._get_owned_task(db, user, task_id, "delete")
        await db.delete(task)
        await db.flush()
        logger.info("Task %s deleted by %s", task_id, user.id)

    async def upload_payment_proof(
        self,
        db: AsyncSession,
        user: User,
        task_id: uuid.UUID,
        image: Optional[UploadedImage],
    ) -> str:
        """The proof is stored and accepted as-is; nobody verifies it."""
        if image is None:
            raise ValidationError("Please upload a payment proof image", field="paymentProof")
        task = await self._get_owned_task(db, user, task_id, "update")

        task.payment_proof_url = await file_service.store("payments", image)
        await db.flush()
        return task.payment_proof_url

    async def update_status(
        self, db: AsyncSession, user: User, task_id: uuid.UUID, status: Optional[str]
    ) -> TaskOut:
        task = await self._get_owned_task(db, user, task_id, "update")
        if status not in TASK_STATUSES:
            raise ValidationError("Invalid status value", field="status")
        if task.status == STATUS_COMPLETED and status == STATUS_PENDING:
            raise ValidationError("A completed task cannot be reopened", field="status")

        if task.status != status:
            task.status = status
            await db.flush()
            logger.info("Task %s status -> %s", task.id, status)
        return TaskOut.model_validate(task)

    async def complete_task(self, db: AsyncSession, user: User, task_id: uuid.UUID) -> TaskOut:
        task = await self._get_owned_task(db, user, task_id, "complete")
        if task.status != STATUS_PENDING:
            raise ValidationError("Only pending tasks can be marked as completed")

        task.status = STATUS_COMPLETED
        await db.flush()
        logger.info("Task %s completed", task.id)
        return TaskOut.model_validate(task)


# ── Singleton Instance ────────────────────────────────────────────────────
task_service = TaskService()
