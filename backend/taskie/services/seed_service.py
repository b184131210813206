"""
Taskie Backend - Seed Service
===============================

What:  Idempotent seeding of reference data and the default admin, plus an
       optional demo data set.
Who:   POST /api/admin/seed, POST /api/admin/reset-and-seed, and the startup
       hook when AUTO_SEED is on.

Seeding rules:
    categories  inserted when the table is empty; force clears and reinserts
    locations   inserted when empty; otherwise only missing provinces are
                added; force clears and reinserts
    admin       created when no user has the default admin email
    demo        (comprehensive) demo requesters/taskers are created or reset
                to their demo values, then tasks, messages and favorites are
                added on top
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Dict, List

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from taskie import seed_data
from taskie.config import settings
from taskie.models.favorite import Favorite
from taskie.models.message import Message
from taskie.models.reference import JobCategory, Location
from taskie.models.task import STATUS_PENDING, Task
from taskie.models.user import ROLE_ADMIN, ROLE_REQUESTER, ROLE_TASKER, User
from taskie.schemas.admin import SeedReport

logger = logging.getLogger(__name__)


class SeedService:

    async def seed(
        self, db: AsyncSession, force: bool = False, comprehensive: bool = False
    ) -> SeedReport:
        report = SeedReport()
        report.categories = await self._seed_categories(db, force)
        report.locations = await self._seed_locations(db, force)
        report.admin_created = await self._seed_admin(db)

        if comprehensive:
            await self._seed_demo(db, report)

        logger.info(
            "Seed complete: %d categories, %d locations, admin_created=%s, "
            "%d demo users, %d tasks, %d messages, %d favorites",
            report.categories, report.locations, report.admin_created,
            report.users, report.tasks, report.messages, report.favorites,
        )
        return report

    async def _count(self, db: AsyncSession, model) -> int:
        result = await db.execute(select(func.count()).select_from(model))
        return result.scalar() or 0

    async def _seed_categories(self, db: AsyncSession, force: bool) -> int:
        existing = await self._count(db, JobCategory)
        if existing and not force:
            logger.info("Job categories already exist (%d found), skipping", existing)
            return 0
        if existing:
            await db.execute(delete(JobCategory))

        db.add_all(JobCategory(**item) for item in seed_data.CATEGORIES)
        await db.flush()
        return len(seed_data.CATEGORIES)

    async def _seed_locations(self, db: AsyncSession, force: bool) -> int:
        existing = await self._count(db, Location)
        if force and existing:
            await db.execute(delete(Location))
            existing = 0

        if existing == 0:
            db.add_all(
                Location(province=item["province"], wards=list(item["wards"]))
                for item in seed_data.LOCATIONS
            )
            await db.flush()
            return len(seed_data.LOCATIONS)

        result = await db.execute(select(Location.province))
        known = set(result.scalars().all())
        missing = [item for item in seed_data.LOCATIONS if item["province"] not in known]
        for item in missing:
            db.add(Location(province=item["province"], wards=list(item["wards"])))
            logger.info("Added location %s (%d wards)", item["province"], len(item["wards"]))
        await db.flush()
        return len(missing)

    async def _seed_admin(self, db: AsyncSession) -> bool:
        result = await db.execute(
            select(User).where(User.email == settings.default_admin_email.lower())
        )
        if result.scalar_one_or_none() is not None:
            return False

        admin = User(
            full_name=seed_data.ADMIN_FULL_NAME,
            date_of_birth=seed_data.ADMIN_DATE_OF_BIRTH,
            email=settings.default_admin_email.lower(),
            current_role=ROLE_ADMIN,
        )
        admin.set_password(settings.default_admin_password)
        db.add(admin)
        await db.flush()
        logger.info("Created default admin user %s", admin.email)
        return True

    async def _upsert_demo_user(self, db: AsyncSession, data: Dict, role: str) -> User:
        result = await db.execute(select(User).where(User.email == data["email"]))
        user = result.scalar_one_or_none()
        if user is None:
            # A phone may already belong to someone else registered by hand
            result = await db.execute(select(User).where(User.phone == data["phone"]))
            user = result.scalar_one_or_none()
        if user is None:
            user = User()
            db.add(user)

        user.full_name = data["full_name"]
        user.date_of_birth = data["date_of_birth"]
        user.email = data["email"]
        user.phone = data["phone"]
        user.current_role = role
        user.set_password(seed_data.DEMO_PASSWORD)
        await db.flush()
        return user

    async def _seed_demo(self, db: AsyncSession, report: SeedReport) -> None:
        requesters = [
            await self._upsert_demo_user(db, data, ROLE_REQUESTER)
            for data in seed_data.DEMO_REQUESTERS
        ]
        taskers = [
            await self._upsert_demo_user(db, data, ROLE_TASKER)
            for data in seed_data.DEMO_TASKERS
        ]
        report.users = len(requesters) + len(taskers)

        result = await db.execute(select(JobCategory))
        fees = {c.name: c.posting_fee for c in result.scalars().all()}
        result = await db.execute(select(Location))
        wards = {loc.province: loc.wards for loc in result.scalars().all()}

        now = datetime.now(timezone.utc)
        tasks: List[Task] = []
        for i, item in enumerate(seed_data.DEMO_TASKS):
            province_wards = wards.get(item["province"]) or [""]
            task = Task(
                title=item["title"],
                description=item["description"],
                category=item["category"],
                images=[
                    f"/uploads/tasks/sample-task-{2 * i + 1}.jpg",
                    f"/uploads/tasks/sample-task-{2 * i + 2}.jpg",
                ],
                location_province=item["province"],
                location_ward=province_wards[min(item["ward"], len(province_wards) - 1)],
                price=item["price"],
                posting_fee=fees.get(item["category"], 10000),
                deadline=now + timedelta(days=item["deadline_days"]),
                payment_proof_url=(
                    f"/uploads/payments/sample-payment-{i + 1}.jpg" if item["payment_proof"] else None
                ),
                status=item["status"],
                requester_id=requesters[item["requester"]].id,
                created_at=now - timedelta(minutes=len(seed_data.DEMO_TASKS) - i),
            )
            db.add(task)
            tasks.append(task)
        await db.flush()
        report.tasks = len(tasks)

        pending = [t for t in tasks if t.status == STATUS_PENDING]
        people = {"requester": requesters, "tasker": taskers}
        for i, item in enumerate(seed_data.DEMO_MESSAGES):
            sender_kind, sender_idx = item["sender"]
            receiver_kind, receiver_idx = item["receiver"]
            db.add(
                Message(
                    task_id=pending[item["task"]].id,
                    sender_id=people[sender_kind][sender_idx].id,
                    receiver_id=people[receiver_kind][receiver_idx].id,
                    content=item["content"],
                    is_read=item["is_read"],
                    created_at=now - timedelta(seconds=len(seed_data.DEMO_MESSAGES) - i),
                )
            )
        report.messages = len(seed_data.DEMO_MESSAGES)

        for tasker_idx, task_idx in seed_data.DEMO_FAVORITES:
            db.add(Favorite(tasker_id=taskers[tasker_idx].id, task_id=pending[task_idx].id))
        report.favorites = len(seed_data.DEMO_FAVORITES)

        await db.flush()


seed_service = SeedService()
