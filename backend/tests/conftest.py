"""
Taskie Backend - Test Configuration (conftest.py)
===================================================

What:  Shared pytest fixtures for the test suite.
How:   Every test gets its own SQLite database file (aiosqlite) with foreign
       keys enforced, a temporary upload root, and factories for users,
       categories and tasks.

Fixture Hierarchy:
    Function-scoped:
    ├── engine / session_factory: fresh schema per test
    ├── db_session: one AsyncSession for service-level tests (flush only)
    ├── storage (autouse): file_service pointed at tmp_path/uploads
    ├── make_user / make_category / make_task: flush into db_session
    ├── create_user / create_category / create_task: committed rows for API tests
    └── client: httpx AsyncClient over the app, session dependency overridden
"""

import os
import tempfile

# Settings are read at import time; configure them before importing taskie
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["STORAGE_ROOT"] = tempfile.mkdtemp(prefix="taskie_test_")
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["ENVIRONMENT"] = "development"
os.environ["JWT_SECRET"] = "taskie-test-secret-0123456789abcdef0123456789"
os.environ["DEFAULT_ADMIN_EMAIL"] = "admin@taskie.com"
os.environ["DEFAULT_ADMIN_PASSWORD"] = "admin123"

from datetime import date, datetime, timedelta, timezone
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

import taskie.models  # noqa: F401
from taskie.database import Base, enable_sqlite_foreign_keys, get_db_session
from taskie.models.reference import JobCategory
from taskie.models.task import STATUS_PENDING, Task
from taskie.models.user import User
from taskie.security import create_access_token
from taskie.services.file_service import UploadedImage, file_service

DEFAULT_PASSWORD = "secret123"

# Smallest JPEG/PNG headers; content is never decoded
JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00\xff\xd9"
PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR"


# ══════════════════════════════════════════════════════════════════════════
# Builders
# ══════════════════════════════════════════════════════════════════════════

def build_user(role=None, email=None, phone=None, password=DEFAULT_PASSWORD, full_name="Test User", **extra):
    if email is None and phone is None:
        email = f"user-{uuid4().hex[:10]}@example.com"
    user = User(
        full_name=full_name,
        date_of_birth=date(1990, 1, 1),
        email=email,
        phone=phone,
        current_role=role,
        **extra,
    )
    user.set_password(password)
    return user


def build_task(requester, **overrides):
    values = {
        "title": "Assemble a bookshelf",
        "description": "Two-shelf bookshelf, tools provided",
        "category": "Assembly",
        "images": ["/uploads/tasks/task-1-1.jpg", "/uploads/tasks/task-1-2.jpg"],
        "location_province": "Hue",
        "location_ward": "Phu Hoi",
        "price": 200000,
        "posting_fee": 10000,
        "deadline": datetime.now(timezone.utc) + timedelta(days=3),
        "status": STATUS_PENDING,
        "requester_id": requester.id,
    }
    values.update(overrides)
    return Task(**values)


def image(filename="photo.jpg", content=JPEG_BYTES, content_type="image/jpeg"):
    return UploadedImage(filename=filename, content=content, content_type=content_type)


def auth_headers(user):
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


# ══════════════════════════════════════════════════════════════════════════
# Database
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'taskie.db'}")
    enable_sqlite_foreign_keys(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture(autouse=True)
def storage(tmp_path, monkeypatch):
    root = (tmp_path / "uploads").resolve()
    monkeypatch.setattr(file_service, "storage_root", root)
    file_service.ensure_directories()
    return root


# ══════════════════════════════════════════════════════════════════════════
# Service-level factories (same session as the test)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def make_user(db_session):
    async def _make(role=None, **kwargs):
        user = build_user(role=role, **kwargs)
        db_session.add(user)
        await db_session.flush()
        return user
    return _make


@pytest.fixture
def make_category(db_session):
    async def _make(name="Assembly", posting_fee=10000):
        category = JobCategory(name=name, posting_fee=posting_fee, description=f"{name} jobs")
        db_session.add(category)
        await db_session.flush()
        return category
    return _make


@pytest.fixture
def make_task(db_session):
    async def _make(requester, **overrides):
        task = build_task(requester, **overrides)
        task.requester = requester
        db_session.add(task)
        await db_session.flush()
        return task
    return _make


# ══════════════════════════════════════════════════════════════════════════
# API-level factories (committed, visible to request sessions)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def create_user(session_factory):
    async def _create(role=None, **kwargs):
        async with session_factory() as session:
            user = build_user(role=role, **kwargs)
            session.add(user)
            await session.commit()
            return user
    return _create


@pytest.fixture
def create_category(session_factory):
    async def _create(name="Assembly", posting_fee=10000):
        async with session_factory() as session:
            category = JobCategory(name=name, posting_fee=posting_fee, description=f"{name} jobs")
            session.add(category)
            await session.commit()
            return category
    return _create


@pytest.fixture
def create_task(session_factory):
    async def _create(requester, **overrides):
        async with session_factory() as session:
            task = build_task(requester, **overrides)
            session.add(task)
            await session.commit()
            return task
    return _create


@pytest_asyncio.fixture
async def client(session_factory):
    """HTTPX client talking to the app in-process; lifespan is not run."""
    from taskie.main import app

    async def override_get_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
