"""
Taskie Backend - Application Package Initializer
==================================================

What: The `taskie` package, a task-marketplace REST backend.
Who:  Imported by uvicorn (`taskie.main:app`), Alembic and pytest.

Architecture Note:
    ┌─────────────────────────────────────┐
    │    Routes (API Layer) + Auth gate   │  ← HTTP concerns, role checks
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Validation, aggregation
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
