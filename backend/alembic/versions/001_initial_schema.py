"""Create the marketplace schema

Revision ID: 001
Revises: None
Create Date: 2025-01-10 00:00:00.000000+00:00

What:  users, job_categories, locations, tasks, messages, favorites.

Foreign key behavior:
    tasks.requester_id      → users     ON DELETE CASCADE
    messages.task_id        no constraint; outlives its task unchanged
    messages.sender_id      → users     ON DELETE CASCADE
    messages.receiver_id    → users     ON DELETE CASCADE
    favorites.task_id       → tasks     ON DELETE CASCADE
    favorites.tasker_id     → users     ON DELETE CASCADE

Rollback: downgrade() drops every table (destructive).
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id_column() -> sa.Column:
    return sa.Column(
        "id",
        postgresql.UUID(as_uuid=True),
        server_default=sa.text("gen_random_uuid()"),
        nullable=False,
    )


def _timestamp_columns():
    return [
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        _id_column(),
        sa.Column("full_name", sa.Text(), nullable=False),
        sa.Column("date_of_birth", sa.Date(), nullable=False),
        sa.Column("email", sa.Text(), nullable=True),
        sa.Column("phone", sa.String(11), nullable=True),
        sa.Column("password_hash", sa.String(256), nullable=False),
        sa.Column("avatar_url", sa.String(255), nullable=True),
        sa.Column("proof_of_experience_url", sa.String(255), nullable=True),
        sa.Column(
            "current_role",
            sa.String(20),
            nullable=True,
            comment="requester, tasker, admin; NULL until chosen",
        ),
        *_timestamp_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
        sa.UniqueConstraint("phone"),
        sa.CheckConstraint("email IS NOT NULL OR phone IS NOT NULL", name="ck_users_email_or_phone"),
    )
    op.create_index("ix_users_created_at", "users", ["created_at"])

    op.create_table(
        "job_categories",
        _id_column(),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("posting_fee", sa.Float(), nullable=False, comment="VND per posted task"),
        sa.Column("description", sa.Text(), nullable=False, server_default=sa.text("''")),
        *_timestamp_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    op.create_index("ix_job_categories_created_at", "job_categories", ["created_at"])

    op.create_table(
        "locations",
        _id_column(),
        sa.Column("province", sa.String(120), nullable=False),
        sa.Column("wards", sa.JSON(), nullable=False, comment="Ordered ward names"),
        *_timestamp_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("province"),
    )
    op.create_index("ix_locations_created_at", "locations", ["created_at"])

    op.create_table(
        "tasks",
        _id_column(),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("category", sa.String(100), nullable=False),
        sa.Column("images", sa.JSON(), nullable=False, comment="Relative /uploads/tasks/... paths"),
        sa.Column("location_province", sa.Text(), nullable=False),
        sa.Column("location_ward", sa.Text(), nullable=False),
        sa.Column("price", sa.Float(), nullable=False),
        sa.Column(
            "posting_fee",
            sa.Float(),
            nullable=False,
            comment="Copied from the category at creation",
        ),
        sa.Column("deadline", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("payment_proof_url", sa.String(255), nullable=True),
        sa.Column(
            "status",
            sa.String(20),
            nullable=False,
            server_default=sa.text("'pending'"),
            comment="pending, completed",
        ),
        sa.Column("requester_id", postgresql.UUID(as_uuid=True), nullable=False),
        *_timestamp_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["requester_id"], ["users.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_tasks_created_at", "tasks", ["created_at"])
    op.create_index("ix_tasks_category", "tasks", ["category"])
    op.create_index("idx_tasks_requester_status", "tasks", ["requester_id", "status"])
    op.create_index("idx_tasks_location", "tasks", ["location_province", "location_ward"])
    op.create_index("idx_tasks_price", "tasks", ["price"])

    op.create_table(
        "messages",
        _id_column(),
        sa.Column("task_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("sender_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("receiver_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("is_read", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        *_timestamp_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["sender_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["receiver_id"], ["users.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_messages_created_at", "messages", ["created_at"])
    op.create_index(
        "idx_messages_task_sender_receiver",
        "messages",
        ["task_id", "sender_id", "receiver_id"],
    )

    op.create_table(
        "favorites",
        _id_column(),
        sa.Column("tasker_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("task_id", postgresql.UUID(as_uuid=True), nullable=False),
        *_timestamp_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["tasker_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["task_id"], ["tasks.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("tasker_id", "task_id", name="uq_favorites_tasker_task"),
    )
    op.create_index("ix_favorites_created_at", "favorites", ["created_at"])


def downgrade() -> None:
    op.drop_table("favorites")
    op.drop_table("messages")
    op.drop_table("tasks")
    op.drop_table("locations")
    op.drop_table("job_categories")
    op.drop_table("users")
