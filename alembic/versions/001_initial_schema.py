"""Initial schema - focus sessions, custom categories, app state

Revision ID: 001
Revises:
Create Date: 2026-10-19
"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Focus sessions
    op.create_table(
        "focus_sessions",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("duration_minutes", sa.Float(), nullable=False, server_default="0"),
        sa.Column("category", sa.String(64), nullable=False, server_default="untagged"),
        sa.Column("coins_earned", sa.Float(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id", name="pk_focus_sessions"),
    )
    op.create_index("ix_focus_sessions_date", "focus_sessions", ["date"])

    # Custom categories
    op.create_table(
        "custom_categories",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("icon", sa.String(100), nullable=False),
        sa.Column("color", sa.String(20), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id", name="pk_custom_categories"),
    )

    # App state (flat key-value)
    op.create_table(
        "app_state",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("key", sa.String(100), nullable=False),
        sa.Column("value", sa.JSON(), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id", name="pk_app_state"),
        sa.UniqueConstraint("key", name="uq_app_state_key"),
    )


def downgrade() -> None:
    op.drop_table("app_state")
    op.drop_table("custom_categories")
    op.drop_index("ix_focus_sessions_date", table_name="focus_sessions")
    op.drop_table("focus_sessions")
