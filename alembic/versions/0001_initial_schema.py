"""initial_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19

Creates the events, resources and resourceRequests tables.
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # --- events ---
    op.create_table(
        "events",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
    )

    # --- resources ---
    op.create_table(
        "resources",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("location", sa.String(255), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="Available"),
    )

    # --- resourceRequests ---
    op.create_table(
        "resourceRequests",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("resourceId", sa.String(36), nullable=False),
        sa.Column("resourceName", sa.String(255), nullable=False),
        sa.Column("userId", sa.String(255), nullable=False),
        sa.Column("userName", sa.String(255), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("decided_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index(
        "ix_resource_requests_claim",
        "resourceRequests",
        ["userId", "resourceId", "status"],
    )


def downgrade() -> None:
    op.drop_index("ix_resource_requests_claim", table_name="resourceRequests")
    op.drop_table("resourceRequests")
    op.drop_table("resources")
    op.drop_table("events")
