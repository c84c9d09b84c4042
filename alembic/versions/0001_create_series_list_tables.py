"""create favorite and ignored series tables

Revision ID: 3f1c9a7e2b40
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision: str = "3f1c9a7e2b40"
down_revision: str | None = None
branch_labels: str | None = None
depends_on: str | None = None


def _create_series_list_table(table: str, timestamp_column: str) -> None:
    op.create_table(
        table,
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("series_tmdb_id", sa.Integer(), nullable=False),
        sa.Column(timestamp_column, sa.DateTime(timezone=True), nullable=False, server_default=sa.text("NOW()")),
        sa.UniqueConstraint("user_id", "series_tmdb_id", name=f"uq_{table}_user_series"),
    )
    op.create_index(f"ix_{table}_user_id", table, ["user_id"])


def upgrade() -> None:
    _create_series_list_table("user_favorite_series", "added_at")
    _create_series_list_table("user_ignored_series", "ignored_at")


def downgrade() -> None:
    for table in ("user_ignored_series", "user_favorite_series"):
        op.drop_index(f"ix_{table}_user_id", table_name=table)
        op.drop_table(table)
