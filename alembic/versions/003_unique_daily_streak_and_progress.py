"""Unique (user_id, date) on daily_streaks and (user_id, challenge_id) on progress.

Revision ID: 003_unique_daily_streak_and_progress
Revises: 002_streak_goal_and_timezone
Create Date: 2026-09-28

Skipped when create_all already created the constraints.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "003_unique_daily_streak_and_progress"
down_revision: Union[str, None] = "002_streak_goal_and_timezone"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _constraint_exists(conn, table: str, name: str) -> bool:
    return name in {
        c["name"] for c in sa.inspect(conn).get_unique_constraints(table)
    }


def upgrade() -> None:
    conn = op.get_bind()
    if conn.dialect.name != "postgresql":
        # SQLite dev databases are built by create_all with the current schema
        return

    if not _constraint_exists(conn, "daily_streaks", "uq_daily_streaks_user_date"):
        op.create_unique_constraint(
            "uq_daily_streaks_user_date", "daily_streaks", ["user_id", "date"]
        )

    if not _constraint_exists(conn, "user_challenge_progress", "uq_challenge_progress_user_challenge"):
        op.create_unique_constraint(
            "uq_challenge_progress_user_challenge",
            "user_challenge_progress",
            ["user_id", "challenge_id"],
        )


def downgrade() -> None:
    op.drop_constraint("uq_challenge_progress_user_challenge", "user_challenge_progress", type_="unique")
    op.drop_constraint("uq_daily_streaks_user_date", "daily_streaks", type_="unique")
