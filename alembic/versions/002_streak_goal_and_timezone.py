"""Streak goal and reference time zone columns.

Revision ID: 002_streak_goal_and_timezone
Revises: 001_initial
Create Date: 2026-09-21

user_settings.daily_session_goal and user_settings.timezone drive goal_met
and streak dates; daily_streaks.timezone records the zone each row was
written in. ADD COLUMN IF NOT EXISTS keeps this a no-op where create_all
ran first.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "002_streak_goal_and_timezone"
down_revision: Union[str, None] = "001_initial"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    conn = op.get_bind()
    if conn.dialect.name != "postgresql":
        # SQLite dev databases are built by create_all with the current schema
        return
    conn.execute(
        sa.text(
            """
            ALTER TABLE user_settings
            ADD COLUMN IF NOT EXISTS daily_session_goal INTEGER NOT NULL DEFAULT 5;
            """
        )
    )
    conn.execute(
        sa.text(
            """
            ALTER TABLE user_settings
            ADD COLUMN IF NOT EXISTS timezone VARCHAR NOT NULL DEFAULT 'UTC';
            """
        )
    )
    conn.execute(
        sa.text(
            """
            ALTER TABLE daily_streaks
            ADD COLUMN IF NOT EXISTS timezone VARCHAR NOT NULL DEFAULT 'UTC';
            """
        )
    )


def downgrade() -> None:
    op.drop_column("daily_streaks", "timezone")
    op.drop_column("user_settings", "timezone")
    op.drop_column("user_settings", "daily_session_goal")
