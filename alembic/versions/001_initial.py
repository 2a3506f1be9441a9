"""Initial revision: no-op so alembic upgrade head succeeds.

Tables are created by app startup (Base.metadata.create_all).
Later revisions run the same DDL idempotently on PostgreSQL so a database
managed only through alembic ends up with the schema create_all builds.

Revision ID: 001_initial
Revises:
Create Date: 2026-09-14

"""
from typing import Sequence, Union

from alembic import op


revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    pass


def downgrade() -> None:
    pass
