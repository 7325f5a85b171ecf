"""create attempts

Revision ID: 003
Revises: 002
Create Date: 2026-01-14

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "attempts",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_email", sa.String(255), nullable=False, index=True),
        sa.Column("assignment_id", sa.String(36), nullable=False, index=True),
        sa.Column("query", sa.Text(), nullable=False),
        sa.Column("is_success", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("executed_at", sa.DateTime(), nullable=False, server_default=sa.func.now(), index=True),
    )


def downgrade() -> None:
    op.drop_table("attempts")
