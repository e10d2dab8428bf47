"""Create asks table for pending anonymous questions

Revision ID: 001_asks_table
Revises:
Create Date: 2026-10-19
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_asks_table"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "asks",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("ip_address", sa.String(), nullable=False),
        sa.Column("user_agent", sa.String(), nullable=False, server_default=""),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("expire_after", sa.Integer(), nullable=False),
    )
    op.create_index("ix_asks_expire_after", "asks", ["expire_after"])


def downgrade() -> None:
    op.drop_index("ix_asks_expire_after", table_name="asks")
    op.drop_table("asks")
