"""create doses table

Dose calendar entries. ``group_id`` links the doses of one recurring
series; ``date`` is a calendar date with no time zone.

Revision ID: c5d7e9f1a3b2
Revises: 8c4e2d6a1b95
Create Date: 2026-10-12 09:52:18.664027

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "c5d7e9f1a3b2"
down_revision: Union[str, Sequence[str], None] = "8c4e2d6a1b95"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "doses",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("peptide", sa.String(length=255), nullable=False),
        sa.Column("dose", sa.String(length=64), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("group_id", sa.String(length=64), nullable=True),
        sa.Column(
            "completed", sa.Boolean(), server_default="false", nullable=False
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["users.id"],
            name=op.f("fk_doses_user_id_users"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_doses")),
    )
    # Calendar reads filter by user and sort by date
    op.create_index("ix_doses_user_id_date", "doses", ["user_id", "date"])
    op.create_index("ix_doses_group_id", "doses", ["group_id"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_doses_group_id", table_name="doses")
    op.drop_index("ix_doses_user_id_date", table_name="doses")
    op.drop_table("doses")
