"""create calculator_settings table

One row per user holding the reconstitution calculator inputs.

Revision ID: 8c4e2d6a1b95
Revises: 3f1a9c2b7d10
Create Date: 2026-10-12 09:31:47.502913

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "8c4e2d6a1b95"
down_revision: Union[str, Sequence[str], None] = "3f1a9c2b7d10"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "calculator_settings",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("syringe_size", sa.String(length=16), nullable=False),
        sa.Column("peptide_amount", sa.Numeric(12, 4), nullable=False),
        sa.Column("water_amount", sa.Numeric(12, 4), nullable=False),
        sa.Column("desired_dose", sa.Numeric(12, 4), nullable=False),
        sa.Column("dose_unit", sa.String(length=8), nullable=False),
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
            name=op.f("fk_calculator_settings_user_id_users"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_calculator_settings")),
        sa.UniqueConstraint("user_id", name=op.f("uq_calculator_settings_user_id")),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("calculator_settings")
