"""create carts table

Revision ID: 004
Revises: 003
Create Date: 2026-09-14 10:30:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "004"
down_revision: Union[str, None] = "003"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "carts",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("apartment_id", sa.Integer(), nullable=False),
        sa.Column("mode", sa.String(10), nullable=False, server_default="rent"),
        sa.Column("months", sa.Integer(), nullable=True),
        sa.Column("selected", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("price_snapshot", sa.Numeric(12, 2), nullable=True),
        sa.Column("deposit_snapshot", sa.Numeric(12, 2), nullable=True),
        sa.Column("maintenance_fee_snapshot", sa.Numeric(10, 2), nullable=True),
        sa.Column("note", sa.Text(), nullable=True),
        sa.Column("added_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["apartment_id"], ["apartments.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("user_id", "apartment_id", "mode", name="uq_cart_item"),
    )
    op.create_index("ix_carts_id", "carts", ["id"], unique=False)
    op.create_index("ix_carts_user_id", "carts", ["user_id"], unique=False)
    op.create_index("ix_carts_apartment_id", "carts", ["apartment_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_carts_apartment_id", table_name="carts")
    op.drop_index("ix_carts_user_id", table_name="carts")
    op.drop_index("ix_carts_id", table_name="carts")
    op.drop_table("carts")
