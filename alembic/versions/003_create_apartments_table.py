"""create apartments table

Revision ID: 003
Revises: 002
Create Date: 2026-09-14 10:20:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "apartments",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("apartment_number", sa.String(20), nullable=False),
        sa.Column("building", sa.String(100), nullable=True),
        sa.Column("floor", sa.Integer(), nullable=False),
        sa.Column("type", sa.String(20), nullable=False),
        sa.Column("area", sa.Numeric(8, 2), nullable=False),
        sa.Column("bedrooms", sa.Integer(), nullable=False),
        sa.Column("bathrooms", sa.Integer(), nullable=False),
        sa.Column("balconies", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("parking_slots", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("monthly_rent", sa.Numeric(10, 2), nullable=True),
        sa.Column("sale_price", sa.Numeric(12, 2), nullable=True),
        sa.Column("is_listed_for_rent", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_listed_for_sale", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("maintenance_fee", sa.Numeric(10, 2), nullable=False, server_default="0"),
        sa.Column("status", sa.String(20), nullable=False, server_default="vacant"),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("amenities", sa.JSON(), nullable=True),
        sa.Column("owner_id", sa.Integer(), nullable=True),
        sa.Column("tenant_id", sa.Integer(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["owner_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["tenant_id"], ["users.id"]),
        sa.UniqueConstraint("floor", "apartment_number", name="uq_apartments_floor_number"),
    )
    op.create_index("ix_apartments_id", "apartments", ["id"], unique=False)
    op.create_index("ix_apartments_status", "apartments", ["status"], unique=False)
    op.create_index("ix_apartments_owner_id", "apartments", ["owner_id"], unique=False)
    op.create_index("ix_apartments_tenant_id", "apartments", ["tenant_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_apartments_tenant_id", table_name="apartments")
    op.drop_index("ix_apartments_owner_id", table_name="apartments")
    op.drop_index("ix_apartments_status", table_name="apartments")
    op.drop_index("ix_apartments_id", table_name="apartments")
    op.drop_table("apartments")
