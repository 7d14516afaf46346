"""create lease_requests table

Revision ID: 005
Revises: 004
Create Date: 2026-09-14 10:40:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "005"
down_revision: Union[str, None] = "004"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "lease_requests",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("apartment_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("type", sa.String(10), nullable=False, server_default="rent"),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending_manager"),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("monthly_rent", sa.Numeric(10, 2), nullable=True),
        sa.Column("total_price", sa.Numeric(12, 2), nullable=True),
        sa.Column("note", sa.String(500), nullable=True),
        sa.Column("decision_by", sa.Integer(), nullable=True),
        sa.Column("decision_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["apartment_id"], ["apartments.id"]),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["decision_by"], ["users.id"]),
        sa.CheckConstraint(
            "end_date IS NULL OR start_date IS NULL OR end_date >= start_date",
            name="ck_lease_requests_dates",
        ),
    )
    op.create_index("ix_lease_requests_id", "lease_requests", ["id"], unique=False)
    op.create_index("ix_lease_requests_apartment_id", "lease_requests", ["apartment_id"], unique=False)
    op.create_index("ix_lease_requests_user_id", "lease_requests", ["user_id"], unique=False)
    op.create_index("ix_lease_requests_type", "lease_requests", ["type"], unique=False)
    op.create_index("ix_lease_requests_status", "lease_requests", ["status"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_lease_requests_status", table_name="lease_requests")
    op.drop_index("ix_lease_requests_type", table_name="lease_requests")
    op.drop_index("ix_lease_requests_user_id", table_name="lease_requests")
    op.drop_index("ix_lease_requests_apartment_id", table_name="lease_requests")
    op.drop_index("ix_lease_requests_id", table_name="lease_requests")
    op.drop_table("lease_requests")
