"""create users table

Revision ID: 002
Revises: 001
Create Date: 2026-09-14 10:10:00.000000

"""

from datetime import datetime, timezone
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from passlib.context import CryptContext

# revision identifiers, used by Alembic.
revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("password_hash", sa.String(), nullable=False),
        sa.Column("first_name", sa.String(50), nullable=False),
        sa.Column("last_name", sa.String(50), nullable=False),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("phone_number", sa.String(20), nullable=True),
        sa.Column("gender", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("image", sa.String(500), nullable=True),
        sa.Column("role_id", sa.Integer(), nullable=False),
        sa.Column("position_id", sa.Integer(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["role_id"], ["roles.id"]),
        sa.ForeignKeyConstraint(["position_id"], ["positions.id"]),
    )
    op.create_index("ix_users_id", "users", ["id"], unique=False)
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    # Get settings from environment (will be loaded by Alembic env.py)
    from app.core.config import settings

    connection = op.get_bind()
    admin_role_result = connection.execute(
        sa.text("SELECT id FROM roles WHERE name = 'admin'")
    ).fetchone()

    if not admin_role_result:
        raise ValueError("Admin role not found. Make sure migration 001 has been run.")

    position_result = connection.execute(
        sa.text("SELECT id FROM positions WHERE key = 'P1'")
    ).fetchone()

    now = datetime.now(timezone.utc).replace(tzinfo=None)

    # Insert first admin user
    op.execute(
        sa.text(
            """
            INSERT INTO users (
                email, password_hash, first_name, last_name, gender,
                role_id, position_id, is_active, created_at, updated_at
            )
            VALUES (
                :email, :password_hash, :first_name, :last_name, :gender,
                :role_id, :position_id, :is_active, :created_at, :updated_at
            )
            """
        ).bindparams(
            email=settings.first_admin_email,
            password_hash=pwd_context.hash(settings.first_admin_password),
            first_name="System",
            last_name="Admin",
            gender=True,
            role_id=admin_role_result[0],
            position_id=position_result[0] if position_result else None,
            is_active=True,
            created_at=now,
            updated_at=now,
        )
    )


def downgrade() -> None:
    op.drop_index("ix_users_email", table_name="users")
    op.drop_index("ix_users_id", table_name="users")
    op.drop_table("users")
