"""create roles and positions tables

Revision ID: 001
Revises:
Create Date: 2026-09-14 10:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    roles = op.create_table(
        "roles",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("description", sa.String(255), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    op.create_index("ix_roles_id", "roles", ["id"], unique=False)
    op.create_index("ix_roles_name", "roles", ["name"], unique=False)

    positions = op.create_table(
        "positions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("key", sa.String(10), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("key"),
    )
    op.create_index("ix_positions_id", "positions", ["id"], unique=False)
    op.create_index("ix_positions_key", "positions", ["key"], unique=False)

    op.bulk_insert(
        roles,
        [
            {"name": "admin", "description": "Full access to every resource"},
            {"name": "building_manager", "description": "Manages apartments and lease requests"},
            {"name": "resident", "description": "Rents or owns an apartment in the building"},
            {"name": "owner", "description": "Owns an apartment in the building"},
            {"name": "user", "description": "Registered visitor"},
        ],
    )
    op.bulk_insert(
        positions,
        [
            {"key": "P0", "name": "None"},
            {"key": "P1", "name": "Manager"},
            {"key": "P2", "name": "Developer"},
            {"key": "P3", "name": "Designer"},
        ],
    )


def downgrade() -> None:
    op.drop_index("ix_positions_key", table_name="positions")
    op.drop_index("ix_positions_id", table_name="positions")
    op.drop_table("positions")
    op.drop_index("ix_roles_name", table_name="roles")
    op.drop_index("ix_roles_id", table_name="roles")
    op.drop_table("roles")
