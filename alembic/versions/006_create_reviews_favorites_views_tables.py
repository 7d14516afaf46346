"""create apartment reviews, favorites and views tables

Revision ID: 006
Revises: 005
Create Date: 2026-09-14 10:50:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "006"
down_revision: Union[str, None] = "005"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "apartment_reviews",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("apartment_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("comment", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["apartment_id"], ["apartments.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("user_id", "apartment_id", name="uq_user_apartment_review"),
        sa.CheckConstraint("rating BETWEEN 1 AND 5", name="ck_apartment_reviews_rating"),
    )
    op.create_index("ix_apartment_reviews_id", "apartment_reviews", ["id"], unique=False)
    op.create_index(
        "ix_apartment_reviews_apartment_id", "apartment_reviews", ["apartment_id"], unique=False
    )
    op.create_index("ix_apartment_reviews_user_id", "apartment_reviews", ["user_id"], unique=False)

    op.create_table(
        "apartment_favorites",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("apartment_id", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["apartment_id"], ["apartments.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("user_id", "apartment_id", name="uq_user_apartment_favorite"),
    )
    op.create_index("ix_apartment_favorites_id", "apartment_favorites", ["id"], unique=False)
    op.create_index(
        "ix_apartment_favorites_user_id", "apartment_favorites", ["user_id"], unique=False
    )
    op.create_index(
        "ix_apartment_favorites_apartment_id", "apartment_favorites", ["apartment_id"], unique=False
    )

    op.create_table(
        "apartment_views",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=True),
        sa.Column("apartment_id", sa.Integer(), nullable=False),
        sa.Column("viewed_at", sa.DateTime(), nullable=False),
        sa.Column("ip_address", sa.String(45), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["apartment_id"], ["apartments.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_apartment_views_id", "apartment_views", ["id"], unique=False)
    op.create_index(
        "ix_apartment_views_apartment_id", "apartment_views", ["apartment_id"], unique=False
    )
    op.create_index(
        "ix_apartment_views_user_viewed_at", "apartment_views", ["user_id", "viewed_at"], unique=False
    )
    op.create_index(
        "ix_apartment_views_ip_apartment_viewed_at",
        "apartment_views",
        ["ip_address", "apartment_id", "viewed_at"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_apartment_views_ip_apartment_viewed_at", table_name="apartment_views")
    op.drop_index("ix_apartment_views_user_viewed_at", table_name="apartment_views")
    op.drop_index("ix_apartment_views_apartment_id", table_name="apartment_views")
    op.drop_index("ix_apartment_views_id", table_name="apartment_views")
    op.drop_table("apartment_views")
    op.drop_index("ix_apartment_favorites_apartment_id", table_name="apartment_favorites")
    op.drop_index("ix_apartment_favorites_user_id", table_name="apartment_favorites")
    op.drop_index("ix_apartment_favorites_id", table_name="apartment_favorites")
    op.drop_table("apartment_favorites")
    op.drop_index("ix_apartment_reviews_user_id", table_name="apartment_reviews")
    op.drop_index("ix_apartment_reviews_apartment_id", table_name="apartment_reviews")
    op.drop_index("ix_apartment_reviews_id", table_name="apartment_reviews")
    op.drop_table("apartment_reviews")
