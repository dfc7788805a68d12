"""create_user_and_follow_tables

Revision ID: 3f1c2a9d4b70
Revises:
Create Date: 2026-10-16 09:00:00.000000

"""

from alembic import op
import sqlalchemy as sa
import sqlmodel


# revision identifiers, used by Alembic.
revision = "3f1c2a9d4b70"
down_revision = None
branch_labels = None
depends_on = None


following_type = sa.Enum("USER", "TAG", "ARTICLE", "ARTICLE_WATCH", name="followingtype")


def upgrade() -> None:
    op.create_table(
        "user",
        sa.Column("id", sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column("username", sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column("full_name", sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column("email", sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column("bio", sqlmodel.sql.sqltypes.AutoString(length=500), nullable=True),
        sa.Column("profile_image_url", sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column("profile_image_uploaded_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("is_verified", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_user_username"), "user", ["username"], unique=True)

    op.create_table(
        "follow",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("follower_id", sqlmodel.sql.sqltypes.AutoString(length=64), nullable=False),
        sa.Column("following_id", sqlmodel.sql.sqltypes.AutoString(length=64), nullable=False),
        sa.Column("following_type", following_type, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("follower_id", "following_id", "following_type", name="uq_follow_edge"),
    )
    op.create_index("ix_follow_follower_type", "follow", ["follower_id", "following_type"])
    op.create_index("ix_follow_following_type", "follow", ["following_id", "following_type"])


def downgrade() -> None:
    op.drop_index("ix_follow_following_type", table_name="follow")
    op.drop_index("ix_follow_follower_type", table_name="follow")
    op.drop_table("follow")
    following_type.drop(op.get_bind(), checkfirst=True)
    op.drop_index(op.f("ix_user_username"), table_name="user")
    op.drop_table("user")
