"""taxonomy_schema

Create the tag taxonomy schema:
- Tags (hierarchy via parent_id with materialized path/label/level)
- Posts (only what tagging needs: title and publish time)
- Post tags (many-to-many)
- Tag follows (weighted user follows)

Revision ID: 3c1f9a7d2e64
Revises:
Create Date: 2026-10-18 10:12:41.318204

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f9a7d2e64"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    op.create_table(
        "tags",
        sa.Column(
            "id",
            postgresql.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("slug", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("color", sa.String(length=32), nullable=True),
        sa.Column("icon", sa.String(length=255), nullable=True),
        sa.Column("meta_title", sa.String(length=255), nullable=True),
        sa.Column("meta_description", sa.Text(), nullable=True),
        sa.Column("og_image", sa.Text(), nullable=True),
        sa.Column("parent_id", postgresql.UUID(), nullable=True),
        sa.Column("path", sa.Text(), nullable=True),
        sa.Column("label", sa.String(length=255), nullable=True),
        sa.Column("level", sa.Integer(), server_default="1", nullable=False),
        sa.Column("usage_count", sa.Integer(), server_default="0", nullable=False),
        sa.Column("featured", sa.Boolean(), server_default="false", nullable=False),
        sa.Column("trending", sa.Boolean(), server_default="false", nullable=False),
        sa.Column("locked", sa.Boolean(), server_default="false", nullable=False),
        sa.Column("protected", sa.Boolean(), server_default="false", nullable=False),
        sa.Column(
            "synonyms",
            postgresql.ARRAY(sa.Text()),
            server_default="{}",
            nullable=False,
        ),
        sa.Column("synonym_hits", sa.Integer(), server_default="0", nullable=False),
        sa.Column(
            "linked_tag_ids",
            postgresql.ARRAY(postgresql.UUID()),
            server_default="{}",
            nullable=False,
        ),
        sa.Column("merge_count", sa.Integer(), server_default="0", nullable=False),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("slug"),
        sa.ForeignKeyConstraint(["parent_id"], ["tags.id"], ondelete="SET NULL"),
        sa.CheckConstraint("level >= 1", name="tag_level_positive"),
        sa.CheckConstraint(
            "parent_id IS NULL OR parent_id <> id", name="tag_not_own_parent"
        ),
    )
    op.create_index("idx_tags_parent_id", "tags", ["parent_id"])
    op.create_index(
        "idx_tags_usage_count", "tags", [sa.text("usage_count DESC")]
    )
    op.create_index("idx_tags_trending", "tags", ["trending"])

    op.create_table(
        "posts",
        sa.Column(
            "id",
            postgresql.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("title", sa.String(length=300), nullable=False),
        sa.Column("published_at", postgresql.TIMESTAMP(timezone=True), nullable=True),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_posts_published_at", "posts", [sa.text("published_at DESC")]
    )

    op.create_table(
        "post_tags",
        sa.Column(
            "id",
            postgresql.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("post_id", postgresql.UUID(), nullable=False),
        sa.Column("tag_id", postgresql.UUID(), nullable=False),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["post_id"], ["posts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["tag_id"], ["tags.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("post_id", "tag_id", name="uq_post_tag"),
    )
    op.create_index("idx_post_tags_post_id", "post_tags", ["post_id"])
    op.create_index("idx_post_tags_tag_id", "post_tags", ["tag_id"])

    op.create_table(
        "tag_follows",
        sa.Column(
            "id",
            postgresql.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("tag_id", postgresql.UUID(), nullable=False),
        sa.Column("user_id", postgresql.UUID(), nullable=False),
        sa.Column("weight", sa.Integer(), server_default="1", nullable=False),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["tag_id"], ["tags.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("tag_id", "user_id", name="uq_tag_follow"),
        sa.CheckConstraint("weight >= 1", name="follow_weight_positive"),
    )
    op.create_index("idx_tag_follows_user_id", "tag_follows", ["user_id"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_tag_follows_user_id", table_name="tag_follows")
    op.drop_table("tag_follows")
    op.drop_index("idx_post_tags_tag_id", table_name="post_tags")
    op.drop_index("idx_post_tags_post_id", table_name="post_tags")
    op.drop_table("post_tags")
    op.drop_index("idx_posts_published_at", table_name="posts")
    op.drop_table("posts")
    op.drop_index("idx_tags_trending", table_name="tags")
    op.drop_index("idx_tags_usage_count", table_name="tags")
    op.drop_index("idx_tags_parent_id", table_name="tags")
    op.drop_table("tags")
