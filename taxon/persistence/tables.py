"""SQLAlchemy table definitions for the tag taxonomy.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import ARRAY, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# TAGS TABLE
# ============================================================================
tags_table = Table(
    "tags",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("name", String(255), nullable=False),
    Column("slug", String(200), nullable=False, unique=True),
    Column("description", Text, nullable=True),
    Column("color", String(32), nullable=True),
    Column("icon", String(255), nullable=True),
    # SEO
    Column("meta_title", String(255), nullable=True),
    Column("meta_description", Text, nullable=True),
    Column("og_image", Text, nullable=True),
    # Hierarchy
    Column(
        "parent_id", UUID, ForeignKey("tags.id", ondelete="SET NULL"), nullable=True
    ),
    Column("path", Text, nullable=True),  # slugs root -> self joined with '/'
    Column("label", String(255), nullable=True),
    Column("level", Integer, nullable=False, server_default="1"),
    # Usage and flags
    Column("usage_count", Integer, nullable=False, server_default="0"),
    Column("featured", Boolean, nullable=False, server_default="false"),
    Column("trending", Boolean, nullable=False, server_default="false"),
    Column("locked", Boolean, nullable=False, server_default="false"),
    Column("protected", Boolean, nullable=False, server_default="false"),
    # Matching aids
    Column("synonyms", ARRAY(Text), nullable=False, server_default="{}"),
    Column("synonym_hits", Integer, nullable=False, server_default="0"),
    Column("linked_tag_ids", ARRAY(UUID), nullable=False, server_default="{}"),
    Column("merge_count", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("level >= 1", name="tag_level_positive"),
    CheckConstraint("parent_id IS NULL OR parent_id <> id", name="tag_not_own_parent"),
)

Index("idx_tags_parent_id", tags_table.c.parent_id)
Index("idx_tags_usage_count", tags_table.c.usage_count.desc())
Index("idx_tags_trending", tags_table.c.trending)

# ============================================================================
# POSTS TABLE
# ============================================================================
posts_table = Table(
    "posts",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("title", String(300), nullable=False),
    Column("published_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_posts_published_at", posts_table.c.published_at.desc())

# ============================================================================
# POST_TAGS TABLE (junction table for many-to-many relationship)
# ============================================================================
post_tags_table = Table(
    "post_tags",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("post_id", UUID, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False),
    Column("tag_id", UUID, ForeignKey("tags.id", ondelete="CASCADE"), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("post_id", "tag_id", name="uq_post_tag"),
)

Index("idx_post_tags_post_id", post_tags_table.c.post_id)
Index("idx_post_tags_tag_id", post_tags_table.c.tag_id)

# ============================================================================
# TAG_FOLLOWS TABLE
# ============================================================================
tag_follows_table = Table(
    "tag_follows",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("tag_id", UUID, ForeignKey("tags.id", ondelete="CASCADE"), nullable=False),
    Column("user_id", UUID, nullable=False),  # Users are owned by another service
    Column("weight", Integer, nullable=False, server_default="1"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("tag_id", "user_id", name="uq_tag_follow"),
    CheckConstraint("weight >= 1", name="follow_weight_positive"),
)

Index("idx_tag_follows_user_id", tag_follows_table.c.user_id)
