"""SQLAlchemy table definitions for the forum.

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
    func,
)
from sqlalchemy.dialects.postgresql import ARRAY, JSONB, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("handle", String(30), nullable=False, unique=True),
    Column("email", String(255), nullable=False, unique=True),
    Column("role", String(20), nullable=False, server_default="user"),
    Column("reputation", Integer, nullable=False, server_default="0"),
    Column("is_active", Boolean, nullable=False, server_default="true"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("reputation >= 0", name="reputation_non_negative"),
)

# ============================================================================
# CATEGORIES TABLE
# ============================================================================
categories_table = Table(
    "categories",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("name", String(50), nullable=False),
    Column("description", String(200), nullable=False, server_default=""),
    Column("color", String(20), nullable=False, server_default="#007bff"),
    Column("is_active", Boolean, nullable=False, server_default="true"),
    Column("thread_count", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# Case-insensitive uniqueness
Index(
    "idx_categories_name_lower", func.lower(categories_table.c.name), unique=True
)

# ============================================================================
# TAGS TABLE
# ============================================================================
tags_table = Table(
    "tags",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("name", String(30), nullable=False, unique=True),  # Stored lowercase
    Column("description", String(100), nullable=False, server_default=""),
    Column("usage_count", Integer, nullable=False, server_default="0"),
    Column("color", String(20), nullable=False, server_default="#6c757d"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_tags_usage_count", tags_table.c.usage_count.desc())

# ============================================================================
# THREADS TABLE
# One row per aggregate: the vote ledger and the reply tree are embedded
# JSONB documents. score and reply_count are derived on every write for
# sorting and listing.
# ============================================================================
threads_table = Table(
    "threads",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("title", String(200), nullable=False),
    Column("content", Text, nullable=False),
    Column(
        "author_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "category_id",
        UUID,
        ForeignKey("categories.id", ondelete="RESTRICT"),
        nullable=False,
    ),
    Column("tag_ids", ARRAY(UUID), nullable=False, server_default="{}"),
    Column("votes", JSONB, nullable=False, server_default="[]"),
    Column("replies", JSONB, nullable=False, server_default="[]"),
    Column("score", Integer, nullable=False, server_default="0"),
    Column("reply_count", Integer, nullable=False, server_default="0"),
    Column("views", Integer, nullable=False, server_default="0"),
    Column("is_pinned", Boolean, nullable=False, server_default="false"),
    Column("is_locked", Boolean, nullable=False, server_default="false"),
    Column("is_edited", Boolean, nullable=False, server_default="false"),
    Column("edited_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "last_activity",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default="NOW()",
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("version", Integer, nullable=False, server_default="1"),
)

Index(
    "idx_threads_pinned_activity",
    threads_table.c.is_pinned.desc(),
    threads_table.c.last_activity.desc(),
)
Index("idx_threads_category_id", threads_table.c.category_id)
Index("idx_threads_author_id", threads_table.c.author_id)
Index("idx_threads_tag_ids", threads_table.c.tag_ids, postgresql_using="gin")
