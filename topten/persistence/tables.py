"""SQLAlchemy table definitions for Top Ten.

These match the schema created by the Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    ForeignKeyConstraint,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

metadata = MetaData()

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("email", String(255), nullable=False),  # Lowercase
    Column("username", String(30), nullable=False),  # Lowercase slug
    Column("password_hash", String(255), nullable=True),  # NULL for federated-only
    Column("federated_id", String(255), nullable=True),  # Google subject id
    Column("auth_provider", String(20), nullable=False, server_default="local"),
    Column("reset_token", String(64), nullable=True),
    Column("reset_token_expiry", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("email", name="uq_users_email"),
    UniqueConstraint("username", name="uq_users_username"),
    UniqueConstraint("federated_id", name="uq_users_federated_id"),
    UniqueConstraint("reset_token", name="uq_users_reset_token"),
    CheckConstraint(
        "auth_provider IN ('local', 'federated', 'both')",
        name="ck_users_auth_provider",
    ),
    CheckConstraint(
        "password_hash IS NOT NULL OR federated_id IS NOT NULL",
        name="ck_users_has_credential",
    ),
)

# ============================================================================
# CATEGORIES TABLE (seeded reference data)
# ============================================================================
categories_table = Table(
    "categories",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("name", String(100), nullable=False),
    Column("slug", String(100), nullable=False),
    Column("description", Text, nullable=True),
    Column("icon", String(16), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("name", name="uq_categories_name"),
    UniqueConstraint("slug", name="uq_categories_slug"),
)

# ============================================================================
# TOP TEN LISTS TABLE
# ============================================================================
top_ten_lists_table = Table(
    "top_ten_lists",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("slug", String(220), nullable=False),
    Column("title", String(200), nullable=False),
    Column("description", Text, nullable=True),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column(
        "category_id",
        UUID,
        ForeignKey("categories.id", ondelete="RESTRICT"),
        nullable=False,
    ),
    Column("is_public", Boolean, nullable=False, server_default="true"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("slug", name="uq_top_ten_lists_slug"),
    # Target of the votes (list_id, category_id) reference
    UniqueConstraint("id", "category_id", name="uq_top_ten_lists_id_category"),
)

Index("idx_top_ten_lists_user_id", top_ten_lists_table.c.user_id)
Index("idx_top_ten_lists_category_id", top_ten_lists_table.c.category_id)

# ============================================================================
# LIST ITEMS TABLE
# ============================================================================
list_items_table = Table(
    "list_items",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "list_id",
        UUID,
        ForeignKey("top_ten_lists.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("rank", Integer, nullable=False),
    Column("title", String(200), nullable=False),
    Column("description", Text, nullable=True),
    Column("image_url", Text, nullable=True),
    UniqueConstraint("list_id", "rank", name="uq_list_items_rank"),
    CheckConstraint("rank BETWEEN 1 AND 10", name="ck_list_items_rank"),
)

# ============================================================================
# VOTES TABLE
# ============================================================================
# category_id is the voted list's category, copied so that the one vote per
# user per category rule is a plain unique constraint. The composite reference
# rejects a vote whose category no longer matches its list; moving a list
# deletes its votes first, so ON UPDATE stays NO ACTION.
votes_table = Table(
    "votes",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("list_id", UUID, nullable=False),
    Column(
        "category_id",
        UUID,
        ForeignKey("categories.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("user_id", "category_id", name="uq_votes_user_category"),
    ForeignKeyConstraint(
        ["list_id", "category_id"],
        ["top_ten_lists.id", "top_ten_lists.category_id"],
        name="fk_votes_list_category",
        ondelete="CASCADE",
    ),
)

Index("idx_votes_list_id", votes_table.c.list_id)
