"""initial_schema

Create the schema for Top Ten:
- Users (password and/or Google sign-in, password reset tokens)
- Categories (seeded reference data)
- Top ten lists with their ranked items
- Votes (one per user per category)

Revision ID: 3c1d9e7a5b20
Revises:
Create Date: 2026-10-12 10:04:51.318204

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1d9e7a5b20"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # Enable required extensions
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # ========================================================================
    # USERS TABLE
    # ========================================================================
    op.create_table(
        "users",
        sa.Column(
            "id",
            postgresql.UUID(),
            primary_key=True,
            server_default=sa.text("uuid_generate_v4()"),
        ),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("username", sa.String(30), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=True),
        sa.Column("federated_id", sa.String(255), nullable=True),
        sa.Column(
            "auth_provider", sa.String(20), nullable=False, server_default="local"
        ),
        sa.Column("reset_token", sa.String(64), nullable=True),
        sa.Column(
            "reset_token_expiry", postgresql.TIMESTAMP(timezone=True), nullable=True
        ),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            postgresql.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.UniqueConstraint("email", name="uq_users_email"),
        sa.UniqueConstraint("username", name="uq_users_username"),
        sa.UniqueConstraint("federated_id", name="uq_users_federated_id"),
        sa.UniqueConstraint("reset_token", name="uq_users_reset_token"),
        sa.CheckConstraint(
            "auth_provider IN ('local', 'federated', 'both')",
            name="ck_users_auth_provider",
        ),
        sa.CheckConstraint(
            "password_hash IS NOT NULL OR federated_id IS NOT NULL",
            name="ck_users_has_credential",
        ),
    )

    # ========================================================================
    # CATEGORIES TABLE
    # ========================================================================
    op.create_table(
        "categories",
        sa.Column(
            "id",
            postgresql.UUID(),
            primary_key=True,
            server_default=sa.text("uuid_generate_v4()"),
        ),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("slug", sa.String(100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("icon", sa.String(16), nullable=True),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.UniqueConstraint("name", name="uq_categories_name"),
        sa.UniqueConstraint("slug", name="uq_categories_slug"),
    )

    # ========================================================================
    # TOP TEN LISTS TABLE
    # ========================================================================
    op.create_table(
        "top_ten_lists",
        sa.Column(
            "id",
            postgresql.UUID(),
            primary_key=True,
            server_default=sa.text("uuid_generate_v4()"),
        ),
        sa.Column("slug", sa.String(220), nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "user_id",
            postgresql.UUID(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "category_id",
            postgresql.UUID(),
            sa.ForeignKey("categories.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("is_public", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            postgresql.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.UniqueConstraint("slug", name="uq_top_ten_lists_slug"),
        sa.UniqueConstraint("id", "category_id", name="uq_top_ten_lists_id_category"),
    )
    op.create_index("idx_top_ten_lists_user_id", "top_ten_lists", ["user_id"])
    op.create_index("idx_top_ten_lists_category_id", "top_ten_lists", ["category_id"])

    # ========================================================================
    # LIST ITEMS TABLE
    # ========================================================================
    op.create_table(
        "list_items",
        sa.Column(
            "id",
            postgresql.UUID(),
            primary_key=True,
            server_default=sa.text("uuid_generate_v4()"),
        ),
        sa.Column(
            "list_id",
            postgresql.UUID(),
            sa.ForeignKey("top_ten_lists.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("rank", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("image_url", sa.Text(), nullable=True),
        sa.UniqueConstraint("list_id", "rank", name="uq_list_items_rank"),
        sa.CheckConstraint("rank BETWEEN 1 AND 10", name="ck_list_items_rank"),
    )

    # ========================================================================
    # VOTES TABLE
    # ========================================================================
    op.create_table(
        "votes",
        sa.Column(
            "id",
            postgresql.UUID(),
            primary_key=True,
            server_default=sa.text("uuid_generate_v4()"),
        ),
        sa.Column(
            "user_id",
            postgresql.UUID(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("list_id", postgresql.UUID(), nullable=False),
        sa.Column(
            "category_id",
            postgresql.UUID(),
            sa.ForeignKey("categories.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.UniqueConstraint("user_id", "category_id", name="uq_votes_user_category"),
        # A vote must name its list's current category
        sa.ForeignKeyConstraint(
            ["list_id", "category_id"],
            ["top_ten_lists.id", "top_ten_lists.category_id"],
            name="fk_votes_list_category",
            ondelete="CASCADE",
        ),
    )
    op.create_index("idx_votes_list_id", "votes", ["list_id"])

    # ========================================================================
    # TRIGGERS
    # ========================================================================
    op.execute("""
        CREATE OR REPLACE FUNCTION update_updated_at_column()
        RETURNS TRIGGER AS $$
        BEGIN
            NEW.updated_at = NOW();
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql
    """)

    op.execute("""
        CREATE TRIGGER update_users_updated_at
        BEFORE UPDATE ON users
        FOR EACH ROW EXECUTE FUNCTION update_updated_at_column()
    """)

    op.execute("""
        CREATE TRIGGER update_top_ten_lists_updated_at
        BEFORE UPDATE ON top_ten_lists
        FOR EACH ROW EXECUTE FUNCTION update_updated_at_column()
    """)


def downgrade() -> None:
    """Downgrade schema."""
    op.execute("DROP TRIGGER IF EXISTS update_top_ten_lists_updated_at ON top_ten_lists")
    op.execute("DROP TRIGGER IF EXISTS update_users_updated_at ON users")
    op.execute("DROP FUNCTION IF EXISTS update_updated_at_column()")

    op.drop_index("idx_votes_list_id", table_name="votes")
    op.drop_table("votes")
    op.drop_table("list_items")
    op.drop_index("idx_top_ten_lists_category_id", table_name="top_ten_lists")
    op.drop_index("idx_top_ten_lists_user_id", table_name="top_ten_lists")
    op.drop_table("top_ten_lists")
    op.drop_table("categories")
    op.drop_table("users")
