"""seed_categories

Revision ID: 9f4b2a6c8e13
Revises: 3c1d9e7a5b20
Create Date: 2026-10-12 10:21:07.774512

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from topten.persistence.seed import DEFAULT_CATEGORIES, category_id_for


# revision identifiers, used by Alembic.
revision: str = "9f4b2a6c8e13"
down_revision: Union[str, Sequence[str], None] = "3c1d9e7a5b20"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Seed the launch categories."""
    categories_table = sa.table(
        "categories",
        sa.column("id", postgresql.UUID),
        sa.column("name", sa.String),
        sa.column("slug", sa.String),
        sa.column("description", sa.Text),
        sa.column("icon", sa.String),
    )

    # Ids are derived from slugs so the in-memory store agrees with them
    op.bulk_insert(
        categories_table,
        [
            {
                "id": str(category_id_for(slug)),
                "name": name,
                "slug": slug,
                "description": description,
                "icon": icon,
            }
            for name, slug, description, icon in DEFAULT_CATEGORIES
        ],
    )


def downgrade() -> None:
    """Remove seeded categories."""
    categories_table = sa.table("categories", sa.column("slug", sa.String))
    op.execute(
        categories_table.delete().where(
            categories_table.c.slug.in_([slug for _, slug, _, _ in DEFAULT_CATEGORIES])
        )
    )
