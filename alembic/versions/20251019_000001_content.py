"""content tables: products, documents, notices

Revision ID: 20251019_000001
Revises: 
Create Date: 2025-10-19 00:00:01.000000
"""

from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "20251019_000001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "products",
        sa.Column("id", sa.String(length=24), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("price", sa.String(length=64), nullable=False),
        sa.Column("category", sa.String(length=128), nullable=False),
        sa.Column("subcategory", sa.String(length=128), nullable=True),
        sa.Column("image", sa.String(length=1024), nullable=True),
        sa.Column("in_stock", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("whatsapp_phone", sa.String(length=32), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_products_category", "products", ["category"], unique=False)

    op.create_table(
        "documents",
        sa.Column("id", sa.String(length=24), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("file_type", sa.String(length=64), nullable=False),
        sa.Column("category", sa.String(length=128), nullable=False),
        sa.Column("upload_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("file_url", sa.String(length=1024), nullable=False, server_default=""),
        sa.Column("file_size", sa.Integer(), nullable=True),
        sa.Column("original_name", sa.String(length=512), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_documents_category", "documents", ["category"], unique=False)

    op.create_table(
        "notices",
        sa.Column("id", sa.String(length=24), primary_key=True),
        sa.Column("title", sa.String(length=512), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("category", sa.String(length=128), nullable=False, server_default="general"),
        sa.Column("file_url", sa.String(length=1024), nullable=False, server_default=""),
        sa.Column("file_type", sa.String(length=16), nullable=True),
        sa.Column("file_size", sa.Integer(), nullable=True),
        sa.Column("original_name", sa.String(length=512), nullable=True),
        sa.Column("show_as_popup", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("priority", sa.String(length=16), nullable=False, server_default="medium"),
        *_timestamps(),
    )
    op.create_index("ix_notices_popup", "notices", ["is_active", "show_as_popup"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_notices_popup", table_name="notices")
    op.drop_table("notices")
    op.drop_index("ix_documents_category", table_name="documents")
    op.drop_table("documents")
    op.drop_index("ix_products_category", table_name="products")
    op.drop_table("products")
