"""Initial schema — books, rentals, categories, authors, users.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "books",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("title", sa.String(300), nullable=False),
        sa.Column("category", sa.String(200), nullable=True),
        sa.Column("subcategory", sa.String(200), nullable=True),
        sa.Column("image", sa.String(1000), nullable=True),
        sa.Column("author", sa.String(200), nullable=True),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("available_copies", sa.Integer, nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint(
            "available_copies >= 0", name="ck_books_available_copies_non_negative",
        ),
    )
    op.create_index("ix_books_title", "books", ["title"], unique=True)

    op.create_table(
        "rentals",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "book_id", UUID(as_uuid=True),
            sa.ForeignKey("books.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("borrower_first_name", sa.String(100), nullable=False),
        sa.Column("borrower_last_name", sa.String(100), nullable=False),
        sa.Column("borrower_phone", sa.String(50), nullable=True),
        sa.Column("checkout_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("due_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("quantity", sa.Integer, nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="borrowed"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("returned_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint("quantity > 0", name="ck_rentals_quantity_positive"),
    )
    op.create_index("ix_rentals_book_id", "rentals", ["book_id"])
    op.create_index("ix_rentals_status", "rentals", ["status"])

    op.create_table(
        "categories",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("subcategories", sa.JSON, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_categories_name", "categories", ["name"])

    op.create_table(
        "authors",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "users",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("username", sa.String(100), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("password_hash", sa.String(100), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)


def downgrade() -> None:
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
    op.drop_table("authors")
    op.drop_index("ix_categories_name", table_name="categories")
    op.drop_table("categories")
    op.drop_index("ix_rentals_status", table_name="rentals")
    op.drop_index("ix_rentals_book_id", table_name="rentals")
    op.drop_table("rentals")
    op.drop_index("ix_books_title", table_name="books")
    op.drop_table("books")
