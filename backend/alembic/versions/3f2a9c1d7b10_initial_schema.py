"""
Initial schema: users, roles, activation tokens, books and borrow history.

The partial unique index on book_transaction_history guarantees at most
one open (returned = false) transaction per (book, user).

Revision ID: 3f2a9c1d7b10
Revises:
Create Date: 2026-10-16 10:00:00.000000
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "3f2a9c1d7b10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
    ]


def _audit() -> list[sa.Column]:
    return [
        sa.Column("created_by", sa.Integer(), nullable=True),
        sa.Column("last_modified_by", sa.Integer(), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        "roles",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=50), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("firstname", sa.String(length=100), nullable=False),
        sa.Column("lastname", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("enabled", sa.Boolean(), nullable=False),
        sa.Column("account_locked", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "user_roles",
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("role_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["role_id"], ["roles.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("user_id", "role_id"),
    )

    op.create_table(
        "activation_tokens",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("token", sa.String(length=20), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("expired_at", sa.DateTime(), nullable=False),
        sa.Column("validated_at", sa.DateTime(), nullable=True),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_activation_tokens_token", "activation_tokens", ["token"], unique=True)
    op.create_index("ix_activation_tokens_user_id", "activation_tokens", ["user_id"])

    op.create_table(
        "books",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.String(length=500), nullable=False),
        sa.Column("author_name", sa.String(length=255), nullable=False),
        sa.Column("isbn", sa.String(length=50), nullable=False),
        sa.Column("synopsis", sa.Text(), nullable=False),
        sa.Column("book_cover", sa.String(length=1024), nullable=True),
        sa.Column("archived", sa.Boolean(), nullable=False),
        sa.Column("shareable", sa.Boolean(), nullable=False),
        sa.Column("owner_id", sa.Integer(), nullable=False),
        *_timestamps(),
        *_audit(),
        sa.ForeignKeyConstraint(["owner_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_books_owner_id", "books", ["owner_id"])

    op.create_table(
        "book_transaction_history",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("book_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("returned", sa.Boolean(), nullable=False),
        sa.Column("return_approved", sa.Boolean(), nullable=False),
        *_timestamps(),
        *_audit(),
        sa.ForeignKeyConstraint(["book_id"], ["books.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_book_transaction_history_user_id", "book_transaction_history", ["user_id"])
    op.create_index("ix_book_transaction_history_book_id", "book_transaction_history", ["book_id"])
    op.create_index(
        "uq_book_transaction_history_open",
        "book_transaction_history",
        ["book_id", "user_id"],
        unique=True,
        postgresql_where=sa.text("returned = false"),
    )


def downgrade() -> None:
    op.drop_index("uq_book_transaction_history_open", table_name="book_transaction_history")
    op.drop_index("ix_book_transaction_history_book_id", table_name="book_transaction_history")
    op.drop_index("ix_book_transaction_history_user_id", table_name="book_transaction_history")
    op.drop_table("book_transaction_history")
    op.drop_index("ix_books_owner_id", table_name="books")
    op.drop_table("books")
    op.drop_index("ix_activation_tokens_user_id", table_name="activation_tokens")
    op.drop_index("ix_activation_tokens_token", table_name="activation_tokens")
    op.drop_table("activation_tokens")
    op.drop_table("user_roles")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
    op.drop_table("roles")
