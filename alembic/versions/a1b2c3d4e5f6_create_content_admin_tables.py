"""Create content admin tables

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-18 09:30:00.000000

"""

from collections.abc import Sequence
from typing import Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "a1b2c3d4e5f6"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "content",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("parent_id", sa.Integer(), nullable=True),
        sa.Column("type", sa.String(), nullable=False),
        sa.Column("sequence", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("audio_url", sa.Text(), nullable=True),
        sa.Column("video_url", sa.Text(), nullable=True),
        sa.Column("css", sa.Text(), nullable=True),
        sa.Column("duas_url", sa.Text(), nullable=True),
        sa.Column("is_deleted", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(["parent_id"], ["content.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_content_id"), "content", ["id"], unique=False)
    op.create_index("idx_content_parent_sequence", "content", ["parent_id", "sequence"], unique=False)
    op.create_index("idx_content_is_deleted", "content", ["is_deleted"], unique=False)

    op.create_table(
        "content_translation",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("content_id", sa.Integer(), nullable=False),
        sa.Column("language_code", sa.String(length=16), nullable=False),
        sa.Column("title", sa.Text(), nullable=False, server_default=""),
        sa.Column("transliteration", sa.Text(), nullable=False, server_default=""),
        sa.Column("translation", sa.Text(), nullable=False, server_default=""),
        sa.Column("original_text", sa.Text(), nullable=False, server_default=""),
        sa.Column("search_text", sa.Text(), nullable=False, server_default=""),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(["content_id"], ["content.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("content_id", "language_code", name="uq_content_translation_language"),
    )
    op.create_index(op.f("ix_content_translation_id"), "content_translation", ["id"], unique=False)
    op.create_index(op.f("ix_content_translation_content_id"), "content_translation", ["content_id"], unique=False)
    op.create_index("idx_ct_language", "content_translation", ["language_code"], unique=False)

    op.create_table(
        "versions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("version_number", sa.String(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=False, server_default=""),
        sa.Column("file_url", sa.Text(), nullable=False, server_default=""),
        sa.Column("content_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("translation_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_versions_id"), "versions", ["id"], unique=False)
    op.create_index(op.f("ix_versions_version_number"), "versions", ["version_number"], unique=True)

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("password_hash", sa.String(), nullable=False),
        sa.Column("role", sa.String(), nullable=False, server_default="user"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_id"), "users", ["id"], unique=False)
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)


def downgrade() -> None:
    op.drop_index(op.f("ix_users_email"), table_name="users")
    op.drop_index(op.f("ix_users_id"), table_name="users")
    op.drop_table("users")

    op.drop_index(op.f("ix_versions_version_number"), table_name="versions")
    op.drop_index(op.f("ix_versions_id"), table_name="versions")
    op.drop_table("versions")

    op.drop_index("idx_ct_language", table_name="content_translation")
    op.drop_index(op.f("ix_content_translation_content_id"), table_name="content_translation")
    op.drop_index(op.f("ix_content_translation_id"), table_name="content_translation")
    op.drop_table("content_translation")

    op.drop_index("idx_content_is_deleted", table_name="content")
    op.drop_index("idx_content_parent_sequence", table_name="content")
    op.drop_index(op.f("ix_content_id"), table_name="content")
    op.drop_table("content")
