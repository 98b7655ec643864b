"""Feedback records and OneNote page links

Revision ID: 001_initial
Revises:
Create Date: 2026-09-28

"""

import typing as t

from alembic import op
from sqlalchemy import func as f
from sqlalchemy.schema import Column, UniqueConstraint
from sqlalchemy.types import BigInteger, DateTime, Integer, String

# revision identifiers, used by Alembic.
revision: str = "001_initial"
down_revision: str | None = None
branch_labels: str | t.Sequence[str] | None = None
depends_on: str | t.Sequence[str] | None = None


def upgrade() -> None:
    # One row per graded submission that has synchronized feedback
    op.create_table(
        "feedback_records",
        Column("feedback_id", String(22), primary_key=True),
        Column("grade_id", BigInteger, unique=True, nullable=False),
        Column("assignment_id", BigInteger, nullable=False),
        Column("file_count", Integer, nullable=False, server_default="0"),
        Column("create_time", DateTime(timezone=True), server_default=f.now(), nullable=False),
        Column("update_time", DateTime(timezone=True), server_default=f.now(), nullable=False),
    )
    op.create_index("ix_feedback_records_assignment_id", "feedback_records", ["assignment_id"])

    # OneNote pages of a user's work on an assignment
    op.create_table(
        "document_links",
        Column("link_id", String(22), primary_key=True),
        Column("assignment_id", BigInteger, nullable=False),
        Column("user_id", BigInteger, nullable=False),
        Column("feedback_page_id", String, nullable=True),
        Column("submission_page_id", String, nullable=True),
        Column("create_time", DateTime(timezone=True), server_default=f.now(), nullable=False),
        Column("update_time", DateTime(timezone=True), server_default=f.now(), nullable=False),
        UniqueConstraint("assignment_id", "user_id", name="uq_document_links_assignment_user"),
    )


def downgrade() -> None:
    op.drop_table("document_links")
    op.drop_index("ix_feedback_records_assignment_id", table_name="feedback_records")
    op.drop_table("feedback_records")
