"""initial schema

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "assessments",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("organization_id", sa.String(length=64), nullable=True),
        sa.Column("session_id", sa.String(length=36), nullable=False),
        sa.Column("scores", sa.JSON(), nullable=False),
        sa.Column("overall_percentage", sa.Integer(), nullable=False),
        sa.Column("leadership_family", sa.String(length=32), nullable=False),
        sa.Column("leadership_type", sa.String(length=32), nullable=False),
        sa.Column("responses", sa.JSON(), nullable=True),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_assessments_user_id", "assessments", ["user_id"], unique=False)
    op.create_index(
        "ix_assessments_organization_id", "assessments", ["organization_id"], unique=False
    )
    op.create_index(
        "ix_assessments_org_completed",
        "assessments",
        ["organization_id", "completed_at"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_assessments_org_completed", table_name="assessments")
    op.drop_index("ix_assessments_organization_id", table_name="assessments")
    op.drop_index("ix_assessments_user_id", table_name="assessments")
    op.drop_table("assessments")
