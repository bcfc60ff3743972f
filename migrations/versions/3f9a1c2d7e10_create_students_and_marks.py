"""create students and marks tables

Revision ID: 3f9a1c2d7e10
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "3f9a1c2d7e10"
down_revision = None
branch_labels = None
depends_on = None

SUBJECTS = ("MATHS", "PHYSICS", "CHEMISTRY", "ENGLISH", "BIOLOGY")


def upgrade():
    op.create_table(
        "students",
        sa.Column("student_id", sa.Integer(), primary_key=True),
        sa.Column("parent_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=120), nullable=True),
        sa.Column("age", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=True),
        sa.UniqueConstraint("parent_id"),
        sa.UniqueConstraint("email"),
    )
    op.create_table(
        "marks",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("subject", sa.String(length=50), nullable=False),
        sa.Column("subject_key", sa.Enum(*SUBJECTS, name="mark_subject"), nullable=False),
        sa.Column("score", sa.Integer(), nullable=False),
        sa.Column("parent_id", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=True),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=True),
        sa.ForeignKeyConstraint(["parent_id"], ["students.parent_id"]),
        sa.UniqueConstraint("parent_id", "subject_key", name="unique_student_subject"),
        sa.CheckConstraint("score >= 0 AND score <= 100", name="score_range"),
    )


def downgrade():
    op.drop_table("marks")
    op.drop_table("students")
