"""Create users, students, weekly reports, groups and the faculty roster

Revision ID: 3a1f0c2d9b7e
Revises:
Create Date: 2025-02-03 10:15:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3a1f0c2d9b7e'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the tracker tables."""
    op.create_table(
        'users',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('hashed_password', sa.String(), nullable=False),
        sa.Column('role', sa.String(), nullable=False),
        sa.Column('password_reset_token', sa.String(), nullable=True),
        sa.Column('password_reset_expiry', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_role', 'users', ['role'])
    op.create_index('ix_users_password_reset_token', 'users', ['password_reset_token'])

    op.create_table(
        'groups',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('assignment_title', sa.String(), nullable=False),
        sa.Column('faculty_id', sa.String(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('google_form_link', sa.String(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_groups_id', 'groups', ['id'])
    op.create_index('ix_groups_faculty_id', 'groups', ['faculty_id'])

    op.create_table(
        'students',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('reg_no', sa.String(), nullable=False),
        sa.Column('assignment_title', sa.String(), nullable=True),
        sa.Column('assigned_faculty_id', sa.String(), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('group_id', sa.String(), sa.ForeignKey('groups.id', ondelete='SET NULL'), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_students_id', 'students', ['id'])
    op.create_index('ix_students_name', 'students', ['name'])
    op.create_index('ix_students_reg_no', 'students', ['reg_no'], unique=True)
    op.create_index('ix_students_assigned_faculty_id', 'students', ['assigned_faculty_id'])
    op.create_index('ix_students_group_id', 'students', ['group_id'])

    op.create_table(
        'weekly_reports',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('student_id', sa.String(), sa.ForeignKey('students.id', ondelete='CASCADE'), nullable=False),
        sa.Column('week', sa.Integer(), nullable=False),
        sa.Column('report', sa.Text(), nullable=False),
        sa.Column('submitted_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint('student_id', 'week', name='uq_weekly_reports_student_week'),
    )
    op.create_index('ix_weekly_reports_id', 'weekly_reports', ['id'])
    op.create_index('ix_weekly_reports_student_id', 'weekly_reports', ['student_id'])

    op.create_table(
        'faculty_students',
        sa.Column('faculty_id', sa.String(), sa.ForeignKey('users.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('student_id', sa.String(), sa.ForeignKey('students.id', ondelete='CASCADE'), primary_key=True),
    )


def downgrade() -> None:
    """Drop the tracker tables."""
    op.drop_table('faculty_students')
    op.drop_table('weekly_reports')
    op.drop_table('students')
    op.drop_table('groups')
    op.drop_table('users')
