"""initial workforce schema

Revision ID: 4f1a2b7c9d10
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4f1a2b7c9d10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False),
        sa.Column('department', sa.String(length=120), nullable=True),
        sa.Column('position', sa.String(length=120), nullable=True),
        sa.Column('join_date', sa.Date(), nullable=True),
        sa.Column('avatar', sa.String(length=500), nullable=True),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('address', sa.String(length=500), nullable=True),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('skills', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'attendance_records',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('work_date', sa.Date(), nullable=False),
        sa.Column('check_in', sa.DateTime(), nullable=False),
        sa.Column('check_out', sa.DateTime(), nullable=True),
        sa.Column('check_in_location', sa.JSON(), nullable=True),
        sa.Column('check_out_location', sa.JSON(), nullable=True),
        sa.Column('open_slot', sa.SmallInteger(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.UniqueConstraint('user_id', 'work_date', 'open_slot', name='uq_attendance_one_open_per_day'),
    )
    op.create_index('ix_attendance_records_user_id', 'attendance_records', ['user_id'])
    op.create_index('ix_attendance_records_work_date', 'attendance_records', ['work_date'])

    op.create_table(
        'leave_requests',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('reason', sa.Text(), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('hr_approved', sa.Boolean(), nullable=True),
        sa.Column('hr_comment', sa.Text(), nullable=True),
        sa.Column('hr_reviewed_by', sa.Integer(), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('hr_updated_at', sa.DateTime(), nullable=True),
        sa.Column('admin_comment', sa.Text(), nullable=True),
        sa.Column('admin_reviewed_by', sa.Integer(), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_leave_requests_user_id', 'leave_requests', ['user_id'])

    op.create_table(
        'leave_approval_actions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('leave_request_id', sa.Integer(), sa.ForeignKey('leave_requests.id', ondelete='CASCADE'), nullable=False),
        sa.Column('action', sa.String(length=20), nullable=False),
        sa.Column('comment', sa.Text(), nullable=True),
        sa.Column('acted_by_user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('acted_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_leave_approval_actions_leave_request_id', 'leave_approval_actions', ['leave_request_id'])

    op.create_table(
        'tasks',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('priority', sa.String(length=10), nullable=False),
        sa.Column('assigned_to', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('due_date', sa.DateTime(), nullable=True),
        sa.Column('created_by', sa.Integer(), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_tasks_assigned_to', 'tasks', ['assigned_to'])

    op.create_table(
        'announcements',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('created_by', sa.Integer(), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )


def downgrade() -> None:
    op.drop_table('announcements')
    op.drop_index('ix_tasks_assigned_to', table_name='tasks')
    op.drop_table('tasks')
    op.drop_index('ix_leave_approval_actions_leave_request_id', table_name='leave_approval_actions')
    op.drop_table('leave_approval_actions')
    op.drop_index('ix_leave_requests_user_id', table_name='leave_requests')
    op.drop_table('leave_requests')
    op.drop_index('ix_attendance_records_work_date', table_name='attendance_records')
    op.drop_index('ix_attendance_records_user_id', table_name='attendance_records')
    op.drop_table('attendance_records')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
