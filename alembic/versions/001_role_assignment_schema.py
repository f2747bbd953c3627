"""role assignment schema

Revision ID: 001_role_assignment_schema
Revises:
Create Date: 2026-10-18 12:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001_role_assignment_schema'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('full_name', sa.String(255), nullable=False),
        sa.Column('role', sa.String(20), nullable=False, server_default='user'),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true()),
        sa.Column('last_login', sa.DateTime(timezone=True), nullable=True),
        *_timestamps()
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'zones',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False, unique=True),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true()),
        *_timestamps()
    )
    op.create_index('ix_zones_id', 'zones', ['id'])

    op.create_table(
        'chapters',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('zone_id', sa.Integer(), sa.ForeignKey('zones.id'), nullable=False),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true()),
        *_timestamps()
    )
    op.create_index('ix_chapters_id', 'chapters', ['id'])
    op.create_index('ix_chapters_zone_id', 'chapters', ['zone_id'])

    op.create_table(
        'members',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('member_name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('mobile', sa.String(20), nullable=True),
        sa.Column('organization_name', sa.String(255), nullable=True),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true()),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True, unique=True),
        sa.Column('chapter_id', sa.Integer(), sa.ForeignKey('chapters.id'), nullable=True),
        *_timestamps()
    )
    op.create_index('ix_members_id', 'members', ['id'])
    op.create_index('ix_members_email', 'members', ['email'])
    op.create_index('ix_members_chapter_id', 'members', ['chapter_id'])

    op.create_table(
        'chapter_role_assignments',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('member_id', sa.Integer(), sa.ForeignKey('members.id', ondelete='CASCADE'), nullable=False),
        sa.Column('chapter_id', sa.Integer(), sa.ForeignKey('chapters.id', ondelete='CASCADE'), nullable=False),
        sa.Column('role_type', sa.String(50), nullable=False),
        sa.Column('assigned_at', sa.DateTime(timezone=True), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('chapter_id', 'role_type', name='uq_chapter_role_slot')
    )
    op.create_index('ix_chapter_role_assignments_id', 'chapter_role_assignments', ['id'])
    op.create_index('ix_chapter_role_assignments_member_id', 'chapter_role_assignments', ['member_id'])

    op.create_table(
        'zone_role_assignments',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('member_id', sa.Integer(), sa.ForeignKey('members.id', ondelete='CASCADE'), nullable=False),
        sa.Column('zone_id', sa.Integer(), sa.ForeignKey('zones.id', ondelete='CASCADE'), nullable=False),
        sa.Column('role_type', sa.String(50), nullable=False),
        sa.Column('assigned_at', sa.DateTime(timezone=True), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('zone_id', 'role_type', name='uq_zone_role_slot')
    )
    op.create_index('ix_zone_role_assignments_id', 'zone_role_assignments', ['id'])
    op.create_index('ix_zone_role_assignments_member_id', 'zone_role_assignments', ['member_id'])

    # role_id is not a foreign key, history outlives the live row
    op.create_table(
        'chapter_role_history',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('role_id', sa.Integer(), nullable=True),
        sa.Column('member_id', sa.Integer(), sa.ForeignKey('members.id', ondelete='CASCADE'), nullable=False),
        sa.Column('chapter_id', sa.Integer(), sa.ForeignKey('chapters.id', ondelete='CASCADE'), nullable=False),
        sa.Column('role_type', sa.String(50), nullable=False),
        sa.Column('action', sa.String(50), nullable=False),
        sa.Column('performed_by_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('performed_by_name', sa.String(255), nullable=False),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_date', sa.DateTime(timezone=True), nullable=True),
        *_timestamps()
    )
    op.create_index('ix_chapter_role_history_id', 'chapter_role_history', ['id'])
    op.create_index('ix_chapter_role_history_member_id', 'chapter_role_history', ['member_id'])
    op.create_index('ix_chapter_role_history_slot', 'chapter_role_history', ['chapter_id', 'role_type', 'end_date'])

    op.create_table(
        'zone_role_history',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('role_id', sa.Integer(), nullable=True),
        sa.Column('member_id', sa.Integer(), sa.ForeignKey('members.id', ondelete='CASCADE'), nullable=False),
        sa.Column('zone_id', sa.Integer(), sa.ForeignKey('zones.id', ondelete='CASCADE'), nullable=False),
        sa.Column('role_type', sa.String(50), nullable=False),
        sa.Column('action', sa.String(50), nullable=False),
        sa.Column('performed_by_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('performed_by_name', sa.String(255), nullable=False),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_date', sa.DateTime(timezone=True), nullable=True),
        *_timestamps()
    )
    op.create_index('ix_zone_role_history_id', 'zone_role_history', ['id'])
    op.create_index('ix_zone_role_history_member_id', 'zone_role_history', ['member_id'])
    op.create_index('ix_zone_role_history_slot', 'zone_role_history', ['zone_id', 'role_type', 'end_date'])


def downgrade() -> None:
    op.drop_table('zone_role_history')
    op.drop_table('chapter_role_history')
    op.drop_table('zone_role_assignments')
    op.drop_table('chapter_role_assignments')
    op.drop_table('members')
    op.drop_table('chapters')
    op.drop_table('zones')
    op.drop_table('users')
