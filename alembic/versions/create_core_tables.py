"""create staff, organization and family tables

Revision ID: 3c1f0a7d2b10
Revises:
Create Date: 2026-10-05 10:12:31

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '3c1f0a7d2b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

JSON_LIST = sa.JSON().with_variant(postgresql.JSONB(), 'postgresql')


def upgrade() -> None:
    op.create_table(
        'staff',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('full_name', sa.String(length=255), nullable=False),
        sa.Column('nick_name', sa.String(length=100), nullable=False),
        sa.Column('pin_hash', sa.String(length=255), nullable=False),
        sa.Column('group', sa.String(length=50), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('display_order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.text('true')),
        sa.Column('last_login', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_staff_nick_name', 'staff', ['nick_name'], unique=True)
    op.create_index('ix_staff_is_active', 'staff', ['is_active'])

    op.create_table(
        'staff_login_logs',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('staff_id', sa.UUID(), nullable=False),
        sa.Column('login_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('ip_address', sa.String(length=45), nullable=True),
        sa.Column('user_agent', sa.String(length=500), nullable=True),
        sa.Column('success', sa.Boolean(), nullable=False, server_default=sa.text('true')),
        sa.Column('failure_reason', sa.String(length=255), nullable=True),
        sa.ForeignKeyConstraint(['staff_id'], ['staff.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_staff_login_logs_staff_id', 'staff_login_logs', ['staff_id'])
    op.create_index('ix_staff_login_logs_login_time', 'staff_login_logs', ['login_time'])

    op.create_table(
        'departments',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('contact_person_name', sa.String(length=255), nullable=True),
        sa.Column('contact_person_phone', sa.String(length=20), nullable=True),
        sa.Column('contact_person_email', sa.String(length=255), nullable=True),
        sa.Column('picture', sa.String(length=500), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name', name='uq_departments_name'),
    )

    op.create_table(
        'teams',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('department_id', sa.UUID(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('contact_person_name', sa.String(length=255), nullable=True),
        sa.Column('contact_person_phone', sa.String(length=20), nullable=True),
        sa.Column('contact_person_email', sa.String(length=255), nullable=True),
        sa.Column('picture', sa.String(length=500), nullable=True),
        sa.Column('assigned_staff', JSON_LIST, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['department_id'], ['departments.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_teams_department_id', 'teams', ['department_id'])

    op.create_table(
        'families',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('family_code', sa.String(length=20), nullable=True),
        sa.Column('family_name', sa.String(length=255), nullable=False),
        sa.Column('visited_date', sa.Date(), nullable=True),
        sa.Column('registration_date', sa.Date(), nullable=True),
        sa.Column('member_status', sa.String(length=50), nullable=False, server_default='visit'),
        sa.Column('phone_number', sa.String(length=20), nullable=False, server_default=''),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('address', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('city', sa.String(length=100), nullable=False, server_default=''),
        sa.Column('state', sa.String(length=50), nullable=False, server_default=''),
        sa.Column('zip_code', sa.String(length=10), nullable=False, server_default=''),
        sa.Column('full_address', sa.String(length=500), nullable=False, server_default=''),
        sa.Column('family_notes', sa.Text(), nullable=True),
        sa.Column('family_picture', sa.String(length=500), nullable=True),
        sa.Column('life_group', sa.String(length=255), nullable=True),
        sa.Column('support_team_member', sa.String(length=255), nullable=True),
        sa.Column('biz', sa.String(length=255), nullable=True),
        sa.Column('biz_title', sa.String(length=255), nullable=True),
        sa.Column('biz_category', sa.String(length=255), nullable=True),
        sa.Column('biz_name', sa.String(length=255), nullable=True),
        sa.Column('biz_intro', sa.Text(), nullable=True),
        sa.Column('team_id', sa.UUID(), nullable=True),
        sa.Column('display_order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['team_id'], ['teams.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('family_code', name='uq_families_family_code'),
    )
    op.create_index('ix_families_family_name', 'families', ['family_name'])
    op.create_index('ix_families_team_id', 'families', ['team_id'])

    op.create_table(
        'family_members',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('family_id', sa.UUID(), nullable=False),
        sa.Column('korean_name', sa.String(length=255), nullable=False),
        sa.Column('english_name', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('birth_date', sa.Date(), nullable=True),
        sa.Column('phone_number', sa.String(length=20), nullable=True),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('relationship', sa.String(length=50), nullable=False),
        sa.Column('courses', JSON_LIST, nullable=False),
        sa.Column('grade_level', sa.String(length=10), nullable=True),
        sa.Column('grade_group', sa.String(length=50), nullable=True),
        sa.Column('school', sa.String(length=255), nullable=True),
        sa.Column('display_order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['family_id'], ['families.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(
        'ix_family_members_family_display_order', 'family_members', ['family_id', 'display_order']
    )

    op.create_table(
        'care_logs',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('family_id', sa.UUID(), nullable=False),
        sa.Column('staff_id', sa.UUID(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('type', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('status', sa.String(length=50), nullable=False, server_default='pending'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['family_id'], ['families.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['staff_id'], ['staff.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_care_logs_family_id', 'care_logs', ['family_id'])


def downgrade() -> None:
    op.drop_index('ix_care_logs_family_id', table_name='care_logs')
    op.drop_table('care_logs')
    op.drop_index('ix_family_members_family_display_order', table_name='family_members')
    op.drop_table('family_members')
    op.drop_index('ix_families_team_id', table_name='families')
    op.drop_index('ix_families_family_name', table_name='families')
    op.drop_table('families')
    op.drop_index('ix_teams_department_id', table_name='teams')
    op.drop_table('teams')
    op.drop_table('departments')
    op.drop_index('ix_staff_login_logs_login_time', table_name='staff_login_logs')
    op.drop_index('ix_staff_login_logs_staff_id', table_name='staff_login_logs')
    op.drop_table('staff_login_logs')
    op.drop_index('ix_staff_is_active', table_name='staff')
    op.drop_index('ix_staff_nick_name', table_name='staff')
    op.drop_table('staff')
