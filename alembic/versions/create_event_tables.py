"""create events and event attendance tables

Revision ID: 7a92d4e0c5b3
Revises: 3c1f0a7d2b10
Create Date: 2026-10-06 14:40:02

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '7a92d4e0c5b3'
down_revision: Union[str, Sequence[str], None] = '3c1f0a7d2b10'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'events',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('time', sa.String(length=10), nullable=False),
        sa.Column('location', sa.String(length=255), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.text('true')),
        sa.Column('created_by', sa.UUID(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['created_by'], ['staff.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_events_date', 'events', ['date'])

    op.create_table(
        'event_attendance',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('event_id', sa.UUID(), nullable=False),
        sa.Column('family_id', sa.UUID(), nullable=False),
        sa.Column('family_member_id', sa.UUID(), nullable=True),
        sa.Column('attendance_status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('updated_by', sa.UUID(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['event_id'], ['events.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['family_id'], ['families.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['family_member_id'], ['family_members.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['updated_by'], ['staff.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('event_id', 'family_member_id', name='uq_event_attendance_event_member'),
    )
    op.create_index('ix_event_attendance_event_id', 'event_attendance', ['event_id'])


def downgrade() -> None:
    op.drop_index('ix_event_attendance_event_id', table_name='event_attendance')
    op.drop_table('event_attendance')
    op.drop_index('ix_events_date', table_name='events')
    op.drop_table('events')
