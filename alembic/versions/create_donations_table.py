"""create donations table

Revision ID: e15f6b2d8c94
Revises: b84c1e9f3a27
Create Date: 2026-10-12 16:25:10

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'e15f6b2d8c94'
down_revision: Union[str, Sequence[str], None] = 'b84c1e9f3a27'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'donations',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('family_id', sa.UUID(), nullable=False),
        sa.Column('amount', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('type', sa.String(length=20), nullable=False, server_default='Regular'),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('received', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('email_for_thank', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('email_for_tax', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('comment', sa.Text(), nullable=True),
        sa.Column('created_by', sa.UUID(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['family_id'], ['families.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['created_by'], ['staff.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_donations_family_id', 'donations', ['family_id'])
    op.create_index('ix_donations_date', 'donations', ['date'])


def downgrade() -> None:
    op.drop_index('ix_donations_date', table_name='donations')
    op.drop_index('ix_donations_family_id', table_name='donations')
    op.drop_table('donations')
