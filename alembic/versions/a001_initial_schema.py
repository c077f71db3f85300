"""Initial schema creation

Revision ID: a001
Revises: 
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = 'a001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Create initial database schema."""

    # Create volunteers table
    op.create_table(
        'volunteers',
        sa.Column('card_id', sa.Integer(), autoincrement=False, nullable=False),
        sa.Column('surname', sa.String(255), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('fiscal_code', sa.String(32), nullable=False),
        sa.Column('disabled', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('card_id')
    )
    op.create_index('ix_volunteers_surname', 'volunteers', ['surname'])

    # Create shifts table
    op.create_table(
        'shifts',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('shift_date', sa.Date(), nullable=False),
        sa.Column('task', sa.Integer(), nullable=False),
        sa.Column('entrance_hour', sa.String(5), nullable=False),
        sa.Column('exit_hour', sa.String(5), nullable=False),
        sa.Column('card_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['card_id'], ['volunteers.card_id']),
        sa.UniqueConstraint(
            'shift_date', 'task', 'entrance_hour', 'exit_hour', 'card_id',
            name='uq_shift_slot'
        )
    )
    op.create_index('ix_shifts_shift_date', 'shifts', ['shift_date'])
    op.create_index('ix_shifts_card_id', 'shifts', ['card_id'])


def downgrade() -> None:
    """Drop all tables."""
    op.drop_table('shifts')
    op.drop_table('volunteers')
