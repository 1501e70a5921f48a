"""add_venue

Revision ID: 0002
Revises: 0001
Create Date: 2026-10-19

Schema:
- venue: Bookable venues with owner, capacity, price list and moderation status
- booking.venue_id now references venue.id
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0002'
down_revision: Union[str, Sequence[str], None] = '0001'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'venue',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('owner_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('city', sa.String(length=100), nullable=False),
        sa.Column('address', sa.Text(), nullable=False),
        sa.Column('capacity', sa.Integer(), nullable=False),
        sa.Column('base_price', sa.Integer(), nullable=False),
        sa.Column('price_per_hour', sa.Integer(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column(
            'created_at',
            sa.DateTime(timezone=True),
            server_default=sa.text('now()'),
            nullable=False,
        ),
        sa.Column(
            'updated_at',
            sa.DateTime(timezone=True),
            server_default=sa.text('now()'),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_venue_owner_id'), 'venue', ['owner_id'])
    op.create_index(op.f('ix_venue_city'), 'venue', ['city'])
    op.create_index(op.f('ix_venue_status'), 'venue', ['status'])
    op.create_foreign_key('fk_booking_venue_id', 'booking', 'venue', ['venue_id'], ['id'])


def downgrade() -> None:
    op.drop_constraint('fk_booking_venue_id', 'booking', type_='foreignkey')
    op.drop_table('venue')
