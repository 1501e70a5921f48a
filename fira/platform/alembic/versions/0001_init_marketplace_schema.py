"""init_marketplace_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19

Schema:
- event: Events with capacity counters and cancellation fields
- ticket: Issued tickets with QR payload, check-in and cancellation fields
- payment: Gateway payments, referencing an event, booking or ticket
- refund: Refunds against a payment
- notification: In-app notifications
- booking: Venue booking requests with advance payment state
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamp(name: str, *, nullable: bool = False, server_default: bool = True) -> sa.Column:
    return sa.Column(
        name,
        sa.DateTime(timezone=True),
        server_default=sa.text('now()') if server_default else None,
        nullable=nullable,
    )


def upgrade() -> None:
    """Create all tables."""

    # ========== Event ==========
    op.create_table(
        'event',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('organizer_id', sa.Integer(), nullable=False),
        sa.Column('venue_id', sa.Integer(), nullable=False),
        sa.Column('event_date', sa.Date(), nullable=False),
        sa.Column('start_time', sa.String(length=5), nullable=False),
        sa.Column('end_time', sa.String(length=5), nullable=False),
        sa.Column('ticket_price', sa.Integer(), nullable=False),
        sa.Column('max_attendees', sa.Integer(), nullable=False),
        sa.Column('current_attendees', sa.Integer(), nullable=False),
        sa.Column('category', sa.String(length=50), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('cancellation_reason', sa.Text(), nullable=True),
        _timestamp('cancelled_at', nullable=True, server_default=False),
        _timestamp('created_at'),
        _timestamp('updated_at'),
        sa.CheckConstraint(
            'current_attendees >= 0 AND current_attendees <= max_attendees',
            name='ck_event_attendees_within_capacity',
        ),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_event_organizer_id'), 'event', ['organizer_id'])
    op.create_index(op.f('ix_event_status'), 'event', ['status'])
    op.create_index('ix_event_venue_date', 'event', ['venue_id', 'event_date'])

    # ========== Ticket ==========
    op.create_table(
        'ticket',
        sa.Column('id', UUID(as_uuid=True), nullable=False),
        sa.Column('code', sa.String(length=20), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('event_id', sa.Integer(), nullable=False),
        sa.Column('ticket_type', sa.String(length=20), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('price', sa.Integer(), nullable=False),
        sa.Column('qr_payload', sa.Text(), nullable=False),
        sa.Column('qr_image', sa.Text(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('is_used', sa.Boolean(), nullable=False),
        _timestamp('used_at', nullable=True, server_default=False),
        sa.Column('checked_in_by', sa.Integer(), nullable=True),
        sa.Column('payment_id', UUID(as_uuid=True), nullable=True),
        sa.Column('cancellation_reason', sa.Text(), nullable=True),
        _timestamp('cancelled_at', nullable=True, server_default=False),
        _timestamp('purchased_at'),
        sa.ForeignKeyConstraint(['event_id'], ['event.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('code'),
        sa.UniqueConstraint('payment_id'),
    )
    op.create_index(op.f('ix_ticket_user_id'), 'ticket', ['user_id'])
    op.create_index(op.f('ix_ticket_event_id'), 'ticket', ['event_id'])
    op.create_index(op.f('ix_ticket_status'), 'ticket', ['status'])

    # ========== Payment ==========
    op.create_table(
        'payment',
        sa.Column('id', UUID(as_uuid=True), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('payment_type', sa.String(length=20), nullable=False),
        sa.Column('reference_kind', sa.String(length=20), nullable=False),
        sa.Column('reference_id', sa.String(length=64), nullable=False),
        sa.Column('amount', sa.Integer(), nullable=False),
        sa.Column('platform_fee', sa.Integer(), nullable=False),
        sa.Column('net_amount', sa.Integer(), nullable=False),
        sa.Column('currency', sa.String(length=3), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('payment_method', sa.String(length=30), nullable=True),
        sa.Column('gateway_order_id', sa.String(length=64), nullable=True),
        sa.Column('gateway_transaction_id', sa.String(length=64), nullable=True),
        sa.Column('gateway_response', sa.JSON(), nullable=True),
        sa.Column('failure_reason', sa.String(), nullable=True),
        _timestamp('paid_at', nullable=True, server_default=False),
        _timestamp('created_at'),
        _timestamp('updated_at'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_payment_user_id'), 'payment', ['user_id'])
    op.create_index(op.f('ix_payment_reference_id'), 'payment', ['reference_id'])
    op.create_index(op.f('ix_payment_status'), 'payment', ['status'])
    op.create_index(op.f('ix_payment_gateway_order_id'), 'payment', ['gateway_order_id'])

    # ========== Refund ==========
    op.create_table(
        'refund',
        sa.Column('id', UUID(as_uuid=True), nullable=False),
        sa.Column('payment_id', UUID(as_uuid=True), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('reason', sa.String(length=30), nullable=False),
        sa.Column('reason_details', sa.String(), nullable=True),
        sa.Column('amount', sa.Integer(), nullable=False),
        sa.Column('refund_type', sa.String(length=10), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('gateway_refund_id', sa.String(length=64), nullable=True),
        sa.Column('gateway_response', sa.JSON(), nullable=True),
        sa.Column('failure_reason', sa.String(), nullable=True),
        _timestamp('requested_at'),
        _timestamp('processed_at', nullable=True, server_default=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_refund_payment_id'), 'refund', ['payment_id'])
    op.create_index(op.f('ix_refund_user_id'), 'refund', ['user_id'])
    op.create_index(op.f('ix_refund_status'), 'refund', ['status'])

    # ========== Notification ==========
    op.create_table(
        'notification',
        sa.Column('id', UUID(as_uuid=True), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('type', sa.String(length=30), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('message', sa.String(), nullable=False),
        sa.Column('data', sa.JSON(), nullable=False),
        sa.Column('priority', sa.String(length=10), nullable=False),
        sa.Column('channel', sa.String(length=10), nullable=False),
        sa.Column('is_read', sa.Boolean(), nullable=False),
        _timestamp('read_at', nullable=True, server_default=False),
        _timestamp('created_at'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(
        'ix_notification_user_id_created_at', 'notification', ['user_id', 'created_at']
    )

    # ========== Booking ==========
    op.create_table(
        'booking',
        sa.Column('id', UUID(as_uuid=True), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('venue_id', sa.Integer(), nullable=False),
        sa.Column('venue_owner_id', sa.Integer(), nullable=False),
        sa.Column('event_id', sa.Integer(), nullable=True),
        sa.Column('booking_date', sa.Date(), nullable=False),
        sa.Column('start_time', sa.String(length=5), nullable=False),
        sa.Column('end_time', sa.String(length=5), nullable=False),
        sa.Column('purpose', sa.Text(), nullable=True),
        sa.Column('expected_guests', sa.Integer(), nullable=False),
        sa.Column('special_requests', sa.Text(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('rejection_reason', sa.Text(), nullable=True),
        sa.Column('total_amount', sa.Integer(), nullable=False),
        sa.Column('platform_fee', sa.Integer(), nullable=False),
        sa.Column('payment_status', sa.String(length=20), nullable=False),
        sa.Column('payment_id', UUID(as_uuid=True), nullable=True),
        _timestamp('responded_at', nullable=True, server_default=False),
        _timestamp('created_at'),
        _timestamp('updated_at'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_booking_user_id'), 'booking', ['user_id'])
    op.create_index(op.f('ix_booking_venue_owner_id'), 'booking', ['venue_owner_id'])
    op.create_index(op.f('ix_booking_status'), 'booking', ['status'])
    op.create_index('ix_booking_venue_date', 'booking', ['venue_id', 'booking_date'])


def downgrade() -> None:
    """Drop all tables."""
    op.drop_table('booking')
    op.drop_table('notification')
    op.drop_table('refund')
    op.drop_table('payment')
    op.drop_table('ticket')
    op.drop_table('event')
