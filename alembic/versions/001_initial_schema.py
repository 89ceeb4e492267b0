"""Initial schema

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19

Adds:
- properties: external ids, room-type catalog, credentials, mapping sets
- reservations: canonical bookings linking PMS and channel ids
- request_logs: append-only audit of external calls
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'properties',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('pms_property_id', sa.String(100), nullable=False),
        sa.Column('channel_property_id', sa.String(100), nullable=False),
        sa.Column('room_types', sa.JSON(), nullable=True),
        sa.Column('credentials', sa.JSON(), nullable=True),
        sa.Column('room_type_mappings', sa.JSON(), nullable=True),
        sa.Column('rate_plan_mappings', sa.JSON(), nullable=True),
        sa.Column('initial_sync_completed', sa.Boolean(), default=False),
        sa.Column('is_active', sa.Boolean(), default=True),
        sa.Column('created_at', sa.DateTime(), default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), default=sa.func.now()),
    )
    op.create_index('ix_property_channel_id', 'properties', ['channel_property_id'])
    op.create_index('ix_property_pms_id', 'properties', ['pms_property_id'])

    op.create_table(
        'reservations',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('property_id', sa.String(36), sa.ForeignKey('properties.id', ondelete='CASCADE'), nullable=False),
        sa.Column('room_type_id', sa.String(100), nullable=True),
        sa.Column('rate_plan_id', sa.String(100), nullable=True),
        sa.Column('guest_name', sa.String(200), nullable=False),
        sa.Column('guest_email', sa.String(200), nullable=True),
        sa.Column('guest_phone', sa.String(50), nullable=True),
        sa.Column('check_in_date', sa.Date(), nullable=False),
        sa.Column('check_out_date', sa.Date(), nullable=False),
        sa.Column('adults', sa.Integer(), default=1),
        sa.Column('children', sa.Integer(), default=0),
        sa.Column('total_price', sa.Numeric(10, 2), default=0),
        sa.Column('currency', sa.String(3), nullable=True),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('source', sa.String(50), default='web'),
        sa.Column('special_requests', sa.Text(), nullable=True),
        sa.Column('pms_booking_id', sa.String(100), nullable=True),
        sa.Column('channel_reservation_id', sa.String(100), nullable=True),
        sa.Column('channel_data', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(), default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), default=sa.func.now()),
        sa.UniqueConstraint('property_id', 'channel_reservation_id', name='uq_reservation_channel_id'),
        sa.UniqueConstraint('property_id', 'pms_booking_id', name='uq_reservation_pms_id'),
    )
    op.create_index('ix_reservation_property', 'reservations', ['property_id'])

    op.create_table(
        'request_logs',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('property_id', sa.String(36), nullable=True),
        sa.Column('request_id', sa.String(64), nullable=True),
        sa.Column('system', sa.String(20), nullable=False),
        sa.Column('method', sa.String(10), nullable=False),
        sa.Column('endpoint', sa.String(500), nullable=False),
        sa.Column('request_body', sa.JSON(), nullable=True),
        sa.Column('response_body', sa.JSON(), nullable=True),
        sa.Column('status_code', sa.Integer(), nullable=True),
        sa.Column('success', sa.Boolean(), default=True),
        sa.Column('error_message', sa.Text(), nullable=True),
        sa.Column('duration_ms', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), default=sa.func.now()),
    )
    op.create_index('ix_request_log_property', 'request_logs', ['property_id'])
    op.create_index('ix_request_log_created', 'request_logs', ['created_at'])


def downgrade() -> None:
    op.drop_index('ix_request_log_created', 'request_logs')
    op.drop_index('ix_request_log_property', 'request_logs')
    op.drop_table('request_logs')

    op.drop_index('ix_reservation_property', 'reservations')
    op.drop_table('reservations')

    op.drop_index('ix_property_pms_id', 'properties')
    op.drop_index('ix_property_channel_id', 'properties')
    op.drop_table('properties')
