"""Initial scheduling schema

Revision ID: 4f2c9a7d1e03
Revises: 
Create Date: 2025-09-15 10:42:18.204551

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4f2c9a7d1e03'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    # Create engineers table
    op.create_table(
        'engineers',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('starting_postcode', sa.String(length=16), nullable=True),
        sa.Column('availability', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('region', sa.String(length=100), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )

    # Create orders table
    op.create_table(
        'orders',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('order_number', sa.String(length=50), nullable=True),
        sa.Column('client_id', sa.Uuid(), nullable=False),
        sa.Column('postcode', sa.String(length=16), nullable=True),
        sa.Column('status', sa.String(length=50), nullable=True, server_default='awaiting_install_booking'),
        sa.Column('engineer_id', sa.Uuid(), nullable=True),
        sa.Column('scheduled_install_date', sa.Date(), nullable=True),
        sa.Column('time_window', sa.String(length=20), nullable=True),
        sa.Column('estimated_duration_hours', sa.Integer(), nullable=True),
        sa.Column('internal_install_notes', sa.Text(), nullable=True),
        sa.Column('engineer_signed_off_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('engineer_signature_data', sa.Text(), nullable=True),
        sa.Column('engineer_notes', sa.Text(), nullable=True),
        sa.Column('engineer_status', sa.String(length=50), nullable=True),
        sa.Column('scheduling_conflicts', sa.JSON(), nullable=True),
        sa.Column('version', sa.Integer(), nullable=False, server_default='1'),
        *_timestamps(),
        sa.ForeignKeyConstraint(['engineer_id'], ['engineers.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('order_number')
    )
    op.create_index('ix_orders_client_id', 'orders', ['client_id'])
    op.create_index('ix_orders_status', 'orders', ['status'])
    op.create_index('ix_orders_engineer_id', 'orders', ['engineer_id'])
    op.create_index('ix_orders_scheduled_install_date', 'orders', ['scheduled_install_date'])

    # Engineer roster tables
    op.create_table(
        'engineer_availability',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('engineer_id', sa.Uuid(), nullable=False),
        sa.Column('day_of_week', sa.Integer(), nullable=False),
        sa.Column('start_time', sa.Time(), nullable=False),
        sa.Column('end_time', sa.Time(), nullable=False),
        sa.Column('is_available', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.CheckConstraint('day_of_week BETWEEN 0 AND 6', name='ck_engineer_availability_day'),
        sa.ForeignKeyConstraint(['engineer_id'], ['engineers.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_engineer_availability_engineer_id', 'engineer_availability', ['engineer_id'])

    op.create_table(
        'engineer_time_off',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('engineer_id', sa.Uuid(), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('reason', sa.Text(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['engineer_id'], ['engineers.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_engineer_time_off_engineer_id', 'engineer_time_off', ['engineer_id'])

    op.create_table(
        'engineer_service_areas',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('engineer_id', sa.Uuid(), nullable=False),
        sa.Column('postcode_area', sa.String(length=10), nullable=False),
        sa.Column('max_travel_time_minutes', sa.Integer(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['engineer_id'], ['engineers.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_engineer_service_areas_engineer_id', 'engineer_service_areas', ['engineer_id'])

    # Client availability
    op.create_table(
        'client_blocked_dates',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('client_id', sa.Uuid(), nullable=False),
        sa.Column('blocked_date', sa.Date(), nullable=False),
        sa.Column('reason', sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('client_id', 'blocked_date')
    )
    op.create_index('ix_client_blocked_dates_client_id', 'client_blocked_dates', ['client_id'])

    # Completion and engineer work
    op.create_table(
        'order_completion_checklist',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('order_id', sa.Uuid(), nullable=False),
        sa.Column('item_id', sa.String(length=100), nullable=False),
        sa.Column('item_label', sa.String(length=255), nullable=False),
        sa.Column('is_completed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['order_id'], ['orders.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_order_completion_checklist_order_id', 'order_completion_checklist', ['order_id'])

    op.create_table(
        'engineer_uploads',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('order_id', sa.Uuid(), nullable=False),
        sa.Column('engineer_id', sa.Uuid(), nullable=True),
        sa.Column('upload_type', sa.String(length=50), nullable=False),
        sa.Column('file_name', sa.String(length=255), nullable=False),
        sa.Column('file_url', sa.Text(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('uploaded_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        *_timestamps(),
        sa.ForeignKeyConstraint(['order_id'], ['orders.id']),
        sa.ForeignKeyConstraint(['engineer_id'], ['engineers.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_engineer_uploads_order_id', 'engineer_uploads', ['order_id'])

    op.create_table(
        'engineer_work_archive',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('order_id', sa.Uuid(), nullable=False),
        sa.Column('engineer_id', sa.Uuid(), nullable=True),
        sa.Column('scheduled_date_before', sa.Date(), nullable=True),
        sa.Column('scheduled_date_after', sa.Date(), nullable=True),
        sa.Column('reset_reason', sa.String(length=50), nullable=False),
        sa.Column('engineer_notes', sa.Text(), nullable=True),
        sa.Column('engineer_signature_data', sa.Text(), nullable=True),
        sa.Column('engineer_signed_off_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('engineer_status', sa.String(length=50), nullable=True),
        sa.Column('uploads', sa.JSON(), nullable=False),
        sa.Column('archived_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        *_timestamps(),
        sa.ForeignKeyConstraint(['order_id'], ['orders.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_engineer_work_archive_order_id', 'engineer_work_archive', ['order_id'])

    op.create_table(
        'order_activity',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('order_id', sa.Uuid(), nullable=False),
        sa.Column('activity_type', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('details', sa.JSON(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['order_id'], ['orders.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_order_activity_order_id', 'order_activity', ['order_id'])

    # Admin settings
    op.create_table(
        'admin_settings',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('setting_key', sa.String(length=100), nullable=False),
        sa.Column('setting_value', sa.JSON(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('setting_key')
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('admin_settings')
    op.drop_index('ix_order_activity_order_id', table_name='order_activity')
    op.drop_table('order_activity')
    op.drop_index('ix_engineer_work_archive_order_id', table_name='engineer_work_archive')
    op.drop_table('engineer_work_archive')
    op.drop_index('ix_engineer_uploads_order_id', table_name='engineer_uploads')
    op.drop_table('engineer_uploads')
    op.drop_index('ix_order_completion_checklist_order_id', table_name='order_completion_checklist')
    op.drop_table('order_completion_checklist')
    op.drop_index('ix_client_blocked_dates_client_id', table_name='client_blocked_dates')
    op.drop_table('client_blocked_dates')
    op.drop_index('ix_engineer_service_areas_engineer_id', table_name='engineer_service_areas')
    op.drop_table('engineer_service_areas')
    op.drop_index('ix_engineer_time_off_engineer_id', table_name='engineer_time_off')
    op.drop_table('engineer_time_off')
    op.drop_index('ix_engineer_availability_engineer_id', table_name='engineer_availability')
    op.drop_table('engineer_availability')
    op.drop_index('ix_orders_scheduled_install_date', table_name='orders')
    op.drop_index('ix_orders_engineer_id', table_name='orders')
    op.drop_index('ix_orders_status', table_name='orders')
    op.drop_index('ix_orders_client_id', table_name='orders')
    op.drop_table('orders')
    op.drop_table('engineers')
