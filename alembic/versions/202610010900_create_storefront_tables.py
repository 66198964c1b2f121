"""Create storefront tables

Revision ID: 202610010900
Revises:
Create Date: 2026-10-01 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '202610010900'
down_revision = None
branch_labels = None
depends_on = None


order_status = sa.Enum(
    'Pending', 'Confirmed', 'Shipped', 'Delivered', 'Cancelled',
    name='order_status',
)
shipping_method = sa.Enum('delivery', 'pickup', name='shipping_method')


def upgrade() -> None:
    op.create_table(
        'verification_codes',
        sa.Column('id', sa.String(length=32), nullable=False),
        sa.Column('used', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('used_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True),
                  server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table(
        'orders',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('tracking_number', sa.String(length=32), nullable=False),
        sa.Column('tracking_token_hash', sa.String(length=64), nullable=True),
        sa.Column('idempotency_key_hash', sa.String(length=64), nullable=True),
        sa.Column('status', order_status, nullable=False),
        sa.Column('shipping_method', shipping_method, nullable=False),
        sa.Column('shipping_full_name', sa.String(length=100), nullable=False),
        sa.Column('shipping_phone', sa.String(length=20), nullable=False),
        sa.Column('shipping_email', sa.String(length=255), nullable=True),
        sa.Column('shipping_address', sa.String(length=500), nullable=True),
        sa.Column('total', sa.Numeric(12, 2), nullable=False),
        sa.Column('user_id', sa.String(length=255), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True),
                  server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True),
                  server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('tracking_token_hash', name='uq_orders_tracking_token_hash'),
        sa.UniqueConstraint('idempotency_key_hash', name='uq_orders_idempotency_key_hash'),
    )
    op.create_index('ix_orders_user_id', 'orders', ['user_id'])

    op.create_table(
        'order_items',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('order_id', sa.Uuid(),
                  sa.ForeignKey('orders.id', ondelete='CASCADE'), nullable=False),
        sa.Column('product_id', sa.String(length=64), nullable=True),
        sa.Column('product_name', sa.String(length=255), nullable=False),
        sa.Column('product_price', sa.Numeric(12, 2), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True),
                  server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('quantity >= 1', name='ck_order_items_quantity_positive'),
    )
    op.create_index('ix_order_items_order_id', 'order_items', ['order_id'])

    op.create_table(
        'lookup_attempts',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('scope', sa.String(length=32), nullable=False),
        sa.Column('source_address', sa.String(length=64), nullable=False),
        sa.Column('token_fingerprint', sa.String(length=16), nullable=True),
        sa.Column('attempted_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(
        'ix_lookup_attempts_scope_address_attempted_at',
        'lookup_attempts',
        ['scope', 'source_address', 'attempted_at'],
    )

    op.create_table(
        'user_roles',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=16), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True),
                  server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'role', name='uq_user_roles_user_id_role'),
    )

    op.create_table(
        'admin_audit_logs',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('admin_user_id', sa.String(length=255), nullable=False),
        sa.Column('action_type', sa.String(length=100), nullable=False),
        sa.Column('target', sa.String(length=64), nullable=False),
        sa.Column('details', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True),
                  server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_admin_audit_logs_admin_user_id', 'admin_audit_logs',
                    ['admin_user_id'])
    op.create_index('ix_admin_audit_logs_created_at', 'admin_audit_logs',
                    ['created_at'])


def downgrade() -> None:
    op.drop_index('ix_admin_audit_logs_created_at', table_name='admin_audit_logs')
    op.drop_index('ix_admin_audit_logs_admin_user_id', table_name='admin_audit_logs')
    op.drop_table('admin_audit_logs')

    op.drop_table('user_roles')

    op.drop_index('ix_lookup_attempts_scope_address_attempted_at',
                  table_name='lookup_attempts')
    op.drop_table('lookup_attempts')

    op.drop_index('ix_order_items_order_id', table_name='order_items')
    op.drop_table('order_items')

    op.drop_index('ix_orders_user_id', table_name='orders')
    op.drop_table('orders')

    order_status.drop(op.get_bind(), checkfirst=True)
    shipping_method.drop(op.get_bind(), checkfirst=True)
