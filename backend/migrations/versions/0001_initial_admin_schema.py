"""initial admin schema

Revision ID: 0001_initial_admin_schema
Revises:
Create Date: 2026-10-19 00:00:00.000000

Creates the administration model:
- roles: named permission sets
- locations: stores and warehouses
- cash_registers: fiscal devices bound to a store
- device_brands: brand catalog for cash registers
- users: credentials, role and access scope

Cross-entity references (role_id, store_id, scope lists) are plain ids with
no foreign keys; readers skip ids that no longer resolve.
"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '0001_initial_admin_schema'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps(with_updated=True):
    columns = [sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now())]
    if with_updated:
        columns.append(sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()))
    return columns


def upgrade():
    # ============================================================================
    # roles
    # ============================================================================
    op.create_table(
        'roles',
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('name', sa.String(length=64), nullable=False),
        sa.Column('permissions', sa.JSON(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )

    # ============================================================================
    # locations
    # ============================================================================
    op.create_table(
        'locations',
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('type', sa.String(length=16), nullable=False),
        sa.Column('linked_warehouse_ids', sa.JSON(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_locations_type', 'locations', ['type'])

    # ============================================================================
    # cash_registers
    # ============================================================================
    op.create_table(
        'cash_registers',
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('name', sa.String(length=128), nullable=False),
        sa.Column('store_id', sa.String(length=64), nullable=False),
        sa.Column('brand', sa.String(length=64), nullable=True),
        sa.Column('ip_address', sa.String(length=45), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_cash_registers_store_id', 'cash_registers', ['store_id'])

    # ============================================================================
    # device_brands
    # ============================================================================
    op.create_table(
        'device_brands',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=64), nullable=False),
        sa.Column('version_id', sa.Integer(), nullable=False),
        *_timestamps(with_updated=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
        sqlite_autoincrement=True,
    )

    # ============================================================================
    # users
    # ============================================================================
    op.create_table(
        'users',
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('username', sa.String(length=64), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('role_id', sa.String(length=64), nullable=False),
        sa.Column('first_name', sa.String(length=64), nullable=False),
        sa.Column('last_name', sa.String(length=64), nullable=False),
        sa.Column('phone', sa.String(length=32), nullable=False),
        sa.Column('allowed_store_ids', sa.JSON(), nullable=False),
        sa.Column('allowed_warehouse_ids', sa.JSON(), nullable=False),
        sa.Column('assigned_cash_register_id', sa.String(length=64), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_username', 'users', ['username'])
    op.create_index('ix_users_role_id', 'users', ['role_id'])
    op.create_index('ix_users_assigned_cash_register_id', 'users', ['assigned_cash_register_id'])


def downgrade():
    op.drop_index('ix_users_assigned_cash_register_id', table_name='users')
    op.drop_index('ix_users_role_id', table_name='users')
    op.drop_index('ix_users_username', table_name='users')
    op.drop_table('users')
    op.drop_table('device_brands')
    op.drop_index('ix_cash_registers_store_id', table_name='cash_registers')
    op.drop_table('cash_registers')
    op.drop_index('ix_locations_type', table_name='locations')
    op.drop_table('locations')
    op.drop_table('roles')
