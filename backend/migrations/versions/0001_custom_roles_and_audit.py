"""custom roles and audit log tables

Revision ID: 0001_custom_roles_and_audit
Revises: 
Create Date: 2026-10-19
"""
from __future__ import annotations
from alembic import op
import sqlalchemy as sa

revision = '0001_custom_roles_and_audit'
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table('custom_roles',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('shard_id', sa.String(length=64), nullable=False),
        sa.Column('business_id', sa.String(length=128), nullable=False),
        sa.Column('location_id', sa.String(length=128), nullable=False, server_default=''),
        sa.Column('business_type', sa.String(length=16), nullable=False),
        sa.Column('name', sa.String(length=64), nullable=False),
        sa.Column('display_name', sa.String(length=128), nullable=False),
        sa.Column('description', sa.String(length=255), nullable=True),
        sa.Column('hierarchy', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('permissions', sa.JSON(), nullable=True),
        sa.Column('active', sa.Boolean(), nullable=False, server_default=sa.text('1')),
        sa.Column('business_type_specific', sa.Boolean(), nullable=False, server_default=sa.text('1')),
        sa.Column('created_by', sa.String(length=128), nullable=True),
        sa.Column('modified_by', sa.String(length=128), nullable=True),
        sa.Column('created_at', sa.String(length=40), nullable=True),
        sa.Column('modified_at', sa.String(length=40), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'))
    )
    op.create_index('ix_custom_roles_shard_id', 'custom_roles', ['shard_id'])
    op.create_index('ix_custom_roles_business_id', 'custom_roles', ['business_id'])
    # unique constraint handled via batch for sqlite
    with op.batch_alter_table('custom_roles') as batch_op:
        batch_op.create_unique_constraint('uq_custom_role_tenant_name', ['business_id', 'location_id', 'business_type', 'name'])

    op.create_table('audit_logs',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('actor_user_id', sa.String(length=128), nullable=False),
        sa.Column('business_id', sa.String(length=128), nullable=True),
        sa.Column('action', sa.String(length=64), nullable=False),
        sa.Column('entity', sa.String(length=64)),
        sa.Column('entity_id', sa.String(length=128)),
        sa.Column('roles_snapshot', sa.JSON(), nullable=True),
        sa.Column('meta', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'))
    )
    op.create_index('ix_audit_logs_actor_user_id', 'audit_logs', ['actor_user_id'])
    op.create_index('ix_audit_logs_business_id', 'audit_logs', ['business_id'])
    op.create_index('ix_audit_logs_action', 'audit_logs', ['action'])


def downgrade():
    for tbl in ['audit_logs', 'custom_roles']:
        op.drop_table(tbl)
