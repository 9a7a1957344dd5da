"""Create menu management tables

Revision ID: 001
Revises:
Create Date: 2025-01-23 10:00:00.000000

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
    ]


def upgrade() -> None:
    """Create menu management tables"""

    # 1. Roles
    op.create_table('roles',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('slug', sa.String(120), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='active'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_roles_created_at', 'roles', ['created_at'])
    op.create_index('uq_roles_name_lower', 'roles', [sa.text('lower(name)')], unique=True)
    op.create_index('uq_roles_slug_lower', 'roles', [sa.text('lower(slug)')], unique=True)

    # 2. Users
    op.create_table('users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(150), nullable=False),
        sa.Column('username', sa.String(100), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('phone_number', sa.String(50), nullable=True),
        sa.Column('role_id', sa.Uuid(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['role_id'], ['roles.id'], ondelete='RESTRICT'),
    )
    op.create_index('ix_users_created_at', 'users', ['created_at'])
    op.create_index('ix_users_role_id', 'users', ['role_id'])
    op.create_index('uq_users_username', 'users', ['username'], unique=True)
    op.create_index('uq_users_email_lower', 'users', [sa.text('lower(email)')], unique=True)

    # 3. Messaging contacts
    op.create_table('messaging_contacts',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(150), nullable=True),
        sa.Column('username', sa.String(100), nullable=True),
        sa.Column('phone_number', sa.String(50), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='active'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
    )
    op.create_index('ix_messaging_contacts_created_at', 'messaging_contacts', ['created_at'])
    op.create_index('ix_messaging_contacts_user_id', 'messaging_contacts', ['user_id'])

    # 4. Businesses
    op.create_table('businesses',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('messaging_contact_id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('location', sa.String(255), nullable=False),
        sa.Column('logo', sa.String(500), nullable=False),
        sa.Column('image', sa.String(500), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='active'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['messaging_contact_id'], ['messaging_contacts.id']),
    )
    op.create_index('ix_businesses_created_at', 'businesses', ['created_at'])
    op.create_index('ix_businesses_user_id', 'businesses', ['user_id'])
    op.create_index('ix_businesses_messaging_contact_id', 'businesses', ['messaging_contact_id'])

    # 5. Categories
    op.create_table('categories',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('business_id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(150), nullable=False),
        sa.Column('slug', sa.String(170), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='active'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['business_id'], ['businesses.id'], ondelete='CASCADE'),
    )
    op.create_index('ix_categories_created_at', 'categories', ['created_at'])
    op.create_index('ix_categories_business_id', 'categories', ['business_id'])
    op.create_index(
        'uq_categories_business_name_lower', 'categories', ['business_id', sa.text('lower(name)')], unique=True
    )
    op.create_index(
        'uq_categories_business_slug_lower', 'categories', ['business_id', sa.text('lower(slug)')], unique=True
    )

    # 6. Items
    op.create_table('items',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('category_id', sa.Uuid(), nullable=False),
        sa.Column('business_id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('price', sa.Numeric(12, 2), nullable=False),
        sa.Column('image', sa.String(500), nullable=False),
        sa.Column('meta', sa.JSON(), nullable=True),
        sa.Column('tags', sa.JSON(), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='active'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['category_id'], ['categories.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['business_id'], ['businesses.id'], ondelete='CASCADE'),
    )
    op.create_index('ix_items_created_at', 'items', ['created_at'])
    op.create_index('ix_items_category_id', 'items', ['category_id'])
    op.create_index('ix_items_business_id', 'items', ['business_id'])

    # 7. Subscription plans
    op.create_table('subscription_plans',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('slug', sa.String(120), nullable=False),
        sa.Column('price', sa.Numeric(12, 2), nullable=False),
        sa.Column('duration', sa.Integer(), nullable=False),
        sa.Column('feature', sa.JSON(), nullable=False),
        sa.Column('max_business', sa.Integer(), nullable=False),
        sa.Column('max_category', sa.Integer(), nullable=False),
        sa.Column('max_item', sa.Integer(), nullable=False),
        sa.Column('analysis_type', sa.String(20), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='active'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('duration > 0', name='ck_subscription_plans_duration'),
    )
    op.create_index('ix_subscription_plans_created_at', 'subscription_plans', ['created_at'])
    op.create_index('uq_subscription_plans_name_lower', 'subscription_plans', [sa.text('lower(name)')], unique=True)
    op.create_index('uq_subscription_plans_slug_lower', 'subscription_plans', [sa.text('lower(slug)')], unique=True)

    # 8. User subscription plans
    op.create_table('user_subscription_plans',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('subscription_plan_id', sa.Uuid(), nullable=False),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='active'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['subscription_plan_id'], ['subscription_plans.id'], ondelete='RESTRICT'),
    )
    op.create_index('ix_user_subscription_plans_created_at', 'user_subscription_plans', ['created_at'])
    op.create_index('ix_user_subscription_plans_user_id', 'user_subscription_plans', ['user_id'])
    op.create_index(
        'ix_user_subscription_plans_subscription_plan_id', 'user_subscription_plans', ['subscription_plan_id']
    )
    op.create_index(
        'uq_user_subscription_plans_active_user',
        'user_subscription_plans',
        ['user_id'],
        unique=True,
        postgresql_where=sa.text("status = 'active'"),
        sqlite_where=sa.text("status = 'active'"),
    )

    # 9. Orders
    op.create_table('orders',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('business_id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(150), nullable=False),
        sa.Column('phone', sa.String(50), nullable=False),
        sa.Column('address', sa.Text(), nullable=False),
        sa.Column('items', sa.JSON(), nullable=False),
        sa.Column('total', sa.Numeric(12, 2), nullable=False),
        sa.Column('note', sa.Text(), nullable=False, server_default=''),
        sa.Column('status', sa.String(20), nullable=False, server_default='pending'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['business_id'], ['businesses.id'], ondelete='CASCADE'),
    )
    op.create_index('ix_orders_created_at', 'orders', ['created_at'])
    op.create_index('ix_orders_business_id', 'orders', ['business_id'])


def downgrade() -> None:
    """Drop menu management tables"""

    op.drop_table('orders')
    op.drop_table('user_subscription_plans')
    op.drop_table('subscription_plans')
    op.drop_table('items')
    op.drop_table('categories')
    op.drop_table('businesses')
    op.drop_table('messaging_contacts')
    op.drop_table('users')
    op.drop_table('roles')
