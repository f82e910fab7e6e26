"""Initial schema: divisions, products, inquiries, admin login attempts

Revision ID: 4a7c1e9b2d10
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '4a7c1e9b2d10'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'divisions',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('slug', sa.String(length=120), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('icon_name', sa.String(length=50), nullable=True),
        sa.Column('order_index', sa.Integer(), nullable=False, server_default='0'),
    )
    op.create_index('ix_divisions_slug', 'divisions', ['slug'], unique=True)

    op.create_table(
        'products',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('division_id', sa.Integer(), sa.ForeignKey('divisions.id'), nullable=True),
        sa.Column('name', sa.String(length=150), nullable=False),
        sa.Column('model_number', sa.String(length=80), nullable=False, server_default=''),
        sa.Column('slug', sa.String(length=200), nullable=False),
        sa.Column('short_description', sa.String(length=300), nullable=True),
        sa.Column('long_description', sa.Text(), nullable=True),
        sa.Column('main_image', sa.String(length=255), nullable=True),
        sa.Column('category_tag', sa.String(length=80), nullable=True),
        sa.Column('technical_specs', sa.JSON(), nullable=False),
        sa.Column('brochure_url', sa.String(length=255), nullable=True),
        sa.Column('video_url', sa.String(length=255), nullable=True),
        sa.Column('warranty_info', sa.String(length=200), nullable=True),
        sa.Column('is_published', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_products_division_id', 'products', ['division_id'])
    op.create_index('ix_products_name', 'products', ['name'])
    op.create_index('ix_products_slug', 'products', ['slug'], unique=True)
    op.create_index('ix_products_is_published', 'products', ['is_published'])
    op.create_index('ix_products_created_at', 'products', ['created_at'])

    op.create_table(
        'inquiries',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=120), nullable=False),
        sa.Column('company', sa.String(length=150), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending'),
    )
    op.create_index('ix_inquiries_created_at', 'inquiries', ['created_at'])
    op.create_index('ix_inquiries_name', 'inquiries', ['name'])
    op.create_index('ix_inquiries_email', 'inquiries', ['email'])
    op.create_index('ix_inquiries_company', 'inquiries', ['company'])
    op.create_index('ix_inquiries_status', 'inquiries', ['status'])

    op.create_table(
        'admin_login_attempts',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('ip', sa.String(length=64), nullable=False),
        sa.Column('user_agent', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_admin_login_attempts_ip', 'admin_login_attempts', ['ip'])
    op.create_index('ix_admin_login_attempt_ip_created', 'admin_login_attempts', ['ip', 'created_at'])


def downgrade():
    op.drop_index('ix_admin_login_attempt_ip_created', table_name='admin_login_attempts')
    op.drop_index('ix_admin_login_attempts_ip', table_name='admin_login_attempts')
    op.drop_table('admin_login_attempts')
    for name in ('status', 'company', 'email', 'name', 'created_at'):
        op.drop_index(f'ix_inquiries_{name}', table_name='inquiries')
    op.drop_table('inquiries')
    for name in ('created_at', 'is_published', 'slug', 'name', 'division_id'):
        op.drop_index(f'ix_products_{name}', table_name='products')
    op.drop_table('products')
    op.drop_index('ix_divisions_slug', table_name='divisions')
    op.drop_table('divisions')
