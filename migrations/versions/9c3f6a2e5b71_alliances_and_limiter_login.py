"""Partner alliances; login throttling moves to Flask-Limiter

Revision ID: 9c3f6a2e5b71
Revises: 4a7c1e9b2d10
Create Date: 2026-10-19 16:30:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '9c3f6a2e5b71'
down_revision = '4a7c1e9b2d10'
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'alliances',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(length=150), nullable=False),
        sa.Column('slug', sa.String(length=160), nullable=False),
        sa.Column('category', sa.String(length=80), nullable=False),
        sa.Column('country', sa.String(length=80), nullable=True),
        sa.Column('specialization', sa.String(length=150), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('logo_url', sa.String(length=255), nullable=True),
        sa.Column('website_url', sa.String(length=255), nullable=True),
        sa.Column('certifications', sa.JSON(), nullable=False),
        sa.Column('is_featured', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_alliances_slug', 'alliances', ['slug'], unique=True)
    op.create_index('ix_alliances_category', 'alliances', ['category'])
    op.create_index('ix_alliances_is_featured', 'alliances', ['is_featured'])

    op.drop_index('ix_admin_login_attempt_ip_created', table_name='admin_login_attempts')
    op.drop_index('ix_admin_login_attempts_ip', table_name='admin_login_attempts')
    op.drop_table('admin_login_attempts')


def downgrade():
    op.create_table(
        'admin_login_attempts',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('ip', sa.String(length=64), nullable=False),
        sa.Column('user_agent', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_admin_login_attempts_ip', 'admin_login_attempts', ['ip'])
    op.create_index('ix_admin_login_attempt_ip_created', 'admin_login_attempts', ['ip', 'created_at'])

    op.drop_index('ix_alliances_is_featured', table_name='alliances')
    op.drop_index('ix_alliances_category', table_name='alliances')
    op.drop_index('ix_alliances_slug', table_name='alliances')
    op.drop_table('alliances')
