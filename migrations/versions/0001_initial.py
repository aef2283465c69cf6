"""Initial migration

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.sql import func

# revision identifiers, used by Alembic.
revision = '0001_initial'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # Create wisps table
    op.create_table(
        'wisps',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=255), nullable=False, unique=True),
        sa.Column('owmw_url', sa.String(length=255), nullable=True),
        sa.Column('owmw_username', sa.String(length=255), nullable=True),
        sa.Column('owmw_password', sa.String(length=255), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=func.now(), nullable=False),
    )
    op.create_index('ix_wisps_id', 'wisps', ['id'])

    # Create access_points table
    op.create_table(
        'access_points',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('wisp_id', sa.Integer(), sa.ForeignKey('wisps.id'), nullable=True),
        sa.Column('hostname', sa.String(length=255), nullable=False),
        sa.Column('mng_ip', sa.BigInteger(), nullable=True, comment="Management IPv4, хранится как целое"),
        sa.Column('lat', sa.Float(), nullable=False),
        sa.Column('lng', sa.Float(), nullable=False),
        sa.Column('address', sa.String(length=255), nullable=True),
        sa.Column('city', sa.String(length=255), nullable=True),
        sa.Column('activation_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=func.now(), nullable=True),
    )
    op.create_index('ix_access_points_id', 'access_points', ['id'])
    op.create_index('ix_access_points_wisp_id', 'access_points', ['wisp_id'])
    op.create_index('ix_access_points_hostname', 'access_points', ['hostname'])
    # Для грубого фильтра по прямоугольнику при кластеризации
    op.create_index('ix_access_points_lat_lng', 'access_points', ['lat', 'lng'])

    # Create property_sets table
    op.create_table(
        'property_sets',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('access_point_id', sa.Integer(), sa.ForeignKey('access_points.id', ondelete='CASCADE'), nullable=False, unique=True),
        sa.Column('reachable', sa.Boolean(), nullable=True, comment="Доступность AP: true/false/неизвестно"),
        sa.Column('public', sa.Boolean(), nullable=False, server_default=sa.false(), comment="Показывать в georss"),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('site_description', sa.Text(), nullable=True),
    )
    op.create_index('ix_property_sets_id', 'property_sets', ['id'])

    # Create activities table
    op.create_table(
        'activities',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('access_point_id', sa.Integer(), sa.ForeignKey('access_points.id', ondelete='CASCADE'), nullable=False),
        sa.Column('status', sa.Boolean(), nullable=False, comment="Результат проверки доступности"),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=func.now(), nullable=False),
    )
    op.create_index('ix_activities_id', 'activities', ['id'])
    op.create_index('ix_activities_access_point_id', 'activities', ['access_point_id'])

    # Create activity_histories table
    op.create_table(
        'activity_histories',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('access_point_id', sa.Integer(), sa.ForeignKey('access_points.id', ondelete='CASCADE'), nullable=False),
        sa.Column('status', sa.Float(), nullable=False, comment="Доля успешных проверок за интервал (0..1)"),
        sa.Column('start_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('last_time', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_activity_histories_id', 'activity_histories', ['id'])
    op.create_index('ix_activity_histories_access_point_id', 'activity_histories', ['access_point_id'])

    # Create users table
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('username', sa.String(length=150), nullable=False, unique=True),
        sa.Column('hashed_password', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('is_superuser', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_username', 'users', ['username'])


def downgrade():
    op.drop_index('ix_users_username', table_name='users')
    op.drop_index('ix_users_id', table_name='users')
    op.drop_table('users')
    op.drop_index('ix_activity_histories_access_point_id', table_name='activity_histories')
    op.drop_index('ix_activity_histories_id', table_name='activity_histories')
    op.drop_table('activity_histories')
    op.drop_index('ix_activities_access_point_id', table_name='activities')
    op.drop_index('ix_activities_id', table_name='activities')
    op.drop_table('activities')
    op.drop_index('ix_property_sets_id', table_name='property_sets')
    op.drop_table('property_sets')
    op.drop_index('ix_access_points_lat_lng', table_name='access_points')
    op.drop_index('ix_access_points_hostname', table_name='access_points')
    op.drop_index('ix_access_points_wisp_id', table_name='access_points')
    op.drop_index('ix_access_points_id', table_name='access_points')
    op.drop_table('access_points')
    op.drop_index('ix_wisps_id', table_name='wisps')
    op.drop_table('wisps')
