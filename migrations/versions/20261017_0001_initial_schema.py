"""Initial schema: users, projects, comments, ratings and project lists

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-17 09:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '0001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_json = sa.JSON().with_variant(postgresql.JSONB(), 'postgresql')


def _timestamps(updated: bool = True):
    cols = [sa.Column('created_at', sa.DateTime(timezone=True), nullable=True, server_default=sa.func.now())]
    if updated:
        cols.append(sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True, server_default=sa.func.now()))
    return cols


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('username', sa.String(50), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('firebase_uid', sa.String(128), nullable=False),
        sa.Column('reputation', sa.Float(), nullable=False, server_default='0'),
        sa.Column('profile_picture', sa.Integer(), nullable=False, server_default='0'),
        *_timestamps(),
        sa.UniqueConstraint('username', name='uq_users_username'),
        sa.UniqueConstraint('email', name='uq_users_email'),
        sa.UniqueConstraint('firebase_uid', name='uq_users_firebase_uid'),
        sa.CheckConstraint('reputation >= 0', name='ck_users_reputation_non_negative'),
        sa.CheckConstraint('profile_picture >= 0', name='ck_users_profile_picture_non_negative'),
    )
    op.create_index('idx_users_created_at', 'users', ['created_at'])

    op.create_table(
        'projects',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('owner_id', sa.Integer(), sa.ForeignKey('users.id', name='fk_projects_owner_id'), nullable=False),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False, server_default=''),
        sa.Column('tutorial', sa.Text(), nullable=False, server_default=''),
        sa.Column('materials', _json, nullable=False),
        sa.Column('tools', _json, nullable=False),
        sa.Column('style', _json, nullable=False),
        sa.Column('environment', _json, nullable=False),
        sa.Column('portrait', sa.String(2048), nullable=False, server_default=''),
        sa.Column('images', _json, nullable=False),
        sa.Column('time_to_build', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('average_rating', sa.Float(), nullable=False, server_default='0'),
        sa.Column('rating_count', sa.Integer(), nullable=False, server_default='0'),
        *_timestamps(),
        sa.CheckConstraint('time_to_build >= 0', name='ck_projects_time_to_build_non_negative'),
        sa.CheckConstraint('rating_count >= 0', name='ck_projects_rating_count_non_negative'),
    )
    op.create_index('idx_projects_owner_id', 'projects', ['owner_id'])
    op.create_index('idx_projects_created_at', 'projects', ['created_at'])
    op.create_index('idx_projects_average_rating', 'projects', ['average_rating'])

    op.create_table(
        'comments',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('project_id', sa.Integer(), sa.ForeignKey('projects.id', name='fk_comments_project_id'), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', name='fk_comments_user_id'), nullable=False),
        sa.Column(
            'parent_comment_id',
            sa.Integer(),
            sa.ForeignKey('comments.id', name='fk_comments_parent_comment_id'),
            nullable=True,
        ),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('status', sa.String(16), nullable=False, server_default='active'),
        *_timestamps(),
        sa.CheckConstraint("status in ('active','deleted')", name='ck_comments_status'),
        sa.CheckConstraint('rating >= 0 AND rating <= 5', name='ck_comments_rating_range'),
    )
    op.create_index('idx_comments_project_id', 'comments', ['project_id'])
    op.create_index('idx_comments_user_id', 'comments', ['user_id'])
    op.create_index('idx_comments_parent_comment_id', 'comments', ['parent_comment_id'])

    op.create_table(
        'ratings',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('project_id', sa.Integer(), sa.ForeignKey('projects.id', name='fk_ratings_project_id'), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', name='fk_ratings_user_id'), nullable=False),
        sa.Column('value', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('user_id', 'project_id', name='uq_ratings_user_project'),
        sa.CheckConstraint('value >= 1 AND value <= 5', name='ck_ratings_value_range'),
    )
    op.create_index('idx_ratings_project_id', 'ratings', ['project_id'])

    op.create_table(
        'project_lists',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', name='fk_project_lists_user_id'), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('is_public', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index('idx_project_lists_user_id', 'project_lists', ['user_id'])
    op.create_index('idx_project_lists_is_public', 'project_lists', ['is_public'])

    op.create_table(
        'project_list_items',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            'project_list_id',
            sa.Integer(),
            sa.ForeignKey('project_lists.id', name='fk_project_list_items_project_list_id'),
            nullable=False,
        ),
        sa.Column(
            'project_id',
            sa.Integer(),
            sa.ForeignKey('projects.id', name='fk_project_list_items_project_id'),
            nullable=False,
        ),
        *_timestamps(updated=False),
        sa.UniqueConstraint('project_list_id', 'project_id', name='uq_project_list_items_list_project'),
    )
    op.create_index('idx_project_list_items_project_id', 'project_list_items', ['project_id'])


def downgrade() -> None:
    op.drop_index('idx_project_list_items_project_id', table_name='project_list_items')
    op.drop_table('project_list_items')
    op.drop_index('idx_project_lists_is_public', table_name='project_lists')
    op.drop_index('idx_project_lists_user_id', table_name='project_lists')
    op.drop_table('project_lists')
    op.drop_index('idx_ratings_project_id', table_name='ratings')
    op.drop_table('ratings')
    op.drop_index('idx_comments_parent_comment_id', table_name='comments')
    op.drop_index('idx_comments_user_id', table_name='comments')
    op.drop_index('idx_comments_project_id', table_name='comments')
    op.drop_table('comments')
    op.drop_index('idx_projects_average_rating', table_name='projects')
    op.drop_index('idx_projects_created_at', table_name='projects')
    op.drop_index('idx_projects_owner_id', table_name='projects')
    op.drop_table('projects')
    op.drop_index('idx_users_created_at', table_name='users')
    op.drop_table('users')
