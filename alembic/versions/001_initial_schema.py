"""Initial schema - users, child profiles, chat messages, daily tips

Revision ID: 001_initial_schema
Revises: 
Create Date: 2025-01-01 00:00:00.000000

Creates the core Senali database schema:
- users: Firebase accounts with credit and subscription state
- child_profiles: Family members with checklist and assessment JSON
- chat_messages: Conversation history with the assistant
- daily_tips: Generated tips with user feedback
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers
revision: str = '001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create users table (primary key is the Firebase uid)
    op.create_table(
        'users',
        sa.Column('id', sa.String(128), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('display_name', sa.String(255), nullable=True),
        sa.Column('photo_url', sa.String(1024), nullable=True),
        sa.Column('full_name', sa.String(255), nullable=True),
        sa.Column('has_completed_profile', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('credits', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('subscription', sa.String(20), nullable=False, server_default='free'),
        sa.Column('subscription_status', sa.String(20), nullable=False, server_default='inactive'),
        sa.Column('subscription_platform', sa.String(20), nullable=True),
        sa.Column('subscription_id', sa.String(255), nullable=True),
        sa.Column('last_credit_refill', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('last_login_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('credits >= 0', name='ck_users_credits_non_negative'),
    )
    op.create_index('ix_users_email', 'users', ['email'])
    op.create_index('ix_users_subscription', 'users', ['subscription'])

    # Create child_profiles table
    op.create_table(
        'child_profiles',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('user_id', sa.String(128), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('age', sa.Integer(), nullable=True),
        sa.Column('relationship', sa.String(20), nullable=False, server_default='child'),
        sa.Column('gender', sa.String(30), nullable=True),
        sa.Column('medical_diagnoses', sa.Text(), nullable=True),
        sa.Column('school_info', sa.Text(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('symptoms', postgresql.JSONB(), nullable=False, server_default=sa.text("'{}'::jsonb")),
        sa.Column('assessment', postgresql.JSONB(), nullable=False, server_default=sa.text("'{}'::jsonb")),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('user_id', 'name', name='uq_child_profiles_user_name'),
    )
    op.create_index('ix_child_profiles_user_id', 'child_profiles', ['user_id'])
    op.create_index('ix_child_profiles_created_at', 'child_profiles', ['created_at'])

    # Create chat_messages table
    op.create_table(
        'chat_messages',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('user_id', sa.String(128), nullable=False),
        sa.Column('role', sa.String(20), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('tokens', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
    )
    op.create_index('ix_chat_messages_user_id', 'chat_messages', ['user_id'])
    op.create_index('ix_chat_messages_created_at', 'chat_messages', ['created_at'])

    # Create daily_tips table
    op.create_table(
        'daily_tips',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('user_id', sa.String(128), nullable=False),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('category', sa.String(30), nullable=False, server_default='general'),
        sa.Column('difficulty', sa.String(20), nullable=False, server_default='beginner'),
        sa.Column('target_age', sa.String(30), nullable=True),
        sa.Column('estimated_time', sa.String(50), nullable=True),
        sa.Column('tags', postgresql.JSONB(), nullable=False, server_default=sa.text("'[]'::jsonb")),
        sa.Column('liked', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('disliked', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('bookmarked', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('helpful', sa.Boolean(), nullable=True),
        sa.Column('tried', sa.Boolean(), nullable=True),
        sa.Column('rating', sa.Integer(), nullable=True),
        sa.Column('comments', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.CheckConstraint('rating IS NULL OR (rating >= 1 AND rating <= 5)', name='ck_daily_tips_rating'),
    )
    op.create_index('ix_daily_tips_user_id', 'daily_tips', ['user_id'])
    op.create_index('ix_daily_tips_category', 'daily_tips', ['category'])
    op.create_index('ix_daily_tips_created_at', 'daily_tips', ['created_at'])
    # Composite index for "today's tip" lookups
    op.create_index('ix_daily_tips_user_created', 'daily_tips', ['user_id', 'created_at'])


def downgrade() -> None:
    op.drop_table('daily_tips')
    op.drop_table('chat_messages')
    op.drop_table('child_profiles')
    op.drop_table('users')
