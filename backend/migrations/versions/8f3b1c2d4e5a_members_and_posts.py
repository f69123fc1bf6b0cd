"""create members and posts

Revision ID: 8f3b1c2d4e5a
Revises:
Create Date: 2025-09-14 00:00:00.000000
"""
import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = '8f3b1c2d4e5a'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'members',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('uuid', sa.String(length=36), nullable=False),
        sa.Column('email', sa.String(length=254), nullable=False),
        sa.Column('password_hash', sa.String(length=254), nullable=False),
        sa.Column('username', sa.String(length=20), nullable=False),
        sa.Column(
            'role',
            sa.Enum('USER', 'ADMIN', name='member_role', native_enum=False, length=16),
            nullable=False,
        ),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_members'),
        sa.UniqueConstraint('uuid', name='uq_members_uuid'),
        sa.UniqueConstraint('email', name='uq_members_email'),
        sa.UniqueConstraint('username', name='uq_members_username'),
    )
    op.create_table(
        'posts',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('slug', sa.String(length=160), nullable=False),
        sa.Column('author_id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('view_count', sa.Integer(), server_default='0', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.CheckConstraint('view_count >= 0', name='ck_posts_view_count_non_negative'),
        sa.ForeignKeyConstraint(
            ['author_id'], ['members.id'], name='fk_posts_author_id_members', ondelete='CASCADE'
        ),
        sa.PrimaryKeyConstraint('id', name='pk_posts'),
        sa.UniqueConstraint('slug', name='uq_posts_slug'),
    )
    op.create_index('ix_posts_author_created', 'posts', ['author_id', 'created_at'], unique=False)
    op.create_index('ix_posts_author_views', 'posts', ['author_id', 'view_count'], unique=False)


def downgrade():
    op.drop_index('ix_posts_author_views', table_name='posts')
    op.drop_index('ix_posts_author_created', table_name='posts')
    op.drop_table('posts')
    op.drop_table('members')
