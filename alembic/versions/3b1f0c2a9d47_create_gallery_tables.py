"""create gallery tables

Revision ID: 3b1f0c2a9d47
Revises: 
Create Date: 2026-10-18 10:02:11.481203

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3b1f0c2a9d47'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('username', sa.String(), nullable=False),
        sa.Column('hashed_password', sa.String(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'gallery_photos',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('user_id', sa.String(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(length=100), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('file_path', sa.String(length=255), nullable=False),
        sa.Column('is_public', sa.Boolean(), nullable=False),
        sa.Column('upload_order', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_gallery_photos_user_id', 'gallery_photos', ['user_id'])
    op.create_index('ix_gallery_photos_is_public', 'gallery_photos', ['is_public'])
    op.create_index('ix_gallery_photos_created_at', 'gallery_photos', ['created_at'])

    # 좋아요 / 즐겨찾기 (사진-유저 쌍 유일)
    for table, constraint in (
        ('photo_likes', 'uq_photo_likes_photo_user'),
        ('photo_favorites', 'uq_photo_favorites_photo_user'),
    ):
        op.create_table(
            table,
            sa.Column('id', sa.String(), primary_key=True),
            sa.Column('photo_id', sa.String(), sa.ForeignKey('gallery_photos.id', ondelete='CASCADE'), nullable=False),
            sa.Column('user_id', sa.String(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
            sa.UniqueConstraint('photo_id', 'user_id', name=constraint),
        )
        op.create_index(f'ix_{table}_photo_id', table, ['photo_id'])
        op.create_index(f'ix_{table}_user_id', table, ['user_id'])


def downgrade() -> None:
    # 역순 삭제
    for table in ('photo_favorites', 'photo_likes'):
        op.drop_index(f'ix_{table}_user_id', table_name=table)
        op.drop_index(f'ix_{table}_photo_id', table_name=table)
        op.drop_table(table)
    op.drop_index('ix_gallery_photos_created_at', table_name='gallery_photos')
    op.drop_index('ix_gallery_photos_is_public', table_name='gallery_photos')
    op.drop_index('ix_gallery_photos_user_id', table_name='gallery_photos')
    op.drop_table('gallery_photos')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
