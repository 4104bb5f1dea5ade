"""
Create users, tags, albums, photos and their tag join tables
"""
from alembic import op
import sqlalchemy as sa
# revision identifiers, used by Alembic.
revision = '202610190900_create_album_catalog'
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('login', sa.String(length=50), nullable=False, unique=True),
        sa.Column('created_at', sa.DateTime, nullable=True),
    )

    op.create_table(
        'tags',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('name', sa.String(length=255), nullable=False, unique=True),
    )

    op.create_table(
        'albums',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('event', sa.String(length=255), nullable=True),
        sa.Column('creation_date', sa.DateTime, nullable=False),
        sa.Column('override_date', sa.DateTime, nullable=True),
        sa.Column('thumbnail', sa.LargeBinary, nullable=True),
        sa.Column('thumbnail_content_type', sa.String(length=255), nullable=True),
        sa.Column('keywords', sa.String(length=500), nullable=True),
        sa.Column('description', sa.Text, nullable=True),
        sa.Column('user_id', sa.Integer, sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
    )
    op.create_index('idx_albums_event_name', 'albums', ['event', 'name'])
    op.create_index('idx_albums_creation_date', 'albums', ['creation_date'])
    op.create_index('idx_albums_user_id', 'albums', ['user_id'])

    op.create_table(
        'album_tags',
        sa.Column('album_id', sa.Integer, sa.ForeignKey('albums.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('tag_id', sa.Integer, sa.ForeignKey('tags.id', ondelete='CASCADE'), primary_key=True),
    )
    op.create_index('idx_album_tags_tag_id', 'album_tags', ['tag_id'])

    op.create_table(
        'photos',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('title', sa.String(length=255), nullable=True),
        sa.Column('description', sa.String(length=1000), nullable=True),
        sa.Column('upload_date', sa.DateTime, nullable=False),
        sa.Column('capture_date', sa.DateTime, nullable=True),
        sa.Column('location', sa.String(length=255), nullable=True),
        sa.Column('keywords', sa.String(length=500), nullable=True),
        sa.Column('album_id', sa.Integer, sa.ForeignKey('albums.id', ondelete='SET NULL'), nullable=True),
    )
    op.create_index('idx_photos_album_id', 'photos', ['album_id'])

    op.create_table(
        'photo_tags',
        sa.Column('photo_id', sa.Integer, sa.ForeignKey('photos.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('tag_id', sa.Integer, sa.ForeignKey('tags.id', ondelete='CASCADE'), primary_key=True),
    )
    op.create_index('idx_photo_tags_tag_id', 'photo_tags', ['tag_id'])

def downgrade():
    op.drop_index('idx_photo_tags_tag_id', table_name='photo_tags')
    op.drop_table('photo_tags')
    op.drop_index('idx_photos_album_id', table_name='photos')
    op.drop_table('photos')
    op.drop_index('idx_album_tags_tag_id', table_name='album_tags')
    op.drop_table('album_tags')
    op.drop_index('idx_albums_user_id', table_name='albums')
    op.drop_index('idx_albums_creation_date', table_name='albums')
    op.drop_index('idx_albums_event_name', table_name='albums')
    op.drop_table('albums')
    op.drop_table('tags')
    op.drop_table('users')
