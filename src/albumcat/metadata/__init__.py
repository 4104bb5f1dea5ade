"""Metadata storage and management."""

from datetime import datetime

from sqlalchemy import Column, String, Integer, DateTime, Text, LargeBinary, ForeignKey, Index
from sqlalchemy.orm import declarative_base


Base = declarative_base()


class User(Base):
    """Album owner, identified by login."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    login = Column(String(50), nullable=False, unique=True)
    created_at = Column(DateTime, default=datetime.utcnow)


class Tag(Base):
    """Free-text label shared by albums and photos."""

    __tablename__ = "tags"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False, unique=True)


class Album(Base):
    """Album record.

    Tags are not mapped as a relationship collection. Membership lives in
    ``album_tags`` and is read with explicit queries (see
    ``albumcat.relationships``).
    """

    __tablename__ = "albums"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    event = Column(String(255), nullable=True)  # Category label; blank means "Miscellaneous"

    # creation_date is assigned once; override_date is the display date when set
    creation_date = Column(DateTime, nullable=False, default=datetime.utcnow)
    override_date = Column(DateTime, nullable=True)

    thumbnail = Column(LargeBinary, nullable=True)
    thumbnail_content_type = Column(String(255), nullable=True)
    keywords = Column(String(500), nullable=True)
    description = Column(Text, nullable=True)

    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    __table_args__ = (
        Index("idx_albums_event_name", "event", "name"),
        Index("idx_albums_creation_date", "creation_date"),
        Index("idx_albums_user_id", "user_id"),
    )


class AlbumTag(Base):
    """Album/tag membership (join table)."""

    __tablename__ = "album_tags"

    album_id = Column(Integer, ForeignKey("albums.id", ondelete="CASCADE"), primary_key=True)
    tag_id = Column(Integer, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True)

    __table_args__ = (
        Index("idx_album_tags_tag_id", "tag_id"),
    )


class Photo(Base):
    """Photo record, optionally filed under an album."""

    __tablename__ = "photos"

    id = Column(Integer, primary_key=True)
    title = Column(String(255), nullable=True)
    description = Column(String(1000), nullable=True)
    upload_date = Column(DateTime, nullable=False, default=datetime.utcnow)
    capture_date = Column(DateTime, nullable=True)
    location = Column(String(255), nullable=True)
    keywords = Column(String(500), nullable=True)
    album_id = Column(Integer, ForeignKey("albums.id", ondelete="SET NULL"), nullable=True)

    __table_args__ = (
        Index("idx_photos_album_id", "album_id"),
    )


class PhotoTag(Base):
    """Photo/tag membership (join table)."""

    __tablename__ = "photo_tags"

    photo_id = Column(Integer, ForeignKey("photos.id", ondelete="CASCADE"), primary_key=True)
    tag_id = Column(Integer, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True)

    __table_args__ = (
        Index("idx_photo_tags_tag_id", "tag_id"),
    )
