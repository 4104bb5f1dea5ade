"""Test configuration and fixtures."""

from datetime import datetime
from typing import Iterable, Optional

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from albumcat.database import install_sqlite_functions
from albumcat.metadata import Album, AlbumTag, Base, Photo, PhotoTag, Tag, User


def _memory_engine():
    # One shared connection so every session (and TestClient thread) sees the same database
    return install_sqlite_functions(create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    ))


@pytest.fixture
def db_engine():
    engine = _memory_engine()
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(bind=db_engine)


@pytest.fixture
def test_db(session_factory):
    """Create test database."""
    session = session_factory()
    yield session
    session.close()


def create_user(db: Session, login: str) -> User:
    user = User(login=login)
    db.add(user)
    db.flush()
    return user


def create_tag(db: Session, name: str) -> Tag:
    tag = Tag(name=name)
    db.add(tag)
    db.flush()
    return tag


def create_album(
    db: Session,
    name: str,
    *,
    event: Optional[str] = None,
    creation_date: Optional[datetime] = None,
    override_date: Optional[datetime] = None,
    keywords: Optional[str] = None,
    description: Optional[str] = None,
    owner: Optional[User] = None,
    tags: Iterable[Tag] = (),
) -> Album:
    album = Album(
        name=name,
        event=event,
        creation_date=creation_date or datetime(2024, 1, 1, 12, 0, 0),
        override_date=override_date,
        keywords=keywords,
        description=description,
        user_id=owner.id if owner else None,
    )
    db.add(album)
    db.flush()
    for tag in tags:
        db.add(AlbumTag(album_id=album.id, tag_id=tag.id))
    db.flush()
    return album


def create_photo(
    db: Session,
    title: str,
    *,
    upload_date: Optional[datetime] = None,
    album: Optional[Album] = None,
    tags: Iterable[Tag] = (),
) -> Photo:
    photo = Photo(
        title=title,
        upload_date=upload_date or datetime(2024, 1, 1, 12, 0, 0),
        album_id=album.id if album else None,
    )
    db.add(photo)
    db.flush()
    for tag in tags:
        db.add(PhotoTag(photo_id=photo.id, tag_id=tag.id))
    db.flush()
    return photo


@pytest.fixture
def client(session_factory):
    """FastAPI TestClient bound to the in-memory test database."""
    from fastapi.testclient import TestClient

    from albumcat.api import app
    from albumcat.dependencies import get_db

    def _override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_user(test_db):
    return lambda login: create_user(test_db, login)


@pytest.fixture
def make_tag(test_db):
    return lambda name: create_tag(test_db, name)


@pytest.fixture
def make_album(test_db):
    def _make(name: str, **kwargs) -> Album:
        return create_album(test_db, name, **kwargs)
    return _make


@pytest.fixture
def make_photo(test_db):
    def _make(title: str, **kwargs) -> Photo:
        return create_photo(test_db, title, **kwargs)
    return _make
