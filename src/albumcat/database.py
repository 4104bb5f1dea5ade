"""Database configuration and session management."""

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from albumcat.settings import settings


def get_engine_kwargs() -> dict:
    """Return SQLAlchemy engine kwargs for the configured database."""
    if settings.is_sqlite:
        # Request threads share the file-backed database.
        return {"connect_args": {"check_same_thread": False}}

    kwargs = {
        "pool_pre_ping": settings.db_pool_pre_ping,
        "pool_recycle": settings.db_pool_recycle,
        "pool_timeout": settings.db_pool_timeout,
        "pool_size": settings.db_pool_size,
        "max_overflow": settings.db_max_overflow,
    }

    if settings.database_url.startswith("postgresql") and settings.db_connect_timeout:
        kwargs["connect_args"] = {"connect_timeout": settings.db_connect_timeout}

    return kwargs


def _unicode_lower(value):
    return value.lower() if isinstance(value, str) else value


def install_sqlite_functions(engine: Engine) -> Engine:
    """Replace SQLite's ASCII-only ``lower()`` with full Unicode case folding.

    Text filters compare ``lower(column)`` against a term lowered in Python,
    so both sides must fold non-ASCII letters the same way.
    """

    @event.listens_for(engine, "connect")
    def _register_functions(dbapi_connection, connection_record):
        dbapi_connection.create_function("lower", 1, _unicode_lower)

    return engine


def build_engine():
    """Build a database engine using configured pool and connectivity options."""
    engine = create_engine(settings.database_url, **get_engine_kwargs())
    if engine.dialect.name == "sqlite":
        install_sqlite_functions(engine)
    return engine


# Create database engine
engine = build_engine()

# Create session factory
SessionLocal = sessionmaker(bind=engine)


def get_db():
    """Get database session for dependency injection."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
