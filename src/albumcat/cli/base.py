"""Base command class for shared CLI setup/teardown."""

import click
from sqlalchemy.orm import sessionmaker

from albumcat.database import build_engine
from albumcat.errors import AlbumcatError


class CliCommand:
    """Base class for all CLI commands with shared setup/teardown."""

    def __init__(self):
        self.engine = None
        self.Session = None
        self.db = None

    def setup_db(self):
        """Initialize database connection."""
        self.engine = build_engine()
        self.Session = sessionmaker(bind=self.engine)
        self.db = self.Session()

    def cleanup_db(self):
        """Close database connection."""
        if self.db:
            self.db.close()
        if self.engine:
            self.engine.dispose()

    def execute(self):
        """Run the command body inside a database session."""
        self.setup_db()
        try:
            self.run()
        except AlbumcatError as exc:
            raise click.ClickException(str(exc))
        finally:
            self.cleanup_db()

    def run(self):
        """Execute command - override in subclasses."""
        raise NotImplementedError

    def __enter__(self):
        """Context manager entry."""
        self.setup_db()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.cleanup_db()
