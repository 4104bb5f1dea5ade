"""Database setup commands."""

import click

from albumcat.cli.base import CliCommand
from albumcat.metadata import Base


@click.command(name='init-db')
def init_db_command():
    """Create all tables in the configured database.

    Intended for SQLite development databases; managed databases are
    migrated with alembic.
    """
    cmd = InitDbCommand()
    cmd.execute()


class InitDbCommand(CliCommand):
    """Command to create the schema."""

    def run(self):
        Base.metadata.create_all(self.engine)
        click.echo(f"Created tables: {', '.join(sorted(Base.metadata.tables))}")
