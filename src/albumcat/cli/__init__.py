"""Albumcat CLI entry point with lazy command registration."""

from __future__ import annotations

import click

from albumcat.log import configure_logging

_COMMANDS_REGISTERED = False


def _register_commands_once() -> None:
    global _COMMANDS_REGISTERED
    if _COMMANDS_REGISTERED:
        return

    from .commands import database, inspect, serve

    cli.add_command(database.init_db_command, name="init-db")
    cli.add_command(inspect.list_albums_command, name="list-albums")
    cli.add_command(inspect.search_albums_command, name="search-albums")
    cli.add_command(inspect.gallery_command, name="gallery")
    cli.add_command(inspect.filter_options_command, name="filter-options")
    cli.add_command(serve.serve_command, name="serve")

    _COMMANDS_REGISTERED = True


class _LazyCLIGroup(click.Group):
    def list_commands(self, ctx):
        _register_commands_once()
        return super().list_commands(ctx)

    def get_command(self, ctx, cmd_name):
        _register_commands_once()
        return super().get_command(ctx, cmd_name)


@click.group(cls=_LazyCLIGroup)
@click.option('--log-level', default=None, help='Override LOG_LEVEL for this run')
def cli(log_level):
    """Albumcat CLI for local development and inspection."""
    configure_logging(log_level)


if __name__ == "__main__":
    cli()
