"""Inspection commands (list, search, gallery and filter menus)."""

from typing import Optional

import click

from albumcat import albums as album_service
from albumcat.cli.base import CliCommand
from albumcat.pagination import PageRequest
from albumcat.records import AlbumRecord
from albumcat.search.criteria import normalize_criteria, parse_sort_by


def _format_album(album: AlbumRecord) -> str:
    owner = album.user.login if album.user else "-"
    tags = ", ".join(tag.name for tag in album.tags) or "-"
    event = album.event if album.has_event else "-"
    return (
        f"{album.id:>6}  {album.effective_date:%Y-%m-%d}  {album.name}"
        f"  [event: {event}] [owner: {owner}] [tags: {tags}]"
    )


@click.command(name='list-albums')
@click.option('--page', default=0, type=int, help='Zero-based page index')
@click.option('--size', default=None, type=int, help='Page size')
@click.option('--sort', multiple=True, help='Sort order "field,asc|desc" (repeatable)')
def list_albums_command(page: int, size: Optional[int], sort):
    """List albums one page at a time."""
    cmd = ListAlbumsCommand(PageRequest.of(page=page, size=size, sort=sort))
    cmd.execute()


@click.command(name='search-albums')
@click.option('--keyword', default=None, help='Substring of name, keywords or description')
@click.option('--event', default=None, help='Substring of event')
@click.option('--year', default=None, help='Creation year')
@click.option('--tag', 'tag_name', default=None, help='Substring of a tag name')
@click.option('--contributor', 'contributor_login', default=None, help='Substring of owner login')
@click.option('--sort-by', default=None, help='EVENT or DATE')
@click.option('--page', default=0, type=int, help='Zero-based page index')
@click.option('--size', default=None, type=int, help='Page size')
def search_albums_command(keyword, event, year, tag_name, contributor_login, sort_by, page, size):
    """Search albums by keyword, event, year, tag and contributor."""
    cmd = SearchAlbumsCommand(
        criteria_args=dict(
            keyword=keyword,
            event=event,
            year=year,
            tag_name=tag_name,
            contributor_login=contributor_login,
            sort_by=sort_by,
        ),
        page_request=PageRequest.of(page=page, size=size),
    )
    cmd.execute()


@click.command(name='gallery')
@click.option('--sort-by', default=None, help='EVENT or DATE')
@click.option('--grouped', is_flag=True, help='Print section headings')
@click.option('--limit', default=None, type=click.IntRange(min=1), help='Maximum albums (default: GALLERY_MAX_RESULTS)')
def gallery_command(sort_by: Optional[str], grouped: bool, limit: Optional[int]):
    """Print the album gallery in EVENT or DATE order."""
    cmd = GalleryCommand(sort_by, grouped, limit)
    cmd.execute()


@click.command(name='filter-options')
def filter_options_command():
    """Print the distinct values offered by filter menus."""
    cmd = FilterOptionsCommand()
    cmd.execute()


class ListAlbumsCommand(CliCommand):
    """Command to list albums."""

    def __init__(self, page_request: PageRequest):
        super().__init__()
        self.page_request = page_request

    def run(self):
        result = album_service.list_albums(self.db, self.page_request)
        for album in result.items:
            click.echo(_format_album(album))
        click.echo(f"Page {result.page + 1} of {max(result.total_pages, 1)} ({result.total} albums)")


class SearchAlbumsCommand(CliCommand):
    """Command to search albums."""

    def __init__(self, criteria_args: dict, page_request: PageRequest):
        super().__init__()
        self.criteria_args = criteria_args
        self.page_request = page_request

    def run(self):
        criteria = normalize_criteria(**self.criteria_args)
        if not criteria.sort_key_recognized:
            click.echo(f"Warning: unrecognized sort key; using {criteria.sort_by.value}", err=True)
        result = album_service.search_albums(self.db, criteria, self.page_request)
        for album in result.items:
            click.echo(_format_album(album))
        click.echo(f"Matched {result.total} albums")


class GalleryCommand(CliCommand):
    """Command to print the gallery."""

    def __init__(self, sort_by: Optional[str], grouped: bool, limit: Optional[int]):
        super().__init__()
        self.sort_by = sort_by
        self.grouped = grouped
        self.limit = limit

    def run(self):
        resolved, recognized = parse_sort_by(self.sort_by)
        if not recognized:
            click.echo(f"Warning: unrecognized sort key; using {resolved.value}", err=True)

        if not self.grouped:
            for album in album_service.gallery_view(self.db, resolved, self.limit):
                click.echo(_format_album(album))
            return

        for group in album_service.gallery_groups(self.db, resolved, self.limit):
            click.echo(f"\n{group.label}")
            click.echo("-" * len(group.label))
            for album in group.albums:
                click.echo(_format_album(album))


class FilterOptionsCommand(CliCommand):
    """Command to show filter menu values."""

    def run(self):
        options = album_service.get_filter_options(self.db)
        click.echo(f"Events: {', '.join(options.events) or '-'}")
        click.echo(f"Years: {', '.join(str(year) for year in options.years) or '-'}")
        click.echo(f"Tags: {', '.join(options.tags) or '-'}")
        click.echo(f"Contributors: {', '.join(options.contributors) or '-'}")
