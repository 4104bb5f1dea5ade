"""Run the API server."""

import click
import uvicorn

from albumcat.settings import settings


@click.command(name='serve')
@click.option('--host', default=None, help='Bind address (default: API_HOST)')
@click.option('--port', default=None, type=int, help='Port (default: API_PORT)')
@click.option('--reload', is_flag=True, help='Reload on code changes')
def serve_command(host, port, reload):
    """Serve the HTTP API with uvicorn."""
    uvicorn.run(
        "albumcat.api:app",
        host=host or settings.api_host,
        port=port or settings.api_port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )
