"""
Command line entry point.

    starlesson --port 8000 --no-reload
"""

import logging
import os

import click
import uvicorn

from .config import get_config
from .logging_config import configure_logging

logger = logging.getLogger(__name__)


@click.command()
@click.option('--host', default=None, help='Interface to bind (default: STARLESSON_HOST or localhost)')
@click.option('--port', type=int, default=None, help='Port to listen on (default: STARLESSON_PORT or 5001)')
@click.option('--reload/--no-reload', default=None, help='Restart the server when the sources change (default: on in development)')
@click.option('--log-level', default=None, help='Logging level, e.g. DEBUG')
def main(host, port, reload, log_level):
    """Serve the StarLesson tutorial on a local web server."""
    config = get_config()
    if log_level:
        config.logging.level = log_level.upper()
    configure_logging(config.logging)
    host = host or config.web.host
    port = port or config.web.port
    if reload is None:
        reload = config.web.auto_reload

    # uvicorn imports starlesson.main afresh, in a child process when reloading
    os.environ["STARLESSON_HOST"] = host
    os.environ["STARLESSON_PORT"] = str(port)
    os.environ["STARLESSON_LOG_LEVEL"] = config.logging.level

    click.echo(f"📚 StarLesson running on http://{host}:{port}/")
    uvicorn.run(
        "starlesson.main:app",
        host=host,
        port=port,
        reload=reload,
        log_level=config.logging.level.lower(),
    )


if __name__ == "__main__":
    main()
