"""CLI commands for API server management."""

from __future__ import annotations

from typing import Optional

import typer

from clipstats.config.settings import settings

api_app = typer.Typer(
    name="api",
    help="API server management commands",
    no_args_is_help=True,
)


@api_app.command()
def start(
    port: Optional[int] = typer.Option(
        None, "--port", "-p", help="Port to run the server on (default: PORT setting)"
    ),
    host: Optional[str] = typer.Option(
        None, "--host", help="Interface to bind (default: HOST setting)"
    ),
    production: bool = typer.Option(
        False, "--production", help="Run in production mode"
    ),
) -> None:
    """
    Start the clipstats API server.

    Development mode (default): Auto-reload enabled, info logging.
    Production mode: Multiple workers, warning-level logging.

    Examples:
        clipstats api start
        clipstats api start --port 8080
        clipstats api start --host 0.0.0.0 --production
    """
    import uvicorn

    bind_host = host or settings.host
    bind_port = port or settings.port

    if production:
        uvicorn.run(
            "clipstats.api.main:app",
            host=bind_host,
            port=bind_port,
            workers=2,
            log_level="warning",
        )
    else:
        uvicorn.run(
            "clipstats.api.main:app",
            host=bind_host,
            port=bind_port,
            reload=True,
            log_level="info",
        )
