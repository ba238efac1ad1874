"""Serve command - run the gateway HTTP server."""

import os

import typer
from rich.console import Console

console = Console()


def serve(
    host: str = typer.Option(
        os.getenv("COMMGATE_HOST", "0.0.0.0"), "--host", help="Bind address"
    ),
    port: int = typer.Option(
        int(os.getenv("COMMGATE_PORT", "8080")), "--port", "-p", help="Bind port"
    ),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
):
    """Run the gateway with uvicorn."""
    import uvicorn

    from commgate.config.settings import load_settings
    from commgate.core.domain.errors import ConfigError, MissingCredentialsError

    try:
        load_settings()
    except (MissingCredentialsError, ConfigError) as exc:
        console.print(f"[red]Cannot start: {exc.message}[/red]")
        raise typer.Exit(1)

    console.print(f"Starting commgate on http://{host}:{port}")
    console.print(f"API documentation: http://localhost:{port}/docs")
    uvicorn.run(
        "commgate.api.server:app",
        host=host,
        port=port,
        reload=reload,
        log_level=os.getenv("LOGLEVEL", "info").lower(),
    )
