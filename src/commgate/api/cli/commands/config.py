"""Config command - inspect the loaded gateway configuration."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from commgate.config.settings import load_settings
from commgate.core.domain.credentials import mask_secret
from commgate.core.domain.errors import ConfigError, MissingCredentialsError

app = typer.Typer(help="Configuration management")
console = Console()


@app.command("show")
def show_config(
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", help="YAML config file (defaults to $COMMGATE_CONFIG)"
    ),
):
    """Show provider endpoints, transfer tuning and masked credentials."""
    try:
        settings = load_settings(config_path=config_file)
    except (MissingCredentialsError, ConfigError) as exc:
        console.print(f"[red]{exc.message}[/red]")
        raise typer.Exit(1)

    table = Table(title="Gateway Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="white")

    endpoints = settings.endpoints
    table.add_row("endpoints.conversations", endpoints.conversations)
    table.add_row("endpoints.media", endpoints.media)
    table.add_row("endpoints.api", endpoints.api)
    table.add_row("endpoints.voice", endpoints.voice)
    table.add_row("endpoints.email", endpoints.email)
    table.add_row("transfer.chunk_size", str(settings.chunk_size))
    table.add_row("http.connect_timeout_seconds", str(settings.connect_timeout_seconds))
    table.add_row("account_sid", settings.account.account_sid)
    table.add_row("auth_token", mask_secret(settings.account.auth_token))
    table.add_row("email api_key", mask_secret(settings.email.api_key))

    console.print(table)
