"""commgate CLI entry point."""

import typer
from rich.console import Console

from commgate.api.cli.commands import config, serve

app = typer.Typer(
    name="commgate",
    help="commgate - unified gateway over chat, SMS, voice and email providers",
    add_completion=True,
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()

# Register command groups
app.add_typer(config.app, name="config", help="Configuration management")
app.command("serve")(serve.serve)


@app.command()
def version():
    """Show commgate version."""
    from commgate import __version__

    console.print(f"[bold blue]Version:[/bold blue] [cyan]{__version__}[/cyan]")


if __name__ == "__main__":
    app()
