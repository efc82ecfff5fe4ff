"""Main CLI application using Typer."""
import asyncio

import typer
from rich.console import Console
from rich.table import Table

from ..logging_utils import configure_logging
from ..personas import create_default_registry
from .providers import get_settings, require_client

# Create Typer app
app = typer.Typer(
    name="concise-chat",
    help="Single-session chat client with switchable personas",
    no_args_is_help=True,
    add_completion=False,
)

# Console for rich output
console = Console()


@app.command()
def chat(
    persona: str | None = typer.Option(
        None,
        "--persona",
        "-p",
        help="Initial persona id (default: CHAT_PERSONA or 'general')"
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show log panel with level: debug (all), info, warning, or error"
    ),
):
    """Launch the interactive chat TUI."""
    settings = get_settings(console)
    configure_logging(log_level or settings.log_level)
    client = require_client(settings, console)

    async def _chat():
        from ..ui import run_chat_tui

        await run_chat_tui(
            client,
            persona_id=persona or settings.persona,
            log_level=log_level,
        )
        console.print("\n[dim]Goodbye![/dim]")

    try:
        asyncio.run(_chat())
    except KeyboardInterrupt:
        pass


@app.command()
def personas():
    """List the available personas."""
    registry = create_default_registry()

    table = Table(title="Personas")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="green", no_wrap=True)
    table.add_column("Default", justify="center", no_wrap=True)
    # Only the prompt column gives up width on narrow terminals
    table.add_column("Prompt", style="dim", ratio=1, overflow="ellipsis", no_wrap=True)

    for p in registry.list():
        table.add_row(
            p.id,
            p.display_name,
            "*" if p.id == registry.default.id else "",
            p.system_prompt,
        )

    console.print(table)


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
