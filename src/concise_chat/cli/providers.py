"""Client factory functions for the CLI.

Centralizes creation of settings and the completion client from the
environment. Hides configuration details from command implementations.
"""

from pydantic import ValidationError
from rich.console import Console

from ..config import PROVIDER_ENV, Settings, load_settings
from ..llm import CompletionClient, create_completion_client

# Default console for output
_console = Console()


def get_settings(console: Console | None = None) -> Settings:
    """Load settings, exiting with code 1 on invalid values.

    Raises:
        SystemExit: If an environment value fails validation
    """
    import typer

    con = console or _console
    try:
        return load_settings()
    except ValidationError as e:
        con.print(f"[red]Error: invalid configuration[/red]\n{e}")
        raise typer.Exit(code=1)


def require_client(settings: Settings, console: Console | None = None) -> CompletionClient:
    """Create the completion client, exiting if no API key is configured.

    Raises:
        SystemExit: If the provider's API key is not set
    """
    import typer

    con = console or _console
    if not settings.api_key:
        key_var = PROVIDER_ENV[settings.provider][0]
        con.print(f"[red]Error: {key_var} not set in environment[/red]")
        raise typer.Exit(code=1)

    return create_completion_client(settings.provider, **settings.client_config())
