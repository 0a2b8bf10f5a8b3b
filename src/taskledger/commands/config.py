"""Configuration management commands."""

from typing import Annotated

import typer

from taskledger.services.config_service import get_config_service
from taskledger.services.context_manager import reset_services
from taskledger.utils.typer_helpers import SuggestingGroup
from taskledger.utils.ui.formatters import format_error, format_output, format_success

from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Configuration management commands")


@app.command("show")
@command_wrapper
def show_config(
    output: Annotated[str, typer.Option("--output", "-o", help="Output format")] = "table",
    json_opt: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """View current configuration."""
    config_svc = get_config_service()
    data = config_svc.config.model_dump(mode="json")
    format_output(data, "json" if json_opt else output)


@app.command("set")
@command_wrapper
def set_config(
    key: Annotated[str, typer.Argument(help="Configuration key (e.g., storage.backend)")],
    value: Annotated[str, typer.Argument(help="Configuration value")],
) -> None:
    """Set a configuration value."""
    # The config model coerces numeric strings for integer fields.
    get_config_service().set_value(key, value)
    reset_services()
    format_success(f"Configuration '{key}' set to '{value}'")


@app.command("reset")
@command_wrapper
def reset_config(
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
) -> None:
    """Reset configuration to defaults."""
    if not yes:
        confirm = typer.confirm("Are you sure you want to reset the entire configuration?")
        if not confirm:
            format_error("Cancelled")
            raise typer.Exit(0)

    get_config_service().reset_config()
    reset_services()
    format_success("Configuration reset to defaults")
