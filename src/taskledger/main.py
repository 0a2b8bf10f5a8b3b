"""Main entry point for taskledger."""

import typer

from taskledger import __version__
from taskledger.commands import config, tasks
from taskledger.services.context_manager import get_strategy_context
from taskledger.utils.typer_helpers import SuggestingGroup
from taskledger.utils.ui.console import get_console

app = typer.Typer(
    name="taskledger",
    cls=SuggestingGroup,
    help="Per-owner task registry with deadlines, priorities and categories",
    no_args_is_help=True,
)

console = get_console()

app.add_typer(tasks.app, name="tasks", help="Task management commands")
app.add_typer(config.app, name="config", help="Configuration management")


@app.command()
def version() -> None:
    """Show version and storage backend."""
    console.print(f"[bold]taskledger[/bold] version [cyan]{__version__}[/cyan]")
    console.print(f"[dim]storage: {get_strategy_context().storage_type}[/dim]")


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
