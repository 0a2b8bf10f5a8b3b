"""Output formatters for different formats."""

import json
from datetime import UTC, datetime
from typing import Any

import yaml
from rich.table import Table
from rich.text import Text

from taskledger.utils.ui.console import get_console

console = get_console()

OUTPUT_FORMATS = ("pretty", "table", "json", "yaml")


def format_output(data: Any, output_format: str = "pretty", now: int | None = None) -> None:
    """Format and display output based on format."""
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str))
    elif output_format == "yaml":
        print(yaml.dump(data, default_flow_style=False, sort_keys=False))
    elif output_format == "table":
        format_table(data)
    else:
        # Default to pretty
        format_pretty(data, now=now)


def format_table(data: Any) -> None:
    """Format data as a table."""
    if isinstance(data, list):
        if not data:
            console.print("[yellow]No tasks found[/yellow]")
            return
        if isinstance(data[0], dict) and "content" in data[0]:
            format_tasks_table(data)
        elif isinstance(data[0], dict):
            format_dict_table(data)
        else:
            for item in data:
                console.print(item)
    elif isinstance(data, dict):
        if "tasks" in data:
            format_tasks_table(data["tasks"])
        else:
            format_single_item(data)
    else:
        console.print(data)


def _cell(key: str, value: Any) -> str:
    if isinstance(value, bool):
        return "✓" if value else "✗"
    if value is None or value == "":
        return "-"
    if key in ("created_at", "updated_at", "completed_at", "deadline"):
        return format_timestamp(value)
    return str(value)


def format_dict_table(items: list[dict]) -> None:
    """Format a list of dictionaries as a table."""
    if not items:
        console.print("[yellow]No tasks found[/yellow]")
        return

    columns = list(items[0].keys())

    table = Table(show_header=True, header_style="bold magenta")
    for col in columns:
        table.add_column(col.replace("_", " ").title())

    for item in items:
        table.add_row(*(_cell(col, item.get(col, "")) for col in columns))

    console.print(table)


def format_tasks_table(tasks: list[dict]) -> None:
    """Format tasks as a table with the columns that matter for scanning."""
    if not tasks:
        console.print("[yellow]No tasks found[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("ID", justify="right", style="cyan")
    table.add_column("Content")
    table.add_column("Done", justify="center")
    table.add_column("Priority", justify="right")
    table.add_column("Deadline")
    table.add_column("Category")

    for task in tasks:
        table.add_row(
            str(task["id"]),
            task.get("content", ""),
            _cell("is_completed", task.get("is_completed", False)),
            str(task.get("priority", 0)),
            _cell("deadline", task.get("deadline", 0)),
            _cell("category", task.get("category", "")),
        )

    console.print(table)


def format_single_item(item: dict) -> None:
    """Format a single item as key-value pairs."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")

    for key, value in item.items():
        if isinstance(value, dict):
            for sub_key, sub_value in value.items():
                table.add_row(f"{key}.{sub_key}", _cell(sub_key, sub_value))
        else:
            table.add_row(key.replace("_", " ").title(), _cell(key, value))

    console.print(table)


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    console.print(f"[bold blue]Info:[/bold blue] {message}")


# ============================================================================
# Pretty Format Implementation
# ============================================================================

PRIORITY_ICONS = {
    3: "🔴",  # HIGH
    2: "🟠",  # MEDIUM
    1: "🟢",  # LOW
    0: "⚪",  # NONE
}

PRIORITY_NAMES = {
    3: "HIGH PRIORITY",
    2: "MEDIUM PRIORITY",
    1: "LOW PRIORITY",
    0: "NO PRIORITY",
}

PRIORITY_COLORS = {
    3: "bold red",
    2: "bold orange3",
    1: "green",
    0: "dim",
}

STATUS_ICONS = {
    "open": "⬜",
    "completed": "☑️",
}


def format_pretty(data: Any, now: int | None = None) -> None:
    """Format data in pretty format with colors and icons."""
    if isinstance(data, list):
        if not data:
            console.print("[yellow]No tasks found[/yellow]")
        elif isinstance(data[0], dict) and "content" in data[0]:
            format_tasks_pretty(data, now=now)
        else:
            for item in data:
                console.print(item)
    elif isinstance(data, dict):
        if "tasks" in data:
            format_tasks_pretty(data["tasks"], now=now)
        elif "content" in data:
            format_task_detail(data)
        elif {"total", "active", "completed", "overdue"} <= data.keys():
            format_stats(data)
        else:
            format_single_item(data)
    else:
        console.print(data)


def format_tasks_pretty(tasks: list[dict], now: int | None = None) -> None:
    """Format tasks grouped by priority, overdue tasks listed last."""
    now = now if now is not None else int(datetime.now(UTC).timestamp())
    active = [t for t in tasks if not t.get("is_completed", False)]

    header = Text()
    header.append("📋 Tasks ", style="bold cyan")
    header.append(f"({len(active)} active, {len(tasks) - len(active)} completed)", style="dim")
    console.print(header)
    console.print()

    overdue_tasks = []
    tasks_by_priority: dict[int, list[dict]] = {3: [], 2: [], 1: [], 0: []}
    for task in tasks:
        if not task.get("is_completed") and is_overdue(task.get("deadline", 0), now):
            overdue_tasks.append(task)
        else:
            tasks_by_priority[task.get("priority", 0)].append(task)

    for priority in (3, 2, 1, 0):
        priority_tasks = tasks_by_priority[priority]
        if not priority_tasks:
            continue
        console.print(
            f"{PRIORITY_ICONS[priority]} {PRIORITY_NAMES[priority]}",
            style=PRIORITY_COLORS[priority],
        )
        for task in priority_tasks:
            format_task_item(task, now, indent="  ")
        console.print()

    if overdue_tasks:
        console.print(f"⏱️  OVERDUE ({len(overdue_tasks)})", style="bold red")
        for task in overdue_tasks:
            format_task_item(task, now, indent="  ")
        console.print()


def format_task_item(task: dict, now: int, indent: str = "") -> None:
    """Format a single task as one line."""
    is_completed = task.get("is_completed", False)
    status_icon = STATUS_ICONS["completed" if is_completed else "open"]

    line = Text(f"{indent}{status_icon} ")
    line.append(f"#{task['id']} ", style="cyan")
    line.append(task.get("content", ""), style="dim" if is_completed else "")

    deadline = task.get("deadline", 0)
    if deadline:
        style = "bold red" if not is_completed and is_overdue(deadline, now) else "cyan"
        line.append(f" • 📅 {format_timestamp(deadline)}", style=style)

    if task.get("category"):
        line.append(f" @{task['category']}", style="blue")

    console.print(line)


def format_task_detail(task: dict) -> None:
    """Format one task with all of its fields."""
    priority = task.get("priority", 0)
    title = Text()
    title.append(f"{STATUS_ICONS['completed' if task.get('is_completed') else 'open']} ")
    title.append(f"#{task['id']} ", style="cyan")
    title.append(task.get("content", ""), style="bold")
    console.print(title)

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Key", style="dim")
    table.add_column("Value")
    table.add_row("Priority", f"{PRIORITY_ICONS[priority]} {PRIORITY_NAMES[priority].title()}")
    table.add_row("Category", task.get("category") or "-")
    table.add_row("Deadline", format_timestamp(task.get("deadline", 0)))
    table.add_row("Created", format_timestamp(task.get("created_at", 0)))
    table.add_row("Updated", format_timestamp(task.get("updated_at", 0)))
    table.add_row("Completed", format_timestamp(task.get("completed_at", 0)))
    console.print(table)


def format_stats(stats: dict) -> None:
    """Format task counters with a completion bar."""
    total = stats.get("total", 0)
    completed = stats.get("completed", 0)
    percentage = (completed / total * 100) if total else 0.0

    console.print("\n[bold cyan]📊 Task Statistics[/bold cyan]\n")
    console.print(f"Total:     [bold]{total}[/bold]")
    console.print(f"Active:    [bold]{stats.get('active', 0)}[/bold]")
    console.print(f"Completed: [bold]{completed}[/bold]")
    overdue = stats.get("overdue", 0)
    overdue_style = "bold red" if overdue else "bold"
    console.print(f"Overdue:   [{overdue_style}]{overdue}[/{overdue_style}]")
    color = get_completion_color(percentage)
    console.print(f"\n[{color}]{get_progress_bar(percentage)}[/{color}] {percentage:.0f}% done\n")


def is_overdue(deadline: int, now: int) -> bool:
    """Check if a deadline timestamp lies strictly in the past."""
    return 0 < deadline < now


def format_timestamp(timestamp: int) -> str:
    """Format epoch seconds as 'HH:MM DD/MM/YYYY DayOfWeek' (UTC), '-' for 0."""
    if not timestamp:
        return "-"
    try:
        date = datetime.fromtimestamp(int(timestamp), tz=UTC)
    except (OverflowError, OSError, ValueError):
        return str(timestamp)
    return date.strftime("%H:%M %d/%m/%Y %a")


def get_progress_bar(percentage: float) -> str:
    """Get a progress bar string."""
    filled = int(percentage / 10)
    empty = 10 - filled
    return "█" * filled + "░" * empty


def get_completion_color(percentage: float) -> str:
    """Get color based on completion percentage."""
    if percentage >= 80:
        return "green"
    if percentage >= 50:
        return "yellow"
    return "red"
