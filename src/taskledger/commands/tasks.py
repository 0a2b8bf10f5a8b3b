"""Task management commands."""

import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Annotated

import typer

from taskledger.models import Task, ValidationError
from taskledger.services.config_service import get_config_service
from taskledger.services.context_manager import get_query_engine, get_task_store
from taskledger.services.task_store import validate_priority
from taskledger.utils.typer_helpers import SuggestingGroup
from taskledger.utils.ui.console import get_console
from taskledger.utils.ui.formatters import OUTPUT_FORMATS, format_output, format_success

from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Task management commands")
console = get_console()

STATUS_CHOICES = ("all", "active", "completed", "overdue", "upcoming")

OwnerOption = Annotated[
    str | None, typer.Option("--owner", help="Owner id (defaults to config default_owner)")
]
OutputOption = Annotated[
    str | None, typer.Option("--output", "-o", help="Output format: pretty, table, json, yaml")
]
JsonOption = Annotated[
    bool, typer.Option("--json", help="Output as JSON (alias for --output json)")
]


def resolve_owner(owner: str | None) -> str:
    """Owner from the command line, falling back to the configured default."""
    if owner is None:
        return get_config_service().config.default_owner
    owner = owner.strip()
    if not owner:
        raise ValidationError("Owner id must not be empty")
    return owner


def resolve_output(output: str | None, json_opt: bool) -> str:
    if json_opt:
        return "json"
    if output is None:
        return get_config_service().config.output.format
    if output not in OUTPUT_FORMATS:
        raise ValidationError(f"Unknown output format '{output}'")
    return output


def parse_timestamp(value: str) -> int:
    """Parse a deadline given as epoch seconds or an ISO 8601 datetime.

    Naive datetimes are taken as UTC. ``none`` or ``0`` clears the deadline.
    """
    value = value.strip()
    if value.lower() in ("", "none", "0"):
        return 0
    try:
        return int(value)
    except ValueError:
        pass
    try:
        date = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as e:
        raise ValidationError(
            f"Invalid deadline '{value}': use epoch seconds or an ISO date (2025-01-31T18:00)"
        ) from e
    if date.tzinfo is None:
        date = date.replace(tzinfo=UTC)
    return int(date.timestamp())


def task_dict(task: Task) -> dict:
    return task.model_dump(mode="json")


def report(task: Task, output: str, message: str) -> None:
    """Print the task for machine formats, a success line otherwise."""
    if output in ("json", "yaml"):
        format_output(task_dict(task), output)
    else:
        format_success(message)


@app.command("add")
@command_wrapper
async def add_task(
    content: Annotated[str, typer.Argument(help="Task content")],
    deadline: Annotated[
        str | None, typer.Option("--deadline", "-d", help="Deadline (epoch seconds or ISO date)")
    ] = None,
    priority: Annotated[int, typer.Option("--priority", "-p", help="Priority 0-3")] = 0,
    category: Annotated[str, typer.Option("--category", "-c", help="Category label")] = "",
    owner: OwnerOption = None,
    output: OutputOption = None,
    json_opt: JsonOption = False,
) -> None:
    """Create a new task."""
    owner_id = resolve_owner(owner)
    output = resolve_output(output, json_opt)
    store = get_task_store()

    task_id = await store.create_task(
        owner_id,
        content,
        deadline=parse_timestamp(deadline) if deadline else 0,
        priority=priority,
        category=category,
    )
    task = await store.get_task(owner_id, task_id)

    report(task, output, f"Created task #{task_id}: {task.content}")


@app.command("edit")
@command_wrapper
async def edit_task(
    task_id: Annotated[int, typer.Argument(help="Task ID")],
    content: Annotated[str, typer.Argument(help="New task content")],
    owner: OwnerOption = None,
    output: OutputOption = None,
    json_opt: JsonOption = False,
) -> None:
    """Replace the content of a task."""
    output = resolve_output(output, json_opt)
    task = await get_task_store().update_task_content(resolve_owner(owner), task_id, content)
    report(task, output, f"Updated task #{task_id}")


@app.command("complete")
@command_wrapper
async def complete_task(
    task_id: Annotated[int, typer.Argument(help="Task ID")],
    owner: OwnerOption = None,
    output: OutputOption = None,
    json_opt: JsonOption = False,
) -> None:
    """Mark a task as completed."""
    output = resolve_output(output, json_opt)
    task = await get_task_store().complete_task(resolve_owner(owner), task_id)
    report(task, output, f"✓ Completed: {task.content}")
    if output not in ("json", "yaml"):
        console.print(f"[dim]To undo: taskledger tasks reopen {task_id}[/dim]")


@app.command("reopen")
@command_wrapper
async def reopen_task(
    task_id: Annotated[int, typer.Argument(help="Task ID")],
    owner: OwnerOption = None,
    output: OutputOption = None,
    json_opt: JsonOption = False,
) -> None:
    """Reopen a completed task."""
    output = resolve_output(output, json_opt)
    task = await get_task_store().uncomplete_task(resolve_owner(owner), task_id)
    report(task, output, f"Reopened: {task.content}")


@app.command("delete")
@command_wrapper
async def delete_task(
    task_id: Annotated[int, typer.Argument(help="Task ID")],
    owner: OwnerOption = None,
) -> None:
    """Delete a task. Its id is never reused."""
    await get_task_store().delete_task(resolve_owner(owner), task_id)
    format_success(f"Deleted task #{task_id}")


@app.command("deadline")
@command_wrapper
async def set_deadline(
    task_id: Annotated[int, typer.Argument(help="Task ID")],
    deadline: Annotated[str, typer.Argument(help="Epoch seconds, ISO date, or 'none' to clear")],
    owner: OwnerOption = None,
    output: OutputOption = None,
    json_opt: JsonOption = False,
) -> None:
    """Set or clear the deadline of a task."""
    output = resolve_output(output, json_opt)
    task = await get_task_store().set_deadline(
        resolve_owner(owner), task_id, parse_timestamp(deadline)
    )
    action = "set" if task.has_deadline else "cleared"
    report(task, output, f"Deadline of task #{task_id} {action}")


@app.command("priority")
@command_wrapper
async def set_priority(
    task_id: Annotated[int, typer.Argument(help="Task ID")],
    priority: Annotated[int, typer.Argument(help="Priority 0-3")],
    owner: OwnerOption = None,
    output: OutputOption = None,
    json_opt: JsonOption = False,
) -> None:
    """Set the priority of a task."""
    output = resolve_output(output, json_opt)
    task = await get_task_store().set_priority(resolve_owner(owner), task_id, priority)
    report(task, output, f"Priority of task #{task_id} set to {int(task.priority)}")


@app.command("category")
@command_wrapper
async def set_category(
    task_id: Annotated[int, typer.Argument(help="Task ID")],
    category: Annotated[str, typer.Argument(help="Category label ('' to clear)")],
    owner: OwnerOption = None,
    output: OutputOption = None,
    json_opt: JsonOption = False,
) -> None:
    """Set the category of a task."""
    output = resolve_output(output, json_opt)
    task = await get_task_store().set_category(resolve_owner(owner), task_id, category)
    report(task, output, f"Category of task #{task_id} set to '{task.category}'")


@app.command("get")
@command_wrapper
async def get_task(
    task_id: Annotated[int, typer.Argument(help="Task ID")],
    owner: OwnerOption = None,
    output: OutputOption = None,
    json_opt: JsonOption = False,
) -> None:
    """Show one task."""
    output = resolve_output(output, json_opt)
    task = await get_task_store().get_task(resolve_owner(owner), task_id)
    format_output(task_dict(task), output)


@app.command("list")
@command_wrapper
async def list_tasks(
    status: Annotated[
        str, typer.Option("--status", "-s", help="all, active, completed, overdue, upcoming")
    ] = "all",
    category: Annotated[
        str | None, typer.Option("--category", "-c", help="Only this category")
    ] = None,
    priority: Annotated[
        int | None, typer.Option("--priority", "-p", help="Only this priority")
    ] = None,
    within: Annotated[
        int | None, typer.Option("--within", help="Upcoming window in seconds")
    ] = None,
    owner: OwnerOption = None,
    output: OutputOption = None,
    json_opt: JsonOption = False,
) -> None:
    """List tasks."""
    if status not in STATUS_CHOICES:
        raise ValidationError(
            f"Unknown status '{status}'. Choose from: {', '.join(STATUS_CHOICES)}"
        )
    if priority is not None:
        validate_priority(priority)
    owner_id = resolve_owner(owner)
    output = resolve_output(output, json_opt)
    engine = get_query_engine()

    if status == "active":
        tasks = await engine.get_active_tasks(owner_id)
    elif status == "completed":
        tasks = await engine.get_completed_tasks(owner_id)
    elif status == "overdue":
        tasks = await engine.get_overdue_tasks(owner_id)
    elif status == "upcoming":
        if within is None:
            within = get_config_service().config.output.upcoming_window
        tasks = await engine.get_upcoming_deadlines(owner_id, within)
    elif category is not None:
        tasks = await engine.get_tasks_by_category(owner_id, category)
    elif priority is not None:
        tasks = await engine.get_tasks_by_priority(owner_id, priority)
    else:
        tasks = await engine.store.get_all_tasks(owner_id)

    if category is not None:
        tasks = [t for t in tasks if t.category == category]
    if priority is not None:
        tasks = [t for t in tasks if t.priority == priority]

    format_output([task_dict(t) for t in tasks], output, now=engine.now())


@app.command("stats")
@command_wrapper
async def task_stats(
    owner: OwnerOption = None,
    output: OutputOption = None,
    json_opt: JsonOption = False,
) -> None:
    """Show task counters."""
    output = resolve_output(output, json_opt)
    stats = await get_query_engine().get_task_stats(resolve_owner(owner))
    format_output(stats.model_dump(), output)


@app.command("export")
@command_wrapper
async def export_tasks(
    file: Annotated[
        Path | None, typer.Option("--file", "-f", help="Write to this file instead of stdout")
    ] = None,
    owner: OwnerOption = None,
) -> None:
    """Export the owner's live tasks as JSON."""
    owner_id = resolve_owner(owner)
    store = get_task_store()
    tasks = await store.get_all_tasks(owner_id)
    payload = {
        "owner_id": owner_id,
        "exported_at": store.now(),
        "tasks": [task_dict(t) for t in tasks],
    }

    text = json.dumps(payload, indent=2)
    if file is None:
        print(text)
        return

    file.parent.mkdir(parents=True, exist_ok=True)
    file.write_text(text + "\n", encoding="utf-8")
    format_success(f"Exported {len(tasks)} task(s) to {file}")
