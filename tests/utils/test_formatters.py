"""Tests for output formatters."""

from __future__ import annotations

import json

import pytest
import yaml

from taskledger.utils.ui import formatters
from taskledger.utils.ui.formatters import (
    format_output,
    format_timestamp,
    get_completion_color,
    get_progress_bar,
    is_overdue,
)

NOW = 1_700_000_000

TASKS = [
    {"id": 0, "content": "late", "is_completed": False, "deadline": NOW - 10, "priority": 3, "category": "work"},
    {"id": 1, "content": "soon", "is_completed": False, "deadline": NOW + 10, "priority": 2, "category": ""},
    {"id": 2, "content": "done", "is_completed": True, "deadline": 0, "priority": 0, "category": ""},
]


@pytest.fixture
def record_console(monkeypatch):
    from rich.console import Console

    console = Console(record=True, width=120)
    monkeypatch.setattr(formatters, "console", console)
    return console


def test_json_output(capsys):
    format_output({"id": 1, "content": "x"}, "json")
    assert json.loads(capsys.readouterr().out) == {"id": 1, "content": "x"}


def test_yaml_output(capsys):
    format_output([{"id": 1}], "yaml")
    assert yaml.safe_load(capsys.readouterr().out) == [{"id": 1}]


def test_table_output(record_console):
    format_output(TASKS, "table")
    text = record_console.export_text()
    assert "Content" in text
    assert "late" in text
    assert "work" in text


def test_pretty_groups_by_priority_and_overdue(record_console):
    format_output(TASKS, "pretty", now=NOW)
    text = record_console.export_text()
    assert "2 active, 1 completed" in text
    assert "MEDIUM PRIORITY" in text
    assert "NO PRIORITY" in text
    assert "OVERDUE (1)" in text
    # The overdue task is listed under OVERDUE, not under its priority.
    assert "HIGH PRIORITY" not in text


def test_pretty_empty_list(record_console):
    format_output([], "pretty")
    assert "No tasks found" in record_console.export_text()


def test_pretty_stats(record_console):
    format_output({"total": 4, "active": 3, "completed": 1, "overdue": 1}, "pretty")
    text = record_console.export_text()
    assert "Task Statistics" in text
    assert "25% done" in text


def test_pretty_single_task(record_console):
    format_output({**TASKS[0], "created_at": NOW, "updated_at": NOW, "completed_at": 0}, "pretty")
    text = record_console.export_text()
    assert "late" in text
    assert "High Priority" in text


def test_error_and_success(record_console):
    formatters.format_error("broken")
    formatters.format_success("fine")
    text = record_console.export_text()
    assert "Error: broken" in text
    assert "Success: fine" in text


def test_format_timestamp():
    assert format_timestamp(0) == "-"
    assert format_timestamp(0 + 86400 * 365) == "00:00 01/01/1971 Fri"


def test_is_overdue_boundaries():
    assert is_overdue(NOW - 1, NOW)
    assert not is_overdue(NOW, NOW)
    assert not is_overdue(0, NOW)


def test_progress_helpers():
    assert get_progress_bar(50) == "█████░░░░░"
    assert get_completion_color(90) == "green"
    assert get_completion_color(60) == "yellow"
    assert get_completion_color(10) == "red"
