import io
from datetime import datetime, timedelta, timezone

import pytest

from beetask.cli_config import CliConfig
from beetask.formatting import (
    format_error,
    format_relative_time,
    print_value,
    render_help,
)

NOW = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "name, delta, expected",
    [
        ("Just Now", timedelta(seconds=30), "30s"),
        ("Seconds Ago", timedelta(seconds=45), "45s"),
        ("One Minute Ago", timedelta(minutes=1), "1m"),
        ("Minutes Ago", timedelta(minutes=45), "45m"),
        ("One Hour Ago", timedelta(hours=1), "1h"),
        ("Hours Ago", timedelta(hours=10), "10h"),
        ("One Day Ago", timedelta(hours=24), "1d"),
        ("Days Ago", timedelta(days=6), "6d"),
        ("One Week Ago", timedelta(days=8), "8d"),
        ("Weeks Ago", timedelta(days=15), "2w"),
        ("One Month Ago", timedelta(days=35), "5w"),
        ("Months Ago", timedelta(days=60), "2mo"),
        ("One Year Ago", timedelta(days=365), "1y"),
        ("Years Ago", timedelta(days=730), "2y"),
    ],
)
def test_format_relative_time(name, delta, expected):
    assert format_relative_time(NOW - delta, NOW) == expected, name


def test_format_relative_time_truncates_fractions():
    assert format_relative_time(NOW - timedelta(seconds=59, milliseconds=900), NOW) == "59s"


def test_format_relative_time_default_now():
    moment = datetime.now(tz=timezone.utc) - timedelta(days=3)
    assert format_relative_time(moment) == "3d"


@pytest.mark.parametrize(
    "value, expected",
    [
        ("hello", "hello"),
        (5, "5"),
        (1.5, "1.5"),
        (True, "true"),
        (False, "false"),
        (None, ""),
        (["a", "b", 3, "c"], "a, b, c"),
        ([], ""),
    ],
)
def test_print_value(value, expected):
    assert print_value(value) == expected


def test_print_value_rejects_objects():
    with pytest.raises(TypeError):
        print_value({"key": "value"})


def test_format_error():
    assert format_error("boom") == "\x1b[1;91mError: \x1b[0mboom"


def test_render_help_header_first(monkeypatch):
    monkeypatch.setenv("COLUMNS", "120")
    out = io.StringIO()
    render_help(
        {"header": "Bee is a task manager.", "Add": "Add a task", "List": "List tasks"},
        out,
        CliConfig(),
    )
    text = out.getvalue()
    assert text.startswith("Bee is a task manager.\n\n")
    table_part = text[len("Bee is a task manager.\n\n"):]
    lines = table_part.splitlines()
    assert len(lines) == 3
    assert "Action name" in lines[0]
    assert "Add a task" in table_part
    assert "List tasks" in table_part
    assert "header" not in table_part


def test_render_help_without_header(monkeypatch):
    monkeypatch.setenv("COLUMNS", "120")
    out = io.StringIO()
    render_help({"Undo": "Undo the last operation"}, out, CliConfig())
    text = out.getvalue()
    lines = text.splitlines()
    assert len(lines) == 2
    assert "Action name" in lines[0]
    assert "Undo the last operation" in lines[1]