"""Plain-text rendering helpers for the command-line printer."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any, TextIO

from beetask.cli_config import CliConfig
from beetask.table import Table

_ERROR_PREFIX = "\x1b[1;91mError: \x1b[0m"
_HEADER_KEY = "header"


def _trunc_div(value: int, divisor: int) -> int:
    """Integer division rounding towards zero."""
    quotient = abs(value) // divisor
    return quotient if value >= 0 else -quotient


def format_relative_time(moment: datetime, now: datetime | None = None) -> str:
    """Describe how long ago *moment* was, e.g. '45s', '3d', '2mo'."""
    if now is None:
        now = datetime.now(tz=moment.tzinfo)
    seconds = int((now - moment).total_seconds())
    minutes = _trunc_div(seconds, 60)
    hours = _trunc_div(seconds, 3600)
    days = _trunc_div(seconds, 86400)
    weeks = _trunc_div(days, 7)
    months = _trunc_div(days, 30)
    years = _trunc_div(days, 365)

    if seconds < 60:
        return f"{seconds}s"
    if minutes < 60:
        return f"{minutes}m"
    if hours < 24:
        return f"{hours}h"
    if days < 14:
        return f"{days}d"
    if weeks < 8:
        return f"{weeks}w"
    if months < 12:
        return f"{months}mo"
    return f"{years}y"


def print_value(value: Any) -> str:
    """Render a JSON-like field value as cell text."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, list):
        return ", ".join(v for v in value if isinstance(v, str))
    raise TypeError(f"Unsupported type {value!r}")


def format_error(message: str) -> str:
    """Return *message* behind a bold bright-red 'Error: ' prefix."""
    return _ERROR_PREFIX + message


def render_help(
    descriptions: Mapping[str, str],
    writer: TextIO,
    config: CliConfig | None = None,
) -> None:
    """Write the general help header, then a table of action descriptions."""
    table = Table(["Action name", "Description"], config=config)
    for section, content in descriptions.items():
        if section == _HEADER_KEY:
            continue
        table.add_row([section, content])
    header = descriptions.get(_HEADER_KEY)
    if header is not None:
        writer.write(f"{header}\n\n")
    writer.write(table.render())