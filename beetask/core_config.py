"""Core configuration: reports, urgency coefficients and config file lookup."""

from __future__ import annotations

import functools
import logging
import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_REPORT_NAME = "__default"


def _default_filters() -> list[str]:
    return ["status:pending or status:active"]


def _default_columns() -> list[str]:
    return ["id", "date_created", "summary", "tags", "urgency"]


def _default_column_names() -> list[str]:
    return ["ID", "Date reated", "Summary", "Tags", "Urgency"]


def _string_list(value: Any, what: str) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValueError(f"'{what}' must be a list of strings")
    return list(value)


def _require(data: Mapping[str, Any], key: str) -> Any:
    if key not in data:
        raise ValueError(f"missing field `{key}`")
    return data[key]


@dataclass
class ReportConfig:
    """How a report filters tasks and which columns it shows."""

    filters: list[str] = field(default_factory=_default_filters)
    columns: list[str] = field(default_factory=_default_columns)
    column_names: list[str] = field(default_factory=_default_column_names)
    default: bool = True

    @classmethod
    def _from_dict(cls, data: Any) -> ReportConfig:
        if not isinstance(data, Mapping):
            raise ValueError("a report must be a table")
        default = _require(data, "default")
        if not isinstance(default, bool):
            raise ValueError("'default' must be a boolean")
        return cls(
            filters=_string_list(_require(data, "filters"), "filters"),
            columns=_string_list(_require(data, "columns"), "columns"),
            column_names=_string_list(_require(data, "column_names"), "column_names"),
            default=default,
        )


@dataclass
class CoefficientField:
    """A weight applied to the urgency of tasks matching a field (and value)."""

    field: str = ""
    value: str | None = None
    coefficient: int = 0

    @classmethod
    def _from_dict(cls, data: Any) -> CoefficientField:
        if not isinstance(data, Mapping):
            raise ValueError("a coefficient must be a table")
        name = _require(data, "field")
        if not isinstance(name, str):
            raise ValueError("'field' must be a string")
        value = data.get("value")
        if value is not None and not isinstance(value, str):
            raise ValueError("'value' must be a string")
        coefficient = _require(data, "coefficient")
        if isinstance(coefficient, bool) or not isinstance(coefficient, int):
            raise ValueError("'coefficient' must be an integer")
        return cls(field=name, value=value, coefficient=coefficient)


def _default_reports() -> dict[str, ReportConfig]:
    return {DEFAULT_REPORT_NAME: ReportConfig()}


@dataclass
class CoreConfig:
    """The [core] section of the configuration."""

    default_report: str = DEFAULT_REPORT_NAME
    reports: dict[str, ReportConfig] = field(default_factory=_default_reports)
    coefficients: list[CoefficientField] = field(default_factory=list)

    def get_report(self, name: str) -> ReportConfig | None:
        """Return the report called *name*, or None."""
        return self.reports.get(name)

    def get_default_report(self) -> ReportConfig:
        """Return the configured default report, falling back to the built-in one."""
        report = self.get_report(self.default_report)
        if report is not None:
            return report
        report = self.get_report(DEFAULT_REPORT_NAME)
        if report is None:
            raise LookupError(f"'{DEFAULT_REPORT_NAME}' report not found.")
        return report

    @classmethod
    def _from_dict(cls, data: Any) -> CoreConfig:
        if not isinstance(data, Mapping):
            raise ValueError("the [core] section must be a table")
        default_report = data.get("default_report", DEFAULT_REPORT_NAME)
        if not isinstance(default_report, str):
            raise ValueError("'default_report' must be a string")
        if "report" in data:
            raw_reports = data["report"]
            if not isinstance(raw_reports, Mapping):
                raise ValueError("'report' must be a table")
            reports = {
                name: ReportConfig._from_dict(value)
                for name, value in raw_reports.items()
            }
        else:
            reports = _default_reports()
        raw_coefficients = data.get("coefficients", [])
        if not isinstance(raw_coefficients, list):
            raise ValueError("'coefficients' must be an array")
        coefficients = [CoefficientField._from_dict(c) for c in raw_coefficients]
        return cls(
            default_report=default_report,
            reports=reports,
            coefficients=coefficients,
        )


def load_core_config_from_string(content: str) -> CoreConfig:
    """Parse TOML text and build the core configuration from its [core] table."""
    try:
        document = tomllib.loads(content)
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Unable to read configuration file: {exc}") from exc

    if "core" not in document:
        raise ValueError("Configuration file found but the [core] section is missing.")
    try:
        config = CoreConfig._from_dict(document["core"])
    except ValueError as exc:
        raise ValueError(
            f"Unable to parse the [core] section of the configuration. {exc}"
        ) from exc

    for name, report in config.reports.items():
        if report.default:
            config.default_report = name
    if config.get_report(config.default_report) is None:
        config.default_report = DEFAULT_REPORT_NAME
        config.reports[DEFAULT_REPORT_NAME] = ReportConfig()
    return config


def _expand_tilde(path: str, home: str) -> str:
    if path == "~" or path.startswith("~/"):
        return home + path[1:]
    return path


def find_config_file(environ: Mapping[str, str] | None = None) -> Path | None:
    """Return the first existing configuration file, or None."""
    env = os.environ if environ is None else environ
    home = env.get("HOME")
    if home is None:
        raise ValueError("The HOME environment variable is not set.")
    xdg_config_home = env.get("XDG_CONFIG_HOME", f"{home}/.config")

    candidates = [
        "bee.toml",
        f"{xdg_config_home}/bee/config.toml",
        f"{home}/.config/bee/config.toml",
        f"{home}/.bee.toml",
    ]
    for candidate in candidates:
        expanded = _expand_tilde(candidate, home)
        try:
            full_path = Path(expanded).resolve(strict=True)
        except OSError:
            continue
        if full_path.exists():
            logger.debug("Found config file %s", expanded)
            return full_path
    return None


def load_core_config(environ: Mapping[str, str] | None = None) -> CoreConfig:
    """Load the core configuration from the configuration file, if there is one."""
    path = find_config_file(environ)
    if path is None:
        return CoreConfig()
    content = path.read_text(encoding="utf-8")
    return load_core_config_from_string(content)


@functools.cache
def get_core_config() -> CoreConfig:
    """Return the process-wide core configuration, loading it on first use."""
    return load_core_config()