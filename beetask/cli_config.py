"""Command-line presentation configuration: colours and table sections."""

from __future__ import annotations

import functools
import re
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from beetask.core_config import find_config_file

Colour = tuple[int, int, int]

_HEX_PAIR = re.compile(r"\+?[0-9A-Fa-f]{1,2}")


class ConfigError(ValueError):
    """Raised when the command-line configuration cannot be read or is invalid."""


class SectionType(Enum):
    """How listed tasks are split into sections."""

    PROJECT = "project"
    FILTERS = "filters"


def hex_to_rgb(hex_color: str) -> Colour:
    """Convert six hex digits (without '#') to an RGB triple."""
    if len(hex_color.encode("utf-8")) != 6:
        raise ConfigError("Invalid Hex colour length")
    channels = []
    for start in (0, 2, 4):
        pair = hex_color[start:start + 2]
        if not _HEX_PAIR.fullmatch(pair):
            raise ConfigError("Parse error: invalid digit found in string")
        channels.append(int(pair, 16))
    return channels[0], channels[1], channels[2]


def parse_colour(value: Any) -> Colour:
    """Parse a '#rrggbb' colour string."""
    if isinstance(value, str) and value.startswith("#"):
        return hex_to_rgb(value[1:])
    raise ConfigError("Error parsing colour value")


def _as_table(value: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigError(f"{what} must be a table")
    return value


def _default_palette() -> list[Colour]:
    return [
        (246, 76, 60),
        (133, 153, 199),
        (255, 234, 77),
        (121, 203, 103),
    ]


@dataclass
class ColourField:
    """Colours applied to rows whose task matches a field (and value)."""

    field: str
    value: str | None = None
    fg: Colour | None = None
    bg: Colour | None = None

    @classmethod
    def from_dict(cls, data: Any) -> ColourField:
        table = _as_table(data, "a colour entry")
        if "field" not in table:
            raise ConfigError("missing field `field`")
        name = table["field"]
        if not isinstance(name, str):
            raise ConfigError("'field' must be a string")
        value = table.get("value")
        if value is not None and not isinstance(value, str):
            raise ConfigError("'value' must be a string")
        fg = parse_colour(table["fg"]) if "fg" in table else None
        bg = parse_colour(table["bg"]) if "bg" in table else None
        return cls(field=name, value=value, fg=fg, bg=bg)


@dataclass
class SectionConfig:
    """How listed tasks are grouped into sections and how sections are coloured."""

    section_type: SectionType | None = None
    filters: dict[str, list[str]] = field(default_factory=dict)
    colour_palette: list[Colour] = field(default_factory=_default_palette)
    default_section_colour: Colour = (153, 153, 153)
    section_header_bg: Colour = (26, 26, 26)

    @classmethod
    def from_dict(cls, data: Any) -> SectionConfig:
        table = _as_table(data, "the section configuration")
        section_type = None
        if "type" in table:
            raw_type = table["type"]
            try:
                section_type = SectionType(raw_type) if isinstance(raw_type, str) else None
            except ValueError:
                section_type = None
            if section_type is None:
                raise ConfigError(
                    f"unknown variant `{raw_type}`, expected `project` or `filters`"
                )

        filters: dict[str, list[str]] = {}
        for name, value in _as_table(table.get("filters", {}), "'filters'").items():
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise ConfigError(f"filter '{name}' must be a list of strings")
            filters[name] = list(value)

        if "colour_palette" in table:
            raw_palette = table["colour_palette"]
            if not isinstance(raw_palette, list):
                raise ConfigError("'colour_palette' must be an array")
            palette = [parse_colour(c) for c in raw_palette]
        else:
            palette = _default_palette()

        default_colour = (
            parse_colour(table["default_section_colour"])
            if "default_section_colour" in table
            else (153, 153, 153)
        )
        header_bg = (
            parse_colour(table["section_header_bg"])
            if "section_header_bg" in table
            else (26, 26, 26)
        )
        return cls(
            section_type=section_type,
            filters=filters,
            colour_palette=palette,
            default_section_colour=default_colour,
            section_header_bg=header_bg,
        )


def _absent_section() -> SectionConfig:
    # Without a [cli.section] table the section settings are all zero-valued:
    # no palette and black section colours.
    return SectionConfig(
        colour_palette=[],
        default_section_colour=(0, 0, 0),
        section_header_bg=(0, 0, 0),
    )


@dataclass
class CliConfig:
    """The [cli] section of the configuration."""

    colour_fields: list[ColourField] = field(default_factory=list)
    section: SectionConfig = field(default_factory=_absent_section)

    @classmethod
    def from_dict(cls, data: Any) -> CliConfig:
        table = _as_table(data, "the [cli] section")
        raw_colours = table.get("colours", [])
        if not isinstance(raw_colours, list):
            raise ConfigError("'colours' must be an array")
        colour_fields = [ColourField.from_dict(c) for c in raw_colours]
        section = (
            SectionConfig.from_dict(table["section"])
            if "section" in table
            else _absent_section()
        )
        return cls(colour_fields=colour_fields, section=section)

    def validate(self) -> None:
        """Raise ConfigError when the configuration is inconsistent."""
        if self.section.section_type is SectionType.FILTERS and not self.section.filters:
            raise ConfigError(
                "Configuration: Section: The section configuration type is "
                "'filters' but no filter was provided."
            )

    def _colour_for(self, name: str, attribute: str, fallback: Colour) -> Colour:
        return next(
            (
                getattr(c, attribute)
                for c in self.colour_fields
                if c.field == name and getattr(c, attribute) is not None
            ),
            fallback,
        )

    def primary_colour_fg(self) -> Colour:
        return self._colour_for("primary_colour", "fg", (220, 220, 220))

    def primary_colour_bg(self) -> Colour:
        return self._colour_for("primary_colour", "bg", (89, 89, 89))

    def secondary_colour_fg(self) -> Colour:
        return self._colour_for("secondary_colour", "fg", (220, 220, 220))

    def secondary_colour_bg(self) -> Colour:
        return self._colour_for("secondary_colour", "bg", (38, 38, 38))


def load_cli_config_from_string(content: str) -> CliConfig:
    """Parse TOML text and build the command-line configuration from its [cli] table."""
    try:
        document = tomllib.loads(content)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Unable to read configuration file: {exc}") from exc

    if "cli" in document:
        try:
            config = CliConfig.from_dict(document["cli"])
        except ConfigError as exc:
            raise ConfigError(
                f"Unable to parse the [cli] section of the configuration. {exc}"
            ) from exc
    else:
        config = CliConfig()

    config.validate()
    return config


def load_cli_config(environ: Mapping[str, str] | None = None) -> CliConfig:
    """Load the command-line configuration from the configuration file, if any."""
    path = find_config_file(environ)
    if path is None:
        return CliConfig()
    return load_cli_config_from_string(path.read_text(encoding="utf-8"))


@functools.cache
def get_cli_config() -> CliConfig:
    """Return the process-wide command-line configuration, loading it on first use."""
    return load_cli_config()