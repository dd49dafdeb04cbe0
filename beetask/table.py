"""Text tables with wrapped cells, named sections and true-colour styling."""

from __future__ import annotations

import logging
import re
import shutil
import unicodedata
from dataclasses import dataclass, field, replace
from enum import Enum

from beetask.cli_config import CliConfig, get_cli_config

logger = logging.getLogger(__name__)

Colour = tuple[int, int, int]

_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")
_RESET = "\x1b[0m"
_ZERO_WIDTH = {"\u200d", "\u200c"}
_DATE_INDENT = "\n              "


class Style(Enum):
    """Text attributes, valued by their SGR code."""

    CLEAR = 0
    BOLD = 1
    DIMMED = 2
    ITALIC = 3
    UNDERLINE = 4
    BLINK = 5
    REVERSED = 7
    HIDDEN = 8
    STRIKETHROUGH = 9


@dataclass
class StyledText:
    """A set of attributes and optional RGB colours applied to text."""

    styles: list[Style] = field(default_factory=list)
    background_color: Colour | None = None
    foreground_color: Colour | None = None

    def _prefix(self) -> str:
        parts = [
            str(code)
            for code in sorted({s.value for s in self.styles if s is not Style.CLEAR})
        ]
        if self.background_color is not None:
            r, g, b = self.background_color
            parts.append(f"48;2;{r};{g};{b}")
        if self.foreground_color is not None:
            r, g, b = self.foreground_color
            parts.append(f"38;2;{r};{g};{b}")
        return ";".join(parts)

    def apply(self, text: str) -> str:
        """Return *text* wrapped in the ANSI sequences for this style."""
        codes = self._prefix()
        if not codes:
            return text
        prefix = f"\x1b[{codes}m"
        if _RESET in text:
            # Re-apply this style after every inner reset, except a final one.
            body, trailing = (text[: -len(_RESET)], _RESET) if text.endswith(_RESET) else (text, "")
            text = body.replace(_RESET, _RESET + prefix) + trailing
        return f"{prefix}{text}{_RESET}"


def overwrite_style(first: StyledText, second: StyledText) -> StyledText:
    """Fill the colours missing from *first* with those of *second*."""
    return replace(
        first,
        styles=list(first.styles),
        background_color=(
            first.background_color
            if first.background_color is not None
            else second.background_color
        ),
        foreground_color=(
            first.foreground_color
            if first.foreground_color is not None
            else second.foreground_color
        ),
    )


def get_str_len(value: str) -> int:
    """Count user-perceived characters, treating combining marks as part of their base."""
    count = 0
    for char in value.replace("\r\n", "\n"):
        if char in _ZERO_WIDTH:
            continue
        if unicodedata.category(char) in ("Mn", "Me"):
            continue
        if 0xFE00 <= ord(char) <= 0xFE0F:
            continue
        count += 1
    return count


def get_max_width_of_cell(cell: str) -> int:
    """Return the length of the longest line of *cell*."""
    return max((get_str_len(line) for line in cell.split("\n")), default=0)


def split_most_whitespaces(text: str) -> list[str]:
    """Split on whitespace other than newlines, keeping runs after the first in words."""
    output: list[str] = []
    buffer = ""
    after_whitespace = False
    for char in text:
        if char.isspace() and char != "\n" and not after_whitespace and buffer:
            output.append(buffer)
            buffer = ""
            continue
        after_whitespace = char.isspace()
        buffer += char
    if buffer:
        output.append(buffer)
    return output


def get_terminal_width() -> int:
    """Return the terminal width in columns, 80 when it cannot be found."""
    return shutil.get_terminal_size(fallback=(80, 24)).columns


def wrap_text(text: str, width: int) -> str:
    """Wrap *text* to *width*, indenting lines that follow an annotation date."""
    if get_max_width_of_cell(text) <= width:
        return text

    wrapped = ""
    line_length = 0
    newline = "\n"
    for outer_word in split_most_whitespaces(text):
        first = True
        for word in outer_word.split("\n"):
            if _DATE.search(word):
                newline = "\n"
            if not first:
                wrapped += newline
                line_length = 0
            first = False

            word_len = get_str_len(word)
            if line_length + word_len + 1 > width:
                wrapped += newline
                line_length = len(newline)
            wrapped += word + " "
            line_length += word_len + 1

            if _DATE.search(word):
                newline = _DATE_INDENT
    return wrapped.strip()


@dataclass
class _Section:
    name: str = ""
    rows: list[list[str]] = field(default_factory=list)
    styles: list[StyledText | None] = field(default_factory=list)


class Table:
    """A table of text cells grouped into optional named sections."""

    def __init__(
        self,
        columns: list[str],
        *,
        config: CliConfig | None = None,
        max_width: int | None = None,
    ) -> None:
        if not columns:
            raise ValueError("table must have at least one column")
        conf = get_cli_config() if config is None else config
        self.columns = list(columns)
        self.column_padding = 1
        self.max_width = get_terminal_width() if max_width is None else max_width
        self.alternating_colours = True
        self._sections: list[_Section] = []
        self.primary_style = StyledText(
            background_color=conf.primary_colour_bg(),
            foreground_color=conf.primary_colour_fg(),
        )
        self.secondary_style = StyledText(
            background_color=conf.secondary_colour_bg(),
            foreground_color=conf.secondary_colour_fg(),
        )
        self.section_palette = list(conf.section.colour_palette)
        self.section_default_style = StyledText(
            background_color=conf.section.default_section_colour
        )
        self.section_style = StyledText(
            styles=[Style.BOLD],
            background_color=conf.section.section_header_bg,
            foreground_color=(199, 199, 199),
        )
        self.header_style = StyledText(
            styles=[Style.UNDERLINE], foreground_color=(199, 199, 199)
        )

    def add_section(self, name: str) -> None:
        """Start a new section; following rows belong to it."""
        logger.debug("Added new section in table: %s", name)
        self._sections.append(_Section(name=name))

    def add_row(self, row: list[str], style: StyledText | None = None) -> Table:
        """Append a row to the current section."""
        if len(row) != len(self.columns):
            raise ValueError("row length does not match column length")
        if not self._sections:
            self._sections.append(_Section())
        section = self._sections[-1]
        section.rows.append(list(row))
        section.styles.append(style)
        return self

    def _has_section(self) -> bool:
        if len(self._sections) > 1:
            return True
        if not self._sections:
            return False
        return bool(self._sections[-1].name)

    def _column_widths(self) -> list[int]:
        widths = [len(header.encode("utf-8")) for header in self.columns]
        for section in self._sections:
            for row in section.rows:
                for i, cell in enumerate(row):
                    widths[i] = max(widths[i], get_max_width_of_cell(cell))

        max_width = 0
        max_id = 0
        for i, width in enumerate(widths):
            if width > max_width:
                max_width = width
                max_id = i
        padding_total = len(self.columns) * self.column_padding
        total = sum(widths) + padding_total
        if total >= self.max_width:
            need_to_reduce = total - self.max_width
            reduced = widths[max_id] - need_to_reduce - padding_total
            if max_width < need_to_reduce or reduced < 0:
                raise ValueError("the table cannot fit in the available width")
            widths[max_id] = reduced
        return widths

    def render(self) -> str:
        """Lay out the whole table and return it as text, one line per row line."""
        widths = self._column_widths()
        total = sum(widths) + self.column_padding * len(widths)
        has_section = self._has_section()
        pad = " " * self.column_padding
        lines: list[str] = []

        header = "  " if has_section else ""
        header += "".join(col.ljust(w) + pad for col, w in zip(self.columns, widths))
        lines.append(self.header_style.apply(header))

        def empty_line(palette: StyledText | None) -> str:
            if palette is not None:
                return palette.apply(" ") + self.section_style.apply(" " * (total + 1))
            return " " * (total + 2)

        for idx, section in enumerate(self._sections):
            if not section.name:
                bg = self.section_default_style.background_color
            elif not self.section_palette:
                bg = None
            else:
                bg = self.section_palette[idx % len(self.section_palette)]
            palette = StyledText(background_color=bg)

            section_column = ""
            if has_section:
                if idx != 0:
                    lines.append(empty_line(None))
                section_column = f"{palette.apply(' ')} "
            if section.name:
                filler = " " * max(total - len(section.name.encode("utf-8")), 0)
                lines.append(
                    self.section_style.apply(f"{section_column}{section.name}{filler}")
                )
            if has_section:
                lines.append(empty_line(palette))

            for row_idx, (row, row_style) in enumerate(zip(section.rows, section.styles)):
                odd = self.alternating_colours and row_idx % 2 == 1
                base = self.primary_style if odd else self.secondary_style
                style = overwrite_style(row_style, base) if row_style is not None else base
                lines.extend(
                    self._row_lines(row, widths, style, palette if has_section else None)
                )
            logger.debug("Printed section name=%s, idx=%d", section.name, idx)

        return "".join(line + "\n" for line in lines)

    def _row_lines(
        self,
        row: list[str],
        widths: list[int],
        style: StyledText,
        palette: StyledText | None,
    ) -> list[str]:
        section_column = f"{palette.apply(' ')} " if palette is not None else ""
        cells = [wrap_text(cell, width).split("\n") for cell, width in zip(row, widths)]
        height = max((len(cell) for cell in cells), default=1)
        pad = " " * self.column_padding
        result = []
        for j in range(height):
            line = "".join(
                (cell[j] if j < len(cell) else "").ljust(width) + pad
                for cell, width in zip(cells, widths)
            )
            result.append(section_column + style.apply(line))
        return result