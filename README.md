# beetask

Building blocks for a terminal task manager:

- `beetask.core_config` reads the `[core]` section of a TOML configuration
  file (reports and urgency coefficients) and finds that file.
- `beetask.cli_config` reads the `[cli]` section (row colours and how listed
  tasks are split into sections).
- `beetask.table` lays out word-wrapped, true-colour text tables.
- `beetask.formatting` formats relative ages, cell values, error messages and
  the help screen.
- `beetask.actions` is the registry of actions (`add`, `list`, `modify`,
  `done`, ...), their command-line spellings and their help texts.

There are no runtime dependencies beyond the Python 3.11+ standard library.

## Installation

```
pip install .
```

The tests use pytest:

```
pip install .[test]
pytest
```

## Configuration

`find_config_file()` looks, in order, for `bee.toml` in the current directory,
`$XDG_CONFIG_HOME/bee/config.toml` (with `~/.config` when `XDG_CONFIG_HOME` is
unset), `~/.config/bee/config.toml` and `~/.bee.toml`, and returns the first
that exists, or `None`. It takes an optional mapping to use instead of
`os.environ`, and raises `ValueError` when `HOME` is not set.

### The `[core]` section

```toml
[core]
default_report = "work"

[core.report.work]
filters = ["status:pending", "+work"]
columns = ["id", "summary", "tags"]
column_names = ["ID", "Summary", "Tags"]
default = true

[[core.coefficients]]
field = "tag"
value = "urgent"
coefficient = 5
```

```python
from beetask.core_config import load_core_config_from_string

with open("bee.toml", encoding="utf-8") as fh:
    config = load_core_config_from_string(fh.read())

report = config.get_default_report()
print(report.columns)
print(config.get_report("work"))
```

Each report needs `filters`, `columns`, `column_names` and `default`. A report
marked `default = true` becomes the default report; if the named default report
does not exist, a built-in one called `__default` is added and used. The
built-in report selects `status:pending or status:active` tasks and shows the
`id`, `date_created`, `summary`, `tags` and `urgency` columns.

`load_core_config_from_string` raises `ValueError` when the text is not valid
TOML, when the `[core]` section is missing, or when it is malformed.
`load_core_config()` reads the file found by `find_config_file()` and returns
the built-in configuration (`CoreConfig()`) when there is no file;
`get_core_config()` does the same once per process and caches the result.

### The `[cli]` section

Colours are written as `#rrggbb`.

```toml
[[cli.colours]]
field = "tag"
value = "urgent"
fg = "#ff0000"

[[cli.colours]]
field = "primary_colour"
bg = "#333333"

[cli.section]
type = "filters"
colour_palette = ["#f64c3c", "#8599c7"]

[cli.section.filters]
Today = ["+today"]
Later = ["+later"]
```

```python
from beetask.cli_config import hex_to_rgb, load_cli_config_from_string

with open("bee.toml", encoding="utf-8") as fh:
    cli = load_cli_config_from_string(fh.read())

print(cli.section.section_type)          # SectionType.FILTERS
print(cli.primary_colour_bg())          # (51, 51, 51)
print(cli.secondary_colour_bg())        # (38, 38, 38), the default
print(hex_to_rgb("1a1a1a"))             # (26, 26, 26)
```

The section `type` is `project` or `filters`. A `filters` type without any
filter is rejected by `CliConfig.validate()`. All problems are reported as
`ConfigError`, a subclass of `ValueError`. A missing `[cli]` section gives the
default `CliConfig()`. `load_cli_config()` and `get_cli_config()` read the file
found by `find_config_file()`; the latter caches the result.

## Tables

```python
from beetask.cli_config import CliConfig
from beetask.table import StyledText, Style, Table, wrap_text

table = Table(["ID", "Summary"], config=CliConfig(), max_width=40)
table.add_section("Today")
table.add_row(["1", "write the quarterly report and send it around"])
table.add_row(["2", "call back"], StyledText(styles=[Style.BOLD], foreground_color=(255, 0, 0)))
print(table.render(), end="")

print(wrap_text("a long summary that will not fit in a narrow column", 20))
```

`Table.render()` returns the whole table as text with ANSI true-colour
sequences: an underlined header, alternating row colours taken from the
configuration, and a coloured marker column when named sections are present.
The widest column is shrunk to fit `max_width` (the terminal width by default,
80 columns when it cannot be found); `ValueError` is raised when the table
cannot fit. Cell lengths count combining marks together with their base
character, so accented text lines up. `wrap_text` indents the lines that follow
a `YYYY-MM-DD` date, which keeps annotations aligned.

## Formatting helpers

```python
from datetime import datetime, timedelta
from beetask.formatting import format_error, format_relative_time, print_value

now = datetime.now().astimezone()
print(format_relative_time(now - timedelta(days=15), now))   # 2w
print(format_relative_time(now - timedelta(days=60), now))   # 2mo
print(print_value(["work", "home"]))                          # work, home
print(format_error("no such task"))
```

`render_help(descriptions, writer, config=None)` writes the `header` entry of
the mapping followed by a table of the other entries.

## Actions

```python
import sys
from beetask.actions import action_type_from, command_aliases, help_descriptions
from beetask.cli_config import CliConfig
from beetask.formatting import render_help

print(action_type_from("mod"))   # Modify
print(command_aliases())         # {"add": False, ..., "list": True, ...}
render_help(help_descriptions(), sys.stdout, CliConfig())
```

`action_types()` returns every `ActionType` with its `ActionTypeData`
(spellings, whether arguments act as filters, documentation).
`action_type_from` raises `ValueError` for an unknown spelling.

## What this package does not do

beetask has no command-line program of its own. It does not store tasks, has
no task model, and does not parse or evaluate filter expressions: report and
section filters are kept as plain strings. The action registry describes the
actions but does not carry them out, and nothing here keeps undo history.