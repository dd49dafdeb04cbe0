import pytest

from beetask.cli_config import CliConfig
from beetask.table import (
    Style,
    StyledText,
    Table,
    get_max_width_of_cell,
    get_str_len,
    get_terminal_width,
    overwrite_style,
    split_most_whitespaces,
    wrap_text,
)

CELL_TEXT = "test dflaasdf dashf asf u awefaw faw af a"


def test_wrap_text_counts():
    assert wrap_text(CELL_TEXT, 30).count("\n") == 1
    assert wrap_text("", 30).count("\n") == 0
    assert wrap_text("asd asd asd ", 2).count("\n") == 2


def test_table_render_line_count():
    table = Table(["hey", "you"], config=CliConfig(), max_width=30)
    table.add_row(["again", CELL_TEXT], None)
    content = table.render()
    assert content.count("\n") == 4


def test_wrapped_cell_with_multibyte_char():
    assert wrap_text("aaaaa aaaaa aaaaa aaaaa ", 30).count("\n") == 0
    assert wrap_text("\u00e5" * 5 + " " + "\u00e5" * 5 + " " + "\u00e5" * 5 + " " + "\u00e5" * 5 + " ", 30).count("\n") == 0
    decomposed = " ".join(["a\u030a" * 5] * 4) + " "
    assert wrap_text(decomposed, 30).count("\n") == 0


def test_get_str_len_counts_graphemes():
    assert get_str_len("\u00e5\u00e5\u00e5") == 3
    assert get_str_len("e\u0301") == 1
    assert get_str_len("") == 0


def test_get_max_width_of_cell():
    assert get_max_width_of_cell("ab\nabcd\nx") == 4
    assert get_max_width_of_cell("") == 0


def test_split_most_whitespaces():
    assert split_most_whitespaces("asd asd asd ") == ["asd", "asd", "asd"]
    assert split_most_whitespaces("a  b") == ["a", " b"]
    assert split_most_whitespaces("a\nb c") == ["a\nb", "c"]


def test_wrap_text_indents_after_date():
    result = wrap_text("2024-01-01 aaaa bbbb cccc", 12)
    assert result == (
        "2024-01-01 \n              aaaa \n              bbbb \n              cccc"
    )


def test_apply_plain_and_coloured():
    assert StyledText().apply("x") == "x"
    styled = StyledText(
        styles=[Style.UNDERLINE, Style.BOLD],
        background_color=(1, 2, 3),
        foreground_color=(4, 5, 6),
    )
    assert styled.apply("x") == "\x1b[1;4;48;2;1;2;3;38;2;4;5;6mx\x1b[0m"


def test_apply_reapplies_after_inner_reset():
    inner = StyledText(foreground_color=(1, 1, 1)).apply(" ")
    outer = StyledText(styles=[Style.BOLD]).apply(inner + "t")
    assert outer == "\x1b[1m\x1b[38;2;1;1;1m \x1b[0m\x1b[1mt\x1b[0m"


def test_overwrite_style_keeps_own_colours():
    first = StyledText(foreground_color=(1, 2, 3))
    second = StyledText(background_color=(9, 9, 9), foreground_color=(7, 7, 7))
    merged = overwrite_style(first, second)
    assert merged.foreground_color == (1, 2, 3)
    assert merged.background_color == (9, 9, 9)


def test_table_requires_columns():
    with pytest.raises(ValueError):
        Table([], config=CliConfig(), max_width=80)


def test_add_row_length_mismatch():
    table = Table(["a", "b"], config=CliConfig(), max_width=80)
    with pytest.raises(ValueError):
        table.add_row(["only one"], None)


def test_render_row_uses_secondary_then_primary_style():
    table = Table(["a"], config=CliConfig(), max_width=80)
    table.add_row(["x"], None)
    table.add_row(["y"], StyledText(foreground_color=(1, 2, 3)))
    content = table.render()
    assert "\x1b[48;2;38;38;38;38;2;220;220;220mx " in content
    assert "\x1b[48;2;89;89;89;38;2;1;2;3my " in content


def test_render_with_sections():
    table = Table(["hey", "you"], config=CliConfig(), max_width=200)
    table.add_section("A")
    table.add_row(["x", "y"], None)
    table.add_section("B")
    table.add_row(["z", "w"], None)
    content = table.render()
    assert content.count("\n") == 8
    assert content.startswith("\x1b[4;38;2;199;199;199m  hey you \x1b[0m\n")
    assert "A" in content and "B" in content


def test_render_is_repeatable():
    table = Table(["hey", "you"], config=CliConfig(), max_width=30)
    table.add_row(["again", CELL_TEXT], None)
    first = table.render()
    second = table.render()
    assert first.count("\n") == 4
    assert second.count("\n") == 4
    assert second == first


def test_render_too_narrow_raises():
    table = Table(["a", "b"], config=CliConfig(), max_width=1)
    table.add_row(["x", "y"], None)
    with pytest.raises(ValueError):
        table.render()


def test_get_terminal_width_from_environment(monkeypatch):
    monkeypatch.setenv("COLUMNS", "123")
    assert get_terminal_width() == 123