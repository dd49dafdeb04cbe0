import pytest

from beetask.actions import (
    ActionType,
    ActionTypeData,
    action_type_from,
    action_types,
    command_aliases,
    command_descriptions,
    help_descriptions,
)


def test_every_action_type_has_data():
    data = action_types()
    assert set(data) == set(ActionType)
    assert list(data) == list(ActionType)
    for entry in data.values():
        assert isinstance(entry, ActionTypeData)
        assert entry.parsed_string
        assert entry.documentation_string.strip()


def test_aliases_are_unique():
    spellings = [alias for d in action_types().values() for alias in d.parsed_string]
    assert len(spellings) == len(set(spellings))


@pytest.mark.parametrize(
    "name, expected",
    [
        ("add", ActionType.ADD),
        ("annotate", ActionType.ANNOTATE),
        ("_cmd", ActionType.COMMAND),
        ("modify", ActionType.MODIFY),
        ("mod", ActionType.MODIFY),
        ("list", ActionType.LIST),
        ("undo", ActionType.UNDO),
    ],
)
def test_action_type_from_known_names(name, expected):
    assert action_type_from(name) is expected


def test_action_type_from_round_trips_every_alias():
    for action, data in action_types().items():
        for alias in data.parsed_string:
            assert action_type_from(alias) is action


@pytest.mark.parametrize("name", ["", "remove", "LIST", "cmd"])
def test_action_type_from_rejects_unknown(name):
    with pytest.raises(ValueError):
        action_type_from(name)


def test_display_name_is_variant_name():
    assert str(action_type_from("mod")) == "Modify"
    assert str(action_type_from("_cmd")) == "Command"
    assert "Modify" in command_descriptions()
    assert "Command" in command_descriptions()


def test_command_descriptions_keyed_by_display_name():
    descriptions = command_descriptions()
    assert set(descriptions) == {str(a) for a in ActionType}
    for action, data in action_types().items():
        assert descriptions[str(action)] == data.documentation_string


def test_help_descriptions_add_header():
    help_text = help_descriptions()
    assert "header" in help_text
    assert "bee <filter> <action_name> <arguments>" in help_text["header"]
    without_header = {k: v for k, v in help_text.items() if k != "header"}
    assert without_header == command_descriptions()


def test_command_aliases_flags():
    aliases = command_aliases()
    filtering = {alias for alias, flag in aliases.items() if flag}
    assert filtering == {"edit", "export", "info", "list", "start", "stop"}
    assert aliases["mod"] is False
    assert aliases["modify"] is False
    assert aliases["_cmd"] is False


def test_command_aliases_cover_all_spellings():
    aliases = command_aliases()
    expected = {alias for d in action_types().values() for alias in d.parsed_string}
    assert set(aliases) == expected
    for alias, flag in aliases.items():
        assert action_types()[action_type_from(alias)].use_arguments_as_filter is flag