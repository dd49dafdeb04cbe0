"""The actions the command line understands, their aliases and their help texts."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

_HEADER_KEY = "header"

_HELP_HEADER = """
Bee is a task management software.
Basic usage is: 

bee <filter> <action_name> <arguments>

- <filter> restricts the tasks you will be applying the action onto.
- <action_name> defines what action is going to be performed on those tasks.
  This can be omitted. If it is omitted, then the default action is used.
  The default action is 'list' (which lists all the tasks matching the filter).
- <arguments> can be treated differently depending on the action. Refer to each action's
  help description for more information.
"""


class ActionUndoType(Enum):
    """What an undo entry reverts: an addition or a modification."""

    ADD = "Add"
    MODIFY = "Modify"


class ActionType(Enum):
    """Every action a command line can request, named as shown in the help."""

    ADD = "Add"
    ANNOTATE = "Annotate"
    COMMAND = "Command"
    DELETE = "Delete"
    DONE = "Done"
    EDIT = "Edit"
    EXPORT = "Export"
    HELP = "Help"
    INFO = "Info"
    LIST = "List"
    MODIFY = "Modify"
    START = "Start"
    STOP = "Stop"
    UNDO = "Undo"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ActionTypeData:
    """How an action is spelled on the command line and how it is documented."""

    parsed_string: tuple[str, ...]
    use_arguments_as_filter: bool
    documentation_string: str


_ACTIONS: dict[ActionType, ActionTypeData] = {
    ActionType.ADD: ActionTypeData(
        ("add",),
        False,
        "Add a new task\n"
        "<arguments> will define the task's summary, and potentially its properties as well\n",
    ),
    ActionType.ANNOTATE: ActionTypeData(
        ("annotate",),
        False,
        "Annotate a task\n"
        "<arguments> is used as the string being annotated to the task\n",
    ),
    ActionType.COMMAND: ActionTypeData(
        ("_cmd",),
        False,
        "Execute a specific command. This is used internally to populate "
        "autocompletion options.\n"
        "<filters> are ignored.\n"
        "<arguments> supported are as follow: get <projects|tags>\n",
    ),
    ActionType.DELETE: ActionTypeData(
        ("delete",),
        False,
        "Delete a task\n<arguments> are ignored for this action\n",
    ),
    ActionType.DONE: ActionTypeData(
        ("done",),
        False,
        "Complete a task\n<arguments> are ignored for this action\n",
    ),
    ActionType.EDIT: ActionTypeData(
        ("edit",),
        True,
        "Edit one or more tasks using an editor.\n"
        "Only some fields can be edited (although all show in the JSON). "
        "The editable fields are:\n"
        "- Summary\n"
        "- annotations\n"
        "- tags\n"
        "\n"
        "The rest will be ignored.\n",
    ),
    ActionType.EXPORT: ActionTypeData(
        ("export",),
        True,
        "Print the tasks as JSON format.\n"
        "This is useful for scripting access to Bee.\n"
        "Both <filters> and <arguments> are treated as filter\n",
    ),
    ActionType.HELP: ActionTypeData(
        ("help",),
        False,
        "Show this help message.\n"
        "Both the <filter> and the <arguments> are ignored.\n",
    ),
    ActionType.INFO: ActionTypeData(
        ("info",),
        True,
        "Show information about tasks matched by <filters>.\n"
        "This includes their modification history, their dependencies, due dates, etc.\n"
        "<arguments> are treated as <filters> for this action.\n",
    ),
    ActionType.LIST: ActionTypeData(
        ("list",),
        True,
        "Show a list of tasks matched by <filter>\n"
        "<arguments> are treated as filters.\n",
    ),
    ActionType.MODIFY: ActionTypeData(
        ("modify", "mod"),
        False,
        "Modify a task\n"
        "<arguments> are used to define the fields that will be modified for this task.\n"
        "By default, it will be its summary.\n",
    ),
    ActionType.START: ActionTypeData(
        ("start",),
        True,
        "Changes the status of a task to 'ACTIVE'. This only affects tasks with "
        "'PENDING' status. The rest is ignored.\n"
        "<arguments> are ignored.\n",
    ),
    ActionType.STOP: ActionTypeData(
        ("stop",),
        True,
        "Removes the 'ACTIVE' status of a task back to 'PENDING'. If a task was not "
        "'ACTIVE', it has no effect.\n"
        "<arguments> are ignored.\n",
    ),
    ActionType.UNDO: ActionTypeData(
        ("undo",),
        False,
        "Undo the last operation\n"
        "Both <filter> and <arguments> will be ignored.\n",
    ),
}


def action_types() -> dict[ActionType, ActionTypeData]:
    """Return the data of every action, in declaration order."""
    return {action: _ACTIONS[action] for action in ActionType}


def action_type_from(name: str) -> ActionType:
    """Return the action spelled *name* on the command line."""
    for action, data in _ACTIONS.items():
        if name in data.parsed_string:
            return action
    raise ValueError(f"Invalid string '{name}' for ActionType")


def command_descriptions() -> dict[str, str]:
    """Map each action's display name to its documentation."""
    return {str(action): data.documentation_string for action, data in action_types().items()}


def help_descriptions() -> dict[str, str]:
    """Return the action descriptions together with the general help header."""
    descriptions = command_descriptions()
    descriptions[_HEADER_KEY] = _HELP_HEADER
    return descriptions


def command_aliases() -> dict[str, bool]:
    """Map every command-line spelling to whether its arguments act as filters."""
    return {
        alias: data.use_arguments_as_filter
        for data in action_types().values()
        for alias in data.parsed_string
    }