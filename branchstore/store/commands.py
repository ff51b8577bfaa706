"""
Store commands.

A command is a named store operation plus its arguments. Lists of commands
initialize a fresh store, and script files are parsed into commands for the
command-line runner.
"""

import json
import shlex
from dataclasses import dataclass
from typing import Any, Iterator, Literal


CommandName = Literal[
    "add",
    "remove",
    "commit",
    "checkout",
    "head",
    "log",
    "get",
    "status",
    "branch-create",
    "branch-checkout",
    "branch-remove",
    "branch-list",
]

# Number of arguments each command takes
COMMAND_ARITY: dict[str, int] = {
    "add": 2,
    "remove": 1,
    "commit": 1,
    "checkout": 1,
    "head": 0,
    "log": 0,
    "get": 1,
    "status": 0,
    "branch-create": 1,
    "branch-checkout": 1,
    "branch-remove": 1,
    "branch-list": 0,
}

BRANCH_ACTIONS = ("create", "checkout", "remove", "list")


class CommandError(ValueError):
    """A command is unknown, malformed, or has the wrong arguments."""


@dataclass(frozen=True)
class Command:
    """
    A store operation to run.
    
    Attributes:
        name: Operation name (see CommandName).
        args: Positional arguments for the operation.
    """
    
    name: CommandName
    args: tuple[Any, ...] = ()
    
    def __post_init__(self) -> None:
        object.__setattr__(self, "args", tuple(self.args))
        if self.name not in COMMAND_ARITY:
            raise CommandError(f"Unknown command: {self.name}")
        expected = COMMAND_ARITY[self.name]
        if len(self.args) != expected:
            raise CommandError(
                f"Command {self.name} takes {expected} argument(s), got {len(self.args)}"
            )
    
    def __str__(self) -> str:
        return " ".join([self.name, *(repr(arg) for arg in self.args)])


def parse_value(text: str) -> Any:
    """Decode a value as JSON, falling back to the literal string."""
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


def parse_command(line: str) -> Command:
    """
    Parse one script line into a command.
    
    Supported forms:
        add NAME VALUE
        remove NAME
        commit MESSAGE (unquoted words are joined)
        checkout COMMIT_ID
        get NAME
        head | log | status
        branch create|checkout|remove NAME
        branch list
    
    Args:
        line: The script line.
    
    Returns:
        The parsed command.
    
    Raises:
        CommandError: If the line cannot be parsed.
    """
    try:
        tokens = shlex.split(line)
    except ValueError as e:
        raise CommandError(f"Cannot parse line {line!r}: {e}") from e
    
    if not tokens:
        raise CommandError("Empty command")
    
    name, *args = tokens
    
    if name == "branch":
        if not args or args[0] not in BRANCH_ACTIONS:
            raise CommandError(
                f"branch expects one of {', '.join(BRANCH_ACTIONS)}: {line!r}"
            )
        action, *args = args
        return Command(f"branch-{action}", tuple(args))  # type: ignore[arg-type]
    
    if name == "add" and len(args) == 2:
        return Command("add", (args[0], parse_value(args[1])))
    
    if name == "commit" and args:
        return Command("commit", (" ".join(args),))
    
    return Command(name, tuple(args))  # type: ignore[arg-type]


def parse_script(text: str) -> Iterator[Command]:
    """
    Parse a script into commands.
    
    Blank lines and lines starting with '#' are skipped.
    """
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        yield parse_command(stripped)
