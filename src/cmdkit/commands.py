"""Command line tokenizing, assembly and formatting."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from cmdkit.quoting import quote_if_needed

QUOTE_CHARS = ("'", '"')
ESCAPE_CHAR = "\\"
COMMAND_SEPARATORS = frozenset({"&", "&&"})


@dataclass(frozen=True)
class CommandToken:
    """One lexical unit of a command line and its span in the source text."""

    text: str
    start_index: int
    end_index: int
    is_whitespace: bool = False


@dataclass(frozen=True)
class Command:
    """An executable and the arguments to invoke it with."""

    executable: str
    args: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "args", tuple(self.args))

    def __str__(self) -> str:
        return command_to_string(self)


def command_to_string(command: Command) -> str:
    """Render a command as a single line, quoting parts that contain whitespace."""

    parts = [quote_if_needed(command.executable)]
    parts.extend(quote_if_needed(arg) for arg in command.args if arg)
    return " ".join(parts)


def parse_command_token(text: str, start_index: int) -> CommandToken | None:
    """Return the token that begins at start_index, or None when out of bounds."""

    if not 0 <= start_index < len(text):
        return None

    first = text[start_index]
    if first.isspace():
        end_index = _scan_whitespace(text, start_index)
    elif first in QUOTE_CHARS:
        end_index = _scan_quoted(text, start_index, first)
    else:
        end_index = _scan_word(text, start_index)
    return CommandToken(
        text=text[start_index:end_index],
        start_index=start_index,
        end_index=end_index,
        is_whitespace=first.isspace(),
    )


def _scan_whitespace(text: str, index: int) -> int:
    while index < len(text) and text[index].isspace():
        index += 1
    return index


def _scan_word(text: str, index: int) -> int:
    while index < len(text) and not text[index].isspace():
        index += 1
    return index


def _scan_quoted(text: str, index: int, quote: str) -> int:
    # index points at the opening quote; an unterminated quote runs to the end.
    index += 1
    escaped = False
    while index < len(text):
        current = text[index]
        index += 1
        if escaped:
            escaped = False
        elif current == ESCAPE_CHAR:
            escaped = True
        elif current == quote:
            break
    return index


def parse_command_tokens(text: str, start_index: int = 0) -> list[CommandToken]:
    """Split text into non-whitespace tokens."""

    tokens: list[CommandToken] = []
    token = parse_command_token(text, start_index)
    while token is not None:
        if not token.is_whitespace:
            tokens.append(token)
        token = parse_command_token(text, token.end_index)
    return tokens


def create_command(tokens: Sequence[CommandToken] | None) -> Command | None:
    if not tokens:
        return None
    return Command(tokens[0].text, tuple(token.text for token in tokens[1:]))


def parse_command(text: str, start_index: int = 0) -> Command | None:
    """Parse one command. Control operators are kept as ordinary arguments."""

    return create_command(parse_command_tokens(text, start_index))


def parse_commands(text: str, start_index: int = 0) -> list[Command]:
    """Parse a compound command line, splitting on `&` and `&&`.

    `||` is not a separator and stays in the argument list of the current command.
    """

    commands: list[Command] = []
    current: list[CommandToken] = []
    for token in parse_command_tokens(text, start_index):
        if token.text not in COMMAND_SEPARATORS:
            current.append(token)
            continue
        command = create_command(current)
        if command is not None:
            commands.append(command)
        current = []

    command = create_command(current)
    if command is not None:
        commands.append(command)
    return commands


def get_args_array(args: str | Iterable[str] | None) -> list[str]:
    """Normalize an args value that may be a space-separated string."""

    if args is None:
        return []
    if isinstance(args, str):
        return args.split(" ")
    return list(args)


def to_command(command: str | Command, args: str | Iterable[str] | None = None) -> Command:
    """Build the Command to run from an executable or Command plus extra args.

    A plain string is taken as the executable name and is not tokenized.
    """

    if isinstance(command, str):
        command = Command(command)
    extra = get_args_array(args)
    if not extra:
        return command
    return Command(command.executable, (*command.args, *extra))
