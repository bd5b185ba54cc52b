"""cmdkit - parse shell-style command lines and run them."""

from .commands import (
    Command,
    CommandToken,
    command_to_string,
    create_command,
    get_args_array,
    parse_command,
    parse_command_token,
    parse_command_tokens,
    parse_commands,
    to_command,
)
from .errors import CmdkitError, CommandFailedError, ConfigurationError, UnrecognizedCommandError
from .lines import LineBuffer
from .quoting import ensure_quoted, quote_if_needed, should_quote
from .run import run, run_sync
from .runners import FakeCommand, FakeRunner, RealRunner, Runner
from .types import RunOptions, RunResult, create_run_result, merge_options
from .utils import resolve

__version__ = "0.1.0"

__all__ = [
    "CmdkitError",
    "Command",
    "CommandFailedError",
    "CommandToken",
    "ConfigurationError",
    "FakeCommand",
    "FakeRunner",
    "LineBuffer",
    "RealRunner",
    "RunOptions",
    "RunResult",
    "Runner",
    "UnrecognizedCommandError",
    "command_to_string",
    "create_command",
    "create_run_result",
    "ensure_quoted",
    "get_args_array",
    "merge_options",
    "parse_command",
    "parse_command_token",
    "parse_command_tokens",
    "parse_commands",
    "quote_if_needed",
    "resolve",
    "run",
    "run_sync",
    "should_quote",
    "to_command",
]
