"""Application-level exception types for cmdkit."""

from __future__ import annotations

from os import PathLike
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cmdkit.commands import Command
    from cmdkit.types import RunResult


class CmdkitError(Exception):
    """Base exception for cmdkit."""


class ConfigurationError(CmdkitError):
    """Raised when settings or command line input cannot be used."""


class UnrecognizedCommandError(CmdkitError):
    """Raised when a FakeRunner has no registration for the command it was asked to run."""

    def __init__(self, command: Command, execution_folder_path: str | PathLike[str]) -> None:
        self.command = command
        self.execution_folder_path = execution_folder_path
        super().__init__(
            f'No FakeRunner result has been registered for the command "{command}" at "{execution_folder_path}".'
        )


class CommandFailedError(CmdkitError):
    """Raised by run() when throw_on_error is set and the process exits non-zero."""

    def __init__(self, command: Command, result: RunResult) -> None:
        self.command = command
        self.result = result
        super().__init__(f"{command.executable} {' '.join(command.args)} {result.stderr or ''}")
