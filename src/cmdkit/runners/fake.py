"""Deterministic runner for tests."""

from __future__ import annotations

import os
from collections.abc import Awaitable, Iterable
from dataclasses import dataclass

from loguru import logger

from cmdkit.commands import Command, command_to_string, parse_command, to_command
from cmdkit.errors import UnrecognizedCommandError
from cmdkit.runners.real import RealRunner
from cmdkit.types import (
    FakeResult,
    FolderPath,
    RunOptions,
    RunResult,
    Runner,
    UnrecognizedCommandHandler,
)
from cmdkit.utils import maybe_await, resolve


def get_execution_folder_path(options: RunOptions | None) -> str:
    if options is not None and options.execution_folder_path:
        return os.fspath(options.execution_folder_path)
    return os.getcwd()


@dataclass(frozen=True)
class FakeCommand:
    """A registered command and the result to hand back when it is run."""

    command: Command
    result: FakeResult | None = None
    execution_folder_path: FolderPath | None = None

    def matches(self, command_string: str, execution_folder_path: str) -> bool:
        if command_to_string(self.command) != command_string:
            return False
        return not self.execution_folder_path or os.fspath(self.execution_folder_path) == execution_folder_path


def _reject_unrecognized(command: Command, options: RunOptions | None) -> RunResult:
    raise UnrecognizedCommandError(command, get_execution_folder_path(options))


class FakeRunner:
    """Runner that answers from registered fake commands.

    When several registrations match a command, the most recent one wins.
    """

    def __init__(self, inner_runner: Runner | None = None) -> None:
        self._inner_runner: Runner = inner_runner or RealRunner()
        self._fake_commands: list[FakeCommand] = []
        self._unrecognized_command: UnrecognizedCommandHandler = _reject_unrecognized

    @property
    def registered_commands(self) -> tuple[FakeCommand, ...]:
        return tuple(self._fake_commands)

    def on_unrecognized_command(self, handler: UnrecognizedCommandHandler) -> None:
        """Set the handler used for commands that have no registration."""
        self._unrecognized_command = handler

    def passthrough_unrecognized(self) -> None:
        """Send every unrecognized command to the inner runner."""

        def _delegate(command: Command, options: RunOptions | None) -> Awaitable[RunResult]:
            return self._inner_runner.run(command, options=options)

        self.on_unrecognized_command(_delegate)

    def set(
        self,
        command: str | Command,
        result: FakeResult | None = None,
        *,
        execution_folder_path: FolderPath | None = None,
    ) -> FakeCommand:
        fake_command = FakeCommand(
            command=_registered_command(command),
            result=result,
            execution_folder_path=execution_folder_path,
        )
        self._fake_commands.append(fake_command)
        return fake_command

    def passthrough(self, command: str | Command, execution_folder_path: FolderPath | None = None) -> FakeCommand:
        """Register command so that running it goes to the inner runner."""

        registered = _registered_command(command)
        return self.set(
            registered,
            lambda: self._inner_runner.run(registered, options=RunOptions(execution_folder_path=execution_folder_path)),
            execution_folder_path=execution_folder_path,
        )

    async def run(
        self,
        command: str | Command,
        args: str | Iterable[str] | None = None,
        options: RunOptions | None = None,
    ) -> RunResult:
        command = to_command(command, args)
        command_string = command_to_string(command)
        execution_folder_path = get_execution_folder_path(options)

        fake_command = self._find(command_string, execution_folder_path)
        if fake_command is None:
            logger.debug("fake_runner.unrecognized command={} cwd={}", command_string, execution_folder_path)
            return await maybe_await(self._unrecognized_command(command, options))
        if fake_command.result is None:
            return RunResult(exit_code=0)
        return await maybe_await(resolve(fake_command.result))

    def _find(self, command_string: str, execution_folder_path: str) -> FakeCommand | None:
        for fake_command in reversed(self._fake_commands):
            if fake_command.matches(command_string, execution_folder_path):
                return fake_command
        return None


def _registered_command(command: str | Command) -> Command:
    if isinstance(command, Command):
        return command
    parsed = parse_command(command)
    if parsed is None:
        raise ValueError("cannot register an empty command")
    return parsed
