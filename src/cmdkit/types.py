"""Shared option and result types for running commands."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable, Mapping
from dataclasses import dataclass, fields
from os import PathLike
from typing import Any, Protocol

from cmdkit.commands import Command

type LogFunction = Callable[[str], Any]
type LineCallback = Callable[[str], Any]
type Capture = bool | LineCallback
type ShowResult = bool | Callable[[RunResult], bool]
type FolderPath = str | PathLike[str]


@dataclass(frozen=True)
class RunResult:
    """Outcome of running a command.

    A process that could not be started only carries ``error``. A process that ran
    to completion carries ``exit_code``, ``process_id`` and the captured text of every
    stream whose capture was enabled.
    """

    exit_code: int | None = None
    stdout: str | None = None
    stderr: str | None = None
    error: BaseException | None = None
    process_id: int | None = None


def create_run_result(exit_code: int = 0, stdout: str = "", stderr: str = "") -> RunResult:
    return RunResult(exit_code=exit_code, stdout=stdout, stderr=stderr)


@dataclass(frozen=True)
class RunOptions:
    """Per-call options. A field left as None falls back to the enclosing scope or its default.

    Defaults: show_command True, show_environment_variables False, show_result only
    for a non-zero exit code, capture_output and capture_error True, throw_on_error
    False, execution folder is the current directory.
    """

    execution_folder_path: FolderPath | None = None
    log: LogFunction | None = None
    show_command: bool | None = None
    show_environment_variables: bool | None = None
    show_result: ShowResult | None = None
    capture_output: Capture | None = None
    capture_error: Capture | None = None
    capture_prefix: str | None = None
    runner: Runner | None = None
    environment_variables: Mapping[str, str] | None = None
    throw_on_error: bool | None = None

    def scope(self, overrides: RunOptions | None = None, **changes: Any) -> RunOptions:
        """Return new options where every field set on overrides (or in changes) wins."""

        merged = {item.name: getattr(self, item.name) for item in fields(self)}
        if overrides is not None:
            merged.update(_explicit_fields(overrides))
        merged.update({name: value for name, value in changes.items() if value is not None})
        return RunOptions(**merged)


def _explicit_fields(options: RunOptions) -> dict[str, Any]:
    return {item.name: getattr(options, item.name) for item in fields(options) if getattr(options, item.name) is not None}


def merge_options(*scopes: RunOptions | None) -> RunOptions:
    """Merge options from outermost to innermost scope."""

    merged = RunOptions()
    for options in scopes:
        if options is not None:
            merged = merged.scope(options)
    return merged


class Runner(Protocol):
    """Something that can run a command and report its result."""

    async def run(
        self,
        command: str | Command,
        args: str | Iterable[str] | None = None,
        options: RunOptions | None = None,
    ) -> RunResult: ...


type FakeResult = RunResult | Awaitable[RunResult] | Callable[[], RunResult | Awaitable[RunResult]]
type UnrecognizedCommandHandler = Callable[[Command, RunOptions | None], RunResult | Awaitable[RunResult]]
