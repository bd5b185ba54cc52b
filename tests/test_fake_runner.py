from __future__ import annotations

import os
from pathlib import Path

import pytest

from cmdkit.commands import Command
from cmdkit.errors import UnrecognizedCommandError
from cmdkit.runners import FakeRunner
from cmdkit.types import RunOptions, RunResult, create_run_result


class _RecordingRunner:
    def __init__(self, result: RunResult) -> None:
        self.result = result
        self.calls: list[tuple[Command, RunOptions | None]] = []

    async def run(self, command, args=None, options=None) -> RunResult:  # type: ignore[no-untyped-def]
        _ = args
        self.calls.append((command, options))
        return self.result


@pytest.mark.asyncio
async def test_unregistered_command_fails_with_command_and_folder(tmp_path: Path) -> None:
    runner = FakeRunner(_RecordingRunner(create_run_result()))
    with pytest.raises(UnrecognizedCommandError) as exc_info:
        await runner.run("git", ["status"], RunOptions(execution_folder_path=tmp_path))
    assert str(exc_info.value) == (
        f'No FakeRunner result has been registered for the command "git status" at "{tmp_path}".'
    )
    assert exc_info.value.command == Command("git", ("status",))


@pytest.mark.asyncio
async def test_unregistered_command_defaults_to_current_directory() -> None:
    runner = FakeRunner(_RecordingRunner(create_run_result()))
    with pytest.raises(UnrecognizedCommandError) as exc_info:
        await runner.run("git")
    assert exc_info.value.execution_folder_path == os.getcwd()


@pytest.mark.asyncio
async def test_registered_string_matches_args_array() -> None:
    runner = FakeRunner(_RecordingRunner(create_run_result()))
    registered = create_run_result(1, "a", "b")
    runner.set("git fetch --prune", registered)
    assert await runner.run("git", ["fetch", "--prune"]) == registered


@pytest.mark.asyncio
async def test_later_registration_wins() -> None:
    runner = FakeRunner(_RecordingRunner(create_run_result()))
    runner.set("npm test", create_run_result(1))
    runner.set(Command("npm", ("test",)), create_run_result(2))
    result = await runner.run(Command("npm", ("test",)))
    assert result.exit_code == 2
    assert len(runner.registered_commands) == 2


@pytest.mark.asyncio
async def test_registration_without_result_exits_zero() -> None:
    runner = FakeRunner(_RecordingRunner(create_run_result()))
    runner.set("make")
    assert await runner.run("make") == RunResult(exit_code=0)


@pytest.mark.asyncio
async def test_result_producers_are_invoked_and_awaited() -> None:
    runner = FakeRunner(_RecordingRunner(create_run_result()))
    calls = {"count": 0}

    def _sync_result() -> RunResult:
        calls["count"] += 1
        return create_run_result(0, "sync")

    async def _async_result() -> RunResult:
        return create_run_result(0, "async")

    runner.set("a", _sync_result)
    runner.set("b", _async_result)

    assert (await runner.run("a")).stdout == "sync"
    assert (await runner.run("a")).stdout == "sync"
    assert calls["count"] == 2
    assert (await runner.run("b")).stdout == "async"


@pytest.mark.asyncio
async def test_execution_folder_must_match_when_registered(tmp_path: Path) -> None:
    other = tmp_path / "other"
    runner = FakeRunner(_RecordingRunner(create_run_result()))
    runner.set("ls", create_run_result(0, "here"), execution_folder_path=tmp_path)

    result = await runner.run("ls", options=RunOptions(execution_folder_path=str(tmp_path)))
    assert result.stdout == "here"

    with pytest.raises(UnrecognizedCommandError):
        await runner.run("ls", options=RunOptions(execution_folder_path=other))


@pytest.mark.asyncio
async def test_registration_without_folder_matches_any_folder(tmp_path: Path) -> None:
    runner = FakeRunner(_RecordingRunner(create_run_result()))
    runner.set("ls", create_run_result(0, "anywhere"))
    result = await runner.run("ls", options=RunOptions(execution_folder_path=tmp_path))
    assert result.stdout == "anywhere"


@pytest.mark.asyncio
async def test_folder_specific_registration_shadowed_by_later_generic_one(tmp_path: Path) -> None:
    runner = FakeRunner(_RecordingRunner(create_run_result()))
    runner.set("ls", create_run_result(0, "specific"), execution_folder_path=tmp_path)
    runner.set("ls", create_run_result(0, "generic"))
    result = await runner.run("ls", options=RunOptions(execution_folder_path=tmp_path))
    assert result.stdout == "generic"


@pytest.mark.asyncio
async def test_on_unrecognized_command_replaces_default_handler() -> None:
    runner = FakeRunner(_RecordingRunner(create_run_result()))
    seen: list[str] = []

    def _handler(command: Command, options: RunOptions | None) -> RunResult:
        _ = options
        seen.append(str(command))
        return create_run_result(127)

    runner.on_unrecognized_command(_handler)
    result = await runner.run("missing", ["thing"])
    assert result.exit_code == 127
    assert seen == ["missing thing"]


@pytest.mark.asyncio
async def test_passthrough_delegates_to_inner_runner(tmp_path: Path) -> None:
    inner = _RecordingRunner(create_run_result(0, "from inner"))
    runner = FakeRunner(inner)
    runner.passthrough("git status", tmp_path)

    result = await runner.run("git", ["status"], RunOptions(execution_folder_path=tmp_path))
    assert result.stdout == "from inner"
    command, options = inner.calls[0]
    assert command == Command("git", ("status",))
    assert options is not None
    assert options.execution_folder_path == tmp_path


@pytest.mark.asyncio
async def test_passthrough_unrecognized_forwards_options() -> None:
    inner = _RecordingRunner(create_run_result(3))
    runner = FakeRunner(inner)
    runner.passthrough_unrecognized()
    options = RunOptions(show_command=False)

    result = await runner.run("anything", ["at", "all"], options)
    assert result.exit_code == 3
    assert inner.calls == [(Command("anything", ("at", "all")), options)]


def test_registering_empty_command_is_rejected() -> None:
    runner = FakeRunner(_RecordingRunner(create_run_result()))
    with pytest.raises(ValueError):
        runner.set("   ")
