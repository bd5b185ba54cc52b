"""Public entry point for running commands with logging around the call."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Iterable

from loguru import logger

from cmdkit.commands import Command, command_to_string, to_command
from cmdkit.errors import CommandFailedError
from cmdkit.runners.real import RealRunner
from cmdkit.types import Capture, RunOptions, RunResult, Runner, ShowResult
from cmdkit.utils import maybe_await


async def run(
    command: str | Command,
    args: str | Iterable[str] | None = None,
    options: RunOptions | None = None,
) -> RunResult:
    """Run a command through the configured runner.

    Args:
        command: The executable to run, or a Command.
        args: Extra arguments appended to the command.
        options: Per-call options. The runner defaults to a new RealRunner.

    Returns:
        The runner's RunResult. A non-zero exit code is only raised as
        CommandFailedError when ``throw_on_error`` is set.
    """
    command = to_command(command, args)
    options = options or RunOptions()
    runner: Runner = options.runner or RealRunner()

    with logger.contextualize(command=command_to_string(command)):
        logger.debug("run.start cwd={}", options.execution_folder_path)
        await log_command(command, options)
        await log_environment_variables(options)
        result = await runner.run(command, options=options)
        await log_result(result, options)
        logger.debug("run.finish exit_code={} error={}", result.exit_code, result.error)

    if options.throw_on_error and result.exit_code:
        raise CommandFailedError(command, result)
    return result


def run_sync(
    command: str | Command,
    args: str | Iterable[str] | None = None,
    options: RunOptions | None = None,
) -> RunResult:
    """Blocking wrapper around run() for callers without an event loop."""
    return asyncio.run(run(command, args, options))


def get_show_result_function(show_result: ShowResult | None) -> Callable[[RunResult], bool]:
    if show_result is None:
        return lambda result: result.exit_code != 0
    if isinstance(show_result, bool):
        return lambda _result: show_result
    return show_result


async def log_command(command: Command, options: RunOptions) -> None:
    if options.log is None or options.show_command is False:
        return
    text = command_to_string(command)
    if options.execution_folder_path:
        text = f"{options.execution_folder_path}: {text}"
    await _write(options, text)


async def log_environment_variables(options: RunOptions) -> None:
    if options.log is None or not options.show_environment_variables or not options.environment_variables:
        return
    await _write(options, "Environment Variables:")
    for name, value in options.environment_variables.items():
        await _write(options, f' "{name}": "{value}"')


async def log_result(result: RunResult, options: RunOptions) -> None:
    if options.log is None:
        return
    try:
        show = get_show_result_function(options.show_result)(result)
    except Exception:
        logger.exception("run.show_result.error exit_code={} error={}", result.exit_code, result.error)
        return
    if not show:
        return

    await _write(options, f"Exit Code: {result.exit_code}")
    if result.stdout and _captured_in_result(options.capture_output):
        await _write(options, "Output:")
        await _write(options, result.stdout)
    if result.stderr and _captured_in_result(options.capture_error):
        await _write(options, "Error:")
        await _write(options, result.stderr)
    if result.error is not None and _captured_in_result(options.capture_error):
        await _write(options, "Error:")
        await _write(options, f"{type(result.error).__name__}: {result.error}")


def _captured_in_result(capture: Capture | None) -> bool:
    # Only text accumulated solely into the result is logged.
    return capture is None or capture is True


async def _write(options: RunOptions, text: str) -> None:
    if options.log is None:
        return
    try:
        await maybe_await(options.log(text))
    except Exception:
        logger.exception("run.log.error text={}", text)
