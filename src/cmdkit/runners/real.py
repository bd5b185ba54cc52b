"""Runner that executes commands as real OS processes."""

from __future__ import annotations

import asyncio
import os
from collections.abc import Iterable, Mapping

from loguru import logger

from cmdkit.commands import Command, to_command
from cmdkit.lines import LineBuffer
from cmdkit.types import Capture, RunOptions, RunResult, merge_options
from cmdkit.utils import maybe_await

READ_CHUNK_SIZE = 8192


class RealRunner:
    """Spawn the command with asyncio and capture its output line by line."""

    def __init__(self, default_options: RunOptions | None = None) -> None:
        self.default_options = default_options or RunOptions()

    async def run(
        self,
        command: str | Command,
        args: str | Iterable[str] | None = None,
        options: RunOptions | None = None,
    ) -> RunResult:
        command = to_command(command, args)
        options = merge_options(self.default_options, options)
        cwd = options.execution_folder_path

        logger.debug("runner.spawn command={} cwd={}", command, cwd or os.getcwd())
        try:
            process = await asyncio.create_subprocess_exec(
                command.executable,
                *command.args,
                cwd=cwd,
                env=build_environment(options.environment_variables),
                stdout=_stream_target(options.capture_output),
                stderr=_stream_target(options.capture_error),
            )
        except OSError as exc:
            logger.warning("runner.spawn.error command={} error={}", command, exc)
            return await _error_result(exc, options)

        readers = [
            asyncio.ensure_future(capture_stream(process.stdout, options.capture_output, options.capture_prefix)),
            asyncio.ensure_future(capture_stream(process.stderr, options.capture_error, options.capture_prefix)),
        ]
        try:
            stdout, stderr = await asyncio.gather(*readers)
            await process.wait()
        except OSError as exc:
            logger.warning("runner.stream.error command={} pid={} error={}", command, process.pid, exc)
            return await _error_result(exc, options, process_id=process.pid)
        finally:
            await _reap(process, readers)

        logger.debug("runner.exit command={} pid={} exit_code={}", command, process.pid, process.returncode)
        return RunResult(
            exit_code=process.returncode,
            stdout=stdout,
            stderr=stderr,
            process_id=process.pid,
        )


def build_environment(overrides: Mapping[str, str] | None) -> dict[str, str] | None:
    """Overlay overrides on the parent environment. None means inherit it as is."""

    if not overrides:
        return None
    env = dict(os.environ)
    env.update(overrides)
    return env


def _stream_target(capture: Capture | None) -> int | None:
    # An uncaptured stream is inherited from the parent.
    return None if capture is False else asyncio.subprocess.PIPE


async def capture_stream(
    stream: asyncio.StreamReader | None,
    capture: Capture | None,
    prefix: str | None = None,
) -> str | None:
    """Read a process stream to its end, delivering complete lines as they arrive.

    Returns the captured text, or None when the stream is not captured.
    """

    if stream is None or capture is False:
        return None

    buffer = LineBuffer()
    captured: list[str] = []

    async def emit(line: str) -> None:
        captured.append(line)
        if callable(capture):
            await maybe_await(capture(f"[{prefix}] {line}" if prefix else line))

    try:
        while chunk := await stream.read(READ_CHUNK_SIZE):
            for line in buffer.append(chunk):
                await emit(line)
    except OSError:
        remainder = buffer.flush()
        if remainder is not None:
            await emit(remainder)
        raise

    remainder = buffer.flush()
    if remainder is not None:
        await emit(remainder)
    return "".join(captured)


async def _reap(process: asyncio.subprocess.Process, readers: list[asyncio.Future[str | None]]) -> None:
    """Cancel unfinished readers and make sure the child has exited and been waited on."""

    for reader in readers:
        if not reader.done():
            reader.cancel()
    await asyncio.gather(*readers, return_exceptions=True)
    if process.returncode is None:
        try:
            process.kill()
        except ProcessLookupError:
            pass  # Process already terminated
        await process.wait()


async def _error_result(error: OSError, options: RunOptions, process_id: int | None = None) -> RunResult:
    if callable(options.capture_error):
        await maybe_await(options.capture_error(str(error)))
    return RunResult(error=error, process_id=process_id)
