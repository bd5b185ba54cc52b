"""Runtime logging helpers.

Records emitted while ``cmdkit.run`` is executing a command carry that command
in ``extra["command"]``. Both profiles render it as a ``[command]`` tag in front
of the message.
"""

from __future__ import annotations

import os
import sys
from logging import Handler
from typing import TYPE_CHECKING, Literal

from loguru import logger
from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from loguru import Record

LogProfile = Literal["default", "cli"]

_DEFAULT_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<6} | {name}:{function}:{line} | {extra[command_tag]}{message}"
)
_CLI_FORMAT = "{extra[command_tag]}{message}"
_CONFIGURED_PROFILE: LogProfile | None = None


def tag_command(record: Record) -> None:
    """Patcher that renders the bound command, if any, as a message prefix."""
    command = record["extra"].get("command")
    record["extra"]["command_tag"] = f"[{command}] " if command else ""


def _build_cli_handler() -> Handler:
    return RichHandler(
        console=Console(stderr=True),
        show_level=True,
        show_time=False,
        show_path=False,
        markup=False,
        rich_tracebacks=False,
    )


def configure_logging(*, profile: LogProfile = "default", level: str | None = None) -> None:
    """Configure process-level logging once per profile."""
    global _CONFIGURED_PROFILE
    if profile == _CONFIGURED_PROFILE:
        return

    level = (level or os.getenv("CMDKIT_LOG_LEVEL", "INFO")).upper()
    logger.remove()
    logger.configure(patcher=tag_command)
    sink = _build_cli_handler() if profile == "cli" else sys.stderr
    logger.add(
        sink,
        level=level,
        format=_CLI_FORMAT if profile == "cli" else _DEFAULT_FORMAT,
        backtrace=False,
        diagnose=False,
    )
    _CONFIGURED_PROFILE = profile
