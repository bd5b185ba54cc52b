"""cmdkit command line interface."""

import asyncio
import json
from pathlib import Path
from typing import Optional

import typer

from cmdkit.commands import Command, parse_command, parse_commands
from cmdkit.config import get_settings
from cmdkit.errors import ConfigurationError
from cmdkit.logging_utils import configure_logging
from cmdkit.quoting import DEFAULT_QUOTE, ensure_quoted
from cmdkit.run import run
from cmdkit.types import RunOptions

app = typer.Typer(
    name="cmdkit",
    help="Parse shell-style command lines and run them.",
    add_completion=False,
)


def parse_env_assignments(assignments: list[str]) -> dict[str, str]:
    """Turn NAME=VALUE strings into an environment overlay."""
    environment: dict[str, str] = {}
    for assignment in assignments:
        name, sep, value = assignment.partition("=")
        if not sep or not name:
            raise ConfigurationError(f"expected NAME=VALUE, got {assignment!r}")
        environment[name] = value
    return environment


@app.command("parse")
def parse(
    line: str = typer.Argument(..., help="Command line to parse"),
    compound: bool = typer.Option(True, "--compound/--single", help="Split on `&` and `&&`"),
) -> None:
    """Print each parsed command as JSON."""
    if compound:
        commands = parse_commands(line)
    else:
        single = parse_command(line)
        commands = [single] if single is not None else []

    if not commands:
        typer.echo("no command found", err=True)
        raise typer.Exit(1)
    for command in commands:
        typer.echo(json.dumps({"executable": command.executable, "args": list(command.args)}))


@app.command("quote")
def quote(
    value: str = typer.Argument(..., help="Value to quote"),
    quote_char: str = typer.Option(DEFAULT_QUOTE, "--quote-char", help="Quote character; empty to leave as is"),
) -> None:
    """Print the value wrapped in quotes."""
    typer.echo(ensure_quoted(value, quote_char))


@app.command("run")
def run_line(
    line: str = typer.Argument(..., help="Command line to run; `&` and `&&` separate commands"),
    cwd: Optional[Path] = typer.Option(None, "--cwd", help="Working directory for every command"),
    env: list[str] = typer.Option([], "--env", "-e", help="Extra environment variable as NAME=VALUE"),
    show_result: Optional[bool] = typer.Option(
        None, "--show-result/--hide-result", help="Log output even for successful commands"
    ),
) -> None:
    """Run each command in order, stopping at the first one that fails."""
    settings = get_settings()
    configure_logging(profile="cli", level=settings.log_level)

    try:
        environment = parse_env_assignments(env)
    except ConfigurationError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(2) from exc

    commands = parse_commands(line)
    if not commands:
        typer.echo("error: no command to run", err=True)
        raise typer.Exit(2)

    options = settings.to_run_options(
        log=typer.echo,
        execution_folder_path=cwd,
        environment_variables=environment or None,
        show_result=show_result,
    )
    raise typer.Exit(asyncio.run(_run_all(commands, options)))


async def _run_all(commands: list[Command], options: RunOptions) -> int:
    for command in commands:
        result = await run(command, options=options)
        if result.error is not None:
            return 1
        if result.exit_code:
            return result.exit_code
    return 0
