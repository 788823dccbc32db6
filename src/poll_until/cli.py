"""CLI entrypoint for poll-until."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from dotenv import load_dotenv

from poll_until.command import Command, SpawnError
from poll_until.config import ConfigError, load_config, load_poll_definition
from poll_until.interval import Interval, IntervalError
from poll_until.poll_loop import run_on_finish, run_poll_loop

# Load .env file on CLI startup
load_dotenv()

LOG_HANDLER_NAME = "poll-until"


def setup_logging(level: str = "WARNING", verbose: bool = False) -> None:
    """Setup logging configuration."""
    log_level = logging.INFO if verbose else logging.getLevelName(level)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.set_name(LOG_HANDLER_NAME)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter(
        '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if handler.get_name() == LOG_HANDLER_NAME:
            root_logger.removeHandler(handler)
    root_logger.setLevel(log_level)
    root_logger.addHandler(console_handler)


@click.command()
@click.version_option(package_name="poll-until")
@click.argument("command", required=False)
@click.option(
    "--interval",
    default=None,
    help="Delay between attempts, e.g. 5s, 500ms, 1m 30s. 0s retries immediately. [default: 5s]",
)
@click.option(
    "-e", "--equals",
    default=None,
    help="Output the command must print (one trailing newline is ignored). Required.",
)
@click.option(
    "-o", "--on-finish",
    default=None,
    help="Shell command to run once the output matches.",
)
@click.option(
    "--shell",
    default=None,
    help="Shell used to run commands (invoked as SHELL -c COMMAND). [default: sh]",
)
@click.option(
    "-c", "--config",
    "config_file",
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML or JSON poll definition. Command-line options take precedence.",
)
@click.option("-v", "--verbose", is_flag=True, help="Log every attempt.")
def cli(
    command: Optional[str],
    interval: Optional[str],
    equals: Optional[str],
    on_finish: Optional[str],
    shell: Optional[str],
    config_file: Optional[Path],
    verbose: bool,
):
    """Run COMMAND repeatedly until its output equals the expected value."""
    try:
        config = load_config()
        definition = load_poll_definition(config_file) if config_file else {}
    except ConfigError as e:
        click.echo(f"Configuration error:\n{e}", err=True)
        raise SystemExit(1)

    setup_logging(level=config.log_level, verbose=verbose)

    command = command if command is not None else definition.get("command")
    equals = equals if equals is not None else definition.get("equals")
    on_finish = on_finish if on_finish is not None else definition.get("on_finish")
    shell = shell if shell is not None else definition.get("shell", config.shell)
    interval_text = interval if interval is not None else definition.get("interval", config.interval)

    if command is None:
        raise click.UsageError("Missing argument 'COMMAND'.")
    if equals is None:
        raise click.UsageError("Missing option '-e' / '--equals'.")
    if not shell.strip():
        raise click.BadParameter("Shell must not be empty", param_hint="'--shell'")

    try:
        poll_interval = Interval.parse(interval_text)
    except IntervalError as e:
        raise click.BadParameter(str(e), param_hint="'--interval'")

    finish_command = Command(on_finish, shell=shell) if on_finish is not None else None

    try:
        run_poll_loop(Command(command, shell=shell), equals, poll_interval)
        run_on_finish(finish_command)
    except SpawnError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)


def main():
    cli()


if __name__ == "__main__":
    main()
