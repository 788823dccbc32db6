"""Poll loop: run a command until its output matches, then finish."""

import logging
import time
from dataclasses import dataclass
from typing import Optional

from poll_until.command import Command, CommandOutput
from poll_until.interval import Interval

logger = logging.getLogger(__name__)


@dataclass
class PollResult:
    attempts: int
    output: CommandOutput


def trim_newline(data: bytes) -> bytes:
    """Strip a single trailing newline, if present."""
    if data.endswith(b"\n"):
        return data[:-1]
    return data


def run_poll_loop(command: Command, equals: str, interval: Interval) -> PollResult:
    """
    Run `command` until it exits 0 with stdout equal to `equals`.

    Logic:
    1. Run the command (SpawnError propagates, no retry)
    2. On exit 0, compare stdout minus one trailing newline to `equals`
    3. Match -> return
    4. Otherwise wait for the interval (or not at all) and go to 1

    Non-zero exits and mismatched output are handled the same way.
    There is no attempt limit and no timeout.
    """
    target = equals.encode()
    attempts = 0

    logger.info("run: %r (shell=%s, interval=%s)", command.command, command.shell, interval)

    while True:
        output = command.run()
        attempts += 1

        if output.success:
            logger.info("status: success")
            trimmed = trim_newline(output.stdout)
            if trimmed == target:
                logger.info("matched after %d attempt(s)", attempts)
                return PollResult(attempts=attempts, output=output)
            logger.info("output: %r not equals with %r", trimmed, target)

        logger.info("exit status: %d", output.returncode)
        if output.stderr:
            logger.debug("stderr: %r", output.stderr)

        if interval.immediate:
            continue

        logger.info("waiting interval: %s", interval)
        time.sleep(interval.delay)


def run_on_finish(command: Optional[Command]) -> Optional[int]:
    """
    Run the finishing command, if any, and wait for it.

    The exit code is returned for reporting only.
    """
    if command is None:
        return None

    logger.info("on_finish: %r", command.command)
    returncode = command.spawn()
    logger.info("on_finish exited with %d", returncode)
    return returncode
