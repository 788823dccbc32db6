"""Shell command execution."""

import logging
import subprocess
from dataclasses import dataclass

from poll_until.constants import DEFAULT_SHELL

logger = logging.getLogger(__name__)


class SpawnError(Exception):
    """Raised when a child process cannot be started."""
    pass


@dataclass(frozen=True)
class CommandOutput:
    returncode: int
    stdout: bytes
    stderr: bytes

    @property
    def success(self) -> bool:
        return self.returncode == 0


@dataclass(frozen=True)
class Command:
    """A command string run through `<shell> -c`."""

    command: str
    shell: str = DEFAULT_SHELL

    def argv(self) -> list[str]:
        return [self.shell, "-c", self.command]

    def run(self) -> CommandOutput:
        """
        Run the command to completion, capturing stdout and stderr.

        Raises:
            SpawnError: If the shell could not be started.
        """
        try:
            result = subprocess.run(self.argv(), capture_output=True)
        except OSError as e:
            raise SpawnError(f"Failed to spawn {self.shell!r} for command {self.command!r}: {e}") from e

        return CommandOutput(
            returncode=result.returncode,
            stdout=result.stdout,
            stderr=result.stderr,
        )

    def spawn(self) -> int:
        """
        Run the command to completion with inherited stdout/stderr.

        Returns the exit code.

        Raises:
            SpawnError: If the shell could not be started.
        """
        try:
            process = subprocess.Popen(self.argv())
        except OSError as e:
            raise SpawnError(f"Failed to spawn {self.shell!r} for command {self.command!r}: {e}") from e

        logger.debug("spawned: pid=%s command=%r", process.pid, self.command)
        return process.wait()
