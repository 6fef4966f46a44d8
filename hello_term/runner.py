"""
External command execution.

Collectors never call ``subprocess`` directly; they go through a ``CommandRunner``
so their parsing can be exercised against canned output.
"""

import logging
import subprocess
from dataclasses import dataclass
from typing import List

from .errors import CommandError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandOutput:
    """Captured result of one command"""

    stdout: str
    stderr: str = ""
    returncode: int = 0

    def lines(self) -> List[str]:
        return self.stdout.splitlines()


class CommandRunner:
    """Runs commands synchronously and captures their output"""

    def run(self, args: List[str], check: bool = True) -> CommandOutput:
        """
        Run a command and capture its output.

        Args:
            args: Command to run as a list of strings
            check: Treat a non-zero exit status as a failure

        Returns:
            The captured stdout, stderr and exit status
        """
        command = " ".join(args)
        logger.debug("Running %s", command)
        try:
            result = subprocess.run(args, capture_output=True, text=True, encoding="utf-8",
                                    errors="replace", check=False)
        except OSError as e:
            raise CommandError(f"Failed to run command {command}: {e}") from e

        logger.debug("%s exited with status %d", command, result.returncode)
        if check and result.returncode != 0:
            detail = result.stderr.strip() or f"exit status {result.returncode}"
            raise CommandError(f"Command {command} failed: {detail}")

        return CommandOutput(result.stdout, result.stderr, result.returncode)
