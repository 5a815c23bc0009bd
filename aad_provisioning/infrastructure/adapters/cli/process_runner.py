"""Process runner backed by ``subprocess``."""

from __future__ import annotations

import logging
import shutil
import subprocess
from collections.abc import Sequence

from ....application.exceptions import CommandError
from ....application.ports import ProcessResult

logger = logging.getLogger(__name__)


class SubprocessRunner:
    """
    Runs external commands and captures their output.

    Implements the ProcessRunner port. The executable is resolved through
    ``PATH`` first so that wrappers such as ``az.cmd`` on Windows are found.
    """

    def __init__(self, timeout: float | None = None) -> None:
        """Initialize with an optional per-command timeout in seconds."""
        self._timeout = timeout

    def exists(self, command: str) -> bool:
        return shutil.which(command) is not None

    def run(self, args: Sequence[str]) -> ProcessResult:
        if not args:
            msg = "No command given"
            raise CommandError(msg)

        executable = shutil.which(args[0]) or args[0]
        try:
            completed = subprocess.run(  # noqa: S603
                [executable, *args[1:]],
                capture_output=True,
                text=True,
                timeout=self._timeout,
                check=False,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            msg = f"Failed to run {args[0]}: {e}"
            raise CommandError(msg) from e

        logger.debug("%s exited with %d", args[0], completed.returncode)
        return ProcessResult(
            exit_code=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )
