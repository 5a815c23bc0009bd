"""Port for running external processes - driven/secondary port."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, slots=True)
class ProcessResult:
    """Outcome of an external process."""

    exit_code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def succeeded(self) -> bool:
        """Check if the process exited with status zero."""
        return self.exit_code == 0


class ProcessRunner(Protocol):
    """Port for executing external commands with captured output."""

    def exists(self, command: str) -> bool:
        """Check whether ``command`` can be found on this machine."""
        ...

    def run(self, args: Sequence[str]) -> ProcessResult:
        """
        Run a command to completion.

        Raises:
            CommandError: If the process cannot be started.
        """
        ...
