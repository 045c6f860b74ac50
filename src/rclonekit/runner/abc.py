"""Process execution abstraction.

This module provides abstraction over running the rclone executable,
enabling dependency injection for testing without mock.patch.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable

from rclonekit.types import ExecutionResult

# Receives text as it is produced. Each call carries one chunk, usually a
# single line including its newline.
OutputSink = Callable[[str], None]


class ProcessRunner(ABC):
    """Abstract interface for executing a compiled command line."""

    @abstractmethod
    def run(self, command_line: str, *, echo: OutputSink | None = None) -> ExecutionResult:
        """Execute a command line and capture its combined output.

        Blocks until the process exits. There is no timeout: a process that
        never exits blocks the caller indefinitely.

        Args:
            command_line: Complete command line, starting with the executable
            echo: Sink that receives the command line and each output line as
                it arrives. None captures silently.

        Returns:
            ExecutionResult with the exit status and full output text

        Raises:
            FileNotFoundError: If the executable does not exist
        """
        ...
