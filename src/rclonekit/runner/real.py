"""Subprocess-based process runner."""

import logging
import shlex
import subprocess

from rclonekit.runner.abc import OutputSink, ProcessRunner
from rclonekit.types import ExecutionResult

logger = logging.getLogger(__name__)


class RealProcessRunner(ProcessRunner):
    """Production implementation using subprocess.Popen.

    Implementation details:
    - The command line is split with shlex, so quoted arguments may contain
      spaces. No shell is involved.
    - stderr is merged into stdout; rclone writes its log lines to stderr.
    - Output is read line by line so it can be echoed while still being
      captured in full.
    """

    def run(self, command_line: str, *, echo: OutputSink | None = None) -> ExecutionResult:
        """Run the command line and wait for it to exit."""
        args = shlex.split(command_line)
        logger.debug("Executing: %s", args)

        if echo is not None:
            echo(command_line + "\n")

        chunks: list[str] = []
        with subprocess.Popen(
            args,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            encoding="utf-8",
            errors="replace",
            bufsize=1,  # Line buffered
        ) as process:
            if process.stdout is not None:
                for line in process.stdout:
                    chunks.append(line)
                    if echo is not None:
                        echo(line)
            status = process.wait()

        logger.debug("Exit status %d for %s", status, args[0] if args else command_line)
        return ExecutionResult(status=status, output="".join(chunks), echoed=echo is not None)
