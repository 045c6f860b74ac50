"""Client entry point for rclone calls.

Every call runs the same pipeline, strictly left to right:

    compile_command -> ProcessRunner.run -> classify -> parse_output

No state is kept between calls, so one Rclone instance can be shared across
threads. Output echoed by concurrent verbose calls interleaves in undefined
order.
"""

import logging
import shlex
from collections.abc import Iterable

from rclonekit.classify import Disposition, classify, normalize_warn
from rclonekit.command import DEFAULT_TOOL, CommandRequest, Value, compile_command
from rclonekit.errors import RcloneError
from rclonekit.parsing import parse_output
from rclonekit.runner.abc import OutputSink, ProcessRunner
from rclonekit.runner.real import RealProcessRunner
from rclonekit.types import RcloneResult

logger = logging.getLogger(__name__)


class Rclone:
    """Typed wrapper around the rclone executable.

    Example:
        >>> rclone = Rclone()
        >>> result = rclone.run("copy %s %s", "local/dir", "remote:backup")
        >>> result.parsed.new
        ('a.txt', 'b/c.txt')

        >>> # Treat a missing directory as a warning instead of an error
        >>> result = rclone.run("lsjson %s", "remote:missing", warn="rclone:dirNF")
        >>> result.parsed.value is None
        True
    """

    def __init__(
        self,
        runner: ProcessRunner | None = None,
        *,
        tool: str = DEFAULT_TOOL,
        echo: OutputSink | None = None,
        default_warn: Iterable[str] = (),
    ) -> None:
        """Create a client.

        Args:
            runner: Process runner, RealProcessRunner when None
            tool: Executable name prefixed to every command line
            echo: Sink for live output of calls that request verbose output.
                None discards it; the output is still captured either way.
            default_warn: Error identifiers downgraded to warnings on every call
        """
        self._runner = runner if runner is not None else RealProcessRunner()
        self._tool = tool
        self._echo = echo
        self._default_warn = normalize_warn(default_warn)

    @property
    def tool(self) -> str:
        return self._tool

    def run(
        self,
        template: str,
        *values: Value,
        warn: str | Iterable[str] | None = None,
    ) -> RcloneResult:
        """Run `<tool> <template>` with the template filled from values.

        Args:
            template: printf-style template, e.g. "copy %s %s"
            *values: Substitution values (scalars, sequences or matrices)
            warn: Error identifiers (e.g. "rclone:dirNF" or "dirNF") to
                downgrade from error to warning for this call

        Returns:
            RcloneResult with status, raw output and parsed output

        Raises:
            CommandFormatError: If the template cannot be filled. Nothing runs.
            RcloneError: If rclone fails with a kind not in the warn list
            OutputParseError: If the output cannot be parsed
        """
        request = CommandRequest(
            template=template,
            values=tuple(values),
            warn=self._default_warn | normalize_warn(warn),
        )
        command = compile_command(request, self._tool)

        echo = self._echo if command.verbose_requested else None
        execution = self._runner.run(command.command_line, echo=echo)

        classification = classify(execution.status, request.warn)
        error: RcloneError | None = None
        if classification.disposition is not Disposition.NONE:
            error = RcloneError(
                classification.kind,
                status=execution.status,
                command=command.command_line,
                output=execution.output,
            )
            if classification.aborts:
                raise error
            logger.warning("%s", error)

        parsed = parse_output(command, execution.output, classification.kind, self._tool)
        return RcloneResult(
            status=execution.status,
            output=execution.output,
            command=command,
            classification=classification,
            parsed=parsed,
            error=error,
        )

    def copy(
        self,
        source: str,
        dest: str,
        *flags: str,
        warn: str | Iterable[str] | None = None,
    ) -> RcloneResult:
        """Run `rclone copy source dest [flags...]`; parsed is CopiedFiles."""
        return self.run(
            _template("copy", 2 + len(flags)), *_quoted(source, dest, *flags), warn=warn
        )

    def md5sum(
        self,
        path: str,
        *flags: str,
        warn: str | Iterable[str] | None = None,
    ) -> RcloneResult:
        """Run `rclone md5sum path [flags...]`; parsed is ChecksumListing."""
        return self.run(_template("md5sum", 1 + len(flags)), *_quoted(path, *flags), warn=warn)

    def lsjson(
        self,
        path: str,
        *flags: str,
        warn: str | Iterable[str] | None = None,
    ) -> RcloneResult:
        """Run `rclone lsjson path [flags...]`; parsed is JsonListing."""
        return self.run(_template("lsjson", 1 + len(flags)), *_quoted(path, *flags), warn=warn)


def _template(subcommand: str, count: int) -> str:
    return " ".join([subcommand, *(["%s"] * count)])


def _quoted(*args: str) -> list[str]:
    # Arguments with spaces must survive shlex splitting in the runner
    return [shlex.quote(arg) for arg in args]
