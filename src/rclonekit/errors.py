"""Exception hierarchy for rclone invocations.

Three failure families exist and are never conflated:

- CommandFormatError: the template could not be filled with the given values.
  Raised before anything is executed.
- RcloneError: rclone exited with a non-zero status that the caller did not
  downgrade to a warning.
- OutputParseError: rclone's output did not have the shape the parser expects.
  Raised regardless of the caller's suppression list.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rclonekit.classify import ErrorKind


class RcloneKitError(Exception):
    """Base class for all rclonekit errors."""


class CommandFormatError(RcloneKitError, ValueError):
    """Raised when a command template and its values do not fit together."""

    def __init__(self, message: str, *, template: str) -> None:
        super().__init__(message)
        self.template = template


class RcloneError(RcloneKitError, RuntimeError):
    """Raised when rclone exits with a non-zero status.

    Carries everything needed to reproduce the invocation: the classified
    error kind, the raw exit status, the fully compiled command line and the
    complete captured output.
    """

    def __init__(self, kind: "ErrorKind", *, status: int, command: str, output: str) -> None:
        super().__init__(format_rclone_error(kind, status=status, command=command, output=output))
        self.kind = kind
        self.status = status
        self.command = command
        self.output = output

    @property
    def identifier(self) -> str:
        return self.kind.identifier


class OutputParseError(RcloneKitError, RuntimeError):
    """Raised when rclone output cannot be parsed into a structured result."""


def format_rclone_error(kind: "ErrorKind", *, status: int, command: str, output: str) -> str:
    """Build the operator-facing message for a failed rclone call.

    Args:
        kind: Classified error kind
        status: Raw exit status
        command: Fully compiled command line
        output: Complete captured output text

    Returns:
        Multi-line message with the command and its output
    """
    return (
        f"rclone error ({kind.identifier}, exit code {status}).\n"
        f"The rclone cmd:\n"
        f"{command}\n"
        f"returned:\n"
        f"{output}"
    )
