"""Tests for error types and messages."""

from rclonekit.classify import ErrorKind
from rclonekit.errors import (
    CommandFormatError,
    OutputParseError,
    RcloneError,
    RcloneKitError,
    format_rclone_error,
)


def test_format_rclone_error_includes_command_and_output() -> None:
    message = format_rclone_error(
        ErrorKind.SYNTAX,
        status=1,
        command="rclone copy --bogus a b -v",
        output="Error: unknown flag: --bogus\n",
    )

    assert message == (
        "rclone error (rclone:syntax, exit code 1).\n"
        "The rclone cmd:\n"
        "rclone copy --bogus a b -v\n"
        "returned:\n"
        "Error: unknown flag: --bogus\n"
    )


def test_error_hierarchy() -> None:
    assert issubclass(CommandFormatError, ValueError)
    assert issubclass(RcloneError, RuntimeError)
    assert issubclass(OutputParseError, RuntimeError)
    for error_type in (CommandFormatError, RcloneError, OutputParseError):
        assert issubclass(error_type, RcloneKitError)


def test_rclone_error_identifier() -> None:
    error = RcloneError(ErrorKind.MAX_TRANSFER, status=8, command="rclone copy a b", output="")

    assert error.identifier == "rclone:maxTransfer"
