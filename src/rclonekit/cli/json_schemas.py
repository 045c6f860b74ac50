"""Pydantic models for JSON output schemas.

These models define the JSON emitted by commands run with --json.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from rclonekit.types import (
    ChecksumListing,
    CopiedFiles,
    JsonListing,
    ParsedOutput,
    RcloneResult,
)


class RunCommandResponse(BaseModel):
    """JSON response schema for `rclonekit run` and the subcommand shortcuts.

    Attributes:
        command: Fully compiled command line that was executed
        subcommand: Lowercased subcommand name ("" if unrecognized)
        status: rclone exit status
        error_kind: Identifier of the downgraded error, None on success
        output: Raw captured output
        parsed_type: Which parsed shape `parsed` holds
        parsed: Structured output, None for subcommands without a parser
    """

    model_config = ConfigDict(strict=True)

    command: str
    subcommand: str
    status: int
    error_kind: str | None
    output: str
    parsed_type: str = Field(..., pattern="^(copy|md5sum|lsjson|none)$")
    parsed: Any = None

    @staticmethod
    def from_result(result: RcloneResult) -> "RunCommandResponse":
        parsed_type, parsed = _parsed_payload(result.parsed)
        return RunCommandResponse(
            command=result.command.command_line,
            subcommand=result.command.subcommand_name,
            status=result.status,
            error_kind=result.error.identifier if result.error is not None else None,
            output=result.output,
            parsed_type=parsed_type,
            parsed=parsed,
        )


def _parsed_payload(parsed: ParsedOutput) -> tuple[str, Any]:
    if isinstance(parsed, CopiedFiles):
        return "copy", {
            "new": list(parsed.new),
            "updated": list(parsed.updated),
            "dry": list(parsed.dry),
        }
    if isinstance(parsed, ChecksumListing):
        return "md5sum", dict(parsed.hashes)
    if isinstance(parsed, JsonListing):
        return "lsjson", parsed.value
    return "none", None


class ErrorKindInfo(BaseModel):
    """One row of `rclonekit kinds --json`."""

    model_config = ConfigDict(strict=True)

    status: int | None
    identifier: str
    description: str


class ConfigInfo(BaseModel):
    """JSON response schema for `rclonekit config show --json`."""

    model_config = ConfigDict(strict=True)

    path: str
    exists: bool
    tool: str
    warn: list[str]
