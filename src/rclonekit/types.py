"""Type definitions for rclone invocations and their parsed output."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

if TYPE_CHECKING:
    from rclonekit.classify import ErrorClassification
    from rclonekit.command import CompiledCommand
    from rclonekit.errors import RcloneError


@dataclass(frozen=True)
class ExecutionResult:
    """Raw result of running a command line.

    Attributes:
        status: Exit status of the process
        output: Combined stdout/stderr text, unparsed
        echoed: Whether output was streamed to a sink while running
    """

    status: int
    output: str
    echoed: bool


# Parsed output variants. Exactly one is produced per call.


@dataclass(frozen=True)
class CopiedFiles:
    """Files reported by `rclone copy -v`, in order of appearance.

    Attributes:
        new: Files copied that did not exist at the destination
        updated: Files copied over an existing destination file
        dry: Files that would have been copied without --dry-run
    """

    new: tuple[str, ...] = ()
    updated: tuple[str, ...] = ()
    dry: tuple[str, ...] = ()


@dataclass(frozen=True)
class ChecksumListing:
    """MD5 hashes from `rclone md5sum`, keyed by full path."""

    hashes: dict[str, str] = field(default_factory=dict)


class LsjsonItem(BaseModel):
    """One entry of `rclone lsjson` output."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    path: str = Field(alias="Path")
    name: str = Field(alias="Name")
    size: int = Field(alias="Size")
    mime_type: str | None = Field(default=None, alias="MimeType")
    mod_time: datetime | None = Field(default=None, alias="ModTime")
    is_dir: bool = Field(alias="IsDir")
    id: str | None = Field(default=None, alias="ID")
    hashes: dict[str, str] | None = Field(default=None, alias="Hashes")

    @field_validator("mod_time", mode="before")
    @classmethod
    def _parse_mod_time(cls, value: object) -> object:
        # rclone emits nanosecond precision; fromisoformat truncates to microseconds
        if isinstance(value, str):
            return datetime.fromisoformat(value)
        return value


@dataclass(frozen=True)
class JsonListing:
    """Decoded `rclone lsjson` output.

    value is None when the listed directory was not found.
    """

    value: Any = None

    def items(self) -> list[LsjsonItem]:
        """Validate the decoded listing into typed entries.

        Returns:
            Empty list when value is None, otherwise one LsjsonItem per entry

        Raises:
            pydantic.ValidationError: If an entry is missing required fields
            TypeError: If the decoded value is not a list
        """
        if self.value is None:
            return []
        if not isinstance(self.value, list):
            raise TypeError(f"lsjson output is not a list: {type(self.value).__name__}")
        return [LsjsonItem.model_validate(entry) for entry in self.value]


@dataclass(frozen=True)
class NoParsedOutput:
    """Placeholder for subcommands without a parser."""


ParsedOutput = CopiedFiles | ChecksumListing | JsonListing | NoParsedOutput


@dataclass(frozen=True)
class RcloneResult:
    """Outcome of a single rclone call.

    Attributes:
        status: Exit status of rclone
        output: Raw captured output
        command: The compiled command that was executed
        classification: Classified exit status and disposition
        parsed: Structured output for the subcommand
        error: The downgraded error when the status was turned into a warning
    """

    status: int
    output: str
    command: "CompiledCommand"
    classification: "ErrorClassification"
    parsed: ParsedOutput
    error: "RcloneError | None" = None

    @property
    def warned(self) -> bool:
        return self.error is not None
