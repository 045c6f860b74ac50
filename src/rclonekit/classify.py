"""Exit status classification for rclone.

rclone documents a fixed set of exit codes. Each one maps to an ErrorKind
whose identifier matches the error IDs callers use in suppression lists
(e.g. "rclone:dirNF"). Any other non-zero status, including the negative
codes subprocess reports for signals, is UNKNOWN.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

IDENTIFIER_PREFIX = "rclone:"


class ErrorKind(Enum):
    """Error kinds keyed by rclone exit status."""

    NONE = (0, "")
    SYNTAX = (1, "rclone:syntax")
    OTHER = (2, "rclone:other")
    DIR_NOT_FOUND = (3, "rclone:dirNF")
    FILE_NOT_FOUND = (4, "rclone:fileNF")
    RETRY = (5, "rclone:retry")
    NO_RETRY = (6, "rclone:noRetry")
    FATAL = (7, "rclone:fatal")
    MAX_TRANSFER = (8, "rclone:maxTransfer")
    UNKNOWN = (None, "rclone:unknown")

    def __init__(self, status: int | None, identifier: str) -> None:
        self.status = status
        self.identifier = identifier

    @property
    def short_name(self) -> str:
        """Identifier without the "rclone:" prefix (e.g. "dirNF")."""
        return self.identifier.removeprefix(IDENTIFIER_PREFIX)


KIND_DESCRIPTIONS: dict[ErrorKind, str] = {
    ErrorKind.NONE: "Success",
    ErrorKind.SYNTAX: "Syntax or usage error",
    ErrorKind.OTHER: "Error not otherwise categorised",
    ErrorKind.DIR_NOT_FOUND: "Directory not found",
    ErrorKind.FILE_NOT_FOUND: "File not found",
    ErrorKind.RETRY: "Temporary error (more retries might fix)",
    ErrorKind.NO_RETRY: "Less serious error (no retry)",
    ErrorKind.FATAL: "Fatal error (more retries won't fix)",
    ErrorKind.MAX_TRANSFER: "Transfer limit set by --max-transfer reached",
    ErrorKind.UNKNOWN: "Unknown exit status",
}

_KINDS_BY_STATUS = {kind.status: kind for kind in ErrorKind if kind.status is not None}


class Disposition(Enum):
    """What the client does with a classified status."""

    NONE = "none"
    WARN = "warn"
    FAIL = "fail"


@dataclass(frozen=True)
class ErrorClassification:
    """Classified exit status plus the resulting disposition."""

    kind: ErrorKind
    disposition: Disposition

    @property
    def is_error(self) -> bool:
        return self.kind is not ErrorKind.NONE

    @property
    def aborts(self) -> bool:
        return self.disposition is Disposition.FAIL


def kind_for_status(status: int) -> ErrorKind:
    """Map an rclone exit status to its ErrorKind."""
    return _KINDS_BY_STATUS.get(status, ErrorKind.UNKNOWN)


def normalize_warn(warn: str | Iterable[str] | None) -> frozenset[str]:
    """Normalize a suppression list to a lowercase frozenset.

    Accepts a single identifier, any iterable of identifiers, or None.
    """
    if warn is None:
        return frozenset()
    if isinstance(warn, str):
        return frozenset({warn.lower()})
    return frozenset(entry.lower() for entry in warn)


def matches_warn(kind: ErrorKind, warn: frozenset[str]) -> bool:
    """Check whether a kind is named in a normalized suppression list.

    Matching is case-insensitive and accepts the full identifier
    ("rclone:dirNF") or its short form ("dirNF"). NONE never matches.
    """
    if kind is ErrorKind.NONE:
        return False
    return kind.identifier.lower() in warn or kind.short_name.lower() in warn


def classify(status: int, warn: str | Iterable[str] | None = None) -> ErrorClassification:
    """Classify an exit status against a suppression list.

    Args:
        status: Raw exit status of the rclone process
        warn: Error identifiers to downgrade from failure to warning

    Returns:
        ErrorClassification with NONE disposition for status 0, WARN when the
        kind is suppressed and FAIL otherwise
    """
    kind = kind_for_status(status)
    if kind is ErrorKind.NONE:
        return ErrorClassification(kind=kind, disposition=Disposition.NONE)

    if matches_warn(kind, normalize_warn(warn)):
        return ErrorClassification(kind=kind, disposition=Disposition.WARN)
    return ErrorClassification(kind=kind, disposition=Disposition.FAIL)
