"""Typed client for the rclone command-line tool."""

from rclonekit.classify import Disposition, ErrorClassification, ErrorKind, classify
from rclonekit.client import Rclone
from rclonekit.command import CommandRequest, CompiledCommand, Subcommand, compile_command
from rclonekit.errors import CommandFormatError, OutputParseError, RcloneError, RcloneKitError
from rclonekit.types import (
    ChecksumListing,
    CopiedFiles,
    ExecutionResult,
    JsonListing,
    LsjsonItem,
    NoParsedOutput,
    ParsedOutput,
    RcloneResult,
)

__all__ = [
    "ChecksumListing",
    "CommandFormatError",
    "CommandRequest",
    "CompiledCommand",
    "CopiedFiles",
    "Disposition",
    "ErrorClassification",
    "ErrorKind",
    "ExecutionResult",
    "JsonListing",
    "LsjsonItem",
    "NoParsedOutput",
    "OutputParseError",
    "ParsedOutput",
    "Rclone",
    "RcloneError",
    "RcloneKitError",
    "RcloneResult",
    "Subcommand",
    "classify",
    "compile_command",
]
