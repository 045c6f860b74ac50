"""Parsing functions for rclone output.

Each recognized subcommand has its own parser. The formats are defined by
rclone itself:

- copy (with -v) logs one line per transferred file::

      2024/01/31 12:00:00 INFO  : dir/a.txt: Copied (new)
      2024/01/31 12:00:00 INFO  : dir/b.txt: Copied (replaced existing)
      2024/01/31 12:00:00 NOTICE: dir/c.txt: Not copying as --dry-run

- md5sum prints ``<32 hex digits><two spaces><relative path>`` per file,
  optionally followed by a blank line. Log lines rclone writes to stderr
  (notices, per-file errors) are interleaved and skipped.

- lsjson prints a single JSON document.
"""

import json
import re
import shlex

from rclonekit.classify import ErrorKind
from rclonekit.command import DEFAULT_TOOL, CompiledCommand, Subcommand
from rclonekit.errors import OutputParseError
from rclonekit.types import (
    ChecksumListing,
    CopiedFiles,
    JsonListing,
    NoParsedOutput,
    ParsedOutput,
)

# YYYY/MM/DD HH:MM:SS
TIMESTAMP_PATTERN = r"[0-9]{4}/[0-9]{2}/[0-9]{2} [0-9]{2}:[0-9]{2}:[0-9]{2}"

# Path to a file with an extension, matched lazily up to the message suffix
PATH_PATTERN = r"[^\r\n]+?\.[a-z0-9]+"

_COPIED_NEW_RE = re.compile(
    rf"{TIMESTAMP_PATTERN} INFO  : (?P<path>{PATH_PATTERN}): Copied \(new\)",
    re.IGNORECASE,
)
_COPIED_REPLACED_RE = re.compile(
    rf"{TIMESTAMP_PATTERN} INFO  : (?P<path>{PATH_PATTERN}): Copied \(replaced existing\)",
    re.IGNORECASE,
)
_DRY_RUN_RE = re.compile(
    rf"^{TIMESTAMP_PATTERN} NOTICE: (?P<path>{PATH_PATTERN}): Not copying as --dry-run$",
    re.IGNORECASE,
)

_MD5SUM_LINE_RE = re.compile(r"^(?P<hash>[0-9a-f]{32})  (?P<path>.+)$", re.IGNORECASE)

# rclone log line, merged into the output from stderr
_LOG_LINE_RE = re.compile(
    rf"^{TIMESTAMP_PATTERN} (DEBUG|INFO|NOTICE|WARNING|ERROR|CRITICAL|EMERGENCY|ALERT) *:",
    re.IGNORECASE,
)

_DIRECTORY_RE = re.compile(r"/$")
_FILE_RE = re.compile(r"\.\w*$")


def parse_copy_output(text: str) -> CopiedFiles:
    """Extract copied files from `rclone copy -v` output.

    Args:
        text: Captured output of rclone copy

    Returns:
        CopiedFiles with new, updated and dry-run paths in order of appearance
    """
    new: list[str] = []
    updated: list[str] = []
    dry: list[str] = []

    for line in text.splitlines():
        match = _COPIED_NEW_RE.search(line)
        if match is not None:
            new.append(match.group("path"))
            continue

        match = _COPIED_REPLACED_RE.search(line)
        if match is not None:
            updated.append(match.group("path"))
            continue

        match = _DRY_RUN_RE.match(line)
        if match is not None:
            dry.append(match.group("path"))

    return CopiedFiles(new=tuple(new), updated=tuple(updated), dry=tuple(dry))


def classify_checksum_path(path: str) -> str:
    """Determine the base path that md5sum output is relative to.

    rclone reports names relative to the directory it was given. When given a
    single file it reports just the file name, so the base is the file's
    containing directory.

    Rules, checked in order:
    - ends with "/": a directory, returned unchanged
      ("remote:data.v2/" is a directory despite the dot)
    - ends with ".<word chars>": a file, the base is everything up to and
      including the last "/", or up to and including the remote's ":" for a
      file at the root of a remote ("remote:a.txt" -> "remote:")
    - anything else raises OutputParseError
      ("remote:data" and "remote:data.v2/readme" are not recognized)

    A bare file name without any separator ("a.txt") has an empty base.

    Args:
        path: Path argument that was passed to rclone md5sum

    Returns:
        Base path to prefix onto each reported file name

    Raises:
        OutputParseError: If the path is neither a directory nor a file
    """
    if _DIRECTORY_RE.search(path):
        return path
    if _FILE_RE.search(path):
        cut = path.rfind("/")
        if cut == -1:
            cut = path.rfind(":")
        return path[: cut + 1]
    raise OutputParseError(f'Path "{path}" not recognized as directory or file')


def extract_md5sum_path(command_line: str, tool: str = DEFAULT_TOOL) -> str:
    """Find the path argument passed to md5sum in a compiled command line.

    The path is the first token after "<tool> md5sum" that is not an option.

    Raises:
        OutputParseError: If no path argument is present
    """
    try:
        tokens = shlex.split(command_line)
    except ValueError as e:
        raise OutputParseError(f"Cannot split command line {command_line!r}: {e}") from e
    prefix = [tool.lower(), Subcommand.MD5SUM.value]
    if [token.lower() for token in tokens[:2]] != prefix:
        raise OutputParseError(f"Not an md5sum command: {command_line}")

    for token in tokens[2:]:
        if not token.startswith("-"):
            return token
    raise OutputParseError(f"No path argument found in: {command_line}")


def parse_md5sum_output(
    text: str, command_line: str, tool: str = DEFAULT_TOOL
) -> ChecksumListing:
    """Build a mapping from full path to MD5 hash from `rclone md5sum` output.

    Args:
        text: Captured output of rclone md5sum
        command_line: Compiled command line, used to recover the base path
        tool: Executable name the command line starts with

    Returns:
        ChecksumListing keyed by base path + reported name. Empty output gives
        an empty listing. rclone log lines in the output are skipped. When a name is reported twice the last hash wins.

    Raises:
        OutputParseError: If a line is malformed or the path argument is not
            recognized as a directory or file
    """
    if not text:
        return ChecksumListing(hashes={})

    entries: list[tuple[str, str]] = []
    for line in text.splitlines():
        if not line.strip() or _LOG_LINE_RE.match(line):
            continue
        match = _MD5SUM_LINE_RE.match(line.rstrip("\r"))
        if match is None:
            raise OutputParseError(f"Malformed md5sum line: {line!r}")
        entries.append((match.group("path"), match.group("hash")))

    base = classify_checksum_path(extract_md5sum_path(command_line, tool))
    return ChecksumListing(hashes={base + name: file_hash for name, file_hash in entries})


def parse_lsjson_output(text: str, kind: ErrorKind = ErrorKind.NONE) -> JsonListing:
    """Decode `rclone lsjson` output.

    Args:
        text: Captured output of rclone lsjson
        kind: Classified exit status of the call

    Returns:
        JsonListing with the decoded document, or with value None when the
        directory was not found (rclone prints no usable JSON then)

    Raises:
        OutputParseError: If the output is not valid JSON
    """
    if kind is ErrorKind.DIR_NOT_FOUND:
        return JsonListing(value=None)

    try:
        return JsonListing(value=json.loads(text))
    except json.JSONDecodeError as e:
        raise OutputParseError(f"Invalid JSON from rclone lsjson: {e}") from e


def parse_output(
    command: CompiledCommand,
    text: str,
    kind: ErrorKind = ErrorKind.NONE,
    tool: str = DEFAULT_TOOL,
) -> ParsedOutput:
    """Parse output according to the command's subcommand.

    Subcommands without a parser yield NoParsedOutput.
    """
    if command.subcommand is Subcommand.COPY:
        return parse_copy_output(text)
    if command.subcommand is Subcommand.MD5SUM:
        return parse_md5sum_output(text, command.command_line, tool)
    if command.subcommand is Subcommand.LSJSON:
        return parse_lsjson_output(text, kind)
    return NoParsedOutput()
