"""Building rclone command lines from templates.

A command template is printf-style text such as ``"copy %s %s --dry-run"``.
Values fill the placeholders in order. Each value may be:

- a scalar (str, int, float): consumes one placeholder
- a flat sequence: consumes one placeholder per element, in order
- a matrix (sequence of equal-length row sequences): consumes one placeholder
  per element in column-major order, so ``[["a", "b"], ["c", "d"]]`` fills
  placeholders with ``a, c, b, d``

Strings are always scalars, never sequences of characters.
"""

import logging
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum

from rclonekit.errors import CommandFormatError

logger = logging.getLogger(__name__)

DEFAULT_TOOL = "rclone"

Scalar = str | int | float
Value = Scalar | Sequence[Scalar] | Sequence[Sequence[Scalar]]

# Short verbose option (-v, -vv, -VVV) bounded by whitespace or string edges
VERBOSE_FLAG_RE = re.compile(r"(^|\s)-v+($|\s)", re.IGNORECASE)

# Verbose token preceded by whitespace, as it appears inside a command line
_VERBOSE_TOKEN_RE = re.compile(r"(\s)-v+(?=$|\s)", re.IGNORECASE)


class Subcommand(Enum):
    """rclone subcommands with dedicated output handling."""

    COPY = "copy"
    MD5SUM = "md5sum"
    LSJSON = "lsjson"
    OTHER = ""

    @classmethod
    def from_name(cls, name: str) -> "Subcommand":
        for member in cls:
            if member is not cls.OTHER and member.value == name:
                return member
        return cls.OTHER


@dataclass(frozen=True)
class CommandRequest:
    """A template with its substitution values and suppression list."""

    template: str
    values: tuple[Value, ...] = ()
    warn: frozenset[str] = frozenset()


@dataclass(frozen=True)
class CompiledCommand:
    """A fully substituted command line ready to execute.

    Attributes:
        command_line: Complete command line, starting with the tool name
        subcommand: Recognized subcommand, or OTHER
        subcommand_name: Leading alphanumeric token after the tool name,
            lowercased ("" when none matched)
        verbose_requested: Whether the caller supplied a verbose flag. A flag
            appended automatically for copy does not count.
    """

    command_line: str
    subcommand: Subcommand
    subcommand_name: str
    verbose_requested: bool


def _is_sequence(value: object) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def _expand_value(value: Value, template: str) -> list[Scalar]:
    if not _is_sequence(value):
        return [value]  # type: ignore[list-item]

    items = list(value)  # type: ignore[arg-type]
    if not items or not all(_is_sequence(item) for item in items):
        if any(_is_sequence(item) for item in items):
            raise CommandFormatError(
                "Cannot mix scalars and rows in one argument", template=template
            )
        return items

    rows = [list(row) for row in items]
    width = len(rows[0])
    if any(len(row) != width for row in rows):
        raise CommandFormatError("Matrix argument has rows of unequal length", template=template)
    return [rows[r][c] for c in range(width) for r in range(len(rows))]


def flatten_values(values: Iterable[Value], template: str = "") -> list[Scalar]:
    """Expand substitution values into the flat order placeholders consume them.

    Args:
        values: Scalars, sequences or matrices, in argument order
        template: Template being filled, for error reporting

    Returns:
        Flat list of scalars

    Raises:
        CommandFormatError: If a matrix is ragged or mixes rows and scalars
    """
    flat: list[Scalar] = []
    for value in values:
        flat.extend(_expand_value(value, template))
    return flat


def format_template(template: str, values: Iterable[Value]) -> str:
    """Fill a printf-style template with substitution values.

    Raises:
        CommandFormatError: If the number or types of values do not match
            the template's placeholders
    """
    flat = flatten_values(values, template)
    try:
        return template % tuple(flat)
    except (TypeError, ValueError) as e:
        raise CommandFormatError(
            f"Cannot format template {template!r} with {len(flat)} value(s): {e}",
            template=template,
        ) from e


def has_verbose_flag(values: Iterable[Value]) -> bool:
    """Check whether any string substitution value carries a verbose flag."""
    return any(
        isinstance(value, str) and VERBOSE_FLAG_RE.search(value) is not None
        for value in flatten_values(values)
    )


def identify_subcommand(command_line: str, tool: str = DEFAULT_TOOL) -> str:
    """Return the lowercased leading alphanumeric token after the tool name.

    Returns "" when the command line does not start with ``"<tool> <token>"``.
    """
    match = re.match(rf"^{re.escape(tool)} ([a-z0-9]+)", command_line, re.IGNORECASE)
    if match is None:
        return ""
    return match.group(1).lower()


def strip_verbose_flags(command_line: str) -> str:
    """Remove every whitespace-preceded verbose token from a command line.

    Stripping is idempotent: the result never contains a standalone -v token.
    """
    return _VERBOSE_TOKEN_RE.sub(r"\1", command_line)


def compile_command(request: CommandRequest, tool: str = DEFAULT_TOOL) -> CompiledCommand:
    """Compile a request into the command line that will be executed.

    After substitution:
    - copy: a ``-v`` flag is appended when the caller did not supply one, so
      copied files show up in the output
    - md5sum: verbose flags are removed because log lines would corrupt the
      checksum listing

    Raises:
        CommandFormatError: If the template cannot be filled
    """
    command_line = f"{tool} {format_template(request.template, request.values)}"
    verbose = has_verbose_flag(request.values)
    name = identify_subcommand(command_line, tool)
    subcommand = Subcommand.from_name(name)

    if subcommand is Subcommand.COPY and not verbose:
        command_line = f"{command_line} -v"
    elif subcommand is Subcommand.MD5SUM:
        command_line = strip_verbose_flags(command_line)

    logger.debug("Compiled %r (subcommand=%r, verbose=%s)", command_line, name, verbose)
    return CompiledCommand(
        command_line=command_line,
        subcommand=subcommand,
        subcommand_name=name,
        verbose_requested=verbose,
    )
