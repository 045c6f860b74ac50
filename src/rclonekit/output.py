"""Output utilities for CLI commands with clear intent.

user_output() is for messages meant for a human and goes to stderr.
machine_output() is for structured data and goes to stdout, so JSON output
can be piped without diagnostics mixed in.
"""

import click


def user_output(message: str = "", *, nl: bool = True) -> None:
    """Write a human-facing message to stderr."""
    click.echo(message, err=True, nl=nl)


def machine_output(message: str = "", *, nl: bool = True) -> None:
    """Write machine-readable output to stdout."""
    click.echo(message, nl=nl)


def echo_sink(chunk: str) -> None:
    """Output sink that streams rclone output to stderr as it arrives."""
    user_output(chunk, nl=False)
