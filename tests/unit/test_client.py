"""Tests for the Rclone client pipeline using FakeProcessRunner."""

import logging

import pytest

from rclonekit.classify import Disposition, ErrorKind
from rclonekit.client import Rclone
from rclonekit.errors import CommandFormatError, OutputParseError, RcloneError
from rclonekit.types import ChecksumListing, CopiedFiles, JsonListing, NoParsedOutput
from tests.conftest import load_fixture
from tests.fakes.runner import FakeProcessRunner


def test_run_success_returns_parsed_copy_output() -> None:
    runner = FakeProcessRunner(output=load_fixture("rclone/copy_verbose.txt"))
    rclone = Rclone(runner)

    result = rclone.run("copy %s %s", "photos/", "remote:photos")

    assert runner.run_calls == ["rclone copy photos/ remote:photos -v"]
    assert result.status == 0
    assert result.classification.kind is ErrorKind.NONE
    assert result.error is None
    assert not result.warned
    assert isinstance(result.parsed, CopiedFiles)
    assert result.parsed.new == ("photos/2024/beach.jpg", "photos/2024/sunset.png")


def test_run_format_error_executes_nothing() -> None:
    runner = FakeProcessRunner()
    rclone = Rclone(runner)

    with pytest.raises(CommandFormatError):
        rclone.run("copy %s %s", "only-source")

    assert runner.run_calls == []


def test_run_failure_raises_with_command_and_output() -> None:
    runner = FakeProcessRunner(status=7, output="Failed to copy: account suspended\n")
    rclone = Rclone(runner)

    with pytest.raises(RcloneError) as exc_info:
        rclone.run("copy %s %s", "a/", "remote:b")

    error = exc_info.value
    assert error.kind is ErrorKind.FATAL
    assert error.identifier == "rclone:fatal"
    assert error.status == 7
    assert error.command == "rclone copy a/ remote:b -v"
    assert error.output == "Failed to copy: account suspended\n"
    message = str(error)
    assert "rclone copy a/ remote:b -v" in message
    assert "Failed to copy: account suspended" in message
    assert "exit code 7" in message


def test_run_failure_skips_parsing() -> None:
    # Invalid JSON would raise OutputParseError if parsing ran
    runner = FakeProcessRunner(status=2, output="not json")
    rclone = Rclone(runner)

    with pytest.raises(RcloneError):
        rclone.run("lsjson %s", "remote:data")


def test_run_lsjson_dir_not_found_is_fatal_by_default() -> None:
    rclone = Rclone(FakeProcessRunner(status=3, output="directory not found"))

    with pytest.raises(RcloneError) as exc_info:
        rclone.run("lsjson %s", "remote:missing")

    assert exc_info.value.kind is ErrorKind.DIR_NOT_FOUND


def test_run_lsjson_dir_not_found_downgraded_returns_empty_listing(
    caplog: pytest.LogCaptureFixture,
) -> None:
    rclone = Rclone(FakeProcessRunner(status=3, output='[{"Name": "ignored"}]'))

    with caplog.at_level(logging.WARNING, logger="rclonekit.client"):
        result = rclone.run("lsjson %s", "remote:missing", warn="rclone:dirNF")

    assert result.classification.disposition is Disposition.WARN
    assert result.parsed == JsonListing(value=None)
    assert result.warned
    assert result.error is not None
    assert result.error.kind is ErrorKind.DIR_NOT_FOUND
    assert "rclone lsjson remote:missing" in caplog.text


def test_run_warn_accepts_collection_and_short_names() -> None:
    rclone = Rclone(FakeProcessRunner(status=4, output=""))

    result = rclone.run("md5sum %s", "remote:x/", warn=["dirNF", "FILENF"])

    assert result.classification.kind is ErrorKind.FILE_NOT_FOUND
    assert result.parsed == ChecksumListing(hashes={})


def test_run_default_warn_applies_to_every_call() -> None:
    rclone = Rclone(FakeProcessRunner(status=3), default_warn=["rclone:dirNF"])

    result = rclone.run("lsjson %s", "remote:missing")

    assert result.classification.disposition is Disposition.WARN


def test_run_parse_error_not_suppressed_by_warn() -> None:
    rclone = Rclone(FakeProcessRunner(status=5, output="not json"))

    with pytest.raises(OutputParseError):
        rclone.run("lsjson %s", "remote:x", warn="rclone:retry")


def test_run_md5sum_builds_full_paths() -> None:
    runner = FakeProcessRunner(output=load_fixture("rclone/md5sum_dir.txt"))
    rclone = Rclone(runner)

    result = rclone.run("md5sum %s %s", "remote:data/", "-v")

    assert runner.run_calls == ["rclone md5sum remote:data/ "]
    assert result.parsed == ChecksumListing(
        hashes={
            "remote:data/file1.txt": "d41d8cd98f00b204e9800998ecf8427e",
            "remote:data/sub/file2.txt": "098f6bcd4621d373cade4e832627b4f6",
        }
    )



def test_run_md5sum_downgraded_failure_keeps_hashes_around_log_lines() -> None:
    output = (
        "d41d8cd98f00b204e9800998ecf8427e  a.txt\n"
        "2024/01/31 12:00:00 ERROR : b.txt: Failed to hash: permission denied\n"
    )
    rclone = Rclone(FakeProcessRunner(status=6, output=output))

    result = rclone.run("md5sum %s", "remote:x/", warn="rclone:noRetry")

    assert result.classification.disposition is Disposition.WARN
    assert result.parsed == ChecksumListing(
        hashes={"remote:x/a.txt": "d41d8cd98f00b204e9800998ecf8427e"}
    )


def test_run_md5sum_success_skips_notice_lines() -> None:
    output = (
        "2024/01/31 12:00:00 NOTICE: Config file \"/root/.rclone.conf\" not found"
        " - using defaults\n"
        "098f6bcd4621d373cade4e832627b4f6  sub/file2.txt\n"
    )
    rclone = Rclone(FakeProcessRunner(output=output))

    result = rclone.run("md5sum %s", "remote:data/")

    assert result.parsed == ChecksumListing(
        hashes={"remote:data/sub/file2.txt": "098f6bcd4621d373cade4e832627b4f6"}
    )


def test_run_unrecognized_subcommand_returns_raw_text_only() -> None:
    rclone = Rclone(FakeProcessRunner(output="rclone v1.66.0\n"))

    result = rclone.run("version")

    assert result.parsed == NoParsedOutput()
    assert result.output == "rclone v1.66.0\n"


def test_copy_without_verbose_does_not_echo() -> None:
    echoed: list[str] = []
    runner = FakeProcessRunner(output=load_fixture("rclone/copy_verbose.txt"))
    rclone = Rclone(runner, echo=echoed.append)

    rclone.run("copy %s %s", "a/", "remote:b")

    # -v was added for parsing, but the caller did not ask to see output
    assert runner.run_calls == ["rclone copy a/ remote:b -v"]
    assert runner.echoed_calls == []
    assert echoed == []


def test_copy_with_caller_verbose_echoes_output() -> None:
    echoed: list[str] = []
    output = "2024/01/31 12:00:00 INFO  : a.txt: Copied (new)\n"
    runner = FakeProcessRunner(output=output)
    rclone = Rclone(runner, echo=echoed.append)

    result = rclone.run("copy %s %s %s", "a/", "remote:b", "-v")

    assert runner.run_calls == ["rclone copy a/ remote:b -v"]
    assert echoed == ["rclone copy a/ remote:b -v\n", output]
    assert result.parsed == CopiedFiles(new=("a.txt",))


def test_custom_tool_prefix() -> None:
    runner = FakeProcessRunner(output="[]")
    rclone = Rclone(runner, tool="/opt/rclone/rclone")

    result = rclone.run("lsjson %s", "remote:")

    assert runner.run_calls == ["/opt/rclone/rclone lsjson remote:"]
    assert result.parsed == JsonListing(value=[])


def test_copy_shortcut_quotes_arguments() -> None:
    runner = FakeProcessRunner()
    rclone = Rclone(runner)

    rclone.copy("my photos/", "remote:photos", "--dry-run")

    assert runner.run_calls == ["rclone copy 'my photos/' remote:photos --dry-run -v"]


def test_md5sum_shortcut_with_spaces_in_path() -> None:
    runner = FakeProcessRunner(output="d41d8cd98f00b204e9800998ecf8427e  a.txt\n")
    rclone = Rclone(runner)

    result = rclone.md5sum("remote:my data/")

    assert result.parsed == ChecksumListing(
        hashes={"remote:my data/a.txt": "d41d8cd98f00b204e9800998ecf8427e"}
    )


def test_lsjson_shortcut_passes_flags() -> None:
    runner = FakeProcessRunner(output="[]")
    rclone = Rclone(runner)

    rclone.lsjson("remote:data", "--recursive", warn="rclone:dirNF")

    assert runner.run_calls == ["rclone lsjson remote:data --recursive"]
