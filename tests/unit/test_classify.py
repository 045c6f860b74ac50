"""Tests for rclone exit status classification."""

import pytest

from rclonekit.classify import (
    Disposition,
    ErrorKind,
    classify,
    kind_for_status,
    matches_warn,
    normalize_warn,
)


@pytest.mark.parametrize(
    ("status", "kind", "identifier"),
    [
        (0, ErrorKind.NONE, ""),
        (1, ErrorKind.SYNTAX, "rclone:syntax"),
        (2, ErrorKind.OTHER, "rclone:other"),
        (3, ErrorKind.DIR_NOT_FOUND, "rclone:dirNF"),
        (4, ErrorKind.FILE_NOT_FOUND, "rclone:fileNF"),
        (5, ErrorKind.RETRY, "rclone:retry"),
        (6, ErrorKind.NO_RETRY, "rclone:noRetry"),
        (7, ErrorKind.FATAL, "rclone:fatal"),
        (8, ErrorKind.MAX_TRANSFER, "rclone:maxTransfer"),
        (9, ErrorKind.UNKNOWN, "rclone:unknown"),
        (127, ErrorKind.UNKNOWN, "rclone:unknown"),
        (-9, ErrorKind.UNKNOWN, "rclone:unknown"),
    ],
)
def test_kind_for_status_table(status: int, kind: ErrorKind, identifier: str) -> None:
    assert kind_for_status(status) is kind
    assert kind.identifier == identifier


def test_short_name_drops_prefix() -> None:
    assert ErrorKind.DIR_NOT_FOUND.short_name == "dirNF"
    assert ErrorKind.NONE.short_name == ""


def test_normalize_warn_accepts_single_identifier() -> None:
    assert normalize_warn("rclone:dirNF") == frozenset({"rclone:dirnf"})


def test_normalize_warn_accepts_collection() -> None:
    assert normalize_warn(["rclone:dirNF", "RCLONE:fileNF"]) == frozenset(
        {"rclone:dirnf", "rclone:filenf"}
    )


def test_normalize_warn_none_is_empty() -> None:
    assert normalize_warn(None) == frozenset()


def test_matches_warn_is_case_insensitive_and_accepts_short_form() -> None:
    assert matches_warn(ErrorKind.DIR_NOT_FOUND, normalize_warn("RCLONE:DIRNF"))
    assert matches_warn(ErrorKind.DIR_NOT_FOUND, normalize_warn("dirnf"))
    assert not matches_warn(ErrorKind.FILE_NOT_FOUND, normalize_warn("dirnf"))


def test_matches_warn_never_matches_none() -> None:
    assert not matches_warn(ErrorKind.NONE, normalize_warn(""))


def test_classify_success_never_aborts() -> None:
    classification = classify(0, warn=None)

    assert classification.kind is ErrorKind.NONE
    assert classification.disposition is Disposition.NONE
    assert not classification.is_error
    assert not classification.aborts


def test_classify_unsuppressed_error_fails() -> None:
    classification = classify(3)

    assert classification.kind is ErrorKind.DIR_NOT_FOUND
    assert classification.disposition is Disposition.FAIL
    assert classification.aborts


def test_classify_suppressed_error_warns() -> None:
    classification = classify(3, warn="rclone:dirNF")

    assert classification.kind is ErrorKind.DIR_NOT_FOUND
    assert classification.disposition is Disposition.WARN
    assert classification.is_error
    assert not classification.aborts


def test_classify_suppression_of_other_kind_still_fails() -> None:
    classification = classify(7, warn=["rclone:dirNF", "rclone:retry"])

    assert classification.kind is ErrorKind.FATAL
    assert classification.disposition is Disposition.FAIL


def test_classify_unknown_status_can_be_suppressed() -> None:
    classification = classify(42, warn=("rclone:unknown",))

    assert classification.kind is ErrorKind.UNKNOWN
    assert classification.disposition is Disposition.WARN
