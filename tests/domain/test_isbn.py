from __future__ import annotations

import pytest

from onix_import.domain.isbn import (
    is_valid_isbn10,
    is_valid_isbn13,
    isbn10_to_isbn13,
    normalize_isbn,
)


@pytest.mark.parametrize(
    "value",
    ["9780306406157", "9780131103627", "9780140449136", "9791000000008"],
)
def test_is_valid_isbn13_accepts_correct_check_digits(value: str) -> None:
    assert is_valid_isbn13(value)


@pytest.mark.parametrize(
    "value",
    [
        "9780306406158",  # wrong check digit
        "978030640615",  # twelve digits
        "97803064061570",  # fourteen digits
        "978-0306406157",  # separators are not normalised here
        "978030640615X",
        "",
        None,
    ],
)
def test_is_valid_isbn13_rejects_malformed_values(value: str | None) -> None:
    assert not is_valid_isbn13(value)


def test_every_wrong_check_digit_is_rejected() -> None:
    valid = "9780306406157"
    for digit in "012345689":
        assert not is_valid_isbn13(valid[:12] + digit)


def test_isbn10_to_isbn13_recomputes_check_digit() -> None:
    assert isbn10_to_isbn13("0306406152") == "9780306406157"
    assert isbn10_to_isbn13("0-306-40615-2") == "9780306406157"
    assert isbn10_to_isbn13("080442957X") == "9780804429573"


def test_isbn10_to_isbn13_rejects_wrong_length() -> None:
    assert isbn10_to_isbn13("030640615") is None
    assert isbn10_to_isbn13("9780306406157") is None


def test_isbn10_to_isbn13_rejects_wrong_check_digit() -> None:
    assert isbn10_to_isbn13("0306406153") is None
    assert isbn10_to_isbn13("0-306-40615-X") is None


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("0306406152", True),
        ("080442957X", True),
        ("080442957x", True),
        ("0306406153", False),
        ("0804429570", False),
        ("03064061X2", False),
        ("030640615", False),
        (None, False),
    ],
)
def test_is_valid_isbn10(value: str | None, expected: bool) -> None:
    assert is_valid_isbn10(value) is expected


def test_normalize_isbn_strips_separators() -> None:
    assert normalize_isbn(" 978-0-306-40615-7 ") == "9780306406157"
