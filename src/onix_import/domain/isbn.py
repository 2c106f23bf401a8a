"""ISBN-10 and ISBN-13 checksum helpers."""

from __future__ import annotations

import re
from typing import Final

_SEPARATORS: Final = re.compile(r"[-\s]")
_ISBN13: Final = re.compile(r"^\d{13}$")
_ISBN10: Final = re.compile(r"^\d{9}[\dXx]$")


def normalize_isbn(value: str) -> str:
    """Strip hyphens and whitespace from an ISBN as typed by humans."""

    return _SEPARATORS.sub("", value)


def _isbn13_check_digit(first_twelve: str) -> int:
    total = sum(
        int(digit) * (1 if index % 2 == 0 else 3) for index, digit in enumerate(first_twelve)
    )
    return (10 - total % 10) % 10


def is_valid_isbn13(value: str | None) -> bool:
    """Return True when ``value`` is thirteen digits with a correct check digit."""

    if not value or not _ISBN13.match(value):
        return False
    return _isbn13_check_digit(value[:12]) == int(value[12])


def is_valid_isbn10(value: str | None) -> bool:
    """Return True when ``value`` is an ISBN-10 whose mod-11 check digit (``X`` = 10) holds."""

    if not value or not _ISBN10.match(value):
        return False
    check = 10 if value[9] in "Xx" else int(value[9])
    total = sum(int(digit) * (10 - index) for index, digit in enumerate(value[:9]))
    return (total + check) % 11 == 0


def isbn10_to_isbn13(value: str) -> str | None:
    """Convert an ISBN-10 into its 978-prefixed ISBN-13.

    Returns None unless ``value`` is a well-formed ISBN-10 with a correct check digit.
    """

    cleaned = normalize_isbn(value)
    if not is_valid_isbn10(cleaned):
        return None
    base = f"978{cleaned[:9]}"
    return f"{base}{_isbn13_check_digit(base)}"
