"""Heuristic splitting of display names into first and last names."""

from __future__ import annotations

from dataclasses import dataclass

UNKNOWN_LAST_NAME = "Unknown"


@dataclass(frozen=True, slots=True)
class PersonName:
    first_name: str
    last_name: str


def parse_name(full_name: str | None) -> PersonName:
    """Split ``full_name`` on whitespace, treating the last token as the surname.

    Suffixes and multi-word surnames are not special-cased: ``"John Smith Jr."`` yields
    ``first_name="John Smith"`` and ``last_name="Jr."``. Contact deduplication downstream
    relies on this exact rule.
    """

    tokens = (full_name or "").split()
    if not tokens:
        return PersonName(first_name="", last_name=UNKNOWN_LAST_NAME)
    if len(tokens) == 1:
        return PersonName(first_name="", last_name=tokens[0])
    return PersonName(first_name=" ".join(tokens[:-1]), last_name=tokens[-1])


def uninvert_name(inverted: str) -> str:
    """Turn ``"Last, First"`` into ``"First Last"``; names without a comma are returned as-is."""

    last, sep, rest = inverted.partition(",")
    if not sep:
        return inverted.strip()
    return f"{rest.strip()} {last.strip()}".strip()
