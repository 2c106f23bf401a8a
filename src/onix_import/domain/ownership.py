"""Ownership percentage splits across the contributors of a title."""

from __future__ import annotations

from decimal import ROUND_DOWN, Decimal
from typing import TYPE_CHECKING, Final

from .errors import OwnershipSplitError
from .types import OwnershipSplit

if TYPE_CHECKING:
    from collections.abc import Sequence

HUNDRED: Final = Decimal("100.00")
CENT: Final = Decimal("0.01")


def _format(value: Decimal) -> str:
    return str(value.quantize(CENT))


def calculate_equal_split(contact_ids: Sequence[str]) -> list[OwnershipSplit]:
    """Split 100% equally, giving the rounding remainder to the last contact.

    The first contact in input order is the primary owner. Percentages always sum to
    exactly ``"100.00"``.
    """

    count = len(contact_ids)
    if count == 0:
        return []

    base = (HUNDRED / count).quantize(CENT, rounding=ROUND_DOWN)
    last = HUNDRED - base * (count - 1)
    return [
        OwnershipSplit(
            contact_id=contact_id,
            percentage=_format(last if index == count - 1 else base),
            is_primary=index == 0,
        )
        for index, contact_id in enumerate(contact_ids)
    ]


def apply_ownership_overrides(overrides: Sequence[OwnershipSplit]) -> list[OwnershipSplit]:
    """Validate caller-supplied splits and normalise them to two decimal places."""

    if not overrides:
        raise OwnershipSplitError("Ownership overrides must name at least one contact")

    total = Decimal(0)
    normalized: list[OwnershipSplit] = []
    for split in overrides:
        try:
            percentage = Decimal(split.percentage)
        except ArithmeticError as exc:
            raise OwnershipSplitError(
                f"Invalid ownership percentage for {split.contact_id}: {split.percentage!r}"
            ) from exc
        if not percentage.is_finite() or percentage <= 0:
            raise OwnershipSplitError(
                f"Ownership percentage for {split.contact_id} must be positive"
            )
        if percentage != percentage.quantize(CENT):
            raise OwnershipSplitError(
                f"Ownership percentage for {split.contact_id} has more than two decimals"
            )
        total += percentage
        normalized.append(
            OwnershipSplit(
                contact_id=split.contact_id,
                percentage=_format(percentage),
                is_primary=split.is_primary,
            )
        )

    if total != HUNDRED:
        raise OwnershipSplitError(f"Ownership percentages must total 100.00, got {_format(total)}")
    primaries = sum(1 for split in normalized if split.is_primary)
    if primaries != 1:
        raise OwnershipSplitError(f"Exactly one primary owner is required, got {primaries}")
    return normalized
