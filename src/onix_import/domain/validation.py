"""Validation rules for ONIX imports.

Per-product problems are returned as ``ValidationError`` rows attached to the owning
``MappedTitle``; upload-level problems are returned as a ``ConstraintCheck``. Nothing in
this module raises for bad input.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Final, Protocol

from .enums import Severity
from .isbn import is_valid_isbn13
from .types import ImportIssue, ValidationError

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from .types import MappedTitle, ParsedProduct, ParsingError


log = getLogger(__name__)

ACCEPTED_MIME_TYPES: Final = frozenset(
    {
        "text/xml",
        "application/xml",
        "application/x-xml",
        "text/plain",  # some browsers report XML uploads as plain text
    }
)
DEFAULT_MAX_FILE_BYTES: Final = 10 * 1024 * 1024
DEFAULT_MAX_PRODUCTS: Final = 500
MAX_TITLE_LENGTH: Final = 500
EARLIEST_PUBLICATION_YEAR: Final = 1450
LATEST_PUBLICATION_YEAR: Final = 2100
_ROLE_CODE: Final = re.compile(r"^[A-Z]\d{2}$")


class FileMetadata(Protocol):
    """Declared metadata of an uploaded file."""

    @property
    def name(self) -> str: ...

    @property
    def size(self) -> int: ...

    @property
    def type(self) -> str: ...


@dataclass(frozen=True, slots=True)
class ConstraintCheck:
    valid: bool
    error: str | None = None


_OK: Final = ConstraintCheck(valid=True)


def validate_file_constraints(
    file: FileMetadata,
    *,
    max_bytes: int = DEFAULT_MAX_FILE_BYTES,
) -> ConstraintCheck:
    """Reject uploads that are not XML, are empty, or exceed ``max_bytes``."""

    _, dot, extension = file.name.lower().rpartition(".")
    if not dot or extension != "xml":
        return ConstraintCheck(valid=False, error="File must have .xml extension")

    mime_type = (file.type or "").split(";")[0].strip().lower()
    if mime_type and mime_type not in ACCEPTED_MIME_TYPES:
        return ConstraintCheck(valid=False, error=f"Unsupported file type: {file.type}")

    if file.size <= 0:
        return ConstraintCheck(valid=False, error="File is empty")

    if file.size > max_bytes:
        size_mb = round(file.size / 1024 / 1024)
        limit_mb = round(max_bytes / 1024 / 1024)
        return ConstraintCheck(
            valid=False,
            error=f"File size ({size_mb}MB) exceeds {limit_mb}MB limit",
        )

    return _OK


def validate_product_count(count: int, max_products: int = DEFAULT_MAX_PRODUCTS) -> ConstraintCheck:
    if count <= 0:
        return ConstraintCheck(valid=False, error="ONIX file contains no products to import")
    if count > max_products:
        return ConstraintCheck(
            valid=False,
            error=f"Too many products ({count}). Maximum is {max_products} per import.",
        )
    return _OK


def validate_import_product(product: ParsedProduct) -> list[ValidationError]:
    """Check one parsed product against the catalog's field rules."""

    errors: list[ValidationError] = []

    if not product.isbn13:
        errors.append(ValidationError(field="isbn", message="ISBN-13 is required for import"))
    elif not is_valid_isbn13(product.isbn13):
        errors.append(
            ValidationError(field="isbn", message="Invalid ISBN-13 checksum", value=product.isbn13)
        )

    if not product.title or not product.title.strip():
        errors.append(ValidationError(field="title", message="Title is required"))
    elif len(product.title) > MAX_TITLE_LENGTH:
        errors.append(
            ValidationError(
                field="title",
                message=f"Title exceeds maximum length ({MAX_TITLE_LENGTH} characters)",
                value=f"{product.title[:50]}...",
            )
        )

    if product.subtitle and len(product.subtitle) > MAX_TITLE_LENGTH:
        errors.append(
            ValidationError(
                field="subtitle",
                message=f"Subtitle exceeds maximum length ({MAX_TITLE_LENGTH} characters)",
                value=f"{product.subtitle[:50]}...",
            )
        )

    if product.publication_date is not None:
        year = product.publication_date.year
        if not EARLIEST_PUBLICATION_YEAR <= year <= LATEST_PUBLICATION_YEAR:
            errors.append(
                ValidationError(
                    field="publicationDate",
                    message=(
                        "Publication date year is out of valid range "
                        f"({EARLIEST_PUBLICATION_YEAR}-{LATEST_PUBLICATION_YEAR})"
                    ),
                    value=product.publication_date.isoformat(),
                )
            )

    for position, contributor in enumerate(product.contributors):
        has_name = (
            contributor.person_name_inverted
            or contributor.person_name
            or (contributor.names_before_key and contributor.key_names)
            or contributor.corporate_name
        )
        if not has_name:
            errors.append(
                ValidationError(
                    field=f"contributors[{position}]",
                    message=f"Contributor {position + 1} has no identifiable name",
                )
            )
        if contributor.role and not _ROLE_CODE.match(contributor.role):
            errors.append(
                ValidationError(
                    field=f"contributors[{position}].role",
                    message=f"Invalid contributor role code: {contributor.role}",
                    value=contributor.role,
                )
            )

    return errors


def apply_product_validation(mapped: MappedTitle, product: ParsedProduct) -> None:
    """Attach product-level errors to ``mapped`` without repeating ones it already carries."""

    for error in validate_import_product(product):
        if any(
            existing.field == error.field and existing.message == error.message
            for existing in mapped.validation_errors
        ):
            continue
        mapped.add_error(error)


def check_duplicate_isbns(mapped_titles: Iterable[MappedTitle]) -> list[ImportIssue]:
    """Flag every repeat of an ISBN after its first occurrence (in ``raw_index`` order).

    The error is returned as a report row and also attached to the repeated title.
    """

    first_seen: dict[str, int] = {}
    issues: list[ImportIssue] = []

    for mapped in sorted(mapped_titles, key=lambda item: item.raw_index):
        isbn = mapped.title.isbn
        if not isbn:
            continue
        if isbn not in first_seen:
            first_seen[isbn] = mapped.raw_index
            continue

        message = f"Duplicate ISBN in import file (also at product {first_seen[isbn] + 1})"
        mapped.add_error(ValidationError(field="isbn", message=message, value=isbn))
        issues.append(
            ImportIssue(
                field="isbn",
                message=message,
                product_index=mapped.raw_index,
                record_reference=mapped.record_reference or None,
            )
        )

    if issues:
        log.info("Found %s duplicate ISBN rows in batch", len(issues))
    return issues


def collect_errors(
    parsing_errors: Iterable[ParsingError],
    mapped_titles: Iterable[MappedTitle],
) -> list[ImportIssue]:
    """Flatten parsing and validation problems into report rows."""

    issues = [
        ImportIssue(
            field=error.field,
            message=error.message,
            product_index=error.product_index,
            record_reference=error.record_reference,
            severity=error.severity,
        )
        for error in parsing_errors
    ]
    for mapped in mapped_titles:
        issues.extend(
            ImportIssue(
                field=error.field,
                message=error.message,
                product_index=mapped.raw_index,
                record_reference=mapped.record_reference or None,
                severity=Severity.ERROR,
            )
            for error in mapped.validation_errors
        )
    return issues


@dataclass(frozen=True, slots=True)
class BatchSummary:
    valid_count: int
    invalid_count: int


def summarize_batch(mapped_titles: Sequence[MappedTitle]) -> BatchSummary:
    valid = sum(1 for mapped in mapped_titles if mapped.is_clean)
    return BatchSummary(valid_count=valid, invalid_count=len(mapped_titles) - valid)
