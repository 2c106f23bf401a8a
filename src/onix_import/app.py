"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from onix_import.adapters.onix import (
    decode_onix_bytes,
    detect_onix_version,
    estimate_product_count,
    get_parser,
    is_version_supported,
    validate_onix_structure,
)
from onix_import.config import ImportLimits, get_import_limits
from onix_import.domain.enums import OnixVersion
from onix_import.domain.mapping import collect_unmapped_fields, map_products
from onix_import.domain.types import ImportResult
from onix_import.domain.validation import (
    apply_product_validation,
    check_duplicate_isbns,
    collect_errors,
    validate_file_constraints,
    validate_product_count,
)

if TYPE_CHECKING:
    from onix_import.domain.validation import FileMetadata


log = getLogger(__name__)


def _rejected(error: str, version: OnixVersion = OnixVersion.UNKNOWN) -> ImportResult:
    log.info("Rejected ONIX upload: %s", error)
    return ImportResult(version=version, structural_error=error)


def import_onix_upload(
    data: bytes,
    upload: FileMetadata,
    *,
    tenant_id: str,
    limits: ImportLimits | None = None,
) -> ImportResult:
    """Run one uploaded ONIX file through the whole import pipeline.

    Whole-document problems (file constraints, structure, unknown dialect, batch size)
    come back as ``ImportResult.structural_error`` with no products. Everything else is
    accumulated per product so one bad record never hides the rest of the batch.
    """

    effective_limits = limits or get_import_limits()
    log.info(
        "Starting ONIX import: file=%s, size=%s, tenant=%s",
        upload.name,
        upload.size,
        tenant_id,
    )

    constraints = validate_file_constraints(upload, max_bytes=effective_limits.max_file_bytes)
    if not constraints.valid:
        return _rejected(constraints.error or "File rejected")

    text = decode_onix_bytes(data)

    structure = validate_onix_structure(text)
    if not structure.is_valid:
        return _rejected(structure.error or "Invalid ONIX structure")

    count_check = validate_product_count(
        estimate_product_count(text), max_products=effective_limits.max_products
    )
    if not count_check.valid:
        return _rejected(count_check.error or "Invalid product count")

    version = detect_onix_version(text)
    if not is_version_supported(version):
        return _rejected("Unable to detect ONIX version (expected 2.1, 3.0 or 3.1)")

    message = get_parser(version).parse(text)
    if len(message.products) > effective_limits.max_products:
        return _rejected(
            f"Too many products ({len(message.products)}). "
            f"Maximum is {effective_limits.max_products} per import.",
            version,
        )

    mapped = map_products(message.products, tenant_id)
    for title, product in zip(mapped, message.products, strict=True):
        apply_product_validation(title, product)
    check_duplicate_isbns(mapped)

    result = ImportResult(
        version=message.version,
        header=message.header,
        products=mapped,
        parsing_errors=list(message.parsing_errors),
        validation_errors=collect_errors((), mapped),
        unmapped_fields_summary=collect_unmapped_fields(mapped),
    )

    log.info(
        "Finished ONIX %s import: products=%s, valid=%s, invalid=%s, parsing_errors=%s",
        result.version,
        len(result.products),
        result.valid_count,
        result.invalid_count,
        len(result.parsing_errors),
    )
    return result
