"""Upload and batch size limits for ONIX imports."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from onix_import.domain.validation import DEFAULT_MAX_FILE_BYTES, DEFAULT_MAX_PRODUCTS

from .env import optional_int_env

MAX_FILE_BYTES_ENV: Final[str] = "ONIX_IMPORT_MAX_FILE_BYTES"
MAX_PRODUCTS_ENV: Final[str] = "ONIX_IMPORT_MAX_PRODUCTS"


@dataclass(frozen=True, slots=True)
class ImportLimits:
    """Bounds that keep a single import invocation cheap."""

    max_file_bytes: int = DEFAULT_MAX_FILE_BYTES
    max_products: int = DEFAULT_MAX_PRODUCTS


def get_import_limits() -> ImportLimits:
    return ImportLimits(
        max_file_bytes=optional_int_env(MAX_FILE_BYTES_ENV, default=DEFAULT_MAX_FILE_BYTES),
        max_products=optional_int_env(MAX_PRODUCTS_ENV, default=DEFAULT_MAX_PRODUCTS),
    )
