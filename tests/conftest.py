from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from onix_import.adapters.onix import UploadedFile
from onix_import.config import LOG_LEVEL_ENV, MAX_FILE_BYTES_ENV, MAX_PRODUCTS_ENV, TENANT_ID_ENV
from onix_import.domain.types import ParsedProduct

if TYPE_CHECKING:
    from collections.abc import Callable

ONIX_DATA_DIR = Path(__file__).resolve().parent / "data" / "onix"


@pytest.fixture(autouse=True)
def _clean_import_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (LOG_LEVEL_ENV, MAX_FILE_BYTES_ENV, MAX_PRODUCTS_ENV, TENANT_ID_ENV):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(scope="session")
def onix_path() -> Callable[[str], Path]:
    def resolve(name: str) -> Path:
        return ONIX_DATA_DIR / name

    return resolve


@pytest.fixture(scope="session")
def onix_text(onix_path: Callable[[str], Path]) -> Callable[[str], str]:
    def load(name: str) -> str:
        return onix_path(name).read_text(encoding="utf-8")

    return load


@pytest.fixture(scope="session")
def onix_upload(onix_path: Callable[[str], Path]) -> Callable[[str], tuple[bytes, UploadedFile]]:
    def load(name: str) -> tuple[bytes, UploadedFile]:
        data = onix_path(name).read_bytes()
        return data, UploadedFile(name=name, size=len(data), type="text/xml")

    return load


@pytest.fixture
def make_product() -> Callable[..., ParsedProduct]:
    def build(**overrides: object) -> ParsedProduct:
        values: dict[str, object] = {
            "record_reference": "REF-1",
            "isbn13": "9780306406157",
            "gtin13": None,
            "title": "Test Book Title",
            "subtitle": None,
            "contributors": (),
            "product_form": None,
            "publishing_status": "04",
            "publication_date": date(2025, 1, 15),
            "prices": (),
            "subjects": (),
            "raw_index": 0,
        }
        values.update(overrides)
        return ParsedProduct(**values)  # type: ignore[arg-type]

    return build
