from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from pydantic import ValidationError

from onix_import.adapters.onix import UploadedFile

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path


def test_accepts_wire_alias_and_ignores_extras() -> None:
    upload = UploadedFile.model_validate(
        {"name": "feed.xml", "size": 120, "mimeType": "application/xml", "lastModified": 1}
    )

    assert upload == UploadedFile(name="feed.xml", size=120, type="application/xml")


def test_missing_mime_type_is_blank() -> None:
    upload = UploadedFile.model_validate({"name": "feed.onix", "size": 1, "mimeType": None})

    assert upload.type == ""
    assert UploadedFile(name="feed.onix", size=1).type == ""


def test_rejects_negative_size() -> None:
    with pytest.raises(ValidationError):
        UploadedFile(name="feed.xml", size=-1)


def test_from_path(onix_path: Callable[[str], Path]) -> None:
    path = onix_path("onix31_sample.xml")

    upload = UploadedFile.from_path(path)

    assert upload.name == "onix31_sample.xml"
    assert upload.size == path.stat().st_size
    assert upload.type in {"application/xml", "text/xml"}
