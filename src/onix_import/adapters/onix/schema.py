"""Pydantic models describing an uploaded ONIX file."""

from __future__ import annotations

import mimetypes
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, field_validator

if TYPE_CHECKING:
    from pathlib import Path


class UploadedFile(BaseModel):
    """Metadata the browser (or caller) declares for an upload."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    name: str
    size: int = Field(ge=0)
    type: str = Field(default="", alias="mimeType")

    @field_validator("type", mode="before")
    @classmethod
    def _none_to_blank(cls, value: object) -> object:
        return "" if value is None else value

    @classmethod
    def from_path(cls, path: Path) -> UploadedFile:
        mime_type, _ = mimetypes.guess_type(path.name)
        return cls(name=path.name, size=path.stat().st_size, type=mime_type or "")
