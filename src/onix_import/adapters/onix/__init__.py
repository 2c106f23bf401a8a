"""Public interface for the ONIX adapter."""

from __future__ import annotations

from typing import TYPE_CHECKING

from onix_import.domain.enums import OnixVersion
from onix_import.domain.errors import UnsupportedVersionError

from .detection import (
    StructureCheck,
    detect_onix_version,
    estimate_product_count,
    validate_onix_structure,
)
from .encoding import decode_onix_bytes
from .onix3 import Onix3Parser
from .onix21 import Onix21Parser
from .schema import UploadedFile
from .short_tags import expand_short_tags, has_short_tags, reference_tag_for

if TYPE_CHECKING:
    from onix_import.domain.ports import OnixParser

SUPPORTED_VERSIONS = frozenset({OnixVersion.V2_1, OnixVersion.V3_0, OnixVersion.V3_1})


def is_version_supported(version: OnixVersion | str) -> bool:
    return version in SUPPORTED_VERSIONS


def get_parser(version: OnixVersion | str) -> OnixParser:
    """Return a fresh parser for ``version``; raises ``UnsupportedVersionError`` otherwise."""

    match version:
        case OnixVersion.V3_0 | OnixVersion.V3_1:
            return Onix3Parser(OnixVersion(version))
        case OnixVersion.V2_1:
            return Onix21Parser()
        case _:
            raise UnsupportedVersionError(f"Unsupported ONIX version: {version}")


__all__ = [
    "SUPPORTED_VERSIONS",
    "Onix21Parser",
    "Onix3Parser",
    "StructureCheck",
    "UploadedFile",
    "decode_onix_bytes",
    "detect_onix_version",
    "estimate_product_count",
    "expand_short_tags",
    "get_parser",
    "has_short_tags",
    "is_version_supported",
    "reference_tag_for",
    "validate_onix_structure",
]
