from __future__ import annotations

import pytest

from onix_import.adapters.onix import (
    SUPPORTED_VERSIONS,
    Onix3Parser,
    Onix21Parser,
    get_parser,
    is_version_supported,
)
from onix_import.domain.enums import OnixVersion
from onix_import.domain.errors import UnsupportedVersionError


@pytest.mark.parametrize(
    ("version", "parser_type"),
    [
        (OnixVersion.V3_1, Onix3Parser),
        (OnixVersion.V3_0, Onix3Parser),
        (OnixVersion.V2_1, Onix21Parser),
        ("3.0", Onix3Parser),
        ("2.1", Onix21Parser),
    ],
)
def test_get_parser(version: OnixVersion | str, parser_type: type[object]) -> None:
    parser = get_parser(version)

    assert isinstance(parser, parser_type)
    assert parser.version == version


@pytest.mark.parametrize("version", [OnixVersion.UNKNOWN, "2.0", "4.0", ""])
def test_get_parser_rejects_unsupported(version: OnixVersion | str) -> None:
    with pytest.raises(UnsupportedVersionError, match="Unsupported ONIX version"):
        get_parser(version)


def test_supported_versions() -> None:
    assert SUPPORTED_VERSIONS == {OnixVersion.V2_1, OnixVersion.V3_0, OnixVersion.V3_1}
    assert is_version_supported("3.1")
    assert is_version_supported(OnixVersion.V2_1)
    assert not is_version_supported(OnixVersion.UNKNOWN)
    assert not is_version_supported("2.0")


def test_parsers_are_fresh_instances() -> None:
    assert get_parser(OnixVersion.V3_1) is not get_parser(OnixVersion.V3_1)
