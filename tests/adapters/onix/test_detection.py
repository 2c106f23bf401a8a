from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from onix_import.adapters.onix import (
    StructureCheck,
    detect_onix_version,
    estimate_product_count,
    validate_onix_structure,
)
from onix_import.adapters.onix.detection import root_element_name
from onix_import.domain.enums import OnixVersion

if TYPE_CHECKING:
    from collections.abc import Callable


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("onix31_sample.xml", OnixVersion.V3_1),
        ("onix31_batch.xml", OnixVersion.V3_1),
        ("onix30_sample.xml", OnixVersion.V3_0),
        ("onix21_reference.xml", OnixVersion.V2_1),
        ("onix21_short_tags.xml", OnixVersion.V2_1),
        ("onix21_short_composites.xml", OnixVersion.V2_1),
        ("not_onix.xml", OnixVersion.UNKNOWN),
    ],
)
def test_detects_fixture_versions(
    onix_text: Callable[[str], str], name: str, expected: OnixVersion
) -> None:
    assert detect_onix_version(onix_text(name)) is expected


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        (
            '<ONIXMessage release="3.0" xmlns="http://ns.editeur.org/onix/3.1/reference">',
            OnixVersion.V3_0,
        ),
        ("<ONIXMessage RELEASE='3.1'><Product/></ONIXMessage>", OnixVersion.V3_1),
        ('<ONIXMessage xmlns="http://ns.editeur.org/onix/3.1/short">', OnixVersion.V3_1),
        ('<o:ONIXMessage xmlns:o="http://ns.editeur.org/onix/3.0/reference">', OnixVersion.V3_0),
        ("<ONIXmessage><product/></ONIXmessage>", OnixVersion.V2_1),
        ("<ONIXMessage><Product><EAN13>9780306406157</EAN13></Product>", OnixVersion.V2_1),
        ('<ONIXMessage release="2.0"><Product/></ONIXMessage>', OnixVersion.UNKNOWN),
        ("", OnixVersion.UNKNOWN),
    ],
)
def test_detection_signals(text: str, expected: OnixVersion) -> None:
    assert detect_onix_version(text) is expected


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ('<?xml version="1.0"?>\n<ONIXMessage/>', "ONIXMessage"),
        ("<!DOCTYPE ONIXMessage SYSTEM 'x.dtd'><ONIXMessage/>", "ONIXMessage"),
        ("<!-- <Catalog> --><ONIXMessage/>", "ONIXMessage"),
        ('<onix:ONIXMessage xmlns:onix="urn:x"/>', "ONIXMessage"),
        ("no markup here", None),
    ],
)
def test_root_element_name(text: str, expected: str | None) -> None:
    assert root_element_name(text) == expected


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("onix31_batch.xml", 4),
        ("onix31_sample.xml", 1),
        ("onix21_short_composites.xml", 1),
        ("not_onix.xml", 0),
    ],
)
def test_estimate_product_count(
    onix_text: Callable[[str], str], name: str, expected: int
) -> None:
    assert estimate_product_count(onix_text(name)) == expected


def test_estimate_ignores_longer_tag_names() -> None:
    text = "<ONIXMessage><Product><ProductIdentifier/><ProductForm/></Product></ONIXMessage>"

    assert estimate_product_count(text) == 1


def test_structure_accepts_onix(onix_text: Callable[[str], str]) -> None:
    assert validate_onix_structure(onix_text("onix31_sample.xml")) == StructureCheck(is_valid=True)


@pytest.mark.parametrize(
    ("text", "error"),
    [
        ("<NotAnONIXMessage><Product/></NotAnONIXMessage>", "not an ONIX message root element"),
        ("plain text", "not an ONIX message root element"),
        ("<ONIXMessage><Header/></ONIXMessage>", "no Product records"),
    ],
)
def test_structure_rejections(text: str, error: str) -> None:
    check = validate_onix_structure(text)

    assert not check.is_valid
    assert check.error == error
