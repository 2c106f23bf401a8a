from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from onix_import.adapters.onix import expand_short_tags, has_short_tags, reference_tag_for

if TYPE_CHECKING:
    from collections.abc import Callable


@pytest.mark.parametrize(
    ("source", "expected"),
    [
        ("<b004>0306406152</b004>", "<ISBN>0306406152</ISBN>"),
        ("<b004/>", "<ISBN/>"),
        ("<B004>1</B004>", "<ISBN>1</ISBN>"),
        (
            '<b203 textcase="01">Title</b203>',
            '<DistinctiveTitle textcase="01">Title</DistinctiveTitle>',
        ),
        (
            "<product><a001>R1</a001></product>",
            "<Product><RecordReference>R1</RecordReference></Product>",
        ),
        ("<x999>kept</x999>", "<x999>kept</x999>"),
        ("<a001>b004</a001>", "<RecordReference>b004</RecordReference>"),
        ("<onix:b004>1</onix:b004>", "<onix:ISBN>1</onix:ISBN>"),
        ("<o.n-x:b203/>", "<o.n-x:DistinctiveTitle/>"),
        ("<!-- <b004> and </b004> -->", "<!-- <b004> and </b004> -->"),
        (
            "<b036><![CDATA[<b004>x</b004>]]></b036>",
            "<PersonNameInverted><![CDATA[<b004>x</b004>]]></PersonNameInverted>",
        ),
    ],
)
def test_expand_short_tags(source: str, expected: str) -> None:
    assert expand_short_tags(source) == expected


def test_expansion_is_idempotent(onix_text: Callable[[str], str]) -> None:
    once = expand_short_tags(onix_text("onix21_short_tags.xml"))

    assert expand_short_tags(once) == once
    assert "<DistinctiveTitle>Short Tag Book Title</DistinctiveTitle>" in once
    assert "<PersonNameInverted>Writer, The</PersonNameInverted>" in once
    assert not has_short_tags(once)


def test_reference_tags_are_untouched(onix_text: Callable[[str], str]) -> None:
    text = onix_text("onix21_reference.xml")

    assert expand_short_tags(text) == text


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("onix21_short_tags.xml", True),
        ("onix21_short_composites.xml", True),
        ("onix21_reference.xml", False),
        ("onix21_short_tags_reference.xml", False),
        ("onix31_sample.xml", False),
    ],
)
def test_has_short_tags(
    onix_text: Callable[[str], str], name: str, expected: bool
) -> None:
    assert has_short_tags(onix_text(name)) is expected


@pytest.mark.parametrize(
    ("tag", "expected"),
    [
        ("b004", "ISBN"),
        ("B203", "DistinctiveTitle"),
        ("b202", "TitleType"),
        ("j151", "PriceTypeCode"),
        ("m174", "FromCompany"),
        ("z001", None),
    ],
)
def test_reference_tag_for(tag: str, expected: str | None) -> None:
    assert reference_tag_for(tag) == expected


def test_prefixed_short_tags_are_sniffed() -> None:
    assert has_short_tags("<onix:ONIXmessage><onix:b004>1</onix:b004></onix:ONIXmessage>")


def test_comment_spanning_lines_is_untouched() -> None:
    source = "<a001>R</a001><!--\n<b004>old</b004>\n--><b004>new</b004>"

    assert expand_short_tags(source) == (
        "<RecordReference>R</RecordReference><!--\n<b004>old</b004>\n--><ISBN>new</ISBN>"
    )
