"""Namespace-agnostic lxml helpers shared by the ONIX dialect parsers."""

from __future__ import annotations

import re
from datetime import date
from logging import getLogger
from typing import TYPE_CHECKING, Final, TypeAlias

from lxml import etree

from onix_import.domain.types import MessageHeader, ParsedMessage, ParsingError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from onix_import.domain.enums import OnixVersion
    from onix_import.domain.types import ParsedProduct

    Element: TypeAlias = etree._Element  # pyright: ignore[reportPrivateUsage]


log = getLogger(__name__)

_NON_DIGITS: Final = re.compile(r"\D")


def secure_parser() -> etree.XMLParser:
    """Return a fresh parser that never touches the network or expands entities.

    The document is always handed over as UTF-8 bytes, so the prolog's declared encoding
    is overridden.
    """

    return etree.XMLParser(
        encoding="utf-8",
        resolve_entities=False,
        no_network=True,
        load_dtd=False,
        huge_tree=False,
        remove_comments=True,
        remove_pis=True,
    )


def parse_document(text: str) -> Element:
    """Parse ``text`` into its root element; raises ``etree.XMLSyntaxError`` when malformed."""

    return etree.fromstring(text.encode("utf-8"), parser=secure_parser())


def localname(element: Element) -> str:
    tag = element.tag
    if not isinstance(tag, str):
        return ""
    return etree.QName(tag).localname


def children(element: Element | None, name: str) -> Iterator[Element]:
    """Yield direct children of ``element`` whose local name is ``name``."""

    if element is None:
        return
    for node in element:
        if localname(node) == name:
            yield node


def child(element: Element | None, name: str) -> Element | None:
    return next(children(element, name), None)


def text_of(element: Element | None) -> str | None:
    if element is None:
        return None
    value = "".join(element.itertext()).strip()
    return value or None


def child_text(element: Element | None, *names: str) -> str | None:
    """Return the text of the first named child that has any; names are tried in order."""

    for name in names:
        for node in children(element, name):
            value = text_of(node)
            if value is not None:
                return value
    return None


def parse_onix_date(value: str | None) -> date | None:
    """Parse an ONIX date (``YYYYMMDD``, ``YYYYMM`` or ``YYYY``; separators ignored).

    Month-only values resolve to the first of the month, year-only values to January 1st.
    Impossible dates such as ``20251340`` give None.
    """

    if not value:
        return None
    digits = _NON_DIGITS.sub("", value)
    try:
        if len(digits) >= 8:
            return date(int(digits[:4]), int(digits[4:6]), int(digits[6:8]))
        if len(digits) >= 6:
            return date(int(digits[:4]), int(digits[4:6]), 1)
        if len(digits) >= 4:
            return date(int(digits[:4]), 1, 1)
    except ValueError:
        log.debug("Ignoring impossible ONIX date %r", value)
    return None


def parse_sequence_number(value: str | None, fallback: int) -> int:
    if value is None:
        return fallback
    try:
        number = int(value)
    except ValueError:
        return fallback
    return number if number > 0 else fallback


def parse_message(
    text: str,
    *,
    version: OnixVersion,
    root_names: frozenset[str],
    read_header: Callable[[Element | None], MessageHeader | None],
    read_product: Callable[[Element, int], ParsedProduct],
) -> ParsedMessage:
    """Walk one ONIX message, collecting products and per-product failures.

    Malformed XML, an unexpected root or an unreadable header yields a single parsing error
    and no products. A product that fails to read is reported and skipped; the remaining
    products still parse.
    """

    try:
        root = parse_document(text)
    except etree.XMLSyntaxError as exc:
        log.warning("ONIX %s document is not well-formed: %s", version, exc)
        return ParsedMessage(
            version=version,
            header=None,
            products=(),
            parsing_errors=(ParsingError(field="XML", message=str(exc) or "Failed to parse XML"),),
        )

    if localname(root) not in root_names:
        return ParsedMessage(
            version=version,
            header=None,
            products=(),
            parsing_errors=(
                ParsingError(field="ONIXMessage", message="Root ONIXMessage element not found"),
            ),
        )

    try:
        header = read_header(child(root, "Header"))
    except Exception as exc:  # noqa: BLE001
        log.warning("Failed to read ONIX %s header: %s", version, exc)
        return ParsedMessage(
            version=version,
            header=None,
            products=(),
            parsing_errors=(
                ParsingError(field="Header", message=str(exc) or "Failed to parse header"),
            ),
        )

    products: list[ParsedProduct] = []
    errors: list[ParsingError] = []

    for index, node in enumerate(children(root, "Product")):
        try:
            products.append(read_product(node, index))
        except Exception as exc:  # noqa: BLE001
            log.warning("Failed to read ONIX product %s: %s", index, exc)
            errors.append(
                ParsingError(
                    field="Product",
                    message=str(exc) or "Failed to parse product",
                    product_index=index,
                    record_reference=child_text(node, "RecordReference"),
                )
            )

    log.debug("Parsed %s ONIX %s products (%s failed)", len(products), version, len(errors))
    return ParsedMessage(
        version=version,
        header=header,
        products=tuple(products),
        parsing_errors=tuple(errors),
    )
