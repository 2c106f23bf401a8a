"""Parser for ONIX 2.1 messages in reference-tag or short-tag spelling.

ONIX 2.1 is flatter than 3.x: identifiers, titles and dates usually sit directly on the
``Product`` record, and contributor names may arrive as a single unsplit ``PersonName``.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Final

from onix_import.domain.enums import OnixVersion
from onix_import.domain.isbn import isbn10_to_isbn13, normalize_isbn
from onix_import.domain.types import Contributor, MessageHeader, ParsedProduct, Price, Subject

from .short_tags import expand_short_tags
from .tree import (
    child_text,
    children,
    parse_message,
    parse_onix_date,
    parse_sequence_number,
)

if TYPE_CHECKING:
    from onix_import.domain.types import ParsedMessage

    from .tree import Element


log = getLogger(__name__)

_ROOT_NAMES: Final = frozenset({"ONIXMessage", "ONIXmessage", "onixmessage"})
_ISBN13_TYPES: Final = frozenset({"15", "ISBN-13"})
_GTIN13_TYPES: Final = frozenset({"03", "GTIN-13"})
_ISBN10_TYPES: Final = frozenset({"02", "ISBN-10"})
_BOOKLAND_PREFIXES: Final = ("978", "979")
_DISTINCTIVE_TITLE: Final = "01"
# Codelist 26 (subject scheme identifier)
_BISAC_SCHEME: Final = "10"
_BIC_SCHEME: Final = "12"


class Onix21Parser:
    version = OnixVersion.V2_1

    def parse(self, text: str) -> ParsedMessage:
        expanded = expand_short_tags(text)
        if expanded != text:
            log.debug("Expanded ONIX 2.1 short tags")
        return parse_message(
            expanded,
            version=self.version,
            root_names=_ROOT_NAMES,
            read_header=read_header,
            read_product=read_product,
        )


def read_header(header: Element | None) -> MessageHeader | None:
    if header is None:
        return None
    return MessageHeader(
        sender_name=child_text(header, "FromCompany", "FromPerson"),
        sender_email=child_text(header, "FromEmail"),
        sent_date_time=child_text(header, "SentDate"),
    )


def read_product(product: Element, index: int) -> ParsedProduct:
    isbn13, gtin13 = _read_identifiers(product)
    title, subtitle = _read_title(product)

    return ParsedProduct(
        record_reference=child_text(product, "RecordReference") or "",
        isbn13=isbn13,
        gtin13=gtin13,
        title=title,
        subtitle=subtitle,
        contributors=_read_contributors(product),
        product_form=child_text(product, "ProductForm"),
        publishing_status=child_text(product, "PublishingStatus"),
        publication_date=parse_onix_date(child_text(product, "PublicationDate")),
        prices=_read_prices(product),
        subjects=_read_subjects(product),
        raw_index=index,
    )


def _is_bookland(value: str | None) -> bool:
    return value is not None and value.startswith(_BOOKLAND_PREFIXES)


def _read_identifiers(product: Element) -> tuple[str | None, str | None]:
    isbn13: str | None = None
    gtin13: str | None = None

    flat_isbn = child_text(product, "ISBN")
    if flat_isbn is not None:
        cleaned = normalize_isbn(flat_isbn)
        # anything that is not a valid ISBN-10 is kept as-is for checksum validation
        isbn13 = (isbn10_to_isbn13(cleaned) if len(cleaned) == 10 else None) or cleaned

    ean = child_text(product, "EAN13")
    if ean is not None:
        gtin13 = normalize_isbn(ean)
        if isbn13 is None and _is_bookland(gtin13):
            isbn13 = gtin13

    for identifier in children(product, "ProductIdentifier"):
        id_type = child_text(identifier, "ProductIDType")
        value = child_text(identifier, "IDValue")
        if value is None:
            continue
        value = normalize_isbn(value)
        if id_type in _ISBN13_TYPES:
            isbn13 = value
        elif id_type in _GTIN13_TYPES:
            gtin13 = value
            if isbn13 is None and _is_bookland(value):
                isbn13 = value
        elif id_type in _ISBN10_TYPES and isbn13 is None:
            isbn13 = isbn10_to_isbn13(value) or value

    return isbn13, gtin13


def _join_prefix(prefix: str | None, text: str) -> str:
    return f"{prefix} {text}".strip() if prefix else text


def _read_title(product: Element) -> tuple[str, str | None]:
    subtitle = child_text(product, "Subtitle")

    title = child_text(product, "DistinctiveTitle", "TitleText")
    if title is None:
        without_prefix = child_text(product, "TitleWithoutPrefix")
        if without_prefix is not None:
            title = _join_prefix(child_text(product, "TitlePrefix"), without_prefix)
    if title is not None:
        return title, subtitle

    for composite in children(product, "Title"):
        if (child_text(composite, "TitleType") or _DISTINCTIVE_TITLE) != _DISTINCTIVE_TITLE:
            continue
        text = (
            child_text(composite, "TitleText", "DistinctiveTitle", "TitleWithoutPrefix") or ""
        )
        return (
            _join_prefix(child_text(composite, "TitlePrefix"), text),
            child_text(composite, "Subtitle") or subtitle,
        )

    return "", subtitle


def _read_contributors(product: Element) -> tuple[Contributor, ...]:
    contributors = [
        Contributor(
            sequence_number=parse_sequence_number(child_text(node, "SequenceNumber"), position + 1),
            role=child_text(node, "ContributorRole") or "A01",
            person_name_inverted=child_text(node, "PersonNameInverted"),
            names_before_key=child_text(node, "NamesBeforeKey"),
            key_names=child_text(node, "KeyNames"),
            corporate_name=child_text(node, "CorporateName"),
            person_name=child_text(node, "PersonName"),
        )
        for position, node in enumerate(children(product, "Contributor"))
    ]
    return tuple(sorted(contributors, key=lambda contributor: contributor.sequence_number))


def _read_prices(product: Element) -> tuple[Price, ...]:
    return tuple(
        Price(
            price_type=child_text(price, "PriceTypeCode"),
            amount=child_text(price, "PriceAmount"),
            currency=child_text(price, "CurrencyCode"),
        )
        for detail in children(product, "SupplyDetail")
        for price in children(detail, "Price")
    )


def _read_subjects(product: Element) -> tuple[Subject, ...]:
    subjects: list[Subject] = []

    bisac = child_text(product, "BASICMainSubject")
    if bisac is not None:
        subjects.append(Subject(scheme_identifier=_BISAC_SCHEME, code=bisac, heading_text=None))

    bic = child_text(product, "BICMainSubject")
    if bic is not None:
        subjects.append(Subject(scheme_identifier=_BIC_SCHEME, code=bic, heading_text=None))

    subjects.extend(
        Subject(
            scheme_identifier=child_text(subject, "SubjectSchemeIdentifier"),
            code=child_text(subject, "SubjectCode"),
            heading_text=child_text(subject, "SubjectHeadingText"),
        )
        for subject in children(product, "Subject")
    )
    return tuple(subjects)
