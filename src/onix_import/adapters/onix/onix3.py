"""Parser for ONIX 3.0 and 3.1 reference-tag messages."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from onix_import.domain.enums import OnixVersion
from onix_import.domain.errors import UnsupportedVersionError
from onix_import.domain.types import Contributor, MessageHeader, ParsedProduct, Price, Subject

from .tree import (
    child,
    child_text,
    children,
    parse_message,
    parse_onix_date,
    parse_sequence_number,
)

if TYPE_CHECKING:
    from datetime import date

    from onix_import.domain.types import ParsedMessage

    from .tree import Element

# Codelist 5 (product identifier type)
_ISBN13: Final = "15"
_GTIN13: Final = "03"
_DISTINCTIVE_TITLE: Final = "01"
_PRODUCT_LEVEL: Final = "01"
_PUBLICATION_DATE: Final = "01"

_ROOT_NAMES: Final = frozenset({"ONIXMessage"})


class Onix3Parser:
    """Read ONIX 3.x messages; 3.0 and 3.1 differ only in the reported version."""

    def __init__(self, version: OnixVersion = OnixVersion.V3_1) -> None:
        if version not in (OnixVersion.V3_0, OnixVersion.V3_1):
            raise UnsupportedVersionError(f"Onix3Parser cannot read ONIX {version}")
        self.version = version

    def parse(self, text: str) -> ParsedMessage:
        return parse_message(
            text,
            version=self.version,
            root_names=_ROOT_NAMES,
            read_header=read_header,
            read_product=read_product,
        )


def read_header(header: Element | None) -> MessageHeader | None:
    if header is None:
        return None
    sender = child(header, "Sender")
    return MessageHeader(
        sender_name=child_text(sender, "SenderName"),
        sender_email=child_text(sender, "EmailAddress"),
        sent_date_time=child_text(header, "SentDateTime"),
    )


def read_product(product: Element, index: int) -> ParsedProduct:
    descriptive = child(product, "DescriptiveDetail")
    publishing = child(product, "PublishingDetail")
    isbn13, gtin13 = _read_identifiers(product)
    title, subtitle = _read_title(descriptive)

    return ParsedProduct(
        record_reference=child_text(product, "RecordReference") or "",
        isbn13=isbn13,
        gtin13=gtin13,
        title=title,
        subtitle=subtitle,
        contributors=_read_contributors(descriptive),
        product_form=child_text(descriptive, "ProductForm"),
        publishing_status=child_text(publishing, "PublishingStatus"),
        publication_date=_read_publication_date(publishing),
        prices=_read_prices(child(product, "ProductSupply")),
        subjects=_read_subjects(descriptive),
        raw_index=index,
    )


def _read_identifiers(product: Element) -> tuple[str | None, str | None]:
    isbn13: str | None = None
    gtin13: str | None = None
    for identifier in children(product, "ProductIdentifier"):
        id_type = child_text(identifier, "ProductIDType")
        value = child_text(identifier, "IDValue")
        if id_type == _ISBN13:
            isbn13 = value
        elif id_type == _GTIN13:
            gtin13 = value
    return isbn13, gtin13


def _first_matching(nodes: list[Element], field: str, wanted: str) -> Element | None:
    """Pick the node whose ``field`` is ``wanted`` (or absent), falling back to the first."""

    for node in nodes:
        value = child_text(node, field)
        if value is None or value == wanted:
            return node
    return nodes[0] if nodes else None


def _read_title(descriptive: Element | None) -> tuple[str, str | None]:
    detail = _first_matching(
        list(children(descriptive, "TitleDetail")), "TitleType", _DISTINCTIVE_TITLE
    )
    element = _first_matching(
        list(children(detail, "TitleElement")), "TitleElementLevel", _PRODUCT_LEVEL
    )
    if element is None:
        return "", None

    title = child_text(element, "TitleText")
    if title is None:
        prefix = child_text(element, "TitlePrefix")
        without_prefix = child_text(element, "TitleWithoutPrefix") or ""
        title = f"{prefix} {without_prefix}".strip() if prefix else without_prefix
    return title, child_text(element, "Subtitle")


def _read_contributors(descriptive: Element | None) -> tuple[Contributor, ...]:
    contributors = [
        Contributor(
            sequence_number=parse_sequence_number(child_text(node, "SequenceNumber"), position + 1),
            role=child_text(node, "ContributorRole") or "A01",
            person_name_inverted=child_text(node, "PersonNameInverted"),
            names_before_key=child_text(node, "NamesBeforeKey"),
            key_names=child_text(node, "KeyNames"),
            corporate_name=child_text(node, "CorporateName", "CorporateNameInverted"),
            person_name=child_text(node, "PersonName"),
        )
        for position, node in enumerate(children(descriptive, "Contributor"))
    ]
    # stable: ties keep document order
    return tuple(sorted(contributors, key=lambda contributor: contributor.sequence_number))


def _read_publication_date(publishing: Element | None) -> date | None:
    dates = list(children(publishing, "PublishingDate"))
    chosen = _first_matching(dates, "PublishingDateRole", _PUBLICATION_DATE)
    return parse_onix_date(child_text(chosen, "Date"))


def _read_prices(supply: Element | None) -> tuple[Price, ...]:
    return tuple(
        Price(
            price_type=child_text(price, "PriceType"),
            amount=child_text(price, "PriceAmount"),
            currency=child_text(price, "CurrencyCode"),
        )
        for detail in children(supply, "SupplyDetail")
        for price in children(detail, "Price")
    )


def _read_subjects(descriptive: Element | None) -> tuple[Subject, ...]:
    return tuple(
        Subject(
            scheme_identifier=child_text(subject, "SubjectSchemeIdentifier"),
            code=child_text(subject, "SubjectCode"),
            heading_text=child_text(subject, "SubjectHeadingText"),
        )
        for subject in children(descriptive, "Subject")
    )
