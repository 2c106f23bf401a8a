"""ONIX 2.1 short-tag to reference-tag expansion.

Short tags are the compact element names of EDItEUR ONIX 2.1 (``<b004>`` for ``<ISBN>``).
Expansion is a single textual pass over tag names, so each dialect parser only ever sees
reference tags.
"""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Mapping

SHORT_TAG_MAP: Final[Mapping[str, str]] = MappingProxyType(
    {
        # Message and composites
        "onixmessage": "ONIXMessage",
        "header": "Header",
        "product": "Product",
        "productidentifier": "ProductIdentifier",
        "title": "Title",
        "contributor": "Contributor",
        "subject": "Subject",
        "supplydetail": "SupplyDetail",
        "price": "Price",
        "publisher": "Publisher",
        # Header
        "m172": "FromSAN",
        "m173": "FromEANNumber",
        "m174": "FromCompany",
        "m175": "FromPerson",
        "m176": "FromEmail",
        "m177": "ToSAN",
        "m178": "ToEANNumber",
        "m179": "ToCompany",
        "m180": "ToPerson",
        "m181": "ToEmail",
        "m182": "SentDate",
        "m183": "MessageNote",
        # Record
        "a001": "RecordReference",
        "a002": "NotificationType",
        "a194": "DeletionCode",
        "a195": "DeletionText",
        "a196": "RecordSourceType",
        "a197": "RecordSourceIdentifierType",
        "a198": "RecordSourceIdentifier",
        "a199": "RecordSourceName",
        # Identification and form
        "b004": "ISBN",
        "b005": "EAN13",
        "b006": "ProductForm",
        "b007": "ProductFormDetail",
        "b008": "BookFormDetail",
        "b012": "ProductPackaging",
        "b013": "ProductFormDescription",
        "b014": "NumberOfPieces",
        "b221": "ProductIDType",
        "b233": "IDTypeName",
        "b244": "IDValue",
        # Title
        "b025": "ProductContentType",
        "b026": "DistinctiveTitle",
        "b027": "TitlePrefix",
        "b028": "TitleWithoutPrefix",
        "b029": "TitleType",
        "b030": "AbbreviatedLength",
        "b031": "TextCaseFlag",
        "b202": "TitleType",
        "b203": "DistinctiveTitle",
        # Contributor
        "b034": "ContributorRole",
        "b035": "PersonName",
        "b036": "PersonNameInverted",
        "b037": "NamesBeforeKey",
        "b038": "KeyNames",
        "b039": "NamesAfterKey",
        "b040": "LettersAfterNames",
        "b041": "TitlesBeforeNames",
        "b042": "TitlesAfterNames",
        "b043": "SuffixToKey",
        "b044": "PrefixToKey",
        "b045": "CorporateName",
        "b046": "BiographicalNote",
        "b047": "CorporateName",
        "b048": "ContributorDescription",
        "b049": "UnnamedPersons",
        "b050": "SequenceNumber",
        "b051": "SequenceNumberWithinRole",
        "b052": "ContributorStatement",
        # Edition and language
        "b056": "EditionTypeCode",
        "b057": "EditionNumber",
        "b058": "EditionStatement",
        "b062": "LanguageOfText",
        "b063": "LanguageRole",
        "b252": "LanguageCode",
        # Subject
        "b064": "BICMainSubject",
        "b065": "BICSubjectCode",
        "b066": "BICVersion",
        "b067": "SubjectSchemeIdentifier",
        "b068": "SubjectSchemeVersion",
        "b069": "SubjectCode",
        "b070": "SubjectHeadingText",
        # Audience and extent
        "b073": "AudienceCode",
        "b074": "AudienceRangeQualifier",
        "b075": "AudienceRangePrecision",
        "b076": "AudienceRangeValue",
        "b077": "AudienceDescription",
        "b061": "NumberOfPages",
        "b218": "ExtentType",
        "b219": "ExtentValue",
        "b220": "ExtentUnit",
        # Other text
        "d101": "TextTypeCode",
        "d102": "TextFormat",
        "d103": "Text",
        "d104": "TextLinkType",
        "d105": "TextLink",
        # Publisher and publishing status
        "b081": "PublisherName",
        "b082": "PublisherRole",
        "b086": "ImprintName",
        "b394": "PublishingStatus",
        "b395": "PublishingStatusNote",
        "b003": "PublicationDate",
        "b087": "YearFirstPublished",
        # Supply detail and price
        "j135": "SupplierName",
        "j136": "SupplierRole",
        "j140": "SupplyStatus",
        "j146": "OnSaleDate",
        "j147": "OrderTime",
        "j148": "SupplyToCountry",
        "j151": "PriceTypeCode",
        "j152": "PriceAmount",
        "j153": "CurrencyCode",
        "j154": "PriceEffectiveFrom",
        "j155": "PriceEffectiveUntil",
        "j191": "PackQuantity",
        # Sales rights and measures
        "b089": "SalesRightsType",
        "b090": "RightsCountry",
        "b091": "RightsTerritory",
        "b388": "RightsRegion",
        "c093": "MeasureTypeCode",
        "c094": "Measurement",
        "c095": "MeasureUnitCode",
    }
)

# comments and CDATA sections are matched whole so tag-like text inside them stays as written
_TAG_NAME: Final = re.compile(
    r"<!--.*?-->|<!\[CDATA\[.*?\]\]>"
    r"|<(/?)((?:[A-Za-z_][\w.-]*:)?)([A-Za-z][A-Za-z0-9]*)(?=[\s/>])",
    re.DOTALL,
)
_SHORT_TAG_SNIFF: Final = re.compile(r"<(?:[\w.-]+:)?[a-jm]\d{3}[\s/>]", re.IGNORECASE)
_SNIFF_WINDOW: Final = 2000


def reference_tag_for(short_tag: str) -> str | None:
    """Return the reference tag name for ``short_tag``, or None if it is not a known short tag."""

    return SHORT_TAG_MAP.get(short_tag.lower())


def has_short_tags(xml: str) -> bool:
    """Return True when the start of ``xml`` contains ONIX 2.1 short-tag elements."""

    return _SHORT_TAG_SNIFF.search(xml[:_SNIFF_WINDOW]) is not None


def _expand(match: re.Match[str]) -> str:
    slash, prefix, name = match.group(1, 2, 3)
    if name is None:
        return match.group(0)
    reference = SHORT_TAG_MAP.get(name.lower())
    if reference is None or reference == name:
        return match.group(0)
    return f"<{slash}{prefix}{reference}"


def expand_short_tags(xml: str) -> str:
    """Rewrite every known short-tag element name to its reference-tag name.

    Opening, closing and self-closing tags are rewritten in one pass, keeping any namespace
    prefix. Attributes, text content, comments and CDATA sections are left untouched.
    Running this on already expanded text is a no-op.
    """

    return _TAG_NAME.sub(_expand, xml)
