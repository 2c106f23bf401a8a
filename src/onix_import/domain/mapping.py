"""Map parsed ONIX products onto catalog title records.

Only fields that exist on the catalog title are mapped. Anything else present on the
product is listed in ``MappedTitle.unmapped_fields`` so that nothing is dropped silently.
"""

from __future__ import annotations

from logging import getLogger
from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from .enums import ContributorKind, PublicationStatus
from .names import PersonName, parse_name, uninvert_name
from .types import MappedContributor, MappedTitle, TitleRecord, ValidationError

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from .types import Contributor, ParsedProduct


log = getLogger(__name__)


# Codelist 64 (publishing status). Every other code is treated as a draft.
PUBLISHING_STATUS_MAP: Final[Mapping[str, PublicationStatus]] = MappingProxyType(
    {
        "02": PublicationStatus.PENDING,  # Forthcoming
        "04": PublicationStatus.PUBLISHED,  # Active
        "07": PublicationStatus.OUT_OF_PRINT,  # Out of print
    }
)


def _role_codes(prefix: str, numbers: Iterable[int], kind: ContributorKind) -> dict[str, str]:
    return {f"{prefix}{number:02d}": kind.value for number in numbers}


# Codelist 17 (contributor role) folded into the catalog's simple roles.
CONTRIBUTOR_ROLE_MAP: Final[Mapping[str, str]] = MappingProxyType(
    {
        **_role_codes("A", (*range(1, 28), *range(29, 45)), ContributorKind.AUTHOR),
        **_role_codes("B", range(1, 32), ContributorKind.EDITOR),
        "B06": ContributorKind.TRANSLATOR.value,
        "B07": ContributorKind.AUTHOR.value,  # As told by
        "B08": ContributorKind.TRANSLATOR.value,  # Translated with commentary by
        **_role_codes("D", range(1, 4), ContributorKind.NARRATOR),
        **_role_codes("E", range(1, 9), ContributorKind.NARRATOR),
        "E99": ContributorKind.NARRATOR.value,
        "Z01": ContributorKind.OTHER.value,
        "Z02": ContributorKind.OTHER.value,
        "Z98": ContributorKind.OTHER.value,
        "Z99": ContributorKind.OTHER.value,
    }
)


def map_publishing_status(code: str | None) -> PublicationStatus:
    """Map an ONIX publishing status code; unknown or missing codes become drafts."""

    if not code:
        return PublicationStatus.DRAFT
    return PUBLISHING_STATUS_MAP.get(code.strip(), PublicationStatus.DRAFT)


def map_contributor_role(code: str) -> str | None:
    """Return the catalog role for an ONIX role code, or None when the code is not known."""

    return CONTRIBUTOR_ROLE_MAP.get(code.strip().upper())


def resolve_contributor_name(contributor: Contributor) -> PersonName:
    if contributor.names_before_key and contributor.key_names:
        return PersonName(
            first_name=contributor.names_before_key.strip(),
            last_name=contributor.key_names.strip(),
        )
    if contributor.person_name_inverted:
        return parse_name(uninvert_name(contributor.person_name_inverted))
    if contributor.person_name:
        return parse_name(contributor.person_name)
    if contributor.key_names:
        return parse_name(contributor.key_names)
    if contributor.corporate_name:
        return PersonName(first_name="", last_name=contributor.corporate_name.strip())
    return parse_name(None)


def map_to_catalog_title(product: ParsedProduct, tenant_id: str) -> MappedTitle:
    """Convert one parsed product into a catalog-shaped ``MappedTitle``."""

    mapped = MappedTitle(
        title=TitleRecord(
            tenant_id=tenant_id,
            title=product.title,
            subtitle=product.subtitle,
            isbn=product.isbn13,
            publication_status=map_publishing_status(product.publishing_status),
            publication_date=(
                product.publication_date.isoformat() if product.publication_date else None
            ),
        ),
        contributors=[],
        raw_index=product.raw_index,
        record_reference=product.record_reference,
    )

    if not product.isbn13:
        mapped.add_error(ValidationError(field="isbn", message="ISBN-13 is required for import"))
    if not product.title or not product.title.strip():
        mapped.add_error(ValidationError(field="title", message="Title is required"))

    _map_contributors(product, mapped)
    _record_unmapped(product, mapped)
    return mapped


def _map_contributors(product: ParsedProduct, mapped: MappedTitle) -> None:
    for contributor in product.contributors:
        name = resolve_contributor_name(contributor)
        # unknown codes pass through raw
        role = map_contributor_role(contributor.role) or contributor.role
        mapped.contributors.append(
            MappedContributor(
                first_name=name.first_name,
                last_name=name.last_name,
                role=role,
                sequence_number=contributor.sequence_number,
            )
        )


def _record_unmapped(product: ParsedProduct, mapped: MappedTitle) -> None:
    if product.product_form:
        mapped.add_unmapped("ProductForm", product.product_form, "No format field in titles schema")

    if product.gtin13 and product.gtin13 != product.isbn13:
        mapped.add_unmapped("GTIN13", product.gtin13, "Only the ISBN-13 is stored on titles")

    for price in product.prices:
        raw = " ".join(part for part in (price.amount, price.currency) if part)
        if price.price_type:
            raw = f"{raw} (type {price.price_type})" if raw else f"type {price.price_type}"
        if raw:
            mapped.add_unmapped("Price", raw, "No price field in titles schema")

    for subject in product.subjects:
        raw = subject.code or subject.heading_text
        if not raw and subject.scheme_identifier:
            raw = f"Scheme {subject.scheme_identifier}"
        if raw:
            mapped.add_unmapped("Subject", raw, "No subject field in titles schema")


def map_products(products: Iterable[ParsedProduct], tenant_id: str) -> list[MappedTitle]:
    mapped = [map_to_catalog_title(product, tenant_id) for product in products]
    log.debug("Mapped %s products for tenant %s", len(mapped), tenant_id)
    return mapped


def collect_unmapped_fields(mapped_titles: Iterable[MappedTitle]) -> list[str]:
    """Return the sorted, de-duplicated names of unmapped fields across a batch."""

    return sorted({field.name for mapped in mapped_titles for field in mapped.unmapped_fields})
