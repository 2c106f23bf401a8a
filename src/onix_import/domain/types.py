"""Canonical records produced while importing an ONIX message."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date  # noqa: TC003 # needed at runtime for report serialisation
from typing import TypeAlias

from .enums import OnixVersion, PublicationStatus, Severity

# Basic aliases (PEP 695) so we can upgrade to value objects later.
Isbn13: TypeAlias = str
CodeValue: TypeAlias = str  # raw ONIX codelist value, e.g. "A01" or "04"
DecimalString: TypeAlias = str


@dataclass(frozen=True, slots=True)
class Contributor:
    """A person or organisation credited on a product, as found in the source."""

    sequence_number: int
    role: CodeValue
    person_name_inverted: str | None = None
    names_before_key: str | None = None
    key_names: str | None = None
    corporate_name: str | None = None
    person_name: str | None = None


@dataclass(frozen=True, slots=True)
class Price:
    price_type: CodeValue | None
    amount: DecimalString | None
    currency: str | None


@dataclass(frozen=True, slots=True)
class Subject:
    scheme_identifier: CodeValue | None
    code: str | None
    heading_text: str | None


@dataclass(frozen=True, slots=True)
class ParsedProduct:
    """Dialect-independent view of one ONIX ``Product`` record.

    ``raw_index`` is the 0-based position of the record in the source message and is kept
    for traceability through mapping and validation.
    """

    record_reference: str
    isbn13: Isbn13 | None
    gtin13: str | None
    title: str
    subtitle: str | None
    contributors: tuple[Contributor, ...]
    product_form: CodeValue | None
    publishing_status: CodeValue | None
    publication_date: date | None
    prices: tuple[Price, ...]
    subjects: tuple[Subject, ...]
    raw_index: int


@dataclass(frozen=True, slots=True)
class MessageHeader:
    sender_name: str | None = None
    sender_email: str | None = None
    sent_date_time: str | None = None


@dataclass(frozen=True, slots=True)
class ParsingError:
    """Problem found while walking the XML document."""

    field: str
    message: str
    product_index: int | None = None
    record_reference: str | None = None
    severity: Severity = Severity.ERROR


@dataclass(frozen=True, slots=True)
class ParsedMessage:
    version: OnixVersion
    header: MessageHeader | None
    products: tuple[ParsedProduct, ...]
    parsing_errors: tuple[ParsingError, ...] = ()


@dataclass(slots=True)
class TitleRecord:
    """Catalog-shaped title fields handed to the persistence collaborator."""

    tenant_id: str
    title: str
    subtitle: str | None
    isbn: Isbn13 | None
    publication_status: PublicationStatus
    publication_date: str | None  # ISO YYYY-MM-DD


@dataclass(frozen=True, slots=True)
class MappedContributor:
    first_name: str
    last_name: str
    role: str
    sequence_number: int


@dataclass(frozen=True, slots=True)
class UnmappedField:
    name: str
    raw_value: str
    reason: str


@dataclass(frozen=True, slots=True)
class ValidationError:
    """Field-level problem attached to a mapped title; never raised."""

    field: str
    message: str
    value: str | None = None


@dataclass(slots=True)
class MappedTitle:
    title: TitleRecord
    contributors: list[MappedContributor]
    raw_index: int
    record_reference: str = ""
    unmapped_fields: list[UnmappedField] = field(default_factory=list)
    validation_errors: list[ValidationError] = field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        return not self.validation_errors

    def add_error(self, error: ValidationError) -> None:
        self.validation_errors.append(error)

    def add_unmapped(self, name: str, raw_value: str, reason: str) -> None:
        self.unmapped_fields.append(UnmappedField(name=name, raw_value=raw_value, reason=reason))


@dataclass(frozen=True, slots=True)
class ImportIssue:
    """Flattened error row used by reports (parsing and validation alike)."""

    field: str
    message: str
    product_index: int | None = None
    record_reference: str | None = None
    severity: Severity = Severity.ERROR


@dataclass(frozen=True, slots=True)
class OwnershipSplit:
    contact_id: str
    percentage: DecimalString
    is_primary: bool


@dataclass(slots=True)
class ImportResult:
    """Complete, renderable outcome of one import invocation."""

    version: OnixVersion
    header: MessageHeader | None = None
    products: list[MappedTitle] = field(default_factory=list)
    parsing_errors: list[ParsingError] = field(default_factory=list)
    validation_errors: list[ImportIssue] = field(default_factory=list)
    unmapped_fields_summary: list[str] = field(default_factory=list)
    structural_error: str | None = None

    @property
    def valid_count(self) -> int:
        return sum(1 for mapped in self.products if mapped.is_clean)

    @property
    def invalid_count(self) -> int:
        return len(self.products) - self.valid_count

    @property
    def succeeded(self) -> bool:
        return self.structural_error is None and not self.parsing_errors
