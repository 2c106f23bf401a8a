"""Conflict resolution choices for imported ISBNs that already exist in the catalog.

This module only defines the decision types and threads caller decisions through to the
persistence step; it never chooses a resolution on the caller's behalf.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal, Protocol, TypeAlias, runtime_checkable

from .enums import ConflictAction, InstructionKind

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from .types import MappedTitle


@dataclass(frozen=True, slots=True)
class Skip:
    action: Literal[ConflictAction.SKIP] = ConflictAction.SKIP


@dataclass(frozen=True, slots=True)
class Update:
    action: Literal[ConflictAction.UPDATE] = ConflictAction.UPDATE


@dataclass(frozen=True, slots=True, kw_only=True)
class CreateNew:
    new_isbn: str
    action: Literal[ConflictAction.CREATE_NEW] = ConflictAction.CREATE_NEW

    def __post_init__(self) -> None:
        if not self.new_isbn or not self.new_isbn.strip():
            raise ValueError("create-new resolution requires a new ISBN")


ConflictResolution: TypeAlias = Skip | Update | CreateNew


def parse_conflict_resolution(value: object) -> ConflictResolution:
    """Read a resolution in its wire form.

    Accepts ``"skip"``, ``"update"``, or a mapping such as
    ``{"resolution": "create-new", "newIsbn": "978..."}``.
    """

    if isinstance(value, Skip | Update | CreateNew):
        return value

    new_isbn: object = None
    raw_action: object = value
    if isinstance(value, Mapping):
        raw_action = value.get("resolution")
        new_isbn = value.get("newIsbn", value.get("new_isbn"))

    try:
        action = ConflictAction(str(raw_action))
    except ValueError as exc:
        raise ValueError(f"Unknown conflict resolution: {raw_action!r}") from exc

    if action is ConflictAction.SKIP:
        return Skip()
    if action is ConflictAction.UPDATE:
        return Update()
    if not isinstance(new_isbn, str):
        raise ValueError("create-new resolution requires a new ISBN")
    return CreateNew(new_isbn=new_isbn)


@dataclass(frozen=True, slots=True)
class ExistingTitle:
    title_id: str
    title: str


@runtime_checkable
class CatalogLookup(Protocol):
    """Port implemented by the persistence collaborator to find titles by ISBN."""

    def find_by_isbns(self, tenant_id: str, isbns: Sequence[str]) -> Mapping[str, ExistingTitle]:
        ...


@dataclass(frozen=True, slots=True)
class ImportConflict:
    isbn: str
    existing_title_id: str
    existing_title_name: str
    product_index: int


def find_conflicts(
    mapped_titles: Sequence[MappedTitle],
    *,
    tenant_id: str,
    lookup: CatalogLookup,
) -> list[ImportConflict]:
    isbns = [mapped.title.isbn for mapped in mapped_titles if mapped.title.isbn]
    if not isbns:
        return []

    existing = lookup.find_by_isbns(tenant_id, isbns)
    conflicts: list[ImportConflict] = []
    for mapped in mapped_titles:
        isbn = mapped.title.isbn
        if not isbn or isbn not in existing:
            continue
        match = existing[isbn]
        conflicts.append(
            ImportConflict(
                isbn=isbn,
                existing_title_id=match.title_id,
                existing_title_name=match.title,
                product_index=mapped.raw_index,
            )
        )
    return conflicts


@dataclass(frozen=True, slots=True)
class ImportInstruction:
    """What the persistence step should do with one selected product."""

    kind: InstructionKind
    product_index: int
    isbn: str | None = None
    existing_title_id: str | None = None
    reason: str | None = None


def plan_import(
    mapped_titles: Sequence[MappedTitle],
    *,
    selected: Iterable[int],
    conflicts: Sequence[ImportConflict],
    resolutions: Mapping[str, ConflictResolution],
) -> list[ImportInstruction]:
    """Turn caller selections and conflict decisions into persistence instructions.

    Products with validation errors are reported as ``INVALID``. A conflicting ISBN without
    a caller decision is also ``INVALID``; the caller must choose explicitly.
    """

    by_index = {mapped.raw_index: mapped for mapped in mapped_titles}
    conflict_by_isbn = {conflict.isbn: conflict for conflict in conflicts}
    instructions: list[ImportInstruction] = []

    for index in selected:
        mapped = by_index.get(index)
        if mapped is None:
            instructions.append(
                ImportInstruction(
                    kind=InstructionKind.INVALID,
                    product_index=index,
                    reason="No product at this index",
                )
            )
            continue

        isbn = mapped.title.isbn
        if not mapped.is_clean:
            instructions.append(
                ImportInstruction(
                    kind=InstructionKind.INVALID,
                    product_index=index,
                    isbn=isbn,
                    reason="Product has validation errors",
                )
            )
            continue

        conflict = conflict_by_isbn.get(isbn) if isbn else None
        if conflict is None:
            instructions.append(
                ImportInstruction(kind=InstructionKind.CREATE, product_index=index, isbn=isbn)
            )
            continue

        resolution = resolutions.get(conflict.isbn)
        instructions.append(_instruction_for_conflict(index, conflict, resolution))

    return instructions


def _instruction_for_conflict(
    index: int,
    conflict: ImportConflict,
    resolution: ConflictResolution | None,
) -> ImportInstruction:
    match resolution:
        case Skip():
            kind, isbn = InstructionKind.SKIP, conflict.isbn
        case Update():
            kind, isbn = InstructionKind.UPDATE, conflict.isbn
        case CreateNew(new_isbn=new_isbn):
            return ImportInstruction(
                kind=InstructionKind.CREATE, product_index=index, isbn=new_isbn
            )
        case None:
            return ImportInstruction(
                kind=InstructionKind.INVALID,
                product_index=index,
                isbn=conflict.isbn,
                existing_title_id=conflict.existing_title_id,
                reason="ISBN already exists and no resolution was chosen",
            )
    return ImportInstruction(
        kind=kind,
        product_index=index,
        isbn=isbn,
        existing_title_id=conflict.existing_title_id,
    )
