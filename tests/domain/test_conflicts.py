from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from onix_import.domain.conflicts import (
    CatalogLookup,
    CreateNew,
    ExistingTitle,
    ImportConflict,
    Skip,
    Update,
    find_conflicts,
    parse_conflict_resolution,
    plan_import,
)
from onix_import.domain.enums import InstructionKind
from onix_import.domain.mapping import map_to_catalog_title

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping, Sequence

    from onix_import.domain.types import MappedTitle, ParsedProduct

TENANT = "tenant-1"


class FakeCatalog:
    def __init__(self, titles: Mapping[str, ExistingTitle]) -> None:
        self.titles = dict(titles)
        self.calls: list[tuple[str, list[str]]] = []

    def find_by_isbns(self, tenant_id: str, isbns: Sequence[str]) -> Mapping[str, ExistingTitle]:
        self.calls.append((tenant_id, list(isbns)))
        return {isbn: self.titles[isbn] for isbn in isbns if isbn in self.titles}


@pytest.fixture
def titles(make_product: Callable[..., ParsedProduct]) -> list[MappedTitle]:
    return [
        map_to_catalog_title(make_product(isbn13="9780306406157", raw_index=0), TENANT),
        map_to_catalog_title(make_product(isbn13="9780131103627", raw_index=1), TENANT),
        map_to_catalog_title(make_product(isbn13=None, raw_index=2), TENANT),
    ]


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("skip", Skip()),
        ("update", Update()),
        ({"resolution": "skip"}, Skip()),
        (
            {"resolution": "create-new", "newIsbn": "9780140449136"},
            CreateNew(new_isbn="9780140449136"),
        ),
        (
            {"resolution": "create-new", "new_isbn": "9780140449136"},
            CreateNew(new_isbn="9780140449136"),
        ),
    ],
)
def test_parse_conflict_resolution(raw: object, expected: object) -> None:
    assert parse_conflict_resolution(raw) == expected


@pytest.mark.parametrize(
    "raw",
    ["merge", None, {"resolution": "create-new"}, {"resolution": "create-new", "newIsbn": "  "}],
)
def test_parse_conflict_resolution_rejects_bad_input(raw: object) -> None:
    with pytest.raises(ValueError):
        parse_conflict_resolution(raw)


def test_create_new_requires_isbn() -> None:
    with pytest.raises(ValueError, match="requires a new ISBN"):
        CreateNew(new_isbn="")


def test_fake_catalog_satisfies_lookup_port() -> None:
    assert isinstance(FakeCatalog({}), CatalogLookup)


def test_find_conflicts_reports_existing_isbns(titles: list[MappedTitle]) -> None:
    catalog = FakeCatalog({"9780131103627": ExistingTitle(title_id="t-9", title="Existing")})

    conflicts = find_conflicts(titles, tenant_id=TENANT, lookup=catalog)

    assert conflicts == [
        ImportConflict(
            isbn="9780131103627",
            existing_title_id="t-9",
            existing_title_name="Existing",
            product_index=1,
        )
    ]
    assert catalog.calls == [(TENANT, ["9780306406157", "9780131103627"])]


def test_find_conflicts_skips_lookup_without_isbns(
    make_product: Callable[..., ParsedProduct],
) -> None:
    catalog = FakeCatalog({})
    titles = [map_to_catalog_title(make_product(isbn13=None), TENANT)]

    assert find_conflicts(titles, tenant_id=TENANT, lookup=catalog) == []
    assert catalog.calls == []


def _conflict() -> ImportConflict:
    return ImportConflict(
        isbn="9780131103627",
        existing_title_id="t-9",
        existing_title_name="Existing",
        product_index=1,
    )


@pytest.mark.parametrize(
    ("resolution", "kind", "isbn", "existing_id"),
    [
        (Skip(), InstructionKind.SKIP, "9780131103627", "t-9"),
        (Update(), InstructionKind.UPDATE, "9780131103627", "t-9"),
        (CreateNew(new_isbn="9780140449136"), InstructionKind.CREATE, "9780140449136", None),
    ],
)
def test_plan_import_threads_resolution(
    titles: list[MappedTitle],
    resolution: Skip | Update | CreateNew,
    kind: InstructionKind,
    isbn: str,
    existing_id: str | None,
) -> None:
    (instruction,) = plan_import(
        titles,
        selected=[1],
        conflicts=[_conflict()],
        resolutions={"9780131103627": resolution},
    )

    assert instruction.kind is kind
    assert instruction.isbn == isbn
    assert instruction.existing_title_id == existing_id


def test_plan_import_never_picks_a_default(titles: list[MappedTitle]) -> None:
    (instruction,) = plan_import(titles, selected=[1], conflicts=[_conflict()], resolutions={})

    assert instruction.kind is InstructionKind.INVALID
    assert instruction.reason == "ISBN already exists and no resolution was chosen"


def test_plan_import_handles_clean_invalid_and_missing_rows(titles: list[MappedTitle]) -> None:
    instructions = plan_import(titles, selected=[0, 2, 7], conflicts=[], resolutions={})

    assert [(item.kind, item.product_index) for item in instructions] == [
        (InstructionKind.CREATE, 0),
        (InstructionKind.INVALID, 2),
        (InstructionKind.INVALID, 7),
    ]
    assert instructions[1].reason == "Product has validation errors"
    assert instructions[2].reason == "No product at this index"
