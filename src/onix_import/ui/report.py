"""Render an ``ImportResult`` for humans or as JSON."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from pydantic import TypeAdapter

from onix_import.domain.types import ImportResult
from onix_import.domain.validation import collect_errors

if TYPE_CHECKING:
    from collections.abc import Iterator

_RESULT_ADAPTER: TypeAdapter[ImportResult] = TypeAdapter(ImportResult)


def report_payload(result: ImportResult) -> dict[str, Any]:
    """JSON-ready dict of ``result`` including the derived counts."""

    payload = _RESULT_ADAPTER.dump_python(result, mode="json")
    payload["valid_count"] = result.valid_count
    payload["invalid_count"] = result.invalid_count
    return payload


def render_json(result: ImportResult, *, indent: int | None = 2) -> str:
    return json.dumps(report_payload(result), indent=indent, ensure_ascii=False)


def render_text(result: ImportResult) -> Iterator[str]:
    if result.structural_error is not None:
        yield f"Import rejected: {result.structural_error}"
        return

    yield (
        f"ONIX {result.version}: {len(result.products)} products "
        f"({result.valid_count} valid, {result.invalid_count} invalid)"
    )
    if result.header is not None and result.header.sender_name:
        yield f"Sender: {result.header.sender_name}"
    if result.unmapped_fields_summary:
        yield f"Unmapped fields: {', '.join(result.unmapped_fields_summary)}"

    issues = collect_errors(result.parsing_errors, result.products)
    if issues:
        yield "Issues:"
    for issue in issues:
        where = "message" if issue.product_index is None else f"product {issue.product_index + 1}"
        yield f"  {where} [{issue.field}] {issue.severity}: {issue.message}"
