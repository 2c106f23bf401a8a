"""Heuristic ONIX dialect detection and whole-document structure checks.

Both run on the decoded text before any tree is built, so they stay cheap on files that
are about to be rejected.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from logging import getLogger
from typing import Final

from onix_import.domain.enums import OnixVersion

from .short_tags import has_short_tags

log = getLogger(__name__)

_RELEASE_ATTRIBUTE: Final = re.compile(
    r"""<(?:[\w.-]+:)?ONIXMessage\b[^>]*?\brelease\s*=\s*["']([\d.]+)["']""",
    re.IGNORECASE,
)
_NAMESPACE: Final = re.compile(r"""xmlns(?::[\w.-]+)?\s*=\s*["'][^"']*/onix/(3\.[01])/""")
_DOCTYPE_21: Final = re.compile(
    r"<!DOCTYPE[^>]*(?:onix/2\.1|onix-international\.dtd)", re.IGNORECASE
)
_REFERENCE_TAGS_21: Final = re.compile(
    r"<(?:ISBN|EAN13|DistinctiveTitle|FromCompany|FromPerson|FromEmail|SentDate|PublicationDate)"
    r"(?=[\s/>])"
)
_SHORT_ROOT: Final = re.compile(r"<ONIXmessage(?=[\s/>])")
_ROOT_ELEMENT: Final = re.compile(r"<(?![?!/])([A-Za-z_][\w.:-]*)")
_PRODUCT_OPEN: Final = re.compile(r"<(?:[\w.-]+:)?(?:Product|product)(?=[\s/>])")

_RELEASES: Final = {
    "3.1": OnixVersion.V3_1,
    "3.0": OnixVersion.V3_0,
    "2.1": OnixVersion.V2_1,
}


@dataclass(frozen=True, slots=True)
class StructureCheck:
    is_valid: bool
    error: str | None = None


def detect_onix_version(text: str) -> OnixVersion:
    """Guess the ONIX dialect of ``text``; never raises, returns ``UNKNOWN`` when unsure."""

    release = _RELEASE_ATTRIBUTE.search(text)
    if release is not None and release.group(1) in _RELEASES:
        return _RELEASES[release.group(1)]

    namespace = _NAMESPACE.search(text)
    if namespace is not None:
        return _RELEASES[namespace.group(1)]

    if (
        _DOCTYPE_21.search(text)
        or _SHORT_ROOT.search(text)
        or _REFERENCE_TAGS_21.search(text)
        or has_short_tags(text)
    ):
        return OnixVersion.V2_1

    log.info("Could not determine ONIX version")
    return OnixVersion.UNKNOWN


def root_element_name(text: str) -> str | None:
    """Return the local name of the first element in ``text``, skipping prolog and DOCTYPE."""

    position = 0
    while True:
        match = _ROOT_ELEMENT.search(text, position)
        if match is None:
            return None
        # element-like text inside a leading comment
        comment_start = text.rfind("<!--", 0, match.start())
        if comment_start != -1 and text.find("-->", comment_start) > match.start():
            position = text.find("-->", comment_start) + 3
            continue
        return match.group(1).rpartition(":")[2]


def estimate_product_count(text: str) -> int:
    """Count ``Product`` opening tags without building a tree."""

    return len(_PRODUCT_OPEN.findall(text))


def validate_onix_structure(text: str) -> StructureCheck:
    root = root_element_name(text)
    if root is None or root.lower() != "onixmessage":
        log.info("Rejected document with root element %r", root)
        return StructureCheck(is_valid=False, error="not an ONIX message root element")

    if estimate_product_count(text) == 0:
        return StructureCheck(is_valid=False, error="no Product records")

    return StructureCheck(is_valid=True)
