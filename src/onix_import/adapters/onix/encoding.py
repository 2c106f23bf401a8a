"""Decode uploaded ONIX bytes into a single Unicode text buffer."""

from __future__ import annotations

import codecs
import re
from logging import getLogger
from typing import Final

log = getLogger(__name__)

_DECLARED_ENCODING: Final = re.compile(
    rb"""^\s*<\?xml[^>]*?encoding\s*=\s*["']([A-Za-z0-9._-]+)["']""",
)
_UTF16_BOMS: Final = (
    (codecs.BOM_UTF16_LE, "utf-16-le"),
    (codecs.BOM_UTF16_BE, "utf-16-be"),
)


def declared_encoding(data: bytes) -> str | None:
    """Return the ``encoding=`` value from the XML prolog, if any."""

    match = _DECLARED_ENCODING.match(data[:200])
    if match is None:
        return None
    return match.group(1).decode("ascii").lower()


def decode_onix_bytes(data: bytes) -> str:
    """Return ``data`` as text, stripping any byte order mark.

    UTF-8 is assumed; the declared prolog encoding is only consulted when the bytes are not
    valid UTF-8. This never raises: undecodable bytes become U+FFFD.
    """

    if data.startswith(codecs.BOM_UTF8):
        data = data[len(codecs.BOM_UTF8) :]
    else:
        for bom, encoding in _UTF16_BOMS:
            if data.startswith(bom):
                return data[len(bom) :].decode(encoding, errors="replace")

    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        fallback = declared_encoding(data)
        if fallback and _is_known_codec(fallback) and codecs.lookup(fallback).name != "utf-8":
            log.warning("ONIX upload is not valid UTF-8 (%s); decoding as %s", exc.reason, fallback)
            return data.decode(fallback, errors="replace")
        log.warning("ONIX upload is not valid UTF-8 (%s); replacing undecodable bytes", exc.reason)
        return data.decode("utf-8", errors="replace")


def _is_known_codec(name: str) -> bool:
    try:
        codecs.lookup(name)
    except LookupError:
        return False
    return True
