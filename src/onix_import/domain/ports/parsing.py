"""Port for dialect-specific ONIX parsers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from onix_import.domain.enums import OnixVersion
    from onix_import.domain.types import ParsedMessage


@runtime_checkable
class OnixParser(Protocol):
    """Turns decoded ONIX text of one dialect into a ``ParsedMessage``."""

    @property
    def version(self) -> OnixVersion: ...

    def parse(self, text: str) -> ParsedMessage:
        ...


__all__ = ["OnixParser"]
