"""Domain port definitions for adapters."""

from __future__ import annotations

from .parsing import OnixParser

__all__ = ["OnixParser"]
