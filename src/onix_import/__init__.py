"""Import ONIX 2.1, 3.0 and 3.1 product metadata as catalog title records."""

from __future__ import annotations

from importlib import metadata

try:
    __version__ = metadata.version("onix-import")
except metadata.PackageNotFoundError:
    __version__ = "0.0.0+local"
