"""Environment variable readers shared by the settings modules."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from .errors import InvalidConfigurationError, MissingConfigurationError

if TYPE_CHECKING:
    from collections.abc import Sequence


def require_env_vars(names: Sequence[str]) -> dict[str, str]:
    """Read ``names`` from the environment, stripped; blank values count as missing."""

    values = {name: (os.getenv(name) or "").strip() for name in names}
    missing = sorted(name for name, value in values.items() if not value)
    if missing:
        raise MissingConfigurationError(f"Missing configuration for: {', '.join(missing)}")
    return values


def optional_int_env(name: str, *, default: int, minimum: int = 1) -> int:
    """Read an integer setting, using ``default`` when the variable is unset or blank."""

    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise InvalidConfigurationError(f"{name} must be an integer, got {raw!r}") from exc
    if value < minimum:
        raise InvalidConfigurationError(f"{name} must be >= {minimum}, got {value}")
    return value
