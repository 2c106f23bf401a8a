"""Log level resolution and root logger setup for onix-import."""

from __future__ import annotations

import logging
import os
import sys
from typing import Final

from .errors import InvalidConfigurationError

LOG_LEVEL_ENV: Final[str] = "ONIX_IMPORT_LOG_LEVEL"


def resolve_log_level(*, verbose: bool = False) -> int:
    """Return DEBUG for ``verbose``, else the level named by ``ONIX_IMPORT_LOG_LEVEL`` or INFO."""

    if verbose:
        return logging.DEBUG
    raw = (os.getenv(LOG_LEVEL_ENV) or "").strip().upper()
    if not raw:
        return logging.INFO
    level = logging.getLevelNamesMapping().get(raw)
    if level is None:
        raise InvalidConfigurationError(f"{LOG_LEVEL_ENV} is not a logging level: {raw!r}")
    return level


def configure_logging(*, verbose: bool = False, force: bool = False) -> None:
    """Send log records to stderr so stdout stays free for the import report.

    Pass ``force=True`` to replace handlers installed by an earlier call.
    """

    logging.basicConfig(
        level=resolve_log_level(verbose=verbose),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
        force=force,
    )
