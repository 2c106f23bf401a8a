"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_int_env, require_env_vars
from .errors import ConfigurationError, InvalidConfigurationError, MissingConfigurationError
from .limits import (
    DEFAULT_MAX_FILE_BYTES,
    DEFAULT_MAX_PRODUCTS,
    MAX_FILE_BYTES_ENV,
    MAX_PRODUCTS_ENV,
    ImportLimits,
    get_import_limits,
)
from .logging import LOG_LEVEL_ENV, configure_logging, resolve_log_level
from .tenant import TENANT_ID_ENV, get_tenant_id

__all__ = [
    "DEFAULT_MAX_FILE_BYTES",
    "DEFAULT_MAX_PRODUCTS",
    "LOG_LEVEL_ENV",
    "MAX_FILE_BYTES_ENV",
    "MAX_PRODUCTS_ENV",
    "ConfigurationError",
    "ImportLimits",
    "InvalidConfigurationError",
    "MissingConfigurationError",
    "TENANT_ID_ENV",
    "configure_logging",
    "get_import_limits",
    "get_tenant_id",
    "optional_int_env",
    "require_env_vars",
    "resolve_log_level",
]
