"""Errors raised while loading onix-import settings."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Base class for settings that stop an import before it reads the upload."""


class MissingConfigurationError(ConfigurationError):
    """A required environment variable is unset or blank."""


class InvalidConfigurationError(ConfigurationError):
    """An environment variable is set but cannot be interpreted."""
