"""Tenant context resolution for command-line imports."""

from __future__ import annotations

from typing import Final

from .env import require_env_vars

TENANT_ID_ENV: Final[str] = "ONIX_IMPORT_TENANT_ID"


def get_tenant_id() -> str:
    return require_env_vars((TENANT_ID_ENV,))[TENANT_ID_ENV]
