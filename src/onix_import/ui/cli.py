# ruff: noqa: T201

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from onix_import.adapters.onix import UploadedFile
from onix_import.app import import_onix_upload
from onix_import.config import (
    ConfigurationError,
    configure_logging,
    get_import_limits,
    get_tenant_id,
)

from .report import render_json, render_text

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Preview an ONIX import")
    parser.add_argument("file", type=Path, help="ONIX 2.1, 3.0 or 3.1 XML file")
    parser.add_argument(
        "--tenant-id",
        type=str,
        help="Tenant the titles are imported for (defaults to ONIX_IMPORT_TENANT_ID)",
    )
    parser.add_argument(
        "--max-products",
        type=int,
        help="Maximum number of products accepted in one file (defaults to config)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the full import report as JSON",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging (overrides ONIX_IMPORT_LOG_LEVEL)",
    )
    return parser.parse_args(list(argv))


def main(argv: Sequence[str] | None = None) -> int:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)

    try:
        configure_logging(verbose=parsed_args.verbose)
        tenant_id = parsed_args.tenant_id or get_tenant_id()
        limits = get_import_limits()
        if parsed_args.max_products is not None:
            if parsed_args.max_products < 1:
                raise ValueError("--max-products must be at least 1")  # noqa: TRY301
            limits = replace(limits, max_products=parsed_args.max_products)
        path: Path = parsed_args.file
        upload = UploadedFile.from_path(path)
        data = path.read_bytes()
    except (ConfigurationError, ValueError, OSError):
        log.exception("CLI validation error")
        return 2

    result = import_onix_upload(data, upload, tenant_id=tenant_id, limits=limits)

    if parsed_args.json:
        print(render_json(result))
    else:
        for line in render_text(result):
            print(line)

    return 1 if result.structural_error is not None else 0


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console-script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    sys.exit(main())


if __name__ == "__main__":
    run()
