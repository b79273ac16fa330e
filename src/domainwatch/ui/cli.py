from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from domainwatch.app import seed_providers
from domainwatch.config import ConfigurationError, configure_logging, get_catalog_config

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Domainwatch maintenance commands")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    seed = subparsers.add_parser(
        "seed-providers",
        help="Reconcile the providers table with the provider catalog",
    )
    seed.add_argument(
        "--dry-run",
        action="store_true",
        help="Report planned inserts, updates and merges without writing",
    )
    source = seed.add_mutually_exclusive_group()
    source.add_argument(
        "--catalog",
        type=str,
        help="Path to a JSON provider catalog (defaults to the built-in catalog)",
    )
    source.add_argument(
        "--catalog-url",
        type=str,
        help="URL of a JSON provider catalog",
    )

    return parser.parse_args(list(argv))


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        catalog_config = get_catalog_config(path=parsed_args.catalog, url=parsed_args.catalog_url)
    except ConfigurationError:
        log.exception("Configuration error")
        sys.exit(2)

    try:
        if parsed_args.command == "seed-providers":
            result = seed_providers(dry_run=parsed_args.dry_run, catalog_config=catalog_config)
            if result.warnings:
                log.warning("Provider sync finished with %d warnings", len(result.warnings))
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except ConfigurationError:
        log.exception("Configuration error")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error during provider sync")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console script entry point."""
    load_dotenv(".env.local")
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
