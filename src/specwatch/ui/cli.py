from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from specwatch.app import list_catalog, track_specs
from specwatch.config import ConfigurationError, configure_logging

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from specwatch.domain.tracking import TrackingRunResult

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Track remote API specifications")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    check = subparsers.add_parser("check", help="Report pending updates without writing")
    _add_only_argument(check)

    sync = subparsers.add_parser("sync", help="Write updated specs and open a pull request")
    sync.add_argument(
        "--no-pr",
        action="store_true",
        help="Write artifacts and the catalog but do not open a pull request",
    )
    _add_only_argument(sync)

    subparsers.add_parser("list", help="Show the tracked catalog")

    return parser.parse_args(list(argv))


def _add_only_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--only",
        action="append",
        metavar="VENDOR/API",
        help="Restrict the run to the given entry (repeatable)",
    )


def _validate_only(values: Sequence[str] | None) -> list[str] | None:
    if not values:
        return None
    for value in values:
        vendor, sep, api = value.partition("/")
        if not sep or not vendor or not api:
            raise ValueError(f"Invalid entry key {value!r}, expected VENDOR/API")
    return list(values)


def _report(result: TrackingRunResult) -> None:
    for update in result.updates:
        log.info(
            "UPDATE %s [%s] %s -> %s at %s",
            update.entry.key,
            update.update_type,
            update.old_version or "-",
            update.new_version,
            update.local_path,
        )
    for failure in result.failures:
        log.info("FAILED %s [%s] %s", failure.entry.key, failure.kind, failure.reason)
    if result.catalog_error:
        log.error("Catalog not saved: %s", result.catalog_error)
    if result.change_error:
        log.error("Pull request not opened: %s", result.change_error)
    if result.change_url:
        log.info("Pull request: %s", result.change_url)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args: argparse.Namespace
    try:
        parsed_args = _parse_args(args_list)
        only = _validate_only(getattr(parsed_args, "only", None))
    except ValueError:
        configure_logging()
        log.exception("CLI validation error")
        sys.exit(2)

    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        if parsed_args.command == "list":
            for entry in list_catalog():
                log.info(
                    "%s (%s) strategy=%s last=%s",
                    entry.key,
                    entry.display_name,
                    entry.versioning_strategy,
                    entry.last_version or "-",
                )
        elif parsed_args.command == "check":
            _report(track_specs(only=only, dry_run=True, open_pull_request=False))
        elif parsed_args.command == "sync":
            _report(track_specs(only=only, open_pull_request=not parsed_args.no_pr))
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except ConfigurationError:
        log.exception("Configuration error")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error during tracking run")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
