# ruff: noqa: T201

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING, TextIO

from dotenv import load_dotenv

from ddsync import __version__
from ddsync.app import sync_registrar_domains
from ddsync.config import ConfigurationError, configure_logging, get_dondominio_config
from ddsync.domain.errors import UnknownClientError
from ddsync.domain.reconciliation import SyncOptions

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from ddsync.config import DonDominioConfig
    from ddsync.domain.report import RunSummary

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="ddsync",
        description="Synchronise DonDominio domains into a BoxBilling database",
    )
    parser.add_argument(
        "-u",
        "--username",
        type=str,
        help="DonDominio API username (defaults to DONDOMINIO_API_USER)",
    )
    parser.add_argument(
        "-p",
        "--password",
        type=str,
        help="DonDominio API password (defaults to DONDOMINIO_API_PASSWORD)",
    )
    parser.add_argument(
        "--uid",
        type=int,
        required=True,
        help="Default BoxBilling client id for domains whose owner is not a known client",
    )
    parser.add_argument(
        "--forceUID",
        "--force-uid",
        dest="force_uid",
        action="store_true",
        help="Assign every created domain to --uid, ignoring owner emails",
    )
    parser.add_argument(
        "--sync",
        action="store_true",
        help="Only update existing domains; don't create missing ones",
    )
    parser.add_argument(
        "--dry",
        action="store_true",
        help="Do not write anything to the database",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Write the run report to this file instead of stdout",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Log debug output")
    verbosity.add_argument("-s", "--silent", action="store_true", help="Only log warnings")
    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Also log HTTP traffic of the API client",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(list(argv))


def _log_level(args: argparse.Namespace) -> int:
    if args.verbose or args.debug:
        return logging.DEBUG
    if args.silent:
        return logging.WARNING
    return logging.INFO


def render_report(summary: RunSummary) -> str:
    """Format a finished run as plain text."""

    title = "DonDominio sync finished"
    if summary.dry_run:
        title += " (dry run, nothing was written)"
    lines = [
        title,
        f"Domains observed: {summary.observed}",
        f"Created: {summary.created}",
        f"Updated: {summary.updated}",
        f"Skipped: {summary.skipped}",
        f"Failed: {summary.failed}",
    ]
    if not summary.pagination_completed:
        lines.append("The domain list could not be read completely.")
    if summary.entries:
        lines.append("")
        lines.append("Errors:")
        lines.extend(f"- {entry.message}" for entry in summary.entries)
    return "\n".join(lines) + "\n"


def _write_report(text: str, output: Path | None, stream: TextIO) -> None:
    if output is None:
        print(text, end="", file=stream)
        return
    output.write_text(text, encoding="utf-8")
    log.info("Report written to %s", output)


def main(argv: Sequence[str] | None = None, *, stream: TextIO | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=_log_level(parsed_args), http_debug=parsed_args.debug)

    options = SyncOptions(
        default_client_id=parsed_args.uid,
        dry_run=parsed_args.dry,
        sync_only=parsed_args.sync,
        force_default_client=parsed_args.force_uid,
    )
    registry_config: DonDominioConfig
    try:
        registry_config = get_dondominio_config(
            api_user=parsed_args.username,
            api_password=parsed_args.password,
        )
    except ConfigurationError:
        log.exception("Configuration error")
        sys.exit(2)

    try:
        report = sync_registrar_domains(options, registry_config=registry_config)
    except UnknownClientError:
        log.exception("CLI validation error")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error during sync")
        sys.exit(1)

    _write_report(render_report(report.summary()), parsed_args.output, stream or sys.stdout)
    if not report.pagination_completed:
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
