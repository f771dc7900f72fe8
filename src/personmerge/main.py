#!/usr/bin/env python3

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from personmerge.app import find_duplicate_identificators, handle_delta, reconcile, reconcile_all
from personmerge.config import ConfigurationError, configure_logging

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile duplicate persons sharing an RRN")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("report", help="Count RRNs shared by more than one person")

    reconcile_parser = subparsers.add_parser(
        "reconcile",
        help="Reconcile one RRN, or every duplicate RRN when --rrn is omitted",
    )
    reconcile_parser.add_argument(
        "--rrn",
        type=str,
        help="RRN to reconcile (defaults to all duplicate RRNs)",
    )
    reconcile_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Only compute and log the master records; do not touch the store",
    )

    delta = subparsers.add_parser(
        "delta",
        help="Reconcile the RRNs assigned in a delta notification (JSON)",
    )
    delta.add_argument(
        "path",
        nargs="?",
        help="File holding the notification body (defaults to stdin)",
    )
    delta.add_argument(
        "--dry-run",
        action="store_true",
        help="Only compute and log the master records; do not touch the store",
    )

    return parser.parse_args(list(argv))


def _read_delta(path: str | None) -> object:
    try:
        text = Path(path).read_text() if path else sys.stdin.read()
        return json.loads(text)
    except (OSError, json.JSONDecodeError) as exc:
        raise ValueError(f"Cannot read delta notification: {exc}") from exc


def _run_reconcile(args: argparse.Namespace) -> int:
    if args.rrn:
        result = reconcile(args.rrn, dry_run=args.dry_run)
        log.info(
            "Reconciliation of %s finished: candidates=%s, merged=%s, redirected=%s",
            result.rrn,
            len(result.candidates),
            result.merged,
            result.rewritten,
        )
        return 0

    run = reconcile_all(dry_run=args.dry_run)
    run.wait()
    log.info(
        "Bulk reconciliation finished: total=%s, processed=%s, failed=%s",
        run.total,
        run.processed,
        run.failed,
    )
    return 1 if run.failed else 0


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    try:
        configure_logging()
        parsed_args = _parse_args(list(argv) if argv is not None else list(sys.argv[1:]))
        delta_payload = _read_delta(parsed_args.path) if parsed_args.command == "delta" else None
    except (ValueError, ConfigurationError):
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "report":
            rrns = find_duplicate_identificators()
            print(json.dumps({"duplicates": len(rrns)}))  # noqa: T201
            exit_code = 0
        elif parsed_args.command == "reconcile":
            exit_code = _run_reconcile(parsed_args)
        elif parsed_args.command == "delta":
            results = handle_delta(delta_payload, dry_run=parsed_args.dry_run)
            log.info("Delta handled: reconciled=%s", len(results))
            exit_code = 0
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except ConfigurationError:
        log.exception("Configuration error")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error during reconciliation")
        sys.exit(1)

    if exit_code:
        sys.exit(exit_code)


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
