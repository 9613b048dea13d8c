from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from tagsync.app import migrate_keys, partition_upper_threshold, run_poll_cycle, run_scheduler
from tagsync.config import configure_logging

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _positive_float(value: str) -> float:
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid number: {value}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("Interval must be positive")
    return parsed


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Poll registry tags and emit change events")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log at DEBUG level",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    poll = subparsers.add_parser("poll", help="Run a single poll cycle")
    poll.add_argument(
        "--fast-forward",
        action="store_true",
        help="Update the cache without sending notifications",
    )

    run = subparsers.add_parser("run", help="Poll on a fixed interval until interrupted")
    run.add_argument(
        "--interval",
        type=_positive_float,
        default=None,
        help="Seconds between poll cycles (defaults to config)",
    )
    run.add_argument(
        "--fast-forward-first",
        action="store_true",
        help="Seed the cache silently on the first cycle",
    )
    run.add_argument(
        "--migrate-keys",
        action="store_true",
        help="Migrate legacy cache keys in the background; polling pauses meanwhile",
    )

    threshold = subparsers.add_parser(
        "threshold",
        help="Show the upper item threshold for an account",
    )
    threshold.add_argument("account", type=str, help="Account name")

    subparsers.add_parser("migrate-keys", help="Copy legacy cache keys to the current layout")

    return parser.parse_args(list(argv))


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        if parsed_args.command == "poll":
            run_poll_cycle(send_events=not parsed_args.fast_forward)
        elif parsed_args.command == "run":
            run_scheduler(
                interval_seconds=parsed_args.interval,
                fast_forward_first=parsed_args.fast_forward_first,
                migrate=parsed_args.migrate_keys,
            )
        elif parsed_args.command == "threshold":
            value = partition_upper_threshold(parsed_args.account)
            print(value)  # noqa: T201
        elif parsed_args.command == "migrate-keys":
            result = migrate_keys()
            log.info(
                "Migrated %s keys (%s already present, %s invalid)",
                result.migrated,
                result.skipped,
                result.invalid,
            )
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error during %s", parsed_args.command)
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
