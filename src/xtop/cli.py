from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Sequence

from xtop import __version__
from xtop.config import DEFAULT_CONCURRENCY, DEFAULT_HEADER, DEFAULT_INTERVAL_SEC, RenderConfig, TargetConfig
from xtop.errors import ConfigError, DisplayError
from xtop.loadgen.runner import run_session
from xtop.logging import configure_logging
from xtop.ui.display import CursesDisplay, StreamDisplay

logger = logging.getLogger(__name__)

DESCRIPTION = (
    "A top-like tool to monitor responses from a target URL. It periodically collects "
    "and prints response statuses and a custom response header received from the URL."
)


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        msg = f"must be a positive integer, got {value}"
        raise argparse.ArgumentTypeError(msg)
    return number


def _positive_float(value: str) -> float:
    number = float(value)
    if number <= 0:
        msg = f"must be greater than 0, got {value}"
        raise argparse.ArgumentTypeError(msg)
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="xtop", description=DESCRIPTION)
    parser.add_argument("url", help="Target URL")
    parser.add_argument(
        "-c",
        "--concurrency",
        type=_positive_int,
        default=DEFAULT_CONCURRENCY,
        help="number of persistent workers sending requests",
    )
    parser.add_argument("-x", "--header", default=DEFAULT_HEADER, help="response header name to collect")
    parser.add_argument(
        "-i",
        "--interval",
        type=_positive_float,
        default=DEFAULT_INTERVAL_SEC,
        help="seconds between screen refreshes",
    )
    parser.add_argument("--plain", action="store_true", help="print reports to stdout instead of a dashboard")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="debug logging on stderr; implies --plain so the log does not draw over the dashboard",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose)

    try:
        target = TargetConfig.from_raw(args.url, concurrency=args.concurrency, header=args.header)
        render = RenderConfig(interval_sec=args.interval)
    except ConfigError as exc:
        parser.error(str(exc))

    try:
        if args.plain or args.verbose or not sys.stdout.isatty():
            snapshot = asyncio.run(run_session(target, StreamDisplay(), render))
        else:
            with CursesDisplay() as display:
                snapshot = asyncio.run(run_session(target, display, render))
    except DisplayError as exc:
        print(f"xtop: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 0
    logger.info("session.summary total=%d failures=%d", snapshot.total, snapshot.failures)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
