"""Command-line entry point for sdate.

Examples:
    sdate --base 2023-10-27T10:30:00Z --op -1d@d
    sdate --op=+2h --base 'TZ=America/New_York 2023-10-27T10:00:00' \\
        --output-tz Asia/Tokyo --format 'YYYY-MM-DD hh:mm:ss ZZ'
    sdate @d --format unix
"""

import argparse
import logging
import os
import re
import sys
from importlib.metadata import PackageNotFoundError, version

from sdate.core import calculate
from sdate.errors import SdateError
from sdate.util import DEFAULT_FORMAT

logger = logging.getLogger(__name__)

_EPILOG = """\
operations:
  -1d@d    1 day ago, snapped to the beginning of the day
           (pass it with --op, or after "--", when it starts with "-")
  @h       snapped to the beginning of the hour
  +2h      2 hours from the base time

units: s (seconds), m (minutes), h (hours), d (days),
       w (weeks, starting Sunday), M (months), y (years)

format tokens:
  YYYY YY  year          MM M  month        DD D  day
  hh       24-hour       mm    minute       ss    second
  SSS      millisecond   UUU   microsecond  a     am/pm
  TZ       zone name     ZZ    +09:00       ZZZ   +0900
  strftime directives (%Y, %b, %-d, ...) may be mixed in
  'unix' or 'epoch' print seconds since the Unix epoch; 'rfc3339' is the default

environment:
  SDATE_FORMAT     default for --format
  SDATE_OUTPUT_TZ  default for --output-tz
"""


def _version() -> str:
    try:
        return version("sdate")
    except PackageNotFoundError:
        return "dev"


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="sdate",
        description="Generate a timestamp from a Splunk-like relative time and snap operation.",
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    ap.add_argument("operation", nargs="?", default="", help="operation, e.g. '-1d@d'")
    ap.add_argument("--op", default="", help="operation (overrides the positional argument)")
    ap.add_argument(
        "--base",
        default=None,
        help="base time: RFC3339, YYYY-MM-DD, Unix time, or 'TZ=<zone> <local time>'",
    )
    ap.add_argument(
        "--format",
        default=os.environ.get("SDATE_FORMAT", DEFAULT_FORMAT),
        help="output format (default: rfc3339)",
    )
    ap.add_argument(
        "--output-tz",
        default=os.environ.get("SDATE_OUTPUT_TZ") or None,
        help="timezone for the output, e.g. 'Asia/Tokyo'",
    )
    ap.add_argument("-v", "--verbose", action="store_true", help="log debug details to stderr")
    ap.add_argument("--version", action="version", version=f"sdate {_version()}")
    return ap


# Looks like a negative offset, not an option flag
_NEGATIVE_OPERATION = re.compile(r"-[0-9]")


def _join_op_values(argv: list[str]) -> list[str]:
    """Rewrite ``--op -1d@d`` as ``--op=-1d@d`` so argparse keeps the value."""
    joined: list[str] = []
    pending_op = False
    for arg in argv:
        if pending_op and _NEGATIVE_OPERATION.match(arg):
            joined[-1] = f"--op={arg}"
        else:
            joined.append(arg)
        pending_op = arg == "--op"
    return joined


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(_join_op_values(sys.argv[1:] if argv is None else argv))
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    operation = args.op or args.operation
    try:
        result = calculate(operation, args.base, args.format, args.output_tz)
    except SdateError as e:
        logger.debug("failed: %r", e)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(result)
    return 0
