"""Resolve base-time literals into timezone-aware instants.

Accepted forms, tried in order:

1. ``TZ=<name> YYYY-MM-DDTHH:MM:SS`` or ``TZ=<name> YYYY-MM-DD`` (local time in <name>)
2. Unix epoch seconds, e.g. ``1698372000`` (UTC)
3. RFC3339, e.g. ``2023-10-27T10:00:00Z`` or ``2023-10-27T19:00:00+09:00``
4. Plain date ``YYYY-MM-DD`` (midnight UTC)

A missing base time means "now" in the host timezone.
"""

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dateutil import tz

from sdate.errors import InvalidBaseTime, InvalidTimezone, OutOfRange

logger = logging.getLogger(__name__)

_TZ_PREFIX = re.compile(r"TZ=(?P<tz>[\w/+\-]+)\s+(?P<time>.+)")
_EPOCH = re.compile(r"[+-]?[0-9]+")
_RFC3339 = re.compile(
    r"[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}:[0-9]{2}(?:\.[0-9]+)?"
    r"(?:Z|[+-][0-9]{2}:[0-9]{2})"
)
_DATE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
_LOCAL_DATETIME = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}:[0-9]{2}")

_HINT = (
    "Use RFC3339 (e.g., 2023-10-27T10:00:00Z), YYYY-MM-DD, Unix time "
    "(e.g., 1698372000),\n"
    "or a timezone-qualified local time (e.g., 'TZ=Asia/Tokyo 2023-10-27T10:00:00')"
)


@dataclass(frozen=True, kw_only=True)
class ResolvedBase:
    """An instant plus the location its calendar operations happen in."""

    instant: datetime
    location: tzinfo

    def __post_init__(self) -> None:
        if self.instant.tzinfo is None:
            raise TypeError(
                f"ResolvedBase instant must be a timezone-aware datetime.\n"
                f"Got naive datetime: {self.instant!r}\n"
                f"Hint: Add timezone info:\n"
                f"  from zoneinfo import ZoneInfo\n"
                f"  dt = datetime(..., tzinfo=ZoneInfo('UTC'))"
            )
        if self.instant.tzinfo is not self.location:
            # Keep the instant expressed in its own location
            object.__setattr__(self, "instant", self.instant.astimezone(self.location))

    @classmethod
    def of(cls, instant: datetime) -> "ResolvedBase":
        """Wrap an aware datetime, using its own tzinfo as the location."""
        return cls(instant=instant, location=instant.tzinfo)  # type: ignore[arg-type]


def load_zone(name: str) -> tzinfo:
    """Load a timezone by IANA name.

    ``"UTC"`` maps to ``timezone.utc`` and ``"Local"`` to the host timezone.

    Raises:
        InvalidTimezone: If the name is not in the timezone database
    """
    if name == "UTC":
        return timezone.utc
    if name == "Local":
        return tz.tzlocal()
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise InvalidTimezone(
            f"Invalid timezone name: {name!r}\n"
            f"Use an IANA timezone name, e.g. 'UTC', 'Asia/Tokyo', 'America/New_York'"
        ) from e


def now() -> ResolvedBase:
    """Current instant in the host timezone."""
    return ResolvedBase.of(datetime.now(tz.tzlocal()))


def resolve(raw: str | None) -> ResolvedBase:
    """Parse a base-time literal into a ResolvedBase.

    Args:
        raw: Base time literal, or None (or empty) for the current time

    Raises:
        InvalidTimezone: If a ``TZ=<name>`` prefix names an unknown timezone
        InvalidBaseTime: If the literal matches none of the accepted forms
    """
    if not raw:
        return now()

    prefixed = _TZ_PREFIX.fullmatch(raw)
    if prefixed is not None:
        zone = load_zone(prefixed["tz"])
        base = _parse_local(prefixed["time"], zone)
        logger.debug("resolved %r as local time in %s: %s", raw, prefixed["tz"], base)
        return base

    if _EPOCH.fullmatch(raw):
        try:
            instant = datetime.fromtimestamp(int(raw), tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as e:
            raise InvalidBaseTime(
                f"Unix time out of range: {raw}\n{_HINT}"
            ) from e
        logger.debug("resolved %r as unix time: %s", raw, instant)
        return ResolvedBase.of(instant)

    if _RFC3339.fullmatch(raw):
        instant = _checked(datetime.fromisoformat, raw)
        logger.debug("resolved %r as RFC3339: %s", raw, instant)
        return ResolvedBase.of(instant)

    if _DATE.fullmatch(raw):
        instant = _checked(datetime.strptime, raw, "%Y-%m-%d")
        logger.debug("resolved %r as plain date: %s", raw, instant)
        return ResolvedBase.of(instant.replace(tzinfo=timezone.utc))

    raise InvalidBaseTime(f"Invalid base time format: {raw!r}\n{_HINT}")


def convert(instant: datetime, output_tz: str | None) -> datetime:
    """Express ``instant`` in ``output_tz``; None keeps its current location."""
    if not output_tz:
        return instant
    zone = load_zone(output_tz)
    try:
        return instant.astimezone(zone)
    except OverflowError as e:
        raise OutOfRange(
            f"Cannot express {instant.isoformat()} in {output_tz}: out of range"
        ) from e


def _parse_local(text: str, zone: tzinfo) -> ResolvedBase:
    if _LOCAL_DATETIME.fullmatch(text):
        naive = _checked(datetime.strptime, text, "%Y-%m-%dT%H:%M:%S")
    elif _DATE.fullmatch(text):
        naive = _checked(datetime.strptime, text, "%Y-%m-%d")
    else:
        raise InvalidBaseTime(f"Invalid base time format: {text!r}\n{_HINT}")
    # Round-trip through UTC so wall times inside a DST gap move forward
    try:
        instant = naive.replace(tzinfo=zone).astimezone(timezone.utc).astimezone(zone)
    except OverflowError as e:
        raise InvalidBaseTime(f"Base time out of range: {text!r}\n{_HINT}") from e
    return ResolvedBase(instant=instant, location=zone)


def _checked(parser, *args) -> datetime:
    """Run a datetime parser, turning calendar errors (e.g. month 13) into InvalidBaseTime."""
    try:
        return parser(*args)
    except ValueError as e:
        raise InvalidBaseTime(f"Invalid base time: {args[0]!r} ({e})\n{_HINT}") from e
