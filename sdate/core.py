import logging
from datetime import datetime, timedelta, timezone

from dateutil.relativedelta import relativedelta

from sdate.base import ResolvedBase, convert, resolve
from sdate.errors import OutOfRange
from sdate.format import translate
from sdate.grammar import parse
from sdate.timespec import Relative, TimeSpec, Unit
from sdate.util import DEFAULT_FORMAT, HOUR, MINUTE, SECOND

logger = logging.getLogger(__name__)

_ELAPSED = {
    Unit.SECOND: SECOND,
    Unit.MINUTE: MINUTE,
    Unit.HOUR: HOUR,
}


def _normalize(dt: datetime) -> datetime:
    """Re-resolve a wall-clock result so times inside a DST gap move forward."""
    return dt.astimezone(timezone.utc).astimezone(dt.tzinfo)


def snap(dt: datetime, unit: Unit | str) -> datetime:
    """Truncate ``dt`` to the start of ``unit`` on its own wall clock.

    Weeks start on Sunday. Day, week, month and year boundaries are computed
    in ``dt``'s timezone, not UTC.

    Raises:
        UnknownUnit: If ``unit`` is not a recognized unit or unit code
        OutOfRange: If the week start falls before year 1
    """
    unit = Unit.lookup(unit)
    # fold=0: the first midnight when a fall-back repeats it
    midnight = dict(hour=0, minute=0, second=0, microsecond=0, fold=0)

    if unit is Unit.SECOND:
        return dt.replace(microsecond=0)
    if unit is Unit.MINUTE:
        return dt.replace(second=0, microsecond=0)

    try:
        if unit is Unit.HOUR:
            return _normalize(dt.replace(minute=0, second=0, microsecond=0))
        if unit is Unit.DAY:
            return _normalize(dt.replace(**midnight))
        if unit is Unit.MONTH:
            return _normalize(dt.replace(day=1, **midnight))
        if unit is Unit.YEAR:
            return _normalize(dt.replace(month=1, day=1, **midnight))

        # Week: isoweekday() is Mon=1..Sun=7, so Sunday maps to 0 days back
        days_back = dt.isoweekday() % 7
        return _normalize(dt.replace(**midnight) - timedelta(days=days_back))
    except OverflowError as e:
        raise OutOfRange(
            f"Cannot snap {dt.isoformat()} to @{unit}: result is out of range\n"
            f"Supported years are 1 through 9999"
        ) from e


def shift(dt: datetime, relative: Relative) -> datetime:
    """Add a signed quantity of a unit to ``dt``.

    Seconds, minutes and hours are elapsed time. Days and weeks move the wall
    clock by whole calendar days. Months and years use calendar arithmetic
    that clamps to the last valid day (Jan 31 + 1 month is Feb 28, or Feb 29
    in leap years).

    Raises:
        UnknownUnit: If the relative unit is not recognized
        OutOfRange: If the result leaves the years 1..9999
    """
    unit = Unit.lookup(relative.unit)
    amount = relative.amount

    try:
        if unit in _ELAPSED:
            moved = dt.astimezone(timezone.utc) + timedelta(
                seconds=amount * _ELAPSED[unit]
            )
            return moved.astimezone(dt.tzinfo)
        if unit is Unit.DAY:
            return _normalize(dt + timedelta(days=amount))
        if unit is Unit.WEEK:
            return _normalize(dt + timedelta(weeks=amount))
        if unit is Unit.MONTH:
            return _normalize(dt + relativedelta(months=amount))
        return _normalize(dt + relativedelta(years=amount))
    except (OverflowError, ValueError) as e:
        raise OutOfRange(
            f"Result of {relative} applied to {dt.isoformat()} is out of range\n"
            f"Supported years are 1 through 9999"
        ) from e


def apply(base: ResolvedBase, spec: TimeSpec) -> datetime:
    """Apply a parsed operation to a base instant.

    The snap always runs before the relative offset, regardless of the order
    the segments were written in: ``-1d@d`` and ``@d-1d`` both mean "start of
    yesterday".

    Args:
        base: Base instant and the location its calendar is computed in
        spec: Parsed operation

    Returns:
        Timezone-aware datetime in the base location

    Raises:
        UnknownUnit: If the spec carries a unit code the operator does not know
        OutOfRange: If the result is not representable
    """
    result = base.instant
    if spec.snap is not None:
        result = snap(result, spec.snap)
        logger.debug("snapped %s to @%s: %s", base.instant, spec.snap, result)
    if spec.relative is not None:
        shifted = shift(result, spec.relative)
        logger.debug("shifted %s by %s: %s", result, spec.relative, shifted)
        result = shifted
    return result


def calculate(
    operation: str = "",
    base: str | None = None,
    fmt: str = DEFAULT_FORMAT,
    output_tz: str | None = None,
) -> str:
    """Compute and render a timestamp from string inputs.

    Args:
        operation: Relative/snap expression, e.g. ``"-1d@d"`` (empty for none)
        base: Base time literal (None for now), see :func:`sdate.base.resolve`
        fmt: Output format, see :func:`sdate.format.translate`
        output_tz: Timezone to render in (None keeps the base location)

    Returns:
        The rendered timestamp

    Raises:
        SdateError: Any parse, resolve or operation failure

    Example:
        >>> calculate("-1d@d", base="2023-10-27T10:30:00Z")
        '2023-10-26T00:00:00Z'
    """
    resolved = resolve(base)
    spec = parse(operation)
    plan = translate(fmt)
    result = convert(apply(resolved, spec), output_tz)
    return plan.render(result)
