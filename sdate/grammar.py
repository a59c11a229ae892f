"""Parser for Splunk-style relative time and snap operations.

An operation is at most two segments concatenated without a separator:

- a relative segment ``[+|-]<quantity><unit>``, e.g. ``-1d`` or ``+90m``
- a snap segment ``@<unit>``, e.g. ``@d``

Either may come first (``-1d@d`` and ``@h+2h`` are both valid), but each kind
appears at most once. The empty string is a valid no-op.
"""

import logging
import re

from sdate.errors import InvalidFormat
from sdate.timespec import Relative, TimeSpec, Unit

logger = logging.getLogger(__name__)

_UNIT_CODES = "".join(unit.value for unit in Unit)
_SEGMENT = rf"(?:[+-][0-9]+|@)[{_UNIT_CODES}]"

# Matched with fullmatch: the whole string must be consumed
_OPERATION = re.compile(rf"(?P<first>{_SEGMENT})?(?P<second>{_SEGMENT})?")

_USAGE = (
    "Expected [+|-]<quantity><unit>@<unit> or @<unit>[+|-]<quantity><unit>\n"
    f"Valid units: {', '.join(_UNIT_CODES)}\n"
    "Examples: '-1d@d', '@h+2h', '+5h', '@w'"
)


def parse(operation: str) -> TimeSpec:
    """Parse an operation string into a TimeSpec.

    Args:
        operation: Combined relative/snap expression, possibly empty

    Returns:
        TimeSpec with the relative delta and snap unit found (either may be None)

    Raises:
        InvalidFormat: If the string is not fully consumed by the grammar, or
            repeats a segment kind (two relatives or two snaps)

    Example:
        >>> parse("-1d@d")
        TimeSpec(relative=Relative(sign=-1, magnitude=1, unit=<Unit.DAY: 'd'>), snap=<Unit.DAY: 'd'>, operation='-1d@d')
    """
    match = _OPERATION.fullmatch(operation)
    if match is None:
        raise InvalidFormat(f"Invalid operation: {operation!r}\n{_USAGE}")

    relative: Relative | None = None
    snap: Unit | None = None

    for segment in (match["first"], match["second"]):
        if segment is None:
            continue
        if segment.startswith("@"):
            if snap is not None:
                raise InvalidFormat(
                    f"Invalid operation: {operation!r} contains more than one snap\n"
                    f"{_USAGE}"
                )
            snap = Unit(segment[1:])
        else:
            if relative is not None:
                raise InvalidFormat(
                    f"Invalid operation: {operation!r} contains more than one "
                    f"relative offset\n{_USAGE}"
                )
            relative = Relative(
                sign=-1 if segment[0] == "-" else 1,
                magnitude=int(segment[1:-1]),
                unit=Unit(segment[-1]),
            )

    spec = TimeSpec(relative=relative, snap=snap, operation=operation)
    logger.debug("parsed operation %r as %r", operation, spec)
    return spec
