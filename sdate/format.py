"""Translate user-friendly format strings into render plans.

Supported tokens:

    YYYY  4-digit year            hh   24-hour hour
    YY    2-digit year            mm   minute
    MM    2-digit month           ss   second
    M     1-digit month           SSS  millisecond
    DD    2-digit day             UUU  microsecond
    D     1-digit day             a    am/pm
    TZ    zone abbreviation       ZZZ  zone offset +HHMM
                                  ZZ   zone offset +HH:MM

The format string is scanned once, left to right, taking the longest token at
each position (so ``YYYY`` is never read as ``YY`` twice). Everything else is
copied literally, including letters that are not tokens. Text that happens to
spell a token (the ``a`` in ``at``, say) is still treated as that token.

Native ``strftime`` directives (``%Y``, ``%b``, ``%-d``, ``%%``...) are also
accepted and may be mixed with the tokens above. A directive is taken whole
before token matching, so the ``M`` in ``%M`` is never read as a month. A
trailing lone ``%`` is literal.

The keywords ``unix``/``epoch`` render integer seconds since the Unix epoch and
``rfc3339`` renders ``2023-10-27T10:30:00Z`` style timestamps.
"""

import logging
import math
import re
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta

from typing_extensions import override

from sdate.util import EPOCH_KEYWORDS, RFC3339_KEYWORD

logger = logging.getLogger(__name__)


def _offset(dt: datetime, sep: str) -> str:
    offset = dt.utcoffset() or timedelta(0)
    sign = "-" if offset < timedelta(0) else "+"
    minutes = abs(int(offset.total_seconds())) // 60
    hours, minutes = divmod(minutes, 60)
    return f"{sign}{hours:02d}{sep}{minutes:02d}"


def _abbreviation(dt: datetime) -> str:
    """Zone abbreviation, or +HHMM for zones that only carry an offset."""
    name = dt.tzname()
    if not name or name.startswith(("UTC+", "UTC-")):
        return _offset(dt, "")
    return name


def _rfc3339_zone(dt: datetime) -> str:
    if dt.utcoffset() == timedelta(0):
        return "Z"
    return _offset(dt, ":")


_RENDERERS: dict[str, Callable[[datetime], str]] = {
    "YYYY": lambda dt: f"{dt.year:04d}",
    "YY": lambda dt: f"{dt.year % 100:02d}",
    "MM": lambda dt: f"{dt.month:02d}",
    "M": lambda dt: str(dt.month),
    "DD": lambda dt: f"{dt.day:02d}",
    "D": lambda dt: str(dt.day),
    "hh": lambda dt: f"{dt.hour:02d}",
    "mm": lambda dt: f"{dt.minute:02d}",
    "ss": lambda dt: f"{dt.second:02d}",
    "SSS": lambda dt: f"{dt.microsecond // 1000:03d}",
    "UUU": lambda dt: f"{dt.microsecond:06d}",
    "a": lambda dt: "am" if dt.hour < 12 else "pm",
    "TZ": _abbreviation,
    "ZZZ": lambda dt: _offset(dt, ""),
    "ZZ": lambda dt: _offset(dt, ":"),
}

# User-facing tokens, longest first so the scanner prefers YYYY over YY
TOKENS: tuple[str, ...] = tuple(sorted(_RENDERERS, key=len, reverse=True))

# Only reachable through the rfc3339 keyword
_RENDERERS["rfc3339_zone"] = _rfc3339_zone

# strftime flags (glibc/BSD) allowed between % and the directive letter
_FLAGS = "-_0^#"
_DIRECTIVE = re.compile(rf"%[{re.escape(_FLAGS)}]?.", re.DOTALL)


class Segment(ABC):
    @abstractmethod
    def render(self, dt: datetime) -> str:
        pass


@dataclass(frozen=True)
class Text(Segment):
    value: str

    @override
    def render(self, dt: datetime) -> str:
        return self.value

    @override
    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Field(Segment):
    token: str

    def __post_init__(self) -> None:
        if self.token not in _RENDERERS:
            valid = ", ".join(TOKENS)
            raise ValueError(f"Unknown format token: {self.token!r}. Valid: {valid}")

    @override
    def render(self, dt: datetime) -> str:
        return _RENDERERS[self.token](dt)

    @override
    def __str__(self) -> str:
        return self.token


@dataclass(frozen=True)
class Directive(Segment):
    """A native ``strftime`` directive such as ``%Y`` or ``%-d``."""

    code: str

    def __post_init__(self) -> None:
        if not _DIRECTIVE.fullmatch(self.code):
            raise ValueError(
                f"Invalid strftime directive: {self.code!r}\n"
                f"Expected '%' followed by an optional flag ({_FLAGS}) and one character"
            )

    @override
    def render(self, dt: datetime) -> str:
        return dt.strftime(self.code)

    @override
    def __str__(self) -> str:
        return self.code


class FormatPlan(ABC):
    """How a computed instant is turned into output text."""

    @abstractmethod
    def render(self, dt: datetime) -> str:
        pass


@dataclass(frozen=True)
class Layout(FormatPlan):
    """Ordered literal and token segments rendering a datetime."""

    segments: tuple[Segment, ...]

    @override
    def render(self, dt: datetime) -> str:
        return "".join(segment.render(dt) for segment in self.segments)

    @override
    def __str__(self) -> str:
        return "".join(str(s) for s in self.segments)


@dataclass(frozen=True)
class Epoch(FormatPlan):
    """Render as whole seconds since 1970-01-01T00:00:00Z."""

    @override
    def render(self, dt: datetime) -> str:
        return str(math.floor(dt.timestamp()))

    @override
    def __str__(self) -> str:
        return "unix"


RFC3339: Layout = Layout(
    (
        Field("YYYY"),
        Text("-"),
        Field("MM"),
        Text("-"),
        Field("DD"),
        Text("T"),
        Field("hh"),
        Text(":"),
        Field("mm"),
        Text(":"),
        Field("ss"),
        Field("rfc3339_zone"),
    )
)


def translate(user_format: str) -> FormatPlan:
    """Translate a user format string into a FormatPlan.

    Args:
        user_format: Token format (e.g. ``"YYYY/MM/DD hh:mm:ss"``), strftime
            directives (e.g. ``"%Y-%m-%d"``), a mix of both, or one of the
            keywords ``unix``, ``epoch``, ``rfc3339`` (case-insensitive)

    Returns:
        ``Epoch()`` for the epoch keywords, otherwise a ``Layout``

    Example:
        >>> dt = datetime(2023, 10, 27, 10, 30, tzinfo=timezone.utc)
        >>> translate("YYYY-MM-DD hh:mm:ss.SSS").render(dt)
        '2023-10-27 10:30:00.000'
        >>> translate("%A, DD %b").render(dt)
        'Friday, 27 Oct'
    """
    keyword = user_format.lower()
    if keyword in EPOCH_KEYWORDS:
        return Epoch()
    if keyword == RFC3339_KEYWORD:
        return RFC3339

    segments: list[Segment] = []
    literal: list[str] = []
    pos = 0
    while pos < len(user_format):
        directive = _DIRECTIVE.match(user_format, pos)
        if directive is not None:
            segment: Segment = Directive(directive.group())
            width = directive.end() - pos
        else:
            token = next((t for t in TOKENS if user_format.startswith(t, pos)), None)
            if token is None:
                literal.append(user_format[pos])
                pos += 1
                continue
            segment = Field(token)
            width = len(token)
        if literal:
            segments.append(Text("".join(literal)))
            literal = []
        segments.append(segment)
        pos += width
    if literal:
        segments.append(Text("".join(literal)))

    layout = Layout(tuple(segments))
    logger.debug("translated format %r into %d segments", user_format, len(segments))
    return layout
