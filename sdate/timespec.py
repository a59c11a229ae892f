from dataclasses import dataclass
from enum import Enum

from sdate.errors import UnknownUnit


class Unit(Enum):
    """Calendar units addressed by one-letter, case-sensitive codes."""

    SECOND = "s"
    MINUTE = "m"
    HOUR = "h"
    DAY = "d"
    WEEK = "w"
    MONTH = "M"
    YEAR = "y"

    @classmethod
    def lookup(cls, code: "Unit | str") -> "Unit":
        """Resolve a unit member or its code, raising UnknownUnit otherwise."""
        if isinstance(code, Unit):
            return code
        try:
            return cls(code)
        except ValueError:
            valid = ", ".join(f"{u.value} ({u.name.lower()})" for u in cls)
            raise UnknownUnit(
                f"Unknown time unit: {code!r}\n"
                f"Valid units: {valid}\n"
                f"Note: units are case-sensitive, 'M' is month and 'm' is minute"
            ) from None

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, kw_only=True)
class Relative:
    sign: int
    magnitude: int
    unit: Unit

    def __post_init__(self) -> None:
        if self.sign not in (1, -1):
            raise ValueError(f"Relative sign must be +1 or -1, got {self.sign}")
        if self.magnitude < 0:
            raise ValueError(
                f"Relative magnitude must be non-negative, got {self.magnitude}"
            )

    @property
    def amount(self) -> int:
        """Signed quantity of ``unit`` to add."""
        return self.sign * self.magnitude

    def __str__(self) -> str:
        sign = "+" if self.sign > 0 else "-"
        return f"{sign}{self.magnitude}{self.unit}"


@dataclass(frozen=True, kw_only=True)
class TimeSpec:
    relative: Relative | None = None
    snap: Unit | None = None
    operation: str = ""

    def __post_init__(self) -> None:
        if self.operation and self.is_noop:
            raise ValueError(
                f"TimeSpec for operation {self.operation!r} needs a relative or a snap.\n"
                f"Only the empty operation may be a no-op.\n"
                f"Hint: build specs from strings with sdate.parse({self.operation!r})"
            )

    @property
    def is_noop(self) -> bool:
        return self.relative is None and self.snap is None

    def __str__(self) -> str:
        """Normalized form: snap first, then relative, matching application order."""
        snap = f"@{self.snap}" if self.snap is not None else ""
        relative = str(self.relative) if self.relative is not None else ""
        return snap + relative
