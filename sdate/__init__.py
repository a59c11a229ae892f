from .base import ResolvedBase, load_zone, resolve
from .core import apply, calculate, shift, snap
from .errors import (
    InvalidBaseTime,
    InvalidFormat,
    InvalidTimezone,
    OperationError,
    OutOfRange,
    ParseError,
    ResolveError,
    SdateError,
    UnknownUnit,
)
from .format import RFC3339, Epoch, FormatPlan, Layout, translate
from .grammar import parse
from .timespec import Relative, TimeSpec, Unit
from .util import HOUR, MINUTE, SECOND

__all__ = [
    "TimeSpec",
    "Relative",
    "Unit",
    "ResolvedBase",
    "FormatPlan",
    "Epoch",
    "Layout",
    "RFC3339",
    "parse",
    "apply",
    "snap",
    "shift",
    "resolve",
    "load_zone",
    "translate",
    "calculate",
    "SdateError",
    "ParseError",
    "InvalidFormat",
    "OperationError",
    "UnknownUnit",
    "OutOfRange",
    "ResolveError",
    "InvalidBaseTime",
    "InvalidTimezone",
    "SECOND",
    "MINUTE",
    "HOUR",
]
