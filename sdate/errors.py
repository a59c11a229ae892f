"""Error types raised by sdate.

Every error derives from :class:`SdateError` (itself a ``ValueError``) so
callers can catch the whole family at once, or a single stage:

- :class:`ParseError` for operation strings rejected by the grammar
- :class:`OperationError` for failures while applying a parsed operation
- :class:`ResolveError` for base times and timezone names that cannot be loaded
"""


class SdateError(ValueError):
    """Base class for all sdate errors."""


class ParseError(SdateError):
    pass


class InvalidFormat(ParseError):
    """The operation string does not match the snap/relative grammar."""


class OperationError(SdateError):
    pass


class UnknownUnit(OperationError):
    """A unit code reached the time operator that it does not recognize."""


class OutOfRange(OperationError):
    """The computed instant falls outside the representable calendar."""


class ResolveError(SdateError):
    pass


class InvalidBaseTime(ResolveError):
    """The base time matched none of the accepted literal forms."""


class InvalidTimezone(ResolveError):
    """A timezone name could not be loaded from the timezone database."""
