"""Exception types raised by the tracing core.

Both errors signal a programming-contract violation (usually a bug in scene
construction) rather than bad runtime data, so they are never caught inside
the tracer.
"""


class InvalidValueError(ValueError):
    """A non-finite component was passed where a finite value is required."""


class EmptyBlendError(ValueError):
    """A color blend was requested with no entries (or no total weight)."""
