"""
Exceptions raised by the Arrow Blast engine.

Expected gameplay outcomes (blocked arrows, full slots) are result values,
not exceptions.
"""


class ArrowBlastError(Exception):
    """Base class for Arrow Blast errors."""


class InvalidBlueprint(ArrowBlastError, ValueError):
    """Raised when a level blueprint is out of bounds, overlapping or malformed."""
