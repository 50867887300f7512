"""
Error kinds raised by the random generators.
"""


class RandsymError(Exception):
    """Base class for all randsym errors."""


class EntropySourceError(RandsymError, RuntimeError):
    """
    The secure random source is unavailable, or the requested number of
    words exceeds what a single call may return.
    """


class EmptySequenceError(RandsymError, IndexError):
    """A selection was asked to choose from zero candidates."""
