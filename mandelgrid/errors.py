"""
Exceptions raised by the Mandelbrot engine.

Non-escaping orbits and detected periodicity are normal outcomes of the
computation, not errors. Everything here is raised to the caller as-is.
"""


class MandelbrotError(Exception):
    """Base class for all engine errors."""


class InvalidArgument(MandelbrotError, ValueError):
    """A dimension, factor, palette or parameter is out of range."""


class AllocationFailure(MandelbrotError, MemoryError):
    """The iteration or colour grid could not be allocated."""
