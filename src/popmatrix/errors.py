"""
Exception taxonomy for popmatrix.

Out-of-range element access is NOT an error (reads give NaN, writes are
ignored) and unreachable graph nodes are NaN distances, so the list is short.
"""


class PopMatrixError(Exception):
    """Base class for errors raised by popmatrix."""


class ShapeMismatchError(PopMatrixError, ValueError):
    """Operand shapes are incompatible with the requested operation."""
