"""Exceptions raised by vector and matrix operations.

Both derive from the builtin exception a caller would already expect for the
same mistake, so ``except ValueError`` or ``except IndexError`` keep working.
"""

from __future__ import annotations


class DimensionMismatch(ValueError):
    """An initializer or operand does not have the expected dimension."""


class IndexOutOfRange(IndexError):
    """A vector component or matrix cell was addressed outside its bounds."""
