"""Square immutable matrices.

Every transform in the library is represented at a single homogeneous
dimension, so only square matrices exist. A matrix is built from a generator
called once per ``(row, col)`` cell, or from an identity with a list of
overridden cells, which is how all canonical transforms are assembled.
"""

from __future__ import annotations

import operator
from typing import Callable, Iterable, NamedTuple, Optional, Sequence, Tuple

import numpy as np
from numpy.typing import DTypeLike

from tessermath import multiplication
from tessermath.errors import DimensionMismatch, IndexOutOfRange
from tessermath.primitives import check_dimension, one, scalar_type, zero
from tessermath.vector import Vector


class MatrixLocation(NamedTuple):
    """Location of a coefficient within a matrix."""

    row: int
    col: int


class Matrix:
    """An immutable, row-major n×n matrix.

    Coefficients are addressed by ``(row, col)`` pairs. Products use the
    ``@`` operator: ``Matrix @ Matrix`` composes transforms and
    ``Vector @ Matrix`` applies one with a perspective divide.
    """

    __slots__ = ("_coefficients",)
    __array_ufunc__ = None

    def __init__(self, rows: Iterable[Iterable], dtype: Optional[DTypeLike] = None):
        """Create a matrix from nested rows of coefficients.

        Args:
            rows: Sequence of rows, each holding as many values as there are rows
            dtype: Scalar type of the coefficients (float64 if omitted)
        """
        rows = [list(row) for row in rows]
        size = check_dimension(len(rows))
        for row in rows:
            if len(row) != size:
                raise DimensionMismatch(
                    f"Matrix must be square: expected rows of {size} values, got {len(row)}"
                )

        coefficients = np.array(rows, dtype=scalar_type(dtype))
        coefficients.flags.writeable = False
        self._coefficients = coefficients

    @classmethod
    def generate(
        cls,
        size: int,
        initializer: Callable[[int, int], float],
        dtype: Optional[DTypeLike] = None,
    ) -> "Matrix":
        """Create a matrix, initializing every coefficient through ``initializer(row, col)``."""
        check_dimension(size)
        coefficients = np.empty((size, size), dtype=scalar_type(dtype))
        for row, col in np.ndindex(size, size):
            coefficients[row, col] = initializer(row, col)
        return cls.from_array(coefficients)

    @classmethod
    def from_array(cls, array: np.ndarray) -> "Matrix":
        """Wrap a square 2D numpy array, keeping its scalar type."""
        coefficients = np.array(array, dtype=scalar_type(np.asarray(array).dtype))
        if coefficients.ndim != 2 or coefficients.shape[0] != coefficients.shape[1]:
            raise DimensionMismatch(f"Expected a square 2D array, got shape {coefficients.shape}")
        check_dimension(coefficients.shape[0])
        coefficients.flags.writeable = False

        matrix = cls.__new__(cls)
        matrix._coefficients = coefficients
        return matrix

    @property
    def size(self) -> int:
        """Side-length of the matrix."""
        return self._coefficients.shape[0]

    @property
    def dtype(self) -> np.dtype:
        return self._coefficients.dtype

    def at(self, row: int, col: int) -> np.generic:
        """Access a single coefficient."""
        row, col = operator.index(row), operator.index(col)
        if not (0 <= row < self.size and 0 <= col < self.size):
            raise IndexOutOfRange(
                f"Matrix location ({row}, {col}) out of bounds for size {self.size}"
            )
        return self._coefficients[row, col]

    def __getitem__(self, location: Tuple[int, int]) -> np.generic:
        row, col = location
        return self.at(row, col)

    def for_each_coefficient(self, f: Callable[[int, int], None]) -> None:
        """Call ``f(row, col)`` for every coefficient location, row-major."""
        for row, col in np.ndindex(self.size, self.size):
            f(row, col)

    def coefficients(self, dtype: Optional[DTypeLike] = None) -> np.ndarray:
        """Pack all coefficients row-major into a flat buffer.

        Args:
            dtype: Scalar type of the buffer, e.g. ``np.float32`` for GPU upload

        Returns:
            1D array of ``size * size`` values
        """
        buffer = np.empty(self.size * self.size, dtype=self.dtype if dtype is None else dtype)

        def pack(row: int, col: int) -> None:
            buffer[row * self.size + col] = self._coefficients[row, col]

        self.for_each_coefficient(pack)
        return buffer

    def transpose(self) -> "Matrix":
        return Matrix.generate(self.size, lambda row, col: self._coefficients[col, row], dtype=self.dtype)

    @property
    def T(self) -> "Matrix":
        return self.transpose()

    def to_numpy(self) -> np.ndarray:
        """Return a writable copy of the coefficients."""
        return self._coefficients.copy()

    def __array__(self, dtype=None, copy=None):
        return np.array(self._coefficients, dtype=dtype)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.size == other.size and bool(np.array_equal(self._coefficients, other._coefficients))

    def __hash__(self) -> int:
        return hash(tuple(self._coefficients.ravel().tolist()))

    def __matmul__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return multiplication.multiply_matrices(self, other)

    def __rmatmul__(self, other):
        if not isinstance(other, Vector):
            return NotImplemented
        return multiplication.transform_vector(other, self)

    def __str__(self) -> str:
        rows = (", ".join(str(c) for c in row) for row in self._coefficients.tolist())
        return "[ " + " | ".join(rows) + " ]"

    def __repr__(self) -> str:
        return f"Matrix({self._coefficients.tolist()!r}, dtype={self.dtype.name})"


Override = Tuple[Tuple[int, int], float]


def identity(
    size: int,
    overrides: Sequence[Override] = (),
    dtype: Optional[DTypeLike] = None,
) -> Matrix:
    """Create an identity matrix with some cells explicitly initialized.

    Args:
        size: Side-length of the matrix
        overrides: ``((row, col), value)`` pairs; when several target the same
            cell, the last one wins
        dtype: Scalar type of the coefficients

    Returns:
        The created matrix
    """
    dtype = scalar_type(dtype)
    cells = {}
    for location, value in overrides:
        location = MatrixLocation(*location)
        if not (0 <= location.row < size and 0 <= location.col < size):
            raise IndexOutOfRange(f"Override location {tuple(location)} out of bounds for size {size}")
        cells[location] = value

    def initializer(row: int, col: int):
        if (row, col) in cells:
            return cells[(row, col)]
        return one(dtype) if row == col else zero(dtype)

    return Matrix.generate(size, initializer, dtype=dtype)


def transpose(m: Matrix) -> Matrix:
    """Create the transpose of a matrix."""
    return m.transpose()
