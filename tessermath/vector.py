"""Fixed-size immutable vectors.

A vector owns a read-only numpy array of its components. The size is fixed
at construction, either from an explicit list of values or from a generator
evaluated once per index. Arithmetic lives in :mod:`tessermath.arithmetic`;
the operators below delegate to it.
"""

from __future__ import annotations

import operator
from typing import Callable, Iterable, Optional

import numpy as np
from numpy.typing import DTypeLike

from tessermath import arithmetic
from tessermath.errors import DimensionMismatch, IndexOutOfRange
from tessermath.primitives import check_dimension, scalar_type


class Vector:
    """An immutable n-dimensional vector.

    Components are stored in a read-only numpy array of a supported scalar
    type (see :mod:`tessermath.primitives`). Named accessors ``x``, ``y``,
    ``z`` and ``q`` alias the first four components.
    """

    __slots__ = ("_components",)

    # Defer binary operators with numpy operands to the methods below
    __array_ufunc__ = None

    def __init__(
        self,
        values: Iterable,
        size: Optional[int] = None,
        dtype: Optional[DTypeLike] = None,
    ):
        """Create a vector from explicit component values.

        Args:
            values: Component values, in order
            size: Expected number of components; a different count is an error
            dtype: Scalar type of the components (float64 if omitted)
        """
        values = list(values)
        if size is not None and len(values) != size:
            raise DimensionMismatch(
                f"Invalid vector component initialization: expected {size} values, got {len(values)}"
            )
        check_dimension(len(values))

        components = np.array(values, dtype=scalar_type(dtype))
        if components.ndim != 1:
            raise DimensionMismatch(f"Vector components must be scalars, got shape {components.shape}")
        components.flags.writeable = False
        self._components = components

    @classmethod
    def generate(
        cls,
        size: int,
        initializer: Callable[[int], float],
        dtype: Optional[DTypeLike] = None,
    ) -> "Vector":
        """Create a vector by calling ``initializer(i)`` for each index in ascending order."""
        check_dimension(size)
        return cls([initializer(i) for i in range(size)], size=size, dtype=dtype)

    @classmethod
    def from_array(cls, array: np.ndarray) -> "Vector":
        """Wrap a 1D numpy array, keeping its scalar type."""
        components = np.array(array, dtype=scalar_type(np.asarray(array).dtype))
        if components.ndim != 1:
            raise DimensionMismatch(f"Expected a 1D array, got shape {components.shape}")
        check_dimension(components.shape[0])
        components.flags.writeable = False

        vector = cls.__new__(cls)
        vector._components = components
        return vector

    @property
    def size(self) -> int:
        return self._components.shape[0]

    @property
    def dtype(self) -> np.dtype:
        return self._components.dtype

    def at(self, index: int) -> np.generic:
        """Access a single component."""
        index = operator.index(index)
        if not 0 <= index < self.size:
            raise IndexOutOfRange(
                f"Vector component index {index} out of bounds for size {self.size}"
            )
        return self._components[index]

    __getitem__ = at

    @property
    def x(self) -> np.generic:
        return self.at(0)

    @property
    def y(self) -> np.generic:
        return self.at(1)

    @property
    def z(self) -> np.generic:
        return self.at(2)

    @property
    def q(self) -> np.generic:
        return self.at(3)

    def astype(self, dtype: DTypeLike) -> "Vector":
        """Convert every component to another scalar type."""
        return Vector(self._components.tolist(), dtype=dtype)

    def to_numpy(self) -> np.ndarray:
        """Return a writable copy of the components."""
        return self._components.copy()

    def __array__(self, dtype=None, copy=None):
        return np.array(self._components, dtype=dtype)

    def __len__(self) -> int:
        return self.size

    def __iter__(self):
        return iter(self._components)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return self.size == other.size and bool(np.array_equal(self._components, other._components))

    def __hash__(self) -> int:
        return hash(tuple(self._components.tolist()))

    def __add__(self, other):
        if not isinstance(other, Vector):
            return NotImplemented
        return arithmetic.add(self, other)

    def __sub__(self, other):
        if not isinstance(other, Vector):
            return NotImplemented
        return arithmetic.subtract(self, other)

    def __neg__(self) -> "Vector":
        return arithmetic.multiply(self, -1)

    def __mul__(self, factor):
        if np.ndim(factor) != 0:
            return NotImplemented
        return arithmetic.multiply(self, factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor):
        if np.ndim(divisor) != 0:
            return NotImplemented
        return arithmetic.divide(self, divisor)

    def __matmul__(self, other):
        # Vector @ Matrix is handled by Matrix.__rmatmul__
        if not isinstance(other, Vector):
            return NotImplemented
        return arithmetic.dot(self, other)

    def __str__(self) -> str:
        return "( " + ", ".join(str(c) for c in self._components.tolist()) + " )"

    def __repr__(self) -> str:
        return f"Vector({self._components.tolist()!r}, dtype={self.dtype.name})"


def vector(*values, dtype: Optional[DTypeLike] = None) -> Vector:
    """Create a vector from its components, e.g. ``vector(1.0, 2.0)``."""
    return Vector(values, dtype=dtype)


def vector3d(x, y, z, dtype: Optional[DTypeLike] = None) -> Vector:
    return Vector((x, y, z), size=3, dtype=dtype)


def vector4d(x, y, z, q, dtype: Optional[DTypeLike] = None) -> Vector:
    return Vector((x, y, z, q), size=4, dtype=dtype)
