"""Small square matrices with cofactor-expansion determinants and inverses.

One Matrix type covers the 4x4 transforms used by the renderer and the
3x3/2x2 submatrices that the cofactor expansion recurses through. Storage is
a read-only float64 NumPy array, so a Matrix is an immutable value.

The determinant is computed by expanding along row 0 and bottoming out at the
2x2 case ``ad - bc``. The inverse is the adjugate divided by the determinant,
with the transpose folded into the write step (``cofactor(row, col)`` is
written to cell ``[col, row]``).

Example:
    >>> from src.raytracer.core.matrix import IDENTITY, Matrix
    >>> from src.raytracer.core.tuples import point
    >>> m = Matrix([[1, 0, 0, 5], [0, 1, 0, -3], [0, 0, 1, 2], [0, 0, 0, 1]])
    >>> m @ point(-3, 4, 5)
    Tuple(x=2.0, y=1.0, z=7.0, w=1.0)
    >>> m.inverse() @ m == IDENTITY
    True
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import overload

import numpy as np
import numpy.typing as npt

from src.raytracer.core.tuples import EPSILON, Tuple

# Sizes the cofactor expansion is defined for
SUPPORTED_SIZES = (2, 3, 4)


class NotInvertibleError(ValueError):
    """Raised when inverting a matrix whose determinant is zero.

    Attributes:
        matrix: The matrix that could not be inverted.
    """

    def __init__(self, matrix: Matrix) -> None:
        super().__init__(f"Matrix is not invertible (determinant is 0):\n{matrix!r}")
        self.matrix = matrix


class Matrix:
    """An immutable row-major square matrix of size 2, 3 or 4.

    Args:
        rows: Nested sequence (or 2D array) of numbers, one inner sequence per row.

    Raises:
        ValueError: If rows is not square or its size is unsupported.
    """

    __slots__ = ("_data",)

    def __init__(self, rows: Sequence[Sequence[float]] | npt.NDArray[np.float64]) -> None:
        data = np.array(rows, dtype=np.float64)
        if data.ndim != 2 or data.shape[0] != data.shape[1]:
            raise ValueError(f"Matrix must be square, got shape {data.shape}")
        if data.shape[0] not in SUPPORTED_SIZES:
            raise ValueError(
                f"Matrix size {data.shape[0]} is not supported (expected one of {SUPPORTED_SIZES})"
            )
        data.flags.writeable = False
        self._data = data

    @property
    def size(self) -> int:
        return int(self._data.shape[0])

    def __getitem__(self, index: tuple[int, int]) -> float:
        row, col = index
        return float(self._data[row, col])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        if self.size != other.size:
            return False
        return bool(np.all(np.abs(self._data - other._data) < EPSILON))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        rows = ", ".join(str(row) for row in self.to_list())
        return f"Matrix([{rows}])"

    @overload
    def __matmul__(self, other: Matrix) -> Matrix: ...

    @overload
    def __matmul__(self, other: Tuple) -> Tuple: ...

    def __matmul__(self, other: Matrix | Tuple) -> Matrix | Tuple:
        if isinstance(other, Matrix):
            return self.multiply(other)
        if isinstance(other, Tuple):
            return self.apply(other)
        return NotImplemented

    def multiply(self, other: Matrix) -> Matrix:
        """Multiply two matrices (each cell is a row-by-column dot product).

        Raises:
            ValueError: If the matrices have different sizes.
        """
        if self.size != other.size:
            raise ValueError(f"Cannot multiply {self.size}x{self.size} by {other.size}x{other.size}")
        return Matrix(self._data @ other._data)

    def apply(self, t: Tuple) -> Tuple:
        """Multiply a 4x4 matrix by a tuple treated as a 4x1 column.

        Raises:
            ValueError: If the matrix is not 4x4.
        """
        if self.size != 4:
            raise ValueError(f"Only 4x4 matrices can transform tuples, got {self.size}x{self.size}")
        x, y, z, w = self._data @ np.array(t.to_list(), dtype=np.float64)
        return Tuple(float(x), float(y), float(z), float(w))

    def transpose(self) -> Matrix:
        return Matrix(self._data.T)

    def submatrix(self, row: int, col: int) -> Matrix:
        """Return a copy with one row and one column removed.

        Raises:
            ValueError: If the matrix is already 2x2.
        """
        if self.size == SUPPORTED_SIZES[0]:
            raise ValueError("A 2x2 matrix has no submatrix")
        reduced = np.delete(np.delete(self._data, row, axis=0), col, axis=1)
        return Matrix(reduced)

    def minor(self, row: int, col: int) -> float:
        return self.submatrix(row, col).determinant()

    def cofactor(self, row: int, col: int) -> float:
        minor = self.minor(row, col)
        return -minor if (row + col) % 2 == 1 else minor

    def determinant(self) -> float:
        if self.size == 2:
            return float(self._data[0, 0] * self._data[1, 1] - self._data[0, 1] * self._data[1, 0])
        return sum(float(self._data[0, col]) * self.cofactor(0, col) for col in range(self.size))

    def is_invertible(self) -> bool:
        return self.determinant() != 0.0

    def inverse(self) -> Matrix:
        """Invert the matrix through its adjugate.

        Returns:
            The inverse matrix.

        Raises:
            NotInvertibleError: If the determinant is exactly zero.
        """
        det = self.determinant()
        if det == 0.0:
            raise NotInvertibleError(self)

        result = np.empty_like(self._data)
        for row in range(self.size):
            for col in range(self.size):
                result[col, row] = self.cofactor(row, col) / det
        return Matrix(result)

    def to_numpy(self) -> npt.NDArray[np.float64]:
        """Return a writable copy of the matrix data."""
        return self._data.copy()

    def to_list(self) -> list[list[float]]:
        return self._data.tolist()


def identity(size: int = 4) -> Matrix:
    """Create an identity matrix of the given size."""
    return Matrix(np.identity(size))


IDENTITY = identity(4)
