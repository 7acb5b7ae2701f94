"""Dense two-dimensional matrices of floats."""

from __future__ import annotations

import logging
from typing import Iterable

logger = logging.getLogger(__name__)


class Matrix:
    """A ``rows`` x ``cols`` matrix of floats."""

    __slots__ = ("_rows", "_cols", "_data")
    __hash__ = None  # type: ignore[assignment]

    def __init__(self, rows: int, cols: int, fill: float = 0.0) -> None:
        if rows <= 0 or cols <= 0:
            raise ValueError(f"invalid dimensions (rows={rows}, cols={cols})")
        self._rows = rows
        self._cols = cols
        self._data = [[float(fill)] * cols for _ in range(rows)]
        logger.debug("created %dx%d matrix", rows, cols)

    @classmethod
    def filled(cls, rows: int, cols: int, value: float) -> Matrix:
        """Matrix with every element set to ``value``."""
        return cls(rows, cols, value)

    @classmethod
    def zeros(cls, rows: int, cols: int) -> Matrix:
        """Matrix of zeros."""
        return cls(rows, cols, 0.0)

    @classmethod
    def ones(cls, rows: int, cols: int) -> Matrix:
        """Matrix of ones."""
        return cls(rows, cols, 1.0)

    @classmethod
    def from_array(cls, rows: int, cols: int, values: Iterable[float]) -> Matrix:
        """Matrix filled row by row from a flat sequence of values."""
        if values is None:
            raise TypeError("values must be an iterable of numbers")
        flat = [float(v) for v in values]
        matrix = cls(rows, cols)
        if len(flat) != rows * cols:
            raise ValueError(
                f"expected {rows * cols} values for a {rows}x{cols} matrix, got {len(flat)}"
            )
        it = iter(flat)
        matrix._data = [list(row) for row in zip(*[it] * cols)]
        return matrix

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    def _check_index(self, index: tuple[int, int]) -> tuple[int, int]:
        try:
            row, col = index
        except (TypeError, ValueError):
            raise TypeError("matrix index must be a (row, col) pair") from None
        if not (0 <= row < self._rows and 0 <= col < self._cols):
            raise IndexError(
                f"index ({row}, {col}) out of range for {self._rows}x{self._cols} matrix"
            )
        return row, col

    def __getitem__(self, index: tuple[int, int]) -> float:
        row, col = self._check_index(index)
        return self._data[row][col]

    def __setitem__(self, index: tuple[int, int], value: float) -> None:
        row, col = self._check_index(index)
        self._data[row][col] = float(value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and self._data == other._data

    @property
    def shape(self) -> tuple[int, int]:
        return self._rows, self._cols

    def tolist(self) -> list[list[float]]:
        """Copy of the elements as nested lists."""
        return [list(row) for row in self._data]

    def _same_shape(self, other: Matrix, op: str) -> None:
        if self.shape != other.shape:
            raise ValueError(
                f"cannot {op} matrices of incompatible dimensions "
                f"({self._rows}x{self._cols} and {other._rows}x{other._cols})"
            )

    def _combine(self, other: Matrix, op) -> Matrix:
        result = Matrix(self._rows, self._cols)
        result._data = [
            [op(a, b) for a, b in zip(row_a, row_b)]
            for row_a, row_b in zip(self._data, other._data)
        ]
        return result

    def __add__(self, other: object) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        self._same_shape(other, "add")
        return self._combine(other, lambda a, b: a + b)

    def __sub__(self, other: object) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        self._same_shape(other, "subtract")
        return self._combine(other, lambda a, b: a - b)

    def __matmul__(self, other: object) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        if self._cols != other._rows:
            raise ValueError(
                f"cannot multiply: left has {self._cols} columns, right has {other._rows} rows"
            )
        columns = list(zip(*other._data))
        result = Matrix(self._rows, other._cols)
        result._data = [
            [sum(a * b for a, b in zip(row, col)) for col in columns]
            for row in self._data
        ]
        return result

    def __repr__(self) -> str:
        return f"Matrix({self._rows}, {self._cols}, {self._data!r})"