"""
Dense Row-Major Matrix
======================

Matrix is a mutable rectangular container of float64 values with named axes.

SHAPE:
    rows = len(row_names), cols = len(col_names)
    The axis names are the authoritative dimensions. Invariants:
        values.size == rows * cols
        len(digits) == cols

    Reassigning a name list of a different length REBUILDS the matrix
    (zero-filled store of the new shape). Names and store never drift apart.

INDEXING (fail-soft):
    M[r, c] with r, c outside [0, rows) x [0, cols) reads NaN and ignores
    writes. Negative indices are out of range (no wrap-around).

ALGEBRA:
    @        matrix product (cols of lhs == rows of rhs)
    + -      Matrix of the same shape, or scalar
    *        scalar, or Matrix of the same shape (elementwise)
    /        scalar
    Shape mismatches raise ShapeMismatchError.

    Names on results: products take lhs row names and rhs column names,
    elementwise operations keep the lhs names.
"""

import logging
import numbers
import operator
from typing import Callable, List, Optional, Sequence, Tuple, Union

import numpy as np

from ..config.constants import DEFAULT_DIGITS
from ..errors import ShapeMismatchError
from .export import to_r_source

logger = logging.getLogger(__name__)

Scalar = Union[int, float]


def _is_scalar(x) -> bool:
    return isinstance(x, numbers.Real) and not isinstance(x, Matrix)


class Matrix:
    """
    Row-major dense matrix of float64.

    Args:
        rows: number of rows
        cols: number of columns
        value: scalar fill value (default 0.0), or a flat sequence of exactly
               rows * cols values filled BY ROW. For column-major data,
               build the (cols x rows) matrix and take .transpose.

    Raises:
        ValueError: negative dimensions
        ShapeMismatchError: sequence length != rows * cols
    """

    __hash__ = None

    def __init__(self, rows: int, cols: int,
                 value: Union[Scalar, Sequence[float], np.ndarray] = 0.0):
        if rows < 0 or cols < 0:
            raise ValueError(f"Matrix dimensions must be >= 0, got ({rows}, {cols})")

        if _is_scalar(value):
            values = np.full(rows * cols, float(value), dtype=np.float64)
        else:
            values = np.array(value, dtype=np.float64).reshape(-1)
            if values.size != rows * cols:
                raise ShapeMismatchError(
                    f"Expected {rows * cols} values for a {rows}x{cols} matrix, "
                    f"got {values.size}"
                )

        self._values = values
        self._row_names: List[str] = [""] * rows
        self._col_names: List[str] = [""] * cols
        self._digits: List[int] = [DEFAULT_DIGITS] * cols

    # -----------------------------------------------------------------
    # Alternate constructors
    # -----------------------------------------------------------------

    @classmethod
    def from_range(cls, rows: int, cols: int, start: float, stop: float) -> "Matrix":
        """rows x cols values evenly spaced from start through stop, filled by row."""
        return cls(rows, cols, np.linspace(start, stop, rows * cols))

    @classmethod
    def with_names(cls, row_names: Sequence[str], col_names: Sequence[str]) -> "Matrix":
        """Zero matrix whose shape is given by the axis names."""
        M = cls(len(row_names), len(col_names), 0.0)
        M._row_names = [str(n) for n in row_names]
        M._col_names = [str(n) for n in col_names]
        return M

    @classmethod
    def from_array(cls, array: np.ndarray,
                   row_names: Optional[Sequence[str]] = None,
                   col_names: Optional[Sequence[str]] = None) -> "Matrix":
        """Matrix from a 2-D array (copied), with optional names."""
        array = np.asarray(array, dtype=np.float64)
        if array.ndim != 2:
            raise ShapeMismatchError(f"Expected a 2-D array, got {array.ndim}-D")
        M = cls(array.shape[0], array.shape[1], array)
        if row_names is not None:
            M.row_names = row_names
        if col_names is not None:
            M.col_names = col_names
        return M

    @classmethod
    def default(cls) -> "Matrix":
        """3x5 example matrix holding 1..15 with named rows and columns."""
        M = cls(3, 5, np.arange(1.0, 16.0))
        M.row_names = ["Row 1", "Row 2", "Row 3"]
        M.col_names = ["Col 1", "Col 2", "Col 3", "Col 4", "Col 5"]
        return M

    def copy(self) -> "Matrix":
        """Independent copy: values, names and digits."""
        M = Matrix(self.rows, self.cols, self._values)
        M._row_names = list(self._row_names)
        M._col_names = list(self._col_names)
        M._digits = list(self._digits)
        return M

    # -----------------------------------------------------------------
    # Shape and names
    # -----------------------------------------------------------------

    @property
    def rows(self) -> int:
        return len(self._row_names)

    @property
    def cols(self) -> int:
        return len(self._col_names)

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.rows, self.cols)

    @property
    def is_square(self) -> bool:
        return self.rows == self.cols

    @property
    def row_names(self) -> List[str]:
        return list(self._row_names)

    @row_names.setter
    def row_names(self, names: Sequence[str]):
        names = [str(n) for n in names]
        if len(names) != self.rows:
            logger.warning("Row names changed length %d -> %d; rebuilding %dx%d zero matrix",
                           self.rows, len(names), len(names), self.cols)
            self._values = np.zeros(len(names) * self.cols, dtype=np.float64)
        self._row_names = names

    @property
    def col_names(self) -> List[str]:
        return list(self._col_names)

    @col_names.setter
    def col_names(self, names: Sequence[str]):
        names = [str(n) for n in names]
        if len(names) != self.cols:
            logger.warning("Column names changed length %d -> %d; rebuilding %dx%d zero matrix",
                           self.cols, len(names), self.rows, len(names))
            self._values = np.zeros(self.rows * len(names), dtype=np.float64)
            self._digits = [DEFAULT_DIGITS] * len(names)
        self._col_names = names

    @property
    def digits(self) -> List[int]:
        """Fraction digits per column for display. Never affects values."""
        return list(self._digits)

    @digits.setter
    def digits(self, digits: Sequence[int]):
        digits = [int(d) for d in digits]
        if len(digits) != self.cols:
            raise ShapeMismatchError(f"Expected {self.cols} digit settings, got {len(digits)}")
        self._digits = digits

    # -----------------------------------------------------------------
    # Read accessors
    # -----------------------------------------------------------------

    def _grid(self) -> np.ndarray:
        """Writable (rows, cols) view of the store."""
        return self._values.reshape(self.rows, self.cols)

    @property
    def values(self) -> np.ndarray:
        """Read-only (rows, cols) view of the values."""
        view = self._grid().view()
        view.flags.writeable = False
        return view

    def to_numpy(self) -> np.ndarray:
        """Independent (rows, cols) copy of the values."""
        return self._grid().copy()

    def _valid(self, r: int, c: int) -> bool:
        return 0 <= r < self.rows and 0 <= c < self.cols

    def __getitem__(self, key: Tuple[int, int]) -> float:
        r, c = (operator.index(k) for k in key)
        if not self._valid(r, c):
            return float("nan")
        return float(self._values[r * self.cols + c])

    def __setitem__(self, key: Tuple[int, int], value: float):
        r, c = (operator.index(k) for k in key)
        if self._valid(r, c):
            self._values[r * self.cols + c] = value

    def get_row(self, r: int) -> np.ndarray:
        """Row r as a vector (all NaN if r is out of range)."""
        if not 0 <= r < self.rows:
            return np.full(self.cols, np.nan)
        return self._grid()[r].copy()

    def get_col(self, c: int) -> np.ndarray:
        """Column c as a vector (all NaN if c is out of range)."""
        if not 0 <= c < self.cols:
            return np.full(self.rows, np.nan)
        return self._grid()[:, c].copy()

    # -----------------------------------------------------------------
    # Derived quantities
    # -----------------------------------------------------------------

    @property
    def diagonal(self) -> np.ndarray:
        """The first min(rows, cols) diagonal entries."""
        return np.diagonal(self._grid()).copy()

    @diagonal.setter
    def diagonal(self, new_values: Sequence[float]):
        new_values = np.asarray(new_values, dtype=np.float64).reshape(-1)
        n = min(self.rows, self.cols, new_values.size)
        for i in range(n):
            self[i, i] = new_values[i]

    @property
    def trace(self) -> float:
        return float(np.sum(self.diagonal))

    @property
    def sum(self) -> float:
        return float(np.sum(self._values))

    @property
    def row_sum(self) -> np.ndarray:
        """Sum across each row, as self @ ones(cols, 1)."""
        ones = Matrix(self.cols, 1, 1.0)
        return (self @ ones)._values.copy()

    @property
    def col_sum(self) -> np.ndarray:
        """Sum down each column, as ones(1, rows) @ self."""
        ones = Matrix(1, self.rows, 1.0)
        return (ones @ self)._values.copy()

    def _require_square(self, what: str):
        if not self.is_square:
            raise ShapeMismatchError(f"{what} requires a square matrix, got {self.rows}x{self.cols}")

    @property
    def row_matrix(self) -> "Matrix":
        """
        Matrix with X[i, j] = row_sum[j] for every row i.

        Each ROW of the result holds row_sum[0:cols], so entry (i, j) is the
        sum of row j. Take .transpose for X[i, j] = row_sum[i] (square only).

        Raises:
            ShapeMismatchError: cols > rows, where row j would not exist
        """
        if self.cols > self.rows:
            raise ShapeMismatchError(
                f"row_matrix requires rows >= cols, got {self.rows}x{self.cols}"
            )
        v = self.row_sum[:self.cols]
        X = self.copy()
        X._grid()[:, :] = v[np.newaxis, :]
        return X

    @property
    def as_covariance(self) -> "Matrix":
        """
        Double-centered covariance form of a squared-distance matrix D.

            C = -0.5 * (D - r_i/K - r_j/K + sum(D)/K^2)

        with r the row sums and K = rows (Gower centering).
        """
        self._require_square("as_covariance")
        if self.rows == 0:
            return self.copy()
        K = float(self.rows)
        R = self.row_matrix
        D = (R.transpose + R) / K
        rhs = self.sum / K ** 2
        C = (self * -1.0 + D - rhs) * 0.5
        C._row_names = list(self._row_names)
        C._col_names = list(self._col_names)
        return C

    @property
    def as_distance(self) -> "Matrix":
        """
        Squared-distance form of a covariance matrix C.

            D[i, j] = C[i, i] + C[j, j] - 2 C[i, j]
        """
        self._require_square("as_distance")
        C = self._grid()
        d = np.diagonal(C)
        D = self.copy()
        D._grid()[:, :] = d[:, np.newaxis] + d[np.newaxis, :] - 2.0 * C
        return D

    @property
    def transpose(self) -> "Matrix":
        """
        New transposed matrix.

        Row and column names swap with the axes, so transpose of transpose
        equals the original. Digits reset to the default.
        """
        T = Matrix(self.cols, self.rows, self._grid().T)
        T._row_names = list(self._col_names)
        T._col_names = list(self._row_names)
        return T

    @property
    def T(self) -> "Matrix":
        return self.transpose

    # -----------------------------------------------------------------
    # In-place and structural operations
    # -----------------------------------------------------------------

    def center(self):
        """Subtract each column's mean from that column, in place."""
        if self.rows == 0:
            return
        mu = self.col_sum / float(self.rows)
        self._grid()[:, :] -= mu[np.newaxis, :]

    def submatrix(self, row_indices: Sequence[int], col_indices: Sequence[int]) -> "Matrix":
        """
        Gather rows/columns into a new matrix.

        Indices may be unsorted and repeated. Out-of-range indices give NaN
        entries and empty names.
        """
        r = np.asarray(row_indices, dtype=np.intp).reshape(-1)
        c = np.asarray(col_indices, dtype=np.intp).reshape(-1)
        r_ok = (r >= 0) & (r < self.rows)
        c_ok = (c >= 0) & (c < self.cols)

        out = np.full((r.size, c.size), np.nan)
        out[np.ix_(r_ok, c_ok)] = self._grid()[np.ix_(r[r_ok], c[c_ok])]

        S = Matrix(r.size, c.size, out)
        S._row_names = [self._row_names[i] if ok else "" for i, ok in zip(r, r_ok)]
        S._col_names = [self._col_names[j] if ok else "" for j, ok in zip(c, c_ok)]
        return S

    # -----------------------------------------------------------------
    # Equality
    # -----------------------------------------------------------------

    def __eq__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return (self.shape == other.shape
                and np.array_equal(self._values, other._values)
                and self._row_names == other._row_names
                and self._col_names == other._col_names)

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    # -----------------------------------------------------------------
    # Arithmetic
    # -----------------------------------------------------------------

    def _like(self, grid: np.ndarray) -> "Matrix":
        """New matrix with self's names and digits holding grid."""
        M = Matrix(self.rows, self.cols, grid)
        M._row_names = list(self._row_names)
        M._col_names = list(self._col_names)
        M._digits = list(self._digits)
        return M

    def _elementwise(self, other, op: Callable, symbol: str, matrix_ok: bool = True):
        if isinstance(other, Matrix):
            if not matrix_ok:
                return NotImplemented
            if self.shape != other.shape:
                raise ShapeMismatchError(
                    f"Cannot apply '{symbol}' to {self.rows}x{self.cols} and "
                    f"{other.rows}x{other.cols} matrices"
                )
            return self._like(op(self._grid(), other._grid()))
        if _is_scalar(other):
            return self._like(op(self._grid(), float(other)))
        return NotImplemented

    def __add__(self, other):
        return self._elementwise(other, np.add, "+")

    def __radd__(self, other):
        return self._elementwise(other, np.add, "+")

    def __sub__(self, other):
        return self._elementwise(other, np.subtract, "-")

    def __rsub__(self, other):
        return self._elementwise(other, lambda a, b: b - a, "-", matrix_ok=False)

    def __mul__(self, other):
        return self._elementwise(other, np.multiply, "*")

    def __rmul__(self, other):
        return self._elementwise(other, np.multiply, "*", matrix_ok=False)

    def __truediv__(self, other):
        return self._elementwise(other, np.divide, "/", matrix_ok=False)

    def __neg__(self):
        return self._like(-self._grid())

    def __matmul__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        if self.cols != other.rows:
            raise ShapeMismatchError(
                f"Cannot multiply {self.rows}x{self.cols} by {other.rows}x{other.cols}"
            )
        P = Matrix(self.rows, other.cols, self._grid() @ other._grid())
        P._row_names = list(self._row_names)
        P._col_names = list(other._col_names)
        return P

    # -----------------------------------------------------------------
    # Presentation and export
    # -----------------------------------------------------------------

    def formatted_value(self, r: int, c: int) -> str:
        """Value at (r, c) with digits[c] fraction digits."""
        n = self._digits[c] if 0 <= c < self.cols else DEFAULT_DIGITS
        return f"{self[r, c]:.{n}f}"

    def __str__(self):
        lines = [f"Matrix: ({self.rows} x {self.cols})", "["]
        for r in range(self.rows):
            cells = " ".join(self.formatted_value(r, c) for c in range(self.cols))
            lines.append(f" {self._row_names[r]}  {cells}")
        lines.append("]")
        return "\n".join(lines) + "\n"

    def __repr__(self):
        return f"Matrix({self.rows}, {self.cols}, {self._values.tolist()!r})"

    def to_r(self) -> str:
        """R source: a tibble when columns are named, else matrix(..., byrow=TRUE)."""
        return to_r_source(self._grid(), self._row_names, self._col_names)
