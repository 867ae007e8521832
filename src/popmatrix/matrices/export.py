"""
R Export
========

Text serialization of a Matrix as R source.

FORMATS:
    Any non-empty column name -> tibble, one field per column:
        tibble(
          Key = c('Row 1', 'Row 2'),      # only if any row name is non-empty
          A = c(1.0, 3.0),
          B = c(2.0, 4.0)
        )

    Column names that are not syntactic R names are backquoted
    (`Col 1` = c(...)). Empty column names give an unnamed field.

    Otherwise -> a plain matrix filled by row:
        matrix( c(1.0,2.0,3.0,4.0), ncol=2, nrow=2, byrow=TRUE)

The flat form keeps row-major order so byrow=TRUE reproduces the matrix.
"""

import re
from typing import List, Sequence

import numpy as np

from ..vectors.vector import format_r_number, vector_to_r

# Letter, or a dot not followed by a digit, then letters, digits, dots, underscores
_SYNTACTIC_NAME = re.compile(r"(?:[A-Za-z]|\.(?![0-9]))[A-Za-z0-9._]*")

_RESERVED = frozenset({
    "if", "else", "repeat", "while", "function", "for", "in", "next", "break",
    "TRUE", "FALSE", "NULL", "Inf", "NaN", "NA",
    "NA_integer_", "NA_real_", "NA_character_", "NA_complex_",
})


def _any_named(names: Sequence[str]) -> bool:
    return any(name != "" for name in names)


def _quote(name: str) -> str:
    return "'" + name.replace("\\", "\\\\").replace("'", "\\'") + "'"


def _field_name(name: str) -> str:
    """Column name as an R argument name, backquoted unless syntactic."""
    if _SYNTACTIC_NAME.fullmatch(name) and name not in _RESERVED:
        return name
    return "`" + name.replace("\\", "\\\\").replace("`", "\\`") + "`"


def to_r_source(grid: np.ndarray,
                row_names: Sequence[str],
                col_names: Sequence[str]) -> str:
    """
    R source for a (rows, cols) array with axis names.

    Args:
        grid: (rows, cols) values
        row_names: rows labels, used as the Key column when any is non-empty
        col_names: cols labels; any non-empty label selects the tibble form

    Returns:
        R source string
    """
    rows, cols = grid.shape

    if _any_named(col_names):
        lines: List[str] = ["tibble("]
        if _any_named(row_names):
            lines.append("  Key = c(" + ", ".join(_quote(n) for n in row_names) + "),")
        for c, name in enumerate(col_names):
            field = "  " + vector_to_r(grid[:, c])
            if name != "":
                field = f"  {_field_name(name)} = {field.lstrip()}"
            if c < cols - 1:
                field += ","
            lines.append(field)
        lines.append(")")
        return "\n".join(lines)

    flat = ",".join(format_r_number(x) for x in grid.reshape(-1))
    return f"matrix( c({flat}), ncol={cols}, nrow={rows}, byrow=TRUE)"
