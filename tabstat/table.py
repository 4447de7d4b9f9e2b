"""The tabular data container used throughout the package.

A :class:`Table` is a set of parallel row-aligned parts:

* ``vector``  -- one auxiliary numeric column (addressed as column -1),
* ``matrix``  -- an (n, k) float64 block,
* ``text``    -- an (n, t) object array of strings,
* ``weights`` -- one numeric weight per row,

plus optional names for the rows and for each kind of column.  Any part
may be absent (``None``); the ones that are present must agree on the row
count.

Rows are the unit of movement.  :meth:`Table.get_row` returns an
independent one-row copy of every part, :meth:`Table.set_row` writes such
a copy back, and :meth:`Table.copy_row` moves a row within the table
without a temporary.  The in-place sort in :mod:`tabstat.sorting` is
written entirely in terms of these three calls, so it does not care how
the parts are laid out in memory.
"""

from typing import List, Optional, Sequence

import numpy as np
import pandas as pd

from tabstat.config import VECTOR_KEY


def _as_matrix(m) -> Optional[np.ndarray]:
    if m is None:
        return None
    m = np.asarray(m, dtype=np.float64)
    if m.ndim == 1:
        m = m.reshape(-1, 1)
    if m.ndim != 2:
        raise ValueError(f"matrix must be 2-D, got shape {m.shape}")
    return m


def _as_column(v, what: str) -> Optional[np.ndarray]:
    if v is None:
        return None
    v = np.asarray(v, dtype=np.float64)
    if v.ndim != 1:
        raise ValueError(f"{what} must be 1-D, got shape {v.shape}")
    return v


def _as_text(t) -> Optional[np.ndarray]:
    if t is None:
        return None
    arr = np.array(t, dtype=object)
    if arr.ndim == 1 and any(isinstance(cell, (list, tuple, np.ndarray)) for cell in arr):
        raise ValueError("text rows must all have the same number of columns")
    if arr.ndim == 1:
        arr = arr.reshape(-1, 1) if arr.size else arr.reshape(0, 0)
    if arr.ndim != 2:
        raise ValueError("text must be a grid of strings (rows x columns)")
    return arr


class Table:
    """Row-aligned vector / matrix / text / weights, with names."""

    def __init__(
        self,
        matrix=None,
        vector=None,
        text=None,
        weights=None,
        *,
        rownames: Optional[Sequence[str]] = None,
        colnames: Optional[Sequence[str]] = None,
        textnames: Optional[Sequence[str]] = None,
        vector_name: Optional[str] = None,
    ):
        self.matrix = _as_matrix(matrix)
        self.vector = _as_column(vector, "vector")
        self.text = _as_text(text)
        self.weights = _as_column(weights, "weights")
        self.rownames: Optional[List[str]] = list(rownames) if rownames is not None else None
        self.colnames: Optional[List[str]] = list(colnames) if colnames is not None else None
        self.textnames: Optional[List[str]] = list(textnames) if textnames is not None else None
        self.vector_name = vector_name

        lengths = {
            name: len(part)
            for name, part in (
                ("vector", self.vector),
                ("matrix", self.matrix),
                ("text", self.text),
                ("weights", self.weights),
                ("rownames", self.rownames),
            )
            if part is not None
        }
        if len(set(lengths.values())) > 1:
            raise ValueError(f"Table parts disagree on the row count: {lengths}")
        if self.colnames is not None and self.matrix is not None \
                and len(self.colnames) != self.matrix.shape[1]:
            raise ValueError("colnames must name every matrix column")
        if self.textnames is not None and self.text is not None \
                and len(self.textnames) != self.text.shape[1]:
            raise ValueError("textnames must name every text column")

    # -- shape ------------------------------------------------------------

    @property
    def n_rows(self) -> int:
        for part in (self.vector, self.matrix, self.text, self.weights, self.rownames):
            if part is not None:
                return len(part)
        return 0

    def __len__(self) -> int:
        return self.n_rows

    @property
    def n_cols(self) -> int:
        """Width of the numeric matrix (0 if there is none)."""
        return 0 if self.matrix is None else self.matrix.shape[1]

    @property
    def n_text_cols(self) -> int:
        return 0 if self.text is None else self.text.shape[1]

    # -- column access ----------------------------------------------------

    def has_column(self, key: int) -> bool:
        """True if *key* names a matrix column, or is -1 and there is a vector."""
        if key == VECTOR_KEY:
            return self.vector is not None
        return self.matrix is not None and 0 <= key < self.matrix.shape[1]

    def column(self, key: int) -> np.ndarray:
        """Matrix column *key* as a view; -1 gives the vector."""
        if not self.has_column(key):
            raise IndexError(f"Table has no column {key}")
        if key == VECTOR_KEY:
            return self.vector
        return self.matrix[:, key]

    # -- row access -------------------------------------------------------

    def get_row(self, i: int) -> "Table":
        """Return an independent one-row copy of row *i*."""
        sl = slice(i, i + 1)
        return Table(
            matrix=None if self.matrix is None else self.matrix[sl].copy(),
            vector=None if self.vector is None else self.vector[sl].copy(),
            text=None if self.text is None else self.text[sl].copy(),
            weights=None if self.weights is None else self.weights[sl].copy(),
            rownames=None if self.rownames is None else self.rownames[sl],
            colnames=self.colnames,
            textnames=self.textnames,
            vector_name=self.vector_name,
        )

    def set_row(self, i: int, row: "Table") -> None:
        """Overwrite row *i* with the single row held in *row*."""
        if row.n_rows != 1:
            raise ValueError(f"set_row needs a one-row table, got {row.n_rows} rows")
        for name in ("matrix", "vector", "text", "weights", "rownames"):
            mine, theirs = getattr(self, name), getattr(row, name)
            if mine is None:
                continue
            if theirs is None:
                raise ValueError(f"row to set has no {name} part")
            mine[i] = theirs[0]

    def copy_row(self, src: int, dst: int) -> None:
        """Copy row *src* over row *dst* in place."""
        if self.matrix is not None:
            self.matrix[dst] = self.matrix[src]
        if self.vector is not None:
            self.vector[dst] = self.vector[src]
        if self.text is not None:
            self.text[dst] = self.text[src]
        if self.weights is not None:
            self.weights[dst] = self.weights[src]
        if self.rownames is not None:
            self.rownames[dst] = self.rownames[src]

    def copy(self) -> "Table":
        return Table(
            matrix=None if self.matrix is None else self.matrix.copy(),
            vector=None if self.vector is None else self.vector.copy(),
            text=None if self.text is None else self.text.copy(),
            weights=None if self.weights is None else self.weights.copy(),
            rownames=self.rownames,
            colnames=self.colnames,
            textnames=self.textnames,
            vector_name=self.vector_name,
        )

    # -- pandas interop ---------------------------------------------------

    @classmethod
    def from_frame(cls, df: pd.DataFrame) -> "Table":
        """Numeric columns become the matrix, everything else the text.

        A non-default index is kept as the row names.
        """
        num = df.select_dtypes(include=[np.number])
        txt = df.drop(columns=num.columns)
        rownames = None
        if not isinstance(df.index, pd.RangeIndex):
            rownames = [str(r) for r in df.index]
        return cls(
            matrix=num.to_numpy(dtype=np.float64) if num.shape[1] else None,
            text=txt.astype(str).to_numpy(dtype=object) if txt.shape[1] else None,
            rownames=rownames,
            colnames=[str(c) for c in num.columns] if num.shape[1] else None,
            textnames=[str(c) for c in txt.columns] if txt.shape[1] else None,
        )

    def to_frame(self) -> pd.DataFrame:
        cols = {}
        if self.vector is not None:
            cols[self.vector_name or "vector"] = self.vector
        if self.matrix is not None:
            names = self.colnames or [f"c{j}" for j in range(self.n_cols)]
            for j, name in enumerate(names):
                cols[name] = self.matrix[:, j]
        if self.text is not None:
            names = self.textnames or [f"t{j}" for j in range(self.n_text_cols)]
            for j, name in enumerate(names):
                cols[name] = self.text[:, j]
        if self.weights is not None:
            cols["weights"] = self.weights
        return pd.DataFrame(cols, index=self.rownames)

    def show(self) -> str:
        """Return a readable rendering of the table."""
        if self.n_rows == 0:
            return "Table (empty)"
        return self.to_frame().to_string()

    def __str__(self) -> str:
        return self.show()

    def __repr__(self) -> str:
        parts = [
            f"{name}={getattr(self, name).shape}"
            for name in ("vector", "matrix", "text", "weights")
            if getattr(self, name) is not None
        ]
        return f"Table({', '.join(parts)})"
