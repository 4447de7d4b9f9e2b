"""Sorting a Table in place, and percentiles of a vector.

Sorting happens in two stages:

1. :func:`build_permutation` computes, from one numeric column, the
   permutation ``perm`` such that ``perm[i]`` is the original row index
   that belongs in slot ``i`` after sorting.  The ordering comes from
   ``numpy.argsort(kind="stable")``; a descending sort is the ascending
   permutation reversed end to end, so ties and NaNs (which numpy sorts
   last) are mirrored rather than re-sorted.

2. :func:`apply_permutation_in_place` moves the rows into place by walking
   the cycles of ``perm``.  Only one row is ever held aside (the first row
   of the current cycle), so the extra memory is one row plus an n-long
   visited mask, instead of a second copy of the table::

       slot:   0   1   2          perm = [1, 2, 0]
       before: A   B   C          save A; 0 <- B; 1 <- C; 2 <- saved A
       after:  B   C   A

   Every row is read once from its old slot and written once to its new
   slot, whatever the cycle structure.

:func:`data_sort` is the public entry point that combines the two and
handles bad input by warning and returning the data untouched.
"""

from typing import Optional, Union

import numpy as np

from tabstat.config import (
    N_PERCENTILES, VECTOR_KEY, BackendFailure, InvalidInputError, stopif,
)
from tabstat.table import Table


def _resolve_key(table: Table, sort_key: int) -> int:
    # Column zero on a table with only a vector means "sort the vector".
    if sort_key == 0 and table.matrix is None and table.vector is not None:
        return VECTOR_KEY
    return sort_key


def _is_descending(descending: Union[bool, str]) -> bool:
    if isinstance(descending, str):
        return descending[:1] in ("d", "D")
    return bool(descending)


def build_permutation(
    table: Table,
    sort_key: int = 0,
    descending: Union[bool, str] = False,
) -> np.ndarray:
    """Return the permutation that sorts *table* by one column.

    Parameters
    ----------
    table : Table
        The data; not modified.
    sort_key : int
        Matrix column to sort by, or -1 for the vector.  The default 0
        falls back to the vector when the table has no matrix.
    descending : bool or str
        Reverse the ascending permutation.  A string counts as descending
        when it starts with 'd' or 'D'.

    Raises
    ------
    InvalidInputError
        *table* is None, or has no column *sort_key*.
    BackendFailure
        numpy could not build the index.
    """
    if table is None:
        raise InvalidInputError("build_permutation: no table given")
    key = _resolve_key(table, sort_key)
    if not table.has_column(key):
        raise InvalidInputError(f"build_permutation: table has no column {key}")
    try:
        perm = np.argsort(table.column(key), kind="stable")
    except MemoryError as e:
        raise BackendFailure(f"could not build the sort index: {e}") from e
    if _is_descending(descending):
        perm = perm[::-1].copy()
    return perm


def _is_bijection(perm: np.ndarray, height: int) -> bool:
    if perm.ndim != 1 or len(perm) != height:
        return False
    if height == 0:
        return True
    if perm.min() < 0 or perm.max() >= height:
        return False
    return bool(np.all(np.bincount(perm, minlength=height) == 1))


def _find_min_unsorted(visited: np.ndarray, start: int) -> int:
    # Everything before start is already in place.
    height = len(visited)
    while start < height:
        if not visited[start]:
            return start
        start += 1
    return -1


def apply_permutation_in_place(table: Optional[Table], permutation) -> Optional[Table]:
    """Rearrange the rows of *table* so that slot i holds old row permutation[i].

    Works cycle by cycle: the first row of a cycle is saved, each slot is
    filled from the slot the permutation points at, and the saved row
    closes the cycle.  A fixed point (``permutation[i] == i``) is a cycle
    of length one and is written back unchanged.

    Returns the same table object.  A None table gives a warning and
    None; a permutation that is not a bijection on the rows is rejected
    before anything is moved.
    """
    if stopif(table is None, 1, "You gave me NULL data to permute. Returning None.",
              where="apply_permutation_in_place"):
        return None
    perm = np.asarray(permutation, dtype=np.intp)
    height = table.n_rows
    if stopif(not _is_bijection(perm, height), 0,
              f"the permutation is not a rearrangement of {height} rows; "
              "returning the data unmodified.",
              where="apply_permutation_in_place"):
        return table

    visited = np.zeros(height, dtype=bool)
    start = 0
    while True:
        start = _find_min_unsorted(visited, start)
        if start == -1:
            break
        saved = table.get_row(start)
        visited[start] = True
        i = start
        while perm[i] != start:
            table.copy_row(perm[i], i)
            visited[perm[i]] = True
            i = perm[i]
        table.set_row(i, saved)
    return table


def data_sort(
    data: Optional[Table],
    sort_key: int = 0,
    descending: Union[bool, str] = False,
) -> Optional[Table]:
    """Sort the whole of *data* in place by one column.

    Every part of each row (vector, matrix, text, weights, row name) moves
    together.  NaNs in the key column are left wherever numpy's stable
    argsort puts them; no attempt is made to order them.

    Parameters
    ----------
    data : Table
        The table to sort.  If None, a warning is printed (verbosity >= 1)
        and None is returned.
    sort_key : int
        Matrix column to sort by; -1 means the vector.  Default: column 0,
        or the vector if there is no matrix.
    descending : bool or str
        Descending order if True, or a string beginning with 'd'/'D'.

    Returns
    -------
    The same table, so calls can be chained: ``data_sort(t, 2).show()``.
    If the key column does not exist the table is returned unsorted.
    """
    if stopif(data is None, 1, "You gave me NULL data to sort. Returning None.",
              where="data_sort"):
        return None
    key = _resolve_key(data, sort_key)
    if stopif(not data.has_column(key), 1,
              f"the data has no column {key} to sort by; returning it unsorted.",
              where="data_sort"):
        return data
    # Build the whole permutation before touching any row.
    perm = build_permutation(data, key, descending)
    return apply_permutation_in_place(data, perm)


def vector_percentiles(data, rounding: str = "d") -> Optional[np.ndarray]:
    """Return an array of 101 values; element k is the k-th percentile.

    Element 0 is always the minimum and element 100 the maximum,
    regardless of rounding rule.

    Unless the data size minus one is a multiple of 100, most percentiles
    fall between two observations.  *rounding* picks what to report then:

    * ``'u'`` / ``'up'``      -- the next higher observation,
    * ``'d'`` / ``'down'``    -- the next lower observation (default, and
      the fallback for anything unrecognised),
    * ``'a'`` / ``'average'`` -- the mean of the two neighbours.

    With 'u' or 'a' one can say "at least k% of the sample is at or below
    pctiles[k]"; with 'd' or 'a', "at least (100-k)% is at or above it".

    The input is copied before sorting and never modified.  None or an
    empty sequence prints a diagnostic and returns None.
    """
    if stopif(data is None, 0, "You gave me NULL data.", where="vector_percentiles"):
        return None
    values = np.asarray(data, dtype=np.float64).ravel()
    if stopif(values.size == 0, 0, "You gave me an empty vector.", where="vector_percentiles"):
        return None
    mode = str(rounding)[:1].lower()
    if mode not in ("u", "a"):
        mode = "d"

    ordered = np.sort(values)
    n = ordered.size
    pctiles = np.empty(N_PERCENTILES, dtype=np.float64)
    for k in range(N_PERCENTILES):
        exact = k * (n - 1) / 100.0
        index = int(exact)
        between = index != exact
        if mode == "u" and between:
            index += 1
        if mode == "a" and between:
            pctiles[k] = (ordered[index] + ordered[index + 1]) / 2.0
        else:
            pctiles[k] = ordered[index]
    return pctiles
