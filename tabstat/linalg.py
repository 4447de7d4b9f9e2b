"""Matrix helpers: determinants, inverses, covariance, SVD, stacking.

All the numerical work is done by numpy / scipy / sklearn; these functions
only fix conventions the rest of the package relies on:

* ``det_and_inv`` -- one LU factorisation gives both the determinant and
  the inverse; the input is left untouched.
* ``covariance_matrix`` -- columns are variables, rows observations,
  denominator n-1.
* ``sv_decomposition`` -- principal components of the cross-product matrix
  X'X after scaling it to unit diagonal (Greene's recommendation), with an
  optional randomised solver for wide data.
* ``matrix_stack`` / ``matrix_rm_columns`` -- shape bookkeeping that
  reports mismatches instead of raising.
"""

import warnings
from typing import Optional, Sequence, Tuple

import numpy as np
from scipy.linalg import LinAlgWarning, lu_factor, lu_solve
from sklearn.utils.extmath import randomized_svd

from tabstat.config import EPS, SEED, BackendFailure, notify, stopif


def det_and_inv(
    m: np.ndarray,
    calc_det: bool = True,
    calc_inv: bool = True,
) -> Tuple[float, Optional[np.ndarray]]:
    """Determinant and/or inverse of a square matrix via LU decomposition.

    Returns ``(det, inverse)``.  ``det`` is 0.0 when not requested and
    ``inverse`` is None when not requested.  A singular matrix has
    determinant 0 and no inverse (None, with a diagnostic).
    """
    if stopif(m is None, 0, "You gave me a NULL matrix.", where="det_and_inv"):
        return float("nan"), None
    m = np.asarray(m, dtype=np.float64)
    if stopif(m.ndim != 2 or m.shape[0] != m.shape[1], 0,
              f"need a square matrix, got shape {m.shape}.", where="det_and_inv"):
        return float("nan"), None

    with warnings.catch_warnings():
        # lu_factor warns on an exactly-zero pivot; we report that ourselves.
        warnings.simplefilter("ignore", LinAlgWarning)
        lu, piv = lu_factor(m)
    diag = np.diag(lu)
    singular = bool(np.any(diag == 0))

    det = 0.0
    if calc_det:
        swaps = int(np.sum(piv != np.arange(len(piv))))
        det = float(np.prod(diag)) * (-1.0 if swaps % 2 else 1.0)

    inverse = None
    if calc_inv:
        if singular:
            notify(1, "matrix is singular; no inverse.", where="det_and_inv")
        else:
            inverse = lu_solve((lu, piv), np.eye(m.shape[0]))
    return det, inverse


def x_prime_sigma_x(x: np.ndarray, sigma: np.ndarray) -> float:
    """The quadratic form x' Sigma x."""
    x = np.asarray(x, dtype=np.float64)
    return float(x @ np.asarray(sigma, dtype=np.float64) @ x)


def covariance_matrix(m: np.ndarray, normalize: bool = False) -> np.ndarray:
    """Variance/covariance matrix relating each column with each other.

    Parameters
    ----------
    m : (n, k) array
        Rows are observations, columns are variables.
    normalize : bool
        If True, subtract each column's mean from *m* in place first.
        This changes the caller's data but skips a copy.  Non-float
        input is left alone and de-meaned in a float copy instead.

    Returns
    -------
    (k, k) array, sample covariance with denominator n-1.
    """
    X = np.asarray(m)
    if normalize and np.issubdtype(X.dtype, np.floating):
        X -= X.mean(axis=0, keepdims=True)
    else:
        X = np.asarray(m, dtype=np.float64)
        X = X - X.mean(axis=0, keepdims=True)
    n = X.shape[0]
    return (X.T @ X).astype(np.float64) / max(n - 1, 1)


def normalize_for_svd(square: np.ndarray, *, eps: float = EPS) -> np.ndarray:
    """Scale a symmetric cross-product matrix in place to unit diagonal.

    Each row and column is divided by sqrt(diag), so X'X becomes the
    correlation-like matrix whose diagonal is all ones.  Zero diagonal
    entries are left unscaled.
    """
    d = np.sqrt(np.diag(square).astype(np.float64))
    d = np.where(d < eps, 1.0, d)
    square /= np.outer(d, d)
    return square


def sv_decomposition(
    data: np.ndarray,
    dimensions_we_want: int,
    *,
    method: str = "exact",
    seed: int = SEED,
) -> Tuple[Optional[np.ndarray], Optional[np.ndarray]]:
    """Principal components of *data* (singular value decomposition of X'X).

    Parameters
    ----------
    data : (n, p) array
    dimensions_we_want : int
        How many of the leading eigenvectors to keep (1..p).
    method : {"exact", "randomized"}
        "exact" runs a full ``numpy.linalg.svd``; "randomized" uses
        sklearn's ``randomized_svd`` and only computes the leading
        components, which is much faster when dimensions_we_want << p.
    seed : int
        Random state for the randomised solver.

    Returns
    -------
    pc_space : (p, dimensions_we_want) array
        Each column is an eigenvector, ordered by eigenvalue.
    total_explained : (dimensions_we_want,) array
        The leading eigenvalues divided by the sum of *all* eigenvalues,
        so ``total_explained.sum()`` is the share of variance captured.
    """
    if stopif(data is None, 0, "You gave me a NULL matrix.", where="sv_decomposition"):
        return None, None
    X = np.asarray(data, dtype=np.float64)
    p = X.shape[1]
    k = int(dimensions_we_want)
    if stopif(not 1 <= k <= p, 0,
              f"asked for {k} dimensions from a matrix with {p} columns.",
              where="sv_decomposition"):
        return None, None

    square = normalize_for_svd(X.T @ X)
    try:
        if method == "randomized":
            U, S, _ = randomized_svd(square, n_components=k, random_state=seed)
            # Trace = sum of all eigenvalues of a symmetric PSD matrix.
            total = float(np.trace(square))
        else:
            U, S, _ = np.linalg.svd(square)
            total = float(np.sum(S))
    except np.linalg.LinAlgError as e:
        raise BackendFailure(f"SVD did not converge: {e}") from e
    return U[:, :k].copy(), (S[:k] / (total + EPS)).astype(np.float64)


def matrix_stack(
    m1: Optional[np.ndarray],
    m2: Optional[np.ndarray],
    posn: str = "t",
) -> Optional[np.ndarray]:
    """Put *m2* below (``posn='t'``) or to the right of (anything else) *m1*.

    Returns a new matrix.  If either input is None, a copy of the other
    comes back.  Mismatched shapes print a diagnostic and give None.

    For example, four blocks into a two-by-two block matrix::

        top = matrix_stack(ul, ur, "r")
        bottom = matrix_stack(dl, dr, "r")
        whole = matrix_stack(top, bottom, "t")
    """
    if m1 is None or m2 is None:
        other = m2 if m1 is None else m1
        return None if other is None else np.array(other, dtype=np.float64)
    m1 = np.atleast_2d(np.asarray(m1, dtype=np.float64))
    m2 = np.atleast_2d(np.asarray(m2, dtype=np.float64))
    if posn == "t":
        if stopif(m1.shape[1] != m2.shape[1], 0,
                  "When stacking matrices on top of each other, they have to have "
                  f"the same number of columns ({m1.shape[1]} != {m2.shape[1]}). "
                  "Returning None.", where="matrix_stack"):
            return None
        return np.vstack([m1, m2])
    if stopif(m1.shape[0] != m2.shape[0], 0,
              "When stacking matrices side by side, they have to have the same "
              f"number of rows ({m1.shape[0]} != {m2.shape[0]}). Returning None.",
              where="matrix_stack"):
        return None
    return np.hstack([m1, m2])


def matrix_rm_columns(m: np.ndarray, use: Sequence) -> Optional[np.ndarray]:
    """Return a copy of *m* keeping only the columns where ``use`` is truthy.

    ``use[7] == 0`` means column seven is cut.
    """
    m = np.asarray(m, dtype=np.float64)
    keep = np.asarray(use).astype(bool)
    if stopif(keep.shape != (m.shape[1],), 0,
              f"need one flag per column ({m.shape[1]}), got {keep.size}.",
              where="matrix_rm_columns"):
        return None
    return m[:, keep].copy()
