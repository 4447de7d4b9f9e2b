"""Distribution models and random-number helpers.

* :class:`MultivariateNormal` -- estimate / log-likelihood / draw for the
  multivariate Normal, with the mean vector and covariance matrix as its
  parameters.
* :func:`beta_from_mean_var` -- a Beta distribution specified by its mean
  and variance instead of (alpha, beta).
* :func:`rng_ghgb3` -- a draw from the Generalized Hypergeometric type B3
  (Devroye's building block for the Waring and friends).
* :func:`model_draws` -- fill a matrix with repeated draws from a model.

Random draws use ``numpy.random.Generator``; frozen distributions come from
``scipy.stats``.
"""

import math
from dataclasses import dataclass
from typing import Optional, Sequence, Union

import numpy as np
from scipy import stats

from tabstat.config import BackendFailure, next_rng_seed, notify, stopif
from tabstat.linalg import covariance_matrix, det_and_inv
from tabstat.table import Table


def _data_matrix(x) -> np.ndarray:
    if isinstance(x, Table):
        x = x.matrix
    return np.atleast_2d(np.asarray(x, dtype=np.float64))


@dataclass
class MultivariateNormal:
    """Multivariate Normal with parameters (mean, covariance).

    Observations are the rows of a matrix (or of a Table's matrix) whose
    width equals ``dsize``.
    """

    mean: np.ndarray
    covariance: np.ndarray

    def __post_init__(self):
        self.mean = np.asarray(self.mean, dtype=np.float64).ravel()
        self.covariance = np.atleast_2d(np.asarray(self.covariance, dtype=np.float64))
        d = self.mean.size
        if self.covariance.shape != (d, d):
            raise ValueError(
                f"covariance must be {d}x{d} to match the mean, got {self.covariance.shape}"
            )

    @property
    def dsize(self) -> int:
        """Width of a single draw."""
        return self.mean.size

    @classmethod
    def estimate(cls, data: Union[Table, np.ndarray]) -> "MultivariateNormal":
        """Column means and the sample covariance of the columns."""
        X = _data_matrix(data)
        return cls(mean=X.mean(axis=0), covariance=covariance_matrix(X))

    def log_likelihood(self, x: Union[Table, np.ndarray]) -> float:
        """Sum over the rows of *x* of the log density.

        A covariance whose determinant is zero or negative (a collinear
        estimate rounds either way) gives -inf and a diagnostic.
        """
        X = _data_matrix(x)
        det, inverse = det_and_inv(self.covariance)
        if inverse is None or not det > 0:
            notify(0, f"the determinant of the covariance is {det:g}, not positive. Returning -inf.",
                   where="MultivariateNormal.log_likelihood")
            return float("-inf")
        diffs = X - self.mean
        # Row-wise quadratic forms (x - mu)' Sigma^{-1} (x - mu).
        quad = np.einsum("ij,jk,ik->i", diffs, inverse, diffs)
        n, d = X.shape
        return float(-quad.sum() / 2 - n * (math.log(2 * math.pi) * d / 2 + 0.5 * math.log(det)))

    def p(self, x: Union[Table, np.ndarray]) -> float:
        """Joint density of the rows of *x*."""
        return math.exp(self.log_likelihood(x))

    def draw(self, rng: Optional[np.random.Generator] = None) -> np.ndarray:
        """One draw: L z + mean, with L the lower Cholesky factor (Devroye p 565)."""
        if rng is None:
            rng = np.random.default_rng(next_rng_seed())
        try:
            L = np.linalg.cholesky(self.covariance)
        except np.linalg.LinAlgError as e:
            raise BackendFailure(f"covariance is not positive definite: {e}") from e
        z = rng.standard_normal(self.dsize)
        return L @ z + self.mean


def beta_from_mean_var(m: float, v: float):
    """A Beta distribution with mean *m* and variance *v*.

    The (alpha, beta) parameterisation is hard to read; (mean, variance)
    is not.  The mapping is

        k     = m (1 - m) / v - 1
        alpha = m k
        beta  = (1 - m) k

    *m* must lie strictly inside (0, 1) and *v* inside (0, m(1-m)); the
    variance of a Uniform(0, 1), 1/12, is the usual practical ceiling.
    Odd shapes appear for variance near 1/12 with the mean far from 1/2.

    Returns a frozen ``scipy.stats.beta``, or None on bad input.
    """
    if stopif(m >= 1 or m <= 0, 0,
              f"You asked for a beta distribution with mean {m:g}, but the mean of "
              "the beta will always be strictly between zero and one.",
              where="beta_from_mean_var"):
        return None
    if stopif(v <= 0 or v >= m * (1 - m), 0,
              f"variance {v:g} must be in (0, {m * (1 - m):g}) for mean {m:g}.",
              where="beta_from_mean_var"):
        return None
    k = m * (1 - m) / v - 1
    return stats.beta(m * k, (1 - m) * k)


def rng_ghgb3(rng: np.random.Generator, a: Sequence[float]) -> float:
    """Draw from a Generalized Hypergeometric type B3.

    A, B, C are unit-scale gamma draws with shapes a[0], a[1], a[2]; the
    result is a Poisson draw with rate A B / C.  Any non-positive shape
    gives NaN.
    """
    if stopif(not (a[0] > 0 and a[1] > 0 and a[2] > 0), 0,
              "all inputs must be positive.", where="rng_ghgb3"):
        return float("nan")
    aa = rng.gamma(a[0], 1.0)
    b = rng.gamma(a[1], 1.0)
    c = rng.gamma(a[2], 1.0)
    return float(rng.poisson(aa * b / c))


def model_draws(
    model,
    count: int = 1000,
    rng: Optional[np.random.Generator] = None,
    draws: Union[np.ndarray, Table, None] = None,
):
    """Fill a matrix with *count* draws from *model*.

    Parameters
    ----------
    model
        Anything with a ``dsize`` attribute and a ``draw(rng)`` method,
        e.g. :class:`MultivariateNormal`.
    count : int
        Number of draws.  Ignored when *draws* is given.
    rng : numpy Generator, optional
        Defaults to a generator seeded from ``config.next_rng_seed()``.
    draws : ndarray or Table, optional
        Pre-allocated (count, >= dsize) matrix (or a Table with such a
        matrix) to fill.  It is returned filled.

    Returns
    -------
    The filled matrix (or Table), or None if the model can't make draws.
    """
    if stopif(model is None, 0, "Input model is None.", where="model_draws"):
        return None
    dsize = getattr(model, "dsize", 0)
    if stopif(dsize <= 0, 0, "Input model has dsize <= 0.", where="model_draws"):
        return None

    if draws is not None:
        target = draws.matrix if isinstance(draws, Table) else draws
        if stopif(target is None, 1, "Input data set's matrix is None.", where="model_draws"):
            return draws
        if stopif(target.shape[1] < dsize, 1,
                  "Input data set's matrix column count is less than model dsize.",
                  where="model_draws"):
            return draws
        count = target.shape[0]
        out = draws
    else:
        target = out = np.empty((count, dsize), dtype=np.float64)

    if rng is None:
        rng = np.random.default_rng(next_rng_seed())
    for i in range(count):
        target[i, :dsize] = model.draw(rng)
    return out
