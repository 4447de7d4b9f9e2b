"""
tabstat -- in-place table sorting, percentiles, and numeric odds and ends.

A thin layer over numpy/scipy.  Its centrepiece sorts a whole data table
by one column *in place*: the sort order is computed once as a
permutation, then applied by walking the permutation's cycles, so only
one row is ever held aside however large the table.

Key exports
-----------
Table : class
    Row-aligned vector / matrix / text / weights with names.
data_sort : function
    Sort a Table in place by a matrix column or by its vector.
build_permutation, apply_permutation_in_place : functions
    The two halves of data_sort, usable separately.
vector_percentiles : function
    The 0th..100th percentiles of a vector under a rounding rule.
det_and_inv, covariance_matrix, sv_decomposition, matrix_stack,
matrix_rm_columns, x_prime_sigma_x : functions
    Linear-algebra conveniences.
MultivariateNormal, beta_from_mean_var, rng_ghgb3, model_draws
    Distribution models and random draws.
text_paste, regex : functions
    Text assembly and regex substring extraction.
HarmonicCache, generalized_harmonic
    Memoised generalized harmonic numbers.
opts : Options
    Verbosity and strictness of diagnostics (see tabstat.config).
"""

from tabstat.config import BackendFailure, InvalidInputError, opts
from tabstat.distributions import MultivariateNormal, beta_from_mean_var, model_draws, rng_ghgb3
from tabstat.harmonic import HarmonicCache, generalized_harmonic
from tabstat.linalg import (
    covariance_matrix,
    det_and_inv,
    matrix_rm_columns,
    matrix_stack,
    sv_decomposition,
    x_prime_sigma_x,
)
from tabstat.smoothing import histogram_moving_average, vector_moving_average
from tabstat.sorting import apply_permutation_in_place, build_permutation, data_sort, vector_percentiles
from tabstat.table import Table
from tabstat.text import regex, text_paste

__all__ = [
    "Table",
    "data_sort",
    "build_permutation",
    "apply_permutation_in_place",
    "vector_percentiles",
    "det_and_inv",
    "x_prime_sigma_x",
    "covariance_matrix",
    "sv_decomposition",
    "matrix_stack",
    "matrix_rm_columns",
    "MultivariateNormal",
    "beta_from_mean_var",
    "rng_ghgb3",
    "model_draws",
    "text_paste",
    "regex",
    "HarmonicCache",
    "generalized_harmonic",
    "vector_moving_average",
    "histogram_moving_average",
    "opts",
    "InvalidInputError",
    "BackendFailure",
]
