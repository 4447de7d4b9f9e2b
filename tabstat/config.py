"""Package-wide constants, runtime options and diagnostics.

This module centralizes every tuneable parameter of the library -- the
numerical floor, the default seed, the percentile grid size, the download
cache location -- so that scripts and tests import a single source of truth.

It also holds the mutable ``opts`` object that controls how loudly the
library complains and whether a complaint is fatal:

* ``opts.verbose`` -- diagnostics whose level is <= this are printed to
  stderr.  Level 0 messages are always shown unless verbose is negative.
* ``opts.stop_on_warning`` -- when True, :func:`stopif` raises
  :class:`InvalidInputError` instead of warning and letting the caller
  return its fallback value.
* ``opts.rng_seed`` -- counter handed out by :func:`next_rng_seed` when a
  function needs a generator and the caller did not supply one.
"""

import sys
from dataclasses import dataclass
from pathlib import Path

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# Numerical floor added to denominators to prevent division by zero.
EPS = 1e-12

# Default random seed for reproducibility of randomised SVD and of the
# fallback generator used by model_draws.
SEED = 42

# Size of the array returned by vector_percentiles: index 0 is the
# minimum, index 100 the maximum.
N_PERCENTILES = 101

# Sort key that addresses the table's vector instead of a matrix column.
VECTOR_KEY = -1

# Directory for downloaded data files, managed by utils.download_if_needed()
# and loaders.load_table().
CACHE_DIR = Path("data/cache")


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class InvalidInputError(ValueError):
    """Absent data, or a selector (column, regex, bandwidth) that does not apply."""


class BackendFailure(RuntimeError):
    """The numeric backend (numpy/scipy) failed underneath a library call."""


# ---------------------------------------------------------------------------
# Runtime options
# ---------------------------------------------------------------------------

@dataclass
class Options:
    """Mutable library-wide settings; see the module docstring."""

    verbose: int = 1
    stop_on_warning: bool = False
    rng_seed: int = SEED


opts = Options()


def next_rng_seed() -> int:
    """Return a fresh seed and advance the counter in ``opts``."""
    opts.rng_seed += 1
    return opts.rng_seed


def notify(level: int, msg: str, *, where: str = "") -> None:
    """Print *msg* to stderr if ``opts.verbose >= level``."""
    if opts.verbose < level:
        return
    tag = f"[tabstat] {where}: " if where else "[tabstat] "
    print(tag + msg, file=sys.stderr)


def stopif(condition: bool, level: int, msg: str, *, where: str = "") -> bool:
    """Report an invalid-input condition.

    Returns False when *condition* is false.  Otherwise the message is
    either raised as :class:`InvalidInputError` (strict mode) or printed
    via :func:`notify`, and True is returned so the caller can bail out
    with its fallback value::

        if stopif(data is None, 1, "NULL data", where="data_sort"):
            return None
    """
    if not condition:
        return False
    if opts.stop_on_warning:
        raise InvalidInputError(f"{where}: {msg}" if where else msg)
    notify(level, msg, where=where)
    return True
