"""Moving averages over vectors and histogram bin counts."""

from typing import Optional

import numpy as np

from tabstat.config import stopif


def vector_moving_average(v, bandwidth: int) -> Optional[np.ndarray]:
    """Centred moving average of *v*.

    Each output element is the mean of ``2 * (bandwidth // 2) + 1`` inputs,
    so the output is shorter than the input by ``bandwidth // 2`` at each
    end.  An even bandwidth behaves like the next odd one up.
    """
    if stopif(v is None, 0, "You asked me to smooth a None vector; returning None.",
              where="vector_moving_average"):
        return None
    if stopif(bandwidth < 1, 0, "Bandwidth must be >= 1.", where="vector_moving_average"):
        return None
    v = np.asarray(v, dtype=np.float64).ravel()
    window = 2 * (bandwidth // 2) + 1
    if stopif(v.size < window, 0,
              f"vector of length {v.size} is shorter than the window ({window}).",
              where="vector_moving_average"):
        return None
    return np.convolve(v, np.ones(window) / window, mode="valid")


def histogram_moving_average(hist, bandwidth: int):
    """Smooth histogram bin counts with :func:`vector_moving_average`.

    *hist* is either a 1-D array of counts or the ``(counts, edges)`` pair
    that ``numpy.histogram`` returns; the result has the same form.  The
    ``bandwidth // 2`` bins at each edge, which the window can't cover,
    are set to zero.
    """
    if stopif(hist is None, 0, "The first argument needs to be a histogram.",
              where="histogram_moving_average"):
        return None
    edges = None
    counts = hist
    if isinstance(hist, tuple):
        counts, edges = hist
    counts = np.asarray(counts, dtype=np.float64)

    smoothed = vector_moving_average(counts, bandwidth)
    if smoothed is None:
        return None
    half = bandwidth // 2
    out = np.zeros_like(counts)
    out[half:half + smoothed.size] = smoothed
    return out if edges is None else (out, edges)
