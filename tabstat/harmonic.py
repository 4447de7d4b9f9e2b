"""Generalized harmonic numbers, sum_{n=1}^N n^{-s}, with memoisation.

There is no closed form worth using, so the sums are computed by brute
force and the partial sums kept: asking for H(N, s) after H(M, s) with
M >= N is a lookup, and with M < N only terms M+1..N are added.

The memo lives in an explicit :class:`HarmonicCache`.  A module-level
default instance backs :func:`generalized_harmonic` when no cache is
passed; callers that want an isolated or short-lived memo make their own
and ``clear()`` it when done.
"""

import threading
from typing import Dict, List, Optional

from tabstat.config import notify


class HarmonicCache:
    """Partial sums of n^{-s}, one growing list per exponent s.

    ``sums[s][j]`` holds H(j + 1, s).  Access is guarded by a lock so one
    cache can be shared between threads.
    """

    def __init__(self):
        self._sums: Dict[float, List[float]] = {}
        self._lock = threading.Lock()

    def __call__(self, N: int, s: float) -> float:
        if N <= 0:
            notify(0, f"N is {N}, but must be greater than 0.", where="generalized_harmonic")
            return float("nan")
        with self._lock:
            sums = self._sums.setdefault(s, [1.0])
            for j in range(len(sums), N):
                sums.append(sums[j - 1] + 1 / (j + 1) ** s)
            return sums[N - 1]

    def __len__(self) -> int:
        """Number of exponents with stored sums."""
        return len(self._sums)

    def computed_up_to(self, s: float) -> int:
        """Largest N whose sum for exponent *s* is stored (0 if none)."""
        return len(self._sums.get(s, []))

    def clear(self) -> None:
        with self._lock:
            self._sums.clear()


_default_cache = HarmonicCache()


def generalized_harmonic(N: int, s: float, cache: Optional[HarmonicCache] = None) -> float:
    """Return sum_{n=1}^N 1/n^s.

    N <= 0 gives NaN and a diagnostic.  E.g. ``generalized_harmonic(4, 1)``
    is 1 + 1/2 + 1/3 + 1/4 = 25/12.
    """
    return (cache if cache is not None else _default_cache)(N, s)
