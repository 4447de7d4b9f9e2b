"""Tests for moving-average smoothing."""

import numpy as np
import pytest

from tabstat.smoothing import histogram_moving_average, vector_moving_average


def test_moving_average() -> None:
    out = vector_moving_average([1.0, 2.0, 3.0, 4.0, 5.0], 3)
    np.testing.assert_allclose(out, [2.0, 3.0, 4.0])


def test_even_bandwidth_uses_next_odd_window() -> None:
    np.testing.assert_allclose(
        vector_moving_average([1.0, 2.0, 6.0, 4.0, 5.0], 2),
        vector_moving_average([1.0, 2.0, 6.0, 4.0, 5.0], 3),
    )


def test_bandwidth_one_is_identity() -> None:
    assert vector_moving_average([3.0, 1.0, 2.0], 1).tolist() == [3.0, 1.0, 2.0]


def test_bad_input(capsys) -> None:
    assert vector_moving_average(None, 3) is None
    assert vector_moving_average([1.0, 2.0], 0) is None
    assert vector_moving_average([1.0, 2.0], 5) is None
    err = capsys.readouterr().err
    assert "Bandwidth" in err
    assert "shorter than the window" in err


def test_histogram_edges_are_zeroed() -> None:
    out = histogram_moving_average(np.array([0.0, 3.0, 6.0, 3.0, 0.0]), 3)
    np.testing.assert_allclose(out, [0.0, 3.0, 4.0, 3.0, 0.0])


def test_histogram_tuple_from_numpy() -> None:
    data = np.random.default_rng(0).normal(size=500)
    counts, edges = np.histogram(data, bins=20)
    smoothed, same_edges = histogram_moving_average((counts, edges), 5)
    assert smoothed.shape == counts.shape
    assert same_edges is edges
    assert smoothed[:2].tolist() == [0.0, 0.0]
    assert smoothed[-2:].tolist() == [0.0, 0.0]
    assert smoothed[2] == pytest.approx(np.mean(counts[:5]))
