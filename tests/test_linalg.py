"""Tests for the linear-algebra helpers."""

import numpy as np
import pytest

from tabstat.linalg import (
    covariance_matrix,
    det_and_inv,
    matrix_rm_columns,
    matrix_stack,
    normalize_for_svd,
    sv_decomposition,
    x_prime_sigma_x,
)


def _well_conditioned(n: int = 4, seed: int = 0) -> np.ndarray:
    rng = np.random.default_rng(seed)
    return rng.normal(size=(n, n)) + n * np.eye(n)


def test_det_and_inv_match_numpy() -> None:
    m = _well_conditioned()
    before = m.copy()
    det, inv = det_and_inv(m)
    assert det == pytest.approx(np.linalg.det(m))
    np.testing.assert_allclose(inv, np.linalg.inv(m), atol=1e-10)
    np.testing.assert_array_equal(m, before)


def test_det_sign_follows_row_swaps() -> None:
    det, _ = det_and_inv(np.array([[0.0, 1.0], [1.0, 0.0]]))
    assert det == pytest.approx(-1.0)


def test_det_and_inv_flags() -> None:
    m = _well_conditioned(3)
    det, inv = det_and_inv(m, calc_det=False)
    assert det == 0.0
    assert inv is not None
    det, inv = det_and_inv(m, calc_inv=False)
    assert det == pytest.approx(np.linalg.det(m))
    assert inv is None


def test_singular_matrix_has_zero_determinant_and_no_inverse() -> None:
    det, inv = det_and_inv(np.array([[1.0, 2.0], [2.0, 4.0]]))
    assert det == 0.0
    assert inv is None


def test_non_square_is_rejected(capsys) -> None:
    det, inv = det_and_inv(np.zeros((2, 3)))
    assert np.isnan(det)
    assert inv is None
    assert "square" in capsys.readouterr().err


def test_x_prime_sigma_x() -> None:
    assert x_prime_sigma_x([1.0, 2.0], 2 * np.eye(2)) == pytest.approx(10.0)
    sigma = np.array([[2.0, 1.0], [1.0, 3.0]])
    assert x_prime_sigma_x([1.0, -1.0], sigma) == pytest.approx(3.0)


def test_covariance_matches_numpy() -> None:
    X = np.random.default_rng(1).normal(size=(50, 4))
    np.testing.assert_allclose(covariance_matrix(X), np.cov(X, rowvar=False))


def test_covariance_normalize_demeans_input_in_place() -> None:
    X = np.random.default_rng(2).normal(loc=3.0, size=(20, 3))
    expected = np.cov(X, rowvar=False)
    out = covariance_matrix(X, normalize=True)
    np.testing.assert_allclose(out, expected)
    np.testing.assert_allclose(X.mean(axis=0), 0.0, atol=1e-12)

    ints = np.array([[1, 2], [3, 4], [8, 3]])
    out = covariance_matrix(ints, normalize=True)
    np.testing.assert_allclose(out, np.cov(ints, rowvar=False))
    assert ints.tolist() == [[1, 2], [3, 4], [8, 3]]


def test_normalize_for_svd_gives_unit_diagonal() -> None:
    X = np.random.default_rng(3).normal(size=(30, 4)) * [1, 10, 100, 0.1]
    square = normalize_for_svd(X.T @ X)
    np.testing.assert_allclose(np.diag(square), 1.0)
    np.testing.assert_allclose(square, square.T)


def test_sv_decomposition_shapes_and_ordering() -> None:
    X = np.random.default_rng(4).normal(size=(100, 5))
    X[:, 1] += 2 * X[:, 0]
    pc, explained = sv_decomposition(X, 2)
    assert pc.shape == (5, 2)
    assert explained.shape == (2,)
    assert explained[0] >= explained[1] > 0
    np.testing.assert_allclose(pc.T @ pc, np.eye(2), atol=1e-10)

    _, everything = sv_decomposition(X, 5)
    assert everything.sum() == pytest.approx(1.0)


def test_randomized_and_exact_agree() -> None:
    X = np.random.default_rng(5).normal(size=(200, 6))
    X[:, 2] += X[:, 0]
    _, exact = sv_decomposition(X, 3)
    _, randomized = sv_decomposition(X, 3, method="randomized")
    np.testing.assert_allclose(randomized, exact, rtol=1e-6)


def test_sv_decomposition_rejects_bad_dimension_count(capsys) -> None:
    X = np.ones((10, 3))
    assert sv_decomposition(X, 0) == (None, None)
    assert sv_decomposition(X, 4) == (None, None)
    assert "dimensions" in capsys.readouterr().err


def test_matrix_stack() -> None:
    a = np.ones((2, 3))
    b = np.zeros((1, 3))
    assert matrix_stack(a, b, "t").shape == (3, 3)
    assert matrix_stack(a, np.zeros((2, 1)), "r").shape == (2, 4)
    np.testing.assert_array_equal(matrix_stack(None, b), b)
    assert matrix_stack(None, None) is None


def test_matrix_stack_shape_mismatch(capsys) -> None:
    assert matrix_stack(np.ones((2, 3)), np.ones((2, 2)), "t") is None
    assert matrix_stack(np.ones((2, 3)), np.ones((3, 3)), "r") is None
    err = capsys.readouterr().err
    assert "same number of columns" in err
    assert "same number of rows" in err


def test_two_by_two_block_matrix() -> None:
    ul, ur = np.full((2, 2), 1.0), np.full((2, 1), 2.0)
    dl, dr = np.full((1, 2), 3.0), np.full((1, 1), 4.0)
    whole = matrix_stack(matrix_stack(ul, ur, "r"), matrix_stack(dl, dr, "r"), "t")
    assert whole.tolist() == [[1, 1, 2], [1, 1, 2], [3, 3, 4]]


def test_matrix_rm_columns() -> None:
    m = np.arange(12.0).reshape(3, 4)
    out = matrix_rm_columns(m, [1, 0, 1, 0])
    assert out.tolist() == [[0, 2], [4, 6], [8, 10]]
    assert m.shape == (3, 4)
    assert matrix_rm_columns(m, [1, 1]) is None
