import numpy as np

from siegelreduce import is_reduced, symplectic_form


def det_int(M: np.ndarray) -> int:
    """
    Naive cofactor determinant of a small integer matrix, computed on
    Python ints so it is exact.
    """
    data = [[int(x) for x in row] for row in np.asarray(M)]
    n = len(data)

    if n == 1:
        return data[0][0]
    if n == 2:
        return data[0][0] * data[1][1] - data[0][1] * data[1][0]

    det = 0
    for j in range(n):
        sub = np.array([row[:j] + row[j + 1:] for row in data[1:]], dtype=object)
        term = data[0][j] * det_int(sub)
        det = det + term if j % 2 == 0 else det - term
    return det


def assert_symplectic(gamma: np.ndarray) -> None:
    """Exact check gamma^T J gamma == J for an integer transform."""
    gamma = np.asarray(gamma)
    assert np.issubdtype(gamma.dtype, np.integer), gamma.dtype
    J = symplectic_form(gamma.shape[0] // 2)
    assert np.array_equal(gamma.T @ J @ gamma, J), f"not symplectic:\n{gamma}"


def assert_in_fundamental_domain(M: np.ndarray, atol: float = 1e-9) -> None:
    M = np.asarray(M)
    assert np.all(np.abs(M.real) <= 0.5 + atol), f"Re M not centered:\n{M.real}"
    assert abs(M[0, 0]) >= 1 - atol, f"|M[0,0]| = {abs(M[0, 0])} < 1"
    assert np.allclose(M.imag, M.imag.T, atol=1e-8), "Im M not symmetric"
    assert np.all(np.linalg.eigvalsh(0.5 * (M.imag + M.imag.T)) > 0)
    assert is_reduced(M, atol=atol)


def gauss_reduce(tau: complex) -> complex:
    """Classical SL(2, Z) reduction of a point of the upper half plane."""
    while True:
        tau = tau - round(tau.real)
        if abs(tau) >= 1:
            return tau
        tau = -1 / tau


def make_period_matrix(g: int, spread: float = 2.0) -> np.ndarray:
    """Random g x g symmetric complex matrix with positive-definite
    imaginary part."""
    A = np.random.randn(g, g)
    Y = A @ A.T + 0.1 * np.eye(g)
    X = np.random.uniform(-spread, spread, size=(g, g))
    X = 0.5 * (X + X.T)
    return X + 1j * Y


def make_upper_triangular(g: int) -> np.ndarray:
    """Random upper-triangular basis with a well-separated diagonal."""
    T = np.triu(np.random.uniform(-1.0, 1.0, size=(g, g)), 1)
    T[np.diag_indices(g)] = np.random.uniform(0.5, 2.0, size=g)
    return T
