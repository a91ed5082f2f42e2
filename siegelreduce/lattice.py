"""Shortest-vector-first basis reduction for triangular lattice bases.

The reduction step of the Siegel algorithm needs a basis of the lattice
generated by the columns of an upper-triangular matrix ``T`` whose first
vector is a shortest nonzero lattice vector. Given the integer coordinates
``z`` of such a vector (supplied by an SVP oracle, see
:mod:`siegelreduce.oracle`), ``shortest_vector_first`` folds ``z`` into a
single coordinate from the bottom up:

* for each adjacent pair of columns it builds the 2×2 unimodular block from
  the extended GCD of the pair (see :func:`siegelreduce.integers.bezout_block`)
  and applies it to the columns of the basis and of the running transform;
* a Givens rotation on the same two rows restores the triangular shape that
  the column operation destroyed.

This is the "shortest vector first" specialization of Korkine–Zolotarev
reduction; the later basis vectors are not reduced.
"""

from dataclasses import dataclass

import numpy as np

from .integers import bezout_block
from .rotation import givens_rotation


@dataclass(frozen=True)
class LatticeReduction:
    """Result of :func:`shortest_vector_first`.

    Attributes:
        basis: ``T @ transform``, rotated back to upper-triangular form.
        transform: Unimodular integer matrix ``Z`` whose first column is
            ``±z / gcd(z)``.
        inverse: Exact integer inverse of ``transform``.
    """

    basis: np.ndarray
    transform: np.ndarray
    inverse: np.ndarray


def _check_upper_triangular(T: np.ndarray) -> None:
    if T.ndim != 2 or T.shape[0] != T.shape[1]:
        raise ValueError(f"Expected a square basis, got shape {T.shape}")
    scale = max(1.0, float(np.abs(T).max(initial=0.0)))
    if not np.allclose(np.tril(T, -1), 0.0, atol=1e-9 * scale):
        raise ValueError("Basis must be upper triangular")


def as_coordinates(z, n: int) -> np.ndarray:
    """Validate ``z`` as a nonzero integer vector of length ``n``."""
    z = np.asarray(z)
    if z.shape != (n,):
        raise ValueError(f"Expected {n} coordinates, got shape {z.shape}")
    rounded = np.rint(z)
    if not np.array_equal(rounded, z):
        raise ValueError(f"Coordinates must be integers, got {z}")
    if not rounded.any():
        raise ValueError("Coordinate vector must be nonzero")
    return rounded.astype(np.int64)


def shortest_vector_first(T: np.ndarray, z) -> LatticeReduction:
    """Move the lattice vector ``T @ z`` to the front of the basis.

    The walk runs over column pairs ``(j-1, j)`` from the last pair to the
    first. ``acc`` holds the gcd of ``z[j:]`` folded so far; each step
    replaces the pair ``(z[j-1], acc)`` by ``(gcd, 0)`` in the coordinates of
    the new basis, so after the sweep the new coordinates of ``z`` are
    ``(gcd(z), 0, ..., 0)``.

    Args:
        T: Upper-triangular real basis (columns are the basis vectors). It
            is not modified.
        z: Nonzero integer coordinates of a shortest vector of ``T``.

    Returns:
        A :class:`LatticeReduction` with the rotated basis, the unimodular
        transform ``Z`` and its inverse.
    """

    T = np.array(T, dtype=float)
    _check_upper_triangular(T)
    n = T.shape[0]
    z = as_coordinates(z, n)

    Z = np.eye(n, dtype=np.int64)
    Z_inv = np.eye(n, dtype=np.int64)

    acc = int(z[n - 1])
    for j in range(n - 1, 0, -1):
        U, U_inv, d = bezout_block(int(z[j - 1]), acc)

        # Column operation on the pair, mirrored on the inverse's rows.
        Z[:, j - 1:j + 1] = Z[:, j - 1:j + 1] @ U
        Z_inv[j - 1:j + 1, :] = U_inv @ Z_inv[j - 1:j + 1, :]
        T[:, j - 1:j + 1] = T[:, j - 1:j + 1] @ U

        G = givens_rotation(T[j - 1, j - 1], T[j, j - 1])
        T[j - 1:j + 1, j - 1:] = G @ T[j - 1:j + 1, j - 1:]
        T[j, j - 1] = 0.0

        acc = d

    return LatticeReduction(basis=T, transform=Z, inverse=Z_inv)
