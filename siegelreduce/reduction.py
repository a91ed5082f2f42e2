"""Reduction of period matrices into the Siegel fundamental domain.

``siegel_reduce`` alternates three moves until the top-left entry of the
working matrix has modulus at least one:

1. a change of lattice basis that puts a shortest vector of ``Im M`` first
   (see :mod:`siegelreduce.lattice`);
2. an integral translation centering every entry of ``Re M`` in
   ``[-1/2, 1/2]``;
3. if ``|M[0, 0]| < 1``, the inversion generator on the first coordinate.

Every move is recorded as a generator of the returned
:class:`~siegelreduce.symplectic.Transform`.
"""

import logging
from dataclasses import dataclass
from typing import Iterator, Optional

import numpy as np

from .errors import InvalidInputError, OracleError, ReductionDidNotConverge
from .lattice import as_coordinates, shortest_vector_first
from .oracle import EnumerationOracle, ShortestVectorOracle
from .symplectic import BasisChange, Invert, Transform, Translate

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReductionOptions:
    """Per-call settings for :func:`siegel_reduce`.

    Attributes:
        max_iterations: Number of reduce passes allowed before giving up
            with :class:`ReductionDidNotConverge`.
    """

    max_iterations: int = 1000

    def __post_init__(self):
        if self.max_iterations < 0:
            raise ValueError(
                f"max_iterations must be non-negative, got {self.max_iterations}"
            )


@dataclass(frozen=True, eq=False)
class SiegelReduction:
    """Outcome of :func:`siegel_reduce`.

    Unpacks as ``gamma, M = siegel_reduce(tau)``.
    """

    transform: Transform
    matrix: np.ndarray
    iterations: int

    @property
    def gamma(self) -> np.ndarray:
        return self.transform.matrix()

    def __iter__(self) -> Iterator:
        yield self.gamma
        yield self.matrix


def _as_period_matrix(tau) -> np.ndarray:
    tau = np.array(tau, dtype=complex)
    if tau.ndim != 2 or tau.shape[0] != tau.shape[1] or tau.shape[0] == 0:
        raise InvalidInputError(
            f"Expected a non-empty square matrix, got shape {tau.shape}"
        )
    if not np.all(np.isfinite(tau)):
        raise InvalidInputError("Period matrix has non-finite entries")
    atol = 1e-9 * max(1.0, float(np.abs(tau).max()))
    if not np.allclose(tau, tau.T, rtol=0.0, atol=atol):
        raise InvalidInputError("Period matrix is not symmetric")
    return tau


def _cholesky_upper(Y: np.ndarray) -> np.ndarray:
    """Upper factor T with Y = T^T T."""
    try:
        return np.linalg.cholesky(Y).T
    except np.linalg.LinAlgError as exc:
        raise InvalidInputError(
            "Imaginary part is not positive-definite"
        ) from exc


def _shortest_coordinates(oracle, T: np.ndarray) -> np.ndarray:
    try:
        return as_coordinates(oracle(T), T.shape[0])
    except ValueError as exc:
        raise OracleError(f"Oracle returned an unusable vector: {exc}") from exc


def _centering(M: np.ndarray) -> Translate:
    """Integral translation bringing Re M into [-1/2, 1/2].

    Rounds half to even. The real part is symmetrized first so that the
    translation stays symplectic.
    """
    X = M.real
    b = -np.rint(0.5 * (X + X.T))
    return Translate(b.astype(np.int64))


def siegel_reduce(
    tau,
    oracle: Optional[ShortestVectorOracle] = None,
    options: Optional[ReductionOptions] = None,
) -> SiegelReduction:
    """
    Reduce a period matrix into the Siegel fundamental domain.

    Args:
        tau: g x g complex matrix whose imaginary part is symmetric
            positive-definite.
        oracle: Shortest-vector oracle; defaults to EnumerationOracle().
        options: Iteration cap; defaults to ReductionOptions().

    Returns:
        SiegelReduction holding the transform Gamma and the reduced matrix
        M, with M equal to the action of Gamma on tau.

    Raises:
        InvalidInputError: the imaginary part is not positive-definite.
        SingularMatrixError: an inversion step met a singular matrix.
        OracleError: the oracle returned an unusable vector.
        ReductionDidNotConverge: the iteration cap was reached.
    """
    M = _as_period_matrix(tau)
    oracle = oracle if oracle is not None else EnumerationOracle()
    options = options if options is not None else ReductionOptions()

    g = M.shape[0]
    transform = Transform.identity(g)
    iterations = 0

    while True:
        if iterations >= options.max_iterations:
            raise ReductionDidNotConverge(iterations, M)
        iterations += 1

        # Shortest vector of Im M first.
        Y = 0.5 * (M.imag + M.imag.T)
        T = _cholesky_upper(Y)
        z = _shortest_coordinates(oracle, T)
        red = shortest_vector_first(T, z)
        U = red.transform
        M = U.T @ M.real @ U + 1j * (red.basis.T @ red.basis)
        if not np.array_equal(U, np.eye(g, dtype=np.int64)):
            transform = transform.then(BasisChange(U, red.inverse))

        shift = _centering(M)
        M = shift.act(M)
        if shift.b.any():
            transform = transform.then(shift)

        e = abs(M[0, 0])
        _logger.debug("iteration %d: |M[0,0]| = %.6g", iterations, e)
        if e >= 1:
            break

        inversion = Invert(g)
        M = inversion.act(M)
        transform = transform.then(inversion)

    shift = _centering(M)
    M = shift.act(M)
    if shift.b.any():
        transform = transform.then(shift)

    _logger.info(
        "reduced genus-%d period matrix in %d iterations (%d generators)",
        g, iterations, len(transform),
    )
    return SiegelReduction(transform=transform, matrix=M, iterations=iterations)


def is_reduced(M, atol: float = 1e-9) -> bool:
    """
    Fundamental-domain membership as tested by siegel_reduce:
    |Re M_ij| <= 1/2, |M[0,0]| >= 1 and Im M symmetric positive-definite.
    """
    M = np.asarray(M, dtype=complex)
    if M.ndim != 2 or M.shape[0] != M.shape[1] or M.shape[0] == 0:
        return False
    Y = M.imag
    if not np.allclose(Y, Y.T, atol=atol):
        return False
    try:
        np.linalg.cholesky(0.5 * (Y + Y.T))
    except np.linalg.LinAlgError:
        return False
    return bool(
        np.all(np.abs(M.real) <= 0.5 + atol) and abs(M[0, 0]) >= 1 - atol
    )
