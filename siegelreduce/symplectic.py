"""Symplectic group action on the Siegel upper half space.

A transform ``Γ = [[A, B], [C, D]]`` acts on a ``g × g`` complex matrix by
``τ ↦ (Aτ + B)(Cτ + D)^-1``. The reduction algorithm only ever builds ``Γ``
from three kinds of integral generators, so it is kept as a sequence of
tagged generators and materialized on demand:

* ``BasisChange(U)``: ``diag(Uᵗ, U⁻¹)``, acting by ``Uᵗ τ U``;
* ``Translate(b)``: ``[[I, b], [0, I]]``, acting by ``τ + b``;
* ``Invert(g)``: inversion in the first coordinate, identity on the rest.

Every generator is an integer matrix, so the materialized product is exact.
"""

from dataclasses import dataclass, field
from typing import Iterator, Tuple, Union

import numpy as np

from .errors import SingularMatrixError


def symplectic_form(g: int) -> np.ndarray:
    """The standard form ``J = [[0, I], [-I, 0]]`` of size ``2g``."""
    eye = np.eye(g, dtype=np.int64)
    zero = np.zeros((g, g), dtype=np.int64)
    return np.block([[zero, eye], [-eye, zero]])


def is_symplectic(gamma: np.ndarray, atol: float = 1e-9) -> bool:
    gamma = np.asarray(gamma)
    if gamma.ndim != 2 or gamma.shape[0] != gamma.shape[1] or gamma.shape[0] % 2:
        return False
    J = symplectic_form(gamma.shape[0] // 2)
    return np.allclose(gamma.T @ J @ gamma, J, atol=atol)


def symplectic_action(gamma: np.ndarray, tau: np.ndarray) -> np.ndarray:
    """
    Compute (A tau + B)(C tau + D)^-1 for gamma = [[A, B], [C, D]].

    Raises SingularMatrixError if C tau + D is not (numerically)
    invertible.
    """
    gamma = np.asarray(gamma)
    tau = np.asarray(tau, dtype=complex)
    if tau.ndim != 2 or tau.shape[0] != tau.shape[1]:
        raise ValueError(f"Expected a square matrix, got shape {tau.shape}")
    g = tau.shape[0]
    if gamma.shape != (2 * g, 2 * g):
        raise ValueError(
            f"Transform of shape {gamma.shape} does not act on {g}x{g} matrices"
        )

    A, B = gamma[:g, :g], gamma[:g, g:]
    C, D = gamma[g:, :g], gamma[g:, g:]
    num = A @ tau + B
    den = C @ tau + D

    with np.errstate(divide="ignore", invalid="ignore"):
        cond = np.linalg.cond(den)
    if not np.isfinite(cond) or cond * np.finfo(float).eps >= 1.0:
        raise SingularMatrixError("C*tau + D is singular")
    try:
        # X @ den = num  <=>  den^T @ X^T = num^T
        return np.linalg.solve(den.T, num.T).T
    except np.linalg.LinAlgError as exc:
        raise SingularMatrixError("C*tau + D is singular") from exc


@dataclass(frozen=True, eq=False)
class BasisChange:
    """``diag(Uᵗ, U⁻¹)`` for a unimodular integer matrix ``U``."""

    U: np.ndarray
    U_inv: np.ndarray

    @property
    def g(self) -> int:
        return self.U.shape[0]

    def matrix(self) -> np.ndarray:
        zero = np.zeros((self.g, self.g), dtype=np.int64)
        return np.block([[self.U.T, zero], [zero, self.U_inv]])

    def act(self, tau: np.ndarray) -> np.ndarray:
        return self.U.T @ tau @ self.U


@dataclass(frozen=True, eq=False)
class Translate:
    """``[[I, b], [0, I]]`` for a symmetric integer matrix ``b``."""

    b: np.ndarray

    @property
    def g(self) -> int:
        return self.b.shape[0]

    def matrix(self) -> np.ndarray:
        eye = np.eye(self.g, dtype=np.int64)
        zero = np.zeros((self.g, self.g), dtype=np.int64)
        return np.block([[eye, self.b], [zero, eye]])

    def act(self, tau: np.ndarray) -> np.ndarray:
        return tau + self.b


@dataclass(frozen=True)
class Invert:
    """Inversion ``τ₁₁ ↦ -1/τ₁₁`` on the first coordinate."""

    g: int

    def matrix(self) -> np.ndarray:
        g = self.g
        A = np.eye(g, dtype=np.int64)
        A[0, 0] = 0
        B = np.zeros((g, g), dtype=np.int64)
        B[0, 0] = -1
        C = np.zeros((g, g), dtype=np.int64)
        C[0, 0] = 1
        return np.block([[A, B], [C, A.copy()]])

    def act(self, tau: np.ndarray) -> np.ndarray:
        return symplectic_action(self.matrix(), tau)


Generator = Union[BasisChange, Translate, Invert]


@dataclass(frozen=True)
class Transform:
    """A symplectic transform kept as generators in application order.

    ``then(h)`` corresponds to left multiplication ``Γ ← h·Γ``.
    """

    g: int
    generators: Tuple[Generator, ...] = field(default=())

    @classmethod
    def identity(cls, g: int) -> "Transform":
        return cls(g)

    def then(self, generator: Generator) -> "Transform":
        if generator.g != self.g:
            raise ValueError(
                f"Generator of genus {generator.g} cannot extend a "
                f"genus-{self.g} transform"
            )
        return Transform(self.g, self.generators + (generator,))

    def __len__(self) -> int:
        return len(self.generators)

    def __iter__(self) -> Iterator[Generator]:
        return iter(self.generators)

    def matrix(self) -> np.ndarray:
        gamma = np.eye(2 * self.g, dtype=np.int64)
        for generator in self.generators:
            gamma = generator.matrix() @ gamma
        return gamma

    def inverse_matrix(self) -> np.ndarray:
        """Exact inverse via ``Γ⁻¹ = -J Γᵗ J``."""
        J = symplectic_form(self.g)
        return -J @ self.matrix().T @ J

    def act(self, tau: np.ndarray) -> np.ndarray:
        return symplectic_action(self.matrix(), tau)

    def to_sympy(self):
        import sympy as sp
        return sp.Matrix(self.matrix().tolist())

    def pprint(self):
        from sympy import pprint
        pprint(self.to_sympy())
