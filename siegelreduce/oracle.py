"""Shortest-vector oracles.

The reduction loop only needs the integer coordinates of a shortest nonzero
vector of the lattice spanned by the columns of an upper-triangular basis.
Anything callable with that contract can be passed to
:func:`siegelreduce.reduction.siegel_reduce`; :class:`EnumerationOracle` is
the default and is meant for the small genera that occur in practice.
"""

import logging
import math
from typing import Iterator, Protocol

import numpy as np

from .errors import OracleError

_logger = logging.getLogger(__name__)


def _zigzag(center: float) -> Iterator[int]:
    """Integers in order of distance to ``center``, ties toward the smaller.

    Schnorr-Euchner order: start at the nearest integer and alternate
    outward. The sequence is unbounded; callers stop it.
    """
    down = math.ceil(center - 0.5)
    up = down + 1
    while True:
        if center - down <= up - center:
            yield down
            down -= 1
        else:
            yield up
            up += 1


class ShortestVectorOracle(Protocol):
    def __call__(self, basis: np.ndarray) -> np.ndarray:
        """Return integer ``z`` such that ``basis @ z`` is a shortest
        nonzero vector of the lattice generated by the columns of
        ``basis``."""
        ...


class EnumerationOracle:
    """
    Depth-first Fincke-Pohst enumeration on an upper-triangular basis.

    The search radius starts at the shortest basis column and shrinks every
    time a strictly shorter vector turns up. At each level the admissible
    integers are visited nearest the projected center first (ties toward
    the smaller integer), which makes the answer deterministic.
    """

    # Relative margin a candidate must beat the incumbent by.
    RTOL = 1e-12

    def __init__(self, max_nodes: int = 1_000_000):
        self.max_nodes = max_nodes

    def __call__(self, basis: np.ndarray) -> np.ndarray:
        R = np.asarray(basis, dtype=float)
        if R.ndim != 2 or R.shape[0] != R.shape[1]:
            raise OracleError(f"Expected a square basis, got shape {R.shape}")
        n = R.shape[0]
        if n == 0 or np.any(np.diag(R) == 0):
            raise OracleError("Basis is singular")

        norms = np.einsum("ij,ij->j", R, R)
        k = int(np.argmin(norms))
        best = np.zeros(n, dtype=np.int64)
        best[k] = 1
        best_sq = float(norms[k])

        z = np.zeros(n, dtype=np.int64)
        nodes = 0

        def search(i: int, partial_sq: float) -> None:
            nonlocal best, best_sq, nodes
            r_ii = R[i, i]
            center = -float(R[i, i + 1:] @ z[i + 1:]) / r_ii
            for v in _zigzag(center):
                nodes += 1
                if nodes > self.max_nodes:
                    raise OracleError(
                        f"Enumeration exceeded {self.max_nodes} nodes"
                    )
                sq = partial_sq + (r_ii * (v - center)) ** 2
                if sq >= best_sq * (1.0 - self.RTOL):
                    # Later candidates are no closer to the center.
                    break
                z[i] = v
                if i > 0:
                    search(i - 1, sq)
                elif z.any():
                    best = z.copy()
                    best_sq = sq
            z[i] = 0

        search(n - 1, 0.0)
        _logger.debug(
            "enumeration: dim=%d nodes=%d norm^2=%.6g", n, nodes, best_sq
        )
        return best
