"""Exceptions raised by the reduction pipeline."""


class SiegelReductionError(Exception):
    """Base class for every failure surfaced by ``siegelreduce``."""


class InvalidInputError(SiegelReductionError, ValueError):
    """The period matrix is malformed or its imaginary part is not
    positive-definite."""


class SingularMatrixError(SiegelReductionError, ArithmeticError):
    """``C tau + D`` is not invertible during a symplectic action."""


class OracleError(SiegelReductionError, RuntimeError):
    """The shortest-vector oracle broke its contract or gave up."""


class ReductionDidNotConverge(SiegelReductionError, RuntimeError):
    """The iteration cap was reached before the fundamental domain.

    ``iterations`` is the number of passes run and ``matrix`` the last
    working matrix.
    """

    def __init__(self, iterations, matrix):
        super().__init__(
            f"Reduction did not reach the fundamental domain after "
            f"{iterations} iterations"
        )
        self.iterations = iterations
        self.matrix = matrix
