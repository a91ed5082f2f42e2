from .errors import (
    InvalidInputError,
    OracleError,
    ReductionDidNotConverge,
    SiegelReductionError,
    SingularMatrixError,
)
from .lattice import LatticeReduction, shortest_vector_first
from .oracle import EnumerationOracle, ShortestVectorOracle
from .reduction import ReductionOptions, SiegelReduction, is_reduced, siegel_reduce
from .rotation import givens_rotation
from .symplectic import (
    BasisChange,
    Invert,
    Transform,
    Translate,
    is_symplectic,
    symplectic_action,
    symplectic_form,
)

__all__ = [
    "BasisChange",
    "EnumerationOracle",
    "InvalidInputError",
    "Invert",
    "LatticeReduction",
    "OracleError",
    "ReductionDidNotConverge",
    "ReductionOptions",
    "ShortestVectorOracle",
    "SiegelReduction",
    "SiegelReductionError",
    "SingularMatrixError",
    "Transform",
    "Translate",
    "givens_rotation",
    "is_reduced",
    "is_symplectic",
    "siegel_reduce",
    "shortest_vector_first",
    "symplectic_action",
    "symplectic_form",
]
