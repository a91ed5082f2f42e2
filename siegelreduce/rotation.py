import math

import numpy as np


def givens_rotation(x: float, y: float) -> np.ndarray:
    """
    Givens rotation G = [[c, -s], [s, c]] with G @ [x, y]^T = [r, 0]^T.

    The two branches divide by the larger of |x|, |y| so that the ratio
    t stays in [-1, 1] and sqrt(x^2 + y^2) is never formed directly.
    """
    if x == 0 and y == 0:
        return np.eye(2)

    if abs(y) >= abs(x):
        t = x / y
        s = -1.0 / math.sqrt(1.0 + t * t)
        c = -t * s
    else:
        t = y / x
        c = 1.0 / math.sqrt(1.0 + t * t)
        s = -t * c

    return np.array([[c, -s], [s, c]], dtype=float)
