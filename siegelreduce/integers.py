from typing import Tuple

import numpy as np


def gcdex(a: int, b: int) -> Tuple[int, int, int]:
    """
    Extended Euclid over the integers.
    Returns (d, s, t) such that s*a + t*b = d with d >= 0.
    """
    r0, r1 = int(a), int(b)
    s0, s1 = 1, 0
    t0, t1 = 0, 1

    while r1 != 0:
        q = r0 // r1
        r0, r1 = r1, r0 - q * r1
        s0, s1 = s1, s0 - q * s1
        t0, t1 = t1, t0 - q * t1

    if r0 < 0:
        return -r0, -s0, -t0
    return r0, s0, t0


def bezout_block(z1: int, z2: int) -> Tuple[np.ndarray, np.ndarray, int]:
    """
    Local unimodular 2x2 block for the pair (z1, z2).

    Returns (U, U_inv, d) where d = gcd(z1, z2) and
        U     = [[z1/d, -t], [z2/d, s]]
        U_inv = [[s, t], [-z2/d, z1/d]]
    so that U_inv @ [z1, z2]^T = [d, 0]^T and det U = 1.
    Both blocks are the identity when z1 = z2 = 0.
    """
    d, s, t = gcdex(z1, z2)

    if d == 0:
        eye = np.eye(2, dtype=np.int64)
        return eye, eye.copy(), 0

    # Exact: d divides both entries.
    p, q = int(z1) // d, int(z2) // d
    U = np.array([[p, -t], [q, s]], dtype=np.int64)
    U_inv = np.array([[s, t], [-q, p]], dtype=np.int64)
    return U, U_inv, d
