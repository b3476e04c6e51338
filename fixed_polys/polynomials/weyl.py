import math
from typing import Sequence

from ..utils.utils import abs2
from .poly import Poly


def multinomial(k: Sequence[int]) -> int:
    """Computes the multinomial coefficient (|k| choose k) = |k|! / (k₀! ⋯ kₙ₋₁!)."""
    s = 0
    result = 1
    for k_i in k:
        s += k_i
        result *= math.comb(s, k_i)  # built up from binomials, no large factorials
    return result


def weyl_dot(f: Poly, g: Poly):
    """Computes the Bombieri-Weyl inner product of `f` and `g`.

    Assumes `f` and `g` are homogeneous in the same number of variables.
    See https://en.wikipedia.org/wiki/Bombieri_norm for more details.
    """
    if f is g:
        return sum((abs2(c) / multinomial(exponent) for c, exponent in f), 0)
    result = 0
    for c_f, exp_f in f:
        normalizer = multinomial(exp_f)
        for c_g, exp_g in g:
            if exp_f == exp_g:
                result += c_f * c_g.conjugate() / normalizer
                break
    return result


def weyl_norm(f: Poly):
    """Computes the Bombieri-Weyl norm of `f`. Assumes `f` is homogeneous."""
    return math.sqrt(weyl_dot(f, f))
