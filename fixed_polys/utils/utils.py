# (C) 2024 Irreducible Inc.

import numbers
from fractions import Fraction
from typing import Sequence


def total_degree(exponent: Sequence[int]) -> int:
    return sum(exponent)


def promote_types(*types: type) -> type:
    """Returns the narrowest type every one of `types` can be widened to.

    Identical types promote to themselves. Distinct numeric types are widened along the numbers tower:
    int < Fraction < float < complex. Mixing distinct non-numeric types is an error.

    :param types: the types to promote; at least one.
    """
    distinct = list(dict.fromkeys(types))
    if not distinct:
        raise ValueError("cannot promote an empty collection of types")
    if len(distinct) == 1:
        return distinct[0]
    if not all(issubclass(t, numbers.Number) for t in distinct):
        raise TypeError(f"no common numeric type for {', '.join(t.__name__ for t in distinct)}")
    if all(issubclass(t, numbers.Integral) for t in distinct):
        return int
    if all(issubclass(t, numbers.Rational) for t in distinct):
        return Fraction
    if all(issubclass(t, numbers.Real) for t in distinct):
        return float
    return complex


def abs2(x):
    # |x|^2 without a square root round trip; exact for int and Fraction
    return (x * x.conjugate()).real
