from typing import TypeVar

from .poly import Poly, Ring

T = TypeVar("T", bound=Ring)


def _check_index(p: Poly, index: int) -> None:
    if index not in range(p.nvariables):
        raise IndexError(f"variable index {index} out of range for {p.nvariables} variables")


def differentiate(p: Poly[T], index: int | None = None) -> Poly[T] | list[Poly[T]]:
    """Differentiates `p` w.r.t. the variable at (zero-based) `index`.

    Terms not depending on that variable vanish. The homogenized flag is carried over as is.
    Without an index, returns the gradient.
    """
    if index is None:
        return gradient(p)
    _check_index(p, index)
    exps = []
    cfs = []
    for coefficient, exponent in p:
        k = exponent[index]
        if k == 0:
            continue
        exps.append(exponent[:index] + (k - 1,) + exponent[index + 1 :])
        cfs.append(coefficient * k)
    return Poly(exps, cfs, p.homogenized, nvariables=p.nvariables, coefficient_type=None if cfs else p.coefficient_type)


def gradient(p: Poly[T]) -> list[Poly[T]]:
    return [differentiate(p, i) for i in range(p.nvariables)]


def substitute(p: Poly, index: int, value) -> Poly:
    """Substitutes `value` for the variable at (zero-based) `index`.

    The result has one variable less. Terms whose remaining exponents coincide are merged.
    """
    _check_index(p, index)
    merged: dict[tuple[int, ...], object] = {}  # insertion order = order of first appearance
    for coefficient, exponent in p:
        coefficient = coefficient * value ** exponent[index]
        reduced = exponent[:index] + exponent[index + 1 :]
        if reduced in merged:
            merged[reduced] += coefficient
        else:
            merged[reduced] = coefficient
    return Poly(
        list(merged.keys()),
        list(merged.values()),
        p.homogenized,
        nvariables=p.nvariables - 1,
        coefficient_type=None if merged else p.coefficient_type,
    )
