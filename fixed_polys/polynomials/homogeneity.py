from ..utils.utils import total_degree
from .poly import Poly


def is_homogeneous(p: Poly) -> bool:
    """Checks whether every term of `p` has the same total degree. True for a polynomial without terms."""
    degrees = [total_degree(exponent) for exponent in p.exponents]
    return all(d == degrees[0] for d in degrees)


def homogenize(p: Poly) -> Poly:
    """Makes `p` homogeneous by prepending a slack variable. Returns `p` itself if it is already homogenized."""
    if p.homogenized:
        return p
    degrees = [total_degree(exponent) for exponent in p.exponents]
    max_deg = max(degrees, default=0)
    exps = [(max_deg - d,) + exponent for d, exponent in zip(degrees, p.exponents)]
    return Poly(exps, p.coefficients, True, nvariables=p.nvariables + 1, coefficient_type=p.coefficient_type)


def dehomogenize(p: Poly) -> Poly:
    # structural only: the leading coordinate is dropped whether or not p was homogenized
    return Poly(
        [exponent[1:] for exponent in p.exponents],
        p.coefficients,
        False,
        nvariables=p.nvariables - 1,
        coefficient_type=p.coefficient_type,
    )
