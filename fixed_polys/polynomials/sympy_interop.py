"""Conversions between SymPy expressions and Poly / PolySystem.

Only the term data is exchanged: for a given variable order, each term's coefficient and the degree of each
variable in it.
"""

import logging
from fractions import Fraction
from typing import Callable, Sequence

import sympy

from .poly import Poly
from .system import PolySystem

logger = logging.getLogger(__name__)


def sympy_number(c: sympy.Expr):
    """Converts a numeric SymPy coefficient into the matching Python number."""
    if c.is_Integer:
        return int(c)
    if c.is_Rational:
        return Fraction(int(c.p), int(c.q))
    if c.is_real:
        return float(c)
    return complex(c)


def poly_from_sympy(
    expr: sympy.Expr | sympy.Poly,
    variables: Sequence[sympy.Symbol] | None = None,
    coefficient_type: type | Callable | None = None,
) -> Poly:
    """Creates a Poly from a SymPy expression.

    :param expr: a polynomial expression or sympy.Poly
    :param variables: the variable order; the generators of `expr` by default
    :param coefficient_type: if given, every coefficient is converted with it
    """
    if isinstance(expr, sympy.Poly) and variables is None:
        poly = expr
    else:
        expr = sympy.sympify(expr.as_expr() if isinstance(expr, sympy.Poly) else expr)
        if variables is None and expr.free_symbols:
            poly = sympy.Poly(expr)
        elif variables:
            poly = sympy.Poly(expr, *variables)
        else:
            return constant_from_sympy(expr, coefficient_type)
    nvars = len(poly.gens)
    exps = []
    cfs = []
    for monom, coeff in poly.terms():
        if coeff == 0:  # sympy reports the zero polynomial as a single zero term
            continue
        exps.append(monom)
        cfs.append(sympy_number(coeff))
    logger.debug("converted %d terms in variables %s", len(exps), poly.gens)
    return Poly(exps, cfs, False, nvariables=nvars, coefficient_type=coefficient_type)


def constant_from_sympy(expr: sympy.Expr, coefficient_type: type | Callable | None = None) -> Poly:
    # sympy.Poly needs at least one generator, so polynomials in no variables are built here
    if expr.free_symbols:
        raise ValueError(f"{expr} is not constant but no variables were given")
    if expr.is_zero:
        return Poly([], [], nvariables=0, coefficient_type=coefficient_type)
    return Poly([()], [sympy_number(expr)], nvariables=0, coefficient_type=coefficient_type)


def system_from_sympy(
    exprs: Sequence[sympy.Expr],
    variables: Sequence[sympy.Symbol] | None = None,
    coefficient_type: type | Callable | None = None,
) -> PolySystem:
    """Creates a PolySystem over a common variable order; by default all free symbols, sorted."""
    exprs = [sympy.sympify(expr) for expr in exprs]
    if variables is None:
        free: set = set().union(*(expr.free_symbols for expr in exprs))
        variables = sorted(free, key=sympy.default_sort_key)
    polys = [poly_from_sympy(expr, variables, coefficient_type) for expr in exprs]
    return PolySystem(polys, variables)


def poly_to_sympy(p: Poly, variables: Sequence[sympy.Symbol]) -> sympy.Expr:
    result = sympy.Integer(0)
    for coefficient, exponent in p:
        term = sympy.sympify(coefficient)
        for var, k in zip(variables, exponent):
            term *= var**k
        result += term
    return result
