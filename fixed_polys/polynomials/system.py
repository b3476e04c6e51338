from __future__ import annotations

import functools
import logging
import math
from typing import Iterator, Sequence

import numpy as np
import sympy

from .calculus import gradient
from .homogeneity import dehomogenize, homogenize, is_homogeneous
from .poly import DimensionMismatchError, Poly
from .weyl import weyl_dot as poly_weyl_dot

logger = logging.getLogger(__name__)


class PolySystem:
    """An ordered collection of polynomials in the same variables.

    Per-polynomial work is delegated to the Poly operations; the system only checks the shared variable count and
    packs results into numpy arrays.
    """

    def __init__(self, polys: Sequence[Poly], variables: Sequence | None = None) -> None:
        """
        :param polys: the polynomials, at least one, all with the same number of variables
        :param variables: optional names for the variables (e.g. sympy symbols), one per variable
        """
        if len(polys) == 0:
            raise ValueError("a polynomial system needs at least one polynomial")
        nvars = polys[0].nvariables
        if any(p.nvariables != nvars for p in polys):
            raise DimensionMismatchError(f"polynomials have differing variable counts: {[p.nvariables for p in polys]}")
        if variables is not None and len(variables) != nvars:
            raise DimensionMismatchError(f"{len(variables)} variables given for {nvars}-variate polynomials")
        self._polys = tuple(polys)
        self._variables = tuple(variables) if variables is not None else None

    @property
    def polynomials(self) -> tuple[Poly, ...]:
        return self._polys

    @property
    def variables(self) -> tuple | None:
        return self._variables

    @property
    def nvariables(self) -> int:
        return self._polys[0].nvariables

    @property
    def npolynomials(self) -> int:
        return len(self._polys)

    @property
    def degrees(self) -> list[int]:
        return [p.degree for p in self._polys]

    @property
    def homogenized(self) -> bool:
        return all(p.homogenized for p in self._polys)

    def __len__(self) -> int:
        return len(self._polys)

    def __iter__(self) -> Iterator[Poly]:
        return iter(self._polys)

    def __getitem__(self, i: int) -> Poly:
        return self._polys[i]

    def __eq__(self, other) -> bool:
        if not isinstance(other, PolySystem):
            return NotImplemented
        return self._polys == other._polys

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"PolySystem({list(self._polys)!r})"

    def evaluate(self, x: Sequence, out: np.ndarray | None = None) -> np.ndarray:
        """Evaluates every polynomial at `x`. If `out` is given, the values are written into it."""
        values = [p(x) for p in self._polys]
        if out is None:
            return np.array(values)
        assert out.shape == (self.npolynomials,), f"out has shape {out.shape}, expected ({self.npolynomials},)"
        out[:] = values
        return out

    def __call__(self, x: Sequence, out: np.ndarray | None = None) -> np.ndarray:
        return self.evaluate(x, out)

    @functools.cached_property
    def _derivatives(self) -> tuple[tuple[Poly, ...], ...]:
        return tuple(tuple(gradient(p)) for p in self._polys)

    def differentiate(self) -> list[list[Poly]]:
        """Returns the Jacobian: row i is the gradient of the i-th polynomial."""
        return [list(row) for row in self._derivatives]

    def jacobian(self, x: Sequence, out: np.ndarray | None = None) -> np.ndarray:
        values = [[dp(x) for dp in row] for row in self._derivatives]
        if out is None:
            return np.array(values).reshape(self.npolynomials, self.nvariables)
        assert out.shape == (self.npolynomials, self.nvariables)
        out[:, :] = values
        return out

    def is_homogeneous(self) -> bool:
        return all(is_homogeneous(p) for p in self._polys)

    def homogenize(self, slack=None) -> PolySystem:
        """Homogenizes every polynomial. With named variables, `slack` names the new leading variable."""
        if self.homogenized:
            return self
        if any(p.homogenized for p in self._polys):
            raise ValueError("cannot homogenize a system in which only some polynomials are homogenized")
        variables = None
        if self._variables is not None:
            slack = sympy.Dummy("h") if slack is None else slack
            variables = (slack,) + self._variables
            logger.debug("homogenizing %d polynomials with slack variable %s", self.npolynomials, slack)
        return PolySystem([homogenize(p) for p in self._polys], variables)

    def dehomogenize(self) -> PolySystem:
        variables = self._variables[1:] if self._variables is not None else None
        return PolySystem([dehomogenize(p) for p in self._polys], variables)


def weyl_dot(F: PolySystem, G: PolySystem):
    """Computes the Bombieri-Weyl inner product of two systems, the sum of the member-wise products."""
    if len(F) != len(G):
        raise DimensionMismatchError(f"systems have {len(F)} and {len(G)} polynomials")
    if F is G:
        return sum((poly_weyl_dot(f, f) for f in F), 0)
    return sum((poly_weyl_dot(f, g) for f, g in zip(F, G)), 0)


def weyl_norm(F: PolySystem):
    return math.sqrt(weyl_dot(F, F))
