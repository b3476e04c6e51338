from __future__ import annotations

import functools
import numbers
import operator
from typing import Callable, Generic, Iterator, Protocol, Sequence, TypeVar

import numpy as np

from ..utils.utils import promote_types, total_degree


class Ring(Protocol):
    """What a coefficient type must support.

    Addition, multiplication and raising to a non-negative int power are needed everywhere; conjugate() is only
    needed by the Bombieri-Weyl operations.
    """

    def __add__(self, other, /): ...

    def __mul__(self, other, /): ...

    def __pow__(self, exponent: int, /): ...

    def conjugate(self): ...


T = TypeVar("T", bound=Ring)
U = TypeVar("U", bound=Ring)


class DimensionMismatchError(ValueError):
    pass


def compare_by_degree(a: Sequence[int], b: Sequence[int]) -> int:
    """Three-way comparison of exponent vectors by total degree, then entrywise from the left."""
    sum_a = total_degree(a)
    sum_b = total_degree(b)
    if sum_a != sum_b:
        return -1 if sum_a < sum_b else 1
    for a_i, b_i in zip(a, b):
        if a_i != b_i:
            return -1 if a_i < b_i else 1
    return 0


class Poly(Generic[T]):
    """A multivariate polynomial stored as a sparse list of terms, made for fast evaluation.

    Term i is coefficients[i] * prod(x[v] ** exponents[i][v]). Terms are kept sorted descending by total degree,
    ties broken by descending lexicographic order of the exponent vector, e.g. 3xyz² - 2x³y is stored as

        exponents:    ((3, 1, 0), (1, 1, 2))
        coefficients: (-2, 3)

    A Poly is never mutated; every operation returns a new one.
    """

    __slots__ = ("_exponents", "_coefficients", "_homogenized", "_nvariables", "_coefficient_type")

    def __init__(
        self,
        exponents: Sequence[Sequence[int]],
        coefficients: Sequence[T],
        homogenized: bool = False,
        *,
        nvariables: int | None = None,
        coefficient_type: type | Callable | None = None,
    ) -> None:
        """Constructs a polynomial, sorting its terms into canonical order.

        :param exponents: one exponent vector per term
        :param coefficients: one coefficient per term
        :param homogenized: whether a slack variable was injected by homogenize()
        :param nvariables: the variable count; required to know it for a polynomial without terms
        :param coefficient_type: if given, every coefficient is converted with it
        """
        if len(exponents) != len(coefficients):
            raise DimensionMismatchError(f"{len(exponents)} exponent vectors but {len(coefficients)} coefficients")
        exps = [tuple(operator.index(k) for k in exponent) for exponent in exponents]
        if nvariables is None and exps:
            nvariables = len(exps[0])
        if any(len(exponent) != nvariables for exponent in exps):
            raise DimensionMismatchError(f"every exponent vector must have length {nvariables}")
        if any(k < 0 for exponent in exps for k in exponent):
            raise ValueError("exponents must be non-negative")

        cfs = list(coefficients)
        if coefficient_type is not None and not all(type(c) is coefficient_type for c in cfs):
            cfs = [coefficient_type(c) for c in cfs]
        # store the resulting type, never a converter, so derived polynomials do not convert twice
        if cfs:
            coefficient_type = promote_types(*(type(c) for c in cfs))
            if not all(type(c) is coefficient_type for c in cfs):
                cfs = [coefficient_type(c) for c in cfs]
        elif not isinstance(coefficient_type, type):
            coefficient_type = int

        # sorted() is stable, so exact duplicates keep their input order
        order = sorted(
            range(len(exps)),
            key=functools.cmp_to_key(lambda i, j: compare_by_degree(exps[i], exps[j])),
            reverse=True,
        )
        self._exponents = tuple(exps[i] for i in order)
        self._coefficients = tuple(cfs[i] for i in order)
        self._homogenized = bool(homogenized)
        self._nvariables = nvariables
        self._coefficient_type = coefficient_type

    @classmethod
    def monomial(cls, exponent: Sequence[int], coefficient=1, homogenized: bool = False) -> Poly:
        return cls([exponent], [coefficient], homogenized)

    @property
    def exponents(self) -> tuple[tuple[int, ...], ...]:
        return self._exponents

    @property
    def coefficients(self) -> tuple[T, ...]:
        return self._coefficients

    @property
    def homogenized(self) -> bool:
        """Whether `self` was produced by homogenize(). Not re-derived from the exponents."""
        return self._homogenized

    @property
    def nterms(self) -> int:
        return len(self._exponents)

    @property
    def nvariables(self) -> int:
        if self._nvariables is None:
            raise ValueError("variable count of a polynomial without terms is unknown")
        return self._nvariables

    @property
    def degree(self) -> int:
        """The total degree, i.e. that of the leading term."""
        if not self._exponents:
            raise ValueError("polynomial without terms has no degree")
        return total_degree(self._exponents[0])

    @property
    def coefficient_type(self) -> type:
        return self._coefficient_type

    def exponent_matrix(self) -> np.ndarray:
        """Returns the exponents as an (nvariables, nterms) integer array with one column per term."""
        return np.array(self._exponents, dtype=np.int64).reshape(self.nterms, self.nvariables).T

    def __iter__(self) -> Iterator[tuple[T, tuple[int, ...]]]:
        return zip(self._coefficients, self._exponents)

    def __len__(self) -> int:
        return self.nterms

    def __eq__(self, other) -> bool:
        if not isinstance(other, Poly):
            return NotImplemented
        return self._exponents == other._exponents and self._coefficients == other._coefficients

    __hash__ = None  # type: ignore[assignment]

    def __call__(self, point: Sequence, zero=None):
        return evaluate(self, point, zero)

    def __repr__(self) -> str:
        flag = ", homogenized=True" if self._homogenized else ""
        return f"Poly({list(self._exponents)!r}, {list(self._coefficients)!r}{flag})"


def evaluate(p: Poly, point: Sequence, zero=None):
    """Evaluates `p` at `point`, i.e. p(point).

    :param zero: the additive identity to accumulate from, also the value of a polynomial without terms. Defaults
        to the zero of the type promoted from the coefficient and point types when those are all numbers, to the
        int 0 otherwise.
    """
    if len(point) != p.nvariables:
        raise DimensionMismatchError(f"point has {len(point)} coordinates, polynomial has {p.nvariables} variables")
    if zero is None:
        zero = _promoted_zero(p.coefficient_type, *(type(x_i) for x_i in point))
    result = zero
    for coefficient, exponent in p:
        term = coefficient
        for x_i, k in zip(point, exponent):
            term *= x_i**k
        result += term
    return result


def _promoted_zero(*types: type):
    if all(issubclass(t, numbers.Number) for t in types):
        return promote_types(*types)(0)
    return 0


def convert(p: Poly[T], to: Callable[[T], U]) -> Poly[U]:
    """Returns `p` with every coefficient mapped through `to`, e.g. convert(p, complex)."""
    return Poly(p.exponents, p.coefficients, p.homogenized, nvariables=p._nvariables, coefficient_type=to)
