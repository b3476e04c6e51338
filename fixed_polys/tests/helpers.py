# (C) 2024 Irreducible Inc.

from hypothesis import strategies as st

from fixed_polys.polynomials.poly import Poly


def random_integers_strategy(
    min_value: int,
    max_value: int,
) -> st.SearchStrategy[int]:
    return st.builds(lambda rng: rng.randint(min_value, max_value), st.randoms(use_true_random=True))


def exponents_strategy(nvariables: int, max_exponent: int = 4) -> st.SearchStrategy[tuple[int, ...]]:
    return st.tuples(*[st.integers(0, max_exponent)] * nvariables)


@st.composite
def polys_strategy(
    draw,
    nvariables: int,
    max_terms: int = 6,
    max_exponent: int = 4,
    homogenized: bool = False,
) -> Poly:
    """Draws a Poly with small integer coefficients and pairwise distinct exponent vectors."""
    exponents = draw(st.lists(exponents_strategy(nvariables, max_exponent), min_size=1, max_size=max_terms, unique=True))
    coefficients = draw(st.lists(st.integers(-9, 9), min_size=len(exponents), max_size=len(exponents)))
    return Poly(exponents, coefficients, homogenized, nvariables=nvariables)


def points_strategy(nvariables: int) -> st.SearchStrategy[list[int]]:
    return st.lists(st.integers(-5, 5), min_size=nvariables, max_size=nvariables)
