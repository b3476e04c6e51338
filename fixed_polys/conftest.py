# (C) 2024 Irreducible Inc.

import functools
import pathlib
import types
from typing import Callable, Iterable

import pytest

MARK = "parametrize_hypothesis"


def pytest_pycollect_makemodule(module_path: pathlib.Path, parent) -> pytest.Module:
    """
    Collects a test module, expanding every function marked with @pytest.mark.parametrize_hypothesis.

    Each keyword of the mark names a variant, e.g. `slow` and `fast`, and maps to the hypothesis decorators
    (`given`, `settings`, ...) for that variant. The marked function is replaced by one copy per variant, named
    `<test>_<variant>` and marked with @pytest.mark.<variant>, so `-m fast` runs a quick single-example pass.
    """
    mod: pytest.Module = pytest.Module.from_parent(parent, path=module_path)
    expand_hypothesis_variants(mod)
    return mod


def expand_hypothesis_variants(mod: pytest.Module) -> None:
    namespace = getattr(mod.obj, "__dict__", {})
    marked = {
        name: obj
        for name, obj in namespace.items()
        if callable(obj) and any(mark.name == MARK for mark in getattr(obj, "pytestmark", []))
    }

    for name, test_func in marked.items():
        delattr(mod.obj, name)
        mark = next(m for m in test_func.pytestmark if m.name == MARK)
        if mark.args:
            raise ValueError(f"@pytest.mark.{MARK} on '{mod.name}.{name}' takes keyword arguments only")

        for variant, decorators in mark.kwargs.items():
            if not isinstance(decorators, (list, tuple, set)) or not all(callable(d) for d in decorators):
                raise ValueError(
                    f"@pytest.mark.{MARK} on '{mod.name}.{name}': '{variant}' must map to a list of decorators"
                )
            new_name = f"{name}_{variant}"
            variant_func = getattr(pytest.mark, variant)(clone_with_decorators(test_func, new_name, decorators))
            setattr(mod.obj, new_name, variant_func)


def clone_with_decorators(test_func: Callable, new_name: str, decorators: Iterable[Callable]) -> Callable:
    """Returns a renamed copy of `test_func` with `decorators` applied in order."""
    clone: Callable = types.FunctionType(
        code=test_func.__code__,
        globals=test_func.__globals__,
        name=new_name,
        argdefs=test_func.__defaults__,
        closure=test_func.__closure__,
    )
    clone = functools.update_wrapper(clone, test_func)
    for decorator in decorators:
        clone = decorator(clone)
    return clone
