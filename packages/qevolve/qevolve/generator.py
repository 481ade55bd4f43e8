"""qevolve: Generators
-------------------

A generator is the operator driving one propagation step: either a fixed
operator or a function of time returning an operator. Propagator factories
consume the tagged variant below rather than branching on argument types.

Public API
----------
``Generator`` : Protocol with ``at(t)`` and ``is_time_dependent``
``ConstantGenerator`` : Fixed operator
``TimeDependentGenerator`` : Function ``t -> operator``
``as_generator`` : Normalize an operator, callable or generator
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

__all__ = [
    "Generator",
    "ConstantGenerator",
    "TimeDependentGenerator",
    "as_generator",
]


@runtime_checkable
class Generator(Protocol):
    """Operator valued function of time."""

    @property
    def is_time_dependent(self) -> bool: ...

    def at(self, t: float) -> Any:
        """Return the operator at time ``t``."""
        ...


@dataclass(frozen=True)
class ConstantGenerator:
    """Time-independent generator; ``at`` ignores its argument."""

    operator: Any

    @property
    def is_time_dependent(self) -> bool:
        return False

    def at(self, t: float) -> Any:
        return self.operator


@dataclass(frozen=True)
class TimeDependentGenerator:
    """Generator given as a function of time."""

    function: Callable[[float], Any]

    @property
    def is_time_dependent(self) -> bool:
        return True

    def at(self, t: float) -> Any:
        return self.function(t)


def as_generator(h: Any) -> ConstantGenerator | TimeDependentGenerator:
    """Wrap ``h`` as a generator.

    Generators are returned unchanged, callables become
    :class:`TimeDependentGenerator` and anything else (dense or sparse
    matrices) becomes :class:`ConstantGenerator`.

    Examples
    --------
    >>> import numpy as np
    >>> as_generator(np.eye(2)).is_time_dependent
    False
    >>> as_generator(lambda t: t * np.eye(2)).at(2.0)[0, 0]
    2.0

    """
    if isinstance(h, (ConstantGenerator, TimeDependentGenerator)):
        return h
    if callable(h):
        return TimeDependentGenerator(h)
    return ConstantGenerator(h)
