"""qevolve: Propagator Base Types
------------------------------

Shared pieces of the propagator factories: the call convention, time-step
validation and the wrapper that rebuilds an exact propagator from a
time-dependent generator on every call.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from ..core.errors import QEVConfigError
from ..generator import TimeDependentGenerator

__all__ = [
    "PropagatorBase",
    "RebuildingPropagator",
    "check_time_step",
]


def check_time_step(dt: float) -> float:
    """Return ``dt`` as float, rejecting non-positive or non-finite steps."""
    dt = float(dt)
    if not dt > 0.0 or dt == float("inf"):
        raise QEVConfigError(f"Time step must be positive and finite, got dt={dt}")
    return dt


class PropagatorBase:
    """Mixin making ``propagator(t, state)`` equivalent to ``apply``."""

    dt: float

    def apply(self, t: float, state: Any) -> Any:
        raise NotImplementedError

    def __call__(self, t: float, state: Any) -> Any:
        return self.apply(t, state)


@dataclass(frozen=True)
class RebuildingPropagator(PropagatorBase):
    """Exact propagator for a time-dependent generator.

    The operator is sampled at the call's time and a fresh constant-generator
    propagator is built from it, without caching across calls. This treats the
    generator as constant over one step and is accurate only when it varies
    slowly on the scale of ``dt``.

    Attributes
    ----------
    dt : float
        Time step.
    generator : TimeDependentGenerator
        Source of the operator at each call time.
    build : Callable[[Any], PropagatorBase]
        Factory turning a fixed operator into a propagator for ``dt``.

    """

    dt: float
    generator: TimeDependentGenerator
    build: Callable[[Any], PropagatorBase]

    def apply(self, t: float, state: Any) -> Any:
        return self.build(self.generator.at(t)).apply(t, state)
