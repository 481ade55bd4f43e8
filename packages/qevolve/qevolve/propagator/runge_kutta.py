"""qevolve: Runge-Kutta Propagators
--------------------------------
Fixed-step classical 4th-order Runge-Kutta integration of the first-order
equations of motion, valid for time-dependent Hamiltonians:

- Schrodinger equation  ``dpsi/dt = -i H(t) psi``
- von Neumann equation  ``drho/dt = -i [H(t), rho]``
- Lindblad equation     ``drho/dt = -i [H(t), rho] + sum_k D[A_k](rho)``

Behavior
--------
- Stages are evaluated at ``t``, ``t + dt/2`` (twice) and ``t + dt`` and
  combined with weights 1:2:2:1, giving O(dt^5) local and O(dt^4) global
  error.
- Constant Hamiltonians are wrapped as constant generators and go through
  the same routine.

References
----------
- Press, W. H. et al. (2007). Numerical Recipes (3rd ed.), sec. 17.1.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol

from ..core.registry import register_propagator
from ..generator import ConstantGenerator, TimeDependentGenerator, as_generator
from ..operators import comm, dag
from .base import PropagatorBase, check_time_step

__all__ = [
    "SchrodingerEquation",
    "VonNeumannEquation",
    "LindbladEquation",
    "RK4Propagator",
    "ham_rk4",
    "lind_rk4",
]


class EquationOfMotion(Protocol):
    def __call__(self, t: float, state: Any) -> Any: ...


@dataclass(frozen=True)
class SchrodingerEquation:
    generator: ConstantGenerator | TimeDependentGenerator

    def __call__(self, t: float, state: Any) -> Any:
        return -1j * (self.generator.at(t) @ state)


@dataclass(frozen=True)
class VonNeumannEquation:
    generator: ConstantGenerator | TimeDependentGenerator

    def __call__(self, t: float, state: Any) -> Any:
        return -1j * comm(self.generator.at(t), state)


@dataclass(frozen=True)
class LindbladEquation:
    """Lindblad right-hand side with ``A_k^dag`` and ``A_k^dag A_k`` cached."""

    generator: ConstantGenerator | TimeDependentGenerator
    jumps: tuple[Any, ...] = ()
    _adjoints: tuple[Any, ...] = field(init=False, repr=False)
    _rates: tuple[Any, ...] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        adjoints = tuple(dag(a) for a in self.jumps)
        object.__setattr__(self, "_adjoints", adjoints)
        object.__setattr__(
            self, "_rates", tuple(ad @ a for ad, a in zip(adjoints, self.jumps))
        )

    def __call__(self, t: float, state: Any) -> Any:
        out = -1j * comm(self.generator.at(t), state)
        for a, ad, ada in zip(self.jumps, self._adjoints, self._rates):
            out = out + a @ state @ ad - 0.5 * (ada @ state + state @ ada)
        return out


@dataclass(frozen=True)
class RK4Propagator(PropagatorBase):
    """One classical RK4 step of ``equation`` over ``dt``."""

    dt: float
    equation: EquationOfMotion

    def apply(self, t: float, state: Any) -> Any:
        dt = self.dt
        f = self.equation
        k1 = f(t, state)
        k2 = f(t + dt / 2.0, state + k1 * (dt / 2.0))
        k3 = f(t + dt / 2.0, state + k2 * (dt / 2.0))
        k4 = f(t + dt, state + k3 * dt)
        return state + (k1 + 2.0 * k2 + 2.0 * k3 + k4) * (dt / 6.0)


@register_propagator("ham_rk4", ket=True)
def ham_rk4(dt: float, H: Any, ket: bool = False) -> RK4Propagator:
    """Build an RK4 propagator for Hamiltonian evolution.

    Parameters
    ----------
    dt : float
        Time step (positive).
    H : operator, callable or Generator
        Hamiltonian, or a function ``t -> H(t)``.
    ket : bool, default False
        Integrate the Schrodinger equation for kets instead of the von Neumann
        equation for density matrices.

    """
    dt = check_time_step(dt)
    gen = as_generator(H)
    if ket:
        return RK4Propagator(dt, SchrodingerEquation(gen))
    return RK4Propagator(dt, VonNeumannEquation(gen))


@register_propagator("lind_rk4", jumps=True)
def lind_rk4(dt: float, H: Any, jumps: Sequence[Any] = ()) -> RK4Propagator:
    """Build an RK4 propagator for the Lindblad master equation.

    This is the accurate counterpart of :func:`~qevolve.propagator.jump.lind`:
    no small-``dt`` unraveling is involved and ``H`` may depend on time.
    """
    dt = check_time_step(dt)
    return RK4Propagator(dt, LindbladEquation(as_generator(H), tuple(jumps)))
