"""qevolve: Exact Exponential Propagators
--------------------------------------
Propagators obtained by exponentiating a time-independent generator once:

- ``ham``: unitary step ``U = exp(-i dt H)`` on kets (``U psi``) or density
  matrices (``U rho U^dag``)
- ``sham``: the same unitary step as a superoperator on vectorized density
  matrices
- ``slind``: exponential of the full Lindblad generator superoperator on
  vectorized density matrices

Behavior
--------
- Constant generators are exponentiated once at construction; the resulting
  matrices are held by frozen value types and reused on every call.
- Time-dependent generators are re-sampled and re-exponentiated at the time
  of each call (:class:`~qevolve.propagator.base.RebuildingPropagator`),
  assuming the generator is constant across a single step.

Notes
-----
- ``H`` is not validated for shape or Hermiticity; mismatches surface as
  NumPy/SciPy errors.
- Superoperator forms work in N^2 x N^2 space and follow the column-major
  convention of :func:`qevolve.operators.vec`.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from ..core.errors import get_logger
from ..core.registry import register_propagator
from ..generator import as_generator
from ..operators import dag, expm, scomm, sdiss, superopl, superopr
from .base import PropagatorBase, RebuildingPropagator, check_time_step

__all__ = [
    "UnitaryKetPropagator",
    "UnitaryDensityPropagator",
    "SuperoperatorPropagator",
    "unitary",
    "ham",
    "sham",
    "lindblad_superoperator",
    "slind",
]

_logger = get_logger()


@dataclass(frozen=True)
class UnitaryKetPropagator(PropagatorBase):
    """``psi -> U psi``."""

    dt: float
    u: Any

    def apply(self, t: float, state: Any) -> Any:
        return self.u @ state


@dataclass(frozen=True)
class UnitaryDensityPropagator(PropagatorBase):
    """``rho -> U rho U^dag`` with ``U^dag`` precomputed."""

    dt: float
    u: Any
    ut: Any

    def apply(self, t: float, state: Any) -> Any:
        return self.u @ state @ self.ut


@dataclass(frozen=True)
class SuperoperatorPropagator(PropagatorBase):
    """``v -> L v`` on vectorized density matrices."""

    dt: float
    superop: Any

    def apply(self, t: float, state: Any) -> Any:
        return self.superop @ state


def unitary(dt: float, h: Any) -> Any:
    """Return ``exp(-i dt h)``."""
    return expm(-1j * dt * h)


@register_propagator("ham", ket=True)
def ham(dt: float, H: Any, ket: bool = False) -> PropagatorBase:
    """Build the exact Hamiltonian propagator over one step ``dt``.

    Parameters
    ----------
    dt : float
        Time step (positive).
    H : operator, callable or Generator
        Hamiltonian, or a function ``t -> H(t)``.
    ket : bool, default False
        Propagate state vectors instead of density matrices.

    Returns
    -------
    PropagatorBase
        ``UnitaryKetPropagator`` / ``UnitaryDensityPropagator`` for constant
        ``H``; a ``RebuildingPropagator`` for time-dependent ``H``.

    Examples
    --------
    >>> from qevolve.operators import sigma_x, projector
    >>> step = ham(0.1, sigma_x())
    >>> rho = step(0.0, projector(2, 0))

    """
    dt = check_time_step(dt)
    gen = as_generator(H)
    if gen.is_time_dependent:
        return RebuildingPropagator(dt, gen, lambda h: ham(dt, h, ket=ket))
    u = unitary(dt, gen.at(0.0))
    if ket:
        return UnitaryKetPropagator(dt, u)
    return UnitaryDensityPropagator(dt, u, dag(u))


@register_propagator("sham", vectorized=True)
def sham(dt: float, H: Any) -> PropagatorBase:
    """Build the exact Hamiltonian propagator as a superoperator.

    The superoperator is ``superopl(U) @ superopr(U^dag)`` and acts on
    ``vec(rho)``.
    """
    dt = check_time_step(dt)
    gen = as_generator(H)
    if gen.is_time_dependent:
        return RebuildingPropagator(dt, gen, lambda h: sham(dt, h))
    u = unitary(dt, gen.at(0.0))
    return SuperoperatorPropagator(dt, superopl(u) @ superopr(dag(u)))


def lindblad_superoperator(h: Any, jumps: Sequence[Any]) -> Any:
    """Generator ``-i [h, .] + sum_k D[A_k]`` as an N^2 x N^2 superoperator."""
    gen = -1j * scomm(h)
    for a in jumps:
        gen = gen + sdiss(a)
    return gen


@register_propagator("slind", jumps=True, vectorized=True)
def slind(dt: float, H: Any, jumps: Sequence[Any] = ()) -> PropagatorBase:
    """Build the exact Lindblad propagator ``exp(dt L)`` on vectorized states.

    Parameters
    ----------
    dt : float
        Time step (positive).
    H : operator, callable or Generator
        Hamiltonian; a time-dependent one rebuilds and re-exponentiates the
        full generator on every call.
    jumps : sequence of operators, default ()
        Jump operators, kept in the given order.

    Returns
    -------
    PropagatorBase
        Propagator acting on ``vec(rho)``.

    """
    dt = check_time_step(dt)
    jumps = tuple(jumps)
    gen = as_generator(H)
    if gen.is_time_dependent:
        return RebuildingPropagator(dt, gen, lambda h: slind(dt, h, jumps))
    h = gen.at(0.0)
    _logger.debug(
        f"slind: exponentiating {h.shape[0] ** 2}x{h.shape[0] ** 2} generator "
        f"with {len(jumps)} jump operator(s)"
    )
    return SuperoperatorPropagator(dt, expm(dt * lindblad_superoperator(h, jumps)))
