"""qevolve: Jump No-Jump Lindblad Propagator
-----------------------------------------
Fast approximate one-step Lindblad propagator built from a physically
motivated unraveling rather than an exponential of the full generator.

Behavior
--------
One step ``rho -> rho'`` is the composition

1. unitary evolution ``rho_u = U rho U^dag`` (see ``exact.ham``),
2. the no-jump branch ``N rho_u N`` with
   ``N = sqrt(I - dt sum_k A_k^dag A_k)``,
3. the jump branch ``dt sum_k A_k rho_u A_k^dag``,

returning the sum of the two branches. Without jump operators the unitary
result is returned unchanged.

Notes
-----
- ``N`` depends only on ``dt`` and the jump operators and is built once.
- The square-root argument must be positive semi-definite; a time step that
  is too large relative to the dissipation rates raises
  ``QEVPropagatorError`` instead of yielding NaN or complex garbage.
- Accuracy is first order in ``dt`` and the generator is assumed constant over
  a step.

References
----------
- Physical Review A 92, 052306 (2015).
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np

from ..core.errors import QEVPropagatorError
from ..core.registry import register_propagator
from ..operators import dag, identity_like, sqrtm, to_dense
from .base import PropagatorBase, check_time_step
from .exact import ham

__all__ = [
    "JumpNoJumpPropagator",
    "no_jump_operator",
    "lind",
]

# Relative tolerance on the smallest eigenvalue of I - dt sum A^dag A
_PSD_TOL = 1e-12


def no_jump_operator(dt: float, jumps: Sequence[Any]) -> Any:
    """Return ``sqrt(I - dt sum_k A_k^dag A_k)``.

    Raises
    ------
    QEVPropagatorError
        If the square-root argument has a negative eigenvalue, i.e. ``dt`` is
        too large for the jump-no-jump approximation.

    """
    jumps = tuple(jumps)
    if not jumps:
        raise QEVPropagatorError("no_jump_operator requires at least one jump operator")
    rates = dag(jumps[0]) @ jumps[0]
    for a in jumps[1:]:
        rates = rates + dag(a) @ a
    arg = identity_like(jumps[0]) - dt * rates

    herm = to_dense(arg)
    herm = 0.5 * (herm + herm.conj().T)
    smallest = float(np.linalg.eigvalsh(herm).min())
    if smallest < -_PSD_TOL * max(1.0, float(np.abs(herm).max())):
        largest_rate = float(np.linalg.eigvalsh(to_dense(rates)).max())
        raise QEVPropagatorError(
            "Time step too large for jump-no-jump approximation: "
            f"dt={dt} exceeds 1/max(sum A^dag A)={1.0 / largest_rate:.6g}"
        )
    return sqrtm(arg)


@dataclass(frozen=True)
class JumpNoJumpPropagator(PropagatorBase):
    """Jump-no-jump step around a unitary density-matrix propagator.

    Attributes
    ----------
    dt : float
        Time step.
    unitary : PropagatorBase
        Density-matrix form of the Hamiltonian step.
    no_jump : Any
        ``sqrt(I - dt sum A^dag A)``, or None when there are no jumps.
    jumps : tuple
        Jump operators in the order given.
    adjoints : tuple
        Adjoints of ``jumps``, same order.

    """

    dt: float
    unitary: PropagatorBase
    no_jump: Any = None
    jumps: tuple[Any, ...] = ()
    adjoints: tuple[Any, ...] = ()

    def apply(self, t: float, state: Any) -> Any:
        rho_u = self.unitary.apply(t, state)
        if not self.jumps:
            return rho_u
        out = self.no_jump @ rho_u @ self.no_jump
        for a, ad in zip(self.jumps, self.adjoints):
            out = out + self.dt * (a @ rho_u @ ad)
        return out


@register_propagator("lind", jumps=True)
def lind(dt: float, H: Any, jumps: Sequence[Any] = ()) -> JumpNoJumpPropagator:
    """Build the jump-no-jump Lindblad propagator over one step ``dt``.

    Parameters
    ----------
    dt : float
        Time step (positive, small compared to the inverse decay rates).
    H : operator, callable or Generator
        Hamiltonian; a time-dependent one is handled as in ``ham``.
    jumps : sequence of operators, default ()
        Jump operators, kept in the given order.

    Raises
    ------
    QEVPropagatorError
        If ``dt`` is too large for ``I - dt sum A^dag A`` to be positive
        semi-definite.

    Examples
    --------
    >>> import numpy as np
    >>> from qevolve.operators import sigma_minus, projector
    >>> step = lind(1e-3, np.zeros((2, 2)), [sigma_minus()])
    >>> rho = step(0.0, projector(2, 1))

    """
    dt = check_time_step(dt)
    jumps = tuple(jumps)
    unitary = ham(dt, H)
    if not jumps:
        return JumpNoJumpPropagator(dt, unitary)
    return JumpNoJumpPropagator(
        dt,
        unitary,
        no_jump_operator(dt, jumps),
        jumps,
        tuple(dag(a) for a in jumps),
    )
