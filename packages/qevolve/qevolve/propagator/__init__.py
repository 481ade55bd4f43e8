"""qevolve: Propagator Subpackage
------------------------------
Single-step propagator factories, registered by name on import:

- ``ham`` / ``sham``: exact unitary step (operator / superoperator form)
- ``ham_rk4``: Runge-Kutta Hamiltonian step
- ``lind``: jump-no-jump Lindblad step
- ``lind_rk4``: Runge-Kutta Lindblad step
- ``slind``: exact superoperator Lindblad step
"""

from .base import PropagatorBase, RebuildingPropagator
from .exact import (
    SuperoperatorPropagator,
    UnitaryDensityPropagator,
    UnitaryKetPropagator,
    ham,
    sham,
    slind,
)
from .jump import JumpNoJumpPropagator, lind, no_jump_operator
from .runge_kutta import RK4Propagator, ham_rk4, lind_rk4

__all__ = [
    "PropagatorBase",
    "RebuildingPropagator",
    "UnitaryKetPropagator",
    "UnitaryDensityPropagator",
    "SuperoperatorPropagator",
    "JumpNoJumpPropagator",
    "RK4Propagator",
    "ham",
    "sham",
    "ham_rk4",
    "lind",
    "lind_rk4",
    "slind",
    "no_jump_operator",
]
