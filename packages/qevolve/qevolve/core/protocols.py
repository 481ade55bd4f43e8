"""qevolve: Core Protocols
------------------------

Minimal contracts shared between the propagator factories and the trajectory
driver. Protocols use duck typing: any callable ``(t, state) -> state`` can
drive a trajectory, and any object with the reporter hooks can receive
progress notices.

Protocol Hierarchy
------------------
- Propagator: One fixed-step advance of a quantum state
- TrajectoryReporter: Optional sink for start/finish notices of a trajectory
"""

from typing import Any, Protocol, runtime_checkable

__all__ = [
    "Propagator",
    "TrajectoryReporter",
]


@runtime_checkable
class Propagator(Protocol):
    """Protocol for single-step propagators.

    Implementations hold every precomputed matrix they need and are
    stateless across calls: ``apply`` MUST NOT mutate ``state`` or the
    captured operators, and MUST return a new state of the same shape.

    Attributes
    ----------
    dt : float
        Fixed time step advanced by one call.

    Methods
    -------
    apply(t, state)
        Return the state at ``t + dt`` given the state at ``t``.
    __call__(t, state)
        Alias of ``apply`` so propagators can be used as plain functions.

    Examples
    --------
    >>> from qevolve.propagator import ham
    >>> from qevolve.operators import sigma_z, basis
    >>> u = ham(0.01, sigma_z() / 2, ket=True)
    >>> psi = u(0.0, basis(2, 0))

    """

    dt: float

    def apply(self, t: float, state: Any) -> Any:
        """Advance ``state`` from ``t`` to ``t + dt``."""
        ...

    def __call__(self, t: float, state: Any) -> Any: ...


@runtime_checkable
class TrajectoryReporter(Protocol):
    """Protocol for trajectory progress sinks.

    The trajectory driver calls ``on_start`` once before the first step and
    ``on_finish`` once after the last one. Return values are ignored and
    exceptions raised by the sink are logged and swallowed, so reporting never
    alters the recorded data.
    """

    def on_start(self, steps: int, points: int, values: int) -> None:
        """Announce a trajectory of ``steps`` micro-steps and ``points`` samples."""
        ...

    def on_finish(self, steps: int, elapsed: float) -> None:
        """Report ``steps`` executed micro-steps in ``elapsed`` wall seconds."""
        ...
