"""Quantum Evolution Propagators
============================

Fixed-step propagators for closed and open quantum systems together with a
sampled trajectory driver, aimed at few-level systems (qubits, cavities)
under coherent drive and decoherence.

Public API
----------
ham, sham
    Exact unitary propagators (operator / superoperator form).
ham_rk4
    Runge-Kutta Hamiltonian propagator.
lind
    Jump-no-jump Lindblad propagator.
lind_rk4
    Runge-Kutta Lindblad propagator.
slind
    Exact superoperator Lindblad propagator.
trajectory
    Fixed-step sampling driver.
Engine
    Config-driven runner returning a ``TrajectoryResult``.
"""

# Register propagator factories before the engine resolves them.
from .propagator import ham, ham_rk4, lind, lind_rk4, sham, slind  # noqa: F401

from .core.config import TrajectoryConfig, load_config  # noqa: E402
from .core.engine import Engine, LoggingReporter, trajectory  # noqa: E402
from .core.errors import (  # noqa: E402
    QEVConfigError,
    QEVError,
    QEVPropagatorError,
    QEVTrajectoryError,
    configure_logging,
    get_logger,
)
from .core.registry import list_propagators  # noqa: E402
from .generator import ConstantGenerator, TimeDependentGenerator, as_generator  # noqa: E402
from .result import TrajectoryResult  # noqa: E402

__version__ = "0.1.0"

__all__ = [
    "ham",
    "sham",
    "ham_rk4",
    "lind",
    "lind_rk4",
    "slind",
    "trajectory",
    "Engine",
    "LoggingReporter",
    "TrajectoryConfig",
    "TrajectoryResult",
    "load_config",
    "list_propagators",
    "ConstantGenerator",
    "TimeDependentGenerator",
    "as_generator",
    "QEVError",
    "QEVConfigError",
    "QEVPropagatorError",
    "QEVTrajectoryError",
    "configure_logging",
    "get_logger",
    "__version__",
]
