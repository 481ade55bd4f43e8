"""qevolve: Core Subpackage
------------------------
Lightweight core containing protocols (interfaces), the propagator registry,
configuration, errors and the trajectory engine.

The engine is imported from ``qevolve.core.engine`` (or the package root) so
that the propagator factories can depend on this subpackage without cycles.
"""

from .errors import (
    QEVConfigError,
    QEVError,
    QEVPropagatorError,
    QEVTrajectoryError,
    get_logger,
)

__all__ = [
    "QEVError",
    "QEVConfigError",
    "QEVPropagatorError",
    "QEVTrajectoryError",
    "get_logger",
]
