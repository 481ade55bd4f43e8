"""qevolve: Error Taxonomy and Logging
-----------------------------------

Self-contained error hierarchy and shared logger for the qevolve package.

Error Hierarchy
---------------
- QEVError: Base exception for all qevolve errors
- QEVConfigError: Invalid time step, time span, sample count or method name
- QEVPropagatorError: Propagator construction failures (e.g. a time step too
  large for the jump-no-jump approximation)
- QEVTrajectoryError: Failures while recording a trajectory

Linear-algebra errors (dimension mismatches, singular inputs) are raised by
NumPy/SciPy and are deliberately not wrapped.

Logging
-------
The shared logger is named "qevolve" and can be configured for console and
file output with optional JSON formatting.
"""

import logging
import os

__all__ = [
    "QEVError",
    "QEVConfigError",
    "QEVPropagatorError",
    "QEVTrajectoryError",
    "get_logger",
    "configure_logging",
]


# =============================================================================
# Exception Hierarchy
# =============================================================================


class QEVError(Exception):
    """Base exception for all qevolve errors.

    Examples
    --------
    >>> try:
    ...     raise QEVConfigError("dt must be positive")
    ... except QEVError as e:
    ...     print(f"qevolve error: {e}")
    qevolve error: dt must be positive

    """

    pass


class QEVConfigError(QEVError):
    """Configuration-related errors.

    Raised when a time step, time span, sample count or method name cannot
    produce a terminating simulation.
    """

    pass


class QEVPropagatorError(QEVError):
    """Propagator construction errors.

    Raised when the requested one-step propagator is numerically ill-defined,
    for instance when ``I - dt * sum(A^dag A)`` is not positive semi-definite.
    """

    pass


class QEVTrajectoryError(QEVError):
    """Trajectory recording errors.

    Raised when an observable cannot be stored in the preallocated output.
    """

    pass


# =============================================================================
# Logger Configuration
# =============================================================================

_logger: logging.Logger | None = None


def get_logger() -> logging.Logger:
    """Get the shared qevolve logger instance.

    Returns
    -------
    logging.Logger
        The singleton logger named "qevolve" configured at INFO level by
        default with a console handler. Handlers are created lazily on first use.

    Examples
    --------
    >>> logger = get_logger()
    >>> logger.name
    'qevolve'

    """
    global _logger
    if _logger is None:
        _logger = logging.getLogger("qevolve")
        _logger.setLevel(logging.INFO)
        if not _logger.handlers:
            h = logging.StreamHandler()
            fmt = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
            h.setFormatter(fmt)
            _logger.addHandler(h)
    return _logger


def configure_logging(
    verbose: bool = False,
    log_file: str | None = None,
    as_json: bool = False,
) -> None:
    """Configure the shared logger outputs and warning capture.

    Parameters
    ----------
    verbose : bool, default False
        When True, set logger level to DEBUG; otherwise INFO.
    log_file : str or None, default None
        Optional file path to append logs.
    as_json : bool, default False
        Emit logs in a compact JSON line format when True; otherwise plain text.

    Raises
    ------
    QEVConfigError
        If ``log_file`` cannot be opened for appending.

    """
    logger = get_logger()
    for h in list(logger.handlers):
        logger.removeHandler(h)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    ch = logging.StreamHandler()
    if as_json:
        fmt = logging.Formatter(
            '{"time":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s","msg":"%(message)s"}'
        )
    else:
        fmt = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    ch.setFormatter(fmt)
    logger.addHandler(ch)

    if log_file:
        try:
            fh = logging.FileHandler(os.fspath(log_file), encoding="utf-8")
        except OSError as e:
            raise QEVConfigError(f"Cannot open log file {log_file}: {e}") from e
        fh.setFormatter(fmt)
        logger.addHandler(fh)

    logging.captureWarnings(True)
    logging.getLogger("py.warnings").setLevel(logging.WARNING)
