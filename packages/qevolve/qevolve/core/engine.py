"""qevolve: Trajectory Engine
--------------------------

Fixed-step trajectory driver and a config-driven engine around it.

``trajectory`` repeatedly applies any propagator ``(t, state) -> state`` and
records observables at evenly spaced sample points. ``Engine`` resolves a
registered propagator method from a :class:`TrajectoryConfig`, builds it for a
Hamiltonian and jump operators, and packages the run as a
:class:`~qevolve.result.TrajectoryResult`.

Sampling
--------
With ``N = floor(|t1 - t0| / dt)`` micro-steps, the driver keeps
``Ns = min(points, N)`` samples on ``linspace(t0, t1, Ns)``, taking
``Nl = ceil(N / points)`` micro-steps of size ``dt`` between consecutive
samples. The first sample is the initial state. When ``(Ns - 1) * Nl`` exceeds
``N`` the last samples lie past ``t1`` although the grid labels them within
the span; this is logged at DEBUG.

Output arrays take their dtype from the observable values at ``t0`` and are
promoted when a later value is of a wider kind (integer to float, float to
complex).
"""

import math
import time as _time
from collections.abc import Callable, Sequence
from typing import Any, ClassVar

import numpy as np

from .. import propagator as _propagators  # noqa: F401
from ..operators import ket2dm, unvec, vec
from ..result import TrajectoryResult
from .config import TrajectoryConfig, make_config
from .errors import QEVConfigError, QEVTrajectoryError, get_logger
from .protocols import TrajectoryReporter
from .registry import get_propagator, get_propagator_meta

__all__ = ["trajectory", "LoggingReporter", "Engine"]

logger = get_logger()


class LoggingReporter:
    """Report trajectory size and throughput through the qevolve logger."""

    def on_start(self, steps: int, points: int, values: int) -> None:
        logger.info(f"Trajectory: steps = {steps}, points = {points}, values = {values}")

    def on_finish(self, steps: int, elapsed: float) -> None:
        rate = steps / elapsed if elapsed > 0 else float("inf")
        logger.info(
            f"Time elapsed: {elapsed:.4g} s, Steps per second: {rate:.4g}"
        )


def _notify(reporter: TrajectoryReporter | None, hook: str, *args: Any) -> None:
    if reporter is None:
        return
    try:
        getattr(reporter, hook)(*args)
    except Exception as e:
        # Never let progress reporting break the simulation
        logger.warning(f"Trajectory reporter {hook} failed: {e}")


def trajectory(
    propagator: Callable[[float, Any], Any],
    init: Any,
    tspan: tuple[float, float],
    *observables: Callable[[Any], Any],
    dt: float = 1e-4,
    points: int = 1000,
    verbose: bool = True,
    reporter: TrajectoryReporter | None = None,
) -> tuple[np.ndarray, ...]:
    """Compute a time-stepped trajectory and record observables.

    Parameters
    ----------
    propagator : callable
        One-step propagator ``(t, state) -> state`` advancing by ``dt``.
    init : Any
        Initial state, in the form ``propagator`` expects.
    tspan : tuple[float, float]
        ``(t0, t1)`` with ``t1 > t0``.
    *observables : callable
        Functions ``state -> value``; values may be scalars or small arrays of
        fixed shape.
    dt : float, default 1e-4
        Micro-step size (positive).
    points : int, default 1000
        Target number of samples; clamped to the number of micro-steps.
    verbose : bool, default True
        Log start/finish notices when no explicit ``reporter`` is given.
    reporter : TrajectoryReporter, optional
        Progress sink; overrides ``verbose``.

    Returns
    -------
    tuple[np.ndarray, ...]
        ``(ts, values_0, values_1, ...)``; each ``values_k`` has shape
        ``(len(ts), *shape_k)``.

    Raises
    ------
    QEVConfigError
        If no observable is given, ``dt <= 0``, ``t1 <= t0``, ``points < 1``
        or the span is shorter than one micro-step.
    QEVTrajectoryError
        If an observable returns a value of a different shape than at ``t0``.

    Examples
    --------
    >>> from qevolve.propagator import ham
    >>> from qevolve.operators import sigma_x, basis, expect, projector
    >>> step = ham(0.01, sigma_x(), ket=True)
    >>> ts, p1 = trajectory(step, basis(2, 0), (0.0, 1.0), expect(projector(2, 1)),
    ...                     dt=0.01, points=11, verbose=False)
    >>> len(ts)
    11

    """
    if not observables:
        raise QEVConfigError("trajectory requires at least one observable function")
    t0, t1 = (float(x) for x in tspan)
    cfg = make_config(t0=t0, t1=t1, dt=dt, points=points, verbose=verbose)
    n_steps = cfg.n_steps
    if n_steps < 1:
        raise QEVConfigError(
            f"Time span {t1 - t0} is shorter than one step dt={cfg.dt}"
        )

    n_points = min(cfg.points, n_steps)
    if n_points < cfg.points:
        msg = f"Requested {cfg.points} points but only {n_steps} steps; recording {n_points}"
        if cfg.verbose:
            logger.info(msg)
        else:
            logger.debug(msg)
    stride = math.ceil(n_steps / cfg.points)
    ts = np.linspace(t0, t1, n_points)
    total = (n_points - 1) * stride
    if total > n_steps:
        logger.debug(
            f"Sampling stride {stride} runs {total} steps, past the {n_steps} steps "
            f"in the span; the last sample is at t={t0 + total * cfg.dt:.6g}"
        )

    # Preallocate from the values at t0
    first = [np.asarray(f(init)) for f in observables]
    traj = [np.empty((n_points, *v.shape), dtype=v.dtype) for v in first]
    for out, v in zip(traj, first):
        out[0] = v

    def update(i: int, state: Any) -> None:
        for k, f in enumerate(observables):
            value = np.asarray(f(state))
            if not np.can_cast(value.dtype, traj[k].dtype, "same_kind"):
                # e.g. an integer initial state followed by float values
                promoted = np.result_type(traj[k].dtype, value.dtype)
                logger.debug(f"Observable {k}: promoting {traj[k].dtype} output to {promoted}")
                traj[k] = traj[k].astype(promoted)
            try:
                traj[k][i] = value
            except (ValueError, TypeError) as e:
                raise QEVTrajectoryError(
                    f"Observable {k} returned a value incompatible with shape "
                    f"{traj[k].shape[1:]} at sample {i}: {e}"
                ) from e

    sink = reporter if reporter is not None else (LoggingReporter() if cfg.verbose else None)
    _notify(sink, "on_start", n_steps, n_points, len(observables))
    start = _time.monotonic()

    state = init
    step = 0
    t = t0
    for i in range(1, n_points):
        for _ in range(stride):
            state = propagator(t, state)
            step += 1
            t = t0 + step * cfg.dt
        update(i, state)

    elapsed = _time.monotonic() - start
    _notify(sink, "on_finish", step, elapsed)
    return (ts, *traj)


def _on_density(f: Callable[[Any], Any]) -> Callable[[Any], Any]:
    """Adapt a density-matrix observable to vectorized states."""

    def _wrapped(v: Any) -> Any:
        return f(unvec(v))

    return _wrapped


class Engine:
    """Config-driven trajectory runner.

    Parameters
    ----------
    config : TrajectoryConfig, optional
        Run configuration; built from ``**kwargs`` when omitted.
    reporter : TrajectoryReporter, optional
        Progress sink passed to :func:`trajectory`.

    Examples
    --------
    >>> import numpy as np
    >>> from qevolve.operators import sigma_minus, projector, expect
    >>> engine = Engine(t1=1.0, dt=1e-3, points=11, method="slind", verbose=False)
    >>> result = engine.run(np.zeros((2, 2)), projector(2, 1),
    ...                     expect(projector(2, 1)), jumps=[sigma_minus()])
    >>> len(result)
    11

    """

    name: ClassVar[str] = "trajectory"
    description: ClassVar[str] = "Fixed-step open quantum system trajectory engine"
    config_schema: ClassVar[type[TrajectoryConfig]] = TrajectoryConfig

    def __init__(
        self,
        config: TrajectoryConfig | None = None,
        reporter: TrajectoryReporter | None = None,
        **kwargs: Any,
    ) -> None:
        if config is None:
            config = make_config(**kwargs)
        elif kwargs:
            config = make_config(**{**config.model_dump(), **kwargs})
        self.config = config
        self.reporter = reporter

    def build(self, H: Any, jumps: Sequence[Any] = (), ket: bool = False) -> Any:
        """Build the configured propagator for ``H`` and ``jumps``."""
        method = self.config.method
        factory = get_propagator(method)
        meta = get_propagator_meta(method)
        jumps = tuple(jumps)
        kwargs: dict[str, Any] = {}
        if jumps:
            if not meta["jumps"]:
                raise QEVConfigError(f"Method '{method}' does not accept jump operators")
            kwargs["jumps"] = jumps
        if ket:
            if not meta["ket"]:
                raise QEVConfigError(f"Method '{method}' does not support ket states")
            kwargs["ket"] = True
        return factory(self.config.dt, H, **kwargs)

    def run(
        self,
        H: Any,
        init: Any,
        *observables: Callable[[Any], Any],
        jumps: Sequence[Any] = (),
        ket: bool = False,
    ) -> TrajectoryResult:
        """Run a trajectory with the configured method.

        Kets are promoted to density matrices unless ``ket=True``. For
        superoperator methods the initial state is vectorized and observables
        still receive density matrices.
        """
        cfg = self.config
        jumps = tuple(jumps)
        meta = get_propagator_meta(cfg.method)
        propagator = self.build(H, jumps, ket)

        state = np.asarray(init)
        if not ket and state.ndim == 1:
            state = ket2dm(state)
        obs = observables
        if meta["vectorized"]:
            state = vec(state)
            obs = tuple(_on_density(f) for f in observables)

        out = trajectory(
            propagator,
            state,
            (cfg.t0, cfg.t1),
            *obs,
            dt=cfg.dt,
            points=cfg.points,
            verbose=cfg.verbose,
            reporter=self.reporter,
        )
        return TrajectoryResult(
            times=out[0],
            values=tuple(out[1:]),
            meta={
                "method": cfg.method,
                "dt": cfg.dt,
                "t0": cfg.t0,
                "t1": cfg.t1,
                "n_steps": cfg.n_steps,
                "n_jumps": len(jumps),
                "ket": ket,
            },
        )
