"""qevolve: Propagator Registry
-----------------------------

Lightweight name -> factory registry for propagator factories, used by the
config-driven :class:`~qevolve.core.engine.Engine` to resolve
``TrajectoryConfig.method``.

Registry Structure
------------------
Each entry stores the factory together with capability metadata:

- ``jumps``: the factory accepts a ``jumps=`` sequence of jump operators
- ``ket``: the factory accepts ``ket=True`` for state-vector propagation
- ``vectorized``: the propagator acts on vectorized density matrices

Example:
-------
    from qevolve.core.registry import register_propagator

    @register_propagator("my_method", jumps=True)
    def my_method(dt, H, jumps=()):
        ...

"""

from collections.abc import Callable
from typing import Any

from .errors import QEVConfigError

__all__ = [
    "register_propagator",
    "get_propagator",
    "get_propagator_meta",
    "list_propagators",
]

_registry: dict[str, tuple[Callable[..., Any], dict[str, bool]]] = {}


def register_propagator(
    name: str,
    *,
    jumps: bool = False,
    ket: bool = False,
    vectorized: bool = False,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Register a propagator factory under ``name`` (case-insensitive).

    Parameters
    ----------
    name : str
        Public method name, e.g. ``"lind_rk4"``.
    jumps, ket, vectorized : bool
        Capability flags stored alongside the factory.

    Returns
    -------
    Callable
        Decorator returning the factory unchanged.

    Raises
    ------
    QEVConfigError
        If ``name`` is already bound to a different factory.

    """

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        key = name.lower()
        existing = _registry.get(key)
        if existing is not None and existing[0] is not func:
            raise QEVConfigError(f"Propagator '{name}' is already registered")
        _registry[key] = (func, {"jumps": jumps, "ket": ket, "vectorized": vectorized})
        return func

    return decorator


def _lookup(name: str) -> tuple[Callable[..., Any], dict[str, bool]]:
    try:
        return _registry[name.lower()]
    except KeyError:
        known = ", ".join(sorted(_registry))
        raise QEVConfigError(
            f"Unknown propagator method '{name}'. Available: {known}"
        ) from None


def get_propagator(name: str) -> Callable[..., Any]:
    """Return the factory registered under ``name``."""
    return _lookup(name)[0]


def get_propagator_meta(name: str) -> dict[str, bool]:
    """Return a copy of the capability flags registered under ``name``."""
    return dict(_lookup(name)[1])


def list_propagators() -> list[str]:
    return sorted(_registry)
