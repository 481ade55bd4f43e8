"""qevolve: Trajectory Result
---------------------------------------------------------
Container for a sampled trajectory, supporting serialization and
deserialization.

Public API
----------
``TrajectoryResult`` : Time grid plus one recorded array per observable.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import numpy as np

from .core.errors import QEVError

__all__ = ["TrajectoryResult"]


@dataclass
class TrajectoryResult:
    """Container for trajectory driver output.

    Attributes
    ----------
    times : np.ndarray
        Evenly spaced sample times, ascending.
    values : tuple[np.ndarray, ...]
        One array per observable; the leading axis follows ``times``.
    meta : dict[str, Any]
        Metadata about the run (method, dt, steps per sample, ...).

    """

    times: np.ndarray
    values: tuple[np.ndarray, ...] = ()
    meta: dict[str, Any] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.times)

    def observable(self, index: int) -> np.ndarray:
        """Return the recorded values of observable ``index``."""
        return self.values[index]

    def as_tuple(self) -> tuple[np.ndarray, ...]:
        """Return ``(times, values_0, values_1, ...)`` like ``trajectory``."""
        return (self.times, *self.values)

    def save(self, path: str | Path) -> None:
        """Save the result to a compressed ``.npz`` file.

        Parameters
        ----------
        path : str | Path
            Path to save the result to.

        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        arrays = {f"value_{i}": np.asarray(v) for i, v in enumerate(self.values)}
        try:
            np.savez_compressed(
                path,
                times=np.asarray(self.times),
                n_values=len(self.values),
                meta=np.array(self.meta, dtype=object),
                **arrays,
            )
        except (OSError, ValueError) as e:
            raise QEVError(f"Failed to save TrajectoryResult to {path}: {e}") from e

    @classmethod
    def load(cls, path: str | Path) -> "TrajectoryResult":
        """Load a result written by :meth:`save`.

        Parameters
        ----------
        path : str | Path
            Path to load the result from.

        Returns
        -------
        TrajectoryResult
            Loaded result object.

        """
        path = Path(path)
        if not path.exists():
            raise QEVError(f"File not found: {path}")
        try:
            with np.load(path, allow_pickle=True) as npz:
                n_values = int(npz["n_values"])
                values = tuple(npz[f"value_{i}"] for i in range(n_values))
                meta = npz["meta"].item() if "meta" in npz else {}
                return cls(times=npz["times"], values=values, meta=meta)
        except (OSError, KeyError, ValueError) as e:
            raise QEVError(f"Failed to load TrajectoryResult from {path}: {e}") from e
