"""qevolve: Trajectory Configuration
---------------------------------

Validated settings for the trajectory driver and the config-driven engine,
plus a YAML loader.

Public API
----------
``TrajectoryConfig`` : pydantic model with time span, step and sampling options
``load_config`` : Read a ``TrajectoryConfig`` from a YAML file
"""

from __future__ import annotations

import math
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .errors import QEVConfigError, get_logger

__all__ = ["TrajectoryConfig", "make_config", "load_config"]

logger = get_logger()

_STEP_EPS = 1e-9


class TrajectoryConfig(BaseModel):
    """Configuration for a sampled trajectory."""

    model_config = ConfigDict(extra="forbid")

    t0: float = Field(0.0, description="Start time")
    t1: float = Field(1.0, description="End time")
    dt: float = Field(1e-4, gt=0.0, allow_inf_nan=False, description="Micro-step size")
    points: int = Field(
        1000,
        ge=1,
        description="Target number of samples, clamped to the number of micro-steps",
    )
    verbose: bool = Field(True, description="Log progress and timing notices")
    method: str = Field("lind", description="Registered propagator name")

    @model_validator(mode="after")
    def check_span(self) -> TrajectoryConfig:
        if not self.t1 > self.t0:
            raise ValueError(f"t1 must exceed t0 (got t0={self.t0}, t1={self.t1})")
        return self

    @property
    def n_steps(self) -> int:
        """Total number of micro-steps ``floor(|t1 - t0| / dt)``.

        A ratio within 1e-9 of an integer counts as that integer, so that
        e.g. a span of 5 with ``dt=1e-3`` gives 5000 steps.
        """
        return int(math.floor(abs(self.t1 - self.t0) / self.dt + _STEP_EPS))


def make_config(**kwargs: Any) -> TrajectoryConfig:
    """Build a ``TrajectoryConfig``, converting validation errors to ``QEVConfigError``."""
    try:
        return TrajectoryConfig(**kwargs)
    except ValidationError as e:
        raise QEVConfigError(f"Invalid trajectory configuration: {e}") from e


def load_config(path: str | Path) -> TrajectoryConfig:
    """Load a ``TrajectoryConfig`` from YAML.

    The mapping may sit at the top level or under a ``trajectory`` key.

    Raises
    ------
    QEVConfigError
        If the file is missing, is not valid YAML, or fails validation.

    """
    path = Path(path)
    if not path.exists():
        raise QEVConfigError(f"File not found: {path}")
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise QEVConfigError(f"Failed to parse YAML file {path}: {e}") from e
    if not isinstance(data, dict):
        raise QEVConfigError(f"Expected a mapping in {path}, got {type(data).__name__}")
    if "trajectory" in data:
        data = data["trajectory"] or {}
    logger.debug(f"Loaded trajectory config from {path}")
    return make_config(**data)
