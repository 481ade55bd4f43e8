"""Tests for TrajectoryResult persistence."""

import numpy as np
import pytest
from qevolve.core.errors import QEVError
from qevolve.result import TrajectoryResult


def test_save_and_load(tmp_path):
    times = np.linspace(0.0, 1.0, 5)
    result = TrajectoryResult(
        times=times,
        values=(np.exp(-times), np.ones((5, 2), dtype=complex)),
        meta={"method": "slind", "dt": 0.25},
    )
    path = tmp_path / "out" / "decay.npz"
    result.save(path)
    assert path.exists()

    loaded = TrajectoryResult.load(path)
    assert len(loaded) == 5
    assert np.array_equal(loaded.times, times)
    assert np.array_equal(loaded.observable(0), np.exp(-times))
    assert loaded.observable(1).dtype == np.complex128
    assert loaded.meta == {"method": "slind", "dt": 0.25}


def test_as_tuple_matches_trajectory_layout():
    times = np.arange(3.0)
    a, b = np.zeros(3), np.ones(3)
    result = TrajectoryResult(times=times, values=(a, b))
    ts, va, vb = result.as_tuple()
    assert ts is times and va is a and vb is b


def test_load_missing_file(tmp_path):
    with pytest.raises(QEVError, match="not found"):
        TrajectoryResult.load(tmp_path / "nope.npz")
