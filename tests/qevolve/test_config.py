"""Tests for TrajectoryConfig validation and YAML loading."""

import pytest
from qevolve.core.config import TrajectoryConfig, load_config, make_config
from qevolve.core.errors import QEVConfigError


def test_defaults():
    cfg = TrajectoryConfig()
    assert cfg.t0 == 0.0
    assert cfg.t1 == 1.0
    assert cfg.dt == 1e-4
    assert cfg.points == 1000
    assert cfg.verbose is True
    assert cfg.method == "lind"


def test_step_count_tolerates_rounding():
    # 5 / 1e-3 is not exactly 5000 in floating point
    assert make_config(t1=5.0, dt=1e-3).n_steps == 5000
    assert make_config(t0=1.0, t1=2.0, dt=0.3).n_steps == 3


@pytest.mark.parametrize(
    "kwargs",
    [
        {"dt": 0.0},
        {"dt": -1.0},
        {"dt": float("inf")},
        {"t0": 1.0, "t1": 1.0},
        {"t0": 2.0, "t1": 1.0},
        {"points": 0},
        {"unknown": 1},
    ],
)
def test_invalid_values_rejected(kwargs):
    with pytest.raises(QEVConfigError):
        make_config(**kwargs)


def test_load_top_level_mapping(tmp_path):
    path = tmp_path / "run.yaml"
    path.write_text("t1: 2.0\ndt: 0.01\npoints: 50\nmethod: slind\n")
    cfg = load_config(path)
    assert cfg.t1 == 2.0
    assert cfg.points == 50
    assert cfg.method == "slind"
    assert cfg.n_steps == 200


def test_load_nested_trajectory_key(tmp_path):
    path = tmp_path / "run.yaml"
    path.write_text("trajectory:\n  dt: 0.5\n  verbose: false\n")
    cfg = load_config(str(path))
    assert cfg.dt == 0.5
    assert cfg.verbose is False


def test_load_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_config(path) == TrajectoryConfig()


def test_load_missing_file(tmp_path):
    with pytest.raises(QEVConfigError, match="not found"):
        load_config(tmp_path / "missing.yaml")


def test_load_non_mapping(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n")
    with pytest.raises(QEVConfigError):
        load_config(path)


def test_load_malformed_yaml(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("dt: [0.1\n")
    with pytest.raises(QEVConfigError):
        load_config(path)


def test_load_invalid_values(tmp_path):
    path = tmp_path / "bad_dt.yaml"
    path.write_text("dt: -0.1\n")
    with pytest.raises(QEVConfigError):
        load_config(path)
