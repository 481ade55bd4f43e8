"""Pytest configuration for qevolve tests."""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add qevolve to path
# This file is in tests/qevolve/
# Root is ../../
packages_dir = Path(__file__).parents[2] / "packages"
sys.path.insert(0, str(packages_dir / "qevolve"))

from qevolve.operators import projector, sigma_minus, sigma_x, sigma_z  # noqa: E402


@pytest.fixture
def qubit_hamiltonian():
    """Driven, detuned qubit."""
    return 0.5 * sigma_z() + 0.3 * sigma_x()


@pytest.fixture
def decay_jumps():
    """Decay at rate 0.4 plus pure dephasing at rate 0.1."""
    return [np.sqrt(0.4) * sigma_minus(), np.sqrt(0.1 / 2) * sigma_z()]


@pytest.fixture
def mixed_state():
    """Generic full-rank qubit density matrix."""
    rho = np.array([[0.7, 0.2 - 0.1j], [0.2 + 0.1j, 0.3]], dtype=complex)
    return rho


@pytest.fixture
def excited():
    return projector(2, 1)
