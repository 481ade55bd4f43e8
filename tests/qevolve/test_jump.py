"""Tests for the jump-no-jump Lindblad propagator."""

import numpy as np
import pytest
import scipy.sparse
from qevolve.core.errors import QEVPropagatorError
from qevolve.operators import sigma_minus, sigma_x, sigma_z, unvec, vec
from qevolve.propagator import JumpNoJumpPropagator, ham, lind, no_jump_operator, slind


def test_lind_without_jumps_equals_ham(qubit_hamiltonian, mixed_state):
    dt = 1e-2
    step = lind(dt, qubit_hamiltonian)
    assert isinstance(step, JumpNoJumpPropagator)
    assert step.no_jump is None
    expected = ham(dt, qubit_hamiltonian)(0.0, mixed_state)
    assert np.allclose(step(0.0, mixed_state), expected, rtol=1e-10, atol=1e-14)


def test_no_jump_operator_squares_to_argument(decay_jumps):
    dt = 1e-2
    n = no_jump_operator(dt, decay_jumps)
    rates = sum(a.conj().T @ a for a in decay_jumps)
    assert np.allclose(n @ n, np.eye(2) - dt * rates)
    assert np.allclose(n, n.conj().T)


def test_no_jump_operator_rejects_large_time_step():
    with pytest.raises(QEVPropagatorError, match="too large"):
        no_jump_operator(2.0, [sigma_minus()])


def test_lind_rejects_large_time_step(qubit_hamiltonian):
    with pytest.raises(QEVPropagatorError):
        lind(0.5, qubit_hamiltonian, [3.0 * sigma_minus()])


def test_lind_boundary_time_step_is_accepted():
    # I - dt A^dag A is singular but still positive semi-definite
    step = lind(1.0, np.zeros((2, 2), dtype=complex), [sigma_minus()])
    rho = step(0.0, np.diag([0.0, 1.0]).astype(complex))
    assert np.all(np.isfinite(rho))


def test_lind_single_step_pure_decay(excited):
    dt = 1e-3
    step = lind(dt, np.zeros((2, 2), dtype=complex), [sigma_minus()])
    rho = step(0.0, excited)
    assert rho[1, 1].real == pytest.approx(1.0 - dt)
    assert rho[0, 0].real == pytest.approx(dt)


def test_lind_preserves_trace_and_hermiticity(qubit_hamiltonian, decay_jumps, mixed_state):
    dt = 1e-3
    step = lind(dt, qubit_hamiltonian, decay_jumps)
    rho = mixed_state
    for k in range(100):
        rho = step(k * dt, rho)
    assert abs(np.trace(rho) - 1.0) < dt
    assert np.allclose(rho, rho.conj().T, atol=1e-12)


def test_lind_is_first_order_close_to_slind(qubit_hamiltonian, decay_jumps, mixed_state):
    dt = 1e-3
    approx = lind(dt, qubit_hamiltonian, decay_jumps)(0.0, mixed_state)
    exact = unvec(slind(dt, qubit_hamiltonian, decay_jumps)(0.0, vec(mixed_state)))
    assert np.max(np.abs(approx - exact)) < 10 * dt**2


def test_lind_keeps_jump_order(decay_jumps):
    step = lind(1e-3, sigma_z(), decay_jumps)
    assert len(step.jumps) == len(decay_jumps)
    assert all(a is b for a, b in zip(step.jumps, decay_jumps))


def test_lind_time_dependent_hamiltonian(mixed_state):
    def h(t):
        return np.sin(t) * sigma_x()

    dt = 1e-3
    step = lind(dt, h, [0.1 * sigma_minus()])
    expected = lind(dt, h(0.7), [0.1 * sigma_minus()])(0.7, mixed_state)
    assert np.allclose(step(0.7, mixed_state), expected)


def test_lind_accepts_sparse_operators(mixed_state):
    h = scipy.sparse.csr_matrix(sigma_z())
    a = scipy.sparse.csr_matrix(sigma_minus())
    rho = lind(1e-3, h, [a])(0.0, mixed_state)
    dense = lind(1e-3, sigma_z(), [sigma_minus()])(0.0, mixed_state)
    assert np.allclose(np.asarray(rho), dense)
