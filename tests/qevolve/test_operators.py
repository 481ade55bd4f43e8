"""Tests for operator services and superoperator conventions."""

import numpy as np
import pytest
import scipy.sparse
from qevolve.operators import (
    basis,
    comm,
    create,
    dag,
    destroy,
    dissipator,
    expect,
    expm,
    identity_like,
    projector,
    scomm,
    sdiss,
    sigma_minus,
    sigma_x,
    sigma_y,
    sigma_z,
    sqrtm,
    superopl,
    superopr,
    trace,
    unvec,
    vec,
)


def test_vec_stacks_columns():
    rho = np.array([[1, 2], [3, 4]], dtype=complex)
    assert np.allclose(vec(rho), [1, 3, 2, 4])
    assert np.allclose(unvec(vec(rho)), rho)


def test_unvec_rejects_non_square_length():
    with pytest.raises(ValueError):
        unvec(np.ones(3))


def test_left_right_superoperators_match_products(mixed_state):
    a = sigma_x() + 0.5j * sigma_z()
    b = sigma_minus()
    lhs = superopl(a) @ superopr(b) @ vec(mixed_state)
    assert np.allclose(unvec(lhs), a @ mixed_state @ b)


def test_commutator_and_dissipator_superoperators(mixed_state):
    h = 0.5 * sigma_z() + 0.3 * sigma_y()
    a = np.sqrt(0.7) * sigma_minus()
    assert np.allclose(unvec(scomm(h) @ vec(mixed_state)), comm(h, mixed_state))
    assert np.allclose(unvec(sdiss(a) @ vec(mixed_state)), dissipator(a, mixed_state))


def test_dissipator_is_traceless(mixed_state):
    a = sigma_minus() + 0.2 * sigma_x()
    assert abs(trace(dissipator(a, mixed_state))) < 1e-14


def test_sparse_inputs_stay_sparse():
    h = scipy.sparse.csr_matrix(sigma_x())
    u = expm(-1j * 0.1 * h)
    assert scipy.sparse.issparse(u)
    assert scipy.sparse.issparse(superopl(h))
    assert scipy.sparse.issparse(identity_like(h))
    assert np.allclose(u.toarray(), expm(-1j * 0.1 * sigma_x()))


def test_sqrtm_of_diagonal():
    m = np.diag([4.0, 9.0]).astype(complex)
    assert np.allclose(sqrtm(m), np.diag([2.0, 3.0]))


def test_ladder_operators():
    a = destroy(4)
    assert np.allclose(create(4), dag(a))
    n = create(4) @ a
    assert np.allclose(np.diag(n).real, [0, 1, 2, 3])


def test_expect_on_ket_and_density_matrix():
    p1 = expect(projector(2, 1))
    psi = (basis(2, 0) + basis(2, 1)) / np.sqrt(2)
    assert p1(psi) == pytest.approx(0.5)
    assert p1(projector(2, 1)) == pytest.approx(1.0)


def test_sqrtm_of_singular_hermitian_matrix():
    m = np.array([[1.0, 1.0], [1.0, 1.0]], dtype=complex)
    root = sqrtm(m)
    assert np.allclose(root @ root, m)
    assert np.allclose(root, root.conj().T)
    assert np.all(np.isfinite(root))


def test_sqrtm_keeps_sparse_format():
    m = scipy.sparse.csr_matrix(np.diag([1.0, 0.25]).astype(complex))
    root = sqrtm(m)
    assert scipy.sparse.issparse(root)
    assert np.allclose(root.toarray(), np.diag([1.0, 0.5]))
