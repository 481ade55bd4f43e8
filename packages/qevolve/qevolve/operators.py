"""qevolve: Operator Services
---------------------------------------------------------
Linear-algebra helpers over NumPy dense arrays and SciPy sparse matrices used
by the propagator factories: adjoint, commutators, dissipators, matrix
exponential and square root, column-major vectorization and the
left/right-multiplication superoperators built on it.

Vectorization Convention
------------------------
``vec`` stacks the columns of a density matrix, so that
``vec(a @ rho @ b) == kron(b.T, a) @ vec(rho)``. All superoperators in this
module follow that convention; ``unvec`` is its inverse.

Public API
----------
``dag``, ``comm``, ``anticomm``, ``dissipator`` : Operator algebra
``expm``, ``sqrtm``, ``identity_like``, ``trace`` : Matrix functions
``vec``, ``unvec`` : Vectorization
``superopl``, ``superopr``, ``scomm``, ``sdiss`` : Superoperators
``sigma_x``, ``sigma_y``, ``sigma_z``, ``sigma_minus``, ``sigma_plus`` : Pauli operators
``destroy``, ``create``, ``basis``, ``projector``, ``ket2dm``, ``expect`` : Helpers
"""

from collections.abc import Callable
from typing import Any

import numpy as np
import scipy.linalg
import scipy.sparse

__all__ = [
    "is_sparse",
    "to_dense",
    "dag",
    "comm",
    "anticomm",
    "dissipator",
    "expm",
    "sqrtm",
    "identity_like",
    "trace",
    "vec",
    "unvec",
    "superopl",
    "superopr",
    "scomm",
    "sdiss",
    "sigma_x",
    "sigma_y",
    "sigma_z",
    "sigma_minus",
    "sigma_plus",
    "destroy",
    "create",
    "basis",
    "projector",
    "ket2dm",
    "expect",
]


def is_sparse(a: Any) -> bool:
    return scipy.sparse.issparse(a)


def to_dense(a: Any) -> np.ndarray:
    if is_sparse(a):
        return a.toarray()
    return np.asarray(a)


def _like(result: np.ndarray, template: Any) -> Any:
    """Return ``result`` as CSR when ``template`` is sparse, dense otherwise."""
    if is_sparse(template):
        return scipy.sparse.csr_matrix(result)
    return result


def _kron(a: Any, b: Any) -> Any:
    if is_sparse(a) or is_sparse(b):
        return scipy.sparse.kron(a, b, format="csr")
    return np.kron(a, b)


# -----------------------------------------------------------------------------
# Operator algebra
# -----------------------------------------------------------------------------


def dag(a: Any) -> Any:
    """Conjugate transpose."""
    return a.conj().T


def comm(a: Any, b: Any) -> Any:
    return a @ b - b @ a


def anticomm(a: Any, b: Any) -> Any:
    return a @ b + b @ a


def dissipator(a: Any, rho: Any) -> Any:
    """Lindblad dissipator ``a rho a^dag - 1/2 {a^dag a, rho}``."""
    ad = dag(a)
    return a @ rho @ ad - 0.5 * anticomm(ad @ a, rho)


# -----------------------------------------------------------------------------
# Matrix functions
# -----------------------------------------------------------------------------


def expm(a: Any) -> Any:
    """Matrix exponential, evaluated densely.

    Sparse inputs return a CSR matrix, dense inputs a dense array.
    """
    return _like(scipy.linalg.expm(to_dense(a)), a)


def sqrtm(a: Any) -> Any:
    """Square root of a Hermitian positive semi-definite matrix.

    Computed densely from the eigendecomposition of the Hermitian part;
    round-off negative eigenvalues are clipped to zero, so singular arguments
    are handled. Sparse inputs return a CSR matrix.
    """
    m = to_dense(a)
    w, v = np.linalg.eigh(0.5 * (m + m.conj().T))
    root = (v * np.sqrt(np.clip(w, 0.0, None))) @ v.conj().T
    return _like(root, a)


def identity_like(a: Any) -> Any:
    n = a.shape[0]
    if is_sparse(a):
        return scipy.sparse.identity(n, dtype=complex, format="csr")
    return np.eye(n, dtype=complex)


def trace(a: Any) -> complex:
    if is_sparse(a):
        return complex(a.diagonal().sum())
    return complex(np.trace(a))


# -----------------------------------------------------------------------------
# Vectorization and superoperators
# -----------------------------------------------------------------------------


def vec(rho: Any) -> np.ndarray:
    """Stack the columns of ``rho`` into a vector of length N^2."""
    return np.asarray(to_dense(rho)).reshape(-1, order="F")


def unvec(v: Any) -> np.ndarray:
    """Inverse of :func:`vec`."""
    v = np.asarray(to_dense(v)).reshape(-1)
    n = int(round(np.sqrt(v.size)))
    if n * n != v.size:
        raise ValueError(f"Vector of length {v.size} is not a vectorized square matrix")
    return v.reshape((n, n), order="F")


def superopl(a: Any) -> Any:
    """Superoperator for left multiplication ``rho -> a rho``."""
    return _kron(identity_like(a), a)


def superopr(a: Any) -> Any:
    """Superoperator for right multiplication ``rho -> rho a``."""
    return _kron(a.T, identity_like(a))


def scomm(h: Any) -> Any:
    """Superoperator for the commutator ``rho -> [h, rho]``."""
    return superopl(h) - superopr(h)


def sdiss(a: Any) -> Any:
    """Superoperator for the dissipator ``rho -> D[a](rho)``."""
    ad = dag(a)
    ada = ad @ a
    return superopl(a) @ superopr(ad) - 0.5 * (superopl(ada) + superopr(ada))


# -----------------------------------------------------------------------------
# Elementary operators and states
# -----------------------------------------------------------------------------


def sigma_x() -> np.ndarray:
    return np.array([[0, 1], [1, 0]], dtype=complex)


def sigma_y() -> np.ndarray:
    return np.array([[0, -1j], [1j, 0]], dtype=complex)


def sigma_z() -> np.ndarray:
    return np.array([[1, 0], [0, -1]], dtype=complex)


def sigma_minus() -> np.ndarray:
    """Lowering operator ``|0><1|``; ``|1>`` is the excited state."""
    return np.array([[0, 1], [0, 0]], dtype=complex)


def sigma_plus() -> np.ndarray:
    return np.array([[0, 0], [1, 0]], dtype=complex)


def destroy(n: int) -> np.ndarray:
    """Truncated annihilation operator on an ``n``-level oscillator."""
    return np.diag(np.sqrt(np.arange(1, n, dtype=float)), k=1).astype(complex)


def create(n: int) -> np.ndarray:
    return dag(destroy(n))


def basis(n: int, k: int) -> np.ndarray:
    psi = np.zeros(n, dtype=complex)
    psi[k] = 1.0
    return psi


def projector(n: int, k: int) -> np.ndarray:
    return ket2dm(basis(n, k))


def ket2dm(psi: Any) -> np.ndarray:
    psi = np.asarray(psi).reshape(-1)
    return np.outer(psi, psi.conj())


def expect(op: Any) -> Callable[[Any], float]:
    """Return an observable function ``state -> <op>``.

    Kets give ``<psi|op|psi>``, density matrices ``tr(op rho)``. The real part
    is returned, so ``op`` is expected to be Hermitian.
    """

    def _expect(state: Any) -> float:
        state = to_dense(state)
        if state.ndim == 1:
            return float(np.real(np.vdot(state, op @ state)))
        return float(np.real(trace(op @ state)))

    return _expect
