"""Contract tests for the propagator registry."""

import pytest
from qevolve.core.errors import QEVConfigError
from qevolve.core.registry import (
    get_propagator,
    get_propagator_meta,
    list_propagators,
    register_propagator,
)
from qevolve.propagator import lind, slind


def test_builtin_capabilities():
    assert get_propagator_meta("lind") == {"jumps": True, "ket": False, "vectorized": False}
    assert get_propagator_meta("slind")["vectorized"] is True
    assert get_propagator_meta("ham")["ket"] is True
    assert get_propagator_meta("sham") == {"jumps": False, "ket": False, "vectorized": True}


def test_lookup_is_case_insensitive():
    assert get_propagator("LIND") is lind
    assert get_propagator("Slind") is slind


def test_meta_is_a_copy():
    meta = get_propagator_meta("lind")
    meta["jumps"] = False
    assert get_propagator_meta("lind")["jumps"] is True


def test_unknown_method_lists_available():
    with pytest.raises(QEVConfigError, match="lind_rk4"):
        get_propagator("euler")


def test_duplicate_registration_rejected():
    with pytest.raises(QEVConfigError, match="already registered"):

        @register_propagator("lind")
        def other(dt, H):
            return None


def test_custom_registration():
    @register_propagator("test_identity")
    def identity(dt, H):
        return lambda t, state: state

    assert "test_identity" in list_propagators()
    assert get_propagator("test_identity") is identity
    assert get_propagator_meta("test_identity") == {
        "jumps": False,
        "ket": False,
        "vectorized": False,
    }
