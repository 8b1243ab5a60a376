"""Tests for SolverConfig"""

import pytest

from symsmt.config import SolverConfig
from symsmt.expr import Int, Real
from symsmt.smt import ConstraintStore, issatisfiable


def test_defaults():
    config = SolverConfig()
    assert config.logic is None
    assert config.timeout_ms is None
    assert config.reals_as_ints
    assert not config.minimize_core
    assert config.label_prefix == "constraint"


def test_validation():
    with pytest.raises(ValueError):
        SolverConfig(timeout_ms=0)
    with pytest.raises(ValueError):
        SolverConfig(label_prefix="")


def test_from_env():
    env = {
        "SYMSMT_LOGIC": "QF_NIA",
        "SYMSMT_TIMEOUT_MS": "2500",
        "SYMSMT_REALS_AS_INTS": "false",
        "SYMSMT_MINIMIZE_CORE": "yes",
        "SYMSMT_DEBUG": "1",
    }
    config = SolverConfig.from_env(env)
    assert config.logic == "QF_NIA"
    assert config.timeout_ms == 2500
    assert not config.reals_as_ints
    assert config.minimize_core
    assert config.trace_queries


def test_from_empty_env():
    config = SolverConfig.from_env({})
    assert config == SolverConfig(trace_queries=False)


def test_debug_flag_default(monkeypatch):
    monkeypatch.setenv("SYMSMT_DEBUG", "true")
    assert SolverConfig().trace_queries
    monkeypatch.setenv("SYMSMT_DEBUG", "0")
    assert not SolverConfig().trace_queries


def test_real_sort():
    x = Real("x")
    as_ints = ConstraintStore([x > 0, x < 1])
    as_reals = ConstraintStore([x > 0, x < 1], SolverConfig(reals_as_ints=False))
    assert issatisfiable(x > 0, as_ints) is False
    assert issatisfiable(x > 0, as_reals) is True


def test_custom_label_prefix():
    x = Int("x")
    cs = ConstraintStore([x > 0], SolverConfig(label_prefix="bg"))
    assert str(cs.labels[0]).startswith("bg_1")


def test_trace_queries_logs_smtlib(caplog):
    x = Int("x")
    cs = ConstraintStore([x > 0], SolverConfig(trace_queries=True))
    with caplog.at_level("DEBUG", logger="symsmt.smt.constraints"):
        issatisfiable(x > 1, cs)
    assert "Query:" in caplog.text
    assert "assert" in caplog.text
