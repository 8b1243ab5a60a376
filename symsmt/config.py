# coding: utf-8
"""Solver configuration for constraint stores."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

_TRUE_STRINGS = ("true", "1", "yes")


def _env_flag(env: Mapping[str, str], key: str, default: bool) -> bool:
    if key not in env:
        return default
    return env[key].lower() in _TRUE_STRINGS


def _debug_enabled() -> bool:
    return _env_flag(os.environ, "SYMSMT_DEBUG", False)


@dataclass
class SolverConfig:
    """Configuration of the z3 solver behind a constraint store."""

    # z3.SolverFor(logic) when set, otherwise a general-purpose z3.Solver
    logic: Optional[str] = None
    # per-check limit in milliseconds; an exhausted limit is reported as unknown
    timeout_ms: Optional[int] = None
    # Real variables share the integer sort unless this is switched off
    reals_as_ints: bool = True
    # ask z3 to shrink unsat cores (still not guaranteed minimal)
    minimize_core: bool = False
    label_prefix: str = "constraint"
    # log the SMT-LIB text of every speculative query at DEBUG level
    trace_queries: bool = field(default_factory=_debug_enabled)

    def __post_init__(self) -> None:
        if self.timeout_ms is not None and self.timeout_ms <= 0:
            raise ValueError(f"timeout_ms must be positive, got {self.timeout_ms}")
        if not self.label_prefix:
            raise ValueError("label_prefix must be a non-empty string")

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "SolverConfig":
        """Build a configuration from SYMSMT_* environment variables.

        Recognised keys: SYMSMT_LOGIC, SYMSMT_TIMEOUT_MS, SYMSMT_REALS_AS_INTS,
        SYMSMT_MINIMIZE_CORE and SYMSMT_DEBUG.
        """
        env = os.environ if env is None else env
        timeout = env.get("SYMSMT_TIMEOUT_MS")
        return cls(
            logic=env.get("SYMSMT_LOGIC") or None,
            timeout_ms=int(timeout) if timeout else None,
            reals_as_ints=_env_flag(env, "SYMSMT_REALS_AS_INTS", True),
            minimize_core=_env_flag(env, "SYMSMT_MINIMIZE_CORE", False),
            trace_queries=_env_flag(env, "SYMSMT_DEBUG", False),
        )
