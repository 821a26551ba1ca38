"""Configuration types for hookgate."""

from __future__ import annotations

from dataclasses import dataclass

from hookgate.types.hooks import DEFAULT_HOOK_TIMEOUT_MS


@dataclass(frozen=True, slots=True)
class HookSettings:
    """Runtime settings threaded into the dispatcher and runner.

    ``debug`` replaces any process-wide flag: it only raises the verbosity
    of the execution traces this package logs.
    """

    debug: bool = False
    default_timeout_ms: int = DEFAULT_HOOK_TIMEOUT_MS
    session_env_var: str = "HOOKGATE_SESSION_ID"
    project_root_env_var: str = "HOOKGATE_PROJECT_ROOT"
    kill_grace_sec: float = 5.0  # How long to wait for a killed process to be reaped
