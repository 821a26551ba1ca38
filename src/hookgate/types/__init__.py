"""Type definitions for hookgate."""

from hookgate.types.config import HookSettings
from hookgate.types.hooks import (
    BLOCKING_EXIT_CODE,
    DEFAULT_HOOK_TIMEOUT_MS,
    SUCCESS_EXIT_CODE,
    WILDCARD_MATCHER,
    HookCommand,
    HookEvent,
    HookOutcome,
    HookResponse,
    HookRule,
    RunState,
    Verdict,
)

__all__ = [
    "BLOCKING_EXIT_CODE",
    "DEFAULT_HOOK_TIMEOUT_MS",
    "SUCCESS_EXIT_CODE",
    "WILDCARD_MATCHER",
    "HookCommand",
    "HookEvent",
    "HookOutcome",
    "HookResponse",
    "HookRule",
    "HookSettings",
    "RunState",
    "Verdict",
]
