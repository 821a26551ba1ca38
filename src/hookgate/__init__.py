"""hookgate -- lifecycle hooks for agent tool pipelines.

Usage:
    from hookgate import HookManager, HookSession, load_hook_registry

    session = HookSession(HookManager(load_hook_registry()), session_id="abc123")
    verdict = await session.pre_tool_use("Bash", {"command": "rm -rf build"})
    if verdict.blocked:
        print(f"Blocked: {verdict.message}")
"""

from hookgate.core.config import load_hook_registry, load_settings
from hookgate.hooks.events import HookInvocationInput, build_invocation_input
from hookgate.hooks.manager import HookManager
from hookgate.hooks.matcher import matches
from hookgate.hooks.registry import HookConfigError, HookRegistry, parse_hooks_config
from hookgate.hooks.runner import HookRunner
from hookgate.hooks.session import HookSession
from hookgate.hooks.verdict import aggregate
from hookgate.types.config import HookSettings
from hookgate.types.hooks import (
    BLOCKING_EXIT_CODE,
    DEFAULT_HOOK_TIMEOUT_MS,
    HookCommand,
    HookEvent,
    HookOutcome,
    HookResponse,
    HookRule,
    Verdict,
)

__version__ = "0.1.0"

__all__ = [
    # Dispatch
    "HookManager",
    "HookRunner",
    "HookSession",
    "aggregate",
    "matches",
    # Configuration
    "HookConfigError",
    "HookRegistry",
    "HookSettings",
    "load_hook_registry",
    "load_settings",
    "parse_hooks_config",
    # Types
    "BLOCKING_EXIT_CODE",
    "DEFAULT_HOOK_TIMEOUT_MS",
    "HookCommand",
    "HookEvent",
    "HookInvocationInput",
    "HookOutcome",
    "HookResponse",
    "HookRule",
    "Verdict",
    "build_invocation_input",
]
