"""Hook execution: registry, matching, runner, dispatch and verdicts."""

from hookgate.hooks.events import HookInvocationInput, build_invocation_input
from hookgate.hooks.manager import HookManager
from hookgate.hooks.matcher import matches
from hookgate.hooks.process import ProcessHandle, ProcessLauncher, ShellProcessLauncher
from hookgate.hooks.registry import HookConfigError, HookRegistry, parse_hooks_config
from hookgate.hooks.runner import HookRunner, parse_hook_response
from hookgate.hooks.session import HookSession
from hookgate.hooks.verdict import aggregate, blocking_message, should_block

__all__ = [
    "HookConfigError",
    "HookInvocationInput",
    "HookManager",
    "HookRegistry",
    "HookRunner",
    "HookSession",
    "ProcessHandle",
    "ProcessLauncher",
    "ShellProcessLauncher",
    "aggregate",
    "blocking_message",
    "build_invocation_input",
    "matches",
    "parse_hook_response",
    "parse_hooks_config",
    "should_block",
]
