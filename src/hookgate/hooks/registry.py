"""Hook registry: the read-only event -> rules mapping, and its parser."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any

from hookgate.types.hooks import (
    DEFAULT_HOOK_TIMEOUT_MS,
    WILDCARD_MATCHER,
    HookCommand,
    HookEvent,
    HookRule,
)


class HookConfigError(ValueError):
    """Raised when a hooks mapping cannot be turned into a registry."""


class HookRegistry:
    """Immutable mapping from lifecycle event to its ordered hook rules.

    Built once per session and shared by concurrent dispatches without
    locking; nothing here mutates after ``__init__``.
    """

    __slots__ = ("_rules",)

    def __init__(self, rules: Mapping[HookEvent, Any] | None = None) -> None:
        frozen = {
            HookEvent(event): tuple(event_rules)
            for event, event_rules in (rules or {}).items()
            if event_rules
        }
        self._rules: Mapping[HookEvent, tuple[HookRule, ...]] = MappingProxyType(frozen)

    def rules_for(self, event: HookEvent) -> tuple[HookRule, ...]:
        """Rules registered for *event*, in configuration order."""
        return self._rules.get(event, ())

    def events(self) -> tuple[HookEvent, ...]:
        """Events that have at least one rule."""
        return tuple(e for e in HookEvent if e in self._rules)

    def is_empty(self) -> bool:
        return not self._rules

    def __iter__(self) -> Iterator[tuple[HookEvent, tuple[HookRule, ...]]]:
        for event in self.events():
            yield event, self._rules[event]

    def __len__(self) -> int:
        return sum(len(r) for r in self._rules.values())

    def __repr__(self) -> str:
        counts = ", ".join(f"{e.value}={len(r)}" for e, r in self)
        return f"HookRegistry({counts})"


def parse_hook_command(
    raw: Any, *, default_timeout_ms: int = DEFAULT_HOOK_TIMEOUT_MS,
) -> HookCommand:
    """Parse one ``{"type": "command", "command": ..., "timeout": ms}`` entry."""
    if not isinstance(raw, dict):
        raise HookConfigError(f"Hook entry must be an object, got {type(raw).__name__}")

    hook_type = raw.get("type", "command")
    if hook_type != "command":
        raise HookConfigError(f"Unsupported hook type: {hook_type!r}")

    command = raw.get("command")
    if not isinstance(command, str) or not command.strip():
        raise HookConfigError("Hook entry is missing a non-empty 'command'")

    timeout = raw.get("timeout", default_timeout_ms)
    if isinstance(timeout, bool) or not isinstance(timeout, int) or timeout <= 0:
        raise HookConfigError(f"Hook timeout must be a positive integer (ms), got {timeout!r}")

    return HookCommand(command=command, timeout_ms=timeout, type=hook_type)


def parse_hook_rule(
    raw: Any, *, default_timeout_ms: int = DEFAULT_HOOK_TIMEOUT_MS,
) -> HookRule:
    """Parse one ``{"matcher": ..., "hooks": [...]}`` entry."""
    if not isinstance(raw, dict):
        raise HookConfigError(f"Hook rule must be an object, got {type(raw).__name__}")

    matcher = raw.get("matcher", WILDCARD_MATCHER)
    if not isinstance(matcher, str):
        raise HookConfigError(f"Hook matcher must be a string, got {matcher!r}")
    # An empty matcher means "all tools" in settings files
    matcher = matcher or WILDCARD_MATCHER

    hooks = raw.get("hooks", [])
    if not isinstance(hooks, list):
        raise HookConfigError("Hook rule 'hooks' must be a list")

    return HookRule(
        matcher=matcher,
        commands=tuple(parse_hook_command(h, default_timeout_ms=default_timeout_ms) for h in hooks),
    )


def parse_hooks_config(
    data: Mapping[str, Any], *, default_timeout_ms: int = DEFAULT_HOOK_TIMEOUT_MS,
) -> HookRegistry:
    """Build a registry from a settings-style hooks mapping.

    Accepts either the mapping itself or one wrapped in a top-level
    ``"hooks"`` key::

        {"PreToolUse": [{"matcher": "Bash", "hooks": [{"type": "command",
                                                       "command": "./guard.sh"}]}]}
    """
    if not isinstance(data, Mapping):
        raise HookConfigError("Hooks configuration must be an object")
    if "hooks" in data and isinstance(data["hooks"], Mapping):
        data = data["hooks"]

    rules: dict[HookEvent, list[HookRule]] = {}
    for name, raw_rules in data.items():
        try:
            event = HookEvent(name)
        except ValueError:
            raise HookConfigError(f"Unknown hook event: {name!r}") from None
        if not isinstance(raw_rules, list):
            raise HookConfigError(f"Rules for {name} must be a list")
        rules[event] = [
            parse_hook_rule(r, default_timeout_ms=default_timeout_ms) for r in raw_rules
        ]
    return HookRegistry(rules)
