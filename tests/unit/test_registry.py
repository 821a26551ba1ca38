"""Tests for hookgate.hooks.registry: the registry and config parsing."""

from __future__ import annotations

import pytest

from hookgate.hooks.registry import (
    HookConfigError,
    HookRegistry,
    parse_hook_command,
    parse_hook_rule,
    parse_hooks_config,
)
from hookgate.types.hooks import DEFAULT_HOOK_TIMEOUT_MS, HookCommand, HookEvent, HookRule

SAMPLE = {
    "PreToolUse": [
        {"matcher": "Bash", "hooks": [{"type": "command", "command": "./block.sh"}]},
        {"matcher": "*", "hooks": [
            {"type": "command", "command": "./log.sh", "timeout": 5000},
            {"type": "command", "command": "./audit.sh"},
        ]},
    ],
    "PostToolUse": [
        {"matcher": "Write|Edit", "hooks": [{"type": "command", "command": "./observe.sh"}]},
    ],
}


class TestHookRegistry:
    def test_rules_for(self):
        rule = HookRule(matcher="*", commands=(HookCommand(command="true"),))
        registry = HookRegistry({HookEvent.STOP: [rule]})
        assert registry.rules_for(HookEvent.STOP) == (rule,)

    def test_missing_event_is_empty(self):
        registry = HookRegistry({})
        assert registry.rules_for(HookEvent.PRE_TOOL_USE) == ()
        assert registry.is_empty()
        assert len(registry) == 0

    def test_none_rules(self):
        assert HookRegistry(None).is_empty()

    def test_empty_lists_are_dropped(self):
        registry = HookRegistry({HookEvent.STOP: []})
        assert registry.is_empty()
        assert registry.events() == ()

    def test_string_event_keys(self):
        rule = HookRule(matcher="*")
        registry = HookRegistry({"SessionStart": [rule]})
        assert registry.rules_for(HookEvent.SESSION_START) == (rule,)

    def test_is_read_only(self):
        source = [HookRule(matcher="*")]
        registry = HookRegistry({HookEvent.STOP: source})
        source.append(HookRule(matcher="Bash"))
        assert len(registry.rules_for(HookEvent.STOP)) == 1
        with pytest.raises(TypeError):
            registry._rules[HookEvent.STOP] = ()  # type: ignore[index]

    def test_iteration_follows_event_order(self):
        registry = parse_hooks_config(SAMPLE)
        assert [e for e, _ in registry] == [HookEvent.PRE_TOOL_USE, HookEvent.POST_TOOL_USE]
        assert len(registry) == 3
        assert "PreToolUse=2" in repr(registry)


class TestParseHooksConfig:
    def test_sample(self):
        registry = parse_hooks_config(SAMPLE)
        pre = registry.rules_for(HookEvent.PRE_TOOL_USE)
        assert [r.matcher for r in pre] == ["Bash", "*"]
        assert pre[1].commands == (
            HookCommand(command="./log.sh", timeout_ms=5000),
            HookCommand(command="./audit.sh", timeout_ms=DEFAULT_HOOK_TIMEOUT_MS),
        )

    def test_wrapped_in_hooks_key(self):
        registry = parse_hooks_config({"hooks": SAMPLE, "other": 1})
        assert len(registry.rules_for(HookEvent.POST_TOOL_USE)) == 1

    def test_default_timeout_override(self):
        registry = parse_hooks_config(SAMPLE, default_timeout_ms=1234)
        assert registry.rules_for(HookEvent.PRE_TOOL_USE)[0].commands[0].timeout_ms == 1234

    def test_unknown_event(self):
        with pytest.raises(HookConfigError, match="Unknown hook event"):
            parse_hooks_config({"BeforeEverything": []})

    def test_rules_not_a_list(self):
        with pytest.raises(HookConfigError):
            parse_hooks_config({"Stop": {"matcher": "*"}})

    def test_not_a_mapping(self):
        with pytest.raises(HookConfigError):
            parse_hooks_config(["PreToolUse"])  # type: ignore[arg-type]

    def test_config_error_is_value_error(self):
        assert issubclass(HookConfigError, ValueError)


class TestParseRuleAndCommand:
    def test_missing_matcher_defaults_to_wildcard(self):
        assert parse_hook_rule({"hooks": []}).matcher == "*"
        assert parse_hook_rule({"matcher": "", "hooks": []}).matcher == "*"

    def test_bad_matcher_type(self):
        with pytest.raises(HookConfigError):
            parse_hook_rule({"matcher": 3, "hooks": []})

    def test_hooks_not_a_list(self):
        with pytest.raises(HookConfigError):
            parse_hook_rule({"matcher": "*", "hooks": "echo"})

    def test_malformed_regex_is_accepted(self):
        # Bad patterns are handled at match time, not at load time
        assert parse_hook_rule({"matcher": "Bash(", "hooks": []}).matcher == "Bash("

    def test_type_defaults_to_command(self):
        assert parse_hook_command({"command": "true"}).type == "command"

    def test_unsupported_type(self):
        with pytest.raises(HookConfigError, match="Unsupported hook type"):
            parse_hook_command({"type": "prompt", "command": "hi"})

    @pytest.mark.parametrize("raw", [{}, {"command": ""}, {"command": "   "}, {"command": 5}])
    def test_missing_command(self, raw):
        with pytest.raises(HookConfigError):
            parse_hook_command(raw)

    @pytest.mark.parametrize("timeout", [0, -5, 1.5, "1000", True])
    def test_bad_timeout(self, timeout):
        with pytest.raises(HookConfigError):
            parse_hook_command({"command": "true", "timeout": timeout})
