"""Tests for hookgate.hooks.session: the scheduler-facing facade."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from hookgate.hooks.manager import HookManager
from hookgate.hooks.registry import parse_hooks_config
from hookgate.hooks.session import HookSession
from hookgate.types.hooks import HookEvent


def _session(config: dict, tmp_path: Path, **kw) -> HookSession:
    return HookSession(HookManager(parse_hooks_config(config)), cwd=tmp_path, **kw)


def _capture(path: Path) -> dict:
    """A hook entry that saves its stdin to *path*."""
    return {"matcher": "*", "hooks": [{"command": f"cat > {path}"}]}


class TestHookSession:
    def test_ids_and_directories(self, tmp_path: Path):
        s = HookSession(HookManager(None), session_id="abc", cwd=tmp_path)
        assert s.session_id == "abc"
        assert s.cwd == str(tmp_path.resolve())
        assert s.project_root == s.cwd

    def test_generated_session_id(self):
        a = HookSession(HookManager(None))
        b = HookSession(HookManager(None))
        assert a.session_id and a.session_id != b.session_id

    def test_explicit_project_root(self, tmp_path: Path):
        sub = tmp_path / "sub"
        sub.mkdir()
        s = HookSession(HookManager(None), cwd=sub, project_root=tmp_path)
        assert s.project_root == str(tmp_path.resolve())

    @pytest.mark.asyncio
    async def test_pre_tool_use_blocks(self, tmp_path: Path):
        s = _session({"PreToolUse": [{"matcher": "Bash", "hooks": [{
            "command": """echo '{"block": true, "message": "Bash tool execution is blocked"}'; exit 2""",
        }]}]}, tmp_path)
        verdict = await s.pre_tool_use("Bash", {"command": "ls"})
        assert verdict.blocked is True
        assert verdict.message == "Bash tool execution is blocked"

        allowed = await s.pre_tool_use("Read", {"file_path": "/tmp/test.txt"})
        assert allowed.blocked is False

    @pytest.mark.asyncio
    async def test_no_hooks_allows(self, tmp_path: Path):
        s = HookSession(HookManager(None), cwd=tmp_path)
        assert (await s.pre_tool_use("Bash")).blocked is False
        assert await s.post_tool_use("Bash") == []

    @pytest.mark.asyncio
    async def test_post_tool_use_sends_result(self, tmp_path: Path):
        captured = tmp_path / "post.json"
        s = _session({"PostToolUse": [_capture(captured)]}, tmp_path, session_id="s-post")
        outcomes = await s.post_tool_use(
            "Write", {"file_path": "a.txt"}, {"success": True, "output": "written"},
        )
        assert len(outcomes) == 1
        received = json.loads(captured.read_text())
        assert received["hookType"] == "PostToolUse"
        assert received["sessionId"] == "s-post"
        assert received["toolName"] == "Write"
        assert received["toolResult"] == {"success": True, "output": "written"}

    @pytest.mark.asyncio
    async def test_user_prompt_submit(self, tmp_path: Path):
        captured = tmp_path / "prompt.json"
        s = _session({"UserPromptSubmit": [_capture(captured)]}, tmp_path)
        verdict = await s.user_prompt_submit("delete everything")
        assert verdict.blocked is False
        assert json.loads(captured.read_text())["userPrompt"] == "delete everything"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method,event", [
        ("session_start", HookEvent.SESSION_START),
        ("session_end", HookEvent.SESSION_END),
        ("stop", HookEvent.STOP),
        ("subagent_stop", HookEvent.SUBAGENT_STOP),
        ("pre_compact", HookEvent.PRE_COMPACT),
        ("notify", HookEvent.NOTIFICATION),
    ])
    async def test_observational_events(self, tmp_path: Path, method: str, event: HookEvent):
        captured = tmp_path / "event.json"
        s = _session({event.value: [_capture(captured)]}, tmp_path)
        outcomes = await getattr(s, method)()
        assert len(outcomes) == 1
        received = json.loads(captured.read_text())
        assert received["hookType"] == event.value
        assert "toolName" not in received
