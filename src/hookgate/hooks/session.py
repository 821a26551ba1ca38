"""Per-session facade a tool scheduler calls around each lifecycle moment."""

from __future__ import annotations

import uuid
from pathlib import Path
from typing import Any

from hookgate.hooks.events import build_invocation_input
from hookgate.hooks.manager import HookManager
from hookgate.hooks.verdict import aggregate
from hookgate.types.hooks import HookEvent, HookOutcome, Verdict


class HookSession:
    """Binds a HookManager to one session id, working directory and project root.

    Block-capable events (``PreToolUse``, ``UserPromptSubmit``) return a
    :class:`Verdict`; the rest are observation-only and return the raw
    outcomes so the caller can log them.
    """

    def __init__(
        self,
        manager: HookManager,
        *,
        session_id: str | None = None,
        cwd: str | Path | None = None,
        project_root: str | Path | None = None,
    ) -> None:
        self._manager = manager
        self.session_id = session_id or uuid.uuid4().hex[:12]
        self.cwd = str(Path(cwd or ".").resolve())
        self.project_root = str(Path(project_root).resolve()) if project_root else self.cwd

    async def fire(self, event: HookEvent, **fields: Any) -> list[HookOutcome]:
        """Dispatch *event* with this session's ids and directories."""
        invocation = build_invocation_input(
            event,
            session_id=self.session_id,
            cwd=self.cwd,
            project_root=self.project_root,
            **fields,
        )
        return await self._manager.dispatch(event, invocation)

    async def pre_tool_use(self, tool_name: str, tool_params: dict[str, Any] | None = None) -> Verdict:
        """Ask the hooks whether *tool_name* may run. Honor ``blocked`` before executing."""
        outcomes = await self.fire(
            HookEvent.PRE_TOOL_USE, tool_name=tool_name, tool_params=tool_params or {},
        )
        return aggregate(outcomes)

    async def post_tool_use(
        self,
        tool_name: str,
        tool_params: dict[str, Any] | None = None,
        tool_result: dict[str, Any] | None = None,
    ) -> list[HookOutcome]:
        return await self.fire(
            HookEvent.POST_TOOL_USE,
            tool_name=tool_name,
            tool_params=tool_params or {},
            tool_result=tool_result or {},
        )

    async def user_prompt_submit(self, prompt: str) -> Verdict:
        outcomes = await self.fire(HookEvent.USER_PROMPT_SUBMIT, user_prompt=prompt)
        return aggregate(outcomes)

    async def notify(self, data: dict[str, Any] | None = None) -> list[HookOutcome]:
        return await self.fire(HookEvent.NOTIFICATION, event_data=data)

    async def session_start(self) -> list[HookOutcome]:
        return await self.fire(HookEvent.SESSION_START)

    async def session_end(self) -> list[HookOutcome]:
        return await self.fire(HookEvent.SESSION_END)

    async def stop(self) -> list[HookOutcome]:
        return await self.fire(HookEvent.STOP)

    async def subagent_stop(self, data: dict[str, Any] | None = None) -> list[HookOutcome]:
        return await self.fire(HookEvent.SUBAGENT_STOP, event_data=data)

    async def pre_compact(self, data: dict[str, Any] | None = None) -> list[HookOutcome]:
        return await self.fire(HookEvent.PRE_COMPACT, event_data=data)
