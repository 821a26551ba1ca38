"""Invocation input builder and its wire format."""

from __future__ import annotations

import json
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from hookgate.types.hooks import HookEvent

# Python field name -> key in the JSON object written to the hook's stdin
_WIRE_KEYS = {
    "session_id": "sessionId",
    "event": "hookType",
    "tool_name": "toolName",
    "tool_params": "toolParams",
    "tool_result": "toolResult",
    "user_prompt": "userPrompt",
    "event_data": "eventData",
    "cwd": "cwd",
    "project_root": "projectRoot",
    "timestamp": "timestamp",
}


@dataclass(frozen=True, slots=True)
class HookInvocationInput:
    """Data passed to every hook command of one dispatch."""

    session_id: str
    event: HookEvent
    cwd: str
    project_root: str
    timestamp: int  # Milliseconds since the epoch
    tool_name: str | None = None
    tool_params: dict[str, Any] | None = None
    tool_result: dict[str, Any] | None = None
    user_prompt: str | None = None
    event_data: dict[str, Any] | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.event, HookEvent):
            raise ValueError(f"Not a hook event: {self.event!r}")
        if self.tool_result is not None and self.event is not HookEvent.POST_TOOL_USE:
            raise ValueError(f"tool_result is only valid for PostToolUse, not {self.event.value}")

    def to_wire(self) -> dict[str, Any]:
        """Return the JSON-ready dict; absent optional fields are omitted."""
        wire: dict[str, Any] = {}
        for attr, key in _WIRE_KEYS.items():
            value = getattr(self, attr)
            if value is None:
                continue
            wire[key] = value.value if isinstance(value, HookEvent) else value
        return wire

    def to_json(self) -> str:
        return json.dumps(self.to_wire(), default=str)

    @classmethod
    def from_wire(cls, data: dict[str, Any]) -> HookInvocationInput:
        """Rebuild an input from what a hook reads on stdin."""
        kwargs = {attr: data.get(key) for attr, key in _WIRE_KEYS.items()}
        kwargs["event"] = HookEvent(kwargs["event"])
        return cls(**kwargs)


def now_ms() -> int:
    return int(time.time() * 1000)


def build_invocation_input(
    event: HookEvent,
    *,
    session_id: str = "",
    tool_name: str | None = None,
    tool_params: dict[str, Any] | None = None,
    tool_result: dict[str, Any] | None = None,
    user_prompt: str | None = None,
    event_data: dict[str, Any] | None = None,
    cwd: str | Path = "",
    project_root: str | Path | None = None,
    timestamp: int | None = None,
) -> HookInvocationInput:
    """Build a HookInvocationInput for a given event.

    ``cwd`` defaults to the current directory and ``project_root`` to ``cwd``.
    """
    cwd = str(cwd or Path.cwd())
    return HookInvocationInput(
        session_id=session_id,
        event=HookEvent(event),
        cwd=cwd,
        project_root=str(project_root or cwd),
        timestamp=now_ms() if timestamp is None else timestamp,
        tool_name=tool_name,
        tool_params=tool_params,
        tool_result=tool_result,
        user_prompt=user_prompt,
        event_data=event_data,
    )
