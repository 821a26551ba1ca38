"""Hook types for the hookgate event system."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

DEFAULT_HOOK_TIMEOUT_MS = 60_000
BLOCKING_EXIT_CODE = 2
SUCCESS_EXIT_CODE = 0
WILDCARD_MATCHER = "*"
NO_MESSAGE_FALLBACK = "Hook blocked operation (no message provided)"


class HookEvent(Enum):
    """Lifecycle moments that can trigger hooks.

    Values are the names used in configuration files and on the wire.
    """

    PRE_TOOL_USE = "PreToolUse"
    POST_TOOL_USE = "PostToolUse"
    NOTIFICATION = "Notification"
    USER_PROMPT_SUBMIT = "UserPromptSubmit"
    STOP = "Stop"
    SUBAGENT_STOP = "SubagentStop"
    PRE_COMPACT = "PreCompact"
    SESSION_START = "SessionStart"
    SESSION_END = "SessionEnd"

    @property
    def can_block(self) -> bool:
        """Whether a blocked verdict for this event stops the pipeline."""
        return self in (HookEvent.PRE_TOOL_USE, HookEvent.USER_PROMPT_SUBMIT)


class RunState(Enum):
    """Terminal state of a single hook run."""

    COMPLETED = "completed"
    TIMED_OUT = "timed_out"
    SPAWN_FAILED = "spawn_failed"
    STDIN_WRITE_FAILED = "stdin_write_failed"
    FAULTED = "faulted"


@dataclass(frozen=True, slots=True)
class HookCommand:
    """A shell command run when its rule matches."""

    command: str
    timeout_ms: int = DEFAULT_HOOK_TIMEOUT_MS
    type: str = "command"  # Only "command" is supported


@dataclass(frozen=True, slots=True)
class HookRule:
    """A matcher plus the commands that fire when it matches."""

    matcher: str  # "*" or a regex tested against the tool name
    commands: tuple[HookCommand, ...] = ()


@dataclass(frozen=True, slots=True)
class HookResponse:
    """Structured JSON a hook may print on stdout.

    ``block`` is ``None`` when the key was absent, so an explicit
    ``{"block": false}`` can be told apart from no opinion at all.
    """

    block: bool | None = None
    message: str | None = None
    context: dict[str, Any] | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def has_block(self) -> bool:
        return self.block is not None


@dataclass(frozen=True, slots=True)
class HookOutcome:
    """Result from running one hook command."""

    exit_code: int
    stdout: str = ""
    stderr: str = ""
    blocks: bool = False
    response: HookResponse | None = None
    command: str = ""
    state: RunState = RunState.COMPLETED
    duration_ms: int = 0

    @property
    def timed_out(self) -> bool:
        return self.state is RunState.TIMED_OUT


@dataclass(frozen=True, slots=True)
class Verdict:
    """Block/allow decision derived from every outcome of one dispatch."""

    blocked: bool
    message: str = ""
