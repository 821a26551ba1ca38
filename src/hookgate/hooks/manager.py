"""Hook dispatch: select matching commands and run them concurrently."""

from __future__ import annotations

import asyncio
import logging

from hookgate.hooks.events import HookInvocationInput
from hookgate.hooks.matcher import matches
from hookgate.hooks.registry import HookRegistry
from hookgate.hooks.runner import HookRunner
from hookgate.hooks.verdict import aggregate, blocking_message, should_block
from hookgate.types.config import HookSettings
from hookgate.types.hooks import (
    WILDCARD_MATCHER,
    HookCommand,
    HookEvent,
    HookOutcome,
    RunState,
    Verdict,
)

logger = logging.getLogger(__name__)


class HookManager:
    """Dispatches lifecycle events to the hooks registered for them."""

    def __init__(
        self,
        registry: HookRegistry | None = None,
        *,
        settings: HookSettings | None = None,
        runner: HookRunner | None = None,
    ) -> None:
        self._registry = registry
        self._settings = settings or HookSettings()
        self._runner = runner or HookRunner(self._settings)

    @property
    def registry(self) -> HookRegistry | None:
        return self._registry

    def select(self, event: HookEvent, tool_name: str | None) -> list[HookCommand]:
        """Commands of every rule for *event* whose matcher accepts *tool_name*."""
        if self._registry is None:
            return []
        subject = tool_name if tool_name is not None else WILDCARD_MATCHER
        selected: list[HookCommand] = []
        for rule in self._registry.rules_for(event):
            if matches(rule.matcher, subject):
                selected.extend(rule.commands)
        return selected

    async def dispatch(
        self, event: HookEvent | str, invocation: HookInvocationInput,
    ) -> list[HookOutcome]:
        """Run every matching hook for *event* and wait for all of them.

        Returns one outcome per queued command. Raises ValueError only when
        *event* is not a known hook event.
        """
        event = HookEvent(event)
        commands = self.select(event, invocation.tool_name)
        if not commands:
            return []

        if self._settings.debug:
            logger.info("Dispatching %s to %d hook(s)", event.value, len(commands))

        settled = await asyncio.gather(
            *(self._runner.run(cmd, invocation) for cmd in commands),
            return_exceptions=True,
        )

        outcomes: list[HookOutcome] = []
        for cmd, result in zip(commands, settled):
            if isinstance(result, HookOutcome):
                outcomes.append(result)
                continue
            logger.error("Hook %r raised unexpectedly: %r", cmd.command, result)
            outcomes.append(HookOutcome(
                exit_code=1,
                stderr=str(result) or type(result).__name__,
                command=cmd.command,
                state=RunState.FAULTED,
            ))
        return outcomes

    async def evaluate(
        self, event: HookEvent | str, invocation: HookInvocationInput,
    ) -> tuple[Verdict, list[HookOutcome]]:
        """Dispatch and aggregate in one call."""
        outcomes = await self.dispatch(event, invocation)
        return aggregate(outcomes), outcomes

    @staticmethod
    def should_block(outcomes: list[HookOutcome]) -> bool:
        return should_block(outcomes)

    @staticmethod
    def blocking_message(outcomes: list[HookOutcome]) -> str:
        return blocking_message(outcomes)
