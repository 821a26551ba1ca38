"""Reduce many hook outcomes to one block/allow verdict."""

from __future__ import annotations

from collections.abc import Iterable

from hookgate.types.hooks import NO_MESSAGE_FALLBACK, HookOutcome, Verdict


def should_block(outcomes: Iterable[HookOutcome]) -> bool:
    """True if any hook asked to block."""
    return any(o.blocks for o in outcomes)


def _reason(outcome: HookOutcome) -> str:
    message = outcome.response.message if outcome.response is not None else None
    for text in (message, outcome.stderr, outcome.stdout):
        if text and text.strip():
            return text.strip()
    return NO_MESSAGE_FALLBACK


def blocking_message(outcomes: Iterable[HookOutcome]) -> str:
    """Newline-joined reasons of the blocking outcomes, in outcome order."""
    return "\n".join(_reason(o) for o in outcomes if o.blocks)


def aggregate(outcomes: Iterable[HookOutcome]) -> Verdict:
    """Combine *outcomes* into a single :class:`Verdict`.

    The aggregator does not look at the event type: callers should only act
    on ``blocked`` for events where blocking means something.
    """
    outcomes = list(outcomes)
    if not should_block(outcomes):
        return Verdict(blocked=False)
    return Verdict(blocked=True, message=blocking_message(outcomes))
