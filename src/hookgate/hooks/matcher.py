"""Tool-name matching for hook rules."""

from __future__ import annotations

import logging
import re
from functools import lru_cache

from hookgate.types.hooks import WILDCARD_MATCHER

logger = logging.getLogger(__name__)


@lru_cache(maxsize=256)
def _compile(pattern: str) -> re.Pattern[str] | None:
    """Compile *pattern* once; ``None`` marks a malformed expression."""
    try:
        return re.compile(pattern)
    except re.error as exc:
        logger.warning("Invalid hook matcher pattern %r: %s", pattern, exc)
        return None


def matches(pattern: str, tool_name: str | None) -> bool:
    """Return True if a rule's *pattern* applies to *tool_name*.

    ``"*"`` matches every tool. Anything else is a regular expression searched
    (not anchored) in the tool name. A malformed expression never matches.
    """
    if pattern == WILDCARD_MATCHER:
        return True
    compiled = _compile(pattern)
    if compiled is None:
        return False
    return compiled.search(tool_name or "") is not None
