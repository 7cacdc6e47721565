"""Helpers for bounded log output.

Publish commands can print a lot (and registries sometimes echo tokens in
error output). This module trims and masks command output before it is
logged or stored in a package log.
"""

from __future__ import annotations

import re

_TOKEN_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"(_authToken=)\S+"),
    re.compile(r"(npm_)[A-Za-z0-9]{20,}"),
    re.compile(r"(Authorization:\s*Bearer\s+)\S+", re.IGNORECASE),
)


def truncate_for_log(value: str, *, max_string: int = 2048) -> str:
    """Return *value* with registry tokens masked and length capped."""
    for pattern in _TOKEN_PATTERNS:
        value = pattern.sub(r"\1<redacted>", value)
    if len(value) > max_string:
        return f"{value[:max_string]}…<truncated>"
    return value
