"""
Description Parser
==================
Derives group_slug, environment and instance_id from a runner description.

Runners are registered with descriptions following the convention

    <group_slug> - <environment>/<anything>@ i-<instance suffix>

e.g. "teamA - prod/docker@ i-0abc123". Parsing is best-effort: whenever a
marker is missing the corresponding field falls back to the whole
description. Nothing here raises on malformed input. When the instance
marker appears more than once the last occurrence wins.
"""
from typing import Optional, Tuple

SLUG_SEPARATOR = " - "
ENV_TERMINATOR = "/"
INSTANCE_MARKER = "@ i-"
INSTANCE_PREFIX = "i-"


def parse_group_slug(description: str) -> str:
    head, sep, _ = description.partition(SLUG_SEPARATOR)
    return head if sep else description


def parse_environment(description: str) -> str:
    _, sep, tail = description.partition(SLUG_SEPARATOR)
    if not sep:
        return description
    return tail.partition(ENV_TERMINATOR)[0]


def parse_instance_id(description: str) -> str:
    _, sep, tail = description.rpartition(INSTANCE_MARKER)
    if not sep:
        return description
    return INSTANCE_PREFIX + tail


def parse_description(description: Optional[str]) -> Tuple[str, str, str]:
    """Return (group_slug, environment, instance_id) for a runner description."""
    text = description or ""
    return parse_group_slug(text), parse_environment(text), parse_instance_id(text)
