"""
Runner Filters
==============
Grouping, filtering and lookup over a RunnerFleet.

Pattern semantics: patterns are Python regular expressions applied with
re.search, i.e. a match anywhere in the field counts (substring semantics),
case-sensitive. Anchor with ^...$ for a full match.
"""
import re
from typing import Callable, Dict, Iterable, List, Optional, Union

from gitlabctl.core.exceptions import ValidationError
from gitlabctl.models.runner import Runner, RunnerFleet, RunnerSummary

PatternLike = Union[str, "re.Pattern[str]"]


def compile_pattern(pattern: PatternLike) -> "re.Pattern[str]":
    if isinstance(pattern, re.Pattern):
        return pattern
    try:
        return re.compile(pattern)
    except re.error as e:
        raise ValidationError(f"Invalid pattern '{pattern}': {e}") from e


def parse_id(value, what: str = "id") -> int:
    """Numeric coercion for operator-supplied ids."""
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {what} '{value}': must be a number") from None


def _group_by(runners: Iterable[Runner], key: Callable[[Runner], str]) -> Dict[str, List[Runner]]:
    buckets: Dict[str, List[Runner]] = {}
    for runner in runners:
        buckets.setdefault(key(runner), []).append(runner)
    return buckets


def group_by_group_id(runners: Iterable[Runner]) -> Dict[str, List[Runner]]:
    return _group_by(runners, lambda r: r.group_id)


def group_by_ip_address(runners: Iterable[Runner]) -> Dict[str, List[Runner]]:
    return _group_by(runners, lambda r: r.ip_address)


def flatten(buckets: Dict[str, List[Runner]]) -> List[Runner]:
    return [runner for bucket in buckets.values() for runner in bucket]


def _filter(runners: Iterable[Runner], pattern: PatternLike, fields: Callable[[Runner], tuple]) -> List[Runner]:
    regex = compile_pattern(pattern)
    return [r for r in runners if any(regex.search(value) for value in fields(r))]


def filter_by_group(runners: Iterable[Runner], pattern: PatternLike) -> List[Runner]:
    """Keep runners whose group_slug or group_id matches pattern."""
    return _filter(runners, pattern, lambda r: (r.group_slug, r.group_id))


def filter_by_instance(runners: Iterable[Runner], pattern: PatternLike) -> List[Runner]:
    """Keep runners whose instance_id or ip_address matches pattern."""
    return _filter(runners, pattern, lambda r: (r.instance_id, r.ip_address))


def lookup_runner(fleet: RunnerFleet, runner_id) -> Optional[RunnerSummary]:
    runner = fleet.get(parse_id(runner_id, "runner id"))
    return runner.summary() if runner else None


def select_runners(fleet: RunnerFleet, runner_id) -> RunnerFleet:
    """Sub-fleet holding only the records of one runner id."""
    wanted = parse_id(runner_id, "runner id")
    return RunnerFleet(r for r in fleet if r.id == wanted)
