"""
Runner Aggregator
=================
Builds the unified runner set used by every report.

Pipeline:
    1. For each configured group, list runners with status=online.
    2. Drop shared runners.
    3. Attach the group id the runner was listed under.
    4. Attach group_slug / environment / instance_id parsed from the description.
    5. Fetch each distinct runner's detail once for its tag_list.
    6. Inner-join tags by runner id; runners without a tag record are dropped.

Any GitLabAPIError aborts the whole build. No partial fleet is returned.
"""
import logging
from typing import Any, Dict, Iterable, List, Optional

from pydantic import ValidationError as PayloadError

from gitlabctl.core.constants import ONLINE_STATUS
from gitlabctl.models.runner import Runner, RunnerFleet
from gitlabctl.parser.description_parser import parse_description

logger = logging.getLogger(__name__)


def is_shared(raw: Dict[str, Any]) -> bool:
    return raw.get("is_shared") is True


def decorate_runner(raw: Dict[str, Any], group_id: str) -> Optional[Runner]:
    """
    Turn a raw runner payload into a Runner owned by group_id, with derived fields.

    Returns None for payloads that do not fit the Runner model (e.g. no integer id).
    """
    group_slug, environment, instance_id = parse_description(raw.get("description"))
    fields = dict(raw)
    fields.update(
        group_id=str(group_id),
        group_slug=group_slug,
        environment=environment,
        instance_id=instance_id,
    )
    try:
        return Runner.model_validate(fields)
    except PayloadError as e:
        logger.debug("Skipping malformed runner payload in group %s: %s", group_id, e)
        return None


def fetch_group_runners(client, group_id: str, status: Optional[str]) -> List[Dict[str, Any]]:
    """Raw non-shared runners of one group with the given status."""
    raw_runners = client.list_group_runners(group_id, status)
    kept = [r for r in raw_runners if not is_shared(r)]
    logger.debug(
        "Group %s: %d %s runner(s), %d non-shared",
        group_id, len(raw_runners), status or "any", len(kept),
    )
    return kept


def fetch_tags(client, runner_ids: Iterable[int]) -> Dict[int, List[str]]:
    """Map runner id -> tag_list, one detail request per distinct id."""
    tags: Dict[int, List[str]] = {}
    for runner_id in runner_ids:
        detail = client.get_runner(runner_id)
        try:
            detail_id = int(detail.get("id"))
        except (TypeError, ValueError):
            logger.debug("Runner %s detail has no usable id, skipping tags", runner_id)
            continue
        tags[detail_id] = list(detail.get("tag_list") or [])
    return tags


def merge_tags(runners: List[Runner], tags: Dict[int, List[str]]) -> List[Runner]:
    """Inner join: only runners with a fetched tag record survive."""
    merged = []
    for runner in runners:
        if runner.id not in tags:
            logger.debug("Dropping runner %s: no tag record", runner.id)
            continue
        merged.append(runner.model_copy(update={"tags": tags[runner.id]}))
    return merged


def build_fleet(client, group_ids: Iterable[str]) -> RunnerFleet:
    """Build the RunnerFleet of online, non-shared, tagged runners for group_ids."""
    runners: List[Runner] = []
    for group_id in group_ids:
        for raw in fetch_group_runners(client, group_id, ONLINE_STATUS):
            runner = decorate_runner(raw, group_id)
            if runner is not None:
                runners.append(runner)

    distinct_ids = list(dict.fromkeys(r.id for r in runners))
    tags = fetch_tags(client, distinct_ids)

    fleet = RunnerFleet(merge_tags(runners, tags))
    logger.debug("Collected %d online runner(s) across groups", len(fleet))
    return fleet
