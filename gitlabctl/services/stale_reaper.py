"""
Stale Runner Reaper
===================
Finds stale/offline runners across the configured groups and removes them
after an explicit operator confirmation.

Deletion is best-effort: each runner is deleted with its own request, a
failed DELETE is recorded and the loop continues. The caller decides how to
report a ReapResult with failures. Running the reaper again re-queries the
API, so whatever is still stale gets picked up next time.
"""
import logging
from typing import Callable, Iterable, List, Optional

from gitlabctl.core.constants import CONFIRM_ANSWER, STALE_STATUSES
from gitlabctl.core.exceptions import AbortedError, GitLabAPIError
from gitlabctl.models.reap_result import ReapResult
from gitlabctl.models.runner import Runner
from gitlabctl.services.runner_aggregator import decorate_runner, fetch_group_runners

logger = logging.getLogger(__name__)


def find_stale_runners(client, group_ids: Iterable[str]) -> List[Runner]:
    """
    Non-shared runners in 'stale' or 'offline' status across groups, in fetch order.

    A runner listed under both statuses, or under several groups, is kept once
    (first occurrence).
    """
    runners: List[Runner] = []
    seen = set()
    for group_id in group_ids:
        for status in STALE_STATUSES:
            for raw in fetch_group_runners(client, group_id, status):
                runner = decorate_runner(raw, group_id)
                if runner is None or runner.id in seen:
                    continue
                seen.add(runner.id)
                runners.append(runner)
    return runners


def delete_runners(
    client,
    runners: Iterable[Runner],
    on_progress: Optional[Callable[[Runner, bool], None]] = None,
) -> ReapResult:
    """Delete each runner sequentially, collecting per-id outcomes."""
    runners = list(runners)
    result = ReapResult(candidates=len(runners))
    for runner in runners:
        try:
            client.delete_runner(runner.id)
        except GitLabAPIError as e:
            logger.debug("Failed to delete runner %s: %s", runner.id, e)
            result.failed.append(runner.id)
            ok = False
        else:
            result.deleted.append(runner.id)
            ok = True
        if on_progress is not None:
            on_progress(runner, ok)
    return result


def reap_stale_runners(
    client,
    group_ids: Iterable[str],
    confirm: Callable[[str], str] = input,
    on_progress: Optional[Callable[[Runner, bool], None]] = None,
) -> ReapResult:
    """
    Find stale/offline runners, ask for confirmation, delete them.

    Parameters
    ----------
    confirm : callable
        Receives the prompt text and returns the operator's answer. Only
        the exact answer "y" proceeds.

    Raises
    ------
    AbortedError
        When the operator answers anything other than "y", or input ends
        before an answer. Nothing is deleted.
    GitLabAPIError
        When listing stale runners fails.
    """
    stale = find_stale_runners(client, group_ids)
    if not stale:
        logger.info("No stale/offline runners found")
        return ReapResult()

    try:
        answer = confirm(f"Do you want to remove '{len(stale)}' stale/offline runners? (y/n): ")
    except EOFError:
        answer = ""
    if answer != CONFIRM_ANSWER:
        raise AbortedError("Deletion has been aborted")

    logger.info("Removing the runners...")
    return delete_runners(client, stale, on_progress=on_progress)
