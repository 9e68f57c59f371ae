"""
list-by-group / list-by-instance
Lists online runners, either filtered by a pattern or grouped by a key.
"""
import logging

from gitlabctl.core.constants import EXIT_OK
from gitlabctl.core.output_formatter import render_runners
from gitlabctl.services.runner_aggregator import build_fleet
from gitlabctl.services.runner_filters import (
    filter_by_group,
    filter_by_instance,
    flatten,
    group_by_group_id,
    group_by_ip_address,
)

logger = logging.getLogger(__name__)


def _emit(text: str) -> None:
    if text:
        print(text)


def list_by_group(client, settings, args) -> int:
    """Runners matching a group_slug/group_id pattern, or all grouped by group id."""
    fleet = build_fleet(client, settings.group_ids)
    if args.pattern:
        runners = filter_by_group(fleet, args.pattern)
    else:
        runners = flatten(group_by_group_id(fleet))
    _emit(render_runners(runners, tsv=args.tsv))
    return EXIT_OK


def list_by_instance(client, settings, args) -> int:
    """Runners matching an instance id/IP pattern, or all grouped by IP address."""
    fleet = build_fleet(client, settings.group_ids)
    if args.pattern:
        runners = filter_by_instance(fleet, args.pattern)
    else:
        runners = flatten(group_by_ip_address(fleet))
    _emit(render_runners(runners, tsv=args.tsv))
    return EXIT_OK
