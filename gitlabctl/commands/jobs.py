"""
list-jobs / list-running-jobs / list-jobs-by-runner
Job reports for the runners of the configured groups.
"""
import logging

from gitlabctl.core.constants import EXIT_OK, RUNNING_JOB_STATUS
from gitlabctl.core.exceptions import ValidationError
from gitlabctl.core.output_formatter import format_job_detail, render_jobs
from gitlabctl.services.job_search import find_job, search_jobs
from gitlabctl.services.runner_aggregator import build_fleet
from gitlabctl.services.runner_filters import parse_id, select_runners

logger = logging.getLogger(__name__)


def _report_jobs(client, fleet, status, job_id, tsv) -> int:
    if job_id is not None:
        parse_id(job_id, "job id")
    jobs = search_jobs(client, fleet, status)

    if job_id is not None:
        job = find_job(jobs, job_id)
        if job is None:
            logger.warning("Job %s not found", job_id)
        else:
            print(format_job_detail(job))
        return EXIT_OK

    text = render_jobs(jobs, tsv=tsv)
    if text:
        print(text)
    return EXIT_OK


def list_jobs(client, settings, args) -> int:
    fleet = build_fleet(client, settings.group_ids)
    return _report_jobs(client, fleet, None, args.job_id, args.tsv)


def list_running_jobs(client, settings, args) -> int:
    fleet = build_fleet(client, settings.group_ids)
    return _report_jobs(client, fleet, RUNNING_JOB_STATUS, args.job_id, args.tsv)


def list_jobs_by_runner(client, settings, args) -> int:
    if not args.runner_id:
        raise ValidationError("Error: 'list-jobs-by-runner' needs a runner id!")
    parse_id(args.runner_id, "runner id")

    fleet = build_fleet(client, settings.group_ids)
    subset = select_runners(fleet, args.runner_id)
    if not subset:
        logger.warning("Runner %s is not among the online runners of the configured groups", args.runner_id)
    return _report_jobs(client, subset, None, None, args.tsv)
