"""
Job Search
==========
Fetches jobs for every runner in a fleet and joins each job with the
summary of the runner that ran it.
"""
import logging
from typing import Iterable, List, Optional

from gitlabctl.models.job import Job
from gitlabctl.models.runner import RunnerFleet
from gitlabctl.services.runner_filters import lookup_runner, parse_id

logger = logging.getLogger(__name__)


def search_jobs(client, fleet: RunnerFleet, status: Optional[str] = None) -> List[Job]:
    """
    Jobs of every distinct runner in fleet, optionally filtered by status.

    A job is kept only when its runner is part of fleet; the runner summary
    is attached as job.runner.
    """
    jobs: List[Job] = []
    for runner_id in fleet.ids():
        summary = lookup_runner(fleet, runner_id)
        if summary is None:
            continue
        raw_jobs = client.list_runner_jobs(runner_id, status)
        logger.debug("Runner %s: %d job(s)", runner_id, len(raw_jobs))
        for raw in raw_jobs:
            job = Job.model_validate({**raw, "runner": summary.model_dump()})
            jobs.append(job)
    return jobs


def find_job(jobs: Iterable[Job], job_id) -> Optional[Job]:
    wanted = parse_id(job_id, "job id")
    for job in jobs:
        if job.id == wanted:
            return job
    return None
