from unittest.mock import MagicMock

import pytest

from gitlabctl.core.exceptions import ValidationError
from gitlabctl.models.runner import Runner, RunnerFleet
from gitlabctl.services.job_search import find_job, search_jobs


@pytest.fixture
def fleet():
    return RunnerFleet([
        Runner(id=3, group_id="111", group_slug="teamA", instance_id="i-3", status="online"),
        Runner(id=1, group_id="111", group_slug="teamA", instance_id="i-1", status="online"),
        Runner(id=3, group_id="222", group_slug="teamA", instance_id="i-3", status="online"),
    ])


def raw_job(job_id, finished_at=None, status="success"):
    return {
        "id": job_id,
        "name": f"job-{job_id}",
        "status": status,
        "finished_at": finished_at,
        "web_url": f"https://gitlab.example.com/p/-/jobs/{job_id}",
        "project": {"path_with_namespace": "group/project"},
        "user": {"username": "alice"},
    }


@pytest.fixture
def client():
    jobs = {1: [raw_job(10, "2024-01-02T00:00:00Z")], 3: [raw_job(30), raw_job(31, "2024-01-01T00:00:00Z")]}
    c = MagicMock()
    c.list_runner_jobs.side_effect = lambda runner_id, status=None: jobs.get(runner_id, [])
    return c


def test_jobs_fetched_once_per_distinct_runner(fleet, client):
    jobs = search_jobs(client, fleet)

    assert client.list_runner_jobs.call_count == 2
    assert {call.args[0] for call in client.list_runner_jobs.call_args_list} == {1, 3}
    assert sorted(j.id for j in jobs) == [10, 30, 31]


def test_runner_summary_attached(fleet, client):
    jobs = {j.id: j for j in search_jobs(client, fleet)}

    assert jobs[10].runner.id == 1
    assert jobs[30].runner.instance_id == "i-3"
    assert jobs[30].project.path_with_namespace == "group/project"
    assert jobs[30].user.username == "alice"


def test_job_runner_ids_subset_of_fleet(fleet, client):
    jobs = search_jobs(client, fleet)
    assert {j.runner.id for j in jobs} <= set(fleet.ids())


def test_status_forwarded(fleet, client):
    search_jobs(client, fleet, "running")
    for call in client.list_runner_jobs.call_args_list:
        assert call.args[1] == "running"


def test_find_job(fleet, client):
    jobs = search_jobs(client, fleet)
    assert find_job(jobs, "31").id == 31
    assert find_job(jobs, 999) is None
    with pytest.raises(ValidationError):
        find_job(jobs, "latest")
