import re

import pytest

from gitlabctl.core.exceptions import ValidationError
from gitlabctl.models.runner import Runner, RunnerFleet
from gitlabctl.services.runner_filters import (
    filter_by_group,
    filter_by_instance,
    flatten,
    group_by_group_id,
    group_by_ip_address,
    lookup_runner,
    parse_id,
    select_runners,
)


@pytest.fixture
def fleet():
    return RunnerFleet([
        Runner(id=1, group_id="111", ip_address="10.0.0.1", group_slug="teamA", environment="prod",
               instance_id="i-aaa", status="online", tags=["docker"]),
        Runner(id=2, group_id="222", ip_address="10.0.0.2", group_slug="teamB", environment="dev",
               instance_id="i-bbb", status="online"),
        Runner(id=5, group_id="111", ip_address="10.0.0.2", group_slug="teamA", environment="dev",
               instance_id="i-ccc", status="online"),
    ])


def test_group_by_group_id_insertion_order(fleet):
    buckets = group_by_group_id(fleet)
    assert list(buckets) == ["111", "222"]
    assert [r.id for r in buckets["111"]] == [1, 5]
    assert [r.id for r in flatten(buckets)] == [1, 5, 2]


def test_group_by_ip_address(fleet):
    buckets = group_by_ip_address(fleet)
    assert list(buckets) == ["10.0.0.1", "10.0.0.2"]
    assert [r.id for r in buckets["10.0.0.2"]] == [2, 5]


def test_filter_by_group_matches_slug_or_id(fleet):
    assert [r.id for r in filter_by_group(fleet, "teamB")] == [2]
    assert [r.id for r in filter_by_group(fleet, "^111$")] == [1, 5]
    assert [r.id for r in filter_by_group(fleet, "team")] == [1, 2, 5]


def test_filter_is_substring_and_case_sensitive(fleet):
    assert [r.id for r in filter_by_group(fleet, "amA")] == [1, 5]
    assert filter_by_group(fleet, "teama") == []


def test_filter_by_instance_matches_instance_or_ip(fleet):
    assert [r.id for r in filter_by_instance(fleet, "i-ccc")] == [5]
    assert [r.id for r in filter_by_instance(fleet, r"10\.0\.0\.2")] == [2, 5]


def test_filters_accept_compiled_patterns(fleet):
    assert [r.id for r in filter_by_instance(fleet, re.compile("aaa"))] == [1]


@pytest.mark.parametrize("pattern", ["team", "111", "B$"])
def test_filter_by_group_idempotent(fleet, pattern):
    once = filter_by_group(fleet, pattern)
    assert filter_by_group(once, pattern) == once


@pytest.mark.parametrize("pattern", ["i-", "10.0.0.2", "ccc"])
def test_filter_by_instance_idempotent(fleet, pattern):
    once = filter_by_instance(fleet, pattern)
    assert filter_by_instance(once, pattern) == once


def test_invalid_pattern_raises_validation_error(fleet):
    with pytest.raises(ValidationError):
        filter_by_group(fleet, "team[")


def test_lookup_runner_coerces_string_id(fleet):
    summary = lookup_runner(fleet, "5")
    assert summary is not None
    assert summary.model_dump() == {
        "id": 5,
        "group_id": "111",
        "ip_address": "10.0.0.2",
        "instance_id": "i-ccc",
        "environment": "dev",
        "group_slug": "teamA",
        "status": "online",
    }


def test_lookup_runner_missing(fleet):
    assert lookup_runner(fleet, 99) is None


def test_lookup_runner_rejects_non_numeric(fleet):
    with pytest.raises(ValidationError):
        lookup_runner(fleet, "abc")


def test_select_runners(fleet):
    subset = select_runners(fleet, " 2 ")
    assert [r.id for r in subset] == [2]
    assert len(select_runners(fleet, 42)) == 0


def test_parse_id():
    assert parse_id("17") == 17
    assert parse_id(17) == 17
    with pytest.raises(ValidationError, match="job id"):
        parse_id("1.5", "job id")
