"""
Output Formatter
================
THE SINGLE SOURCE OF TRUTH for report rows printed to stdout.

Column contracts:
    runner row : id, group_id, ip_address, instance_id, environment,
                 group_slug, tag1, tag2, ...
    job row    : id, name, project, username, web_url, runner_id,
                 runner_group, runner_instance, status, finished_at
    group row  : id, name

Rows are tuples of cells. to_tsv() joins them with tabs; align_columns()
pads them into a table the way `column -t -s $'\\t'` would. None renders
as an empty cell.
"""
import json
from typing import Any, Iterable, List, Sequence, Tuple

from gitlabctl.models.group import Group
from gitlabctl.models.job import Job
from gitlabctl.models.runner import Runner

Row = Tuple[Any, ...]

COLUMN_GUTTER = "  "


# ---------------------------------------------------------------------------
# Row projections
# ---------------------------------------------------------------------------
def runner_row(runner: Runner) -> Row:
    return (
        runner.id,
        runner.group_id,
        runner.ip_address,
        runner.instance_id,
        runner.environment,
        runner.group_slug,
        *runner.tags,
    )


def job_row(job: Job) -> Row:
    runner = job.runner
    return (
        job.id,
        job.name,
        job.project.path_with_namespace if job.project else None,
        job.user.username if job.user else None,
        job.web_url,
        runner.id if runner else None,
        runner.group_slug if runner else None,
        runner.instance_id if runner else None,
        job.status,
        job.finished_at,
    )


def group_row(group: Group) -> Row:
    return (group.id, group.name)


def sort_jobs(jobs: Iterable[Job]) -> List[Job]:
    """
    Ascending by finished_at, compared as strings.

    Jobs without a finished_at (still running) come first, the way a JSON
    sort orders null before any string.
    """
    return sorted(jobs, key=lambda j: (j.finished_at is not None, j.finished_at or ""))


# ---------------------------------------------------------------------------
# Text rendering
# ---------------------------------------------------------------------------
def _cell(value: Any) -> str:
    return "" if value is None else str(value)


def to_tsv(rows: Iterable[Sequence[Any]]) -> str:
    """One tab-separated line per row, no trailing newline."""
    return "\n".join("\t".join(_cell(v) for v in row) for row in rows)


def align_columns(rows: Iterable[Sequence[Any]]) -> str:
    """
    Pad cells so columns line up. Rows may have different lengths
    (runner rows carry a variable number of tags). Empty cells keep their
    column, trailing whitespace is stripped.
    """
    cells = [[_cell(v) for v in row] for row in rows]
    if not cells:
        return ""

    widths: List[int] = []
    for row in cells:
        for i, value in enumerate(row):
            if i == len(widths):
                widths.append(0)
            widths[i] = max(widths[i], len(value))

    lines = []
    for row in cells:
        padded = [value.ljust(widths[i]) for i, value in enumerate(row)]
        lines.append(COLUMN_GUTTER.join(padded).rstrip())
    return "\n".join(lines)


def render_runners(runners: Iterable[Runner], tsv: bool = False) -> str:
    rows = [runner_row(r) for r in runners]
    return to_tsv(rows) if tsv else align_columns(rows)


def render_jobs(jobs: Iterable[Job], tsv: bool = False) -> str:
    rows = [job_row(j) for j in sort_jobs(jobs)]
    return to_tsv(rows) if tsv else align_columns(rows)


def render_groups(groups: Iterable[Group], tsv: bool = False) -> str:
    rows = [group_row(g) for g in groups]
    return to_tsv(rows) if tsv else align_columns(rows)


def format_job_detail(job: Job) -> str:
    """Indented JSON for a single job lookup."""
    return json.dumps(job.model_dump(mode="json"), indent=2)
