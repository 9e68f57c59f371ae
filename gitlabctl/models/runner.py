"""
Runner Model
============
Pydantic models for runners as reshaped by the aggregator.

Fields:
    id              — runner identifier assigned by GitLab
    group_id        — group the runner was listed under (set by the aggregator)
    ip_address      — last contact address, "" when unknown
    description     — free text, source of the three derived fields below
    group_slug      — text before " - " in the description
    environment     — text between " - " and the next "/"
    instance_id     — "i-..." instance id following "@ i-"
    tags            — tag_list from the runner detail endpoint
"""
from typing import Dict, Iterable, List, Optional
from pydantic import BaseModel, field_validator


class Runner(BaseModel):
    id: int
    group_id: str = ""
    ip_address: str = ""
    description: str = ""
    group_slug: str = ""
    environment: str = ""
    instance_id: str = ""
    tags: List[str] = []
    status: str = ""
    is_shared: bool = False
    name: Optional[str] = None
    active: Optional[bool] = None
    paused: Optional[bool] = None
    online: Optional[bool] = None
    runner_type: Optional[str] = None

    @field_validator("ip_address", "description", "status", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        return "" if v is None else v

    @field_validator("group_id", mode="before")
    @classmethod
    def group_id_to_str(cls, v):
        return "" if v is None else str(v)

    def summary(self) -> "RunnerSummary":
        return RunnerSummary(
            id=self.id,
            group_id=self.group_id,
            ip_address=self.ip_address,
            instance_id=self.instance_id,
            environment=self.environment,
            group_slug=self.group_slug,
            status=self.status,
        )


class RunnerSummary(BaseModel):
    """Reduced projection embedded in job records."""
    id: int
    group_id: str = ""
    ip_address: str = ""
    instance_id: str = ""
    environment: str = ""
    group_slug: str = ""
    status: str = ""


class RunnerFleet:
    """
    The unified set of online, non-shared runners for one invocation.

    Keeps the records in aggregation order and an index by id for joins.
    """

    def __init__(self, runners: Iterable[Runner] = ()):
        self.runners: List[Runner] = list(runners)
        self._by_id: Dict[int, Runner] = {}
        for runner in self.runners:
            self._by_id.setdefault(runner.id, runner)

    def __iter__(self):
        return iter(self.runners)

    def __len__(self) -> int:
        return len(self.runners)

    def get(self, runner_id: int) -> Optional[Runner]:
        return self._by_id.get(runner_id)

    def ids(self) -> List[int]:
        """Distinct runner ids, ascending."""
        return sorted(self._by_id)
