"""
Job Model
Pydantic model for a runner job, with the owning runner joined in.
"""
from typing import Optional
from pydantic import BaseModel, field_validator

from .runner import RunnerSummary


class JobProject(BaseModel):
    path_with_namespace: str = ""


class JobUser(BaseModel):
    username: str = ""


class Job(BaseModel):
    id: int
    name: str = ""
    status: str = ""
    finished_at: Optional[str] = None
    web_url: str = ""
    project: Optional[JobProject] = None
    user: Optional[JobUser] = None
    runner: Optional[RunnerSummary] = None

    @field_validator("name", "status", "web_url", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        return "" if v is None else v
