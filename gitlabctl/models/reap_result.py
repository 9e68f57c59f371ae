"""
Reap Result Model
=================
Outcome of a stale-runner removal pass.

Fields:
    candidates  — number of stale/offline runners found
    deleted     — runner ids removed successfully
    failed      — runner ids whose DELETE request failed
"""
from typing import List
from pydantic import BaseModel


class ReapResult(BaseModel):
    candidates: int = 0
    deleted: List[int] = []
    failed: List[int] = []

    @property
    def succeeded(self) -> int:
        return len(self.deleted)

    @property
    def ok(self) -> bool:
        return not self.failed
