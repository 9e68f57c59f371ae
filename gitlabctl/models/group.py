"""
Group Model
Pydantic model for a GitLab group as returned by the groups endpoint.
"""
from pydantic import BaseModel


class Group(BaseModel):
    id: int
    name: str = ""
    full_path: str = ""
