"""Summaries returned by maintenance routines."""

from pydantic import BaseModel, Field


class BranchTypeAudit(BaseModel):
    total: int = Field(..., description='Rows typed "Branches"')
    actual_branches: int
    service_points: int
    examples: list[str] = Field(default_factory=list, description="Sample non-branch names")


class RecategorizeSummary(BaseModel):
    moved: list[str]
    distribution: dict[str, int]
