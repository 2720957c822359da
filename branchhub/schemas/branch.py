"""Pydantic schemas for branches."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class BranchBase(BaseModel):
    name: str
    address: str
    type: str = "Branch"
    services: Optional[str] = None
    latitude: float
    longitude: float


class BranchCreate(BranchBase):
    name: str = Field(..., min_length=1)
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class BranchOut(BranchBase):
    id: int
    external_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class BranchWithStats(BranchOut):
    feedback_count: int = 0
    average_rating: float = 0.0


class TypeStat(BaseModel):
    count: int = 0
    feedbacks: int = 0


class BranchOverviewStats(BaseModel):
    total_branches: int
    total_feedback: int
    avg_rating: float
    type_stats: dict[str, TypeStat]


class BranchOverview(BaseModel):
    branches: list[BranchWithStats]
    groups: dict[str, list[BranchWithStats]]
    stats: BranchOverviewStats
    showing: int
    total: int


class MapBranch(BaseModel):
    id: int
    name: str
    address: str
    type: str
    latitude: float
    longitude: float
    feedback_count: int = 0
    average_rating: float = 0.0
    marker_color: str

    model_config = {"from_attributes": True}


class MapView(BaseModel):
    branches: list[MapBranch]
    type_stats: dict[str, int]
    showing: int
    total: int


class NearestBranch(BaseModel):
    branch: BranchOut
    distance_km: float
