"""Schemas for branch synchronization."""

from typing import Optional

from pydantic import BaseModel, Field


class SyncStats(BaseModel):
    total: int = 0
    created: int = 0
    updated: int = 0
    errors: int = 0


class SyncResponse(BaseModel):
    success: bool = True
    message: str
    stats: SyncStats


class PreviewBranch(BaseModel):
    id: str = Field(..., description="Upstream location id")
    name: str
    address: str
    type: str
    services: Optional[str] = None
    latitude: float
    longitude: float


class PreviewResponse(BaseModel):
    success: bool = True
    count: int
    branches: list[PreviewBranch]


class SyncErrorResponse(BaseModel):
    error: str
    details: str
