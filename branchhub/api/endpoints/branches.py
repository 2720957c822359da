"""Branch endpoints."""

from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from branchhub.db.session import get_db
from branchhub.models.branch import Branch
from branchhub.schemas.branch import BranchCreate, BranchOut, BranchOverview, MapView, NearestBranch
from branchhub.schemas.feedback import FeedbackOut
from branchhub.services import branches as branch_service
from branchhub.services.feedback import list_branch_feedback

router = APIRouter(prefix="/branches", tags=["branches"])


@router.get("", response_model=BranchOverview)
def list_branches(
    search: Optional[str] = None,
    type: Optional[str] = Query(None, description='Exact type, or "all"'),
    sort_by: Literal["name", "rating", "feedback"] = "name",
    db: Session = Depends(get_db),
) -> BranchOverview:
    """Branch overview with feedback stats, filtered, sorted and grouped by type."""
    everything = branch_service.branches_with_stats(db)
    shown = branch_service.sort_branches(
        branch_service.filter_branches(everything, search=search, branch_type=type),
        sort_by,
    )
    return BranchOverview(
        branches=shown,
        groups=branch_service.group_by_type(shown),
        stats=branch_service.summarize(everything),
        showing=len(shown),
        total=len(everything),
    )


@router.post("", response_model=BranchOut, status_code=status.HTTP_201_CREATED)
def create_branch(payload: BranchCreate, db: Session = Depends(get_db)) -> BranchOut:
    """Add a location by hand."""
    branch = branch_service.create_branch(db, payload)
    return BranchOut.model_validate(branch)


@router.get("/map", response_model=MapView)
def branch_map(
    types: Optional[list[str]] = Query(None),
    search: Optional[str] = None,
    db: Session = Depends(get_db),
) -> MapView:
    """Map markers; all types are shown unless ``types`` is given."""
    return branch_service.map_view(branch_service.branches_with_stats(db), types=types, search=search)


@router.get("/nearest", response_model=NearestBranch)
def nearest(
    latitude: float = Query(..., ge=-90, le=90),
    longitude: float = Query(..., ge=-180, le=180),
    db: Session = Depends(get_db),
) -> NearestBranch:
    """Closest branch that accepts feedback."""
    found = branch_service.nearest_branch(db.execute(select(Branch)).scalars(), latitude, longitude)
    if found is None:
        raise HTTPException(status_code=404, detail="No branches available")
    branch, distance = found
    return NearestBranch(branch=BranchOut.model_validate(branch), distance_km=distance)


@router.get("/{branch_id}", response_model=BranchOut)
def get_branch(branch_id: int, db: Session = Depends(get_db)) -> BranchOut:
    branch = branch_service.get_branch(db, branch_id)
    if not branch:
        raise HTTPException(status_code=404, detail="Branch not found")
    return BranchOut.model_validate(branch)


@router.delete("/{branch_id}")
def delete_branch(branch_id: int, db: Session = Depends(get_db)) -> dict[str, bool]:
    branch = branch_service.get_branch(db, branch_id)
    if not branch:
        raise HTTPException(status_code=404, detail="Branch not found")
    branch_service.delete_branch(db, branch)
    return {"success": True}


@router.get("/{branch_id}/feedback", response_model=list[FeedbackOut])
def branch_feedback(branch_id: int, db: Session = Depends(get_db)) -> list[FeedbackOut]:
    if not branch_service.get_branch(db, branch_id):
        raise HTTPException(status_code=404, detail="Branch not found")
    return [FeedbackOut.model_validate(f) for f in list_branch_feedback(db, branch_id)]
