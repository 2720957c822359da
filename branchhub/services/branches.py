"""Branch persistence and the aggregated views served to the admin dashboard."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Sequence, TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from branchhub.core.exceptions import PersistenceError
from branchhub.models.branch import Branch
from branchhub.models.feedback import Feedback
from branchhub.schemas.branch import (
    BranchCreate,
    BranchOut,
    BranchOverviewStats,
    BranchWithStats,
    MapBranch,
    MapView,
    TypeStat,
)
from branchhub.services.classifier import is_feedback_eligible, marker_color
from branchhub.services.coordinates import haversine_km

# Fields overwritten on every sync; id and external_id are never touched.
SYNCED_FIELDS = ("name", "address", "type", "services", "latitude", "longitude")

SORT_KEYS = ("name", "rating", "feedback")

B = TypeVar("B")


def upsert_branch(db: Session, external_id: str, fields: dict) -> tuple[Branch, bool]:
    """Insert or update a feed-sourced branch. Returns the row and whether it was created."""
    try:
        branch = db.execute(
            select(Branch).where(Branch.external_id == external_id)
        ).scalar_one_or_none()
        now = datetime.now()
        if branch:
            for field in SYNCED_FIELDS:
                setattr(branch, field, fields[field])
            branch.updated_at = now
            created = False
        else:
            branch = Branch(
                external_id=external_id,
                created_at=now,
                updated_at=now,
                **{field: fields[field] for field in SYNCED_FIELDS},
            )
            db.add(branch)
            created = True
        db.commit()
        db.refresh(branch)
        return branch, created
    except SQLAlchemyError as exc:
        db.rollback()
        raise PersistenceError(f"Failed to upsert branch {external_id}: {exc}") from exc


def create_branch(db: Session, payload: BranchCreate) -> Branch:
    """Create a branch by hand (no external sync key)."""
    now = datetime.now()
    branch = Branch(**payload.model_dump(), created_at=now, updated_at=now)
    try:
        db.add(branch)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise PersistenceError(f"Failed to create branch {payload.name!r}: {exc}") from exc
    db.refresh(branch)
    return branch


def get_branch(db: Session, branch_id: int) -> Branch | None:
    return db.get(Branch, branch_id)


def delete_branch(db: Session, branch: Branch) -> None:
    """Delete a branch; its feedback goes with it."""
    try:
        db.delete(branch)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise PersistenceError(f"Failed to delete branch {branch.id}: {exc}") from exc


def branches_with_stats(db: Session) -> list[BranchWithStats]:
    """All branches ordered by name, with feedback count and average rating."""
    branches = db.execute(select(Branch).order_by(Branch.name)).scalars().all()

    rows = db.execute(
        select(Feedback.branch_id, func.count(Feedback.id), func.avg(Feedback.rating))
        .group_by(Feedback.branch_id)
    ).all()
    stats = {branch_id: (count, float(avg or 0)) for branch_id, count, avg in rows}

    result = []
    for branch in branches:
        count, average = stats.get(branch.id, (0, 0.0))
        result.append(
            BranchWithStats(
                **BranchOut.model_validate(branch).model_dump(),
                feedback_count=count,
                average_rating=average,
            )
        )
    return result


def summarize(branches: Sequence[BranchWithStats]) -> BranchOverviewStats:
    """Totals and per-type counts for the overview header."""
    total_branches = len(branches)
    total_feedback = sum(b.feedback_count for b in branches)
    # Mean of per-branch averages; branches without feedback pull it down.
    avg_rating = (
        sum(b.average_rating for b in branches) / total_branches if total_branches else 0.0
    )

    type_stats: dict[str, TypeStat] = {}
    for branch in branches:
        stat = type_stats.setdefault(branch.type, TypeStat())
        stat.count += 1
        stat.feedbacks += branch.feedback_count

    return BranchOverviewStats(
        total_branches=total_branches,
        total_feedback=total_feedback,
        avg_rating=avg_rating,
        type_stats=type_stats,
    )


def _matches_search(branch, search: str | None) -> bool:
    if not search:
        return True
    needle = search.lower()
    return needle in (branch.name or "").lower() or needle in (branch.address or "").lower()


def filter_branches(branches: Iterable[B], search: str | None = None, branch_type: str | None = None) -> list[B]:
    """Case-insensitive name/address search plus an optional exact type filter."""
    return [
        b
        for b in branches
        if _matches_search(b, search)
        and (branch_type in (None, "", "all") or b.type == branch_type)
    ]


def sort_branches(branches: Iterable[BranchWithStats], sort_by: str = "name") -> list[BranchWithStats]:
    if sort_by == "rating":
        return sorted(branches, key=lambda b: b.average_rating or 0, reverse=True)
    if sort_by == "feedback":
        return sorted(branches, key=lambda b: b.feedback_count, reverse=True)
    if sort_by == "name":
        return sorted(branches, key=lambda b: b.name.casefold())
    raise ValueError(f"Unknown sort key: {sort_by!r}")


def group_by_type(branches: Iterable[B]) -> dict[str, list[B]]:
    """Group in first-appearance order of each type."""
    groups: dict[str, list[B]] = {}
    for branch in branches:
        groups.setdefault(branch.type, []).append(branch)
    return groups


def map_view(
    branches: Sequence[BranchWithStats],
    types: Iterable[str] | None = None,
    search: str | None = None,
) -> MapView:
    """Markers for the map page, filtered by a set of types and a search term."""
    type_stats: dict[str, int] = {}
    for branch in branches:
        type_stats[branch.type] = type_stats.get(branch.type, 0) + 1

    selected = set(types) if types is not None else set(type_stats)
    markers = [
        MapBranch(
            id=b.id,
            name=b.name,
            address=b.address,
            type=b.type,
            latitude=b.latitude,
            longitude=b.longitude,
            feedback_count=b.feedback_count,
            average_rating=b.average_rating,
            marker_color=marker_color(b.type),
        )
        for b in branches
        if b.type in selected and _matches_search(b, search)
    ]
    return MapView(branches=markers, type_stats=type_stats, showing=len(markers), total=len(branches))


def nearest_branch(branches: Iterable[Branch], latitude: float, longitude: float) -> tuple[Branch, float] | None:
    """Closest feedback-eligible branch to a point, with its distance in km."""
    best: tuple[Branch, float] | None = None
    for branch in branches:
        if not is_feedback_eligible(branch.type):
            continue
        distance = haversine_km(latitude, longitude, branch.latitude, branch.longitude)
        if best is None or distance < best[1]:
            best = (branch, distance)
    return best
