"""One-off data cleanup over already-persisted branches."""

from __future__ import annotations

import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from branchhub.models.branch import Branch
from branchhub.schemas.maintenance import BranchTypeAudit, RecategorizeSummary
from branchhub.services.classifier import LEGACY_BRANCHES, SERVICE_POINTS, is_service_point

logger = logging.getLogger(__name__)

AUDIT_EXAMPLE_LIMIT = 15


def _legacy_branches(db: Session) -> list[Branch]:
    return list(
        db.execute(select(Branch).where(Branch.type == LEGACY_BRANCHES).order_by(Branch.id)).scalars()
    )


def audit_branch_types(db: Session, example_limit: int = AUDIT_EXAMPLE_LIMIT) -> BranchTypeAudit:
    """Count legacy "Branches" rows that do and do not look like real branches."""
    rows = _legacy_branches(db)
    not_branches = [b.name for b in rows if is_service_point(b.name)]
    return BranchTypeAudit(
        total=len(rows),
        actual_branches=len(rows) - len(not_branches),
        service_points=len(not_branches),
        examples=not_branches[:example_limit],
    )


def type_distribution(db: Session) -> dict[str, int]:
    rows = db.execute(
        select(Branch.type, func.count(Branch.id)).group_by(Branch.type).order_by(Branch.type)
    ).all()
    return {branch_type: count for branch_type, count in rows}


def recategorize_service_points(db: Session) -> RecategorizeSummary:
    """Move legacy "Branches" rows that are not real branches to "Service Points"."""
    moved = []
    try:
        for branch in _legacy_branches(db):
            if is_service_point(branch.name):
                branch.type = SERVICE_POINTS
                moved.append(branch.name)
                logger.info("Moved to %s: %s", SERVICE_POINTS, branch.name)
        db.commit()
    except Exception:
        db.rollback()
        raise
    return RecategorizeSummary(moved=moved, distribution=type_distribution(db))
