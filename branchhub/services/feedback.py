"""Customer feedback submission and per-branch feedback links."""

from __future__ import annotations

from typing import Iterable
from urllib.parse import urlencode

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from branchhub.core.exceptions import PersistenceError
from branchhub.models.branch import Branch
from branchhub.models.feedback import Feedback
from branchhub.schemas.feedback import FeedbackCreate, FeedbackLink
from branchhub.services.branches import filter_branches
from branchhub.services.classifier import is_feedback_eligible

FEEDBACK_CATEGORIES = (
    "Service",
    "Cleanliness",
    "Speed",
    "Staff Behavior",
    "Facilities",
    "Overall Experience",
)


def submit_feedback(db: Session, payload: FeedbackCreate) -> Feedback:
    """Store a feedback row. Raises LookupError for an unknown branch."""
    if db.get(Branch, payload.branch_id) is None:
        raise LookupError(f"Branch {payload.branch_id} not found")

    feedback = Feedback(**payload.model_dump())
    try:
        db.add(feedback)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise PersistenceError(f"Failed to store feedback: {exc}") from exc
    db.refresh(feedback)
    return feedback


def list_branch_feedback(db: Session, branch_id: int) -> list[Feedback]:
    """Feedback for one branch, newest first."""
    return list(
        db.execute(
            select(Feedback)
            .where(Feedback.branch_id == branch_id)
            .order_by(Feedback.created_at.desc(), Feedback.id.desc())
        ).scalars()
    )


def feedback_url(base_url: str, branch_id: int) -> str:
    return f"{base_url.rstrip('/')}/feedback?{urlencode({'branch': branch_id})}"


def feedback_links(
    branches: Iterable[Branch], base_url: str, search: str | None = None
) -> list[FeedbackLink]:
    """Shareable feedback links for branches that accept feedback."""
    eligible = [b for b in branches if is_feedback_eligible(b.type)]
    return [
        FeedbackLink(
            branch_id=b.id,
            name=b.name,
            address=b.address,
            type=b.type,
            feedback_url=feedback_url(base_url, b.id),
        )
        for b in filter_branches(eligible, search=search)
    ]
