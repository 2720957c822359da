"""Per-branch feedback links for printing or sharing."""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.orm import Session

from branchhub.core.config import settings
from branchhub.db.session import get_db
from branchhub.models.branch import Branch
from branchhub.schemas.feedback import FeedbackLink
from branchhub.services.feedback import feedback_links

router = APIRouter(prefix="/feedback-links", tags=["feedback"])


@router.get("", response_model=list[FeedbackLink])
def list_feedback_links(search: Optional[str] = None, db: Session = Depends(get_db)) -> list[FeedbackLink]:
    branches = db.execute(select(Branch).order_by(Branch.name)).scalars().all()
    return feedback_links(branches, settings.public_base_url, search=search)
