"""Feedback endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from branchhub.db.session import get_db
from branchhub.schemas.feedback import FeedbackCreate, FeedbackOut
from branchhub.services.feedback import FEEDBACK_CATEGORIES, submit_feedback

router = APIRouter(prefix="/feedback", tags=["feedback"])


@router.post("", response_model=FeedbackOut, status_code=status.HTTP_201_CREATED)
def create_feedback(payload: FeedbackCreate, db: Session = Depends(get_db)) -> FeedbackOut:
    """Record a customer rating for a branch."""
    try:
        feedback = submit_feedback(db, payload)
    except LookupError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return FeedbackOut.model_validate(feedback)


@router.get("/categories")
async def categories() -> list[str]:
    """Suggested categories for the feedback form."""
    return list(FEEDBACK_CATEGORIES)
