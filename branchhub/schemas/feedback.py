"""Pydantic schemas for customer feedback."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class FeedbackCreate(BaseModel):
    branch_id: int
    rating: int = Field(..., ge=1, le=5)
    category: Optional[str] = None
    comment: Optional[str] = None
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None


class FeedbackOut(FeedbackCreate):
    id: int
    created_at: datetime

    model_config = {"from_attributes": True}


class FeedbackLink(BaseModel):
    branch_id: int
    name: str
    address: str
    type: str
    feedback_url: str
