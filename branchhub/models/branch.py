"""Branch model."""

from datetime import datetime

from sqlalchemy import Column, DateTime, Float, Integer, String, Text
from sqlalchemy.orm import relationship

from branchhub.db.base import Base


class Branch(Base):
    """A physical location: bank branch, ATM or payment terminal."""

    __tablename__ = "branches"

    id = Column(Integer, primary_key=True, index=True)
    external_id = Column(String(100), unique=True, nullable=True, index=True)  # feed sync key
    name = Column(String(255), nullable=False)
    address = Column(Text, nullable=False)
    type = Column(String(50), nullable=False, default="Branch", index=True)
    services = Column(Text)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.now)
    updated_at = Column(DateTime, nullable=False, default=datetime.now)

    feedbacks = relationship(
        "Feedback",
        back_populates="branch",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
