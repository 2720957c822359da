"""Synthetic feedback for demo and QA databases."""

from __future__ import annotations

import logging
import random
from datetime import datetime, timedelta

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from branchhub.models.branch import Branch
from branchhub.models.feedback import Feedback
from branchhub.services.classifier import BRANCH
from branchhub.services.feedback import FEEDBACK_CATEGORIES

logger = logging.getLogger(__name__)

MIN_FEEDBACK = 50
MAX_FEEDBACK = 100
LOOKBACK = timedelta(days=90)

# (upper bound of the cumulative probability, stars)
RATING_WEIGHTS = (
    (0.50, 5),
    (0.75, 4),
    (0.90, 3),
    (0.95, 2),
    (1.00, 1),
)

SAMPLE_COMMENTS = (
    "Excellent service! Staff was very helpful and professional.",
    "Quick and efficient. No wait time.",
    "Very satisfied with the service provided.",
    "Staff could be more friendly, but service was good.",
    "Great location and easy to access.",
    "Waited a bit long but staff was helpful.",
    "Professional service, will come again.",
    "Clean and well-organized branch.",
    "Staff needs more training on products.",
    "Outstanding customer service experience!",
    "Average experience, nothing special.",
    "Very helpful staff, explained everything clearly.",
    "Modern facilities and good service.",
    "Could improve waiting area comfort.",
    "Fast service, very convenient location.",
)

SAMPLE_CUSTOMERS = (
    ("Ali Mammadov", "ali.m@example.com", "+994501234567"),
    ("Leyla Hasanova", "leyla.h@example.com", "+994502345678"),
    ("Elvin Ismayilov", "elvin.i@example.com", "+994503456789"),
    ("Aysel Aliyeva", "aysel.a@example.com", "+994504567890"),
    ("Rashad Huseynov", "rashad.h@example.com", "+994505678901"),
    ("Nigar Rahimova", "nigar.r@example.com", "+994506789012"),
    ("Vugar Safarov", "vugar.s@example.com", "+994507890123"),
    ("Sevinj Mustafayeva", "sevinj.m@example.com", "+994508901234"),
    ("Kamran Jafarov", "kamran.j@example.com", "+994509012345"),
    ("Gulnar Ahmadova", "gulnar.a@example.com", "+994550123456"),
)


def random_rating(rng: random.Random) -> int:
    """Draw a star rating skewed towards the top of the scale."""
    roll = rng.random()
    for threshold, stars in RATING_WEIGHTS:
        if roll < threshold:
            return stars
    return RATING_WEIGHTS[-1][1]


def random_timestamp(rng: random.Random, start: datetime, end: datetime) -> datetime:
    return start + (end - start) * rng.random()


def seed_feedback(
    db: Session,
    rng: random.Random | None = None,
    count: int | None = None,
    now: datetime | None = None,
) -> int:
    """Create synthetic feedback over branch-type locations. Returns rows created."""
    rng = rng or random.Random()
    branches = list(db.execute(select(Branch).where(Branch.type.contains(BRANCH))).scalars())
    if not branches:
        raise LookupError("No branches found! Please run branch sync first.")

    total = count if count is not None else rng.randint(MIN_FEEDBACK, MAX_FEEDBACK)
    end = now or datetime.now()
    start = end - LOOKBACK
    logger.info("Seeding %d feedback entries across %d branches", total, len(branches))

    created = 0
    for _ in range(total):
        name, email, phone = rng.choice(SAMPLE_CUSTOMERS)
        feedback = Feedback(
            branch_id=rng.choice(branches).id,
            rating=random_rating(rng),
            category=rng.choice(FEEDBACK_CATEGORIES),
            comment=rng.choice(SAMPLE_COMMENTS),
            customer_name=name,
            customer_email=email,
            customer_phone=phone,
            created_at=random_timestamp(rng, start, end),
        )
        try:
            db.add(feedback)
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            logger.error("Error creating feedback: %s", exc)
            continue

        created += 1
        if created % 10 == 0:
            logger.info("Created %d/%d feedback entries...", created, total)

    return created


def rating_distribution(db: Session) -> dict[int, int]:
    """Feedback counts per rating, highest rating first."""
    rows = db.execute(
        select(Feedback.rating, func.count(Feedback.id))
        .group_by(Feedback.rating)
        .order_by(Feedback.rating.desc())
    ).all()
    return {rating: count for rating, count in rows}
