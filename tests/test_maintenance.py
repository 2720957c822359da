import random
from collections import Counter
from datetime import datetime, timedelta

import pytest
from sqlalchemy import select

from branchhub.models.branch import Branch
from branchhub.models.feedback import Feedback
from branchhub.services.maintenance import audit_branch_types, recategorize_service_points, type_distribution
from branchhub.services.seeding import LOOKBACK, rating_distribution, random_rating, seed_feedback


@pytest.fixture
def legacy_rows(make_branch):
    make_branch("Yasamal Branch", type="Branches")
    make_branch("Filial 12", type="Branches")
    make_branch("Head Office", type="Branches")
    make_branch("28 Mall kiosk", type="Branches")
    make_branch("Sahil metro", type="Branches")
    make_branch("Airport ATM", type="ATM")


def test_audit_branch_types(db, legacy_rows):
    audit = audit_branch_types(db)

    assert audit.total == 5
    assert audit.actual_branches == 3
    assert audit.service_points == 2
    assert audit.examples == ["28 Mall kiosk", "Sahil metro"]


def test_recategorize_service_points(db, legacy_rows):
    summary = recategorize_service_points(db)

    assert sorted(summary.moved) == ["28 Mall kiosk", "Sahil metro"]
    assert summary.distribution == {"ATM": 1, "Branches": 3, "Service Points": 2}
    assert audit_branch_types(db).service_points == 0

    # A second pass has nothing left to move.
    assert recategorize_service_points(db).moved == []


def test_type_distribution_empty(db):
    assert type_distribution(db) == {}


def test_random_rating_distribution():
    rng = random.Random(1234)
    counts = Counter(random_rating(rng) for _ in range(20000))

    assert set(counts) == {1, 2, 3, 4, 5}
    assert counts[5] / 20000 == pytest.approx(0.50, abs=0.02)
    assert counts[4] / 20000 == pytest.approx(0.25, abs=0.02)
    assert counts[3] / 20000 == pytest.approx(0.15, abs=0.02)
    assert counts[2] / 20000 == pytest.approx(0.05, abs=0.01)
    assert counts[1] / 20000 == pytest.approx(0.05, abs=0.01)


def test_seed_feedback_targets_branches_in_window(db, make_branch):
    branch = make_branch("Nizami Branch")
    legacy = make_branch("Old filial", type="Branches")
    make_branch("Airport ATM", type="ATM")
    now = datetime(2024, 6, 1, 12, 0, 0)

    created = seed_feedback(db, random.Random(7), count=40, now=now)

    rows = db.execute(select(Feedback)).scalars().all()
    assert created == 40
    assert len(rows) == 40
    assert {f.branch_id for f in rows} <= {branch.id, legacy.id}
    assert all(now - LOOKBACK <= f.created_at <= now for f in rows)
    assert all(1 <= f.rating <= 5 for f in rows)
    assert sum(rating_distribution(db).values()) == 40
    assert list(rating_distribution(db)) == sorted(rating_distribution(db), reverse=True)


def test_seed_feedback_default_count(db, make_branch):
    make_branch("Nizami Branch")
    created = seed_feedback(db, random.Random(3))
    assert 50 <= created <= 100


def test_seed_feedback_requires_branches(db, make_branch):
    make_branch("Airport ATM", type="ATM")
    with pytest.raises(LookupError):
        seed_feedback(db, random.Random(1), count=5)
    assert db.execute(select(Branch)).scalars().all()[0].feedbacks == []


def test_lookback_is_three_months():
    assert LOOKBACK == timedelta(days=90)
