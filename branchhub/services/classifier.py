"""Location type rules derived from titles and names."""

from __future__ import annotations

ATM = "ATM"
PAYMENT_TERMINAL = "Payment Terminal"
BRANCH = "Branch"

# Legacy types written by earlier imports.
LEGACY_BRANCHES = "Branches"
SERVICE_POINTS = "Service Points"

# Evaluated in order, first match wins.
LOCATION_TYPE_RULES: tuple[tuple[str, str], ...] = (
    ("atm", ATM),
    ("terminal", PAYMENT_TERMINAL),
)

BRANCH_NAME_MARKERS = ("branch", "filial", "office")


def classify_location(title: str | None) -> str:
    """Map a feed title to ATM, Payment Terminal or Branch."""
    lowered = (title or "").lower()
    for needle, location_type in LOCATION_TYPE_RULES:
        if needle in lowered:
            return location_type
    return BRANCH


def is_service_point(name: str | None) -> bool:
    """True when a legacy "Branches" row does not look like a real branch."""
    lowered = (name or "").lower()
    return not any(marker in lowered for marker in BRANCH_NAME_MARKERS)


def is_feedback_eligible(location_type: str | None) -> bool:
    """Branches (including legacy "Branches") collect feedback; ATMs and terminals do not."""
    return BRANCH in (location_type or "")


def marker_color(location_type: str | None) -> str:
    """Map marker colour for a location type."""
    lowered = (location_type or "").lower()
    if "atm" in lowered:
        return "blue"
    if "branch" in lowered:
        return "green"
    return "orange"
