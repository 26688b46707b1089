"""
Pricing, tutor level and feedback deadline policies.
"""

from calendar import monthrange
from datetime import datetime
from typing import Optional

from session_service.domain.entities import PricingPlan, TutorLevel

# Hourly rate by student pricing plan
PRICE_PER_HOUR = {
    PricingPlan.FLEXIBLE: 30.0,
    PricingPlan.REGULAR: 28.0,
    PricingPlan.LONG_TERM: 25.0,
}

DEFAULT_PLAN = PricingPlan.FLEXIBLE

# Minimum completed sessions per level, highest first
LEVEL_THRESHOLDS = (
    (TutorLevel.EXPERT, 51),
    (TutorLevel.INTERMEDIATE, 21),
    (TutorLevel.STARTER, 0),
)

FEEDBACK_DUE_DAY = 3


def price_per_hour_for_plan(plan: Optional[PricingPlan]) -> float:
    """Students without a plan pay the flexible rate"""
    if plan is None:
        return PRICE_PER_HOUR[DEFAULT_PLAN]
    return PRICE_PER_HOUR[PricingPlan(plan)]


def duration_minutes(start_time: datetime, end_time: datetime) -> int:
    return int((end_time - start_time).total_seconds() // 60)


def compute_total_price(price_per_hour: float, duration: int) -> float:
    return round(price_per_hour * duration / 60, 2)


def calculate_tutor_level(completed_sessions: int) -> TutorLevel:
    for level, minimum in LEVEL_THRESHOLDS:
        if completed_sessions >= minimum:
            return level
    return TutorLevel.STARTER


def calculate_feedback_due_date(completed_at: datetime) -> datetime:
    """3rd of the following month, last millisecond of the day"""
    if completed_at.month == 12:
        year, month = completed_at.year + 1, 1
    else:
        year, month = completed_at.year, completed_at.month + 1
    day = min(FEEDBACK_DUE_DAY, monthrange(year, month)[1])
    return datetime(year, month, day, 23, 59, 59, 999000)
