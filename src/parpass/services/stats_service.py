"""
Dashboard aggregation: proportions and chart geometry from raw counts.
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass

from parpass.api.parpass_api import ParPassAPI
from parpass.models.stats import MonthlyRounds
from parpass.models.stats import OverviewStats
from parpass.models.stats import PopularCourse
from parpass.models.stats import TierBreakdown
from parpass.models.stats import TopMember
from parpass.utils.logging_utils import log_execution


DONUT_RADIUS = 40
DONUT_CIRCUMFERENCE = 2 * math.pi * DONUT_RADIUS

@dataclass(frozen=True)
class Bar:
    """Horizontal bar for one popular course."""
    course: PopularCourse
    width_percent: float

@dataclass(frozen=True)
class TierArc:
    """One tier's segment of the usage donut."""
    tier: str
    rounds: int
    share: float
    length: float
    offset: float

    @property
    def percent(self) -> float:
        return self.share * 100

@dataclass(frozen=True)
class DashboardSnapshot:
    """Everything the operator dashboard shows."""
    overview: OverviewStats
    popular_courses: list[PopularCourse]
    bars: list[Bar]
    monthly_rounds: list[MonthlyRounds]
    tier_breakdown: list[TierBreakdown]
    arcs: list[TierArc]
    total_tier_rounds: int
    top_members: list[TopMember]

def bar_widths(rounds: Sequence[int]) -> list[float]:
    """Percent width of each bar relative to the largest count.

    The denominator is at least 1, so all-zero counts give all-zero widths.
    """
    longest = max([*rounds, 1])
    return [count / longest * 100 for count in rounds]

def popular_course_bars(courses: Sequence[PopularCourse]) -> list[Bar]:
    widths = bar_widths([course.total_rounds for course in courses])
    return [Bar(course=course, width_percent=width) for course, width in zip(courses, widths)]

def total_tier_rounds(tiers: Sequence[TierBreakdown]) -> int:
    """Rounds across all tiers, at least 1."""
    return sum(tier.rounds for tier in tiers) or 1

def tier_arcs(tiers: Sequence[TierBreakdown], circumference: float = DONUT_CIRCUMFERENCE) -> list[TierArc]:
    """Lay tiers out around the donut in input order.

    Each arc starts where the previous one ended: its offset is the
    cumulative share of the tiers before it times the circumference.
    """
    total = total_tier_rounds(tiers)
    arcs = []
    preceding = 0.0
    for tier in tiers:
        share = tier.rounds / total
        arcs.append(TierArc(
            tier=tier.tier,
            rounds=tier.rounds,
            share=share,
            length=share * circumference,
            offset=preceding * circumference
        ))
        preceding += share
    return arcs

@log_execution(level='DEBUG')
def load_dashboard(api: ParPassAPI) -> DashboardSnapshot:
    """Fetch all stats endpoints and derive the dashboard figures."""
    overview = api.get_overview_stats()
    popular = api.get_popular_courses()
    monthly = api.get_rounds_by_month()
    tiers = api.get_tier_breakdown()
    top_members = api.get_top_members()

    return DashboardSnapshot(
        overview=overview,
        popular_courses=popular,
        bars=popular_course_bars(popular),
        monthly_rounds=monthly,
        tier_breakdown=tiers,
        arcs=tier_arcs(tiers),
        total_tier_rounds=total_tier_rounds(tiers),
        top_members=top_members
    )
