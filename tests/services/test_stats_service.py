"""Tests for dashboard chart geometry."""

import math

import pytest

from parpass.models.stats import OverviewStats, PopularCourse, TierBreakdown, TopMember
from parpass.services.stats_service import (
    DONUT_CIRCUMFERENCE,
    bar_widths,
    load_dashboard,
    popular_course_bars,
    tier_arcs,
    total_tier_rounds,
)

def _popular(course_id, rounds):
    return PopularCourse(id=course_id, name=f"Course {course_id}", city="Phoenix",
                         tier_required="core", total_rounds=rounds, unique_members=1)

def test_donut_circumference():
    assert DONUT_CIRCUMFERENCE == pytest.approx(2 * math.pi * 40)

@pytest.mark.parametrize("rounds,expected", [
    ([40, 10, 0], [100.0, 25.0, 0.0]),
    ([0, 0], [0.0, 0.0]),
    ([], []),
    ([3], [100.0]),
])
def test_bar_widths(rounds, expected):
    assert bar_widths(rounds) == pytest.approx(expected)

def test_popular_course_bars_keep_order():
    bars = popular_course_bars([_popular("a", 40), _popular("b", 10)])
    assert [bar.course.id for bar in bars] == ["a", "b"]
    assert [bar.width_percent for bar in bars] == pytest.approx([100.0, 25.0])

def test_tier_arcs():
    arcs = tier_arcs([TierBreakdown("core", 30), TierBreakdown("premium", 70)])

    assert [arc.share for arc in arcs] == pytest.approx([0.3, 0.7])
    assert arcs[0].length == pytest.approx(0.3 * DONUT_CIRCUMFERENCE)
    assert arcs[0].offset == 0
    assert arcs[1].offset == pytest.approx(0.3 * DONUT_CIRCUMFERENCE)
    assert arcs[1].percent == pytest.approx(70.0)
    assert sum(arc.length for arc in arcs) == pytest.approx(DONUT_CIRCUMFERENCE)

def test_tier_arcs_all_zero():
    tiers = [TierBreakdown("core", 0), TierBreakdown("premium", 0)]
    assert total_tier_rounds(tiers) == 1
    assert [arc.share for arc in tier_arcs(tiers)] == [0.0, 0.0]

def test_total_tier_rounds_empty():
    assert total_tier_rounds([]) == 1
    assert tier_arcs([]) == []

def test_load_dashboard(api):
    api.get_overview_stats.return_value = OverviewStats(120, 14, 987, 42)
    api.get_popular_courses.return_value = [_popular("a", 40), _popular("b", 10)]
    api.get_rounds_by_month.return_value = []
    api.get_tier_breakdown.return_value = [TierBreakdown("core", 30), TierBreakdown("premium", 70)]
    api.get_top_members.return_value = [TopMember("m1", "Sarah", "Johnson", "Humana Gold", "core", 22)]

    snapshot = load_dashboard(api)

    assert snapshot.overview.total_rounds == 987
    assert [bar.width_percent for bar in snapshot.bars] == pytest.approx([100.0, 25.0])
    assert snapshot.total_tier_rounds == 100
    assert len(snapshot.arcs) == 2
    assert snapshot.top_members[0].full_name == "Sarah Johnson"
