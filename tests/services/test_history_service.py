"""Tests for month grouping of round history."""

from zoneinfo import ZoneInfo

from parpass.models.round import Round
from parpass.services.history_service import (
    UNDATED,
    group_rounds_by_month,
    month_label,
    summarize_history,
)

def test_groups_follow_first_occurrence(history):
    groups = group_rounds_by_month(history)

    assert [group.label for group in groups] == ["March 2024", "February 2024"]
    assert [r.id for r in groups[0].rounds] == ["r3", "r2"]
    assert [r.id for r in groups[1].rounds] == ["r1"]

def test_groups_are_not_resorted():
    rounds = [
        Round(id="a", checked_in_at="2024-01-05T10:00:00", holes_played=18, course_name="X"),
        Round(id="b", checked_in_at="2024-03-05T10:00:00", holes_played=18, course_name="Y"),
        Round(id="c", checked_in_at="2024-01-20T10:00:00", holes_played=18, course_name="X"),
    ]
    groups = group_rounds_by_month(rounds)
    assert [(g.label, [r.id for r in g.rounds]) for g in groups] == [
        ("January 2024", ["a", "c"]),
        ("March 2024", ["b"]),
    ]

def test_month_label_uses_timezone():
    late = Round(id="r", checked_in_at="2024-04-01T03:00:00Z", holes_played=18, course_name="X")
    assert month_label(late) == "April 2024"
    assert month_label(late, ZoneInfo("America/Phoenix")) == "March 2024"

def test_unparseable_timestamp_is_undated():
    broken = Round(id="r", checked_in_at="yesterday", holes_played=18, course_name="X")
    assert month_label(broken) == UNDATED

def test_empty_history():
    assert group_rounds_by_month([]) == []
    summary = summarize_history([])
    assert (summary.total_rounds, summary.courses_played) == (0, 0)

def test_summary_counts_distinct_courses(history):
    summary = summarize_history(history)
    assert summary.total_rounds == 3
    assert summary.courses_played == 2
