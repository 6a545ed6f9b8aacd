"""
Models package for the ParPass client.
Contains data models for the records served by the ParPass API.
"""

from .course import Course, CourseRating, RecommendedCourse
from .member import Member, Usage
from .review import Review
from .round import Round
from .stats import MonthlyRounds, OverviewStats, PopularCourse, TierBreakdown, TopMember

__all__ = [
    'Course',
    'CourseRating',
    'Member',
    'MonthlyRounds',
    'OverviewStats',
    'PopularCourse',
    'RecommendedCourse',
    'Review',
    'Round',
    'TierBreakdown',
    'TopMember',
    'Usage',
]
