"""
ParPass REST API client.
"""

from typing import Any
from urllib.parse import quote

from parpass.api.base_api import BaseAPI
from parpass.exceptions import APIValidationError
from parpass.models.course import Course
from parpass.models.course import CourseRating
from parpass.models.course import RecommendedCourse
from parpass.models.member import Member
from parpass.models.member import Usage
from parpass.models.review import Review
from parpass.models.round import Round
from parpass.models.stats import MonthlyRounds
from parpass.models.stats import OverviewStats
from parpass.models.stats import PopularCourse
from parpass.models.stats import TierBreakdown
from parpass.models.stats import TopMember


__all__ = ['ParPassAPI']

def _segment(value: str) -> str:
    """Quote a value used as a single path segment."""
    return quote(str(value), safe='')

class ParPassAPI(BaseAPI):
    """Client for the ParPass courses, members, check-in and stats endpoints."""

    # Courses

    def get_courses(self, tier: str | None = None) -> list[Course]:
        """List courses, optionally only those requiring ``tier``."""
        params = {'tier': tier} if tier else None
        return [Course.from_dict(item) for item in self._get_list('/courses', params=params)]

    def get_course(self, course_id: str) -> Course:
        return Course.from_dict(self._get_object(f'/courses/{_segment(course_id)}'))

    def get_course_reviews(self, course_id: str) -> list[Review]:
        return [Review.from_dict(item) for item in self._get_list(f'/courses/{_segment(course_id)}/reviews')]

    def get_course_rating(self, course_id: str) -> CourseRating:
        return CourseRating.from_dict(self._get_object(f'/courses/{_segment(course_id)}/rating'))

    def submit_review(self, course_id: str, member_id: str, rating: int, comment: str | None = None) -> Review | None:
        """Create or update the member's review of a course."""
        result = self._make_request(
            "POST",
            f'/courses/{_segment(course_id)}/reviews',
            data={'member_id': member_id, 'rating': rating, 'comment': comment}
        )
        return Review.from_dict(result) if isinstance(result, dict) and result.get('id') else None

    # Members

    def get_member_by_code(self, code: str) -> Member:
        """Look up a member by ParPass code.

        Raises:
            APINotFoundError: If no member has this code
        """
        return Member.from_dict(self._get_object(f'/members/code/{_segment(code)}'))

    def get_member_usage(self, member_id: str) -> Usage:
        return Usage.from_dict(self._get_object(f'/members/{_segment(member_id)}/usage'))

    def get_member_favorites(self, member_id: str) -> list[Course]:
        return [Course.from_dict(item) for item in self._get_list(f'/members/{_segment(member_id)}/favorites')]

    def add_favorite(self, member_id: str, course_id: str) -> dict[str, Any] | None:
        result = self._make_request(
            "POST",
            f'/members/{_segment(member_id)}/favorites',
            data={'course_id': course_id}
        )
        return result if isinstance(result, dict) else None

    def remove_favorite(self, member_id: str, course_id: str) -> dict[str, Any] | None:
        result = self._make_request(
            "DELETE",
            f'/members/{_segment(member_id)}/favorites/{_segment(course_id)}'
        )
        return result if isinstance(result, dict) else None

    def get_member_history(self, member_id: str) -> list[Round]:
        return [Round.from_dict(item) for item in self._get_list(f'/members/{_segment(member_id)}/history')]

    def get_member_recommendations(self, member_id: str) -> list[RecommendedCourse]:
        """Recommendations computed by the primary API."""
        items = self._get_list(f'/members/{_segment(member_id)}/recommendations')
        return [RecommendedCourse.from_dict(item) for item in items]

    def check_in(self, member_id: str, course_id: str, holes_played: int = 18) -> dict[str, Any]:
        """Record a round at a course.

        Raises:
            APIResponseError: If the check-in is refused, e.g. allowance used up
        """
        result = self._make_request(
            "POST",
            '/check-in',
            data={'member_id': member_id, 'course_id': course_id, 'holes_played': holes_played}
        )
        if not isinstance(result, dict):
            raise APIValidationError("Check-in response must be an object", details={'payload': result})
        return result

    # Stats

    def get_overview_stats(self) -> OverviewStats:
        return OverviewStats.from_dict(self._get_object('/stats/overview'))

    def get_popular_courses(self) -> list[PopularCourse]:
        return [PopularCourse.from_dict(item) for item in self._get_list('/stats/popular-courses')]

    def get_rounds_by_month(self) -> list[MonthlyRounds]:
        return [MonthlyRounds.from_dict(item) for item in self._get_list('/stats/rounds-by-month')]

    def get_tier_breakdown(self) -> list[TierBreakdown]:
        return [TierBreakdown.from_dict(item) for item in self._get_list('/stats/tier-breakdown')]

    def get_top_members(self) -> list[TopMember]:
        return [TopMember.from_dict(item) for item in self._get_list('/stats/top-members')]
