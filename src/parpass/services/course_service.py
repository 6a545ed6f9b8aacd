"""
Course browsing: tier filters, course detail, favorites and recommendations.
"""

from dataclasses import dataclass

from parpass.api.parpass_api import ParPassAPI
from parpass.api.recommendation_api import RecommendationAPI
from parpass.exceptions import APIError
from parpass.exceptions import ValidationError
from parpass.models.course import Course
from parpass.models.course import RecommendedCourse
from parpass.models.member import Member
from parpass.utils.logging_utils import LoggerMixin


TIER_FILTERS = ('all', 'core', 'premium')

@dataclass(frozen=True)
class CourseDetail:
    course: Course
    is_favorite: bool = False

class CourseCatalog(LoggerMixin):
    """Read-side course operations."""

    def __init__(self, api: ParPassAPI, recommender: RecommendationAPI | None = None) -> None:
        super().__init__()
        self.api = api
        self.recommender = recommender

    def list_courses(self, tier: str = 'all') -> list[Course]:
        """Courses for a tier filter; ``all`` applies no filter.

        Raises:
            ValidationError: If the filter is not all, core or premium
        """
        tier = (tier or 'all').lower()
        if tier not in TIER_FILTERS:
            raise ValidationError(f"Unknown tier filter: {tier}", details={'allowed': list(TIER_FILTERS)})
        return self.api.get_courses(None if tier == 'all' else tier)

    def course_detail(self, course_id: str, member: Member | None = None) -> CourseDetail:
        """A course and, for a signed-in member, whether it is a favorite."""
        course = self.api.get_course(course_id)
        if member is None:
            return CourseDetail(course=course)
        favorites = self.api.get_member_favorites(member.id)
        return CourseDetail(course=course, is_favorite=any(f.id == course.id for f in favorites))

    def favorites(self, member: Member) -> list[Course]:
        return self.api.get_member_favorites(member.id)

    def recommendations(self, member_id: str) -> list[RecommendedCourse]:
        """Suggestions from the recommendation service, or the API's own.

        The primary API's recommendation endpoint is used when no
        recommendation service is configured or it fails.
        """
        if self.recommender is not None:
            try:
                return self.recommender.get_recommendations(member_id)
            except APIError as e:
                self.warning(f"Recommendation service unavailable, using fallback: {e}")
        return self.api.get_member_recommendations(member_id)
