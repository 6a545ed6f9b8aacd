"""
Course reviews: who may review, pre-filling the member's own review, and
submitting ratings.
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass
from dataclasses import field

from parpass.api.parpass_api import ParPassAPI
from parpass.exceptions import ActionPendingError
from parpass.exceptions import AuthError
from parpass.exceptions import ValidationError
from parpass.models.course import Course
from parpass.models.course import CourseRating
from parpass.models.member import Member
from parpass.models.review import Review
from parpass.models.round import Round
from parpass.utils.logging_utils import LoggerMixin


MIN_RATING = 1
MAX_RATING = 5

def played_course(history: Iterable[Round], course: Course) -> bool:
    """Whether the member's history has a round at this course.

    Rounds that carry a course id are matched on it. Older records without
    one are matched on the course name. Holes played does not matter.
    """
    for played in history:
        if played.course_id is not None:
            if played.course_id == course.id:
                return True
        elif played.course_name == course.name:
            return True
    return False

def find_member_review(reviews: Iterable[Review], member: Member) -> Review | None:
    """The member's existing review, if any.

    Reviews that carry a member id are matched on it, the rest on first name.
    """
    for review in reviews:
        if review.member_id is not None:
            if review.member_id == member.id:
                return review
        elif review.member_first_name == member.first_name:
            return review
    return None

def validate_rating(rating: object) -> int:
    """Check a submitted rating.

    Raises:
        ValidationError: Unless rating is an integer from 1 to 5
    """
    if rating is None or isinstance(rating, bool) or not isinstance(rating, int):
        raise ValidationError("Please select a rating", details={'rating': rating})
    if not MIN_RATING <= rating <= MAX_RATING:
        raise ValidationError(
            f"Rating must be between {MIN_RATING} and {MAX_RATING}",
            details={'rating': rating}
        )
    return rating

def rounded_rating(average: float | None) -> int:
    """Average rounded half up, 0 when there is no average."""
    if average is None:
        return 0
    return int(math.floor(average + 0.5))

def star_states(average: float | None) -> list[bool]:
    """Filled state of the five rating stars for an average."""
    filled = rounded_rating(average)
    return [star <= filled for star in range(MIN_RATING, MAX_RATING + 1)]

def format_rating(average: float | None, review_count: int = 0) -> str:
    """Stars plus the exact average, e.g. ``★★★★☆ 4.3 (12 reviews)``."""
    if average is None:
        return "No ratings yet"
    stars = "".join("★" if filled else "☆" for filled in star_states(average))
    noun = "review" if review_count == 1 else "reviews"
    return f"{stars} {average:.1f} ({review_count} {noun})"

@dataclass
class ReviewForm:
    """Values the review form opens with."""
    rating: int = 0
    comment: str = ""
    existing: Review | None = None

@dataclass
class CourseReviews:
    """Review state of one course as seen by one member."""
    course: Course
    reviews: list[Review] = field(default_factory=list)
    rating: CourseRating | None = None
    can_review: bool = False
    form: ReviewForm = field(default_factory=ReviewForm)
    submitting: bool = False

class ReviewAggregator(LoggerMixin):
    """Loads a course's reviews and submits the member's rating."""

    def __init__(self, api: ParPassAPI, member: Member | None = None) -> None:
        super().__init__()
        self.api = api
        self.member = member

    def _form_for(self, reviews: list[Review]) -> ReviewForm:
        if self.member is None:
            return ReviewForm()
        own = find_member_review(reviews, self.member)
        if own is None:
            return ReviewForm()
        return ReviewForm(rating=own.rating, comment=own.comment or "", existing=own)

    def load(self, course_id: str) -> CourseReviews:
        """Load course, reviews, rating and, for a member, review eligibility."""
        course = self.api.get_course(course_id)
        reviews = self.api.get_course_reviews(course_id)
        rating = CourseRating(course.average_rating, course.review_count)

        can_review = False
        if self.member is not None:
            history = self.api.get_member_history(self.member.id)
            can_review = played_course(history, course)

        return CourseReviews(
            course=course,
            reviews=reviews,
            rating=rating,
            can_review=can_review,
            form=self._form_for(reviews)
        )

    def submit(self, state: CourseReviews, rating: object, comment: str | None = None) -> CourseReviews:
        """Submit the member's rating and refresh reviews and rating.

        Validation happens before any network call. On success the review
        list and aggregate rating are replaced with freshly fetched ones.

        Raises:
            AuthError: If nobody is signed in or the member has not played here
            ValidationError: If the rating is missing or out of range
            ActionPendingError: If a submit for this course is in flight
            APIError: If the API rejects the review
        """
        if self.member is None:
            raise AuthError("Sign in to review courses")
        if not state.can_review:
            raise AuthError("Play a round here before reviewing", details={'course_id': state.course.id})
        valid_rating = validate_rating(rating)
        if state.submitting:
            raise ActionPendingError("Review submission already in progress", 'review_submit')

        text = (comment or "").strip() or None
        state.submitting = True
        try:
            with self.log_context(course_id=state.course.id, member_id=self.member.id):
                self.api.submit_review(state.course.id, self.member.id, valid_rating, text)
                reviews = self.api.get_course_reviews(state.course.id)
                course_rating = self.api.get_course_rating(state.course.id)
                self.info("Review submitted", rating=valid_rating)
        finally:
            state.submitting = False

        state.reviews = reviews
        state.rating = course_rating
        state.course = state.course.with_rating(course_rating)
        state.form = self._form_for(reviews)
        return state
