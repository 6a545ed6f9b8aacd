"""
Course models for the ParPass client.
"""

from dataclasses import dataclass
from dataclasses import replace
from typing import Any

from parpass.exceptions import APIValidationError
from parpass.utils.parsing import parse_count
from parpass.utils.parsing import parse_optional_float


def _require_id(data: Any, kind: str) -> str:
    if not isinstance(data, dict) or data.get('id') in (None, ''):
        raise APIValidationError(f"{kind} payload is missing an id", details={'payload': data})
    return str(data['id'])

@dataclass(frozen=True)
class CourseRating:
    """Aggregate rating of a course."""
    average_rating: float | None
    review_count: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CourseRating":
        if not isinstance(data, dict):
            raise APIValidationError("Rating payload must be an object", details={'payload': data})
        return cls(
            average_rating=parse_optional_float(data.get('average_rating')),
            review_count=parse_count(data.get('review_count'))
        )

@dataclass(frozen=True)
class Course:
    """Golf course in the ParPass network."""
    id: str
    name: str
    city: str = ""
    state: str = ""
    zip: str = ""
    holes: int = 18
    tier_required: str = "core"
    phone: str = ""
    latitude: str = ""
    longitude: str = ""
    average_rating: float | None = None
    review_count: int = 0

    @staticmethod
    def _fields_from_dict(data: dict[str, Any]) -> dict[str, Any]:
        return {
            'id': _require_id(data, 'Course'),
            'name': str(data.get('name') or ''),
            'city': str(data.get('city') or ''),
            'state': str(data.get('state') or ''),
            'zip': str(data.get('zip') or ''),
            'holes': parse_count(data.get('holes')) or 18,
            'tier_required': str(data.get('tier_required') or 'core').lower(),
            'phone': str(data.get('phone') or ''),
            'latitude': str(data.get('latitude') or ''),
            'longitude': str(data.get('longitude') or ''),
            'average_rating': parse_optional_float(data.get('average_rating')),
            'review_count': parse_count(data.get('review_count')),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Course":
        return cls(**cls._fields_from_dict(data))

    @property
    def location(self) -> str:
        place = ", ".join(part for part in (self.city, self.state) if part)
        return f"{place} {self.zip}".strip()

    def with_rating(self, rating: CourseRating) -> "Course":
        """Copy of the course carrying a freshly fetched aggregate rating."""
        return replace(self, average_rating=rating.average_rating, review_count=rating.review_count)

@dataclass(frozen=True)
class RecommendedCourse(Course):
    """Course suggested to a member, with the reason it was picked."""
    total_plays: int = 0
    unique_players: int = 0
    score: float = 0.0
    reason: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RecommendedCourse":
        fields = cls._fields_from_dict(data)
        fields.update(
            total_plays=parse_count(data.get('total_plays')),
            unique_players=parse_count(data.get('unique_players')),
            score=parse_optional_float(data.get('score')) or 0.0,
            reason=str(data.get('reason') or '')
        )
        return cls(**fields)
