"""Round model."""

from dataclasses import dataclass
from typing import Any

from parpass.exceptions import APIValidationError
from parpass.utils.parsing import parse_count


@dataclass(frozen=True)
class Round:
    """A completed check-in, with a snapshot of the course it was played at."""
    id: str
    checked_in_at: str
    holes_played: int
    course_name: str
    city: str = ""
    state: str = ""
    tier_required: str = "core"
    course_id: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Round":
        if not isinstance(data, dict) or data.get('id') in (None, ''):
            raise APIValidationError("Round payload is missing an id", details={'payload': data})

        course_id = data.get('course_id')
        return cls(
            id=str(data['id']),
            checked_in_at=str(data.get('checked_in_at') or ''),
            holes_played=parse_count(data.get('holes_played')),
            course_name=str(data.get('course_name') or ''),
            city=str(data.get('city') or ''),
            state=str(data.get('state') or ''),
            tier_required=str(data.get('tier_required') or 'core').lower(),
            course_id=str(course_id) if course_id not in (None, '') else None
        )
