"""Review model."""

from dataclasses import dataclass
from typing import Any

from parpass.exceptions import APIValidationError
from parpass.utils.parsing import parse_count


@dataclass(frozen=True)
class Review:
    """A member's rating of a course."""
    id: str
    member_first_name: str
    rating: int
    comment: str | None = None
    created_at: str = ""
    member_id: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Review":
        if not isinstance(data, dict) or data.get('id') in (None, ''):
            raise APIValidationError("Review payload is missing an id", details={'payload': data})

        member_id = data.get('member_id')
        return cls(
            id=str(data['id']),
            member_first_name=str(data.get('member_first_name') or ''),
            rating=parse_count(data.get('rating')),
            comment=data.get('comment') or None,
            created_at=str(data.get('created_at') or ''),
            member_id=str(member_id) if member_id not in (None, '') else None
        )
