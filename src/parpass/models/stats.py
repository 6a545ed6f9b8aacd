"""
Dashboard statistics models.

Every count in the stats payloads is a numeric string; they are parsed to
integers here, with zero standing in for anything unparseable.
"""

from dataclasses import dataclass
from typing import Any

from parpass.exceptions import APIValidationError
from parpass.utils.parsing import parse_count


def _as_dict(data: Any, kind: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise APIValidationError(f"{kind} payload must be an object", details={'payload': data})
    return data

@dataclass(frozen=True)
class OverviewStats:
    """Network-wide headline figures."""
    active_members: int
    total_courses: int
    total_rounds: int
    rounds_this_month: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "OverviewStats":
        data = _as_dict(data, 'Overview')
        return cls(
            active_members=parse_count(data.get('active_members')),
            total_courses=parse_count(data.get('total_courses')),
            total_rounds=parse_count(data.get('total_rounds')),
            rounds_this_month=parse_count(data.get('rounds_this_month'))
        )

@dataclass(frozen=True)
class PopularCourse:
    """Course ranked by rounds played."""
    id: str
    name: str
    city: str
    tier_required: str
    total_rounds: int
    unique_members: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PopularCourse":
        data = _as_dict(data, 'Popular course')
        return cls(
            id=str(data.get('id') or ''),
            name=str(data.get('name') or ''),
            city=str(data.get('city') or ''),
            tier_required=str(data.get('tier_required') or ''),
            total_rounds=parse_count(data.get('total_rounds')),
            unique_members=parse_count(data.get('unique_members'))
        )

@dataclass(frozen=True)
class MonthlyRounds:
    """Rounds played in one calendar month."""
    month: str
    month_date: str
    rounds: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MonthlyRounds":
        data = _as_dict(data, 'Monthly rounds')
        return cls(
            month=str(data.get('month') or ''),
            month_date=str(data.get('month_date') or ''),
            rounds=parse_count(data.get('rounds'))
        )

@dataclass(frozen=True)
class TierBreakdown:
    """Rounds played by members of one tier."""
    tier: str
    rounds: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TierBreakdown":
        data = _as_dict(data, 'Tier breakdown')
        return cls(
            tier=str(data.get('tier') or ''),
            rounds=parse_count(data.get('rounds'))
        )

@dataclass(frozen=True)
class TopMember:
    """Member ranked by rounds played."""
    id: str
    first_name: str
    last_name: str
    health_plan: str
    tier: str
    total_rounds: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TopMember":
        data = _as_dict(data, 'Top member')
        return cls(
            id=str(data.get('id') or ''),
            first_name=str(data.get('first_name') or ''),
            last_name=str(data.get('last_name') or ''),
            health_plan=str(data.get('health_plan') or ''),
            tier=str(data.get('tier') or ''),
            total_rounds=parse_count(data.get('total_rounds'))
        )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
