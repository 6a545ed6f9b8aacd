"""
Member model for the ParPass client.
"""

from dataclasses import dataclass
from typing import Any

from parpass.exceptions import APIValidationError
from parpass.utils.parsing import parse_count


TIERS = ('core', 'premium')

@dataclass(frozen=True)
class Usage:
    """Rounds consumed by a member in the current period."""
    rounds_used: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Usage":
        if not isinstance(data, dict):
            raise APIValidationError("Usage payload must be an object", details={'payload': data})
        return cls(rounds_used=parse_count(data.get('rounds_used')))

@dataclass(frozen=True)
class Member:
    """ParPass member as returned by the member lookup."""
    id: str
    first_name: str
    last_name: str
    tier: str
    monthly_rounds: int
    email: str = ""
    parpass_code: str = ""
    status: str = ""
    health_plan_name: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Member":
        """
        Create Member from an API payload.

        Args:
            data: Member payload

        Returns:
            Member instance

        Raises:
            APIValidationError: If the payload has no member id
        """
        if not isinstance(data, dict) or data.get('id') in (None, ''):
            raise APIValidationError("Member payload is missing an id", details={'payload': data})

        return cls(
            id=str(data['id']),
            first_name=str(data.get('first_name') or ''),
            last_name=str(data.get('last_name') or ''),
            tier=str(data.get('tier') or 'core').lower(),
            monthly_rounds=parse_count(data.get('monthly_rounds')),
            email=str(data.get('email') or ''),
            parpass_code=str(data.get('parpass_code') or ''),
            status=str(data.get('status') or ''),
            health_plan_name=str(data.get('health_plan_name') or '')
        )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def rounds_remaining(self, usage: Usage) -> int:
        """Rounds left this period; negative when the allowance is overdrawn."""
        return self.monthly_rounds - usage.rounds_used
