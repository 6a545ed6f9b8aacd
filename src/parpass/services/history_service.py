"""Round history grouped by month."""

from collections.abc import Sequence
from dataclasses import dataclass
from zoneinfo import ZoneInfo

from parpass.models.round import Round
from parpass.utils.logging_utils import get_logger
from parpass.utils.parsing import parse_timestamp


logger = get_logger(__name__)

UNDATED = "Undated"

@dataclass(frozen=True)
class HistoryGroup:
    label: str
    rounds: list[Round]

@dataclass(frozen=True)
class HistorySummary:
    total_rounds: int
    courses_played: int

def month_label(round_: Round, tz: ZoneInfo | None = None) -> str:
    """``"March 2024"`` style label for the month a round was checked in."""
    try:
        checked_in = parse_timestamp(round_.checked_in_at, tz)
    except ValueError:
        logger.debug(f"Round {round_.id} has unparseable check-in time {round_.checked_in_at!r}")
        return UNDATED
    return checked_in.strftime("%B %Y")

def group_rounds_by_month(rounds: Sequence[Round], tz: ZoneInfo | None = None) -> list[HistoryGroup]:
    """Partition rounds into month groups.

    Groups appear in the order their month first occurs in ``rounds`` and
    each keeps its rounds in source order. Nothing is sorted, so pass the
    history newest first to get a newest-first listing.
    """
    groups: dict[str, list[Round]] = {}
    for round_ in rounds:
        groups.setdefault(month_label(round_, tz), []).append(round_)
    return [HistoryGroup(label=label, rounds=members) for label, members in groups.items()]

def summarize_history(rounds: Sequence[Round]) -> HistorySummary:
    """Total rounds and number of distinct course names played."""
    return HistorySummary(
        total_rounds=len(rounds),
        courses_played=len({round_.course_name for round_ in rounds})
    )
