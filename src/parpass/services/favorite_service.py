"""
Optimistic favorite toggling.

The displayed favorite set changes as soon as the member asks for it. The
add/remove call follows and a failed call puts the previous state back.
Every toggle takes a per-course token; only the outcome of the most recent
toggle of a course is applied, so an older response that arrives late
cannot overwrite a newer choice.
"""

from dataclasses import dataclass
from itertools import count

from parpass.api.parpass_api import ParPassAPI
from parpass.exceptions import APIError
from parpass.exceptions import handle_errors
from parpass.models.member import Member
from parpass.utils.logging_utils import LoggerMixin


@dataclass(frozen=True)
class PendingToggle:
    """A toggle whose add/remove call has not completed."""
    course_id: str
    token: int
    previous: bool
    target: bool

class FavoriteToggler(LoggerMixin):
    """Favorite state of one member's courses, updated optimistically."""

    def __init__(self, api: ParPassAPI, member: Member | None, favorites: set[str] | None = None) -> None:
        super().__init__()
        self.api = api
        self.member = member
        self._favorites: set[str] = set(favorites or ())
        self._tokens = count(1)
        self._latest: dict[str, int] = {}
        if member is not None:
            self.set_log_context(member_id=member.id)

    @property
    def favorites(self) -> frozenset[str]:
        """Course ids currently displayed as favorites."""
        return frozenset(self._favorites)

    def is_favorite(self, course_id: str) -> bool:
        return course_id in self._favorites

    def is_pending(self, course_id: str) -> bool:
        return course_id in self._latest

    def load(self) -> frozenset[str]:
        """Replace the local set with the member's favorites from the API."""
        if self.member is None:
            return self.favorites
        courses = self.api.get_member_favorites(self.member.id)
        self._favorites = {course.id for course in courses}
        self._latest.clear()
        return self.favorites

    def _display(self, course_id: str, favorite: bool) -> None:
        if favorite:
            self._favorites.add(course_id)
        else:
            self._favorites.discard(course_id)

    def begin_toggle(self, course_id: str) -> PendingToggle | None:
        """Flip the displayed state and issue a token for the network call.

        Returns None, changing nothing, when no member is signed in.
        """
        if self.member is None:
            return None

        previous = course_id in self._favorites
        pending = PendingToggle(
            course_id=course_id,
            token=next(self._tokens),
            previous=previous,
            target=not previous
        )
        self._latest[course_id] = pending.token
        self._display(course_id, pending.target)
        return pending

    def complete_toggle(self, pending: PendingToggle, succeeded: bool) -> bool:
        """Apply the outcome of a toggle's network call.

        Outcomes of superseded toggles are discarded. A failed latest toggle
        restores the state displayed before it.

        Returns:
            The displayed favorite state of the course afterwards
        """
        if self._latest.get(pending.course_id) != pending.token:
            self.debug(
                "Discarding outcome of superseded toggle",
                course_id=pending.course_id,
                token=pending.token
            )
            return self.is_favorite(pending.course_id)

        del self._latest[pending.course_id]
        if not succeeded:
            self._display(pending.course_id, pending.previous)
        return self.is_favorite(pending.course_id)

    def _send(self, pending: PendingToggle) -> None:
        assert self.member is not None
        if pending.target:
            self.api.add_favorite(self.member.id, pending.course_id)
        else:
            self.api.remove_favorite(self.member.id, pending.course_id)

    def toggle(self, course_id: str) -> bool | None:
        """Toggle a course and wait for the API; no retry on failure.

        Returns:
            The displayed favorite state afterwards, or None when no member
            is signed in
        """
        pending = self.begin_toggle(course_id)
        if pending is None:
            return None

        succeeded = False

        def revert() -> None:
            self.complete_toggle(pending, succeeded=False)

        with self.log_context(course_id=course_id, token=pending.token):
            with handle_errors(APIError, 'favorites', 'toggle', fallback=revert):
                self._send(pending)
                succeeded = True

        if succeeded:
            return self.complete_toggle(pending, succeeded=True)
        return self.is_favorite(course_id)
