"""
Session handling: turning a stored ParPass code into a signed-in member.
"""

from dataclasses import dataclass
from typing import Any

from parpass.api.parpass_api import ParPassAPI
from parpass.exceptions import APIError
from parpass.exceptions import AuthError
from parpass.exceptions import CredentialError
from parpass.exceptions import ValidationError
from parpass.models.member import Member
from parpass.models.member import Usage
from parpass.services.credential_store import CredentialStore
from parpass.utils.logging_utils import get_logger
from parpass.utils.logging_utils import LoggerMixin


logger = get_logger(__name__)

@dataclass(frozen=True)
class AuthState:
    """Signed-in member and their usage, or neither."""
    member: Member | None = None
    usage: Usage | None = None

    @property
    def is_signed_in(self) -> bool:
        return self.member is not None and self.usage is not None

SIGNED_OUT = AuthState()

def _clear_quietly(store: CredentialStore) -> None:
    try:
        store.clear()
    except CredentialError as e:
        logger.warning(f"Could not clear stored ParPass code: {e}")

def resolve_session(store: CredentialStore, api: ParPassAPI) -> AuthState:
    """Resolve the stored code into a member and their usage.

    Both are loaded or neither is. Any lookup failure invalidates the stored
    code and yields the signed-out state.
    """
    code = store.get()
    if not code:
        return SIGNED_OUT

    try:
        member = api.get_member_by_code(code)
        usage = api.get_member_usage(member.id)
    except APIError as e:
        logger.info(f"Stored ParPass code could not be resolved, signing out: {e}")
        _clear_quietly(store)
        return SIGNED_OUT

    return AuthState(member=member, usage=usage)

class SessionContext(LoggerMixin):
    """Explicit session passed to the operations that need a member.

    Lifecycle: ``load()`` from the stored code or ``sign_in(code)``, then
    ``refresh_usage()`` as needed, and ``sign_out()`` to clear everything.
    """

    def __init__(self, api: ParPassAPI, store: CredentialStore) -> None:
        super().__init__()
        self.api = api
        self.store = store
        self.state: AuthState = SIGNED_OUT
        # True when a check-in went through but the usage reload after it failed
        self.usage_stale = False

    @property
    def member(self) -> Member | None:
        return self.state.member

    @property
    def usage(self) -> Usage | None:
        return self.state.usage

    @property
    def is_signed_in(self) -> bool:
        return self.state.is_signed_in

    @property
    def rounds_remaining(self) -> int | None:
        if not self.state.is_signed_in:
            return None
        assert self.state.member is not None and self.state.usage is not None
        return self.state.member.rounds_remaining(self.state.usage)

    def load(self) -> AuthState:
        """Resolve the stored code, replacing the current state."""
        self.state = resolve_session(self.store, self.api)
        self.usage_stale = False
        if self.state.member:
            self.set_log_context(member_id=self.state.member.id)
        return self.state

    def sign_in(self, code: str) -> AuthState:
        """Look up a code and persist it once the member is found.

        Raises:
            ValidationError: If the code is blank
            AuthError: If no member could be loaded for the code
        """
        normalized = (code or '').strip().upper()
        if not normalized:
            raise ValidationError("ParPass code is required")

        try:
            member = self.api.get_member_by_code(normalized)
            usage = self.api.get_member_usage(member.id)
        except APIError as e:
            raise AuthError("Invalid ParPass code", details={'reason': e.code.value}) from e

        self.store.set(normalized)
        self.state = AuthState(member=member, usage=usage)
        self.set_log_context(member_id=member.id)
        self.info("Signed in")
        return self.state

    def refresh_usage(self) -> Usage | None:
        """Reload usage for the signed-in member."""
        if self.state.member is None:
            return None
        usage = self.api.get_member_usage(self.state.member.id)
        self.state = AuthState(member=self.state.member, usage=usage)
        self.usage_stale = False
        return usage

    def check_in(self, course_id: str, holes_played: int = 18) -> dict[str, Any]:
        """Check the member in at a course, then reload their usage.

        The check-in is not undone when the reload fails; the previous usage
        is kept and ``usage_stale`` is set.

        Raises:
            AuthError: If nobody is signed in
            ValidationError: If holes_played is not positive
            APIError: If the check-in is refused
        """
        if self.state.member is None:
            raise AuthError("Sign in to check in")
        if holes_played <= 0:
            raise ValidationError("Holes played must be positive", details={'holes_played': holes_played})

        result = self.api.check_in(self.state.member.id, course_id, holes_played)
        self.info(f"Checked in at course {course_id}", holes_played=holes_played)
        try:
            self.refresh_usage()
        except APIError as e:
            self.usage_stale = True
            self.warning(f"Checked in, but usage could not be reloaded: {e}", course_id=course_id)
        return result

    def sign_out(self) -> None:
        """Forget the member and the stored code."""
        self.store.clear()
        self.state = SIGNED_OUT
        self.usage_stale = False
        self.clear_log_context()

    clear = sign_out
