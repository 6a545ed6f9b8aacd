"""Service implementations."""

from .course_service import CourseCatalog
from .credential_store import FileCredentialStore, MemoryCredentialStore
from .favorite_service import FavoriteToggler
from .history_service import group_rounds_by_month, summarize_history
from .review_service import ReviewAggregator
from .session_service import AuthState, SessionContext, resolve_session
from .stats_service import load_dashboard


__all__ = [
    'AuthState',
    'CourseCatalog',
    'FavoriteToggler',
    'FileCredentialStore',
    'MemoryCredentialStore',
    'ReviewAggregator',
    'SessionContext',
    'group_rounds_by_month',
    'load_dashboard',
    'resolve_session',
    'summarize_history',
]
