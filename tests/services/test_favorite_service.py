"""Tests for optimistic favorite toggling."""

from parpass.exceptions import APIResponseError
from parpass.models.course import Course
from parpass.services.favorite_service import FavoriteToggler

def test_load_replaces_local_set(api, member):
    api.get_member_favorites.return_value = [Course(id="c1", name="Desert Ridge"), Course(id="c2", name="Papago")]
    toggler = FavoriteToggler(api, member, favorites={"c9"})

    assert toggler.load() == frozenset({"c1", "c2"})

def test_toggle_adds_and_removes(api, member):
    toggler = FavoriteToggler(api, member)

    assert toggler.toggle("c1") is True
    api.add_favorite.assert_called_once_with(member.id, "c1")

    assert toggler.toggle("c1") is False
    api.remove_favorite.assert_called_once_with(member.id, "c1")
    assert not toggler.is_pending("c1")

def test_failed_toggle_rolls_back(api, member):
    api.remove_favorite.side_effect = APIResponseError("Request failed: HTTP 500", status_code=500)
    toggler = FavoriteToggler(api, member, favorites={"c1"})

    assert toggler.toggle("c1") is True
    assert toggler.favorites == frozenset({"c1"})
    assert not toggler.is_pending("c1")
    api.remove_favorite.assert_called_once()

def test_optimistic_state_visible_before_completion(api, member):
    toggler = FavoriteToggler(api, member)

    pending = toggler.begin_toggle("c1")

    assert toggler.is_favorite("c1")
    assert toggler.is_pending("c1")
    assert (pending.previous, pending.target) == (False, True)

def test_stale_outcome_is_discarded(api, member):
    """Only the latest toggle of a course decides its state."""
    toggler = FavoriteToggler(api, member)
    first = toggler.begin_toggle("c1")
    second = toggler.begin_toggle("c1")
    assert not toggler.is_favorite("c1")

    # First call fails late; it must not undo the second toggle
    assert toggler.complete_toggle(first, succeeded=False) is False
    assert toggler.is_pending("c1")

    assert toggler.complete_toggle(second, succeeded=True) is False
    assert not toggler.is_pending("c1")

def test_latest_failure_restores_state_before_it(api, member):
    toggler = FavoriteToggler(api, member)
    first = toggler.begin_toggle("c1")
    second = toggler.begin_toggle("c1")

    toggler.complete_toggle(second, succeeded=False)
    toggler.complete_toggle(first, succeeded=True)

    assert toggler.is_favorite("c1")

def test_courses_are_independent(api, member):
    toggler = FavoriteToggler(api, member)
    a = toggler.begin_toggle("c1")
    b = toggler.begin_toggle("c2")

    toggler.complete_toggle(b, succeeded=False)
    toggler.complete_toggle(a, succeeded=True)

    assert toggler.favorites == frozenset({"c1"})

def test_no_member_changes_nothing(api):
    toggler = FavoriteToggler(api, None)

    assert toggler.toggle("c1") is None
    assert toggler.begin_toggle("c1") is None
    assert toggler.favorites == frozenset()
    api.add_favorite.assert_not_called()
