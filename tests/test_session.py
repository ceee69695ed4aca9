"""Tests for session mutators and end-to-end key sequences."""

from __future__ import annotations

import random

from repo_picker.fuzzy import rank
from repo_picker.machine import classify
from repo_picker.session import Session
from repo_picker.types import Action, Mode


def _press(session: Session, *keys: str) -> None:
    for key in keys:
        session.apply(classify(session.mode, key), key)


def test_new_session_defaults(make_items):
    session = Session.create(make_items("alpha", "beta"))
    assert session.mode is Mode.NAVIGATION
    assert session.query == ""
    assert session.cursor.index == 0
    assert session.running is True
    assert session.selected is None


def test_typing_filters_and_resets_cursor(make_items):
    session = Session.create(make_items("alpha", "beta", "gamma"))
    session.move_down()
    session.move_down()
    session.type_char("b")
    assert session.cursor.index == 0
    assert session.view == rank("b", session.store.all_items)


def test_delete_on_empty_query_is_noop(make_items):
    items = make_items("alpha", "beta")
    session = Session.create(items)
    session.delete_char()
    assert session.query == ""
    assert session.view == tuple(items)


def test_current_item_none_on_empty_view(make_items):
    session = Session.create(make_items("alpha"))
    session.type_char("z")
    assert session.view == ()
    assert session.current_item is None
    session.move_down()
    session.move_up()
    assert session.cursor.index == 0


def test_confirm_on_empty_view_keeps_running(make_items):
    session = Session.create(make_items("alpha"))
    session.type_char("z")
    assert session.confirm() is None
    assert session.running is True


def test_quit_stops_without_selection(make_items):
    session = Session.create(make_items("alpha"))
    _press(session, "q")
    assert session.running is False
    assert session.selected is None


def test_edit_mode_typing_q_does_not_quit(make_items):
    session = Session.create(make_items("quux", "alpha"))
    _press(session, "i", "q")
    assert session.running is True
    assert session.query == "q"
    assert [item.name for item in session.view] == ["quux"]


def test_escape_returns_to_navigation_keeping_query(make_items, keys):
    session = Session.create(make_items("alpha", "beta"))
    _press(session, "i", "b", keys.ESC)
    assert session.mode is Mode.NAVIGATION
    assert session.query == "b"


def test_arrow_moves_preserve_mode(make_items, keys):
    session = Session.create(make_items("alpha", "beta"))
    _press(session, "i", keys.DOWN)
    assert session.mode is Mode.EDITING
    assert session.cursor.index == 1


def test_apply_ignore_changes_nothing(make_items):
    session = Session.create(make_items("alpha", "beta"))
    session.apply(Action.IGNORE, "x")
    assert session.query == ""
    assert session.cursor.index == 0
    assert session.mode is Mode.NAVIGATION


def test_cursor_stays_in_bounds_under_random_keys(make_items, keys):
    session = Session.create(make_items("alpha", "beta", "gamma", "delta", "alpine", "bravo"))
    pool = ["i", "a", "l", "p", "b", "z", "x", keys.BACKSPACE, keys.UP, keys.DOWN, keys.ESC, "j", "k"]
    rng = random.Random(7)
    for _ in range(500):
        _press(session, rng.choice(pool))
        view = session.view
        if view:
            assert 0 <= session.cursor.index < len(view)
        assert view == rank(session.query, session.store.all_items)


# ── end-to-end scenarios ──────────────────────────────────────────────────


def test_scenario_typing_filters_to_subsequence_match(make_items):
    session = Session.create(make_items("alpha", "beta", "gamma"))
    _press(session, "i", "g", "a")
    names = [item.name for item in session.view]
    assert "gamma" in names
    assert "alpha" not in names
    assert "beta" not in names


def test_scenario_down_twice_wraps_on_two_items(make_items, keys):
    session = Session.create(make_items("repoA", "repoB"))
    _press(session, keys.DOWN)
    assert session.cursor.index == 1
    _press(session, keys.DOWN)
    assert session.cursor.index == 0


def test_scenario_up_from_top_wraps_to_bottom(make_items, keys):
    session = Session.create(make_items("repoA", "repoB", "repoC"))
    _press(session, keys.UP)
    assert session.cursor.index == 2


def test_scenario_type_three_delete_two(make_items, keys):
    session = Session.create(make_items("repo", "rope", "other", "report"))
    _press(session, "i", "r", "e", "p", keys.BACKSPACE, keys.BACKSPACE)
    assert session.query == "r"
    assert session.view == rank("r", session.store.all_items)


def test_scenario_confirm_default_view_selects_first(make_items, keys):
    items = make_items("alpha", "beta")
    session = Session.create(items)
    _press(session, keys.ENTER)
    assert session.selected == items[0]
    assert session.running is False
