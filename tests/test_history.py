"""Tests for the navigation history stack."""

import pytest

from errors import KanjiBrowserError, NoHistoryError
from history import NavigationHistory
from models import PageState

A = PageState.search_results("日本")
B = PageState.kanji("日")
C = PageState.word("日本", "にほん")
D = PageState.kanji("本")


def test_empty_history():
    history = NavigationHistory()
    assert len(history) == 0
    assert history.cursor == -1
    assert history.current() is None
    assert not history.can_go_back()
    assert not history.can_go_forward()


@pytest.mark.parametrize("step", ["back", "forward"])
def test_empty_history_has_nowhere_to_go(step):
    with pytest.raises(NoHistoryError):
        getattr(NavigationHistory(), step)()


def test_push_replaces_forward_history():
    history = NavigationHistory()
    history.reset(A)
    history.push(B)
    history.push(C)
    assert history.back() == B
    history.push(D)
    assert history.entries == [A, B, D]
    with pytest.raises(NoHistoryError):
        history.forward()


def test_back_and_forward():
    history = NavigationHistory()
    for state in (A, B, C):
        history.push(state)
    assert history.current() == C
    assert history.back() == B
    assert history.back() == A
    assert history.forward() == B
    assert history.forward() == C
    assert history.current() == C


def test_back_stops_at_first_page():
    history = NavigationHistory()
    history.push(A)
    history.push(B)
    history.back()
    with pytest.raises(NoHistoryError):
        history.back()
    assert history.current() == A
    assert history.cursor == 0


def test_flags_follow_cursor():
    history = NavigationHistory()
    history.push(A)
    assert not history.can_go_back()
    assert not history.can_go_forward()

    history.push(B)
    assert history.can_go_back()
    assert not history.can_go_forward()

    history.back()
    assert not history.can_go_back()
    assert history.can_go_forward()

    nav = history.navigation_state()
    assert nav.can_go_back is False
    assert nav.can_go_forward is True


def test_reset_discards_everything():
    history = NavigationHistory()
    for state in (A, B, C):
        history.push(state)
    history.back()
    history.reset(D)
    assert history.entries == [D]
    assert history.cursor == 0
    assert not history.can_go_back()
    assert not history.can_go_forward()


def test_clear():
    history = NavigationHistory()
    history.push(A)
    history.clear()
    assert len(history) == 0
    assert history.cursor == -1
    assert history.current() is None


def test_limit_drops_oldest_pages():
    history = NavigationHistory(limit=3)
    for state in (A, B, C, D):
        history.push(state)
    assert history.entries == [B, C, D]
    assert history.cursor == 2
    assert history.current() == D
    assert history.back() == C


def test_limit_after_going_back():
    history = NavigationHistory(limit=2)
    history.push(A)
    history.push(B)
    history.back()
    history.push(C)
    assert history.entries == [A, C]
    assert history.current() == C


def test_invalid_limit():
    with pytest.raises(ValueError):
        NavigationHistory(limit=0)


def test_entries_is_a_copy():
    history = NavigationHistory()
    history.push(A)
    history.entries.append(B)
    assert len(history) == 1


def test_no_history_error_is_browser_error():
    assert issubclass(NoHistoryError, KanjiBrowserError)


def test_pushing_the_same_page_twice():
    history = NavigationHistory()
    history.push(B)
    history.push(B)
    assert len(history) == 2
    assert history.back() == B
