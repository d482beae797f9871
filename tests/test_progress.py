"""Tests for operator records and walkthrough progress."""

import pytest
from sqlmodel import Session

from zorkmate.engine.walkthrough import Walkthrough
from zorkmate.models import Player
from zorkmate.progress import WalkthroughProgress, get_or_create_player


@pytest.fixture
def progress(db_session: Session, test_player: Player, walkthrough: Walkthrough):
    return WalkthroughProgress(db_session, test_player, walkthrough)


def test_get_or_create_player(db_session: Session):
    first = get_or_create_player(db_session, "fp-1")
    again = get_or_create_player(db_session, "fp-1")
    assert first.id == again.id
    assert get_or_create_player(db_session, "fp-2").id != first.id


def test_starts_empty(progress: WalkthroughProgress):
    assert progress.completed() == set()


def test_toggle(progress: WalkthroughProgress):
    assert progress.toggle("p1_lamp") is True
    assert progress.is_done("p1_lamp")
    assert progress.completed() == {"p1_lamp"}

    assert progress.toggle("p1_lamp") is False
    assert progress.completed() == set()


def test_mark_done_is_idempotent(progress: WalkthroughProgress):
    progress.mark_done("p2_dam")
    progress.mark_done("p2_dam")
    assert progress.completed() == {"p2_dam"}


def test_unknown_task(progress: WalkthroughProgress):
    with pytest.raises(KeyError):
        progress.toggle("p9_nothing")
    with pytest.raises(KeyError):
        progress.mark_done("p9_nothing")


def test_reset(progress: WalkthroughProgress):
    progress.mark_done("p1_egg")
    progress.mark_done("p1_enter")
    progress.reset()
    assert progress.completed() == set()


def test_players_are_independent(
    db_session: Session, progress: WalkthroughProgress, walkthrough: Walkthrough
):
    other = get_or_create_player(db_session, "someone-else")
    other_progress = WalkthroughProgress(db_session, other, walkthrough)

    progress.mark_done("p1_egg")
    assert other_progress.completed() == set()
