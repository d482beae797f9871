"""Operator records and walkthrough checklist progress."""

import datetime as dt

from sqlmodel import Session, select

from .engine.walkthrough import Walkthrough
from .logging import get_logger
from .models import Player, TaskCompletion

logger = get_logger(__name__)


def get_or_create_player(session: Session, fingerprint: str) -> Player:
    """Look up the operator by certificate fingerprint, creating on first visit."""
    player = session.exec(
        select(Player).where(Player.fingerprint == fingerprint)
    ).first()

    if player is None:
        player = Player(fingerprint=fingerprint)
        session.add(player)
        logger.info("player_created", fingerprint=fingerprint)
    else:
        player.last_seen = dt.datetime.now(dt.UTC)

    session.commit()
    session.refresh(player)
    return player


class WalkthroughProgress:
    """Tasks an operator has ticked off. Never derived from game state."""

    def __init__(self, db_session: Session, player: Player, walkthrough: Walkthrough):
        self.db_session = db_session
        self.player = player
        self.walkthrough = walkthrough

    def completed(self) -> set[str]:
        rows = self.db_session.exec(
            select(TaskCompletion.task_id).where(
                TaskCompletion.player_id == self.player.id
            )
        )
        return set(rows.all())

    def is_done(self, task_id: str) -> bool:
        return self._row(task_id) is not None

    def mark_done(self, task_id: str) -> None:
        self.walkthrough.get_task(task_id)
        if self._row(task_id) is None:
            self.db_session.add(
                TaskCompletion(player_id=self.player.id, task_id=task_id)
            )
            self.db_session.commit()

    def toggle(self, task_id: str) -> bool:
        """Flip a task; return whether it is now done."""
        self.walkthrough.get_task(task_id)
        row = self._row(task_id)
        if row is None:
            self.db_session.add(
                TaskCompletion(player_id=self.player.id, task_id=task_id)
            )
            done = True
        else:
            self.db_session.delete(row)
            done = False
        self.db_session.commit()
        logger.debug(
            "task_toggled",
            fingerprint=self.player.fingerprint,
            task_id=task_id,
            done=done,
        )
        return done

    def reset(self) -> None:
        for row in self.db_session.exec(
            select(TaskCompletion).where(TaskCompletion.player_id == self.player.id)
        ).all():
            self.db_session.delete(row)
        self.db_session.commit()

    def _row(self, task_id: str) -> TaskCompletion | None:
        return self.db_session.exec(
            select(TaskCompletion).where(
                TaskCompletion.player_id == self.player.id,
                TaskCompletion.task_id == task_id,
            )
        ).first()
