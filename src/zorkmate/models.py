"""Database models for Zorkmate.

Only operator records and the walkthrough checklist live here; game state
stays inside the interpreter.
"""

import datetime as dt

from sqlmodel import Field, SQLModel, UniqueConstraint


class Player(SQLModel, table=True):
    id: int | None = Field(default=None, primary_key=True)
    fingerprint: str = Field(unique=True, index=True)
    created_at: dt.datetime = Field(
        default_factory=lambda: dt.datetime.now(dt.UTC)
    )
    last_seen: dt.datetime = Field(
        default_factory=lambda: dt.datetime.now(dt.UTC)
    )


class TaskCompletion(SQLModel, table=True):
    __table_args__ = (UniqueConstraint("player_id", "task_id"),)

    id: int | None = Field(default=None, primary_key=True)
    player_id: int = Field(foreign_key="player.id", index=True)
    task_id: str
    completed_at: dt.datetime = Field(
        default_factory=lambda: dt.datetime.now(dt.UTC)
    )
