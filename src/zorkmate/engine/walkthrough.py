"""Static walkthrough checklist data.

Tasks are a plain operator checklist; nothing here looks at game state.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Task:
    id: str
    text: str
    hint: str | None = None


@dataclass(frozen=True)
class Phase:
    id: str
    title: str
    description: str
    tasks: tuple[Task, ...] = ()


@dataclass
class Walkthrough:
    """All walkthrough phases in play order."""

    phases: list[Phase] = field(default_factory=list)

    def task_ids(self) -> list[str]:
        return [task.id for phase in self.phases for task in phase.tasks]

    def total_tasks(self) -> int:
        return sum(len(phase.tasks) for phase in self.phases)

    def get_task(self, task_id: str) -> Task:
        for phase in self.phases:
            for task in phase.tasks:
                if task.id == task_id:
                    return task
        raise KeyError(task_id)
