"""Task, person and milestone records."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date


@dataclass(frozen=True)
class Person:
    id: str
    name: str = ""
    role: str = ""


@dataclass(frozen=True)
class Task:
    """Immutable task record. Stores replace it wholesale on update.

    Attributes:
        id: Unique task id.
        assignee_id: Person the task belongs to.
        discovery_percent: Share of the work that is discovery, 0-100.
        percent_complete: Progress, 0-100.
        expected_date: Due date, or None when the task is undated.
        milestone_id: Milestone the task contributes to, if any.
        category: Free-form label, shown as the carried resource type.
    """

    id: str
    assignee_id: str
    name: str = ""
    discovery_percent: float = 50.0
    percent_complete: float = 0.0
    expected_date: date | None = None
    milestone_id: str | None = None
    category: str | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Task id must be non-empty")
        if not 0.0 <= self.discovery_percent <= 100.0:
            raise ValueError(
                f"discovery_percent must be in [0, 100], got {self.discovery_percent}"
            )
        if not 0.0 <= self.percent_complete <= 100.0:
            raise ValueError(
                f"percent_complete must be in [0, 100], got {self.percent_complete}"
            )

    @property
    def execution_percent(self) -> float:
        return 100.0 - self.discovery_percent

    @property
    def is_complete(self) -> bool:
        return self.percent_complete >= 100.0


@dataclass(frozen=True)
class Milestone:
    id: str
    name: str = ""
    task_ids: tuple[str, ...] = field(default_factory=tuple)
