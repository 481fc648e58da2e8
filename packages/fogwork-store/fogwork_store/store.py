"""TaskStore protocol and an in-memory implementation with queued change events."""
from __future__ import annotations

import dataclasses
from typing import Any, Callable, Protocol

from loguru import logger

from fogwork_store.records import Milestone, Person, Task

ChangeListener = Callable[[str, dict[str, Any]], None]


class TaskStore(Protocol):
    def get_people(self) -> list[Person]: ...
    def get_person(self, person_id: str) -> Person | None: ...
    def get_tasks(self) -> list[Task]: ...
    def get_tasks_for_person(self, person_id: str) -> list[Task]: ...
    def get_task(self, task_id: str) -> Task | None: ...
    def get_milestones(self) -> list[Milestone]: ...
    def get_milestone(self, milestone_id: str) -> Milestone | None: ...
    def update_task(self, task_id: str, **changes: Any) -> Task | None: ...


class InMemoryTaskStore:
    """Dict-backed store. Insertion order is preserved for every query.

    Mutations queue a change event; ``flush()`` delivers queued events to
    subscribers, so the host loop decides when listeners run.
    """

    def __init__(
        self,
        people: list[Person] | None = None,
        tasks: list[Task] | None = None,
        milestones: list[Milestone] | None = None,
    ) -> None:
        self._people: dict[str, Person] = {p.id: p for p in people or ()}
        self._tasks: dict[str, Task] = {t.id: t for t in tasks or ()}
        self._milestones: dict[str, Milestone] = {m.id: m for m in milestones or ()}
        for task in self._tasks.values():
            self._link_milestone(task)
        self._listeners: list[ChangeListener] = []
        self._queue: list[tuple[str, dict[str, Any]]] = []

    # --- Change notification ---

    def subscribe(self, listener: ChangeListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: ChangeListener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    def _emit(self, kind: str, **data: Any) -> None:
        self._queue.append((kind, data))

    def pending(self) -> int:
        return len(self._queue)

    def flush(self) -> None:
        snapshot = self._queue
        self._queue = []
        for kind, data in snapshot:
            for listener in list(self._listeners):
                listener(kind, data)

    # --- Queries ---

    def get_people(self) -> list[Person]:
        return list(self._people.values())

    def get_person(self, person_id: str) -> Person | None:
        return self._people.get(person_id)

    def get_tasks(self) -> list[Task]:
        return list(self._tasks.values())

    def get_tasks_for_person(self, person_id: str) -> list[Task]:
        return [t for t in self._tasks.values() if t.assignee_id == person_id]

    def get_task(self, task_id: str) -> Task | None:
        return self._tasks.get(task_id)

    def get_milestones(self) -> list[Milestone]:
        return list(self._milestones.values())

    def get_milestone(self, milestone_id: str) -> Milestone | None:
        return self._milestones.get(milestone_id)

    # --- Mutations ---

    def add_person(self, person: Person) -> None:
        self._people[person.id] = person
        self._emit("person_added", person_id=person.id)

    def remove_person(self, person_id: str) -> None:
        if self._people.pop(person_id, None) is None:
            return
        for task_id in [t.id for t in self._tasks.values() if t.assignee_id == person_id]:
            del self._tasks[task_id]
        self._emit("person_removed", person_id=person_id)

    def add_task(self, task: Task) -> None:
        self._tasks[task.id] = task
        self._link_milestone(task)
        self._emit("task_added", task_id=task.id)

    def _link_milestone(self, task: Task) -> None:
        # Milestone.task_ids drives progress; keep it in step with Task.milestone_id.
        milestone = self._milestones.get(task.milestone_id) if task.milestone_id else None
        if milestone is not None and task.id not in milestone.task_ids:
            self._milestones[milestone.id] = dataclasses.replace(
                milestone, task_ids=milestone.task_ids + (task.id,),
            )

    def update_task(self, task_id: str, **changes: Any) -> Task | None:
        """Replace a task with ``changes`` applied. Unknown ids return None."""
        task = self._tasks.get(task_id)
        if task is None:
            logger.warning("update_task on missing task {}", task_id)
            return None
        updated = dataclasses.replace(task, **changes)
        self._tasks[task_id] = updated
        self._link_milestone(updated)
        self._emit("task_updated", task_id=task_id, changes=changes)
        return updated

    def remove_task(self, task_id: str) -> None:
        if self._tasks.pop(task_id, None) is not None:
            self._emit("task_removed", task_id=task_id)

    def add_milestone(self, milestone: Milestone) -> None:
        self._milestones[milestone.id] = milestone
        for task in self._tasks.values():
            if task.milestone_id == milestone.id:
                self._link_milestone(task)
        self._emit("milestone_added", milestone_id=milestone.id)

    def remove_milestone(self, milestone_id: str) -> None:
        if self._milestones.pop(milestone_id, None) is not None:
            self._emit("milestone_removed", milestone_id=milestone_id)
