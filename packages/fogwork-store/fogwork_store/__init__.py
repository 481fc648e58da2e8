"""fogwork-store - Task, person and milestone records and the store interface."""
from __future__ import annotations

from fogwork_store.records import Milestone, Person, Task
from fogwork_store.store import ChangeListener, InMemoryTaskStore, TaskStore
from fogwork_store.systems import make_store_flush_system

__all__ = [
    "Person",
    "Task",
    "Milestone",
    "TaskStore",
    "InMemoryTaskStore",
    "ChangeListener",
    "make_store_flush_system",
]
