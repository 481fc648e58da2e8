"""Sample team with due dates relative to today."""
from __future__ import annotations

from datetime import date, timedelta

from fogwork_store import InMemoryTaskStore, Milestone, Person, Task


def _days(n: int) -> date:
    return date.today() + timedelta(days=n)


def build_store() -> InMemoryTaskStore:
    people = [
        Person("p1", "Ada", "Design lead"),
        Person("p2", "Bjorn", "Researcher"),
        Person("p3", "Cora", "Engineer"),
        Person("p4", "Dax", "Engineer"),
    ]
    tasks = [
        Task("t1a", "p1", "Design system overhaul", discovery_percent=35,
             percent_complete=55, expected_date=_days(14), category="Design",
             milestone_id="m1"),
        Task("t1b", "p1", "UX audit", discovery_percent=70, percent_complete=20,
             expected_date=_days(7), category="Research"),
        Task("t2a", "p2", "User research sprint", discovery_percent=85,
             percent_complete=40, expected_date=_days(-5), category="Research"),
        Task("t2b", "p2", "Component library v3", discovery_percent=20,
             percent_complete=10, expected_date=_days(21), category="Design",
             milestone_id="m1"),
        Task("t3a", "p3", "Billing migration", discovery_percent=30,
             percent_complete=5, expected_date=_days(-20), category="Code",
             milestone_id="m2"),
        Task("t3b", "p3", "Load testing", discovery_percent=50, category="Code"),
        Task("t4a", "p4", "Search prototype", discovery_percent=90,
             expected_date=_days(30), category="Research", milestone_id="m2"),
    ]
    milestones = [
        Milestone("m1", "Design refresh", ("t1a", "t2b")),
        Milestone("m2", "Platform launch", ("t3a", "t4a")),
    ]
    return InMemoryTaskStore(people, tasks, milestones)
