"""Narrow side-effect hooks into the rendering layer."""
from __future__ import annotations

from typing import Protocol


class RenderHooks(Protocol):
    def set_node_depleted(self, task_id: str) -> None: ...

    def set_node_available(self, task_id: str) -> None: ...

    def set_node_visible(self, task_id: str, visible: bool) -> None: ...

    def set_structure_visible(self, milestone_id: str, visible: bool) -> None: ...


class NullHooks:
    """Hooks that do nothing, for headless runs."""

    def set_node_depleted(self, task_id: str) -> None:
        pass

    def set_node_available(self, task_id: str) -> None:
        pass

    def set_node_visible(self, task_id: str, visible: bool) -> None:
        pass

    def set_structure_visible(self, milestone_id: str, visible: bool) -> None:
        pass
