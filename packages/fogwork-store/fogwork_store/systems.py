"""System factory that delivers queued store changes once per frame."""
from __future__ import annotations

from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from fogwork import FrameContext
    from fogwork_store.store import InMemoryTaskStore


def make_store_flush_system(store: InMemoryTaskStore) -> Callable[[FrameContext], None]:
    def store_flush_system(ctx: FrameContext) -> None:
        store.flush()
    return store_flush_system
