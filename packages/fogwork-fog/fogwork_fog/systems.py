"""System factories for fogwork-fog."""
from __future__ import annotations

from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from fogwork import FrameContext
    from fogwork_fog.field import VisibilityField


def make_fog_system(
    field: VisibilityField,
    on_changed: Callable[[VisibilityField], None] | None = None,
) -> Callable[[FrameContext], None]:
    """Return a system that eases fog alphas each frame.

    ``on_changed`` fires only on frames where some tile moved, which is when
    a renderer needs to re-upload its fog texture.
    """

    def fog_system(ctx: FrameContext) -> None:
        if field.update(ctx.dt) and on_changed is not None:
            on_changed(field)

    return fog_system
