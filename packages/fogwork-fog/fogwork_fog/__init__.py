"""fogwork-fog - Fog of war with permanent floors and smoothed alphas."""
from __future__ import annotations

from fogwork_fog.config import FogConfig
from fogwork_fog.field import SightSource, VisibilityField
from fogwork_fog.systems import make_fog_system

__all__ = ["FogConfig", "SightSource", "VisibilityField", "make_fog_system"]
