"""fogwork-sim - One-call wiring of the full exploration simulation."""
from __future__ import annotations

from fogwork_sim.simulation import (
    Simulation,
    SimulationSummary,
    build_simulation,
    make_sync_system,
)

__all__ = ["Simulation", "SimulationSummary", "build_simulation", "make_sync_system"]
