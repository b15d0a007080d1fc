"""Simulation driver and its shared state."""

from __future__ import annotations

from metis.simulation.simulator import (
    CycleStep,
    cycle,
    do_async_cycles,
    do_n_cycles,
    do_unspecified_cycles,
    step_cycles,
)
from metis.simulation.state import SimulationState

__all__ = [
    "SimulationState",
    "CycleStep",
    "cycle",
    "do_n_cycles",
    "do_unspecified_cycles",
    "do_async_cycles",
    "step_cycles",
]
