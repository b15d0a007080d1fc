"""Culling operators: remove individuals from the simulation."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from metis.operators.registry import OperatorRegistry

if TYPE_CHECKING:
    from metis.simulation.state import SimulationState

logger = logging.getLogger(__name__)


@OperatorRegistry.register("kill_older_generations")
class KillOlderGenerations:
    """Keep only individuals born in the current cycle (non-overlapping generations)."""

    def change(self, state: SimulationState) -> None:
        before = len(state.individuals)
        state.individuals[:] = [
            ind for ind in state.individuals if ind.cycle_born >= state.cycle
        ]
        logger.debug(
            f"Cycle {state.cycle}: culled {before - len(state.individuals)} individuals"
        )
