"""Operator protocol and the cycle stop condition."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from metis.operators.registry import OperatorRegistry

if TYPE_CHECKING:
    from metis.simulation.state import SimulationState

logger = logging.getLogger(__name__)


@runtime_checkable
class Operator(Protocol):
    """A unit of per-cycle behaviour.

    Operators may mutate state.individuals and state.global_parameters. A
    change to state.operators only takes effect from the next cycle.
    """

    def change(self, state: SimulationState) -> None:
        """Apply this operator to the shared simulation state."""
        ...


@OperatorRegistry.register("cycle_stop")
class CycleStopOperator:
    """Sets global_parameters["stop"] when the target cycle is reached."""

    def __init__(self, cycle: int):
        self.cycle = cycle

    def change(self, state: SimulationState) -> None:
        if state.cycle == self.cycle:
            logger.debug(f"Stop condition reached at cycle {state.cycle}")
            state.global_parameters["stop"] = True
