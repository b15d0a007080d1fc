"""Shared mutable state of a simulation run."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from metis.operators.base import Operator
    from metis.population.individual import Individual


@dataclass
class SimulationState:
    """Everything operators read and mutate during a run.

    global_parameters doubles as the stop channel ("stop") and as scratch
    space where statistics operators store their results.
    """

    individuals: list[Individual] = field(default_factory=list)
    operators: list[Operator] = field(default_factory=list)
    cycle: int = 0
    global_parameters: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.global_parameters.setdefault("stop", False)

    @property
    def stopped(self) -> bool:
        """Whether an operator has requested the run to end (any truthy value)."""
        return bool(self.global_parameters["stop"])
