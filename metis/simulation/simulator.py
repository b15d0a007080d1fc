"""Simulation driver: advances a population through discrete cycles.

A cycle applies every operator, in list order, to the shared state and then
increments the cycle counter. Runs end when an operator sets
global_parameters["stop"]; do_n_cycles adds a CycleStopOperator for that.

Three driving modes:
- do_unspecified_cycles: blocks until stop is set
- step_cycles: one cycle per call, returns a CycleStep with a resume handle
- do_async_cycles: callback flavour of step_cycles
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from metis.errors import EngineStateError
from metis.operators.base import CycleStopOperator
from metis.simulation.state import SimulationState

if TYPE_CHECKING:
    from metis.config import MetisConfig
    from metis.operators.base import Operator
    from metis.population.individual import Individual

logger = logging.getLogger(__name__)

# callback(state, resume), resume being None once the run has stopped
CycleCallback = Callable[[SimulationState, Any], None]


def cycle(state: SimulationState) -> None:
    """Execute a single cycle.

    The operator list is read once up front: an operator may replace or edit
    state.operators, but that only affects the next cycle.
    """
    for operator in list(state.operators):
        operator.change(state)
    state.cycle += 1


def _initial_state(
    individuals: list[Individual],
    operators: list[Operator],
    previous_cycle: int,
    global_parameters: dict[str, Any] | None,
) -> SimulationState:
    return SimulationState(
        individuals=individuals,
        operators=operators,
        cycle=previous_cycle,
        global_parameters={**(global_parameters or {}), "stop": False},
    )


def do_n_cycles(
    n: int,
    individuals: list[Individual],
    operators: list[Operator],
    previous_cycle: int = 0,
    callback: CycleCallback | None = None,
    config: MetisConfig | None = None,
) -> SimulationState | None:
    """Run until the cycle counter reaches n + previous_cycle.

    The stop operator fires during the cycle whose counter equals the target,
    so the returned state's cycle is n + previous_cycle + 1.

    Args:
        n: Number of cycles
        individuals: Initial individuals
        operators: Operators to apply every cycle (the list is not modified)
        previous_cycle: Cycle counter to start from
        callback: When given, run cooperatively via do_async_cycles
        config: Optional settings (max_cycles guard)

    Returns:
        Final state for synchronous runs, None when a callback is used
    """
    pipeline = list(operators)
    pipeline.append(CycleStopOperator(n + previous_cycle))
    if callback is not None:
        do_async_cycles(individuals, pipeline, previous_cycle, callback=callback)
        return None
    return do_unspecified_cycles(individuals, pipeline, previous_cycle, config=config)


def do_unspecified_cycles(
    individuals: list[Individual],
    operators: list[Operator],
    previous_cycle: int = 0,
    global_parameters: dict[str, Any] | None = None,
    config: MetisConfig | None = None,
) -> SimulationState:
    """Run cycles until an operator sets global_parameters["stop"].

    Raises:
        EngineStateError: If config.max_cycles is set and exceeded
    """
    state = _initial_state(individuals, operators, previous_cycle, global_parameters)
    max_cycles = config.max_cycles if config is not None else 0

    logger.info(
        f"Starting run at cycle {state.cycle}: {len(state.individuals)} individuals, "
        f"{len(state.operators)} operators"
    )
    steps = 0
    while not state.stopped:
        if max_cycles and steps >= max_cycles:
            raise EngineStateError(
                f"No stop condition after {max_cycles} cycles (cycle {state.cycle})"
            )
        cycle(state)
        steps += 1

    logger.info(f"Run stopped at cycle {state.cycle} with {len(state.individuals)} individuals")
    return state


@dataclass
class CycleStep:
    """Outcome of one cooperative cycle step.

    resume() runs the next cycle on the same state and returns its CycleStep;
    it is None once the stop condition has been set.
    """

    state: SimulationState
    resume: Callable[[], CycleStep] | None

    @property
    def done(self) -> bool:
        return self.resume is None


def _step(state: SimulationState) -> CycleStep:
    # A stale resume handle must not run past the stop
    if state.stopped:
        return CycleStep(state, None)
    cycle(state)
    if state.stopped:
        logger.debug(f"Cooperative run stopped at cycle {state.cycle}")
        return CycleStep(state, None)
    return CycleStep(state, lambda: _step(state))


def step_cycles(
    individuals: list[Individual],
    operators: list[Operator],
    previous_cycle: int = 0,
    global_parameters: dict[str, Any] | None = None,
) -> CycleStep:
    """Run exactly one cycle and hand control back to the caller."""
    state = _initial_state(individuals, operators, previous_cycle, global_parameters)
    return _step(state)


class _Resume:
    """Resume handle passed to async callbacks.

    Called while its callback is still running, it only records the request
    and _deliver runs the next cycle once the callback returns, so long runs
    driven from inside the callback keep a flat stack. Called later, it drives
    the run itself. Each handle advances the run at most once.
    """

    def __init__(self, next_step: Callable[[], CycleStep], callback: CycleCallback):
        self._next_step = next_step
        self._callback = callback
        self._in_callback = True
        self._used = False
        self.requested = False

    def __call__(self) -> None:
        if self._used:
            return
        self._used = True
        if self._in_callback:
            self.requested = True
        else:
            _deliver(self._next_step(), self._callback)

    def next_step(self) -> CycleStep:
        return self._next_step()

    def release(self) -> None:
        self._in_callback = False


def _deliver(step: CycleStep, callback: CycleCallback) -> None:
    while True:
        resume = _Resume(step.resume, callback) if step.resume is not None else None
        callback(step.state, resume)
        if resume is None:
            return
        resume.release()
        if not resume.requested:
            return
        step = resume.next_step()


def do_async_cycles(
    individuals: list[Individual],
    operators: list[Operator],
    previous_cycle: int = 0,
    global_parameters: dict[str, Any] | None = None,
    *,
    callback: CycleCallback,
) -> None:
    """Run one cycle, then call callback(state, resume).

    resume is None once stop is set; otherwise the caller invokes it to run
    the next cycle. There is no scheduler: pacing is entirely up to the caller.
    """
    _deliver(
        step_cycles(individuals, operators, previous_cycle, global_parameters),
        callback,
    )
