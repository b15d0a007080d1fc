"""Tests for the simulation driver."""

from __future__ import annotations

import random

import pytest

from metis.config import MetisConfig
from metis.errors import EngineStateError
from metis.operators import (
    CycleStopOperator,
    GenomeCountStatistics,
    KillOlderGenerations,
    NoGenomeSexualReproduction,
    SexualReproduction,
)
from metis.population import assign_random_sex, generate_individual_with_genome
from metis.simulation import (
    SimulationState,
    cycle,
    do_async_cycles,
    do_n_cycles,
    do_unspecified_cycles,
    step_cycles,
)


class RecordingOperator:
    """Appends (name, cycle) to a shared log on every change."""

    def __init__(self, name: str, log: list):
        self.name = name
        self.log = log

    def change(self, state: SimulationState) -> None:
        self.log.append((self.name, state.cycle))


class FailingOperator:
    def change(self, state: SimulationState) -> None:
        raise RuntimeError("boom")


class TestCycle:
    """Test a single cycle step."""

    def test_no_ops_simulation(self, basic_individuals):
        """With no operators a cycle only advances the counter."""
        individuals = basic_individuals(10)
        orig_individuals = list(individuals)
        state = SimulationState(individuals=individuals, cycle=0)

        cycle(state)

        assert state.cycle == 1
        assert state.individuals == orig_individuals

    def test_reproduction_simulation(self, basic_individuals):
        """A reproduction operator adding k offspring grows m to m + k."""
        state = SimulationState(
            individuals=basic_individuals(10),
            operators=[NoGenomeSexualReproduction(None, 20, rng=random.Random(0))],
        )

        cycle(state)

        assert len(state.individuals) == 30

    def test_operators_applied_in_order(self):
        """Operators run in list order within a cycle."""
        log = []
        state = SimulationState(
            operators=[RecordingOperator("a", log), RecordingOperator("b", log)], cycle=7
        )

        cycle(state)

        assert log == [("a", 7), ("b", 7)]
        assert state.cycle == 8

    def test_operator_list_changes_apply_next_cycle(self):
        """An operator that edits the pipeline only affects later cycles."""
        log = []
        late = RecordingOperator("late", log)

        class AddOperator:
            def change(self, state):
                log.append(("add", state.cycle))
                state.operators = state.operators + [late]

        state = SimulationState(operators=[AddOperator()])

        cycle(state)
        assert log == [("add", 0)]

        state.operators = state.operators[1:]
        cycle(state)
        assert log == [("add", 0), ("late", 1)]

    def test_operator_errors_propagate(self):
        """The driver does not swallow operator exceptions."""
        state = SimulationState(operators=[FailingOperator()])

        with pytest.raises(RuntimeError):
            cycle(state)
        assert state.cycle == 0


class TestSynchronousRuns:
    """Test do_n_cycles and do_unspecified_cycles."""

    def test_do_n_cycles_no_ops(self, basic_individuals):
        """n=2 from cycle 0 ends at cycle 3 with the same individuals."""
        individuals = basic_individuals(10)

        state = do_n_cycles(2, individuals, [])

        assert state.cycle == 3
        assert len(state.individuals) == 10
        assert state.global_parameters["stop"] is True

    @pytest.mark.parametrize("n", [0, 1, 5])
    def test_do_n_cycles_final_cycle(self, n):
        """The run always ends at n + 1."""
        assert do_n_cycles(n, [], []).cycle == n + 1

    def test_do_n_cycles_from_previous_cycle(self):
        """previous_cycle shifts both start and target."""
        log = []
        state = do_n_cycles(2, [], [RecordingOperator("r", log)], previous_cycle=10)

        assert state.cycle == 13
        assert [c for _, c in log] == [10, 11, 12]

    def test_do_n_cycles_does_not_modify_operator_list(self):
        """The caller's list does not get the stop operator appended."""
        operators = []
        do_n_cycles(1, [], operators)
        assert operators == []

    def test_unspecified_cycles_until_stop(self):
        """Runs until an operator sets stop."""
        state = do_unspecified_cycles([], [CycleStopOperator(4)])
        assert state.cycle == 5

    def test_initial_global_parameters(self):
        """Given parameters are kept but stop always starts False."""
        state = do_unspecified_cycles(
            [], [CycleStopOperator(0)], global_parameters={"stop": True, "mu": 0.1}
        )
        assert state.cycle == 1
        assert state.global_parameters["mu"] == 0.1

    def test_max_cycles_guard(self):
        """A configured guard turns an endless run into an error."""
        config = MetisConfig(max_cycles=5)
        with pytest.raises(EngineStateError):
            do_unspecified_cycles([], [], config=config)

    def test_guard_not_hit_by_finishing_run(self):
        """A run that stops in time is unaffected by the guard."""
        config = MetisConfig(max_cycles=5)
        state = do_n_cycles(3, [], [], config=config)
        assert state.cycle == 4

    def test_truthy_stop_value_ends_run(self):
        """Any truthy stop value ends the run, not only True."""

        class StopWithInt:
            def change(self, state):
                if state.cycle == 2:
                    state.global_parameters["stop"] = 1

        state = do_unspecified_cycles([], [StopWithInt()], config=MetisConfig(max_cycles=50))

        assert state.cycle == 3

    def test_generations_with_genomes(self, species, allocator, rng):
        """Reproduce, cull and count over several generations."""
        founders = []
        for i in range(10):
            ind = generate_individual_with_genome(species, 0, allocator=allocator)
            ind.is_female = i % 2 == 0
            founders.append(ind)

        operators = [
            SexualReproduction(species, 30, allocator, rng),
            KillOlderGenerations(),
            GenomeCountStatistics(),
        ]
        state = do_n_cycles(3, founders, operators)

        assert state.cycle == 4
        assert len(state.individuals) == 30
        assert all(ind.cycle_born == 3 for ind in state.individuals)
        counts = state.global_parameters["GenomeCounts"]["unlinked"]
        assert all(sum(locus.values()) == 60 for locus in counts)


class TestCooperativeRuns:
    """Test step_cycles and do_async_cycles."""

    def test_step_cycles(self):
        """Each resume runs one more cycle on the same state."""
        step = step_cycles([], [CycleStopOperator(2)])
        states = [step.state]
        cycles = [step.state.cycle]

        while not step.done:
            step = step.resume()
            states.append(step.state)
            cycles.append(step.state.cycle)

        assert cycles == [1, 2, 3]
        assert all(s is states[0] for s in states)

    def test_async_callback_pacing(self):
        """The callback gets resume until stop is set, then None."""
        calls = []

        def callback(state, resume):
            calls.append((state.cycle, resume is None))
            if resume is not None:
                resume()

        do_n_cycles(2, [], [], callback=callback)

        assert calls == [(1, False), (2, False), (3, True)]

    def test_async_returns_after_one_cycle(self):
        """Nothing runs until the caller resumes."""
        pending = []

        def callback(state, resume):
            pending.append(resume)

        do_async_cycles([], [CycleStopOperator(5)], callback=callback)

        assert len(pending) == 1
        pending[0]()
        assert len(pending) == 2

    def test_async_preserves_global_parameters(self):
        """Global parameters survive across resumed cycles."""

        class Counter:
            def change(self, state):
                state.global_parameters["count"] = state.global_parameters.get("count", 0) + 1

        seen = []

        def callback(state, resume):
            seen.append(state.global_parameters["count"])
            if resume:
                resume()

        do_async_cycles([], [Counter(), CycleStopOperator(2)], callback=callback)

        assert seen == [1, 2, 3]

    def test_async_with_reproduction(self, species, allocator, rng):
        """Populations grow between resumes."""
        founders = []
        for _ in range(4):
            ind = generate_individual_with_genome(species, 0, allocator=allocator)
            assign_random_sex(ind, rng)
            founders.append(ind)
        founders[0].is_female, founders[1].is_female = True, False

        sizes = []

        def callback(state, resume):
            sizes.append(len(state.individuals))
            if resume:
                resume()

        do_n_cycles(1, founders, [SexualReproduction(species, 2, allocator, rng)], callback=callback)

        assert sizes == [6, 8]

    def test_long_async_run_resumed_from_callback(self):
        """Resuming from inside the callback does not grow the stack."""
        cycles = []

        def callback(state, resume):
            cycles.append(state.cycle)
            if resume is not None:
                resume()

        do_n_cycles(2500, [], [], callback=callback)

        assert len(cycles) == 2501
        assert cycles[-1] == 2501

    def test_stale_step_resume_after_stop(self):
        """An earlier step's resume does nothing once the run has stopped."""
        first = step_cycles([], [CycleStopOperator(1)])
        last = first.resume()
        assert last.done

        again = first.resume()

        assert again.done
        assert again.state.cycle == 2

    def test_stale_async_resume_after_stop(self):
        """A kept async handle cannot run cycles past the stop."""
        handles = []
        log = []

        def callback(state, resume):
            handles.append(resume)
            if resume is not None:
                resume()

        do_async_cycles([], [RecordingOperator("r", log), CycleStopOperator(1)], callback=callback)
        handles[0]()

        assert [c for _, c in log] == [0, 1]
        assert handles[-1] is None

    def test_async_resume_handle_used_once(self):
        """Calling the same resume handle twice advances only one cycle."""
        pending = []

        def callback(state, resume):
            pending.append(resume)

        do_async_cycles([], [CycleStopOperator(5)], callback=callback)
        pending[0]()
        pending[0]()

        assert len(pending) == 2
        assert pending[-1] is not None
