"""Reproduction: offspring creation from two parental genomes.

The engine primitive `reproduce_offspring` walks the species' genome layout
and lets each chromosome's transmission rule copy parental gametes into the
offspring. All stochastic gamete choice happens inside the chromosomes.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from typing import TYPE_CHECKING

from metis.errors import ValidationError
from metis.operators.registry import OperatorRegistry
from metis.population.individual import (
    IdentityAllocator,
    Individual,
    generate_basic_individual,
)
from metis.population.species import Species

if TYPE_CHECKING:
    from metis.simulation.state import SimulationState

logger = logging.getLogger(__name__)


def reproduce_offspring(
    species: Species,
    parents: Sequence[Individual],
    cycle: int,
    is_female: bool | None = None,
    allocator: IdentityAllocator | None = None,
    rng: random.Random | None = None,
) -> Individual:
    """Create one offspring whose genome is inherited from the parents.

    Args:
        species: Species shared by both parents
        parents: The two parents; order only matters for the layout's coin flips
        cycle: Current cycle, recorded as the offspring's cycle_born
        is_female: Offspring sex, required when the genome has Y or X chromosomes
        allocator: Identity allocator, the module default when omitted
        rng: Random source handed to every chromosome

    Returns:
        The offspring, with a fully populated genome
    """
    offspring = generate_basic_individual(species, cycle, allocator)
    offspring.is_female = is_female

    genome = species.genome
    offspring.genome = bytearray(genome.size)
    for name in genome.marker_order:
        chromosome = genome.metadata[name]
        chromosome.reproduce(offspring, parents, genome.get_marker_start(name), rng)

    return offspring


def _split_by_sex(individuals: list[Individual]) -> tuple[list[Individual], list[Individual]]:
    living = [ind for ind in individuals if ind.alive]
    females = [ind for ind in living if ind.is_female is True]
    males = [ind for ind in living if ind.is_female is False]
    return females, males


@OperatorRegistry.register("sexual_reproduction")
class SexualReproduction:
    """Adds offspring_per_cycle offspring of random female x male matings each cycle."""

    def __init__(
        self,
        species: Species,
        offspring_per_cycle: int,
        allocator: IdentityAllocator | None = None,
        rng: random.Random | None = None,
    ):
        """Initialize the reproduction operator.

        Args:
            species: Species of parents and offspring
            offspring_per_cycle: Offspring added per cycle
            allocator: Identity allocator for offspring IDs
            rng: Random source for mate choice, sex and gametes
        """
        self.species = species
        self.offspring_per_cycle = offspring_per_cycle
        self.allocator = allocator
        self.rng = rng or random.Random()

    def change(self, state: SimulationState) -> None:
        females, males = _split_by_sex(state.individuals)
        if not females or not males:
            raise ValidationError(
                f"Sexual reproduction needs both sexes "
                f"({len(females)} females, {len(males)} males at cycle {state.cycle})"
            )

        offspring = []
        for _ in range(self.offspring_per_cycle):
            mother = self.rng.choice(females)
            father = self.rng.choice(males)
            offspring.append(
                reproduce_offspring(
                    self.species,
                    (mother, father),
                    state.cycle,
                    is_female=self.rng.random() >= 0.5,
                    allocator=self.allocator,
                    rng=self.rng,
                )
            )

        state.individuals.extend(offspring)
        logger.debug(f"Cycle {state.cycle}: {len(offspring)} offspring born")


@OperatorRegistry.register("no_genome_sexual_reproduction")
class NoGenomeSexualReproduction:
    """Demographic-only reproduction: offspring get a sex but no genome."""

    def __init__(
        self,
        species: Species | None,
        offspring_per_cycle: int,
        allocator: IdentityAllocator | None = None,
        rng: random.Random | None = None,
    ):
        self.species = species
        self.offspring_per_cycle = offspring_per_cycle
        self.allocator = allocator
        self.rng = rng or random.Random()

    def change(self, state: SimulationState) -> None:
        living = sum(1 for ind in state.individuals if ind.alive)
        if living < 2:
            raise ValidationError(f"Reproduction needs two parents, {living} alive")

        for _ in range(self.offspring_per_cycle):
            child = generate_basic_individual(self.species, state.cycle, self.allocator)
            child.is_female = self.rng.random() >= 0.5
            state.individuals.append(child)
