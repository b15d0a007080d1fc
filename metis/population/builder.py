"""Genome builders: fill an individual's genome buffer from its species layout.

Every locus byte is produced by an allele chooser, a callable receiving the
locus' possible values and returning the allele to store.
"""

from __future__ import annotations

import random
from collections.abc import Callable

from metis.population.individual import (
    IdentityAllocator,
    Individual,
    generate_basic_individual,
)
from metis.population.species import Species

AlleleChooser = Callable[[list[int]], int]


def random_allele(possible_values: list[int]) -> int:
    """Uniform pick among the possible values."""
    return random.choice(possible_values)


def make_random_allele(rng: random.Random) -> AlleleChooser:
    """Uniform chooser drawing from its own random source."""

    def choose(possible_values: list[int]) -> int:
        return rng.choice(possible_values)

    return choose


def zero_allele(possible_values: list[int]) -> int:
    return 0


class SequenceChooser:
    """Incrementing allele sequence, for distinguishable test genomes.

    Ignores the possible values; wraps at 256 so every value fits a byte.
    """

    def __init__(self, start: int = 0):
        self._next = start

    def __call__(self, possible_values: list[int]) -> int:
        value = self._next % 256
        self._next += 1
        return value


def create_simple_genome(individual: Individual, allele_chooser: AlleleChooser) -> None:
    """Allocate and fill individual.genome using the species layout.

    Args:
        individual: Individual with a species; its genome is replaced
        allele_chooser: Returns the allele for a locus given its possible values
    """
    genome = individual.species.genome
    genome_data = bytearray(genome.size)
    for name in genome.marker_order:
        position = genome.get_marker_start(name)
        for offset, locus in enumerate(genome.metadata[name].markers):
            genome_data[position + offset] = allele_chooser(locus.possible_values)
    individual.genome = genome_data


def create_randomized_genome(individual: Individual, rng: random.Random | None = None) -> None:
    chooser = make_random_allele(rng) if rng is not None else random_allele
    create_simple_genome(individual, chooser)


def create_zero_genome(individual: Individual) -> None:
    create_simple_genome(individual, zero_allele)


def create_test_genome(individual: Individual, chooser: SequenceChooser | None = None) -> None:
    """Fill with an incrementing sequence so every byte is recognisable."""
    create_simple_genome(individual, chooser or SequenceChooser())


def generate_individual_with_genome(
    species: Species,
    cycle: int = 0,
    genome_generator: Callable[[Individual], None] = create_randomized_genome,
    allocator: IdentityAllocator | None = None,
) -> Individual:
    """Create an individual and build its genome in one go."""
    individual = generate_basic_individual(species, cycle, allocator)
    genome_generator(individual)
    return individual
