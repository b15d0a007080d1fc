"""Shared test fixtures for the metis test suite."""

from __future__ import annotations

import random

import pytest

from metis.genetics import (
    SNP,
    Chromosome,
    ChromosomePair,
    Genome,
    MicroSatellite,
    TransmissionKind,
    generate_unlinked_genome,
)
from metis.population import (
    IdentityAllocator,
    Individual,
    SequenceChooser,
    Species,
    create_simple_genome,
    generate_basic_individual,
)


@pytest.fixture
def allocator() -> IdentityAllocator:
    """A fresh identity allocator starting at 0."""
    return IdentityAllocator()


@pytest.fixture
def rng() -> random.Random:
    """A seeded random source."""
    return random.Random(42)


@pytest.fixture
def unlinked_genome() -> Genome:
    """One autosome pair of 5 bi-allelic SNPs (10 genome bytes)."""
    return generate_unlinked_genome(5, SNP)


@pytest.fixture
def species(unlinked_genome: Genome) -> Species:
    """Species built on the unlinked genome."""
    return Species("unlinked", unlinked_genome)


@pytest.fixture
def mixed_genome() -> Genome:
    """One chromosome of every implemented kind.

    Layout: haploid 0-2, autosome 3-8, mito 9-10, y 11-12, x 13-16, unlinked 17-20.
    """
    return Genome(
        {
            "haploid": Chromosome([SNP(), SNP(), SNP()]),
            "autosome": ChromosomePair([SNP(), SNP(), SNP()], distances=[1.0, 2.5]),
            "mito": Chromosome([SNP(), SNP()], kind=TransmissionKind.MITOCHONDRIAL),
            "y": Chromosome([SNP(), SNP()], kind=TransmissionKind.Y_LINKED),
            "x": Chromosome([SNP(), SNP()], kind=TransmissionKind.X_LINKED),
            "unlinked": Chromosome(
                [MicroSatellite([3, 4, 5]), MicroSatellite([7, 8])],
                kind=TransmissionKind.UNLINKED_AUTOSOMAL,
            ),
        }
    )


@pytest.fixture
def mixed_species(mixed_genome: Genome) -> Species:
    """Species built on the mixed genome."""
    return Species("mixed", mixed_genome)


@pytest.fixture
def make_parent(allocator: IdentityAllocator):
    """Factory for a parent with a recognisable genome.

    Every byte of the parent's genome is `base + offset`, so copies can be
    traced back to the parent and position they came from.
    """

    def _make(species: Species, is_female: bool, base: int) -> Individual:
        parent = generate_basic_individual(species, 0, allocator)
        parent.is_female = is_female
        create_simple_genome(parent, SequenceChooser(base))
        return parent

    return _make


@pytest.fixture
def basic_individuals(allocator: IdentityAllocator):
    """Factory for n genome-less individuals born in a given cycle."""

    def _make(n: int, cycle: int = 0) -> list[Individual]:
        return [generate_basic_individual(None, cycle, allocator) for _ in range(n)]

    return _make
