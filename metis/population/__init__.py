"""Individuals, species and the builders that populate a simulation.

This package implements:
- Individual, IdentityAllocator: identity and per-individual state
- Species: the genome layout shared by a species
- Genome builders: random, zero and test-sequence genomes
- Demography helpers: population generation, assignment and migration
"""

from __future__ import annotations

from metis.population.builder import (
    SequenceChooser,
    create_randomized_genome,
    create_simple_genome,
    create_test_genome,
    create_zero_genome,
    generate_individual_with_genome,
    make_random_allele,
    random_allele,
    zero_allele,
)
from metis.population.demography import (
    assign_fixed_size_population,
    assign_random_population,
    generate_n_inds,
    migrate_island_fixed,
)
from metis.population.individual import (
    IdentityAllocator,
    Individual,
    assign_random_sex,
    generate_basic_individual,
)
from metis.population.species import Species

__all__ = [
    "IdentityAllocator",
    "Individual",
    "Species",
    "assign_random_sex",
    "generate_basic_individual",
    "SequenceChooser",
    "random_allele",
    "make_random_allele",
    "zero_allele",
    "create_simple_genome",
    "create_randomized_genome",
    "create_zero_genome",
    "create_test_genome",
    "generate_individual_with_genome",
    "generate_n_inds",
    "assign_random_population",
    "assign_fixed_size_population",
    "migrate_island_fixed",
]
