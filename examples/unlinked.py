"""Unlinked Markers: A First Population-Genetics Run

This script builds a species whose genome is a single autosome pair of
bi-allelic SNPs, seeds a random population, and runs it through a few
non-overlapping generations while tracking allele counts and sex ratio.

Run with:
    python examples/unlinked.py

Settings come from MetisConfig, so they can be changed without editing the
script, e.g. METIS_NUM_CYCLES=50 METIS_SEED=7 python examples/unlinked.py
"""

import random

from metis.config import MetisConfig
from metis.genetics import SNP, generate_unlinked_genome
from metis.operators import ObservableOperator, OperatorRegistry
from metis.population import (
    IdentityAllocator,
    Species,
    assign_random_sex,
    create_randomized_genome,
    generate_basic_individual,
    generate_n_inds,
)
from metis.simulation import do_n_cycles


def main():
    config = MetisConfig()
    rng = random.Random(config.seed)
    allocator = IdentityAllocator()

    genome = generate_unlinked_genome(config.num_markers, SNP)
    species = Species("unlinked", genome)

    def founder():
        ind = assign_random_sex(generate_basic_individual(species, 0, allocator), rng)
        create_randomized_genome(ind, rng)
        return ind

    individuals = generate_n_inds(config.population_size, founder)

    # Reproduce, then drop the parental generation, then measure
    operators = OperatorRegistry.build_pipeline(
        [
            {
                "name": "sexual_reproduction",
                "params": {
                    "species": species,
                    "offspring_per_cycle": config.offspring_per_cycle,
                    "allocator": allocator,
                    "rng": rng,
                },
            },
            {"name": "kill_older_generations"},
            {"name": "genome_count"},
            {"name": "sex_ratio"},
        ]
    )
    observer = ObservableOperator()
    observer.subscribe(
        lambda params: print(
            f"  females={params['SexRatio']['females']:3d} "
            f"males={params['SexRatio']['males']:3d} "
            f"locus0={params['GenomeCounts']['unlinked'][0]}"
        )
    )
    operators.append(observer)

    print(f"Species '{species.name}': {genome.size} genome bytes")
    print(f"Running {config.num_cycles} cycles on {len(individuals)} founders...")
    state = do_n_cycles(config.num_cycles, individuals, operators, config=config)
    print(f"Finished at cycle {state.cycle} with {len(state.individuals)} individuals")


if __name__ == "__main__":
    main()
