"""Statistics operators: compute a named value into global_parameters each cycle.

Implements:
- StatisticsOperator: base class, subclasses provide compute()
- GenomeCountStatistics: allele frequency tables per chromosome and locus
- SexStatistics: female/male counts
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from metis.operators.registry import OperatorRegistry

if TYPE_CHECKING:
    from metis.population.individual import Individual
    from metis.simulation.state import SimulationState

AlleleCounts = dict[str, list[dict[int, int]]]


class StatisticsOperator:
    """Stores compute(...) under global_parameters[name] every cycle."""

    def __init__(self, name: str):
        self.name = name

    def change(self, state: SimulationState) -> None:
        state.global_parameters[self.name] = self.compute(
            state.global_parameters, state.cycle, state.individuals
        )

    def compute(
        self,
        global_parameters: dict[str, Any],
        cycle: int,
        individuals: list[Individual],
    ) -> Any:
        """Compute the statistic. Must be overridden."""
        raise NotImplementedError(f"{type(self).__name__} must implement compute()")


@OperatorRegistry.register("genome_count")
class GenomeCountStatistics(StatisticsOperator):
    """Allele counts per locus, pooled over both copies of diploid chromosomes.

    The raw table maps chromosome name to one {allele: count} dict per
    independent locus. Subclasses reduce it by overriding compute_counts().
    """

    def __init__(self, name: str = "GenomeCounts"):
        super().__init__(name)

    def compute(
        self,
        global_parameters: dict[str, Any],
        cycle: int,
        individuals: list[Individual],
    ) -> Any:
        if not individuals:
            return self.compute_counts({})

        genome = individuals[0].species.genome
        counts: AlleleCounts = {}
        for name in genome.marker_order:
            chromosome = genome.metadata[name]
            position = genome.get_marker_start(name)
            # One start offset per stored copy of the chromosome
            num_loci = chromosome.base_size
            if chromosome.kind.is_diploid:
                copy_starts = [position, position + num_loci]
            else:
                copy_starts = [position]

            locus_counts = []
            for locus in range(num_loci):
                allele_counts: dict[int, int] = {}
                for start in copy_starts:
                    for individual in individuals:
                        allele = individual.genome[start + locus]
                        allele_counts[allele] = allele_counts.get(allele, 0) + 1
                locus_counts.append(allele_counts)
            counts[name] = locus_counts

        return self.compute_counts(counts)

    def compute_counts(self, counts: AlleleCounts) -> Any:
        """Reduce the raw count table. Identity by default."""
        return counts


@OperatorRegistry.register("sex_ratio")
class SexStatistics(StatisticsOperator):
    """Number of females and males in the population."""

    def __init__(self, name: str = "SexRatio"):
        super().__init__(name)

    def compute(
        self,
        global_parameters: dict[str, Any],
        cycle: int,
        individuals: list[Individual],
    ) -> dict[str, int]:
        females = sum(1 for individual in individuals if individual.is_female)
        return {"females": females, "males": len(individuals) - females}
