"""metis: population-genetics simulation.

Individuals carry byte-packed genomes built from markers and chromosomes;
a cycle-based driver applies a pipeline of operators (reproduction,
culling, statistics, stop conditions) to a shared simulation state.
"""

__version__ = "0.1.0"
