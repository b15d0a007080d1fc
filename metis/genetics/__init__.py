"""Genetic architecture of a species.

This package defines the static genome model:
- Marker, SNP, MicroSatellite: allowed allele values of a locus
- Chromosome, ChromosomePair, TransmissionKind: marker sequences and how they are inherited
- Genome: chromosomes flattened into one addressable byte layout
"""

from __future__ import annotations

from metis.genetics.chromosome import Chromosome, ChromosomePair, TransmissionKind
from metis.genetics.genome import Genome, generate_unlinked_genome
from metis.genetics.markers import SNP, Marker, MicroSatellite

__all__ = [
    "Marker",
    "SNP",
    "MicroSatellite",
    "Chromosome",
    "ChromosomePair",
    "TransmissionKind",
    "Genome",
    "generate_unlinked_genome",
]
