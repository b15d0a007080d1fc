"""Chromosomes and their transmission rules.

A chromosome is a fixed, ordered sequence of markers. Its TransmissionKind
decides how many copies are stored per individual and how offspring inherit
them:

- HAPLOID: one copy, copied verbatim from the first parent
- AUTOSOMAL: two copies, full linkage (a whole parental copy is transmitted)
- UNLINKED_AUTOSOMAL: two copies, every locus segregates independently
- LINKED_AUTOSOMAL: two copies, recombination by genetic distance (not implemented)
- MITOCHONDRIAL: one copy, maternal line
- Y_LINKED: one copy, paternal line, carried by males only
- X_LINKED: two copies, mother gives one of hers, father gives his to daughters

Diploid kinds lay both copies out contiguously: the first half of the
chromosome's region holds one gamete, the second half the other.
"""

from __future__ import annotations

import random
from collections.abc import Sequence
from enum import Enum
from typing import TYPE_CHECKING

from metis.errors import (
    GenomeConstructionError,
    TransmissionNotImplementedError,
    ValidationError,
)

if TYPE_CHECKING:
    from metis.genetics.markers import Marker
    from metis.population.individual import Individual


class TransmissionKind(Enum):
    """How a chromosome is stored and inherited."""

    HAPLOID = "haploid"
    AUTOSOMAL = "autosomal"
    UNLINKED_AUTOSOMAL = "unlinked_autosomal"
    LINKED_AUTOSOMAL = "linked_autosomal"
    MITOCHONDRIAL = "mitochondrial"
    Y_LINKED = "y_linked"
    X_LINKED = "x_linked"

    @property
    def is_diploid(self) -> bool:
        """Whether two copies are stored per individual."""
        return self in _DIPLOID_KINDS

    @property
    def is_autosomal(self) -> bool:
        return self in _AUTOSOMAL_KINDS


_AUTOSOMAL_KINDS = frozenset(
    {
        TransmissionKind.AUTOSOMAL,
        TransmissionKind.UNLINKED_AUTOSOMAL,
        TransmissionKind.LINKED_AUTOSOMAL,
    }
)
_DIPLOID_KINDS = _AUTOSOMAL_KINDS | {TransmissionKind.X_LINKED}


class Chromosome:
    """An ordered sequence of markers with a transmission rule.

    Args:
        markers: Markers of one copy of the chromosome
        distances: Optional inter-marker distances in cM, len(markers) - 1 long
        kind: Transmission rule, HAPLOID by default
    """

    def __init__(
        self,
        markers: Sequence[Marker],
        distances: Sequence[float] | None = None,
        kind: TransmissionKind = TransmissionKind.HAPLOID,
    ):
        if distances is not None and len(markers) != len(distances) + 1:
            raise GenomeConstructionError(
                "If distances are defined, its length has to be len(markers) - 1 "
                f"(got {len(distances)} distances for {len(markers)} markers)"
            )
        self._markers = list(markers)
        self._distances = list(distances) if distances is not None else None
        self._kind = kind

    @staticmethod
    def haploid(
        markers: Sequence[Marker], distances: Sequence[float] | None = None
    ) -> Chromosome:
        return Chromosome(markers, distances, kind=TransmissionKind.HAPLOID)

    @staticmethod
    def autosome(
        markers: Sequence[Marker], distances: Sequence[float] | None = None
    ) -> Chromosome:
        """Autosome pair with full linkage."""
        return Chromosome(markers, distances, kind=TransmissionKind.AUTOSOMAL)

    @staticmethod
    def unlinked_autosome(
        markers: Sequence[Marker], distances: Sequence[float] | None = None
    ) -> Chromosome:
        return Chromosome(markers, distances, kind=TransmissionKind.UNLINKED_AUTOSOMAL)

    @staticmethod
    def linked_autosome(markers: Sequence[Marker], distances: Sequence[float]) -> Chromosome:
        """Autosome pair recombining by distance; distances are required."""
        return Chromosome(markers, distances, kind=TransmissionKind.LINKED_AUTOSOMAL)

    @staticmethod
    def mitochondrial(markers: Sequence[Marker]) -> Chromosome:
        return Chromosome(markers, kind=TransmissionKind.MITOCHONDRIAL)

    @staticmethod
    def y_linked(markers: Sequence[Marker]) -> Chromosome:
        return Chromosome(markers, kind=TransmissionKind.Y_LINKED)

    @staticmethod
    def x_linked(
        markers: Sequence[Marker], distances: Sequence[float] | None = None
    ) -> Chromosome:
        return Chromosome(markers, distances, kind=TransmissionKind.X_LINKED)

    @property
    def kind(self) -> TransmissionKind:
        return self._kind

    @property
    def distances(self) -> list[float] | None:
        return self._distances

    @property
    def base_markers(self) -> list[Marker]:
        """Markers of a single copy."""
        return list(self._markers)

    @property
    def markers(self) -> list[Marker]:
        """Markers in genome order; diploid kinds list both copies."""
        if self._kind.is_diploid:
            return self._markers + self._markers
        return list(self._markers)

    @property
    def base_size(self) -> int:
        """Number of loci in a single copy."""
        return len(self._markers)

    @property
    def size(self) -> int:
        """Number of genome bytes this chromosome occupies."""
        if self._kind.is_diploid:
            return 2 * self.base_size
        return self.base_size

    @property
    def is_autosomal(self) -> bool:
        return self._kind.is_autosomal

    def copy_region(
        self,
        individual: Individual,
        parent: Individual,
        ofs_position: int,
        parent_position: int,
    ) -> None:
        """Copy one haploid copy verbatim from parent to offspring."""
        n = self.base_size
        individual.genome[ofs_position : ofs_position + n] = parent.genome[
            parent_position : parent_position + n
        ]

    def reproduce(
        self,
        individual: Individual,
        parents: Sequence[Individual],
        position: int,
        rng: random.Random | None = None,
    ) -> None:
        """Fill individual.genome[position:position + size] from the parents.

        Args:
            individual: Offspring whose genome buffer is already allocated
            parents: The two parents (a single parent is enough for HAPLOID)
            position: Start offset of this chromosome in every genome
            rng: Random source, the random module when omitted
        """
        transmit = _TRANSMISSION[self._kind]
        transmit(self, individual, parents, position, rng or random)

    def __repr__(self) -> str:
        return f"Chromosome(kind={self._kind.value}, loci={self.base_size})"


class ChromosomePair(Chromosome):
    """Autosome pair with full linkage."""

    def __init__(
        self,
        markers: Sequence[Marker],
        distances: Sequence[float] | None = None,
    ):
        super().__init__(markers, distances, kind=TransmissionKind.AUTOSOMAL)


def _parent_order(rng) -> tuple[int, int]:
    if rng.random() < 0.5:
        return (1, 0)
    return (0, 1)


def _split_parents(parents: Sequence[Individual]) -> tuple[Individual, Individual]:
    """Return (mother, father), raising if the pair is not one of each sex."""
    mothers = [p for p in parents if getattr(p, "is_female", None) is True]
    fathers = [p for p in parents if getattr(p, "is_female", None) is False]
    if not mothers or not fathers:
        raise ValidationError("Sex-linked transmission needs a female and a male parent")
    return mothers[0], fathers[0]


def _offspring_is_female(individual: Individual) -> bool:
    is_female = getattr(individual, "is_female", None)
    if is_female is None:
        raise ValidationError(
            f"Individual {individual.id} needs a sex before sex-linked transmission"
        )
    return is_female


def _transmit_haploid(chromosome, individual, parents, position, rng) -> None:
    chromosome.copy_region(individual, parents[0], position, position)


def _transmit_autosome(chromosome, individual, parents, position, rng) -> None:
    half = chromosome.base_size
    for slot, parent_index in enumerate(_parent_order(rng)):
        gamete_start = position + half * rng.randrange(2)
        chromosome.copy_region(
            individual, parents[parent_index], position + slot * half, gamete_start
        )


def _transmit_unlinked_autosome(chromosome, individual, parents, position, rng) -> None:
    half = chromosome.base_size
    genome = individual.genome
    for slot, parent_index in enumerate(_parent_order(rng)):
        parent_genome = parents[parent_index].genome
        ofs = position + slot * half
        for locus in range(half):
            genome[ofs + locus] = parent_genome[position + half * rng.randrange(2) + locus]


def _transmit_linked_autosome(chromosome, individual, parents, position, rng) -> None:
    raise TransmissionNotImplementedError(chromosome.kind.value)


def _transmit_mito(chromosome, individual, parents, position, rng) -> None:
    mother, _ = _split_parents(parents)
    chromosome.copy_region(individual, mother, position, position)


def _transmit_y(chromosome, individual, parents, position, rng) -> None:
    _, father = _split_parents(parents)
    if _offspring_is_female(individual):
        individual.genome[position : position + chromosome.size] = bytes(chromosome.size)
    else:
        chromosome.copy_region(individual, father, position, position)


def _transmit_x(chromosome, individual, parents, position, rng) -> None:
    mother, father = _split_parents(parents)
    half = chromosome.base_size
    chromosome.copy_region(individual, mother, position, position + half * rng.randrange(2))
    if _offspring_is_female(individual):
        # Males carry their single X in the first slot
        chromosome.copy_region(individual, father, position + half, position)
    else:
        chromosome.copy_region(individual, individual, position + half, position)


_TRANSMISSION = {
    TransmissionKind.HAPLOID: _transmit_haploid,
    TransmissionKind.AUTOSOMAL: _transmit_autosome,
    TransmissionKind.UNLINKED_AUTOSOMAL: _transmit_unlinked_autosome,
    TransmissionKind.LINKED_AUTOSOMAL: _transmit_linked_autosome,
    TransmissionKind.MITOCHONDRIAL: _transmit_mito,
    TransmissionKind.Y_LINKED: _transmit_y,
    TransmissionKind.X_LINKED: _transmit_x,
}
