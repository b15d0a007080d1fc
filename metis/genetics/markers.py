"""Genetic markers: the allowed allele values of a single locus.

Every allele is stored as one byte in an individual's genome, so marker
values are restricted to 0..255.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from metis.errors import GenomeConstructionError

MAX_ALLELE = 255


@runtime_checkable
class Marker(Protocol):
    """Anything exposing the possible allele values of a locus."""

    possible_values: list[int]


def check_possible_values(possible_values: list[int]) -> None:
    """Raise if the values cannot be stored in a byte-packed genome."""
    if not possible_values:
        raise GenomeConstructionError("A marker needs at least one possible value")
    for value in possible_values:
        if not 0 <= value <= MAX_ALLELE:
            raise GenomeConstructionError(
                f"Allele value {value} is outside 0..{MAX_ALLELE}"
            )


@dataclass
class SNP:
    """A Single-Nucleotide Polymorphism. Bi-allelic by default."""

    possible_values: list[int] = field(default_factory=lambda: [0, 1])

    def __post_init__(self) -> None:
        check_possible_values(self.possible_values)


@dataclass
class MicroSatellite:
    """A microsatellite with an explicit, arbitrary set of allele values."""

    possible_values: list[int]

    def __post_init__(self) -> None:
        check_possible_values(self.possible_values)
