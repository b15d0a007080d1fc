"""Genome layout: named chromosomes flattened into one byte sequence.

Chromosomes are laid out in the metadata's insertion order; each gets a
start offset and occupies `chromosome.size` bytes from there.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping

from metis.errors import GenomeConstructionError
from metis.genetics.chromosome import Chromosome, ChromosomePair
from metis.genetics.markers import Marker


class Genome:
    """An ordered mapping of chromosome names to chromosomes, with offsets."""

    def __init__(self, metadata: Mapping[str, Chromosome]):
        if not metadata:
            raise GenomeConstructionError("A genome needs at least one chromosome")
        self._metadata = dict(metadata)
        self._compute_marker_positions()
        last_name = self._marker_order[-1]
        self._size = self._marker_start[last_name] + self._metadata[last_name].size

    def _compute_marker_positions(self) -> None:
        self._marker_order: list[str] = []
        self._marker_start: dict[str, int] = {}
        start = 0
        for name, chromosome in self._metadata.items():
            self._marker_order.append(name)
            self._marker_start[name] = start
            start += chromosome.size

    def get_marker_start(self, name: str) -> int | None:
        """Start offset of a chromosome, None for unknown names."""
        return self._marker_start.get(name)

    def ranges(self) -> Iterator[tuple[str, int, int]]:
        """Yield (name, start, stop) for every chromosome in layout order."""
        for name in self._marker_order:
            start = self._marker_start[name]
            yield name, start, start + self._metadata[name].size

    @property
    def size(self) -> int:
        """Total genome length in bytes."""
        return self._size

    @property
    def marker_order(self) -> list[str]:
        return self._marker_order

    @property
    def metadata(self) -> dict[str, Chromosome]:
        return self._metadata

    def __repr__(self) -> str:
        return f"Genome(chromosomes={self._marker_order}, size={self._size})"


def generate_unlinked_genome(
    num_markers: int, marker_generator: Callable[[], Marker]
) -> Genome:
    """Build a genome with one autosome pair of independently generated markers.

    Args:
        num_markers: Loci per copy
        marker_generator: Called once per locus to create its marker

    Returns:
        Genome with a single chromosome named "unlinked"
    """
    markers = [marker_generator() for _ in range(num_markers)]
    return Genome({"unlinked": ChromosomePair(markers)})
