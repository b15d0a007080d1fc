"""Species: a name paired with the genome layout its individuals share."""

from __future__ import annotations

from dataclasses import dataclass

from metis.genetics.genome import Genome


@dataclass(frozen=True)
class Species:
    """A named species. Shared, read-only, by all of its individuals."""

    name: str
    genome: Genome
