"""Individuals: identity, sex, birth cycle and genome buffer."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from metis.population.species import Species


class IdentityAllocator:
    """Hands out monotonically increasing individual IDs.

    Pass your own allocator to keep identities deterministic in isolation;
    callers that don't care share the module default.
    """

    def __init__(self, start: int = 0):
        self._next = start

    def next_id(self) -> int:
        """Return a fresh ID."""
        value = self._next
        self._next += 1
        return value

    @property
    def issued(self) -> int:
        """The next ID that will be handed out."""
        return self._next


default_allocator = IdentityAllocator()


@dataclass(eq=False)
class Individual:
    """A member of a species.

    The genome is one byte per locus position, addressed through the
    species' genome layout. It stays None until a builder or the
    reproduction engine fills it.
    """

    id: int
    species: Species | None
    cycle_born: int = 0
    alive: bool = True
    is_female: bool | None = None
    pop: int | None = None  # population index, see metis.population.demography
    genome: bytearray | None = field(default=None, repr=False)


def generate_basic_individual(
    species: Species | None,
    cycle: int = 0,
    allocator: IdentityAllocator | None = None,
) -> Individual:
    """Create a living individual of a species born in `cycle`."""
    allocator = allocator or default_allocator
    return Individual(id=allocator.next_id(), species=species, cycle_born=cycle)


def assign_random_sex(
    individual: Individual, rng: random.Random | None = None
) -> Individual:
    """Set is_female uniformly at random and return the individual."""
    individual.is_female = (rng or random).random() >= 0.5
    return individual
