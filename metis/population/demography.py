"""Demography helpers: population generation, assignment and migration.

Individuals carry a `pop` index; these helpers set and move it. They work
for more than classic population genetics (e.g. landscape models).
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable

from metis.errors import ValidationError
from metis.population.individual import Individual

logger = logging.getLogger(__name__)


def generate_n_inds(num_inds: int, generator: Callable[[], Individual]) -> list[Individual]:
    """Call generator num_inds times and collect the individuals."""
    return [generator() for _ in range(num_inds)]


def _check_num_pops(num_pops: int) -> None:
    if num_pops < 1:
        raise ValidationError(f"Need at least one population, got {num_pops}")


def assign_random_population(
    inds: list[Individual], num_pops: int, rng: random.Random | None = None
) -> None:
    """Assign every individual a uniformly random population index."""
    _check_num_pops(num_pops)
    rng = rng or random
    for ind in inds:
        ind.pop = rng.randrange(num_pops)


def assign_fixed_size_population(inds: list[Individual], num_pops: int) -> None:
    """Deal individuals round-robin so population sizes differ by at most one."""
    _check_num_pops(num_pops)
    for i, ind in enumerate(inds):
        ind.pop = i % num_pops


def migrate_island_fixed(inds: list[Individual], rng: random.Random | None = None) -> None:
    """Island migration: every individual moves to a different population.

    The destination is uniform among the other populations, so receiving
    population sizes remain stochastic. Migrants are not sent back.
    """
    pops = sorted({ind.pop for ind in inds if ind.pop is not None})
    if len(pops) < 2:
        logger.debug("Island migration skipped: fewer than two populations")
        return

    rng = rng or random
    for ind in inds:
        if ind.pop is None:
            continue
        ind.pop = rng.choice([p for p in pops if p != ind.pop])
    logger.debug(f"Migrated {len(inds)} individuals across {len(pops)} populations")
