import logging
from typing import Iterable, List, Optional

from auditflow.scripts.population import (
    Records,
    SelectedItem,
    build_population_view,
    check_request,
)
from auditflow.scripts.random_source import SeededRandom, shuffle

logger = logging.getLogger("auditflow.scripts.simple_random")


def perform_simple_random_sampling(
    records: Records,
    sample_size: int,
    seed: int,
    exclusions: Optional[Iterable[int]] = None,
) -> List[SelectedItem]:
    """Select records with equal probability (Simple Random Sampling).

    The available population is shuffled with a generator seeded from
    ``seed`` and the first ``sample_size`` items are kept. Requests larger
    than the available population return every available item, in
    shuffled order.

    Args:
        records: Full population, in original order
        sample_size: Number of items to select
        seed: Seed of the random source
        exclusions: Original indices that must not be selected

    Returns:
        Selected items in selection order
    """
    check_request(sample_size, seed)
    rng = SeededRandom(seed)
    view = build_population_view(records, exclusions)
    if sample_size == 0 or not view:
        return []

    sample = shuffle(view.items, rng)[:sample_size]
    logger.debug(
        f"Simple random: {len(sample)} of {len(view)} available items (seed={seed})"
    )
    return sample
