import logging
import math
from typing import Iterable, List, Optional

from auditflow.scripts.population import (
    Records,
    SelectedItem,
    build_population_view,
    check_request,
)
from auditflow.scripts.random_source import SeededRandom

logger = logging.getLogger("auditflow.scripts.systematic")


def calculate_sampling_interval(population_size: int, sample_size: int) -> int:
    """Calculate the selection interval k for systematic sampling.

    Formula: k = floor(N / n), never less than 1

    Args:
        population_size: Number of available items (N)
        sample_size: Number of items to select (n), greater than 0

    Returns:
        Sampling interval
    """
    return max(population_size // sample_size, 1)


def perform_systematic_sampling(
    records: Records,
    sample_size: int,
    seed: int,
    exclusions: Optional[Iterable[int]] = None,
) -> List[SelectedItem]:
    """Select every k-th record after a random start (Systematic Sampling).

    The start offset is a single draw in ``[0, k)``. The population is read
    in its given order, so a population sorted on a meaningful field (date,
    amount) yields a sample that follows that ordering.

    Args:
        records: Full population, in original order
        sample_size: Number of items to select
        seed: Seed of the random source
        exclusions: Original indices that must not be selected

    Returns:
        Selected items in population order
    """
    check_request(sample_size, seed)
    rng = SeededRandom(seed)
    view = build_population_view(records, exclusions)
    population_size = len(view)
    if sample_size == 0 or population_size == 0:
        return []
    if sample_size >= population_size:
        return list(view.items)

    interval = calculate_sampling_interval(population_size, sample_size)
    start = math.floor(rng.next() * interval)

    sample = []
    for position in range(start, population_size, interval):
        if len(sample) >= sample_size:
            break
        sample.append(view.items[position])

    logger.debug(
        f"Systematic: start={start}, interval={interval}, selected {len(sample)}"
    )
    return sample
