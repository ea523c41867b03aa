import logging
from typing import Dict, Iterable, List, Optional, Sequence

import pandas as pd

from auditflow.scripts.calc_utils import percentage, round_half_up
from auditflow.scripts.population import (
    Records,
    SelectedItem,
    as_record_list,
    build_population_view,
    check_request,
    require_column,
    stratum_key,
)
from auditflow.scripts.random_source import SeededRandom, shuffle

logger = logging.getLogger("auditflow.scripts.stratified")

_MAX_INDEX_KEY = 2**32 - 1


def _is_index_key(key: str) -> bool:
    """Whether a stratum key is a canonical non-negative integer."""
    if not (key.isascii() and key.isdigit()):
        return False
    if len(key) > 1 and key.startswith("0"):
        return False
    return int(key) < _MAX_INDEX_KEY


def partition_strata(
    items: Sequence[SelectedItem], column: str
) -> Dict[str, List[SelectedItem]]:
    """Group items by the string form of their value in ``column``.

    Items keep their relative order inside each stratum. Strata whose key is
    a canonical integer come first in ascending numeric order, followed by
    the remaining strata in first-seen order.

    Args:
        items: Population view items
        column: Stratification column

    Returns:
        Ordered mapping of stratum key to its items
    """
    strata: Dict[str, List[SelectedItem]] = {}
    for item in items:
        strata.setdefault(stratum_key(item.record[column]), []).append(item)

    index_keys = sorted((k for k in strata if _is_index_key(k)), key=int)
    other_keys = [k for k in strata if not _is_index_key(k)]
    return {key: strata[key] for key in index_keys + other_keys}


def allocate_samples_proportional(
    strata_sizes: Dict[str, int], population_size: int, sample_size: int
) -> Dict[str, int]:
    """Allocate samples to strata in proportion to their size.

    Formula: n_h = round((N_h / N) x n), halves rounded up

    The allocation is not reconciled and may sum to more or less than
    ``sample_size``.

    Args:
        strata_sizes: Number of available items per stratum
        population_size: Total available items (N)
        sample_size: Requested sample size (n)

    Returns:
        Dictionary with the target sample size per stratum
    """
    return {
        key: round_half_up((size / population_size) * sample_size)
        for key, size in strata_sizes.items()
    }


def perform_stratified_sampling(
    records: Records,
    sample_size: int,
    stratum_column: str,
    seed: int,
    exclusions: Optional[Iterable[int]] = None,
) -> List[SelectedItem]:
    """Select records proportionally from each stratum (Stratified Sampling).

    Each stratum is shuffled and its proportional share is taken. Rounding
    drift is then reconciled so the result has exactly ``sample_size`` items
    whenever enough items are available: a shortfall is filled from a shuffle
    of the unselected items of all strata, an excess is removed by shuffling
    the selection and truncating it. A single random source is shared by all
    of these shuffles.

    Args:
        records: Full population, in original order
        sample_size: Number of items to select
        stratum_column: Column whose values define the strata
        seed: Seed of the random source
        exclusions: Original indices that must not be selected

    Returns:
        Selected items, stratum by stratum, followed by any backfill

    Raises:
        ColumnNotFoundError: If ``stratum_column`` is missing from a record
    """
    check_request(sample_size, seed)
    rows = as_record_list(records)
    require_column(rows, stratum_column)

    rng = SeededRandom(seed)
    view = build_population_view(rows, exclusions)
    population_size = len(view)
    if population_size == 0 or sample_size == 0:
        return []

    strata = partition_strata(view.items, stratum_column)
    allocation = allocate_samples_proportional(
        {key: len(items) for key, items in strata.items()},
        population_size,
        sample_size,
    )

    sample: List[SelectedItem] = []
    selected_indices = set()
    for key, stratum_items in strata.items():
        for item in shuffle(stratum_items, rng)[: allocation[key]]:
            sample.append(item)
            selected_indices.add(item.original_index)

    needed = sample_size - len(sample)
    if needed > 0:
        remaining = [
            item for item in view.items if item.original_index not in selected_indices
        ]
        sample.extend(shuffle(remaining, rng)[:needed])
    elif needed < 0:
        sample = shuffle(sample, rng)[:sample_size]

    logger.debug(
        f"Stratified: {len(strata)} strata, allocation={allocation}, "
        f"reconciled by {needed}, selected {len(sample)}"
    )
    return sample


def calculate_allocation_summary(
    population_items: Sequence[SelectedItem],
    sample_items: Sequence[SelectedItem],
    stratum_column: str,
) -> pd.DataFrame:
    """Create a summary DataFrame of the sample per stratum.

    Args:
        population_items: Items the sample was drawn from
        sample_items: Selected items
        stratum_column: Stratification column

    Returns:
        DataFrame with population and sample counts and shares per stratum
    """
    strata = partition_strata(population_items, stratum_column)
    sample_counts: Dict[str, int] = {}
    for item in sample_items:
        key = stratum_key(item.record[stratum_column])
        sample_counts[key] = sample_counts.get(key, 0) + 1

    total_population = len(population_items)
    total_samples = len(sample_items)

    results_data = []
    for key, items in strata.items():
        samples = sample_counts.get(key, 0)
        results_data.append(
            {
                "Stratum": key,
                "Population": len(items),
                "Population %": f"{percentage(len(items), total_population):.1f}%",
                "Samples": samples,
                "Sample %": f"{percentage(samples, total_samples):.1f}%",
            }
        )

    return pd.DataFrame(
        results_data,
        columns=["Stratum", "Population", "Population %", "Samples", "Sample %"],
    )
