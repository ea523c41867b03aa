"""Monetary-unit sampling (probability proportional to size).

Every currency unit of the population has the same chance of being hit, so
an item's selection probability grows with its value. Selection points are
laid out systematically over the cumulative value after a random start.
"""

import logging
from typing import Iterable, List, Optional, Sequence

from auditflow.scripts.population import (
    Records,
    SelectedItem,
    as_record_list,
    build_population_view,
    check_request,
    numeric_value,
    require_column,
)
from auditflow.scripts.random_source import SeededRandom, shuffle

logger = logging.getLogger("auditflow.scripts.monetary_unit")


def calculate_total_value(items: Sequence[SelectedItem], value_column: str) -> float:
    """Sum the monetary values of ``items`` in population order.

    The values are accumulated one by one (no compensated summation) so that
    the total, and hence the sampling interval, is reproducible.
    """
    total = 0.0
    for item in items:
        total += numeric_value(item, value_column)
    return total


def calculate_selection_points(
    start_point: float, interval: float, sample_size: int
) -> List[float]:
    """Return the cumulative-value positions hit by the sample.

    Formula: p_i = start + i x interval, for i in 0..n-1
    """
    return [start_point + (i * interval) for i in range(sample_size)]


def select_by_cumulative_value(
    items: Sequence[SelectedItem], value_column: str, points: Sequence[float]
) -> List[SelectedItem]:
    """Walk the items and keep those whose value range holds a point.

    An item spans ``(previous cumulative, cumulative]``. It is selected once
    even when several points land inside its range; the extra points are
    absorbed.
    """
    sample = []
    cumulative = 0.0
    for item in items:
        previous = cumulative
        cumulative += numeric_value(item, value_column)
        if any(previous < point <= cumulative for point in points):
            sample.append(item)
    return sample


def perform_monetary_unit_sampling(
    records: Records,
    sample_size: int,
    value_column: str,
    seed: int,
    exclusions: Optional[Iterable[int]] = None,
) -> List[SelectedItem]:
    """Select records with probability proportional to their value (MUS).

    Steps:
        1. interval = total value / n, start = U[0, 1) x interval
        2. Select each item whose cumulative value range holds a point
        3. If fewer than n items were hit (absorbed points, zero values),
           fill the remainder from a shuffle of the unselected items
        4. Shuffle the selection so its order does not reveal the walk

    Requests for the whole available population return it unchanged and a
    zero total value yields an empty sample.

    Args:
        records: Full population, in original order
        sample_size: Number of items to select
        value_column: Column holding the monetary value
        seed: Seed of the random source
        exclusions: Original indices that must not be selected

    Returns:
        Selected items in shuffled order

    Raises:
        ColumnNotFoundError: If ``value_column`` is missing from a record
        InvalidValueError: If a value is not numeric
    """
    check_request(sample_size, seed)
    rows = as_record_list(records)
    require_column(rows, value_column)

    rng = SeededRandom(seed)
    view = build_population_view(rows, exclusions)
    if len(view) == 0 or sample_size == 0:
        return []
    if sample_size >= len(view):
        return list(view.items)

    total_value = calculate_total_value(view.items, value_column)
    if total_value == 0:
        logger.warning(
            f"Total of column '{value_column}' is zero; no monetary-unit sample drawn"
        )
        return []

    interval = total_value / sample_size
    start_point = rng.next() * interval
    points = calculate_selection_points(start_point, interval, sample_size)

    sample = select_by_cumulative_value(view.items, value_column, points)

    if len(sample) < sample_size:
        selected_indices = {item.original_index for item in sample}
        remaining = [
            item for item in view.items if item.original_index not in selected_indices
        ]
        needed = sample_size - len(sample)
        logger.debug(f"Monetary unit: backfilling {needed} absorbed selection(s)")
        sample.extend(shuffle(remaining, rng)[:needed])

    logger.debug(
        f"Monetary unit: total={total_value}, interval={interval}, "
        f"start={start_point}, selected {len(sample)}"
    )
    return shuffle(sample, rng)[:sample_size]
