import logging
from typing import Iterable

import numpy as np
import pandas as pd
from scipy import stats

from auditflow.scripts.monetary_unit import perform_monetary_unit_sampling
from auditflow.scripts.population import (
    Records,
    as_record_list,
    build_population_view,
    numeric_value,
)

logger = logging.getLogger("auditflow.scripts.diagnostics")


def simulate_selection_frequency(
    records: Records, sample_size: int, value_column: str, seeds: Iterable[int]
) -> pd.Series:
    """Count how often each record is selected by monetary-unit sampling.

    Args:
        records: Full population
        sample_size: Sample size of every simulated draw
        value_column: Column holding the monetary value
        seeds: Seeds to simulate, one draw each

    Returns:
        Series of selection counts indexed by original index
    """
    rows = as_record_list(records)
    counts = np.zeros(len(rows), dtype=int)
    draws = 0
    for seed in seeds:
        selected = [
            item.original_index
            for item in perform_monetary_unit_sampling(rows, sample_size, value_column, seed)
        ]
        np.add.at(counts, selected, 1)
        draws += 1

    logger.debug(f"Simulated {draws} monetary-unit draws over {len(rows)} records")
    return pd.Series(counts, name="selections")


def monetary_weighting_correlation(
    records: Records, sample_size: int, value_column: str, seeds: Iterable[int]
) -> float:
    """Spearman rank correlation between record value and selection frequency.

    A value close to 1 indicates that larger items are selected more often,
    as probability-proportional-to-size sampling intends.

    Args:
        records: Full population
        sample_size: Sample size of every simulated draw
        value_column: Column holding the monetary value
        seeds: Seeds to simulate

    Returns:
        Spearman's rho (NaN when either series is constant)
    """
    rows = as_record_list(records)
    frequencies = simulate_selection_frequency(rows, sample_size, value_column, seeds)
    values = np.array(
        [numeric_value(item, value_column) for item in build_population_view(rows)]
    )
    rho, _ = stats.spearmanr(values, frequencies.to_numpy())
    return float(rho)
