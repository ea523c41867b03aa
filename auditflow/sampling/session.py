"""Accumulated audit sample built over several sampling rounds.

A session keeps the initial sample and extends it with complementary rounds
or replaces items flagged as duplicates of manually targeted items. Every
round excludes the original indices already used, so the accumulated
sample never holds the same record twice.
"""

import logging
from typing import Iterable, List, Optional, Set, Union

import pandas as pd

from auditflow.sampling.service import SamplingService
from auditflow.sampling.types import SamplingMethod, SamplingResults, items_to_dataframe
from auditflow.scripts.population import (
    Records,
    SamplingConfigurationError,
    SelectedItem,
)

logger = logging.getLogger("auditflow.sampling.session")


class SamplingSession:
    """Sample of one population accumulated across sampling rounds.

    Args:
        records: Population records, fixed for the lifetime of the session
        method: Sampling method used for every round
        column: Stratification or value column, when the method needs one
    """

    def __init__(
        self,
        records: Records,
        method: Union[SamplingMethod, str],
        column: Optional[str] = None,
    ):
        if isinstance(method, str):
            method = SamplingMethod.from_string(method)
        self.records = records
        self.method = method
        self.column = column
        self.items: List[SelectedItem] = []
        self.rounds: List[SamplingResults] = []
        self._removed: Set[int] = set()

    @property
    def indices(self) -> List[int]:
        """Original indices of the accumulated sample, in order."""
        return [item.original_index for item in self.items]

    @property
    def excluded_indices(self) -> Set[int]:
        """Indices a new round must avoid: the sample plus replaced items."""
        return set(self.indices) | self._removed

    @property
    def replaced_indices(self) -> Set[int]:
        """Indices removed from the sample as duplicates."""
        return set(self._removed)

    def _run(self, sample_size: int, seed: int, exclusions: Iterable[int]) -> SamplingResults:
        results = SamplingService.sample(
            self.method, self.records, sample_size, seed, self.column, exclusions
        )
        if results.success:
            self.rounds.append(results)
        return results

    def draw(self, sample_size: int, seed: int) -> SamplingResults:
        """Draw the initial sample, discarding any previous rounds.

        Args:
            sample_size: Number of items to select
            seed: Seed of the random source

        Returns:
            SamplingResults of the round
        """
        self.items = []
        self.rounds = []
        self._removed = set()

        results = self._run(sample_size, seed, ())
        if results.success:
            self.items = list(results.items)
        return results

    def draw_complementary(self, sample_size: int, seed: int) -> SamplingResults:
        """Extend the sample with items not selected so far.

        Args:
            sample_size: Number of additional items
            seed: Seed of the complementary round, often the initial seed

        Returns:
            SamplingResults of the complementary round
        """
        results = self._run(sample_size, seed, self.excluded_indices)
        if results.success:
            self.items.extend(results.items)
            logger.info(
                f"Complementary round added {results.sample_size} items "
                f"(total {len(self.items)}, seed={seed})"
            )
        return results

    def replace(self, original_indices: Iterable[int], seed: int) -> SamplingResults:
        """Replace items flagged as duplicates of manually targeted items.

        Each flagged item is removed and the replacement drawn for it takes
        its position in the sample, marked with ``is_replacement``. Flagged
        items are never drawn again. When the population is exhausted the
        remaining flagged items are removed without replacement.

        Args:
            original_indices: Original indices of the flagged items
            seed: Seed of the replacement round

        Returns:
            SamplingResults of the replacement round

        Raises:
            SamplingConfigurationError: If an index is not part of the sample
        """
        flagged = list(dict.fromkeys(original_indices))
        current = set(self.indices)
        missing = [index for index in flagged if index not in current]
        if missing:
            raise SamplingConfigurationError(
                f"Items {missing} are not part of the current sample"
            )
        if not flagged:
            return SamplingResults(
                sampling_method=self.method, seed=seed, column=self.column
            )

        results = self._run(len(flagged), seed, self.excluded_indices)
        if not results.success:
            return results

        flagged_set = set(flagged)
        positions = [
            position
            for position, item in enumerate(self.items)
            if item.original_index in flagged_set
        ]
        for item in results.items:
            item.is_replacement = True
        for position, item in zip(positions, results.items):
            self.items[position] = item

        unreplaced = positions[len(results.items):]
        if unreplaced:
            logger.warning(
                f"Only {len(results.items)} of {len(flagged)} duplicates could be "
                "replaced; the population is exhausted"
            )
            drop = set(unreplaced)
            self.items = [
                item for position, item in enumerate(self.items) if position not in drop
            ]

        self._removed.update(flagged)
        return results

    def to_dataframe(self) -> pd.DataFrame:
        """Accumulated sample as a DataFrame."""
        return items_to_dataframe(self.items)
