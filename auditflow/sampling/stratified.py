"""Stratified sampling strategy implementation.

Stratified sampling divides the population into non-overlapping subgroups
(strata) sharing a value in one column and samples from each stratum in
proportion to its size, so every significant group is represented.
"""

import logging
from typing import List

from auditflow.sampling.base import SamplingStrategy
from auditflow.sampling.types import SamplingInputs, SamplingMethod, SamplingResults
from auditflow.scripts.population import (
    SelectedItem,
    build_population_view,
    stratum_key,
)
from auditflow.scripts.stratified import (
    calculate_allocation_summary,
    partition_strata,
    perform_stratified_sampling,
)

logger = logging.getLogger("auditflow.sampling.stratified")

MAX_STRATA_WARNING = 50


class StratifiedSamplingStrategy(SamplingStrategy):
    """Strategy for proportional stratified random sampling.

    Stratified sampling is ideal when the population splits into groups
    (branch, account, transaction type) that should all be represented.
    """

    @property
    def method(self) -> SamplingMethod:
        return SamplingMethod.STRATIFIED

    @property
    def display_name(self) -> str:
        return "Stratified Random Sampling"

    @property
    def description(self) -> str:
        return (
            "Divide the population into groups (strata) by a column and select "
            "from each group in proportion to its size."
        )

    @property
    def requires_column(self) -> bool:
        return True

    def select(self, inputs: SamplingInputs) -> List[SelectedItem]:
        return perform_stratified_sampling(
            inputs.records,
            inputs.sample_size,
            inputs.column,
            inputs.seed,
            inputs.exclusions,
        )

    def _annotate(
        self,
        results: SamplingResults,
        available: List[SelectedItem],
        inputs: SamplingInputs,
    ) -> None:
        strata = partition_strata(available, inputs.column)
        if len(strata) > MAX_STRATA_WARNING:
            logger.warning(
                f"Column '{inputs.column}' defines {len(strata)} strata; "
                "most of them will receive no sample"
            )

        allocation = {key: 0 for key in strata}
        for item in results.items:
            allocation[stratum_key(item.record[inputs.column])] += 1
        results.allocation_dict = allocation

    def summarize(self, inputs: SamplingInputs, results: SamplingResults):
        """Per-stratum summary table of a stratified sample.

        Args:
            inputs: Inputs the sample was drawn with
            results: Successful stratified results

        Returns:
            DataFrame from calculate_allocation_summary
        """
        view = build_population_view(inputs.records, inputs.exclusions)
        return calculate_allocation_summary(view.items, results.items, inputs.column)
