"""Systematic sampling strategy implementation.

Systematic sampling draws a random start and then takes every k-th record
of the population in its given order.
"""

import logging
from typing import List

from auditflow.sampling.base import SamplingStrategy
from auditflow.sampling.types import SamplingInputs, SamplingMethod, SamplingResults
from auditflow.scripts.population import SelectedItem
from auditflow.scripts.systematic import (
    calculate_sampling_interval,
    perform_systematic_sampling,
)

logger = logging.getLogger("auditflow.sampling.systematic")


class SystematicSamplingStrategy(SamplingStrategy):
    """Strategy for systematic sampling.

    Systematic sampling is ideal when:
    - The population has no periodic pattern aligned with the interval
    - An even spread over the whole file is wanted

    The selection follows the population order. If the file is sorted by
    date, amount or another meaningful field, the sample inherits that
    ordering; callers should warn the user accordingly.
    """

    @property
    def method(self) -> SamplingMethod:
        return SamplingMethod.SYSTEMATIC

    @property
    def display_name(self) -> str:
        return "Systematic Sampling"

    @property
    def description(self) -> str:
        return (
            "Draw a random starting record and then select every k-th record. "
            "Check that the file is not sorted in a way that biases the selection."
        )

    @property
    def is_order_sensitive(self) -> bool:
        return True

    def select(self, inputs: SamplingInputs) -> List[SelectedItem]:
        return perform_systematic_sampling(
            inputs.records, inputs.sample_size, inputs.seed, inputs.exclusions
        )

    def _annotate(
        self,
        results: SamplingResults,
        available: List[SelectedItem],
        inputs: SamplingInputs,
    ) -> None:
        if 0 < inputs.sample_size < len(available):
            results.sampling_interval = calculate_sampling_interval(
                len(available), inputs.sample_size
            )
