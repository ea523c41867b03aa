"""Monetary-unit sampling strategy implementation.

Monetary-unit sampling (MUS) selects records with a probability
proportional to their monetary value, so high-value items are more likely
to be tested. Only meaningful for financial populations.
"""

import logging
from typing import List

from auditflow.sampling.base import SamplingStrategy
from auditflow.sampling.types import SamplingInputs, SamplingMethod, SamplingResults
from auditflow.scripts.monetary_unit import (
    calculate_total_value,
    perform_monetary_unit_sampling,
)
from auditflow.scripts.population import (
    InvalidValueError,
    PopulationView,
    SelectedItem,
    numeric_value,
)

logger = logging.getLogger("auditflow.sampling.monetary_unit")


class MonetaryUnitSamplingStrategy(SamplingStrategy):
    """Strategy for monetary-unit (probability proportional to size) sampling."""

    @property
    def method(self) -> SamplingMethod:
        return SamplingMethod.MONETARY_UNIT

    @property
    def display_name(self) -> str:
        return "Monetary Unit Sampling (MUS)"

    @property
    def description(self) -> str:
        return (
            "Selection weighted by value: the larger the amount, the higher "
            "the chance of being selected. For financial populations only."
        )

    @property
    def requires_column(self) -> bool:
        return True

    @property
    def requires_numeric_column(self) -> bool:
        return True

    def _validate_population(
        self, view: PopulationView, inputs: SamplingInputs
    ) -> List[str]:
        """Check that every available value is numeric."""
        for item in view:
            try:
                numeric_value(item, inputs.column)
            except InvalidValueError as e:
                return [str(e)]
        return []

    def select(self, inputs: SamplingInputs) -> List[SelectedItem]:
        return perform_monetary_unit_sampling(
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
        total_value = calculate_total_value(available, inputs.column)
        results.total_value = total_value
        if inputs.sample_size > 0 and total_value != 0:
            results.sampling_interval = total_value / inputs.sample_size
