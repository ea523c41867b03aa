"""Simple random sampling strategy implementation.

Simple random sampling gives every record of the population an equal
probability of being selected. This is the most basic sampling method and
serves as the baseline for comparison with other methods.
"""

import logging
from typing import List

from auditflow.sampling.base import SamplingStrategy
from auditflow.sampling.types import SamplingInputs, SamplingMethod
from auditflow.scripts.population import SelectedItem
from auditflow.scripts.simple_random import perform_simple_random_sampling

logger = logging.getLogger("auditflow.sampling.simple")


class SimpleSamplingStrategy(SamplingStrategy):
    """Strategy for simple random sampling.

    Simple random sampling is ideal when:
    - The population is homogeneous
    - No column is a meaningful basis for stratification
    - Every record carries the same audit risk
    """

    @property
    def method(self) -> SamplingMethod:
        return SamplingMethod.SIMPLE

    @property
    def display_name(self) -> str:
        return "Simple Random Sampling"

    @property
    def description(self) -> str:
        return "Every record has the same probability of being selected."

    def select(self, inputs: SamplingInputs) -> List[SelectedItem]:
        return perform_simple_random_sampling(
            inputs.records, inputs.sample_size, inputs.seed, inputs.exclusions
        )
