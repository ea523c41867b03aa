"""Sampling strategies module.

This module provides the strategy layer over the selection algorithms.
Each sampling method is implemented as a Strategy class that handles:
- Input validation
- Selection through a seeded, reproducible algorithm
- Results formatting

Usage:
    from auditflow.sampling import get_sampling_strategy, SamplingMethod

    strategy = get_sampling_strategy(SamplingMethod.STRATIFIED)
    if strategy.is_ready(inputs):
        results = strategy.calculate(inputs)
"""

from auditflow.sampling.base import SamplingStrategy
from auditflow.sampling.service import (
    SamplingService,
    get_sampling_strategy,
    get_strategy_from_string,
)
from auditflow.sampling.session import SamplingSession
from auditflow.sampling.types import (
    QualitativeImpact,
    SamplingInputs,
    SamplingMethod,
    SamplingResults,
)

__all__ = [
    "SamplingStrategy",
    "SamplingMethod",
    "SamplingInputs",
    "SamplingResults",
    "SamplingService",
    "SamplingSession",
    "QualitativeImpact",
    "get_sampling_strategy",
    "get_strategy_from_string",
]
