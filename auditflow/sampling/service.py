"""Sampling service for orchestrating sampling calls.

This module provides the main entry points for callers to interact with the
sampling strategies.
"""

import logging
from typing import Dict, Iterable, List, Optional, Tuple, Type, Union

from auditflow.sampling.base import SamplingStrategy
from auditflow.sampling.monetary_unit import MonetaryUnitSamplingStrategy
from auditflow.sampling.simple import SimpleSamplingStrategy
from auditflow.sampling.stratified import StratifiedSamplingStrategy
from auditflow.sampling.systematic import SystematicSamplingStrategy
from auditflow.sampling.types import SamplingInputs, SamplingMethod, SamplingResults
from auditflow.scripts.population import Records

logger = logging.getLogger("auditflow.sampling.service")

# Registry of available strategies
_STRATEGY_REGISTRY: Dict[SamplingMethod, Type[SamplingStrategy]] = {
    SamplingMethod.SIMPLE: SimpleSamplingStrategy,
    SamplingMethod.SYSTEMATIC: SystematicSamplingStrategy,
    SamplingMethod.STRATIFIED: StratifiedSamplingStrategy,
    SamplingMethod.MONETARY_UNIT: MonetaryUnitSamplingStrategy,
}

# Cached strategy instances
_strategy_instances: Dict[SamplingMethod, SamplingStrategy] = {}


def get_sampling_strategy(method: Union[SamplingMethod, str]) -> SamplingStrategy:
    """Return the shared strategy instance for ``method``.

    Strings are parsed with :meth:`SamplingMethod.from_string`.

    Raises:
        ValueError: If the method is unknown or has no registered strategy
    """
    if isinstance(method, str):
        method = SamplingMethod.from_string(method)
    try:
        strategy_class = _STRATEGY_REGISTRY[method]
    except KeyError:
        raise ValueError(f"No sampling strategy registered for {method!r}") from None

    # Reuse the cached instance
    if method not in _strategy_instances:
        _strategy_instances[method] = strategy_class()
    return _strategy_instances[method]


def get_strategy_from_string(method_str: str) -> SamplingStrategy:
    """Strategy for a method label such as "stratified" or "MUS"."""
    return get_sampling_strategy(SamplingMethod.from_string(method_str))


class SamplingService:
    """High-level service for sampling calls.

    Provides a simplified interface that builds the inputs and dispatches to
    the strategy of the requested method.
    """

    @staticmethod
    def create_inputs(
        method: SamplingMethod,
        records: Records,
        sample_size: int,
        seed: int,
        column: Optional[str] = None,
        exclusions: Optional[Iterable[int]] = None,
    ) -> SamplingInputs:
        """Create SamplingInputs from call parameters.

        Args:
            method: Sampling method, as enum or string
            records: Population records
            sample_size: Number of items to select
            seed: Seed of the random source
            column: Stratification or value column
            exclusions: Original indices already sampled

        Returns:
            SamplingInputs populated from the parameters
        """
        if isinstance(method, str):
            method = SamplingMethod.from_string(method)
        if exclusions is None:
            exclusions = ()

        return SamplingInputs(
            sampling_method=method,
            records=records,
            sample_size=sample_size,
            seed=seed,
            column=column,
            exclusions=frozenset(exclusions),
        )

    @staticmethod
    def calculate(inputs: SamplingInputs) -> SamplingResults:
        """Draw a sample using the appropriate strategy.

        Args:
            inputs: Sampling inputs

        Returns:
            SamplingResults from the strategy
        """
        strategy = get_sampling_strategy(inputs.sampling_method)
        return strategy.calculate(inputs)

    @staticmethod
    def sample(
        method: SamplingMethod,
        records: Records,
        sample_size: int,
        seed: int,
        column: Optional[str] = None,
        exclusions: Optional[Iterable[int]] = None,
    ) -> SamplingResults:
        """Draw a sample directly from call parameters.

        This is a convenience method that combines create_inputs and
        calculate into a single call.
        """
        inputs = SamplingService.create_inputs(
            method, records, sample_size, seed, column, exclusions
        )
        return SamplingService.calculate(inputs)

    @staticmethod
    def get_validation_errors(inputs: SamplingInputs) -> List[str]:
        """Get validation errors for the given inputs.

        Args:
            inputs: Sampling inputs

        Returns:
            List of validation error messages
        """
        strategy = get_sampling_strategy(inputs.sampling_method)
        return strategy.validate_inputs(inputs)

    @staticmethod
    def get_available_methods(is_financial: bool = True) -> List[Tuple[str, str, str]]:
        """Get list of available sampling methods.

        Args:
            is_financial: Whether the population carries monetary values;
                methods requiring a value column are omitted otherwise

        Returns:
            List of (method_value, display_name, description) tuples
        """
        methods = []
        for method in SamplingMethod:
            strategy = get_sampling_strategy(method)
            if strategy.requires_numeric_column and not is_financial:
                continue
            methods.append((method.value, strategy.display_name, strategy.description))
        return methods
