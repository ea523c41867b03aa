"""Base class for sampling strategies.

Defines the interface that all sampling strategies must implement.
"""

import logging
import numbers
from abc import ABC, abstractmethod
from dataclasses import replace
from typing import List, Optional, Tuple

from auditflow.scripts.parameter import seed_max, seed_min
from auditflow.scripts.population import (
    PopulationView,
    Record,
    SamplingConfigurationError,
    SelectedItem,
    as_record_list,
    build_population_view,
    require_column,
)
from auditflow.sampling.types import SamplingInputs, SamplingMethod, SamplingResults

logger = logging.getLogger("auditflow.sampling")


class SamplingStrategy(ABC):
    """Abstract base class for sampling strategies.

    Each sampling method (simple, systematic, stratified, monetary unit)
    implements this interface. ``calculate`` validates the inputs, runs the
    selection and reports configuration problems as error results.
    """

    @property
    @abstractmethod
    def method(self) -> SamplingMethod:
        """Return the sampling method this strategy handles."""
        pass

    @property
    @abstractmethod
    def display_name(self) -> str:
        """Human-readable name for this sampling method."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Description of when to use this sampling method."""
        pass

    @property
    def requires_column(self) -> bool:
        """Whether this method needs a stratification or value column."""
        return False

    @property
    def requires_numeric_column(self) -> bool:
        """Whether the column must hold monetary values."""
        return False

    @property
    def is_order_sensitive(self) -> bool:
        """Whether the result depends on the order of the population."""
        return False

    @abstractmethod
    def select(self, inputs: SamplingInputs) -> List[SelectedItem]:
        """Run the selection algorithm.

        Args:
            inputs: Validated sampling inputs

        Returns:
            Selected items
        """
        pass

    def validate_inputs(self, inputs: SamplingInputs) -> List[str]:
        """Validate inputs for this sampling method.

        Args:
            inputs: Sampling inputs to validate

        Returns:
            List of validation error messages (empty if valid)
        """
        errors, _, _ = self._check_inputs(inputs)
        return errors

    def calculate(self, inputs: SamplingInputs) -> SamplingResults:
        """Draw a sample with this method.

        Args:
            inputs: Sampling inputs

        Returns:
            SamplingResults with the selected items, or an error result
        """
        errors, rows, view = self._check_inputs(inputs)
        if errors:
            message = "; ".join(errors)
            logger.error(f"Invalid {self.method.value} sampling inputs: {message}")
            return SamplingResults.error(self.method, message)

        try:
            items = self.select(replace(inputs, records=rows))
        except SamplingConfigurationError as e:
            logger.error(f"Error in {self.method.value} sampling: {e}")
            return SamplingResults.error(self.method, str(e))

        results = SamplingResults(
            sampling_method=self.method,
            success=True,
            seed=inputs.seed,
            column=inputs.column if self.requires_column else None,
            requested_size=inputs.sample_size,
            available_size=len(view),
            items=items,
        )
        self._annotate(results, view.items, inputs)

        logger.debug(
            f"{self.display_name}: selected {results.sample_size} of "
            f"{results.available_size} available (seed={inputs.seed})"
        )
        if results.sample_size < inputs.sample_size:
            logger.info(
                f"{self.display_name}: requested {inputs.sample_size} items but "
                f"only {results.sample_size} could be selected"
            )
        return results

    def is_ready(self, inputs: SamplingInputs) -> bool:
        """Check if inputs are ready for calculation.

        Args:
            inputs: Sampling inputs to check

        Returns:
            True if ready for calculation
        """
        errors = self.validate_inputs(inputs)
        return len(errors) == 0

    def _check_inputs(
        self, inputs: SamplingInputs
    ) -> Tuple[List[str], Optional[List[Record]], Optional[PopulationView]]:
        """Validate inputs, reading the population once.

        Returns:
            Validation errors, the population as a record list and its view.
            The view is only built when the inputs are otherwise valid.
        """
        errors = self._validate_common_inputs(inputs)
        if inputs.records is None:
            return errors, None, None

        rows = as_record_list(inputs.records)
        if self.requires_column:
            if not inputs.column:
                errors.append(f"{self.display_name} requires a column to be selected")
            else:
                try:
                    require_column(rows, inputs.column)
                except SamplingConfigurationError as e:
                    errors.append(str(e))
        if errors:
            return errors, rows, None

        view = build_population_view(rows, inputs.exclusions)
        errors.extend(self._validate_population(view, inputs))
        return errors, rows, view

    def _validate_population(
        self, view: PopulationView, inputs: SamplingInputs
    ) -> List[str]:
        """Check the available records; the inputs are otherwise valid."""
        return []

    def _annotate(
        self,
        results: SamplingResults,
        available: List[SelectedItem],
        inputs: SamplingInputs,
    ) -> None:
        """Add method-specific details to a successful result."""
        pass

    def _validate_common_inputs(self, inputs: SamplingInputs) -> List[str]:
        """Validate inputs common to all sampling methods.

        Args:
            inputs: Sampling inputs to validate

        Returns:
            List of validation error messages
        """
        errors = []

        size = inputs.sample_size
        if isinstance(size, bool) or not isinstance(size, numbers.Integral):
            errors.append("Sample size must be a whole number")
        elif size < 0:
            errors.append("Sample size must not be negative")

        seed = inputs.seed
        if isinstance(seed, bool) or not isinstance(seed, numbers.Integral):
            errors.append("Seed must be a whole number")
        elif not seed_min <= seed <= seed_max:
            errors.append(f"Seed must be between {seed_min} and {seed_max}")

        if inputs.records is None:
            errors.append("Population records are required")

        return errors
