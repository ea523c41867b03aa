"""AuditFlow Scripts Package.

Contains the selection algorithms and supporting calculations of the
sampling engine.
"""

from .calc_utils import percentage, round_half_up
from .complementary import (
    calculate_complementary_sample_size,
    calculate_observed_error,
    exceeds_total_sample_limit,
    is_sample_sufficient,
)
from .diagnostics import monetary_weighting_correlation, simulate_selection_frequency
from .monetary_unit import perform_monetary_unit_sampling
from .population import (
    ColumnNotFoundError,
    InvalidValueError,
    PopulationView,
    SamplingConfigurationError,
    SelectedItem,
    build_population_view,
)
from .random_source import SeededRandom, shuffle
from .simple_random import perform_simple_random_sampling
from .stratified import (
    allocate_samples_proportional,
    calculate_allocation_summary,
    partition_strata,
    perform_stratified_sampling,
)
from .systematic import calculate_sampling_interval, perform_systematic_sampling

__all__ = [
    # Random source
    "SeededRandom",
    "shuffle",
    # Population
    "SelectedItem",
    "PopulationView",
    "build_population_view",
    "SamplingConfigurationError",
    "ColumnNotFoundError",
    "InvalidValueError",
    # Selection
    "perform_simple_random_sampling",
    "perform_systematic_sampling",
    "perform_stratified_sampling",
    "perform_monetary_unit_sampling",
    "calculate_sampling_interval",
    "partition_strata",
    "allocate_samples_proportional",
    "calculate_allocation_summary",
    # Test evaluation
    "calculate_observed_error",
    "calculate_complementary_sample_size",
    "exceeds_total_sample_limit",
    "is_sample_sufficient",
    # Diagnostics
    "simulate_selection_frequency",
    "monetary_weighting_correlation",
    # Utilities
    "percentage",
    "round_half_up",
]
