"""AuditFlow deterministic sampling engine."""

from auditflow.sampling import (
    SamplingMethod,
    SamplingService,
    SamplingSession,
    get_sampling_strategy,
)
from auditflow.scripts import (
    ColumnNotFoundError,
    SamplingConfigurationError,
    SelectedItem,
    perform_monetary_unit_sampling,
    perform_simple_random_sampling,
    perform_stratified_sampling,
    perform_systematic_sampling,
)

__version__ = "0.1.0"

__all__ = [
    "SamplingMethod",
    "SamplingService",
    "SamplingSession",
    "SelectedItem",
    "ColumnNotFoundError",
    "SamplingConfigurationError",
    "get_sampling_strategy",
    "perform_simple_random_sampling",
    "perform_systematic_sampling",
    "perform_stratified_sampling",
    "perform_monetary_unit_sampling",
]
