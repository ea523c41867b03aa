"""Complementary sample sizing after the initial sample has been tested.

When testing the initial sample finds errors, the auditor extends the
sample with a complementary round drawn disjointly from it. These helpers
size that round and check it against the overall sample limits.
"""

import math
from typing import Optional

from auditflow.scripts.calc_utils import percentage, round_half_up
from auditflow.scripts.parameter import (
    impact_factors,
    max_complementary_sample,
    max_total_sample,
)


def _impact_key(qualitative_impact) -> str:
    return getattr(qualitative_impact, "value", qualitative_impact) or ""


def calculate_observed_error(errors_found: int, initial_sample_size: int) -> float:
    """Observed error rate of the initial sample, as a percentage."""
    return percentage(errors_found, initial_sample_size)


def is_sample_sufficient(
    errors_found: int,
    initial_sample_size: int,
    is_financial: bool,
    tolerable_error: float,
) -> bool:
    """Whether the initial sample supports a conclusion without extension.

    Financial populations are sufficient while the observed error stays within
    the tolerable error; any error makes a non-financial sample insufficient.

    Args:
        errors_found: Number of errors found in the initial sample
        initial_sample_size: Size of the initial sample
        is_financial: Whether the population carries monetary values
        tolerable_error: Tolerable error as percentage (e.g., 5.0 for 5%)

    Returns:
        True if no complementary sample is required
    """
    if is_financial:
        observed = calculate_observed_error(errors_found, initial_sample_size)
        return observed <= tolerable_error
    return errors_found == 0


def calculate_complementary_sample_size(
    errors_found: int,
    initial_sample_size: int,
    is_financial: bool,
    tolerable_error: float,
    qualitative_impact: Optional[str] = None,
) -> int:
    """Calculate the size of a complementary sample.

    Financial populations: n_total = ceil(E / tolerable_error), and the
    complement is n_total minus the initial sample size. Non-financial
    populations: complement = round(E x impact factor), where the factor
    depends on the qualitative impact of the errors (low 0.5, medium 1.0,
    high 1.5).

    The result is clamped to [0, max_complementary_sample].

    Args:
        errors_found: Number of errors found in the initial sample (E)
        initial_sample_size: Size of the initial sample
        is_financial: Whether the population carries monetary values
        tolerable_error: Tolerable error as percentage (e.g., 5.0 for 5%)
        qualitative_impact: "low", "medium", "high" or a QualitativeImpact;
            None or "" when not assessed

    Returns:
        Number of additional items to sample

    Raises:
        ValueError: If a financial calculation has a non-positive tolerable error
    """
    if errors_found <= 0:
        return 0

    if is_financial:
        if is_sample_sufficient(
            errors_found, initial_sample_size, is_financial, tolerable_error
        ):
            return 0
        if tolerable_error <= 0:
            raise ValueError("Tolerable error must be greater than 0")
        required_total = math.ceil(errors_found / (tolerable_error / 100))
        complement = required_total - initial_sample_size
    else:
        impact = _impact_key(qualitative_impact)
        if not impact:
            return 0
        if impact not in impact_factors:
            raise ValueError(f"Unknown qualitative impact: {impact}")
        complement = round_half_up(errors_found * impact_factors[impact])

    return min(max_complementary_sample, max(0, complement))


def exceeds_total_sample_limit(initial_sample_size: int, complementary_size: int) -> bool:
    """Whether initial plus complementary samples exceed max_total_sample."""
    return initial_sample_size + complementary_size > max_total_sample
