"""Type definitions for sampling strategies.

Contains data classes that define the inputs and outputs for all sampling methods.
This provides a clear contract between the calling application and the
selection logic.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional

import pandas as pd

from auditflow.scripts.parameter import original_index_column, replacement_column
from auditflow.scripts.population import Records, SelectedItem


class SamplingMethod(Enum):
    """Available sampling methods."""

    SIMPLE = "simple"
    SYSTEMATIC = "systematic"
    STRATIFIED = "stratified"
    MONETARY_UNIT = "monetary_unit"

    @classmethod
    def from_string(cls, value: str) -> "SamplingMethod":
        """Convert string to SamplingMethod enum.

        Accepts the enum value, the member name or a common label such as
        "Monetary Unit" or "MUS".
        """
        normalized = value.strip().lower().replace("-", "_").replace(" ", "_")
        normalized = _METHOD_ALIASES.get(normalized, normalized)
        for method in cls:
            if method.value == normalized:
                return method
        raise ValueError(f"Unknown sampling method: {value}")


_METHOD_ALIASES = {
    "simple_random": "simple",
    "random": "simple",
    "mus": "monetary_unit",
    "pps": "monetary_unit",
}


class QualitativeImpact(Enum):
    """Qualitative impact of errors found in a non-financial sample."""

    NONE = ""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def from_string(cls, value: Optional[str]) -> "QualitativeImpact":
        """Convert string to QualitativeImpact enum."""
        if not value:
            return cls.NONE
        for impact in cls:
            if impact.value == value.lower():
                return impact
        raise ValueError(f"Unknown qualitative impact: {value}")


@dataclass
class SamplingInputs:
    """Input parameters for a sampling call.

    ``column`` is the stratification column for stratified sampling and the
    value column for monetary-unit sampling; the other methods ignore it.
    """

    sampling_method: SamplingMethod
    records: Records
    sample_size: int
    seed: int
    column: Optional[str] = None
    exclusions: FrozenSet[int] = field(default_factory=frozenset)


@dataclass
class SamplingResults:
    """Results from a sampling call.

    Some fields are only populated by the method they belong to.
    """

    # Metadata
    sampling_method: SamplingMethod
    success: bool = True
    error_message: Optional[str] = None

    # Request
    seed: Optional[int] = None
    column: Optional[str] = None
    requested_size: int = 0
    available_size: int = 0

    # Selection
    items: List[SelectedItem] = field(default_factory=list)

    # Stratified-specific results
    allocation_dict: Dict[str, int] = field(default_factory=dict)

    # Systematic and monetary-unit results
    sampling_interval: Optional[float] = None

    # Monetary-unit-specific results
    total_value: Optional[float] = None

    @property
    def indices(self) -> List[int]:
        """Original indices of the selected items, in selection order."""
        return [item.original_index for item in self.items]

    @property
    def sample_size(self) -> int:
        return len(self.items)

    def to_dict(self) -> Dict[str, Any]:
        """Convert results to a plain dictionary."""
        return {
            "sampling_method": self.sampling_method.value,
            "success": self.success,
            "error_message": self.error_message,
            "seed": self.seed,
            "column": self.column,
            "requested_size": self.requested_size,
            "available_size": self.available_size,
            "sample_size": self.sample_size,
            "indices": self.indices,
            "allocation_dict": self.allocation_dict,
            "sampling_interval": self.sampling_interval,
            "total_value": self.total_value,
        }

    def to_dataframe(self) -> pd.DataFrame:
        """Selected records as a DataFrame, with their original index column."""
        return items_to_dataframe(self.items)

    @classmethod
    def error(cls, method: SamplingMethod, message: str) -> "SamplingResults":
        """Create an error result."""
        return cls(
            sampling_method=method,
            success=False,
            error_message=message,
        )


def items_to_dataframe(items: List[SelectedItem]) -> pd.DataFrame:
    """Convert selected items to a DataFrame.

    The replacement flag column is always present so that complementary and
    replacement rounds can be concatenated.
    """
    rows = []
    for item in items:
        row = item.to_dict()
        row[replacement_column] = item.is_replacement
        rows.append(row)

    df = pd.DataFrame(rows)
    if df.empty:
        return pd.DataFrame(columns=[original_index_column, replacement_column])
    return df
