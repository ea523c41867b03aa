"""Population view shared by all sampling methods.

Records are materialised as :class:`SelectedItem` objects carrying their
original position, which is the only identity used for exclusion and
de-duplication. Exclusions are applied here and nowhere else.
"""

import math
import numbers
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

import numpy as np
import pandas as pd

from auditflow.scripts.parameter import original_index_column, replacement_column

Record = Mapping[str, Any]
Records = Union[Sequence[Record], pd.DataFrame]


class SamplingConfigurationError(ValueError):
    """Raised when a sampling call is given inputs it cannot honour."""


class ColumnNotFoundError(SamplingConfigurationError):
    """Raised when the stratum or value column is absent from a record."""

    def __init__(self, column: str, row: Optional[int] = None):
        self.column = column
        self.row = row
        if row is None:
            message = f"Column '{column}' not found in population"
        else:
            message = f"Column '{column}' not found in record {row}"
        super().__init__(message)


class InvalidValueError(SamplingConfigurationError):
    """Raised when a monetary value cannot be read as a number."""


@dataclass
class SelectedItem:
    """A population record together with its original position."""

    record: Dict[str, Any]
    original_index: int
    is_replacement: bool = False

    def __getitem__(self, column: str) -> Any:
        return self.record[column]

    def to_dict(self) -> Dict[str, Any]:
        """Flatten the record, adding the original index and replacement flag."""
        row = dict(self.record)
        row[original_index_column] = self.original_index
        if self.is_replacement:
            row[replacement_column] = True
        return row


@dataclass
class PopulationView:
    """Available (non-excluded) items of a population, in original order."""

    items: List[SelectedItem] = field(default_factory=list)
    population_size: int = 0

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    @property
    def excluded_count(self) -> int:
        return self.population_size - len(self.items)


def as_record_list(records: Records) -> List[Record]:
    """Return the population as a list of mappings.

    DataFrames are read row by row in their current order; their positional
    row number becomes the original index.
    """
    if isinstance(records, pd.DataFrame):
        return records.to_dict(orient="records")
    return list(records)


def require_column(records: Sequence[Record], column: Optional[str]) -> None:
    """Check that ``column`` is a key of every record.

    Raises:
        ColumnNotFoundError: If the column is missing or not given
    """
    if column is None:
        raise ColumnNotFoundError("None")
    for row_number, record in enumerate(records):
        if column not in record:
            raise ColumnNotFoundError(column, row_number)


def check_request(size: Any, seed: Any) -> None:
    """Validate the sample size and seed of a sampling call.

    Raises:
        SamplingConfigurationError: If size is not a non-negative integer or
            seed is not an integer
    """
    if isinstance(size, bool) or not isinstance(size, numbers.Integral):
        raise SamplingConfigurationError(f"Sample size must be an integer, got {size!r}")
    if size < 0:
        raise SamplingConfigurationError(f"Sample size must not be negative, got {size}")
    if isinstance(seed, bool) or not isinstance(seed, numbers.Integral):
        raise SamplingConfigurationError(f"Seed must be an integer, got {seed!r}")


def build_population_view(
    records: Records, exclusions: Optional[Iterable[int]] = None
) -> PopulationView:
    """Build the ordered view of records whose position is not excluded.

    Args:
        records: Full population, in original order
        exclusions: Original indices already present in a prior sample

    Returns:
        PopulationView preserving the original relative order
    """
    rows = as_record_list(records)
    excluded = set(exclusions) if exclusions is not None else set()
    items = [
        SelectedItem(record=dict(row), original_index=index)
        for index, row in enumerate(rows)
        if index not in excluded
    ]
    return PopulationView(items=items, population_size=len(rows))


def numeric_value(item: SelectedItem, column: str) -> float:
    """Read a monetary value, treating blank and missing values as zero.

    Numbers are used as-is, numeric strings are parsed, and empty strings,
    ``None``, ``False`` and NaN count as zero.

    Raises:
        InvalidValueError: If the value is not numeric
    """
    value = item.record.get(column)
    if value is None or isinstance(value, str) and value == "":
        return 0.0
    if isinstance(value, (bool, np.bool_, numbers.Real)):
        number = float(value)
        return 0.0 if math.isnan(number) else number
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        try:
            return float(text)
        except ValueError:
            raise InvalidValueError(
                f"Value {value!r} in column '{column}' of record "
                f"{item.original_index} is not numeric"
            ) from None
    raise InvalidValueError(
        f"Value {value!r} in column '{column}' of record "
        f"{item.original_index} is not numeric"
    )


def stratum_key(value: Any) -> str:
    """Return the string form used to group a value into a stratum.

    Integral floats drop their fractional part and booleans and missing
    values use lower-case names. ``1`` and ``1.0`` share a stratum,
    ``True`` becomes ``"true"`` and ``None`` becomes ``"null"``.
    """
    if value is None:
        return "null"
    if isinstance(value, str):
        return value
    if isinstance(value, (bool, np.bool_)):
        return "true" if value else "false"
    if isinstance(value, numbers.Integral):
        return str(int(value))
    if isinstance(value, numbers.Real):
        number = float(value)
        if math.isnan(number):
            return "NaN"
        if math.isinf(number):
            return "Infinity" if number > 0 else "-Infinity"
        if number.is_integer() and abs(number) < 1e21:
            return str(int(number))
        return _float_text(number)
    return str(value)


def _float_text(number: float) -> str:
    """Shortest text of a float, in plain decimals down to 1e-7.

    Exponents are written without padding: ``1.5e-7`` and ``1e+21``.
    """
    text = repr(number)
    if "e" not in text:
        return text
    mantissa, exponent = text.split("e")
    exponent = int(exponent)
    if -7 < exponent < 0:
        sign = "-" if mantissa.startswith("-") else ""
        digits = mantissa.lstrip("-").replace(".", "")
        return f"{sign}0.{'0' * (-exponent - 1)}{digits}"
    return f"{mantissa}e{'+' if exponent > 0 else '-'}{abs(exponent)}"
