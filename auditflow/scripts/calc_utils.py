import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with halves rounded up.

    Python's built-in ``round`` sends halves to the nearest even integer
    (``round(2.5) == 2``); allocations here always round ``x.5`` upwards.

    Args:
        value: Value to round

    Returns:
        Nearest integer, ties towards positive infinity
    """
    return math.floor(value + 0.5)


def percentage(part: float, whole: float) -> float:
    """Return ``part`` as a percentage of ``whole`` (0 when whole is 0)."""
    if whole == 0:
        return 0.0
    return (part / whole) * 100
