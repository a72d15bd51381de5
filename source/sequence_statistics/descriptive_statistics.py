"""Median, average and a small summary over a flat collection of numbers."""

from typing import NamedTuple, Sequence, Union

Number = Union[int, float]


class Summary(NamedTuple):
    """Descriptive statistics of a collection of numbers; all zero for an empty collection."""
    count: int
    minimum: Number
    maximum: Number
    median: Number
    average: Number


def median(values: Sequence[Number]) -> Number:
    """Return the median of the values, or 0 if there are none.

    For an even number of values, the mean of the two central values is returned.
    """

    if len(values) == 0:
        return 0

    values = sorted(values)
    count = len(values)
    mid = (count - 1) // 2

    if count % 2 == 1:
        return values[mid]

    return (values[mid] + values[mid + 1]) / 2


def average(values: Sequence[Number]) -> Number:
    """Return the arithmetic mean of the values, or 0 if there are none."""

    if len(values) == 0:
        return 0

    total = 0
    count = 0
    for value in values:
        total += value
        count += 1

    return total / (1 if count == 0 else count)


def summarize(values: Sequence[Number]) -> Summary:
    if len(values) == 0:
        return Summary(0, 0, 0, 0, 0)
    return Summary(len(values), min(values), max(values), median(values), average(values))
