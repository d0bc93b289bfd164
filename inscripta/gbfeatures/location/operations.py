"""
Functional interface to Location transformations. Each function returns a new Location and leaves its input untouched.
"""
from typing import Sequence, Union

from inscripta.gbfeatures.location.location import Location
from inscripta.gbfeatures.location.strand import StrandInputType


def shift(location: Location, delta: Union[int, Sequence[int]]) -> Location:
    """Adds ``delta`` to every start and end position.

    Raises:
        TypeError: If ``delta`` is not numeric.

    Warns:
        ShiftArgumentWarning: If ``delta`` holds more than one value; only the first is used.
    """
    return location.shift(delta)


def replace_start(location: Location, values: Union[int, Sequence[int]]) -> Location:
    """Replaces the start position of every segment. If the Location consists only of single bases, the end
    positions move with the start positions.

    Raises:
        LengthMismatchException: If there is not exactly one value per segment.
        TypeError: If any value is not numeric.
    """
    return location.reset_starts(values)


def replace_end(location: Location, values: Union[int, Sequence[int]]) -> Location:
    """Replaces the end position of every segment. If the Location consists only of single bases, the start
    positions move with the end positions.

    Raises:
        LengthMismatchException: If there is not exactly one value per segment.
        TypeError: If any value is not numeric.
    """
    return location.reset_ends(values)


def replace_strand(location: Location, value: StrandInputType) -> Location:
    """Puts every segment on the strand given by ``value``: ``+``, ``-``, ``1``, ``-1``, or a null value."""
    return location.reset_strand(value)
