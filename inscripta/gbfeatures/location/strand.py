import math
from enum import Enum
from typing import Optional, Union

from inscripta.gbfeatures.exc import InvalidStrandException

StrandInputType = Union["Strand", str, int, float, None]


class Strand(Enum):
    PLUS = 1
    MINUS = -1
    UNSTRANDED = 0

    def __str__(self):
        return str(self.to_symbol())

    @staticmethod
    def from_symbol(value: str):
        """Converts string representation of a strand to a Strand"""
        if value == "+":
            return Strand.PLUS
        if value == "-":
            return Strand.MINUS
        if value in (".", "NA"):
            return Strand.UNSTRANDED
        raise InvalidStrandException("{} is not a valid string representation of a strand".format(value))

    def to_symbol(self) -> str:
        if self == Strand.PLUS:
            return "+"
        if self == Strand.MINUS:
            return "-"
        return "."

    @staticmethod
    def from_int(value: Optional[int]):
        """Converts integer representation of a strand to a Strand. ``None`` is the null strand."""
        if value is None:
            return Strand.UNSTRANDED
        if value not in (1, -1, 0):
            raise InvalidStrandException("The strand should be -1, 1, or null; got {}".format(value))
        return Strand(int(value))

    def to_int(self) -> Optional[int]:
        """Integer strand code. The null strand has no code."""
        if self == Strand.UNSTRANDED:
            return None
        return self.value

    @staticmethod
    def from_value(value: StrandInputType) -> "Strand":
        """Normalizes any accepted strand representation: a Strand, ``+``/``-``, ``1``/``-1``,
        or a null value (``None``, NaN, ``NA``, ``.``).
        """
        if isinstance(value, Strand):
            return value
        if value is None:
            return Strand.UNSTRANDED
        if isinstance(value, str):
            return Strand.from_symbol(value)
        if isinstance(value, bool):
            raise InvalidStrandException(f"{value} is not a valid strand")
        if isinstance(value, float):
            if math.isnan(value):
                return Strand.UNSTRANDED
            if not value.is_integer():
                raise InvalidStrandException(f"{value} is not a valid strand")
            value = int(value)
        if isinstance(value, int):
            return Strand.from_int(value)
        raise InvalidStrandException(f"{value!r} is not a valid strand")

    def reverse(self):
        """Returns the opposite of this Strand"""
        if self == Strand.PLUS:
            return Strand.MINUS
        if self == Strand.MINUS:
            return Strand.PLUS
        return Strand.UNSTRANDED
