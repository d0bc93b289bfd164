"""
Enumeration utilities.
"""
from enum import Enum


class HasMemberMixin(Enum):
    """Adds a `has_value()` membership test to enumerations, so raw strings from user input can be checked before
    conversion."""

    @classmethod
    def has_value(cls, value) -> bool:
        return value in cls._value2member_map_
