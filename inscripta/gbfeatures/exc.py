class GBFeaturesException(Exception):
    """
    Base exception class for GBFeatures.
    """

    pass


class LocationException(GBFeaturesException):
    """
    Raised when a Location constructor is given invalid inputs, such as an unequal number of start/end positions.
    """

    pass


class GrammarError(LocationException):
    """
    Raised when a location string does not match any production of the GenBank location grammar.
    """

    pass


class LengthMismatchException(LocationException):
    """
    Raised when a vector of replacement values does not have one value per segment of a Location.
    """

    pass


class ValidationException(GBFeaturesException):
    """
    Raised when object constructors are given invalid inputs that are not LocationExceptions.
    """

    pass


class InvalidStrandException(ValidationException):
    """
    Raised when a strand value is not one of ``+``, ``-``, ``1``, ``-1`` or a null value.
    """

    pass


class InvalidCompoundException(ValidationException):
    """
    Raised when a compound code is not ``join`` or ``order``, or is set on a single-segment Location.
    """

    pass


class InvalidQueryError(ValidationException):
    """
    Raised when a filter or projection clause is malformed.
    """

    pass


class ShiftArgumentWarning(UserWarning):
    """
    Emitted when a shift is given more than one value. Only the first value is used.
    """

    pass
