"""
I/O exceptions.
"""
from inscripta.gbfeatures.exc import GBFeaturesException


class GBFeaturesIOException(GBFeaturesException):
    """
    Base class of errors raised while reading records into feature lists or building them from data models.
    """

    pass


class InvalidInputError(GBFeaturesIOException):
    """
    Raised when a record or a serialized model cannot be turned into features.
    """

    pass
