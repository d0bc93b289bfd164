"""
Vocabulary of the filter and projection mini-languages.
"""
from enum import Enum

from inscripta.gbfeatures.util.enum import HasMemberMixin

CLAUSE_SEPARATOR = ";"
VALUE_SEPARATOR = ","
RANGE_SEPARATOR = ":"
TAG_VALUE_SEPARATOR = "="


class ClauseKind(Enum):
    """Kinds of filter clauses, in the order they are applied."""

    INDEX = 1
    LOCATION = 2
    KEY = 3
    QUALIFIER = 4


# prefixes that mark a filter clause; anything else is a qualifier clause
CLAUSE_PREFIXES = {
    "idx=": ClauseKind.INDEX,
    "index=": ClauseKind.INDEX,
    "loc=": ClauseKind.LOCATION,
    "location=": ClauseKind.LOCATION,
    "key=": ClauseKind.KEY,
}


class ColumnKind(Enum):
    """Kinds of projection columns, in the order they are produced."""

    INDEX = 1
    KEY = 2
    RANGE = 3
    SEGMENT_FIELD = 4
    QUALIFIER = 5


class IndexTokens(str, HasMemberMixin):
    IDX = "idx"
    INDEX = "index"


class KeyTokens(str, HasMemberMixin):
    KEY = "key"


class RangeTokens(str, HasMemberMixin):
    """Tokens that request the full per-segment range block"""

    LOCATION = "location"
    RANGE = "range"


class SegmentFieldTokens(str, HasMemberMixin):
    """Tokens that request a single per-segment column"""

    START = "start"
    END = "end"
    WIDTH = "width"
    STRAND = "strand"


DB_XREF = "db_xref"
DB_XREF_SEPARATOR = ":"
