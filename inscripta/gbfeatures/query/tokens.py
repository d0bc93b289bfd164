"""
Tokenizers for the filter and projection mini-languages.

A filter specification is a ``;`` separated list of clauses::

    idx=1,2,8:10;loc=:20000;key=CDS,gene;product=replication;pseudo

A projection specification is a ``;`` separated list of column names::

    idx;key;location;product;db_xref

Both are turned into lists of clause objects before anything is evaluated, so every stage of a query can be
inspected and tested on its own.
"""
import re
from dataclasses import dataclass
from typing import FrozenSet, List, Optional, Pattern, Tuple, Union

from inscripta.gbfeatures.exc import InvalidQueryError
from inscripta.gbfeatures.query.constants import (
    CLAUSE_PREFIXES,
    CLAUSE_SEPARATOR,
    RANGE_SEPARATOR,
    TAG_VALUE_SEPARATOR,
    VALUE_SEPARATOR,
    ClauseKind,
    ColumnKind,
    IndexTokens,
    KeyTokens,
    RangeTokens,
    SegmentFieldTokens,
)


@dataclass(frozen=True)
class IndexClause:
    """``idx=`` / ``index=``: feature ids to keep"""

    ids: FrozenSet[int]
    kind = ClauseKind.INDEX


@dataclass(frozen=True)
class LocationClause:
    """``loc=`` / ``location=``: closed query ranges. A missing bound is filled in from the features queried."""

    ranges: Tuple[Tuple[Optional[int], Optional[int]], ...]
    kind = ClauseKind.LOCATION


@dataclass(frozen=True)
class KeyClause:
    """``key=``: feature keys, as regular expressions"""

    keys: Tuple[str, ...]
    kind = ClauseKind.KEY

    @property
    def pattern(self) -> str:
        return "|".join(self.keys)


@dataclass(frozen=True)
class QualifierClause:
    """``tag`` or ``tag=value,value``. Without values only the presence of the tag is tested."""

    tag: Pattern
    values: Optional[Pattern] = None
    kind = ClauseKind.QUALIFIER


FilterClause = Union[IndexClause, LocationClause, KeyClause, QualifierClause]


@dataclass(frozen=True)
class ProjectionToken:
    """One requested output column. ``name`` is the token as written."""

    kind: ColumnKind
    name: str


def split_spec(spec: str) -> List[str]:
    """Splits a specification into stripped, non-empty clauses. Newlines and tabs count as spaces."""
    if spec is None:
        return []
    if not isinstance(spec, str):
        raise InvalidQueryError(f"A query specification must be a string; got {spec!r}")
    spec = re.sub(r"[\n\t]", " ", spec)
    return [clause.strip() for clause in spec.split(CLAUSE_SEPARATOR) if clause.strip()]


def parse_filter(spec: str) -> List[FilterClause]:
    """Tokenizes a filter specification into clause objects, in the order written.

    Raises:
        InvalidQueryError: If a clause is malformed.
    """
    clauses = []
    for text in split_spec(spec):
        for prefix, kind in CLAUSE_PREFIXES.items():
            if text.startswith(prefix):
                payload = text[len(prefix) :]
                break
        else:
            kind, payload = ClauseKind.QUALIFIER, text

        if kind == ClauseKind.INDEX:
            clauses.append(IndexClause(_parse_ids(text, payload)))
        elif kind == ClauseKind.LOCATION:
            clauses.append(LocationClause(_parse_ranges(text, payload)))
        elif kind == ClauseKind.KEY:
            keys = _split_values(text, payload)
            _compile(text, "|".join(keys))
            clauses.append(KeyClause(keys))
        else:
            clauses.append(_parse_qualifier(text))
    return clauses


def parse_projection(spec: str) -> List[ProjectionToken]:
    """Tokenizes a projection specification. Column names are matched without regard to case."""
    tokens = []
    for text in split_spec(spec):
        name = text.lower()
        if IndexTokens.has_value(name):
            kind = ColumnKind.INDEX
        elif KeyTokens.has_value(name):
            kind = ColumnKind.KEY
        elif RangeTokens.has_value(name):
            kind = ColumnKind.RANGE
        elif SegmentFieldTokens.has_value(name):
            kind = ColumnKind.SEGMENT_FIELD
        else:
            kind = ColumnKind.QUALIFIER
        tokens.append(ProjectionToken(kind, text))
    return tokens


def _split_values(clause: str, payload: str) -> Tuple[str, ...]:
    values = tuple(value.strip() for value in payload.split(VALUE_SEPARATOR) if value.strip())
    if not values:
        raise InvalidQueryError(f"Clause '{clause}' has no values")
    return values


def _to_int(clause: str, value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise InvalidQueryError(f"Clause '{clause}': '{value}' is not an integer")


def _parse_ids(clause: str, payload: str) -> FrozenSet[int]:
    ids = set()
    for value in _split_values(clause, payload):
        if RANGE_SEPARATOR in value:
            bounds = value.split(RANGE_SEPARATOR)
            if len(bounds) != 2:
                raise InvalidQueryError(f"Clause '{clause}': '{value}' is not a range of ids")
            low, high = sorted(_to_int(clause, bound) for bound in bounds)
            ids.update(range(low, high + 1))
        else:
            ids.add(_to_int(clause, value))
    return frozenset(ids)


def _parse_ranges(clause: str, payload: str) -> Tuple[Tuple[Optional[int], Optional[int]], ...]:
    ranges = []
    for value in _split_values(clause, payload):
        bounds = value.split(RANGE_SEPARATOR)
        if len(bounds) == 1:
            point = _to_int(clause, bounds[0])
            ranges.append((point, point))
        elif len(bounds) == 2:
            start, end = (_to_int(clause, bound) if bound.strip() else None for bound in bounds)
            ranges.append((start, end))
        else:
            raise InvalidQueryError(f"Clause '{clause}': '{value}' is not a start:end range")
    return tuple(ranges)


def _parse_qualifier(clause: str) -> QualifierClause:
    tag, _, payload = clause.partition(TAG_VALUE_SEPARATOR)
    tag = tag.strip()
    if not tag:
        raise InvalidQueryError(f"Clause '{clause}' has no qualifier tag")
    if not payload.strip():
        return QualifierClause(_compile(clause, tag))
    return QualifierClause(_compile(clause, tag), _compile(clause, "|".join(_split_values(clause, payload))))


def _compile(clause: str, pattern: str) -> Pattern:
    try:
        return re.compile(pattern)
    except re.error as e:
        raise InvalidQueryError(f"Clause '{clause}': '{pattern}' is not a valid regular expression ({e})")
