"""
Select features from a :class:`~gbfeatures.features.collections.FeatureList` with a filter specification.

Clauses are applied in a fixed order regardless of the order they are written in; each stage only sees the
features that survived the previous one:

1. ``idx=`` / ``index=``: keep features by id. All index clauses are merged before filtering.
2. ``loc=`` / ``location=``: keep features whose joined span overlaps any of the query ranges. A ``start:end``
   range covers ``[start, end)``; a single position covers that base.
3. ``key=``: keep features whose key matches any of the keys.
4. anything else: qualifier clauses. ``tag`` keeps features with a matching qualifier tag; ``tag=value`` keeps
   features with a qualifier whose tag and value both match. Qualifier clauses must all hold.

Keys, tags and values are regular expressions and are searched for, not matched in full. Comma separated values
are alternatives.
"""
import logging
import re
from typing import List, Optional, Tuple

from inscripta.gbfeatures.features.collections import FeatureList
from inscripta.gbfeatures.features.feature import Feature
from inscripta.gbfeatures.query.tokens import (
    FilterClause,
    IndexClause,
    KeyClause,
    LocationClause,
    QualifierClause,
    parse_filter,
)
from inscripta.gbfeatures.util.intervals import IntervalIndex

logger = logging.getLogger(__name__)


def select(feature_list: FeatureList, spec: str = "") -> FeatureList:
    """Filters ``feature_list`` with the filter specification ``spec``.

    Args:
        feature_list: Features to filter. Not modified.
        spec: ``;`` separated filter clauses, e.g. ``loc=:20000;key=CDS;product=replication``. An empty
            specification keeps every feature.

    Returns:
        A new :class:`FeatureList` holding the surviving features in their original order.

    Raises:
        InvalidQueryError: If a clause is malformed.
    """
    return select_clauses(feature_list, parse_filter(spec))


def select_clauses(feature_list: FeatureList, clauses: List[FilterClause]) -> FeatureList:
    """Filters ``feature_list`` with already tokenized filter clauses."""
    index_clauses = [clause for clause in clauses if isinstance(clause, IndexClause)]
    location_clauses = [clause for clause in clauses if isinstance(clause, LocationClause)]
    key_clauses = [clause for clause in clauses if isinstance(clause, KeyClause)]
    qualifier_clauses = [clause for clause in clauses if isinstance(clause, QualifierClause)]

    result = feature_list
    if index_clauses:
        result = filter_by_index(result, index_clauses)
        logger.debug(f"{len(result)} features left after index selection")
    if location_clauses:
        result = filter_by_location(result, location_clauses)
        logger.debug(f"{len(result)} features left after location selection")
    if key_clauses:
        result = filter_by_key(result, key_clauses)
        logger.debug(f"{len(result)} features left after key selection")
    if qualifier_clauses:
        result = filter_by_qualifiers(result, qualifier_clauses)
        logger.debug(f"{len(result)} features left after qualifier selection")
    return result


def filter_by_index(feature_list: FeatureList, clauses: List[IndexClause]) -> FeatureList:
    ids = set()
    for clause in clauses:
        ids.update(clause.ids)
    return feature_list.query_by_ids(ids)


def filter_by_location(feature_list: FeatureList, clauses: List[LocationClause]) -> FeatureList:
    if len(feature_list) == 0:
        return feature_list
    spans = feature_list.joined_spans
    index = IntervalIndex(spans)
    min_start = min(start for start, _ in spans)
    max_end = max(end for _, end in spans)
    queries = [_query_range(start, end, min_start, max_end) for clause in clauses for start, end in clause.ranges]
    hits = index.overlaps_any(queries)
    return FeatureList(feature_list[i] for i in hits)


def _query_range(start: Optional[int], end: Optional[int], min_start: int, max_end: int) -> Tuple[int, int]:
    """Turns a ``start:end`` query into the closed range handed to the index.

    A query covers ``[start, end)``: a feature that only touches the given end is not selected. Single-base
    queries (``loc=300``) and an omitted end (``loc=300:``) keep their last base.
    """
    low = min_start if start is None else start
    if end is None:
        return low, max_end
    if end > low:
        return low, end - 1
    return low, end


def filter_by_key(feature_list: FeatureList, clauses: List[KeyClause]) -> FeatureList:
    regex = re.compile("|".join(clause.pattern for clause in clauses))
    return FeatureList(feature for feature in feature_list if regex.search(feature.key))


def filter_by_qualifiers(feature_list: FeatureList, clauses: List[QualifierClause]) -> FeatureList:
    return FeatureList(
        feature for feature in feature_list if all(_matches_qualifier(feature, clause) for clause in clauses)
    )


def _matches_qualifier(feature: Feature, clause: QualifierClause) -> bool:
    for tag, value in feature.qualifiers:
        if not clause.tag.search(tag):
            continue
        if clause.values is None:
            return True
        if value is not None and clause.values.search(value):
            return True
    return False
