"""
Project a :class:`~gbfeatures.features.collections.FeatureList` onto columns with a projection specification.

Columns are produced in a fixed order, whatever order they are requested in:

1. ``idx`` / ``index``: the feature id.
2. ``key``: the feature key.
3. ``location`` / ``range``: the ``start``, ``end``, ``width`` and ``strand`` of every segment; or any of
   ``start``, ``end``, ``width``, ``strand`` on their own. The two forms cannot be mixed.
4. anything else: the values of the qualifier with that tag. ``db_xref`` is split into one column per database,
   or is a single ``db_xref`` column of ``None`` if no feature has one. Repeated names give one column.

The shape of the result depends on what was asked for:

- one column with one value per feature: a flat list;
- several single-valued columns: a :class:`~gbfeatures.util.table.Table` with one row per feature, or with one
  row per segment if any location column was requested (other values repeat on every segment row);
- if a qualifier repeats on any feature: a dictionary of column name to per-feature values, where location columns
  hold one :class:`~gbfeatures.util.table.Table` (or list) per feature.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from inscripta.gbfeatures.exc import InvalidQueryError
from inscripta.gbfeatures.features.collections import FeatureList
from inscripta.gbfeatures.location.location import RANGE_COLUMNS
from inscripta.gbfeatures.query.constants import DB_XREF, DB_XREF_SEPARATOR, ColumnKind, SegmentFieldTokens
from inscripta.gbfeatures.query.tokens import ProjectionToken, parse_projection, split_spec
from inscripta.gbfeatures.util.table import Table

RetrieveResultType = Union[FeatureList, List[Any], Table, Dict[str, List[Any]]]


@dataclass
class _Column:
    name: str
    kind: ColumnKind
    values: List[Any]

    @property
    def per_segment(self) -> bool:
        return self.kind in (ColumnKind.RANGE, ColumnKind.SEGMENT_FIELD)

    @property
    def multi_valued(self) -> bool:
        return any(isinstance(value, list) for value in self.values)


def retrieve(feature_list: FeatureList, spec: str = "") -> RetrieveResultType:
    """Tabulates ``feature_list`` according to the projection specification ``spec``.

    Args:
        feature_list: Features to tabulate. Not modified.
        spec: ``;`` separated column names, e.g. ``idx;key;location;product``. If empty, ``feature_list`` is
            returned as is.

    Returns:
        A flat list, a :class:`Table` or a dictionary of columns; see the module documentation.

    Raises:
        InvalidQueryError: If per-segment columns are mixed with ``location``/``range``.
    """
    if not split_spec(spec):
        return feature_list
    return retrieve_tokens(feature_list, parse_projection(spec))


def retrieve_tokens(feature_list: FeatureList, tokens: List[ProjectionToken]) -> RetrieveResultType:
    """Tabulates ``feature_list`` with already tokenized projection tokens."""
    by_kind = {kind: [token for token in tokens if token.kind == kind] for kind in ColumnKind}
    if by_kind[ColumnKind.RANGE] and by_kind[ColumnKind.SEGMENT_FIELD]:
        raise InvalidQueryError(
            "'location'/'range' cannot be combined with {}".format(
                ", ".join(f"'{token.name}'" for token in by_kind[ColumnKind.SEGMENT_FIELD])
            )
        )

    columns = []
    if by_kind[ColumnKind.INDEX]:
        columns.append(
            _Column(by_kind[ColumnKind.INDEX][0].name, ColumnKind.INDEX, [feature.id for feature in feature_list])
        )
    if by_kind[ColumnKind.KEY]:
        columns.append(
            _Column(by_kind[ColumnKind.KEY][0].name, ColumnKind.KEY, [feature.key for feature in feature_list])
        )
    if by_kind[ColumnKind.RANGE]:
        columns.append(
            _Column(
                by_kind[ColumnKind.RANGE][0].name,
                ColumnKind.RANGE,
                [feature.location.range() for feature in feature_list],
            )
        )
    for token in _distinct(by_kind[ColumnKind.SEGMENT_FIELD], case_sensitive=False):
        columns.append(_Column(token.name, ColumnKind.SEGMENT_FIELD, _segment_field(feature_list, token.name)))
    for token in _distinct(by_kind[ColumnKind.QUALIFIER]):
        if token.name == DB_XREF:
            columns.extend(_db_xref_columns(feature_list))
        else:
            columns.append(
                _Column(
                    token.name,
                    ColumnKind.QUALIFIER,
                    [_collapse(feature.qualifier_values(token.name)) for feature in feature_list],
                )
            )

    if any(column.multi_valued for column in columns if not column.per_segment):
        return _grouped(columns)
    if any(column.per_segment for column in columns):
        return _segment_table(feature_list, columns)
    if len(columns) == 1:
        return list(columns[0].values)
    return Table([column.name for column in columns], zip(*(column.values for column in columns)))


def _distinct(tokens: List[ProjectionToken], case_sensitive: bool = True) -> List[ProjectionToken]:
    """Drops repeated tokens, keeping the first spelling of each."""
    seen = {}
    for token in tokens:
        seen.setdefault(token.name if case_sensitive else token.name.lower(), token)
    return list(seen.values())


def _segment_field(feature_list: FeatureList, name: str) -> List[List[Any]]:
    field = SegmentFieldTokens(name.lower())
    if field == SegmentFieldTokens.START:
        return [list(feature.location.starts) for feature in feature_list]
    if field == SegmentFieldTokens.END:
        return [list(feature.location.ends) for feature in feature_list]
    if field == SegmentFieldTokens.WIDTH:
        return [list(feature.location.widths) for feature in feature_list]
    return [[strand.to_int() for strand in feature.location.strands] for feature in feature_list]


def _collapse(values: List[Any]) -> Optional[Any]:
    """No value becomes None, one value is unwrapped, several values stay a list."""
    if not values:
        return None
    if len(values) == 1:
        return values[0]
    return values


def _db_xref_columns(feature_list: FeatureList) -> List[_Column]:
    """One column per database named in a ``db_xref`` qualifier, in order of first appearance."""
    per_feature: List[Dict[str, List[str]]] = []
    databases: Dict[str, None] = {}
    for feature in feature_list:
        xrefs: Dict[str, List[str]] = {}
        for value in feature.qualifier_values(DB_XREF):
            if value is None:
                continue
            database, _, identifier = value.partition(DB_XREF_SEPARATOR)
            databases.setdefault(database, None)
            xrefs.setdefault(database, []).append(identifier)
        per_feature.append(xrefs)
    if not databases:
        return [_Column(DB_XREF, ColumnKind.QUALIFIER, [None] * len(per_feature))]
    return [
        _Column(database, ColumnKind.QUALIFIER, [_collapse(xrefs.get(database, [])) for xrefs in per_feature])
        for database in databases
    ]


def _segment_table(feature_list: FeatureList, columns: List[_Column]) -> Union[Table, List[Any]]:
    if len(columns) == 1 and columns[0].kind == ColumnKind.SEGMENT_FIELD:
        if all(feature.location.num_segments == 1 for feature in feature_list):
            return [values[0] for values in columns[0].values]

    names = []
    for column in columns:
        if column.kind == ColumnKind.RANGE:
            names.extend(RANGE_COLUMNS)
        else:
            names.append(column.name)

    rows = []
    for i, feature in enumerate(feature_list):
        for j in range(feature.location.num_segments):
            row = []
            for column in columns:
                if column.kind == ColumnKind.RANGE:
                    row.extend(column.values[i][j])
                elif column.kind == ColumnKind.SEGMENT_FIELD:
                    row.append(column.values[i][j])
                else:
                    row.append(column.values[i])
            rows.append(row)
    return Table(names, rows)


def _grouped(columns: List[_Column]) -> Dict[str, List[Any]]:
    return {column.name: column.values for column in columns}

