"""
A minimal column-named table. Used for per-segment location ranges and for tabular projections of feature lists.
"""
from typing import Any, Dict, Iterable, Iterator, List, Sequence, Tuple


class Table:
    """Ordered rows of values under a fixed tuple of column names."""

    def __init__(self, columns: Sequence[str], rows: Iterable[Sequence[Any]] = ()):
        self.columns = tuple(columns)
        self.rows: List[Tuple[Any, ...]] = [tuple(row) for row in rows]
        for row in self.rows:
            if len(row) != len(self.columns):
                raise ValueError(f"Row {row} does not have one value for each of the columns {self.columns}")

    def __len__(self):
        return len(self.rows)

    def __iter__(self) -> Iterator[Tuple[Any, ...]]:
        return iter(self.rows)

    def __getitem__(self, item: int) -> Tuple[Any, ...]:
        return self.rows[item]

    def __eq__(self, other):
        if not isinstance(other, Table):
            return False
        return self.columns == other.columns and self.rows == other.rows

    def __repr__(self):
        return f"<Table columns={list(self.columns)} rows={len(self.rows)}>"

    @property
    def shape(self) -> Tuple[int, int]:
        return len(self.rows), len(self.columns)

    def column(self, name: str) -> List[Any]:
        """Values of the first column called ``name``."""
        try:
            idx = self.columns.index(name)
        except ValueError:
            raise KeyError(name)
        return [row[idx] for row in self.rows]

    def to_list(self) -> List[List[Any]]:
        return [list(row) for row in self.rows]

    def to_records(self) -> List[Dict[str, Any]]:
        return [dict(zip(self.columns, row)) for row in self.rows]
