"""
Static overlap index over closed integer intervals.
"""
from collections import defaultdict
from typing import Dict, Iterable, List, Sequence, Set, Tuple

from inscripta.gbfeatures.util.bins import MAX_BIN_POSITION, assign_bin, overlapping_bins


class IntervalIndex:
    """Answers overlap queries against a fixed set of closed ``(low, high)`` intervals.

    Intervals are 1-based and closed on both ends, so ``(1, 5)`` and ``(5, 9)`` overlap. Each interval is
    placed into its UCSC bin; a query only compares against the intervals stored in bins that can overlap it.
    Coordinates may be negative: they are measured from the smallest indexed ``low`` before binning. Intervals
    that do not fit the binning range are kept aside and always compared.

    The index is built once and never updated.
    """

    def __init__(self, ranges: Iterable[Tuple[int, int]]):
        self.ranges: List[Tuple[int, int]] = [(min(low, high), max(low, high)) for low, high in ranges]
        self._origin = min((low for low, _ in self.ranges), default=0)
        self._bins: Dict[int, List[int]] = defaultdict(list)
        self._unbinned: List[int] = []
        for idx, (low, high) in enumerate(self.ranges):
            start, end = self._to_half_open(low, high)
            if end > MAX_BIN_POSITION:
                self._unbinned.append(idx)
            else:
                self._bins[assign_bin(start, end)].append(idx)

    def __len__(self):
        return len(self.ranges)

    def __repr__(self):
        return f"<IntervalIndex with {len(self.ranges)} intervals>"

    def _to_half_open(self, low: int, high: int) -> Tuple[int, int]:
        return low - self._origin, high - self._origin + 1

    def query(self, low: int, high: int) -> List[int]:
        """Returns the sorted positions of every indexed interval that shares at least one base with
        ``[low, high]``."""
        low, high = min(low, high), max(low, high)
        start, end = self._to_half_open(low, high)
        candidates = list(self._unbinned)
        for bin_id in overlapping_bins(start, end):
            candidates.extend(self._bins.get(bin_id, ()))
        return sorted(idx for idx in candidates if self.ranges[idx][0] <= high and self.ranges[idx][1] >= low)

    def find_overlaps(self, queries: Iterable[Tuple[int, int]]) -> List[List[int]]:
        """For each query interval, the positions of the indexed intervals overlapping it."""
        return [self.query(low, high) for low, high in queries]

    def overlaps_any(self, queries: Sequence[Tuple[int, int]]) -> List[int]:
        """Sorted positions of the indexed intervals overlapping at least one of the query intervals."""
        hits: Set[int] = set()
        for overlaps in self.find_overlaps(queries):
            hits.update(overlaps)
        return sorted(hits)
