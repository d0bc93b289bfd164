"""
UCSC genome browser binning scheme (Kent et al. 2002).

Every 0-based, half-open interval ``[start, end)`` is assigned the smallest bin that fully contains it. Bins form a
five level hierarchy of 128kb, 1Mb, 8Mb, 64Mb and 512Mb windows, so an interval query only has to inspect the
intervals in the handful of bins that can possibly overlap it.
"""
from typing import List

BIN_OFFSETS = (512 + 64 + 8 + 1, 64 + 8 + 1, 8 + 1, 1, 0)
BIN_FIRST_SHIFT = 17
BIN_NEXT_SHIFT = 3
MAX_BIN_POSITION = 1 << 29


def assign_bin(start: int, end: int) -> int:
    """Returns the smallest bin containing ``[start, end)``.

    Raises:
        ValueError: If the interval is outside of ``[0, 2^29)``.
    """
    if start < 0 or end > MAX_BIN_POSITION:
        raise ValueError(f"Interval [{start}, {end}) is outside of the binning range [0, {MAX_BIN_POSITION})")
    end = max(end, start + 1)
    start_bin = start >> BIN_FIRST_SHIFT
    end_bin = (end - 1) >> BIN_FIRST_SHIFT
    for offset in BIN_OFFSETS:
        if start_bin == end_bin:
            return offset + start_bin
        start_bin >>= BIN_NEXT_SHIFT
        end_bin >>= BIN_NEXT_SHIFT
    raise ValueError(f"Interval [{start}, {end}) does not fit in any bin")


def overlapping_bins(start: int, end: int) -> List[int]:
    """Returns every bin that may hold an interval overlapping ``[start, end)``."""
    start = max(start, 0)
    end = min(max(end, start + 1), MAX_BIN_POSITION)
    start_bin = start >> BIN_FIRST_SHIFT
    end_bin = (end - 1) >> BIN_FIRST_SHIFT
    result = []
    for offset in BIN_OFFSETS:
        result.extend(range(offset + start_bin, offset + end_bin + 1))
        start_bin >>= BIN_NEXT_SHIFT
        end_bin >>= BIN_NEXT_SHIFT
    return result
