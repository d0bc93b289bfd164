from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True)
class LocationSegment:
    """One contiguous span of a :class:`~gbfeatures.location.location.Location`.

    Coordinates are 1-based and closed, exactly as written in a GenBank feature table.

    ``closed`` separates ordinary ``start..end`` ranges from open ones. An open segment whose end is directly
    adjacent to its start is a between-bases marker (``123^124``); any other open segment is a within range
    (``102.110``). A segment with ``start == end`` is a single base and is rendered without any range syntax.
    """

    start: int
    end: int
    closed: bool = True
    partial5: bool = False
    partial3: bool = False
    remote_accession: Optional[str] = None

    @property
    def width(self) -> int:
        return self.end - self.start + 1

    @property
    def is_point(self) -> bool:
        return self.start == self.end

    @property
    def is_between(self) -> bool:
        return not self.closed and self.end == self.start + 1

    @property
    def is_remote(self) -> bool:
        return self.remote_accession is not None

    def shift(self, delta: int) -> "LocationSegment":
        return replace(self, start=self.start + delta, end=self.end + delta)

    def __str__(self):
        if self.is_point:
            span = str(self.start)
        else:
            if self.closed:
                sep = ".."
            elif self.is_between:
                sep = "^"
            else:
                sep = "."
            span = "{}{}{}{}{}".format(
                "<" if self.partial5 else "",
                self.start,
                sep,
                ">" if self.partial3 else "",
                self.end,
            )
        if self.is_remote:
            return f"{self.remote_accession}:{span}"
        return span
