import numbers
import warnings
from dataclasses import replace
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from methodtools import lru_cache

from inscripta.gbfeatures.exc import (
    InvalidCompoundException,
    InvalidStrandException,
    LengthMismatchException,
    LocationException,
    ShiftArgumentWarning,
    ValidationException,
)
from inscripta.gbfeatures.location.segment import LocationSegment
from inscripta.gbfeatures.location.strand import Strand, StrandInputType
from inscripta.gbfeatures.util.enum import HasMemberMixin
from inscripta.gbfeatures.util.table import Table

RANGE_COLUMNS = ("start", "end", "width", "strand")


class CompoundType(str, HasMemberMixin):
    """How the segments of a multi-segment Location relate to one another."""

    JOIN = "join"
    ORDER = "order"


StrandArgType = Union[StrandInputType, Sequence[StrandInputType]]


class Location:
    """A GenBank feature location: an ordered set of segments plus strand and compound information.

    Locations are immutable. Every operation returns a new Location with only the affected fields changed.
    The segment order is the order the segments were written in; it is never sorted.
    """

    def __init__(
        self,
        segments: Iterable[LocationSegment],
        strand: StrandArgType = Strand.PLUS,
        compound: Optional[Union[CompoundType, str]] = None,
    ):
        """
        Parameters
        ----------
        segments
            One or more :class:`LocationSegment` objects.
        strand
            Either a single strand value applying to every segment, or one strand value per segment.
            Any value accepted by :meth:`Strand.from_value` may be used.
        compound
            ``join`` or ``order``. Must be ``None`` for a single segment. Multi-segment locations without a
            compound type are joins.
        """
        segments = tuple(segments)
        if not segments:
            raise LocationException("A Location must contain at least one segment")
        for segment in segments:
            if not isinstance(segment, LocationSegment):
                raise LocationException(f"Expected a LocationSegment, got {segment!r}")

        self.segments: Tuple[LocationSegment, ...] = segments
        self.strand: Union[Strand, Tuple[Strand, ...]] = _normalize_strand(strand, len(segments))
        self.compound: Optional[CompoundType] = _normalize_compound(compound, len(segments))

    @classmethod
    def from_coordinates(
        cls,
        starts: Sequence[int],
        ends: Sequence[int],
        strand: StrandArgType = Strand.PLUS,
        compound: Optional[Union[CompoundType, str]] = None,
        partial: Optional[Sequence] = None,
        remote_accession: Optional[Union[str, Sequence[Optional[str]]]] = None,
        closed: Union[bool, Sequence[bool]] = True,
    ) -> "Location":
        """Builds a Location from parallel start and end vectors.

        ``partial`` is either one ``(partial5, partial3)`` pair applied to every segment, or one pair per segment.
        ``remote_accession`` and ``closed`` are either a single value or one value per segment.
        """
        starts = _as_vector(starts)
        ends = _as_vector(ends)
        if len(starts) != len(ends):
            raise LengthMismatchException(f"Got {len(starts)} start positions but {len(ends)} end positions")
        n = len(starts)

        if partial is None:
            partials = [(False, False)] * n
        elif len(partial) in (1, 2) and all(isinstance(x, bool) for x in partial):
            pair = (bool(partial[0]), bool(partial[-1]))
            partials = [pair] * n
        elif len(partial) == n and all(len(pair) == 2 for pair in partial):
            partials = [(bool(p5), bool(p3)) for p5, p3 in partial]
        else:
            raise ValidationException("The 'partial' argument should be one (5', 3') pair or one pair per segment")

        if remote_accession is None or isinstance(remote_accession, str):
            accessions = [remote_accession] * n
        else:
            accessions = list(remote_accession)
        if isinstance(closed, bool):
            closed = [closed] * n
        if len(accessions) != n or len(closed) != n:
            raise LengthMismatchException(f"Expected {n} remote accession and closed values")

        segments = [
            LocationSegment(
                start=_as_int(start, "start"),
                end=_as_int(end, "end"),
                closed=bool(is_closed),
                partial5=p5,
                partial3=p3,
                remote_accession=accession,
            )
            for start, end, is_closed, (p5, p3), accession in zip(starts, ends, closed, partials, accessions)
        ]
        return cls(segments, strand=strand, compound=compound)

    @staticmethod
    def from_string(text: str) -> "Location":
        """Parses a GenBank location string."""
        # avoid circular imports
        from inscripta.gbfeatures.location.parser import parse_location

        return parse_location(text)

    def __str__(self):
        rendered = [str(segment) for segment in self.segments]
        if self.is_stranded_per_segment:
            rendered = [
                f"complement({text})" if strand == Strand.MINUS else text
                for text, strand in zip(rendered, self.strand)
            ]
        text = ",".join(rendered)
        if self.compound is not None:
            text = f"{self.compound.value}({text})"
        if self.strand == Strand.MINUS:
            text = f"complement({text})"
        return text

    def __repr__(self):
        return f"<Location {str(self)}>"

    def __eq__(self, other):
        if type(other) is not Location:
            return False
        if self.segments != other.segments:
            return False
        if self.strand != other.strand:
            return False
        return self.compound == other.compound

    def __hash__(self):
        return hash((self.segments, self.strand, self.compound))

    def __len__(self):
        return len(self.segments)

    @property
    def num_segments(self) -> int:
        return len(self.segments)

    @property
    def is_compound(self) -> bool:
        return self.compound is not None

    @property
    def is_stranded_per_segment(self) -> bool:
        return isinstance(self.strand, tuple)

    @property
    def is_remote(self) -> bool:
        """True if any segment refers to another sequence entry"""
        return any(segment.is_remote for segment in self.segments)

    @property
    def starts(self) -> Tuple[int, ...]:
        return tuple(segment.start for segment in self.segments)

    @property
    def ends(self) -> Tuple[int, ...]:
        return tuple(segment.end for segment in self.segments)

    @property
    def widths(self) -> Tuple[int, ...]:
        return tuple(segment.width for segment in self.segments)

    @property
    def strands(self) -> Tuple[Strand, ...]:
        """The strand of every segment"""
        if self.is_stranded_per_segment:
            return self.strand
        return (self.strand,) * len(self.segments)

    @property
    def partial(self) -> Tuple[Tuple[bool, bool], ...]:
        """(5' partial, 3' partial) flags of every segment"""
        return tuple((segment.partial5, segment.partial3) for segment in self.segments)

    @property
    def accessions(self) -> Tuple[Optional[str], ...]:
        return tuple(segment.remote_accession for segment in self.segments)

    @lru_cache(maxsize=1)
    @property
    def joined_span(self) -> Tuple[int, int]:
        """The smallest closed interval covering every segment."""
        return min(self.starts), max(self.ends)

    @lru_cache(maxsize=1)
    def range(self) -> Table:
        """Returns a table with the start, end, width and integer strand code of every segment."""
        return Table(
            RANGE_COLUMNS,
            (
                (segment.start, segment.end, segment.width, strand.to_int())
                for segment, strand in zip(self.segments, self.strands)
            ),
        )

    def shift(self, delta: Union[int, Sequence[int]]) -> "Location":
        """Moves every segment by ``delta`` positions. If more than one value is given, only the first is used."""
        delta = single_shift_value(delta)
        return Location([segment.shift(delta) for segment in self.segments], self.strand, self.compound)

    def reset_starts(self, values: Union[int, Sequence[int]]) -> "Location":
        """Returns a new Location with one new start position per segment."""
        return self._reset_bound(values, "start")

    def reset_ends(self, values: Union[int, Sequence[int]]) -> "Location":
        """Returns a new Location with one new end position per segment."""
        return self._reset_bound(values, "end")

    def _reset_bound(self, values: Union[int, Sequence[int]], bound: str) -> "Location":
        values = _as_vector(values)
        if len(values) != len(self.segments):
            raise LengthMismatchException(
                f"This Location contains {len(self.segments)} {bound} values; got {len(values)} replacement values"
            )
        values = [_as_int(value, bound) for value in values]
        # single-base locations stay single-base
        if all(segment.is_point for segment in self.segments):
            segments = [replace(segment, start=value, end=value) for segment, value in zip(self.segments, values)]
        else:
            segments = [replace(segment, **{bound: value}) for segment, value in zip(self.segments, values)]
        return Location(segments, self.strand, self.compound)

    def reset_strand(self, value: StrandInputType) -> "Location":
        """Returns a new Location where every segment is on the same, given, strand."""
        if isinstance(value, (list, tuple)):
            if not value:
                raise InvalidStrandException("No strand value given")
            value = value[0]
        return Location(self.segments, Strand.from_value(value), self.compound)

    def to_dict(self) -> Dict[str, Any]:
        return dict(
            segments=[
                dict(
                    start=segment.start,
                    end=segment.end,
                    closed=segment.closed,
                    partial5=segment.partial5,
                    partial3=segment.partial3,
                    remote_accession=segment.remote_accession,
                )
                for segment in self.segments
            ],
            strand=None if self.is_stranded_per_segment else self.strand.to_int(),
            segment_strands=[strand.to_int() for strand in self.strand] if self.is_stranded_per_segment else None,
            compound=self.compound.value if self.compound else None,
        )

    def to_biopython(self):
        """Converts to a 0-based Biopython ``SimpleLocation`` or ``CompoundLocation``.

        Partial ends become fuzzy ``BeforePosition``/``AfterPosition`` positions and remote accessions become the
        ``ref`` attribute. A between-bases segment becomes a zero-length location.
        """
        from Bio.SeqFeature import AfterPosition, BeforePosition, CompoundLocation, ExactPosition, SimpleLocation

        parts = []
        for segment, strand in zip(self.segments, self.strands):
            if segment.is_between:
                start = end = ExactPosition(segment.start)
            else:
                start = BeforePosition(segment.start - 1) if segment.partial5 else ExactPosition(segment.start - 1)
                end = AfterPosition(segment.end) if segment.partial3 else ExactPosition(segment.end)
            parts.append(SimpleLocation(start, end, strand=strand.to_int(), ref=segment.remote_accession))
        if len(parts) == 1:
            return parts[0]
        return CompoundLocation(parts, operator=self.compound.value)


def _normalize_strand(strand: StrandArgType, num_segments: int) -> Union[Strand, Tuple[Strand, ...]]:
    if isinstance(strand, (list, tuple)):
        if len(strand) != num_segments:
            raise InvalidStrandException(
                f"A per-segment strand must have {num_segments} values; got {len(strand)}: {strand}"
            )
        strands = tuple(Strand.from_value(x) for x in strand)
        if num_segments == 1:
            return strands[0]
        return strands
    return Strand.from_value(strand)


def _normalize_compound(compound: Optional[Union[CompoundType, str]], num_segments: int) -> Optional[CompoundType]:
    if compound is None:
        return CompoundType.JOIN if num_segments > 1 else None
    if not CompoundType.has_value(compound):
        raise InvalidCompoundException(f"The compound type should be 'join' or 'order'; got {compound!r}")
    if num_segments == 1:
        raise InvalidCompoundException("A single-segment Location cannot be a compound location")
    return CompoundType(compound)


def _as_vector(values) -> List:
    if isinstance(values, (str, bytes)):
        raise TypeError(f"Expected numeric values; got {values!r}")
    if isinstance(values, Iterable):
        return list(values)
    return [values]


def _as_int(value, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise TypeError(f"'{name}' values must be numeric; got {value!r}")
    if isinstance(value, float) and not value.is_integer():
        raise TypeError(f"'{name}' values must be whole numbers; got {value!r}")
    return int(value)


def single_shift_value(delta) -> int:
    values = _as_vector(delta)
    if not values:
        raise TypeError("'shift' must be an integer; got an empty sequence")
    if len(values) > 1:
        warnings.warn(
            ShiftArgumentWarning(f"'shift' must be a single integer; only the first of {values} is used"),
        )
    return _as_int(values[0], "shift")
