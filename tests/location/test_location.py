import pytest
from Bio.SeqFeature import AfterPosition, BeforePosition, CompoundLocation, SimpleLocation

from inscripta.gbfeatures.exc import (
    InvalidCompoundException,
    InvalidStrandException,
    LengthMismatchException,
    LocationException,
    ValidationException,
)
from inscripta.gbfeatures.location import CompoundType, Location, LocationSegment, Strand, parse_location
from inscripta.gbfeatures.util.table import Table


class TestLocation:
    def test_from_coordinates(self):
        loc = Location.from_coordinates([345, 567], [543, 590], partial=[(False, False), (False, True)])
        assert loc == parse_location("join(345..543,567..>590)")

    def test_from_coordinates_shared_partial(self):
        loc = Location.from_coordinates([345, 567, 666], [543, 569, 7000], partial=(True, False), compound="order")
        assert str(loc) == "order(<345..543,<567..569,<666..7000)"

    def test_from_coordinates_remote(self):
        loc = Location.from_coordinates([100], [202], strand="-", remote_accession="J00194.1")
        assert str(loc) == "complement(J00194.1:100..202)"
        assert loc.is_remote
        assert loc.accessions == ("J00194.1",)

    def test_from_coordinates_length_mismatch(self):
        with pytest.raises(LengthMismatchException):
            Location.from_coordinates([1, 10], [5])

    def test_from_coordinates_bad_partial(self):
        with pytest.raises(ValidationException):
            Location.from_coordinates([1, 10, 20], [5, 15, 25], partial=[(True, False), (False, True)])

    def test_from_coordinates_non_numeric(self):
        with pytest.raises(TypeError):
            Location.from_coordinates(["1"], [5])

    def test_empty(self):
        with pytest.raises(LocationException):
            Location([])

    def test_not_a_segment(self):
        with pytest.raises(LocationException):
            Location([(1, 5)])

    def test_compound_on_single_segment(self):
        with pytest.raises(InvalidCompoundException):
            Location([LocationSegment(1, 5)], compound=CompoundType.JOIN)

    def test_invalid_compound(self):
        with pytest.raises(InvalidCompoundException):
            Location([LocationSegment(1, 5), LocationSegment(10, 15)], compound="bond")

    def test_default_compound_is_join(self):
        loc = Location([LocationSegment(1, 5), LocationSegment(10, 15)])
        assert loc.compound == CompoundType.JOIN
        assert str(loc) == "join(1..5,10..15)"

    def test_per_segment_strand_length(self):
        with pytest.raises(InvalidStrandException):
            Location([LocationSegment(1, 5), LocationSegment(10, 15)], strand=["+", "-", "+"])

    def test_single_per_segment_strand_is_scalar(self):
        loc = Location([LocationSegment(1, 5)], strand=["-"])
        assert loc.strand == Strand.MINUS
        assert not loc.is_stranded_per_segment

    def test_unstranded(self):
        loc = Location([LocationSegment(1, 5)], strand=None)
        assert loc.strand == Strand.UNSTRANDED
        assert str(loc) == "1..5"

    def test_accessors(self):
        loc = parse_location("order(<345..543,<567..>569,666..7000)")
        assert len(loc) == loc.num_segments == 3
        assert loc.is_compound
        assert loc.starts == (345, 567, 666)
        assert loc.ends == (543, 569, 7000)
        assert loc.widths == (199, 3, 6335)
        assert loc.strands == (Strand.PLUS,) * 3
        assert loc.partial == ((True, False), (True, True), (False, False))
        assert loc.accessions == (None, None, None)
        assert not loc.is_remote

    def test_joined_span(self):
        assert parse_location("complement(join(2691..4571,345..543))").joined_span == (345, 4571)
        assert parse_location("340").joined_span == (340, 340)

    def test_range(self):
        loc = parse_location("join(complement(4918..5163),2691..4571)")
        assert loc.range() == Table(
            ["start", "end", "width", "strand"],
            [(4918, 5163, 246, -1), (2691, 4571, 1881, 1)],
        )

    def test_range_unstranded(self):
        loc = Location([LocationSegment(1, 5)], strand=None)
        assert loc.range().column("strand") == [None]

    def test_equality_and_hash(self):
        a = parse_location("complement(join(345..543,2691..4571))")
        b = parse_location("complement(join(345..543,2691..4571))")
        assert a == b
        assert len({a, b}) == 1
        assert a != parse_location("join(345..543,2691..4571)")
        assert a != parse_location("complement(order(345..543,2691..4571))")
        assert a != "complement(join(345..543,2691..4571))"

    def test_to_dict(self):
        assert parse_location("join(complement(<1..10),J00194.1:20..30)").to_dict() == dict(
            segments=[
                dict(start=1, end=10, closed=True, partial5=True, partial3=False, remote_accession=None),
                dict(start=20, end=30, closed=True, partial5=False, partial3=False, remote_accession="J00194.1"),
            ],
            strand=None,
            segment_strands=[-1, 1],
            compound="join",
        )


class TestToBiopython:
    def test_simple(self):
        bio = parse_location("<340..>565").to_biopython()
        assert isinstance(bio, SimpleLocation)
        assert bio.start == 339
        assert bio.end == 565
        assert isinstance(bio.start, BeforePosition)
        assert isinstance(bio.end, AfterPosition)
        assert bio.strand == 1

    def test_between(self):
        bio = parse_location("123^124").to_biopython()
        assert bio.start == bio.end == 123

    def test_remote(self):
        bio = parse_location("complement(J00194.1:100..202)").to_biopython()
        assert bio.ref == "J00194.1"
        assert bio.strand == -1

    def test_compound(self):
        bio = parse_location("complement(join(345..543,2691..4571))").to_biopython()
        assert isinstance(bio, CompoundLocation)
        assert bio.operator == "join"
        assert [(part.start, part.end, part.strand) for part in bio.parts] == [(344, 543, -1), (2690, 4571, -1)]
