"""
Parse GenBank feature locations.

The location mini-language is described in section 3.4 of the GenBank release notes. This module recognizes the
following grammar::

    INT          := digit+
    BETWEEN      := INT "^" INT                      (a site between two adjacent bases)
    WITHIN       := ["<"] INT "." [">"] INT          (a single base somewhere within a range)
    PAIRED       := ["<"] INT ".." [">"] INT         (an ordinary range)
    SIMPLE       := INT | BETWEEN | WITHIN | PAIRED
    ACCESSION    := letter (alnum | "_")* ("." alnum+)?
    SIMPLE_LOC   := [ACCESSION ":"] SIMPLE
    PCSL         := SIMPLE_LOC | "complement(" SIMPLE_LOC ")"
    COMPOUND     := ("join" | "order") "(" PCSL ("," PCSL)* ")"
    TOP          := PCSL | "complement(" COMPOUND ")" | COMPOUND

Nested compound locations such as ``join(complement(join(...)))`` are not part of this grammar.
"""
import re
from typing import List, Tuple

from inscripta.gbfeatures.exc import GrammarError
from inscripta.gbfeatures.location.location import CompoundType, Location
from inscripta.gbfeatures.location.segment import LocationSegment
from inscripta.gbfeatures.location.strand import Strand

_INT = r"\d+"
_BETWEEN = rf"{_INT}\^{_INT}"
_WITHIN = rf"<?{_INT}\.>?{_INT}"
_PAIRED = rf"<?{_INT}\.\.>?{_INT}"
_SIMPLE = rf"(?:{_PAIRED}|{_WITHIN}|{_BETWEEN}|{_INT})"
_ACCESSION = r"[A-Za-z][A-Za-z0-9_]*(?:\.[A-Za-z0-9]+)?"
_SIMPLE_LOC = rf"(?:{_ACCESSION}:)?{_SIMPLE}"
_PCSL = rf"(?:{_SIMPLE_LOC}|complement\({_SIMPLE_LOC}\))"

PCSL_RE = re.compile(_PCSL)
COMPOUND_RE = re.compile(
    rf"(?P<complement>complement\()?(?P<compound>join|order)\((?P<elements>{_PCSL}(?:,{_PCSL})*)\)(?(complement)\))"
)

_COMPLEMENT_RE = re.compile(r"complement\((?P<body>.*)\)")
_SEGMENT_RE = re.compile(
    r"(?:(?P<accession>[^:]+):)?(?P<partial5><)?(?P<start>\d+)(?:(?P<sep>\.\.|\.|\^)(?P<partial3>>)?(?P<end>\d+))?"
)
_WHITESPACE_RE = re.compile(r"\s+")


def parse_location(text: str) -> Location:
    """Parses a GenBank location string into a :class:`~gbfeatures.location.location.Location`.

    Args:
        text: A location string such as ``complement(join(345..543,2691..4571))``. Whitespace left over from
            line wrapping in a feature table is ignored.

    Returns:
        A new :class:`Location`.

    Raises:
        GrammarError: If ``text`` is not a recognized location.
    """
    if not isinstance(text, str):
        raise TypeError(f"A location must be a string; got {text!r}")
    span = _WHITESPACE_RE.sub("", text)

    if PCSL_RE.fullmatch(span):
        segment, strand = _parse_simple_location(span)
        return Location([segment], strand=strand)

    match = COMPOUND_RE.fullmatch(span)
    if match is None:
        raise GrammarError(f"'{text}' is not a valid GenBank location")

    # elements are possibly complemented simple locations, which cannot contain commas
    parsed = [_parse_simple_location(element) for element in match.group("elements").split(",")]
    segments = [segment for segment, _ in parsed]
    strands = [strand for _, strand in parsed]
    return Location(
        segments,
        strand=_compound_strand(strands, complemented=match.group("complement") is not None),
        compound=CompoundType(match.group("compound")),
    )


def render_location(location: Location) -> str:
    """Renders a Location in GenBank location syntax. Inverse of :func:`parse_location`."""
    return str(location)


def _compound_strand(strands: List[Strand], complemented: bool):
    if len(set(strands)) > 1:
        # mixed strands are kept per segment, even inside an outer complement
        return strands
    if complemented:
        return Strand.MINUS
    return strands[0]


def _parse_simple_location(element: str) -> Tuple[LocationSegment, Strand]:
    complement = _COMPLEMENT_RE.fullmatch(element)
    if complement:
        strand = Strand.MINUS
        element = complement.group("body")
    else:
        strand = Strand.PLUS

    match = _SEGMENT_RE.fullmatch(element)
    if match is None:
        raise GrammarError(f"'{element}' is not a valid simple location")
    start = int(match.group("start"))
    end = int(match.group("end")) if match.group("end") else start
    segment = LocationSegment(
        start=start,
        end=end,
        closed=match.group("sep") in (None, ".."),
        partial5=match.group("partial5") is not None,
        partial3=match.group("partial3") is not None,
        remote_accession=match.group("accession"),
    )
    return segment, strand
