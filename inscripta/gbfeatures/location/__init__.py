"""
:class:`Location` objects represent GenBank feature locations: one or more segments, each a point, a range, a
within range or a between-bases site, optionally partial or on a remote entry, on one strand or on a strand per
segment. Locations are parsed from and rendered to GenBank location syntax, and transformed without mutation.
"""

from inscripta.gbfeatures.location.strand import Strand  # noqa F401
from inscripta.gbfeatures.location.segment import LocationSegment  # noqa F401
from inscripta.gbfeatures.location.location import Location, CompoundType  # noqa F401
from inscripta.gbfeatures.location.parser import parse_location, render_location  # noqa F401
from inscripta.gbfeatures.location.operations import (  # noqa F401
    shift,
    replace_start,
    replace_end,
    replace_strand,
)
