"""
GenBank feature locations and feature table queries.

:mod:`~gbfeatures.location` parses, renders and transforms GenBank location strings such as
``complement(join(345..543,2691..4571))``. :mod:`~gbfeatures.features` holds annotated features and feature lists,
and :mod:`~gbfeatures.query` selects features by id, position, key and qualifiers and tabulates them.
"""
__version__ = "0.1.0"

from inscripta.gbfeatures.location import (  # noqa F401
    CompoundType,
    Location,
    LocationSegment,
    Strand,
    parse_location,
    render_location,
    replace_end,
    replace_start,
    replace_strand,
    shift,
)
from inscripta.gbfeatures.features import Feature, FeatureList  # noqa F401
from inscripta.gbfeatures.query import retrieve, select  # noqa F401
