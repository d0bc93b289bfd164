"""
Filter and projection queries over :class:`~gbfeatures.features.collections.FeatureList` objects.
"""

from inscripta.gbfeatures.query.select import select  # noqa F401
from inscripta.gbfeatures.query.retrieve import retrieve  # noqa F401
from inscripta.gbfeatures.query.tokens import parse_filter, parse_projection  # noqa F401
