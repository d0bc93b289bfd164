"""
Container classes for the annotated features of a GenBank record.
"""

from inscripta.gbfeatures.features.feature import Feature, Qualifier  # noqa F401
from inscripta.gbfeatures.features.collections import FeatureList  # noqa F401
