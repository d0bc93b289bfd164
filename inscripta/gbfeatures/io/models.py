"""
Data models. These models allow for validation of inputs to the feature objects, acting as a JSON schema for
serializing and deserializing locations, features and feature lists.
"""
from typing import ClassVar, List, Optional, Type

from marshmallow import Schema  # noqa: F401
from marshmallow_dataclass import dataclass

from inscripta.gbfeatures.features.collections import FeatureList
from inscripta.gbfeatures.features.feature import Feature
from inscripta.gbfeatures.io.exc import InvalidInputError
from inscripta.gbfeatures.location.location import CompoundType, Location
from inscripta.gbfeatures.location.segment import LocationSegment
from inscripta.gbfeatures.location.strand import Strand


@dataclass
class BaseModel:
    """Base for all of the models."""

    Schema: ClassVar[Type[Schema]] = Schema  # noqa: F811

    class Meta:
        ordered = True


@dataclass
class LocationSegmentModel(BaseModel):
    """Data model for a single :class:`~gbfeatures.location.segment.LocationSegment`."""

    start: int
    end: int
    closed: bool = True
    partial5: bool = False
    partial3: bool = False
    remote_accession: Optional[str] = None

    def to_segment(self) -> LocationSegment:
        return LocationSegment(
            self.start,
            self.end,
            closed=self.closed,
            partial5=self.partial5,
            partial3=self.partial3,
            remote_accession=self.remote_accession,
        )


@dataclass
class LocationModel(BaseModel):
    """Data model that allows construction of a :class:`~gbfeatures.location.location.Location` object.

    Exactly one of ``strand`` and ``segment_strands`` is set: ``strand`` for a location with one strand and
    ``segment_strands`` for a location stranded per segment. Strands are integers, with ``None`` for unstranded.
    """

    segments: List[LocationSegmentModel]
    strand: Optional[int] = None
    segment_strands: Optional[List[Optional[int]]] = None
    compound: Optional[str] = None

    def to_location(self) -> Location:
        if self.segment_strands is not None:
            if self.strand is not None:
                raise InvalidInputError("Cannot construct a location with both a strand and per-segment strands")
            strand = [Strand.from_int(value) for value in self.segment_strands]
        else:
            strand = Strand.from_int(self.strand)
        if self.compound is not None and not CompoundType.has_value(self.compound):
            raise InvalidInputError(f"Unknown compound type {self.compound}")
        return Location([segment.to_segment() for segment in self.segments], strand, self.compound)

    @staticmethod
    def from_location(location: Location) -> "LocationModel":
        """Convert a :class:`~gbfeatures.location.location.Location` to a :class:`LocationModel`"""
        return LocationModel.Schema().load(location.to_dict())


@dataclass
class QualifierModel(BaseModel):
    tag: str
    value: Optional[str] = None


@dataclass
class FeatureModel(BaseModel):
    """Data model that allows construction of a :class:`~gbfeatures.features.feature.Feature` object."""

    id: int
    key: str
    location: LocationModel
    qualifiers: List[QualifierModel]

    def to_feature(self) -> Feature:
        return Feature(
            self.id,
            self.key,
            self.location.to_location(),
            [(qualifier.tag, qualifier.value) for qualifier in self.qualifiers],
        )

    @staticmethod
    def from_feature(feature: Feature) -> "FeatureModel":
        return FeatureModel.Schema().load(feature.to_dict())


@dataclass
class FeatureListModel(BaseModel):
    """Data model that allows construction of a :class:`~gbfeatures.features.collections.FeatureList` object."""

    features: List[FeatureModel]

    def to_feature_list(self) -> FeatureList:
        return FeatureList([feature.to_feature() for feature in self.features])

    @staticmethod
    def from_feature_list(feature_list: FeatureList) -> "FeatureListModel":
        return FeatureListModel.Schema().load(feature_list.to_dict())
