"""
A single annotated feature of a GenBank feature table.
"""
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from inscripta.gbfeatures.exc import ValidationException
from inscripta.gbfeatures.location import Location, Strand

# one (tag, value) pair; flag qualifiers such as /pseudo have no value
Qualifier = Tuple[str, Optional[str]]
QualifierInputType = Union[Sequence[Qualifier], Mapping[str, Union[Optional[str], Sequence[Optional[str]]]]]


@dataclass(frozen=True)
class Feature:
    """A feature key, its location and its qualifiers.

    ``id`` is assigned once, when the feature table is read, and identifies the feature for the rest of its life.
    Re-ordering or filtering a :class:`~gbfeatures.features.collections.FeatureList` never changes it.

    Qualifiers are an ordered multimap: the same tag may appear more than once. They can be given as a sequence of
    ``(tag, value)`` pairs, or as a mapping from tag to a value or list of values.
    """

    id: int
    key: str
    location: Location
    qualifiers: QualifierInputType = ()

    def __post_init__(self):
        if isinstance(self.id, bool) or not isinstance(self.id, int):
            raise ValidationException(f"Feature id must be an integer; got {self.id!r}")
        if not isinstance(self.location, Location):
            raise ValidationException(f"Feature location must be a Location; got {self.location!r}")
        object.__setattr__(self, "qualifiers", _normalize_qualifiers(self.qualifiers))

    def __str__(self):
        return f"{self.key} {self.location}"

    @property
    def tags(self) -> Tuple[str, ...]:
        """Distinct qualifier tags, in order of first appearance"""
        return tuple(dict.fromkeys(tag for tag, _ in self.qualifiers))

    def has_qualifier(self, tag: str) -> bool:
        return any(qualifier_tag == tag for qualifier_tag, _ in self.qualifiers)

    def qualifier_values(self, tag: str) -> List[Optional[str]]:
        """All values of the qualifier ``tag``, in order. Empty if the feature does not have the qualifier."""
        return [value for qualifier_tag, value in self.qualifiers if qualifier_tag == tag]

    @property
    def joined_span(self) -> Tuple[int, int]:
        return self.location.joined_span

    @property
    def start(self) -> int:
        return self.location.joined_span[0]

    @property
    def end(self) -> int:
        return self.location.joined_span[1]

    @property
    def strand(self) -> Tuple[Strand, ...]:
        return self.location.strands

    def shift(self, delta: Union[int, Sequence[int]]) -> "Feature":
        return replace(self, location=self.location.shift(delta))

    def to_dict(self) -> Dict[str, Any]:
        return dict(
            id=self.id,
            key=self.key,
            location=self.location.to_dict(),
            qualifiers=[dict(tag=tag, value=value) for tag, value in self.qualifiers],
        )


def _normalize_qualifiers(qualifiers: QualifierInputType) -> Tuple[Qualifier, ...]:
    if isinstance(qualifiers, Mapping):
        pairs = []
        for tag, values in qualifiers.items():
            if values is None or isinstance(values, str):
                values = [values]
            pairs.extend((tag, value) for value in values)
        qualifiers = pairs
    normalized = []
    for pair in qualifiers:
        if len(pair) != 2:
            raise ValidationException(f"Qualifiers must be (tag, value) pairs; got {pair!r}")
        tag, value = pair
        normalized.append((str(tag), None if value is None else str(value)))
    return tuple(normalized)
