"""
:class:`FeatureList` is the ordered, read-only collection of features of one GenBank record. It is the input and the
output of the query layer: :meth:`FeatureList.select()` narrows it down and :meth:`FeatureList.retrieve()`
tabulates it.
"""
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from inscripta.gbfeatures.exc import ValidationException
from inscripta.gbfeatures.features.feature import Feature
from inscripta.gbfeatures.location.location import single_shift_value


class FeatureList:
    """An ordered sequence of :class:`~gbfeatures.features.feature.Feature` objects with unique ids.

    The order of the features is kept for iteration and display. Selection identifies features by their id, never
    by their position in the list. A FeatureList is never modified; every operation returns a new one.
    """

    def __init__(self, features: Iterable[Feature] = ()):
        self._features: Tuple[Feature, ...] = tuple(features)
        seen = set()
        for feature in self._features:
            if not isinstance(feature, Feature):
                raise ValidationException(f"A FeatureList can only hold Features; got {feature!r}")
            if feature.id in seen:
                raise ValidationException(f"Feature id {feature.id} is not unique")
            seen.add(feature.id)

    def __len__(self):
        return len(self._features)

    def __iter__(self) -> Iterator[Feature]:
        return iter(self._features)

    def __getitem__(self, item: Union[int, slice]) -> Union[Feature, "FeatureList"]:
        if isinstance(item, slice):
            return FeatureList(self._features[item])
        return self._features[item]

    def __eq__(self, other):
        if not isinstance(other, FeatureList):
            return False
        return self._features == other._features

    def __hash__(self):
        return hash(self._features)

    def __repr__(self):
        return f"<FeatureList with {len(self)} features>"

    @property
    def ids(self) -> List[int]:
        return [feature.id for feature in self._features]

    @property
    def keys(self) -> List[str]:
        return [feature.key for feature in self._features]

    @property
    def joined_spans(self) -> List[Tuple[int, int]]:
        return [feature.joined_span for feature in self._features]

    def get_by_id(self, feature_id: int) -> Optional[Feature]:
        for feature in self._features:
            if feature.id == feature_id:
                return feature
        return None

    def query_by_ids(self, ids: Iterable[int]) -> "FeatureList":
        """Keeps the features whose id is in ``ids``, in their current order."""
        ids = set(ids)
        return FeatureList(feature for feature in self._features if feature.id in ids)

    def select(self, spec: str = "") -> "FeatureList":
        """Filters this list with a filter specification. See :func:`~gbfeatures.query.select.select`."""
        # avoid circular imports
        from inscripta.gbfeatures.query.select import select

        return select(self, spec)

    def retrieve(self, spec: str = "") -> Any:
        """Tabulates this list with a projection specification. See :func:`~gbfeatures.query.retrieve.retrieve`."""
        from inscripta.gbfeatures.query.retrieve import retrieve

        return retrieve(self, spec)

    def shift(
        self,
        delta: Union[int, Sequence[int]],
        order: bool = False,
        on_shift: Optional[Callable[["FeatureList"], None]] = None,
    ) -> "FeatureList":
        """Shifts the location of every feature.

        Args:
            delta: Number of positions to shift by. Only the first value of a sequence is used.
            order: Sort the shifted features by the start of their joined span? Ids are not changed.
            on_shift: Called with the shifted list once it is built, for instance to update an external store of
                feature locations.

        Returns:
            A new :class:`FeatureList`.
        """
        delta = single_shift_value(delta)
        shifted = [feature.shift(delta) for feature in self._features]
        if order:
            shifted.sort(key=lambda feature: feature.joined_span)
        result = FeatureList(shifted)
        if on_shift is not None:
            on_shift(result)
        return result

    def to_dict(self) -> Dict[str, Any]:
        return dict(features=[feature.to_dict() for feature in self._features])
