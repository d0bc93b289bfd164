"""
Core parser functionality. Contains the dataclass :class:`ParsedFeatureTable` which wraps the features produced by a
parser with the identity of the record they came from.
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional

from inscripta.gbfeatures.features.collections import FeatureList


@dataclass
class ParsedFeatureTable:
    """Dataclass holding the :class:`~gbfeatures.features.collections.FeatureList` of one record, along with the
    record's locus name and primary accession.
    """

    name: str
    features: FeatureList
    accession: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return dict(name=self.name, accession=self.accession, **self.features.to_dict())
