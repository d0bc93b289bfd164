import pytest

from inscripta.gbfeatures.features import Feature, FeatureList
from inscripta.gbfeatures.location import parse_location


@pytest.fixture
def feature_list() -> FeatureList:
    """A small feature table in the shape of a transposon record: a source, a gene, a CDS, a repeat and a
    multi-segment misc_feature."""
    return FeatureList(
        [
            Feature(1, "source", parse_location("1..5000"), [("organism", "Escherichia coli"), ("mol_type", "DNA")]),
            Feature(2, "gene", parse_location("50..150"), [("gene", "tnpA"), ("locus_tag", "b0001")]),
            Feature(
                3,
                "CDS",
                parse_location("complement(200..300)"),
                [
                    ("gene", "tnpR"),
                    ("product", "resolvase"),
                    ("db_xref", "GI:12345"),
                    ("db_xref", "taxon:9606"),
                ],
            ),
            Feature(4, "repeat_region", parse_location("140..210"), [("rpt_family", "IR")]),
            Feature(
                5,
                "misc_feature",
                parse_location("join(4000..4100,4200..4300)"),
                [("note", "replication origin"), ("pseudo", None)],
            ),
        ]
    )
