import pytest

from inscripta.gbfeatures.exc import InvalidQueryError
from inscripta.gbfeatures.features import Feature, FeatureList
from inscripta.gbfeatures.location import parse_location
from inscripta.gbfeatures.query import retrieve
from inscripta.gbfeatures.util.table import Table


@pytest.fixture
def two_features() -> FeatureList:
    return FeatureList(
        [
            Feature(1, "CDS", parse_location("complement(10..20)"), [("note", "first"), ("note", "second")]),
            Feature(2, "gene", parse_location("join(30..40,50..60)"), [("gene", "tnpR")]),
        ]
    )


class TestRetrieve:
    def test_empty_spec(self, feature_list):
        assert retrieve(feature_list, "") is feature_list

    def test_index_and_key(self):
        features = FeatureList(
            [Feature(1, "CDS", parse_location("1..10")), Feature(2, "gene", parse_location("20..30"))]
        )
        table = retrieve(features, "idx;key")
        assert isinstance(table, Table)
        assert table.shape == (2, 2)
        assert table.columns == ("idx", "key")
        assert table.to_list() == [[1, "CDS"], [2, "gene"]]

    def test_single_column_is_flat(self, feature_list):
        assert retrieve(feature_list, "key") == ["source", "gene", "CDS", "repeat_region", "misc_feature"]
        assert retrieve(feature_list, "index") == [1, 2, 3, 4, 5]
        assert retrieve(feature_list, "product") == [None, None, "resolvase", None, None]

    def test_column_order_is_fixed(self, feature_list):
        table = retrieve(feature_list[:2], "gene;key;idx")
        assert table.columns == ("idx", "key", "gene")
        assert table.to_list() == [[1, "source", None], [2, "gene", "tnpA"]]

    def test_case_insensitive_names(self, feature_list):
        table = retrieve(feature_list[:1], "IDX;Key")
        assert table.columns == ("IDX", "Key")
        assert table.to_list() == [[1, "source"]]

    def test_location(self, feature_list):
        table = retrieve(feature_list, "idx;location;product")
        assert table.columns == ("idx", "start", "end", "width", "strand", "product")
        assert table.to_list() == [
            [1, 1, 5000, 5000, 1, None],
            [2, 50, 150, 101, 1, None],
            [3, 200, 300, 101, -1, "resolvase"],
            [4, 140, 210, 71, 1, None],
            [5, 4000, 4100, 101, 1, None],
            [5, 4200, 4300, 101, 1, None],
        ]

    def test_range_alone(self, feature_list):
        table = retrieve(feature_list[2:3], "range")
        assert table == Table(["start", "end", "width", "strand"], [(200, 300, 101, -1)])

    def test_segment_fields(self, feature_list):
        table = retrieve(feature_list, "key;strand;start")
        assert table.columns == ("key", "strand", "start")
        assert table.column("start") == [1, 50, 200, 140, 4000, 4200]
        assert table.column("key")[-2:] == ["misc_feature", "misc_feature"]

    def test_single_segment_field_is_flat(self, feature_list):
        assert retrieve(feature_list[:4], "start") == [1, 50, 200, 140]
        assert retrieve(feature_list[:4], "strand") == [1, 1, -1, 1]

    def test_single_segment_field_multi_segment(self, feature_list):
        table = retrieve(feature_list, "width")
        assert table.columns == ("width",)
        assert len(table) == 6

    def test_location_and_segment_field(self, feature_list):
        with pytest.raises(InvalidQueryError):
            retrieve(feature_list, "location;start")

    def test_duplicate_tokens(self, feature_list):
        table = retrieve(feature_list[:2], "idx;index;key")
        assert table.columns == ("idx", "key")

    def test_db_xref(self):
        feature = Feature(
            1, "CDS", parse_location("1..10"), [("db_xref", "GI:12345"), ("db_xref", "taxon:9606")]
        )
        table = retrieve(FeatureList([feature]), "db_xref")
        assert table.columns == ("GI", "taxon")
        assert table.to_list() == [["12345", "9606"]]

    def test_db_xref_missing_databases(self, feature_list):
        table = retrieve(feature_list, "idx;db_xref")
        assert table.columns == ("idx", "GI", "taxon")
        assert table.to_list()[1:3] == [[2, None, None], [3, "12345", "9606"]]

    def test_db_xref_absent_everywhere(self, feature_list):
        genes = feature_list[:2]
        assert retrieve(genes, "db_xref") == [None, None]
        table = retrieve(genes, "key;db_xref")
        assert table.columns == ("key", "db_xref")
        assert table.to_list() == [["source", None], ["gene", None]]

    def test_duplicate_qualifier_tokens(self, feature_list, two_features):
        table = retrieve(feature_list[:3], "idx;gene;gene")
        assert table.columns == ("idx", "gene")
        assert table.to_list() == [[1, None], [2, "tnpA"], [3, "tnpR"]]
        result = retrieve(two_features, "note;gene;note")
        assert list(result) == ["note", "gene"]
        assert result["gene"] == [None, "tnpR"]

    def test_duplicate_segment_field_tokens(self, feature_list):
        assert retrieve(feature_list[:2], "start;START") == [1, 50]

    def test_repeated_qualifier_groups(self, two_features):
        result = retrieve(two_features, "idx;note;location")
        assert isinstance(result, dict)
        assert list(result) == ["idx", "location", "note"]
        assert result["idx"] == [1, 2]
        assert result["note"] == [["first", "second"], None]
        assert result["location"][0] == Table(["start", "end", "width", "strand"], [(10, 20, 11, -1)])
        assert len(result["location"][1]) == 2

    def test_repeated_qualifier_single_column(self, two_features):
        assert retrieve(two_features, "note") == {"note": [["first", "second"], None]}

    def test_method(self, two_features):
        assert two_features.retrieve("gene") == [None, "tnpR"]
