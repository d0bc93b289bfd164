import pytest
from marshmallow import ValidationError

from inscripta.gbfeatures.exc import InvalidStrandException
from inscripta.gbfeatures.features import Feature
from inscripta.gbfeatures.io.exc import InvalidInputError
from inscripta.gbfeatures.io.models import FeatureListModel, FeatureModel, LocationModel
from inscripta.gbfeatures.location import parse_location


class TestLocationModel:
    @pytest.mark.parametrize(
        "text",
        [
            "340",
            "123^124",
            "complement(565..>567)",
            "order(<345..543,<567..>569,666..7000)",
            "join(complement(4918..5163),J00194.1:2691..4571)",
        ],
    )
    def test_location_model(self, text):
        loc = parse_location(text)
        model = LocationModel.from_location(loc)
        assert model.to_location() == loc
        dumped = LocationModel.Schema().dump(model)
        assert LocationModel.Schema().load(dumped).to_location() == loc

    def test_from_json(self):
        model = LocationModel.Schema().load(
            dict(segments=[dict(start=10, end=20), dict(start=30, end=40, partial3=True)], strand=-1)
        )
        assert str(model.to_location()) == "complement(join(10..20,30..>40))"

    def test_both_strand_forms(self):
        model = LocationModel.Schema().load(
            dict(segments=[dict(start=10, end=20), dict(start=30, end=40)], strand=1, segment_strands=[1, -1])
        )
        with pytest.raises(InvalidInputError):
            model.to_location()

    def test_unknown_compound(self):
        model = LocationModel.Schema().load(
            dict(segments=[dict(start=10, end=20), dict(start=30, end=40)], compound="bond")
        )
        with pytest.raises(InvalidInputError):
            model.to_location()

    def test_invalid_strand(self):
        model = LocationModel.Schema().load(dict(segments=[dict(start=10, end=20)], strand=2))
        with pytest.raises(InvalidStrandException):
            model.to_location()

    def test_missing_segments(self):
        with pytest.raises(ValidationError):
            LocationModel.Schema().load(dict(strand=1))


class TestFeatureModels:
    def test_feature_model(self):
        feature = Feature(
            3, "CDS", parse_location("complement(200..300)"), [("gene", "tnpR"), ("pseudo", None), ("note", "x")]
        )
        model = FeatureModel.from_feature(feature)
        assert model.to_feature() == feature
        assert [qualifier.tag for qualifier in model.qualifiers] == ["gene", "pseudo", "note"]

    def test_feature_list_model(self, feature_list):
        model = FeatureListModel.from_feature_list(feature_list)
        assert model.to_feature_list() == feature_list
        dumped = FeatureListModel.Schema().dump(model)
        assert [feature["id"] for feature in dumped["features"]] == [1, 2, 3, 4, 5]
        assert FeatureListModel.Schema().load(dumped).to_feature_list() == feature_list
