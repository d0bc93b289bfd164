from io import StringIO

import pytest
from Bio import SeqIO
from Bio.GenBank.Record import Feature as GenBankFeature, Record
from Bio.Seq import Seq
from Bio.SeqFeature import AfterPosition, BeforePosition, CompoundLocation, SeqFeature, SimpleLocation
from Bio.SeqRecord import SeqRecord

from inscripta.gbfeatures.io.genbank.exc import GenBankLocationException
from inscripta.gbfeatures.io.genbank.parser import feature_table_from_record, parse_genbank, parse_qualifier
from inscripta.gbfeatures.location import parse_location


def _genbank_text() -> str:
    record = SeqRecord(Seq("ACGT" * 25), id="TN3.1", name="TN3", description="Transposon Tn3")
    record.annotations["molecule_type"] = "DNA"
    record.features = [
        SeqFeature(
            SimpleLocation(0, 100, strand=1),
            type="source",
            qualifiers={"organism": ["Escherichia coli"], "mol_type": ["genomic DNA"]},
        ),
        SeqFeature(SimpleLocation(9, 30, strand=-1), type="gene", qualifiers={"gene": ["tnpR"]}),
        SeqFeature(
            CompoundLocation([SimpleLocation(9, 30, strand=1), SimpleLocation(39, 60, strand=1)]),
            type="CDS",
            qualifiers={"product": ["resolvase"], "db_xref": ["GI:12345", "taxon:9606"], "pseudo": [None]},
        ),
        SeqFeature(SimpleLocation(BeforePosition(69), AfterPosition(90), strand=1), type="misc_feature"),
    ]
    handle = StringIO()
    SeqIO.write(record, handle, "genbank")
    return handle.getvalue()


class TestParseGenBank:
    def test_parse(self):
        (table,) = parse_genbank(StringIO(_genbank_text()))
        assert table.name == "TN3"
        assert table.accession == "TN3"
        features = table.features
        assert features.ids == [1, 2, 3, 4]
        assert features.keys == ["source", "gene", "CDS", "misc_feature"]
        assert [str(feature.location) for feature in features] == [
            "1..100",
            "complement(10..30)",
            "join(10..30,40..60)",
            "<70..>90",
        ]
        assert features[0].qualifiers == (("organism", "Escherichia coli"), ("mol_type", "genomic DNA"))
        assert features[2].qualifiers == (
            ("product", "resolvase"),
            ("db_xref", "GI:12345"),
            ("db_xref", "taxon:9606"),
            ("pseudo", None),
        )

    def test_parse_path(self, tmp_path):
        path = tmp_path / "tn3.gbk"
        path.write_text(_genbank_text())
        tables = list(parse_genbank(path))
        assert len(tables) == 1
        assert len(tables[0].features) == 4
        assert list(parse_genbank(str(path)))[0].features == tables[0].features

    def test_parsed_features_can_be_queried(self):
        (table,) = parse_genbank(StringIO(_genbank_text()))
        assert table.features.select("db_xref=taxon;pseudo").ids == [3]
        assert table.features.retrieve("db_xref").to_list() == [
            [None, None],
            [None, None],
            ["12345", "9606"],
            [None, None],
        ]

    def test_to_dict(self):
        (table,) = parse_genbank(StringIO(_genbank_text()))
        result = table.to_dict()
        assert result["name"] == "TN3"
        assert len(result["features"]) == 4

    def test_invalid_location(self):
        record = Record()
        record.locus = "BROKEN"
        record.features.append(GenBankFeature(key="gene", location="bond(1..2,5..6)"))
        with pytest.raises(GenBankLocationException):
            feature_table_from_record(record)

    def test_record_without_accession(self):
        record = Record()
        record.locus = "NOACC"
        record.features.append(GenBankFeature(key="gene", location="1..10"))
        table = feature_table_from_record(record)
        assert table.accession is None
        assert table.features[0].location == parse_location("1..10")


class TestParseQualifier:
    @pytest.mark.parametrize(
        "key,value,expected",
        [
            ("/gene=", '"tnpR"', ("gene", "tnpR")),
            ("/codon_start=", "1", ("codon_start", "1")),
            ("/pseudo", "", ("pseudo", None)),
            ("/pseudo", None, ("pseudo", None)),
            ("/note=", '""', ("note", "")),
            ("organism", '"Escherichia coli"', ("organism", "Escherichia coli")),
        ],
    )
    def test_parse_qualifier(self, key, value, expected):
        assert parse_qualifier(key, value) == expected
