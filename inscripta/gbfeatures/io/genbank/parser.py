"""
Read the feature tables of GenBank files.

Biopython's ``SeqIO`` interface converts feature locations to its own 0-based objects, losing the distinction
between ranges, within ranges and between-bases sites. This module instead uses the lower level ``Bio.GenBank``
record parser, which keeps every location as the string written in the file and every qualifier in file order,
and runs those strings through :func:`~gbfeatures.location.parser.parse_location`.
"""
import logging
import pathlib
from typing import Iterator, Optional, TextIO, Union

from Bio import GenBank
from Bio.GenBank.Record import Record

from inscripta.gbfeatures.exc import GrammarError
from inscripta.gbfeatures.features.collections import FeatureList
from inscripta.gbfeatures.features.feature import Feature, Qualifier
from inscripta.gbfeatures.io.genbank.constants import QUALIFIER_PREFIX, QUALIFIER_QUOTE, QUALIFIER_SEPARATOR
from inscripta.gbfeatures.io.genbank.exc import GenBankLocationException
from inscripta.gbfeatures.io.parser import ParsedFeatureTable
from inscripta.gbfeatures.location.parser import parse_location

logger = logging.getLogger(__name__)


def parse_genbank(genbank_handle_or_path: Union[TextIO, str, pathlib.Path]) -> Iterator[ParsedFeatureTable]:
    """Parses every record of a GenBank file into a :class:`ParsedFeatureTable`.

    Args:
        genbank_handle_or_path: An open GenBank file or a path to a locally stored GenBank file.

    Yields:
        :class:`ParsedFeatureTable`, one per record, in file order.

    Raises:
        GenBankLocationException: If a feature location is not valid GenBank location syntax.
    """
    if isinstance(genbank_handle_or_path, (str, pathlib.Path)):
        with open(genbank_handle_or_path, "r") as fh:
            yield from _parse_handle(fh)
    else:
        yield from _parse_handle(genbank_handle_or_path)


def _parse_handle(handle: TextIO) -> Iterator[ParsedFeatureTable]:
    for record in GenBank.parse(handle):
        parsed = feature_table_from_record(record)
        logger.info(f"Parsed record {parsed.name} with {len(parsed.features)} features")
        yield parsed


def feature_table_from_record(record: Record) -> ParsedFeatureTable:
    """Converts a ``Bio.GenBank.Record.Record`` into a :class:`ParsedFeatureTable`. Features are numbered from 1
    in the order they appear in the record."""
    features = []
    for feature_id, gb_feature in enumerate(record.features, start=1):
        try:
            location = parse_location(gb_feature.location)
        except GrammarError as e:
            raise GenBankLocationException(
                f"Feature {feature_id} ({gb_feature.key}) of record {record.locus} has an invalid location"
            ) from e
        qualifiers = [parse_qualifier(qualifier.key, qualifier.value) for qualifier in gb_feature.qualifiers]
        features.append(Feature(feature_id, gb_feature.key, location, qualifiers))
    accession = record.accession[0] if record.accession else None
    return ParsedFeatureTable(name=record.locus, features=FeatureList(features), accession=accession)


def parse_qualifier(key: str, value: Optional[str]) -> Qualifier:
    """Strips the GenBank syntax from a raw qualifier: ``/gene=`` and ``"tnpR"`` become ``("gene", "tnpR")``.
    Flag qualifiers such as ``/pseudo`` have no value."""
    tag = key.strip()
    if tag.startswith(QUALIFIER_PREFIX):
        tag = tag[len(QUALIFIER_PREFIX) :]
    if tag.endswith(QUALIFIER_SEPARATOR):
        tag = tag[: -len(QUALIFIER_SEPARATOR)]
    if value is None or not value.strip():
        return tag, None
    value = value.strip()
    if len(value) >= 2 and value.startswith(QUALIFIER_QUOTE) and value.endswith(QUALIFIER_QUOTE):
        value = value[1:-1]
    return tag, value
