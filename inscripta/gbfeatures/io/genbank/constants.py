"""
GenBank parsing constants.
"""

# feature table qualifier lines look like /tag="value", /tag=value or /tag
QUALIFIER_PREFIX = "/"
QUALIFIER_SEPARATOR = "="
QUALIFIER_QUOTE = '"'
