from inscripta.gbfeatures.io.exc import InvalidInputError


class GenBankParserError(InvalidInputError):
    """
    Raised when there is an error parsing a genbank file.
    """

    pass


class GenBankLocationException(GenBankParserError):
    """
    Raised when the location of a feature in a genbank file cannot be parsed.
    """

    pass
