class TaggerError(Exception):
    """Base class for tagger errors"""


class ParseError(TaggerError, ValueError):
    """Token could not be split into word and tag"""


class InvalidArgumentError(TaggerError, ValueError):
    pass


class ModelFormatError(TaggerError):
    """Persisted model does not match the expected schema"""
