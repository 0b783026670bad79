"""
Custom exceptions for Rangepass.
"""


class RangepassException(Exception):
    """Base exception for Rangepass."""

    pass


class LengthTypeError(RangepassException, TypeError):
    """Requested length is not an integer-valued number."""

    pass


class LengthRangeError(RangepassException, ValueError):
    """Requested length is negative."""

    pass


class ConfigurationError(RangepassException, ValueError):
    """Include/exclude configuration is malformed or cannot be satisfied."""

    pass


class EmptyCharsetError(RangepassException, LookupError):
    """Attempted to sample from an empty character set."""

    pass
