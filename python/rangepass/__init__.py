"""
Rangepass - random strings from constrained Unicode ranges.

Generates text (e.g. passwords) from include groups with per-group minimums
and exclusions, restricted to the Basic Multilingual Plane.
"""

from .config import ExcludeGroup, GenerateOptions, IncludeGroup
from .exceptions import (
    ConfigurationError,
    EmptyCharsetError,
    LengthRangeError,
    LengthTypeError,
    RangepassException,
)
from .generator import CharsetGenerator, generate
from .utils.random_source import RandomSource

__version__ = "0.1.0"

__all__ = [
    'generate',
    'CharsetGenerator',
    'GenerateOptions',
    'IncludeGroup',
    'ExcludeGroup',
    'RandomSource',
    'RangepassException',
    'LengthTypeError',
    'LengthRangeError',
    'ConfigurationError',
    'EmptyCharsetError',
]
