"""
Range specification parsing and character set construction.

A range spec is accepted in any of these forms:

    'a'              single character
    0x41             single code point
    ['a', 'z']       inclusive interval of characters (order independent)
    [0x30, 0x39]     inclusive interval of code points
    ['€']            one-element list, same as its member

Everything is normalized to SinglePoint or Interval before use and clipped
to the Basic Multilingual Plane.
"""

import logging
from typing import Any, Iterable, NamedTuple, Optional, Tuple, Union

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

BMP_MAX = 0xFFFF


class SinglePoint(NamedTuple):
    """A single code point."""

    value: int


class Interval(NamedTuple):
    """An inclusive code point interval with lo <= hi."""

    lo: int
    hi: int


RangeSpec = Union[SinglePoint, Interval]


def to_code_point(value: Any) -> int:
    """
    Convert a character or integer to a code point.

    Args:
        value: One-character string or non-negative int

    Returns:
        The code point value (may lie above the BMP)

    Raises:
        ConfigurationError: If value is not a character or code point
    """
    if isinstance(value, str):
        if len(value) != 1:
            raise ConfigurationError(
                f"Character range endpoints must be single characters, got {value!r}"
            )
        return ord(value)

    if isinstance(value, int) and not isinstance(value, bool):
        if value < 0:
            raise ConfigurationError(f"Code points cannot be negative, got {value}")
        return value

    raise ConfigurationError(
        f"Range endpoints must be characters or integers, got {type(value).__name__}"
    )


def parse_range_spec(spec: Any) -> RangeSpec:
    """
    Normalize one raw range spec into a SinglePoint or Interval.

    Args:
        spec: Character, code point, or a one/two-element list or tuple of either

    Returns:
        Tagged range spec

    Raises:
        ConfigurationError: If the spec has an unsupported shape
    """
    if isinstance(spec, SinglePoint):
        return SinglePoint(to_code_point(spec.value))

    if isinstance(spec, Interval):
        a, b = to_code_point(spec.lo), to_code_point(spec.hi)
        return Interval(min(a, b), max(a, b))

    if isinstance(spec, (list, tuple)):
        if len(spec) == 1:
            return SinglePoint(to_code_point(spec[0]))
        if len(spec) == 2:
            a, b = to_code_point(spec[0]), to_code_point(spec[1])
            return Interval(min(a, b), max(a, b))
        raise ConfigurationError(
            f"Range pairs must have one or two elements, got {len(spec)}"
        )

    return SinglePoint(to_code_point(spec))


def resolve_range(spec: Any) -> Optional[Tuple[int, int]]:
    """
    Resolve a range spec to an inclusive interval clipped to the BMP.

    Args:
        spec: Raw or normalized range spec

    Returns:
        (lo, hi) with 0 <= lo <= hi <= 0xFFFF, or None if the range lies
        entirely above the BMP
    """
    parsed = parse_range_spec(spec)
    if isinstance(parsed, SinglePoint):
        lo = hi = parsed.value
    else:
        lo, hi = parsed.lo, parsed.hi

    if lo > BMP_MAX:
        logger.debug(f"Dropping range {lo:#x}-{hi:#x}: outside the BMP")
        return None

    if hi > BMP_MAX:
        logger.debug(f"Clipping range {lo:#x}-{hi:#x} to {lo:#x}-{BMP_MAX:#x}")
        hi = BMP_MAX

    return lo, hi


def build_charset(specs: Optional[Iterable[Any]]) -> frozenset:
    """
    Expand range specs into a set of code points.

    Args:
        specs: Range specs (None or empty yields the empty set)

    Returns:
        Frozen set of BMP code points covered by any spec
    """
    points = set()
    for spec in specs or ():
        bounds = resolve_range(spec)
        if bounds is not None:
            points.update(range(bounds[0], bounds[1] + 1))
    return frozenset(points)


def format_range(spec: RangeSpec) -> str:
    """Render a normalized spec for humans, e.g. 'U+0061..U+007A'."""
    if isinstance(spec, SinglePoint):
        return f"U+{spec.value:04X}"
    return f"U+{spec.lo:04X}..U+{spec.hi:04X}"
