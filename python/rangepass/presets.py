"""
Named character sets usable as include or exclude groups.
"""

import string
from typing import Dict, List, Tuple

from .config import ExcludeGroup, IncludeGroup
from .exceptions import ConfigurationError
from .ranges import Interval, RangeSpec, SinglePoint

PRESETS: Dict[str, Tuple[RangeSpec, ...]] = {
    "lowercase": (Interval(ord("a"), ord("z")),),
    "uppercase": (Interval(ord("A"), ord("Z")),),
    "digits": (Interval(ord("0"), ord("9")),),
    "punctuation": tuple(SinglePoint(ord(c)) for c in string.punctuation),
    # Common confusing characters to optionally exclude
    "ambiguous": tuple(SinglePoint(ord(c)) for c in "0O1lI"),
}


def preset_chars(name: str) -> Tuple[RangeSpec, ...]:
    """
    Look up a preset by name.

    Raises:
        ConfigurationError: If the preset does not exist
    """
    try:
        return PRESETS[name.lower()]
    except KeyError:
        available = ", ".join(sorted(PRESETS))
        raise ConfigurationError(f"Unknown preset '{name}' (available: {available})") from None


def include_preset(name: str, minimum: int = 0) -> IncludeGroup:
    return IncludeGroup(chars=preset_chars(name), min=minimum)


def exclude_preset(name: str) -> ExcludeGroup:
    return ExcludeGroup(chars=preset_chars(name))


def list_presets() -> List[Tuple[str, str]]:
    """Return (name, characters) pairs for display."""
    rows = []
    for name in sorted(PRESETS):
        chars = []
        for spec in PRESETS[name]:
            if isinstance(spec, SinglePoint):
                chars.append(chr(spec.value))
            else:
                chars.append(f"{chr(spec.lo)}-{chr(spec.hi)}")
        rows.append((name, "".join(chars)))
    return rows
