"""
Generation options: include/exclude groups with defaulted fields.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union

from .exceptions import ConfigurationError
from .ranges import RangeSpec, parse_range_spec
from .utils.validation import validate_minimum


def _parse_chars(raw: Any, where: str) -> Tuple[RangeSpec, ...]:
    if raw is None:
        return ()
    if isinstance(raw, (str, bytes)) or not isinstance(raw, Iterable):
        raise ConfigurationError(f"{where}: chars must be a list of range specs")
    try:
        return tuple(parse_range_spec(spec) for spec in raw)
    except ConfigurationError as e:
        raise ConfigurationError(f"{where}: {e}") from e


@dataclass(frozen=True)
class IncludeGroup:
    """Characters that may appear in the output, at least `min` times."""

    chars: Tuple[RangeSpec, ...] = ()
    min: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], position: int = 0) -> "IncludeGroup":
        if not isinstance(data, Mapping):
            raise ConfigurationError(f"Include group {position} must be a mapping")
        return cls(
            chars=_parse_chars(data.get("chars"), f"Include group {position}"),
            min=validate_minimum(data.get("min"), position),
        )


@dataclass(frozen=True)
class ExcludeGroup:
    """Characters that must never appear in the output."""

    chars: Tuple[RangeSpec, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], position: int = 0) -> "ExcludeGroup":
        if not isinstance(data, Mapping):
            raise ConfigurationError(f"Exclude group {position} must be a mapping")
        return cls(chars=_parse_chars(data.get("chars"), f"Exclude group {position}"))


@dataclass(frozen=True)
class GenerateOptions:
    """Complete configuration for one generation policy."""

    include: Tuple[IncludeGroup, ...] = field(default_factory=tuple)
    exclude: Tuple[ExcludeGroup, ...] = field(default_factory=tuple)

    @property
    def total_minimum(self) -> int:
        return sum(group.min for group in self.include)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "GenerateOptions":
        """
        Build options from the mapping form used by generate().

        Args:
            data: {"include": [{"chars": [...], "min": N}], "exclude": [{"chars": [...]}]}
                  Missing keys (or None) mean no groups.

        Returns:
            Fully populated options

        Raises:
            ConfigurationError: If the mapping is malformed
        """
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ConfigurationError("Options must be a mapping")

        include = data.get("include") or ()
        exclude = data.get("exclude") or ()
        if not isinstance(include, (list, tuple)) or not isinstance(exclude, (list, tuple)):
            raise ConfigurationError("include and exclude must be lists of groups")

        return cls(
            include=tuple(IncludeGroup.from_dict(g, i) for i, g in enumerate(include)),
            exclude=tuple(ExcludeGroup.from_dict(g, i) for i, g in enumerate(exclude)),
        )

    def merged(self, other: "GenerateOptions") -> "GenerateOptions":
        """Return options with other's groups appended to ours."""
        return GenerateOptions(
            include=self.include + other.include,
            exclude=self.exclude + other.exclude,
        )


def coerce_options(options: Union[None, GenerateOptions, Mapping[str, Any]]) -> GenerateOptions:
    """Accept None, a GenerateOptions, or the mapping form."""
    if isinstance(options, GenerateOptions):
        return options
    return GenerateOptions.from_dict(options)


def load_policy(path: Union[str, Path]) -> Tuple[Optional[Any], GenerateOptions]:
    """
    Load a JSON policy file.

    Args:
        path: File containing {"length": N, "include": [...], "exclude": [...]}

    Returns:
        (length or None, options)

    Raises:
        ConfigurationError: If the file cannot be read or parsed
    """
    policy_path = Path(path)
    try:
        data: Dict[str, Any] = json.loads(policy_path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigurationError(f"Cannot read policy file {policy_path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in policy file {policy_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Policy file {policy_path} must contain a JSON object")

    return data.get("length"), GenerateOptions.from_dict(data)
