"""
Reconcile include and exclude groups into a generation plan.
"""

import logging
from typing import NamedTuple, Tuple

from .config import GenerateOptions
from .exceptions import ConfigurationError
from .ranges import build_charset
from .utils.validation import validate_minimum

logger = logging.getLogger(__name__)


class PlannedGroup(NamedTuple):
    """An include group after exclusion."""

    effective: frozenset
    minimum: int


class GenerationPlan(NamedTuple):
    """Everything the assembler needs for one call."""

    final_length: int
    groups: Tuple[PlannedGroup, ...]
    combined: frozenset

    @property
    def total_minimum(self) -> int:
        return sum(group.minimum for group in self.groups)

    @property
    def fill_length(self) -> int:
        """Positions drawn from the combined set."""
        return self.final_length - self.total_minimum


def plan_generation(length: int, options: GenerateOptions) -> GenerationPlan:
    """
    Compute effective sets and the final output length.

    Args:
        length: Validated, non-negative requested length
        options: Include and exclude groups

    Returns:
        Generation plan whose sets are safe to sample from

    Raises:
        ConfigurationError: If a positive minimum or the fill length cannot be
            satisfied because the relevant set is empty
    """
    excluded = frozenset().union(*(build_charset(group.chars) for group in options.exclude))

    groups = []
    combined = set()
    for position, group in enumerate(options.include):
        minimum = validate_minimum(group.min, position)
        effective = build_charset(group.chars) - excluded
        if minimum > 0 and not effective:
            raise ConfigurationError(
                f"Include group {position} requires {minimum} character(s) "
                "but has no characters left after exclusions"
            )
        groups.append(PlannedGroup(effective, minimum))
        combined |= effective

    total_minimum = sum(group.minimum for group in groups)
    final_length = max(length, total_minimum)
    plan = GenerationPlan(final_length, tuple(groups), frozenset(combined))

    if plan.fill_length > 0 and not plan.combined:
        raise ConfigurationError(
            f"Cannot fill {plan.fill_length} position(s): no characters available"
        )

    logger.debug(
        f"Planned {final_length} code point(s): {len(groups)} group(s), "
        f"{total_minimum} mandated, {len(excluded)} excluded, "
        f"{len(plan.combined)} in combined set"
    )
    return plan
