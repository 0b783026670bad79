"""
Random string generation from constrained code point ranges.
"""

from typing import Any, List, Mapping, Optional, Sequence, Union

from .config import GenerateOptions, coerce_options
from .exceptions import EmptyCharsetError
from .planner import GenerationPlan, plan_generation
from .ranges import format_range, parse_range_spec
from .utils.random_source import RandomSource, default_random_source
from .utils.validation import validate_length

OptionsLike = Union[None, GenerateOptions, Mapping[str, Any]]


def sample_code_point(members: Sequence[int], rng: RandomSource) -> int:
    """
    Draw one code point uniformly from members.

    Args:
        members: Non-empty, sorted code points of a character set
        rng: Random source

    Returns:
        A member of members

    Raises:
        EmptyCharsetError: If members is empty
    """
    if not members:
        raise EmptyCharsetError("Cannot sample from an empty character set")

    return members[rng.randbelow(len(members))]


def _draw(charset: frozenset, count: int, rng: RandomSource) -> List[int]:
    if count <= 0:
        return []
    # Sorted so that a seeded source gives reproducible output
    members = sorted(charset)
    return [sample_code_point(members, rng) for _ in range(count)]


def assemble(plan: GenerationPlan, rng: RandomSource) -> str:
    """
    Build the output string for a plan.

    Each group's minimum is drawn from its effective set, the rest from the
    combined set, and the whole sequence is shuffled.

    Args:
        plan: Generation plan from plan_generation()
        rng: Random source

    Returns:
        String of exactly plan.final_length code points
    """
    code_points: List[int] = []
    for group in plan.groups:
        code_points.extend(_draw(group.effective, group.minimum, rng))

    code_points.extend(_draw(plan.combined, plan.fill_length, rng))

    rng.shuffle(code_points)
    return "".join(map(chr, code_points))


def generate(length: Any, options: OptionsLike = None, *,
             rng: Optional[RandomSource] = None) -> str:
    """
    Generate a random string satisfying include/exclude constraints.

    Args:
        length: Requested length; output is max(length, sum of group minimums)
        options: GenerateOptions, or a mapping
                 {"include": [{"chars": [...], "min": N}], "exclude": [{"chars": [...]}]}
        rng: Random source (defaults to system entropy)

    Returns:
        Generated string

    Raises:
        LengthTypeError: If length is not an integer-valued number
        LengthRangeError: If length is negative
        ConfigurationError: If options are malformed or unsatisfiable
    """
    requested = validate_length(length)
    plan = plan_generation(requested, coerce_options(options))
    return assemble(plan, rng or default_random_source())


class CharsetGenerator:
    """Reusable generator bound to one include/exclude policy."""

    def __init__(self, options: OptionsLike = None, rng: Optional[RandomSource] = None):
        """
        Initialize generator with a policy.

        Args:
            options: Include/exclude groups (see generate())
            rng: Random source shared by every call on this generator
        """
        self.options = coerce_options(options)
        self.rng = rng or default_random_source()

    def plan(self, length: Any) -> GenerationPlan:
        return plan_generation(validate_length(length), self.options)

    def generate(self, length: Any) -> str:
        """Generate one string of at least `length` code points."""
        return assemble(self.plan(length), self.rng)

    def describe(self) -> str:
        """
        Get human-readable description of the policy.

        Returns:
            One line per include and exclude group
        """
        lines = []
        for position, group in enumerate(self.options.include):
            ranges = ", ".join(format_range(parse_range_spec(spec)) for spec in group.chars) or "(empty)"
            lines.append(f"include {position}: {ranges} (min {group.min})")

        for position, group in enumerate(self.options.exclude):
            ranges = ", ".join(format_range(parse_range_spec(spec)) for spec in group.chars) or "(empty)"
            lines.append(f"exclude {position}: {ranges}")

        if not lines:
            return "no character groups"
        return "\n".join(lines)
