"""
Unit tests for constrained string generation.
"""

from collections import Counter
from unittest.mock import MagicMock, patch

import pytest

from rangepass import (
    CharsetGenerator,
    ConfigurationError,
    GenerateOptions,
    IncludeGroup,
    LengthRangeError,
    LengthTypeError,
    RandomSource,
    generate,
)
from rangepass.exceptions import EmptyCharsetError
from rangepass.generator import assemble, sample_code_point
from rangepass.planner import GenerationPlan, PlannedGroup, plan_generation
from rangepass.ranges import Interval, SinglePoint


ABCD_OPTIONS = {"include": [{"chars": [[0x41, 0x44]]}]}

MIXED_OPTIONS = {
    "include": [
        {"chars": [["a", "d"]], "min": 2},
        {"chars": [["0", "5"], ["7"]], "min": 5},
    ],
    "exclude": [
        {"chars": [["4"]]},
    ],
}


class TestGenerate:
    """Test the generate() entry point."""

    def test_expected_length(self):
        """Test output has the requested length."""
        for length in [0, 1, 10, 1000]:
            assert len(generate(length, ABCD_OPTIONS)) == length

    def test_zero_length_is_empty(self):
        """Test length 0 without minimums yields an empty string."""
        assert generate(0, ABCD_OPTIONS) == ""

    def test_only_included_characters(self):
        """Test every character comes from the include ranges."""
        value = generate(200, ABCD_OPTIONS)
        assert set(value) <= set("ABCD")

    def test_minimums_extend_length(self):
        """Test output length is max(length, sum of minimums)."""
        for length in [0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 1000]:
            value = generate(length, MIXED_OPTIONS)
            assert len(value) == max(length, 7)

            letters = sum(1 for c in value if c in "abcd")
            digits = sum(1 for c in value if c in "012357")
            assert letters >= 2, f"Expected at least 2 letters in {value!r}"
            assert digits >= 5, f"Expected at least 5 digits in {value!r}"
            assert "4" not in value
            assert set(value) <= set("abcd012357")

    def test_exclusion_never_appears(self):
        """Test excluded characters never appear across many draws."""
        options = {
            "include": [{"chars": [["a", "z"]], "min": 3}],
            "exclude": [{"chars": ["a", "e", "i", "o", ["u"]]}],
        }
        for _ in range(50):
            value = generate(30, options)
            assert not set(value) & set("aeiou")

    def test_bmp_characters_reproducible(self):
        """Test single BMP code points across scripts are produced."""
        expected = ["\u0000", "\uffff", "a", "€", "ز", "ᜉ", "⠧", "ジ"]
        options = {
            "include": [
                {"chars": [[0x00]], "min": 1},
                {"chars": [[0xFFFF]], "min": 1},
                {"chars": [[97]], "min": 1},
                {"chars": [["€"]], "min": 1},
                {"chars": [["ز"]], "min": 1},
                {"chars": [[0x1709]], "min": 1},
                {"chars": [["⠧"]], "min": 1},
                {"chars": [["ジ"]], "min": 1},
            ]
        }

        value = generate(8, options)
        assert len(value) == 8
        assert sorted(value) == sorted(expected)

    def test_astral_ranges_are_dropped(self):
        """Test ranges above the BMP never produce output."""
        options = {
            "include": [
                {"chars": [[0x10000]]},
                {"chars": [[0x20000]]},
                {"chars": [[0xE0000]]},
                {"chars": [[0x1F4A9]]},
                {"chars": [[0xFFFE, 0x10FFFF]], "min": 1},
            ]
        }

        for _ in range(20):
            value = generate(8, options)
            assert len(value) == 8
            assert all(ord(c) <= 0xFFFF for c in value)
            assert set(value) <= {"\ufffe", "\uffff"}

    def test_astral_only_group_with_minimum_fails(self):
        """Test a positive minimum over astral-only ranges is a configuration error."""
        options = {"include": [{"chars": [[0x1F4A9]], "min": 1}]}

        with pytest.raises(ConfigurationError):
            generate(8, options)

    def test_negative_code_point_rejected(self):
        """Test hand-built negative code points raise ConfigurationError."""
        options = GenerateOptions(include=(IncludeGroup(chars=(SinglePoint(-5),), min=1),))

        with pytest.raises(ConfigurationError):
            generate(2, options)

    def test_empty_group_without_minimum_is_noop(self):
        """Test a group emptied by exclusions is ignored when min is 0."""
        options = {
            "include": [
                {"chars": ["a"]},
                {"chars": ["b"], "min": 2},
            ],
            "exclude": [{"chars": ["a"]}],
        }

        assert generate(2, options) == "bb"
        assert generate(5, options) == "bbbbb"

    def test_no_include_groups(self):
        """Test generation without include groups."""
        assert generate(0) == ""
        assert generate(0, {}) == ""

        with pytest.raises(ConfigurationError):
            generate(3)

    def test_everything_excluded(self):
        """Test filling fails when exclusions remove every character."""
        options = {
            "include": [{"chars": [["a", "c"]]}],
            "exclude": [{"chars": [["a", "c"]]}],
        }

        with pytest.raises(ConfigurationError):
            generate(4, options)

    def test_accepts_options_object(self):
        """Test GenerateOptions works in place of a mapping."""
        options = GenerateOptions(include=(IncludeGroup(chars=(Interval(ord("x"), ord("z")),), min=3),))

        value = generate(3, options)
        assert len(value) == 3
        assert set(value) <= set("xyz")


class TestLengthValidation:
    """Test validation of the requested length."""

    def test_negative_length(self):
        """Test negative lengths raise LengthRangeError."""
        for length in [-1, -10, -1000]:
            with pytest.raises(LengthRangeError):
                generate(length, ABCD_OPTIONS)

    def test_range_error_is_value_error(self):
        """Test LengthRangeError is a ValueError."""
        with pytest.raises(ValueError):
            generate(-1, ABCD_OPTIONS)

    def test_non_integer_length(self):
        """Test non-integer lengths raise LengthTypeError."""
        for length in ["5", 5.5, "test", {}, None, [], True, float("nan")]:
            with pytest.raises(LengthTypeError):
                generate(length, ABCD_OPTIONS)

    def test_type_error_is_type_error(self):
        """Test LengthTypeError is a TypeError."""
        with pytest.raises(TypeError):
            generate("5", ABCD_OPTIONS)

    def test_integral_float_accepted(self):
        """Test an integer-valued float is accepted."""
        assert len(generate(5.0, ABCD_OPTIONS)) == 5

    def test_validation_precedes_configuration(self):
        """Test length errors win over configuration errors."""
        with pytest.raises(LengthRangeError):
            generate(-1, {"include": [{"chars": ["a"], "min": -3}]})


class TestRandomness:
    """Test sampling, shuffling and the injected random source."""

    def test_seeded_output_is_reproducible(self):
        """Test equal seeds produce equal output."""
        first = generate(32, MIXED_OPTIONS, rng=RandomSource(seed=42))
        second = generate(32, MIXED_OPTIONS, rng=RandomSource(seed=42))
        assert first == second

    def test_unseeded_output_is_unique(self):
        """Test generated strings are unique."""
        values = {generate(16, {"include": [{"chars": [["a", "z"]]}]}) for _ in range(100)}
        assert len(values) == 100

    def test_sampler_is_uniform(self):
        """Test each member is drawn with roughly equal frequency."""
        rng = RandomSource(seed=7)
        members = sorted(frozenset(range(4)))

        counts = Counter(sample_code_point(members, rng) for _ in range(4000))

        assert set(counts) == set(range(4))
        for value in range(4):
            assert 800 < counts[value] < 1200

    def test_sampler_rejects_empty_set(self):
        """Test sampling from an empty set fails loudly."""
        with pytest.raises(EmptyCharsetError):
            sample_code_point([], RandomSource(seed=1))

    def test_assembler_draws_through_sampler(self):
        """Test every output position is drawn by sample_code_point."""
        plan = plan_generation(9, GenerateOptions.from_dict(MIXED_OPTIONS))

        with patch("rangepass.generator.sample_code_point", wraps=sample_code_point) as sampler:
            value = assemble(plan, RandomSource(seed=5))

        assert len(value) == 9
        assert sampler.call_count == 9

    def test_assembler_rejects_empty_group(self):
        """Test a hand-built plan with an empty mandated set fails loudly."""
        plan = GenerationPlan(
            final_length=2,
            groups=(PlannedGroup(effective=frozenset(), minimum=1),),
            combined=frozenset({ord("a")}),
        )

        with pytest.raises(EmptyCharsetError):
            assemble(plan, RandomSource(seed=1))

    def test_assembler_order_before_shuffle(self):
        """Test groups are drawn in order, then the fill, then shuffled."""
        rng = MagicMock(spec=RandomSource)
        rng.randbelow.return_value = 0

        plan = plan_generation(4, GenerateOptions.from_dict({
            "include": [
                {"chars": [["b", "d"]], "min": 2},
                {"chars": [["0", "5"], ["7"]], "min": 1},
            ]
        }))
        value = assemble(plan, rng)

        assert value == "bb00"
        rng.shuffle.assert_called_once()
        assert rng.randbelow.call_count == 4

    def test_mandated_characters_not_positional(self):
        """Test mandated characters land in varying positions."""
        options = {
            "include": [
                {"chars": ["x"], "min": 1},
                {"chars": [["a", "e"]]},
            ]
        }

        positions = set()
        for seed in range(200):
            value = generate(10, options, rng=RandomSource(seed=seed))
            positions.add(value.index("x"))

        assert len(positions) > 5


class TestCharsetGenerator:
    """Test CharsetGenerator class directly."""

    def test_generate(self):
        """Test repeated generation from one policy."""
        generator = CharsetGenerator(MIXED_OPTIONS, rng=RandomSource(seed=3))

        for length in [0, 7, 12]:
            value = generator.generate(length)
            assert len(value) == max(length, 7)
            assert "4" not in value

    def test_plan(self):
        """Test the plan exposes final length and fill."""
        generator = CharsetGenerator(MIXED_OPTIONS)
        plan = generator.plan(10)

        assert plan.final_length == 10
        assert plan.fill_length == 3

    def test_describe(self):
        """Test human-readable policy description."""
        info = CharsetGenerator(MIXED_OPTIONS).describe()

        assert "include 0: U+0061..U+0064 (min 2)" in info
        assert "include 1: U+0030..U+0035, U+0037 (min 5)" in info
        assert "exclude 0: U+0034" in info

    def test_describe_empty(self):
        """Test description without groups."""
        assert CharsetGenerator().describe() == "no character groups"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
