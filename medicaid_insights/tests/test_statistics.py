"""
Tests for the statistical primitives and display formatting.

Test Categories:
- TestCentralTendency: mean and population standard deviation
- TestDegenerateStatistics: excluded (None) results instead of NaN/Infinity
- TestRounding: half-up rounding, growth percent, NTILE bucketing
- TestFormatting: currency, percent, dollars and month names
"""

import math
from typing import List

import pytest

from medicaid_insights.services.formatting import (
    format_currency,
    format_dollars,
    format_growth,
    format_percent,
    month_name,
)
from medicaid_insights.services.statistics import (
    growth_percent,
    mean,
    ntile,
    percentage_share,
    population_std_dev,
    quartile_buckets,
    ratio,
    round_half_up,
    z_score,
)


class TestCentralTendency:

    def test_mean_calculation(self) -> None:
        """Arithmetic mean of a simple sequence."""
        result = mean([1.0, 2.0, 3.0, 4.0, 5.0])
        assert result == 3.0, f"Expected mean 3.0, got {result}"

    def test_mean_empty_raises(self) -> None:
        """Callers must guard; an empty sequence is a contract violation."""
        with pytest.raises(ValueError):
            mean([])

    def test_population_std_dev(self) -> None:
        """Population (divide by N) formula: [2,4,4,4,5,5,7,9] -> 2.0."""
        values = [2.0, 4.0, 4.0, 4.0, 5.0, 5.0, 7.0, 9.0]
        result = population_std_dev(values)
        assert math.isclose(result, 2.0), f"Expected 2.0, got {result}"

    def test_population_std_dev_with_precomputed_mean(self) -> None:
        """Passing the mean gives the same answer as computing it."""
        values = [500.0, 50.0, 45.0]
        assert math.isclose(population_std_dev(values, mean(values)), population_std_dev(values))

    def test_std_dev_is_not_sample_formula(self) -> None:
        """[1, 3] has population std 1.0 (the sample formula would give ~1.414)."""
        result = population_std_dev([1.0, 3.0])
        assert result == 1.0, f"Expected population std 1.0, got {result}"

    def test_identical_values_have_zero_std(self) -> None:
        """Identical values give exactly 0.0, not float noise."""
        result = population_std_dev([0.1] * 7)
        assert result == 0.0, f"Expected exactly 0.0, got {result}"


class TestDegenerateStatistics:

    def test_z_score(self) -> None:
        """(5 - 3) / 2 = 1.0."""
        assert z_score(5.0, 3.0, 2.0) == 1.0

    def test_z_score_excluded_for_zero_std(self) -> None:
        """Zero standard deviation excludes the z-score."""
        assert z_score(5.0, 3.0, 0.0) is None

    @pytest.mark.parametrize("numerator,denominator", [
        (100.0, 0),
        (100.0, -5),
        (100.0, None),
        (None, 10),
    ])
    def test_ratio_excluded(self, numerator, denominator) -> None:
        """Missing, zero or negative denominators exclude the ratio."""
        assert ratio(numerator, denominator) is None

    def test_ratio(self) -> None:
        """Cost per claim 1000 / 4 = 250."""
        assert ratio(1000.0, 4) == 250.0

    def test_percentage_share(self) -> None:
        """155 total providers, top 5 hold 150 -> 96.77..."""
        result = percentage_share(150, 155)
        assert format_percent(result) == "96.8", f"Expected 96.8, got {result}"

    def test_percentage_share_excluded_for_zero_whole(self) -> None:
        assert percentage_share(10, 0) is None


class TestRounding:

    @pytest.mark.parametrize("value,expected", [
        (2.5, 3),
        (3.5, 4),
        (-0.5, 0),
        (12.49, 12),
    ])
    def test_round_half_up(self, value: float, expected: int) -> None:
        """Ties round up rather than to even."""
        assert round_half_up(value) == expected

    def test_growth_percent(self) -> None:
        """100 -> 130 is 30% growth."""
        assert growth_percent(100.0, 130.0) == 30

    def test_growth_percent_first_year(self) -> None:
        """No previous year and zero previous spending both give 0."""
        assert growth_percent(None, 130.0) == 0
        assert growth_percent(0.0, 130.0) == 0

    def test_growth_percent_decline(self) -> None:
        """Declines are negative whole percents."""
        assert growth_percent(200.0, 150.0) == -25

    def test_ntile_sizes(self) -> None:
        """SQL NTILE: 51 rows into 4 buckets gives sizes 13, 13, 13, 12."""
        buckets = ntile(51, 4)
        sizes = [buckets.count(b) for b in range(1, 5)]
        assert sizes == [13, 13, 13, 12], f"Unexpected bucket sizes {sizes}"

    def test_quartile_buckets_aligned_with_input(self) -> None:
        """Quartiles are returned in input order, 1 for the lowest values."""
        values: List[float] = [80.0, 50.0, 70.0, 60.0]
        assert quartile_buckets(values) == [4, 1, 3, 2]

    def test_quartile_buckets_ties_keep_input_order(self) -> None:
        """Equal values fill buckets in input order."""
        values = [50.0] * 5
        assert quartile_buckets(values) == [1, 1, 2, 3, 4]


class TestFormatting:

    @pytest.mark.parametrize("value,expected", [
        (999, "$999"),
        (1000, "$1.0K"),
        (35333.33, "$35.3K"),
        (1234567, "$1.2M"),
        (999_960, "$1.0M"),
        (999.6, "$1.0K"),
        (40e9, "$40.0B"),
        (1.5e12, "$1.5T"),
    ])
    def test_format_currency(self, value: float, expected: str) -> None:
        """Compact to $K/$M/$B/$T at one decimal from $1,000 up."""
        assert format_currency(value) == expected

    def test_format_percent(self) -> None:
        assert format_percent(30) == "30.0"

    def test_format_growth(self) -> None:
        """Whole growth values print without a decimal point."""
        assert format_growth(20.0) == "20"
        assert format_growth(12.5) == "12.5"
        assert format_growth(None) == "0"

    def test_format_growth_one_decimal(self) -> None:
        """Fractional growth is shown at one decimal place."""
        assert format_growth(12.3456) == "12.3"

    def test_format_dollars(self) -> None:
        assert format_dollars(1000.0) == "$1,000"
        assert format_dollars(3000.5) == "$3,000.5"

    @pytest.mark.parametrize("value,expected", [
        (2000.001, "$2,000"),
        (999.999, "$1,000"),
        (12.1, "$12.1"),
    ])
    def test_format_dollars_rounding_to_whole(self, value: float, expected: str) -> None:
        """Values that round to whole cents drop the decimal point with the zeros."""
        assert format_dollars(value) == expected

    def test_month_name(self) -> None:
        """Two-digit month numbers map to short names; anything else passes through."""
        assert month_name("03") == "Mar"
        assert month_name("12") == "Dec"
        assert month_name("13") == "13"
        assert month_name("xx") == "xx"
