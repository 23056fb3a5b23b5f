"""Tests for progressive bracket evaluation.

Covers the stacking evaluator used for federal, state and preferential-rate
income, schedule validation, and the breakdown/display helpers.
"""

from decimal import Decimal

import pytest

from takehome.tax.brackets import (
    Bracket,
    as_whole_percent,
    bracket_breakdown,
    describe_brackets,
    evaluate_brackets,
    flat_schedule,
    schedule,
    validate_schedule,
)
from takehome.tax.year_config import TAX_YEAR_2025, FilingStatus


# =============================================================================
# Helpers
# =============================================================================

D = Decimal

SINGLE_2025 = TAX_YEAR_2025.federal_brackets[FilingStatus.SINGLE]
TWO_BRACKETS = schedule(("10000", "0.10"), (None, "0.20"))


def _tax(income: str | Decimal) -> Decimal:
    return evaluate_brackets(SINGLE_2025, D("0"), D(income)).tax


# =============================================================================
# Schedule construction and validation
# =============================================================================


class TestScheduleConstruction:
    """schedule() and flat_schedule() build Bracket tuples."""

    def test_schedule_converts_strings_to_decimal(self) -> None:
        assert TWO_BRACKETS == (
            Bracket(D("10000"), D("0.10")),
            Bracket(None, D("0.20")),
        )

    def test_flat_schedule_is_single_unbounded_bracket(self) -> None:
        assert flat_schedule(D("0.05")) == (Bracket(None, D("0.05")),)


class TestValidateSchedule:
    """Structural invariants are enforced with ValueError."""

    def test_valid_schedule_passes(self) -> None:
        validate_schedule(SINGLE_2025, "single")

    def test_empty_schedule_rejected(self) -> None:
        with pytest.raises(ValueError, match="at least one bracket"):
            validate_schedule((), "empty")

    def test_bounded_last_bracket_rejected(self) -> None:
        with pytest.raises(ValueError, match="last bracket must be unbounded"):
            validate_schedule(schedule(("10000", "0.10")), "bounded")

    def test_unbounded_middle_bracket_rejected(self) -> None:
        brackets = (Bracket(None, D("0.10")), Bracket(None, D("0.20")))
        with pytest.raises(ValueError, match="only the last bracket"):
            validate_schedule(brackets, "middle")

    def test_non_increasing_bounds_rejected(self) -> None:
        brackets = schedule(("20000", "0.10"), ("20000", "0.15"), (None, "0.20"))
        with pytest.raises(ValueError, match="strictly increasing"):
            validate_schedule(brackets, "flat bounds")

    def test_non_positive_bound_rejected(self) -> None:
        with pytest.raises(ValueError, match="must be positive"):
            validate_schedule(schedule(("0", "0.10"), (None, "0.20")), "zero")

    def test_negative_rate_rejected(self) -> None:
        with pytest.raises(ValueError, match="negative rate"):
            validate_schedule(schedule(("100", "-0.01"), (None, "0.20")), "negative")

    def test_decreasing_rate_rejected_when_progressive(self) -> None:
        regressive = schedule(("10000", "0.20"), (None, "0.10"))
        with pytest.raises(ValueError, match="lower than"):
            validate_schedule(regressive, "regressive")

    def test_decreasing_rate_allowed_when_not_progressive(self) -> None:
        regressive = schedule(("10000", "0.20"), (None, "0.10"))
        validate_schedule(regressive, "regressive", progressive=False)


# =============================================================================
# evaluate_brackets
# =============================================================================


class TestEvaluateBrackets:
    """Slice taxation with stacking on prior income."""

    def test_income_within_first_bracket(self) -> None:
        result = evaluate_brackets(TWO_BRACKETS, D("0"), D("5000"))
        assert result.tax == D("500")
        assert result.marginal_rate == D("0.10")

    def test_income_crossing_bracket(self) -> None:
        result = evaluate_brackets(TWO_BRACKETS, D("0"), D("15000"))
        assert result.tax == D("2000")
        assert result.marginal_rate == D("0.20")

    def test_slice_stacked_on_prior_income(self) -> None:
        """40,000 -> 60,000 straddles the 12%/22% boundary at 48,475."""
        result = evaluate_brackets(SINGLE_2025, D("40000"), D("20000"))
        assert result.tax == D("8475") * D("0.12") + D("11525") * D("0.22")
        assert result.tax == D("3552.50")
        assert result.marginal_rate == D("0.22")

    def test_zero_delta_reports_rate_at_start(self) -> None:
        result = evaluate_brackets(SINGLE_2025, D("100000"), D("0"))
        assert result.tax == D("0")
        assert result.marginal_rate == D("0.22")

    def test_zero_delta_exactly_on_boundary_uses_next_bracket(self) -> None:
        result = evaluate_brackets(SINGLE_2025, D("48475"), D("0"))
        assert result.marginal_rate == D("0.22")

    def test_top_bracket_unbounded(self) -> None:
        result = evaluate_brackets(SINGLE_2025, D("0"), D("1000000"))
        expected = D("188770.50") + (D("1000000") - D("626350")) * D("0.37")
        assert result.tax == expected
        assert result.marginal_rate == D("0.37")

    @pytest.mark.parametrize(
        ("taxable", "expected"),
        [
            ("11925", "1192.50"),
            ("48475", "5578.50"),
            ("60000", "8114.00"),
            ("103350", "17651.00"),
            ("197300", "40199.00"),
            ("250500", "57223.00"),
            ("626350", "188770.50"),
        ],
    )
    def test_2025_single_cumulative_tax(self, taxable: str, expected: str) -> None:
        assert _tax(taxable) == D(expected)

    def test_negative_delta_rejected(self) -> None:
        with pytest.raises(ValueError, match="income_delta"):
            evaluate_brackets(SINGLE_2025, D("0"), D("-1"))

    def test_negative_start_rejected(self) -> None:
        with pytest.raises(ValueError, match="income_start"):
            evaluate_brackets(SINGLE_2025, D("-1"), D("100"))


class TestBracketProperties:
    """Monotonicity, convexity, continuity and additivity."""

    INCOMES = [D(n) for n in range(0, 800001, 2500)]

    def test_tax_non_decreasing(self) -> None:
        taxes = [_tax(income) for income in self.INCOMES]
        assert all(a <= b for a, b in zip(taxes, taxes[1:]))

    def test_marginal_rate_never_decreases(self) -> None:
        rates = [
            evaluate_brackets(SINGLE_2025, D("0"), income).marginal_rate
            for income in self.INCOMES[1:]
        ]
        assert all(a <= b for a, b in zip(rates, rates[1:]))

    @pytest.mark.parametrize("boundary", [b.upper_bound for b in SINGLE_2025[:-1]])
    def test_continuous_at_boundaries(self, boundary: Decimal) -> None:
        epsilon = D("0.01")
        below = _tax(boundary - epsilon)
        at = _tax(boundary)
        rate_below = evaluate_brackets(SINGLE_2025, D("0"), boundary - epsilon).marginal_rate
        assert at - below == rate_below * epsilon

    @pytest.mark.parametrize(
        ("start", "delta"),
        [("0", "50000"), ("30000", "40000"), ("190000", "100000"), ("600000", "500000")],
    )
    def test_stacked_slices_add_up(self, start: str, delta: str) -> None:
        whole = _tax(D(start) + D(delta))
        parts = _tax(start) + evaluate_brackets(SINGLE_2025, D(start), D(delta)).tax
        assert whole == parts


# =============================================================================
# Breakdown and display helpers
# =============================================================================


class TestBracketBreakdown:
    """Per-bracket rows for an income."""

    def test_rows_sum_to_evaluated_tax(self) -> None:
        rows = bracket_breakdown(SINGLE_2025, D("60000"))
        assert sum(row.tax_in_bracket for row in rows) == _tax("60000")
        assert sum(row.amount_taxed for row in rows) == D("60000")

    def test_rows_stop_at_income(self) -> None:
        rows = bracket_breakdown(SINGLE_2025, D("60000"))
        assert [row.rate for row in rows] == [D("0.10"), D("0.12"), D("0.22")]
        assert rows[-1].lower_bound == D("48475")
        assert rows[-1].amount_taxed == D("11525")

    def test_zero_income_has_no_rows(self) -> None:
        assert bracket_breakdown(SINGLE_2025, D("0")) == []


class TestDescribeBrackets:
    """Display rows for bracket tables."""

    def test_describe_single_2025(self) -> None:
        rows = describe_brackets(SINGLE_2025)
        assert rows[0] == {"rate": "10%", "range": "$0 - $11,925"}
        assert rows[1] == {"rate": "12%", "range": "$11,925 - $48,475"}
        assert rows[-1] == {"rate": "37%", "range": "Over $626,350"}
        assert len(rows) == 7

    def test_fractional_rates_keep_decimals(self) -> None:
        rows = describe_brackets(schedule(("1000", "0.0525"), (None, "0.0585")))
        assert rows[0]["rate"] == "5.25%"
        assert rows[1]["rate"] == "5.85%"


class TestAsWholePercent:
    """Bracket rates expressed as whole percents."""

    @pytest.mark.parametrize(
        ("rate", "expected"), [("0.22", "22"), ("0.10", "10"), ("0", "0"), ("0.37", "37")]
    )
    def test_conversion(self, rate: str, expected: str) -> None:
        assert as_whole_percent(D(rate)) == D(expected)
