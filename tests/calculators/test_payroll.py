"""Tests for FICA payroll taxes.

Social Security is capped at the wage base, Medicare is uncapped, and the
employee-only additional Medicare surtax starts at the filing-status
threshold. Wages split across calls with prior_income_in_year must be taxed
exactly as if they were paid in one call.
"""

from decimal import Decimal

import pytest

from takehome.calculators.payroll import (
    amount_over_threshold,
    calculate_employer_payroll_tax,
    calculate_payroll_tax,
    social_security_taxable_wages,
)
from takehome.tax.year_config import FilingStatus

D = Decimal
SINGLE = FilingStatus.SINGLE


# =============================================================================
# Helpers
# =============================================================================


class TestHelpers:
    """Wage base and threshold slicing."""

    def test_taxable_wages_below_base(self) -> None:
        assert social_security_taxable_wages(D("50000"), D("176100")) == D("50000")

    def test_taxable_wages_capped(self) -> None:
        assert social_security_taxable_wages(D("500000"), D("176100")) == D("176100")

    def test_taxable_wages_with_prior_income(self) -> None:
        assert social_security_taxable_wages(D("50000"), D("176100"), D("150000")) == D("26100")

    def test_taxable_wages_prior_above_base(self) -> None:
        assert social_security_taxable_wages(D("50000"), D("176100"), D("200000")) == D("0")

    def test_amount_over_threshold(self) -> None:
        assert amount_over_threshold(D("250000"), D("200000")) == D("50000")
        assert amount_over_threshold(D("100000"), D("200000")) == D("0")
        assert amount_over_threshold(D("50000"), D("200000"), D("180000")) == D("30000")
        assert amount_over_threshold(D("50000"), D("200000"), D("300000")) == D("50000")


# =============================================================================
# Employee FICA
# =============================================================================


class TestCalculatePayrollTax:
    """Employee Social Security and Medicare."""

    def test_basic_wages(self, config_2025) -> None:
        result = calculate_payroll_tax(D("75000"), D("0"), SINGLE, config_2025)
        assert result.social_security == D("4650")
        assert result.medicare == D("1087.50")
        assert result.additional_medicare == D("0")
        assert result.total == D("5737.50")

    @pytest.mark.parametrize("gross", ["176100", "200000", "1000000", "5000000"])
    def test_social_security_capped_at_wage_base(self, config_2025, gross: str) -> None:
        result = calculate_payroll_tax(D(gross), D("0"), SINGLE, config_2025)
        assert result.social_security == D("176100") * D("0.062")

    def test_additional_medicare_above_threshold(self, config_2025) -> None:
        result = calculate_payroll_tax(D("300000"), D("0"), SINGLE, config_2025)
        assert result.medicare == D("300000") * D("0.0145")
        assert result.additional_medicare == D("100000") * D("0.009")

    def test_additional_medicare_threshold_by_status(self, config_2025) -> None:
        joint = calculate_payroll_tax(
            D("300000"), D("0"), FilingStatus.MARRIED_JOINTLY, config_2025
        )
        separate = calculate_payroll_tax(
            D("300000"), D("0"), FilingStatus.MARRIED_SEPARATELY, config_2025
        )
        assert joint.additional_medicare == D("50000") * D("0.009")
        assert separate.additional_medicare == D("175000") * D("0.009")

    def test_zero_wages(self, config_2025) -> None:
        assert calculate_payroll_tax(D("0"), D("0"), SINGLE, config_2025).total == D("0")


class TestCumulativeCap:
    """Splitting wages across calls neither double-taxes nor double-exempts."""

    @pytest.mark.parametrize(
        ("first", "second"),
        [
            ("100000", "50000"),
            ("150000", "100000"),
            ("180000", "40000"),
            ("190000", "150000"),
            ("50000", "2000000"),
        ],
    )
    def test_split_matches_single_call(self, config_2025, first: str, second: str) -> None:
        whole = calculate_payroll_tax(D(first) + D(second), D("0"), SINGLE, config_2025)
        part1 = calculate_payroll_tax(D(first), D("0"), SINGLE, config_2025)
        part2 = calculate_payroll_tax(D(second), D(first), SINGLE, config_2025)

        assert part1.social_security + part2.social_security == whole.social_security
        assert part1.medicare + part2.medicare == whole.medicare
        assert part1.additional_medicare + part2.additional_medicare == whole.additional_medicare

    def test_prior_income_above_base_exempts_slice(self, config_2025) -> None:
        result = calculate_payroll_tax(D("10000"), D("200000"), SINGLE, config_2025)
        assert result.social_security == D("0")
        assert result.medicare == D("145")
        assert result.additional_medicare == D("90")


# =============================================================================
# Employer FICA
# =============================================================================


class TestEmployerPayrollTax:
    """Employer side mirrors the employee rates without the surtax."""

    def test_matches_employee_base_rates(self, config_2025) -> None:
        employer = calculate_employer_payroll_tax(D("300000"), config_2025)
        employee = calculate_payroll_tax(D("300000"), D("0"), SINGLE, config_2025)
        assert employer.social_security == employee.social_security
        assert employer.medicare == employee.medicare
        assert employer.additional_medicare == D("0")
        assert employee.additional_medicare > D("0")

    def test_honors_prior_income(self, config_2025) -> None:
        employer = calculate_employer_payroll_tax(D("50000"), config_2025, D("150000"))
        assert employer.social_security == D("26100") * D("0.062")
