"""Tests for self-employment tax and sole-proprietor take-home."""

from decimal import Decimal

import pytest

from takehome.calculators.models import SelfEmployedIncomeInput, SelfEmploymentInput
from takehome.calculators.self_employment import (
    calculate_self_employed_income,
    calculate_self_employment_tax,
)
from takehome.tax.year_config import FilingStatus

D = Decimal


def _se(net: str, status: FilingStatus = FilingStatus.SINGLE, config=None):
    return calculate_self_employment_tax(
        SelfEmploymentInput(net_earnings=D(net), filing_status=status), config
    )


# =============================================================================
# Self-employment tax
# =============================================================================


class TestSelfEmploymentTax:
    """SE tax on 92.35% of net earnings."""

    def test_100k_net_earnings(self, config_2025) -> None:
        result = _se("100000", config=config_2025)
        assert result.self_employment_tax_base == D("92350")
        assert result.social_security_tax == D("92350") * D("0.124")
        assert result.medicare_tax == D("92350") * D("0.029")
        assert result.additional_medicare_tax == D("0")
        assert result.total_self_employment_tax == D("14129.55")
        assert result.deductible_portion == D("7064.775")
        assert result.tax_year == 2025

    def test_social_security_capped_at_wage_base(self, config_2025) -> None:
        result = _se("500000", config=config_2025)
        assert result.self_employment_tax_base == D("461750")
        assert result.social_security_tax == D("176100") * D("0.124")

    def test_additional_medicare_included_in_medicare(self, config_2025) -> None:
        result = _se("500000", config=config_2025)
        surtax = (D("461750") - D("200000")) * D("0.009")
        assert result.additional_medicare_tax == surtax
        assert result.medicare_tax == D("461750") * D("0.029") + surtax

    def test_zero_earnings(self, config_2025) -> None:
        result = _se("0", config=config_2025)
        assert result.total_self_employment_tax == D("0")
        assert result.deductible_portion == D("0")

    @pytest.mark.parametrize(
        "net", ["0", "1", "12345.67", "100000", "190000", "250000.01", "999999.99"]
    )
    @pytest.mark.parametrize("status", list(FilingStatus))
    def test_deductible_portion_is_exactly_half(
        self, config_2025, net: str, status: FilingStatus
    ) -> None:
        result = _se(net, status, config_2025)
        assert result.deductible_portion * 2 == result.total_self_employment_tax

    def test_tax_year_selected_from_input(self) -> None:
        result = calculate_self_employment_tax(
            SelfEmploymentInput(net_earnings=D("500000"), tax_year=2024)
        )
        assert result.tax_year == 2024
        assert result.social_security_tax == D("168600") * D("0.124")


# =============================================================================
# Sole-proprietor income
# =============================================================================


class TestSelfEmployedIncome:
    """Above-the-line deductions, federal tax and quarterly estimates."""

    def test_net_profit_after_expenses(self, config_2025) -> None:
        result = calculate_self_employed_income(
            SelfEmployedIncomeInput(
                annual_revenue=D("150000"),
                expenses=D("30000"),
                home_office_deduction=D("5000"),
            ),
            config_2025,
        )
        assert result.net_profit == D("115000")
        assert result.self_employment.net_earnings == D("115000")

    def test_net_profit_floored_at_zero(self, config_2025) -> None:
        result = calculate_self_employed_income(
            SelfEmployedIncomeInput(annual_revenue=D("10000"), expenses=D("20000")),
            config_2025,
        )
        assert result.net_profit == D("0")
        assert result.total_taxes == D("0")
        assert result.effective_rate == D("0")

    def test_agi_and_federal_tax(self, config_2025) -> None:
        result = calculate_self_employed_income(
            SelfEmployedIncomeInput(
                annual_revenue=D("100000"),
                sep_ira_contribution=D("10000"),
                health_insurance=D("5000"),
            ),
            config_2025,
        )
        half_se = D("7064.775")
        expected_agi = D("100000") - half_se - D("10000") - D("5000")
        assert result.adjusted_gross_income == expected_agi
        assert result.taxable_income == expected_agi - D("15000")
        assert result.total_taxes == result.federal_tax + D("14129.55")
        assert result.take_home == D("100000") - result.total_taxes - D("10000")
        assert result.quarterly_payment * 4 == result.total_taxes
        assert result.marginal_rate == D("22")

    def test_sep_ira_max(self, config_2025) -> None:
        modest = calculate_self_employed_income(
            SelfEmployedIncomeInput(annual_revenue=D("100000")), config_2025
        )
        assert modest.sep_ira_max == (D("100000") - D("7064.775")) * D("0.25")

        large = calculate_self_employed_income(
            SelfEmployedIncomeInput(annual_revenue=D("1000000")), config_2025
        )
        assert large.sep_ira_max == D("70000")
