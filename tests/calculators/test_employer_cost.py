"""Tests for the total cost of employment."""

from decimal import Decimal

import pytest

from takehome.calculators.employer_cost import calculate_employer_cost
from takehome.calculators.models import EmployerCostInput

D = Decimal


def _cost(gross: str, config, **kwargs):
    return calculate_employer_cost(EmployerCostInput(gross_salary=D(gross), **kwargs), config)


class TestEmployerTaxes:
    """Employer FICA and unemployment taxes."""

    def test_100k_salary(self, config_2025) -> None:
        result = _cost("100000", config_2025)
        assert result.employer_social_security == D("6200")
        assert result.employer_medicare == D("1450")
        assert result.employer_futa == D("42")
        assert result.employer_suta == D("270")
        assert result.total_employer_taxes == D("7962")
        assert result.total_cost == D("107962")

    def test_social_security_capped(self, config_2025) -> None:
        result = _cost("300000", config_2025)
        assert result.employer_social_security == D("176100") * D("0.062")
        assert result.employer_medicare == D("300000") * D("0.0145")

    def test_no_additional_medicare_for_employer(self, config_2025) -> None:
        result = _cost("1000000", config_2025)
        assert result.employer_medicare == D("1000000") * D("0.0145")

    def test_unemployment_wage_bases(self, config_2025) -> None:
        result = _cost("5000", config_2025)
        assert result.employer_futa == D("5000") * D("0.006")
        assert result.employer_suta == D("5000") * D("0.027")

    def test_custom_suta_rate(self, config_2025) -> None:
        result = _cost("100000", config_2025, suta_rate=D("0.054"))
        assert result.employer_suta == D("540")


class TestMatchAndTotals:
    """401(k) match, per-period costs and overhead."""

    def test_401k_match_is_percent_of_salary(self, config_2025) -> None:
        result = _cost("100000", config_2025, employer_401k_match=D("4"))
        assert result.employer_401k_match == D("4000")
        assert result.total_cost == D("111962")

    def test_per_period_costs(self, config_2025) -> None:
        result = _cost("100000", config_2025)
        assert result.cost_per_month == result.total_cost / 12
        assert result.cost_per_day == result.total_cost / 260

    def test_overhead_percent(self, config_2025) -> None:
        result = _cost("100000", config_2025)
        assert result.overhead_percent == D("7.962")

    def test_zero_salary(self, config_2025) -> None:
        result = _cost("0", config_2025)
        assert result.total_cost == D("0")
        assert result.overhead_percent == D("0")
        assert result.tax_year == 2025

    @pytest.mark.parametrize("match", ["-1", "101"])
    def test_match_out_of_range_rejected(self, match: str) -> None:
        with pytest.raises(ValueError):
            EmployerCostInput(gross_salary=D("100000"), employer_401k_match=D(match))
