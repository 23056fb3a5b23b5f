"""FICA payroll taxes: Social Security and Medicare.

Social Security is capped at the year's wage base; Medicare is uncapped and
the employee side owes an additional surtax above a filing-status threshold.
Both functions accept ``prior_income_in_year`` so a payment made on top of
wages already paid (a bonus, a second job) honors the cap and the surtax
threshold cumulatively.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from takehome.tax.year_config import FilingStatus, TaxYearConfig

ZERO = Decimal("0")


@dataclass(frozen=True)
class PayrollTaxResult:
    """FICA owed on one slice of wages.

    Attributes:
        social_security: Social Security tax.
        medicare: Medicare tax at the base rate.
        additional_medicare: Additional Medicare surtax (employee side only).
    """

    social_security: Decimal
    medicare: Decimal
    additional_medicare: Decimal = ZERO

    @property
    def total(self) -> Decimal:
        return self.social_security + self.medicare + self.additional_medicare


def social_security_taxable_wages(
    gross_income: Decimal,
    wage_base: Decimal,
    prior_income_in_year: Decimal = ZERO,
) -> Decimal:
    """Portion of ``gross_income`` still under the Social Security wage base."""
    remaining_base = max(ZERO, wage_base - prior_income_in_year)
    return min(max(ZERO, gross_income), remaining_base)


def amount_over_threshold(
    income: Decimal,
    threshold: Decimal,
    prior_income_in_year: Decimal = ZERO,
) -> Decimal:
    """Portion of ``income`` that lands above ``threshold`` once stacked on prior income."""
    total = prior_income_in_year + income
    return min(income, max(ZERO, total - threshold))


def calculate_payroll_tax(
    gross_income: Decimal,
    prior_income_in_year: Decimal,
    filing_status: FilingStatus,
    config: TaxYearConfig,
) -> PayrollTaxResult:
    """Calculate employee Social Security and Medicare on a slice of wages.

    Args:
        gross_income: Wages in this slice (>= 0).
        prior_income_in_year: Wages already paid earlier in the year (>= 0).
        filing_status: Filing status, selects the surtax threshold.
        config: Tax year configuration.

    Returns:
        PayrollTaxResult for the slice.

    Example:
        >>> calculate_payroll_tax(Decimal("75000"), Decimal("0"), FilingStatus.SINGLE,
        ...                       TAX_YEAR_2025).social_security
        Decimal('4650.000')
    """
    ss_wages = social_security_taxable_wages(gross_income, config.ss_wage_base, prior_income_in_year)
    social_security = ss_wages * config.ss_rate

    medicare = gross_income * config.medicare_rate

    threshold = config.additional_medicare_threshold[filing_status]
    surtax_wages = amount_over_threshold(gross_income, threshold, prior_income_in_year)
    additional_medicare = surtax_wages * config.additional_medicare_rate

    return PayrollTaxResult(
        social_security=social_security,
        medicare=medicare,
        additional_medicare=additional_medicare,
    )


def calculate_employer_payroll_tax(
    gross_income: Decimal,
    config: TaxYearConfig,
    prior_income_in_year: Decimal = ZERO,
) -> PayrollTaxResult:
    """Employer-side Social Security and Medicare.

    Same rates and wage base as the employee side; the additional Medicare
    surtax is never owed by the employer.
    """
    ss_wages = social_security_taxable_wages(gross_income, config.ss_wage_base, prior_income_in_year)
    return PayrollTaxResult(
        social_security=ss_wages * config.ss_rate,
        medicare=gross_income * config.medicare_rate,
    )
