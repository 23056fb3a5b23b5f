"""Self-employment tax and sole-proprietor take-home.

SE tax is the self-employed equivalent of combined employer + employee FICA:

1. Net earnings are multiplied by 92.35% (the employer-equivalent share is
   not itself taxed).
2. Social Security at 12.4% up to the wage base.
3. Medicare at 2.9% on everything, plus the 0.9% additional Medicare
   surtax above the filing-status threshold.
4. Half of the total is deductible when computing adjusted gross income.

All arithmetic uses Decimal.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from takehome.calculators.models import SelfEmployedIncomeInput, SelfEmploymentInput
from takehome.calculators.payroll import amount_over_threshold, social_security_taxable_wages
from takehome.tax.brackets import as_whole_percent, evaluate_brackets
from takehome.tax.year_config import TaxYearConfig, resolve_config

ZERO = Decimal("0")
HUNDRED = Decimal("100")


@dataclass(frozen=True)
class SelfEmploymentResult:
    """Self-employment tax breakdown.

    Attributes:
        net_earnings: Net self-employment earnings before adjustment.
        self_employment_tax_base: 92.35% of net earnings.
        social_security_tax: 12.4% portion, capped at the wage base.
        medicare_tax: 2.9% portion plus the additional Medicare surtax.
        additional_medicare_tax: Surtax part of ``medicare_tax``.
        total_self_employment_tax: Social Security plus Medicare.
        deductible_portion: Half of the total, deductible from income.
        tax_year: Year of the configuration used.
    """

    net_earnings: Decimal
    self_employment_tax_base: Decimal
    social_security_tax: Decimal
    medicare_tax: Decimal
    additional_medicare_tax: Decimal
    total_self_employment_tax: Decimal
    deductible_portion: Decimal
    tax_year: int


def calculate_self_employment_tax(
    se_input: SelfEmploymentInput,
    config: TaxYearConfig | None = None,
) -> SelfEmploymentResult:
    """Calculate self-employment tax on net earnings.

    Args:
        se_input: Net earnings and filing status.
        config: Tax year configuration; defaults to the input's year.

    Returns:
        SelfEmploymentResult. ``deductible_portion * 2`` always equals
        ``total_self_employment_tax``.

    Example:
        >>> result = calculate_self_employment_tax(
        ...     SelfEmploymentInput(net_earnings=Decimal("100000")))
        >>> result.self_employment_tax_base
        Decimal('92350.0000')
    """
    config = resolve_config(config, se_input.tax_year)

    tax_base = se_input.net_earnings * config.se_net_earnings_factor

    ss_wages = social_security_taxable_wages(tax_base, config.ss_wage_base)
    social_security_tax = ss_wages * config.se_ss_rate

    threshold = config.additional_medicare_threshold[se_input.filing_status]
    additional_medicare_tax = (
        amount_over_threshold(tax_base, threshold) * config.additional_medicare_rate
    )
    medicare_tax = tax_base * config.se_medicare_rate + additional_medicare_tax

    total = social_security_tax + medicare_tax

    return SelfEmploymentResult(
        net_earnings=se_input.net_earnings,
        self_employment_tax_base=tax_base,
        social_security_tax=social_security_tax,
        medicare_tax=medicare_tax,
        additional_medicare_tax=additional_medicare_tax,
        total_self_employment_tax=total,
        deductible_portion=total * config.se_tax_deduction_rate,
        tax_year=config.tax_year,
    )


@dataclass(frozen=True)
class SelfEmployedIncomeResult:
    """Federal picture for a sole proprietor.

    Attributes:
        net_profit: Revenue less expenses and home office deduction.
        self_employment: The SE tax breakdown on net profit.
        adjusted_gross_income: Net profit less half SE tax, SEP-IRA and
            health insurance (may be negative).
        standard_deduction: Federal standard deduction.
        taxable_income: AGI less the standard deduction, floored at 0.
        federal_tax: Federal income tax.
        total_taxes: Federal income tax plus SE tax.
        take_home: Net profit less taxes and the SEP-IRA contribution.
        quarterly_payment: Estimated tax payment per quarter.
        effective_rate: Total taxes as a percent of net profit.
        marginal_rate: Federal marginal rate, whole percent.
        sep_ira_max: Maximum SEP-IRA contribution for this profit.
    """

    net_profit: Decimal
    self_employment: SelfEmploymentResult
    adjusted_gross_income: Decimal
    standard_deduction: Decimal
    taxable_income: Decimal
    federal_tax: Decimal
    total_taxes: Decimal
    take_home: Decimal
    quarterly_payment: Decimal
    effective_rate: Decimal
    marginal_rate: Decimal
    sep_ira_max: Decimal


def calculate_self_employed_income(
    income_input: SelfEmployedIncomeInput,
    config: TaxYearConfig | None = None,
) -> SelfEmployedIncomeResult:
    """Federal income tax, SE tax and take-home for a sole proprietor.

    The deductible half of SE tax, SEP-IRA contributions and self-employed
    health insurance are subtracted above the line before the standard
    deduction and federal brackets are applied.
    """
    config = resolve_config(config, income_input.tax_year)
    status = income_input.filing_status

    net_profit = max(
        ZERO,
        income_input.annual_revenue - income_input.expenses - income_input.home_office_deduction,
    )

    se_result = calculate_self_employment_tax(
        SelfEmploymentInput(net_earnings=net_profit, filing_status=status),
        config,
    )
    half_se_tax = se_result.deductible_portion

    agi = (
        net_profit
        - half_se_tax
        - income_input.sep_ira_contribution
        - income_input.health_insurance
    )
    standard_deduction = config.standard_deduction[status]
    taxable_income = max(ZERO, agi - standard_deduction)

    federal = evaluate_brackets(config.federal_brackets[status], ZERO, taxable_income)
    total_taxes = federal.tax + se_result.total_self_employment_tax
    take_home = net_profit - total_taxes - income_input.sep_ira_contribution

    effective_rate = total_taxes / net_profit * HUNDRED if net_profit > ZERO else ZERO
    sep_ira_max = min(
        max(ZERO, (net_profit - half_se_tax) * config.sep_ira_rate),
        config.sep_ira_limit,
    )

    return SelfEmployedIncomeResult(
        net_profit=net_profit,
        self_employment=se_result,
        adjusted_gross_income=agi,
        standard_deduction=standard_deduction,
        taxable_income=taxable_income,
        federal_tax=federal.tax,
        total_taxes=total_taxes,
        take_home=take_home,
        quarterly_payment=total_taxes / 4,
        effective_rate=effective_rate,
        marginal_rate=as_whole_percent(federal.marginal_rate),
        sep_ira_max=sep_ira_max,
    )
