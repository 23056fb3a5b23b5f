"""Tax on capital gains and dividends.

Preferential income (long-term gains, qualified dividends) is taxed with the
0%/15%/20% schedule, stacked on top of the taxpayer's other income so a
slice that straddles a threshold is split correctly. Ordinary investment
income (short-term gains, ordinary dividends) is taxed at ordinary rates
with a marginal diff of two forward salary runs. The Net Investment Income
Tax is a flat surtax added on top and never interacts with the brackets.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from takehome.calculators.models import CapitalGainsInput, DividendInput, SalaryInput
from takehome.calculators.salary import marginal_diff
from takehome.core.logging import get_logger
from takehome.tax.brackets import as_whole_percent, evaluate_brackets
from takehome.tax.year_config import FilingStatus, TaxYearConfig, resolve_config

logger = get_logger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")

# Short-term gains only diff federal tax; a state without income tax keeps
# the two runs free of state effects.
_FEDERAL_ONLY_STATE = "TX"


@dataclass(frozen=True)
class CapitalGainsResult:
    """Tax owed on the sale of an asset.

    Attributes:
        gross_gain: Sale price less purchase price and costs (may be negative).
        exclusion_amount: Primary residence exclusion applied.
        taxable_gain: Gain after the exclusion, floored at 0.
        federal_tax: Federal income tax on the gain.
        niit_tax: Net Investment Income Tax on the gain.
        total_tax: Federal tax plus NIIT.
        net_proceeds: Gross gain less total tax.
        effective_rate: Total tax as a percent of taxable gain.
        marginal_rate: Rate on the last dollar of gain, whole percent.
        is_short_term: Whether the gain was taxed at ordinary rates.
        tax_year: Year of the configuration used.
    """

    gross_gain: Decimal
    exclusion_amount: Decimal
    taxable_gain: Decimal
    federal_tax: Decimal
    niit_tax: Decimal
    total_tax: Decimal
    net_proceeds: Decimal
    effective_rate: Decimal
    marginal_rate: Decimal
    is_short_term: bool
    tax_year: int


@dataclass(frozen=True)
class DividendResult:
    """Tax owed on a year's dividends."""

    qualified_dividends: Decimal
    ordinary_dividends: Decimal
    qualified_dividend_tax: Decimal
    ordinary_dividend_tax: Decimal
    niit_tax: Decimal
    total_dividend_tax: Decimal
    net_dividend: Decimal
    effective_dividend_tax_rate: Decimal
    total_income: Decimal
    combined_take_home: Decimal
    qualified_rate: Decimal
    tax_year: int


def calculate_niit(
    investment_income: Decimal,
    total_income: Decimal,
    filing_status: FilingStatus,
    config: TaxYearConfig,
) -> Decimal:
    """Net Investment Income Tax.

    3.8% of the smaller of the investment income and the amount by which
    total income exceeds the filing-status threshold; 0 at or below it.

    Example:
        >>> calculate_niit(Decimal("200000"), Decimal("300000"), FilingStatus.SINGLE,
        ...                TAX_YEAR_2025)
        Decimal('3800.000')
    """
    threshold = config.niit_threshold[filing_status]
    if total_income <= threshold:
        return ZERO
    return min(investment_income, total_income - threshold) * config.niit_rate


def calculate_capital_gains_tax(
    gains_input: CapitalGainsInput,
    config: TaxYearConfig | None = None,
) -> CapitalGainsResult:
    """Calculate federal tax and NIIT on the sale of an asset.

    Args:
        gains_input: Sale details, other income and holding period.
        config: Tax year configuration; defaults to the input's year.

    Returns:
        CapitalGainsResult. A loss or fully excluded gain owes no tax.
    """
    config = resolve_config(config, gains_input.tax_year)
    status = gains_input.filing_status
    is_short_term = gains_input.holding_period == "short"

    gross_gain = gains_input.sale_price - gains_input.purchase_price - gains_input.costs

    exclusion_amount = ZERO
    taxable_gain = gross_gain
    if gains_input.is_primary_residence and gains_input.asset_type == "property" and gross_gain > ZERO:
        exclusion_amount = min(gross_gain, config.primary_residence_exclusion[status])
        taxable_gain = max(ZERO, gross_gain - exclusion_amount)

    if taxable_gain <= ZERO:
        return CapitalGainsResult(
            gross_gain=gross_gain,
            exclusion_amount=exclusion_amount,
            taxable_gain=ZERO,
            federal_tax=ZERO,
            niit_tax=ZERO,
            total_tax=ZERO,
            net_proceeds=gross_gain,
            effective_rate=ZERO,
            marginal_rate=ZERO,
            is_short_term=is_short_term,
            tax_year=config.tax_year,
        )

    if is_short_term:
        diff = marginal_diff(
            SalaryInput(
                gross_salary=gains_input.annual_income,
                filing_status=status,
                state=_FEDERAL_ONLY_STATE,
            ),
            taxable_gain,
            config,
        )
        federal_tax = diff.delta("federal_tax")
        marginal_rate = diff.combined.yearly.marginal_tax_rate
    else:
        evaluation = evaluate_brackets(
            config.ltcg_brackets[status], gains_input.annual_income, taxable_gain
        )
        federal_tax = evaluation.tax
        marginal_rate = as_whole_percent(evaluation.marginal_rate)

    niit_tax = calculate_niit(
        taxable_gain, gains_input.annual_income + taxable_gain, status, config
    )
    total_tax = federal_tax + niit_tax

    logger.debug(
        "capital_gains_calculated",
        taxable_gain=str(taxable_gain),
        total_tax=str(total_tax),
        is_short_term=is_short_term,
    )

    return CapitalGainsResult(
        gross_gain=gross_gain,
        exclusion_amount=exclusion_amount,
        taxable_gain=taxable_gain,
        federal_tax=federal_tax,
        niit_tax=niit_tax,
        total_tax=total_tax,
        net_proceeds=gross_gain - total_tax,
        effective_rate=total_tax / taxable_gain * HUNDRED,
        marginal_rate=marginal_rate,
        is_short_term=is_short_term,
        tax_year=config.tax_year,
    )


def calculate_dividend_tax(
    dividend_input: DividendInput,
    config: TaxYearConfig | None = None,
) -> DividendResult:
    """Calculate tax on qualified and ordinary dividends.

    Qualified dividends stack on other income in the preferential schedule.
    Ordinary dividends are diffed through the forward engine in the
    taxpayer's state, but only the federal component is attributed to the
    dividends. NIIT applies to all dividends.

    Args:
        dividend_input: Other income, dividends, filing status and state.
        config: Tax year configuration; defaults to the input's year.

    Returns:
        DividendResult, including take-home pay from other income plus the
        net dividend.
    """
    config = resolve_config(config, dividend_input.tax_year)
    status = dividend_input.filing_status
    other_income = dividend_input.other_income
    qualified = dividend_input.qualified_dividends
    ordinary = dividend_input.ordinary_dividends

    total_dividends = qualified + ordinary
    total_income = other_income + total_dividends

    qualified_evaluation = evaluate_brackets(config.ltcg_brackets[status], other_income, qualified)

    diff = marginal_diff(
        SalaryInput(gross_salary=other_income, filing_status=status, state=dividend_input.state),
        ordinary,
        config,
    )
    ordinary_tax = diff.delta("federal_tax")

    niit_tax = calculate_niit(total_dividends, total_income, status, config)
    total_tax = qualified_evaluation.tax + ordinary_tax + niit_tax
    net_dividend = total_dividends - total_tax

    effective_rate = total_tax / total_dividends * HUNDRED if total_dividends > ZERO else ZERO

    return DividendResult(
        qualified_dividends=qualified,
        ordinary_dividends=ordinary,
        qualified_dividend_tax=qualified_evaluation.tax,
        ordinary_dividend_tax=ordinary_tax,
        niit_tax=niit_tax,
        total_dividend_tax=total_tax,
        net_dividend=net_dividend,
        effective_dividend_tax_rate=effective_rate,
        total_income=total_income,
        combined_take_home=diff.base.yearly.take_home_pay + net_dividend,
        qualified_rate=as_whole_percent(qualified_evaluation.marginal_rate),
        tax_year=config.tax_year,
    )
