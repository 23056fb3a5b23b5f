"""Bonus (supplemental wage) tax: withholding versus actual liability.

Employers withhold federal tax on a bonus at the flat supplemental rate
(22%, and 37% on the part above $1,000,000), not at the employee's marginal
rate. What is actually owed at filing time is the marginal diff of the
forward engine with and without the bonus. The gap between the two is the
refund (positive) or balance due (negative) the bonus creates.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from takehome.calculators.models import BonusInput, SalaryInput
from takehome.calculators.payroll import calculate_payroll_tax
from takehome.calculators.salary import marginal_diff
from takehome.core.logging import calculation_ctx, get_logger, tax_year_ctx
from takehome.tax.year_config import TaxYearConfig, resolve_config

logger = get_logger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")


@dataclass(frozen=True)
class BonusTaxResult:
    """Withholding and actual tax on a bonus.

    Attributes:
        bonus: Bonus amount.
        federal_withholding: Flat supplemental federal withholding.
        state_withholding: State withholding, estimated as the actual state tax.
        social_security_withholding: Social Security on the bonus.
        medicare_withholding: Medicare (including surtax) on the bonus.
        total_withholding: Sum of the withholding components.
        net_bonus_withholding: Bonus less total withholding (the paycheck).
        actual_federal_tax: Federal income tax the bonus adds.
        actual_state_tax: State income tax the bonus adds.
        actual_social_security: Social Security the bonus adds.
        actual_medicare: Medicare (including surtax) the bonus adds.
        actual_total_tax: Sum of the actual components.
        net_bonus_actual: Bonus less actual tax.
        withholding_vs_actual: Positive means over-withheld (refund),
            negative means under-withheld (balance due).
        effective_bonus_tax_rate: Actual tax as a percent of the bonus.
        marginal_rate: Federal marginal rate with the bonus, whole percent.
        tax_year: Year of the configuration used.
    """

    bonus: Decimal
    federal_withholding: Decimal
    state_withholding: Decimal
    social_security_withholding: Decimal
    medicare_withholding: Decimal
    total_withholding: Decimal
    net_bonus_withholding: Decimal
    actual_federal_tax: Decimal
    actual_state_tax: Decimal
    actual_social_security: Decimal
    actual_medicare: Decimal
    actual_total_tax: Decimal
    net_bonus_actual: Decimal
    withholding_vs_actual: Decimal
    effective_bonus_tax_rate: Decimal
    marginal_rate: Decimal
    tax_year: int


def supplemental_federal_withholding(bonus: Decimal, config: TaxYearConfig) -> Decimal:
    """Flat federal withholding on supplemental wages, split at the high tier.

    Example:
        >>> supplemental_federal_withholding(Decimal("2000000"), TAX_YEAR_2025)
        Decimal('590000.00')
    """
    threshold = config.supplemental_high_threshold
    under_threshold = min(bonus, threshold)
    over_threshold = max(ZERO, bonus - threshold)
    return (
        under_threshold * config.supplemental_withholding_rate
        + over_threshold * config.supplemental_withholding_rate_high
    )


def calculate_bonus_tax(
    bonus_input: BonusInput,
    config: TaxYearConfig | None = None,
) -> BonusTaxResult:
    """Compare bonus withholding with the tax the bonus actually adds.

    Args:
        bonus_input: Base salary, bonus, filing status, state and 401(k).
        config: Tax year configuration; defaults to the input's year.

    Returns:
        BonusTaxResult with both views and their reconciliation.
    """
    config = resolve_config(config, bonus_input.tax_year)
    token = calculation_ctx.set("bonus")
    year_token = tax_year_ctx.set(config.tax_year)
    try:
        bonus = bonus_input.bonus
        status = bonus_input.filing_status

        diff = marginal_diff(
            SalaryInput(
                gross_salary=bonus_input.base_salary,
                filing_status=status,
                state=bonus_input.state,
                retirement_401k=bonus_input.retirement_401k,
            ),
            bonus,
            config,
        )
        actual_federal = diff.delta("federal_tax")
        actual_state = diff.delta("state_tax")
        actual_social_security = diff.delta("social_security")
        actual_medicare = diff.delta("medicare") + diff.delta("additional_medicare")
        actual_total = actual_federal + actual_state + actual_social_security + actual_medicare

        federal_withholding = supplemental_federal_withholding(bonus, config)
        payroll = calculate_payroll_tax(bonus, bonus_input.base_salary, status, config)
        medicare_withholding = payroll.medicare + payroll.additional_medicare
        # Employers have no flat state rate to apply; the actual state tax stands in.
        state_withholding = actual_state
        total_withholding = (
            federal_withholding
            + state_withholding
            + payroll.social_security
            + medicare_withholding
        )

        withholding_vs_actual = total_withholding - actual_total
        logger.debug(
            "bonus_tax_reconciled",
            bonus=str(bonus),
            total_withholding=str(total_withholding),
            actual_total_tax=str(actual_total),
            withholding_vs_actual=str(withholding_vs_actual),
        )

        return BonusTaxResult(
            bonus=bonus,
            federal_withholding=federal_withholding,
            state_withholding=state_withholding,
            social_security_withholding=payroll.social_security,
            medicare_withholding=medicare_withholding,
            total_withholding=total_withholding,
            net_bonus_withholding=bonus - total_withholding,
            actual_federal_tax=actual_federal,
            actual_state_tax=actual_state,
            actual_social_security=actual_social_security,
            actual_medicare=actual_medicare,
            actual_total_tax=actual_total,
            net_bonus_actual=bonus - actual_total,
            withholding_vs_actual=withholding_vs_actual,
            effective_bonus_tax_rate=actual_total / bonus * HUNDRED if bonus > ZERO else ZERO,
            marginal_rate=diff.combined.yearly.marginal_tax_rate,
            tax_year=config.tax_year,
        )
    finally:
        tax_year_ctx.reset(year_token)
        calculation_ctx.reset(token)
