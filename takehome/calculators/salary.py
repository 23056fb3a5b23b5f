"""Forward salary calculation: gross income to itemized take-home pay.

Order of operations:

1. Gross income = salary + bonus (a bonus is ordinary income).
2. Pre-tax reductions (401(k), HSA) give adjusted gross income.
3. Federal taxable income = AGI - standard deduction, floored at 0.
4. Federal tax from the filing-status brackets.
5. State (and optional local) tax from the state rule applied to AGI.
6. Social Security and Medicare on GROSS wages: pre-tax deferrals reduce
   income tax, not FICA.
7. Take-home = gross - pre-tax reductions - all taxes.

Yearly figures are authoritative; every other cadence is the yearly figure
divided by a fixed number of periods.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from decimal import Decimal

from takehome.calculators.models import SalaryInput
from takehome.calculators.payroll import calculate_payroll_tax
from takehome.core.logging import get_logger
from takehome.tax.brackets import as_whole_percent, evaluate_brackets
from takehome.tax.states import calculate_state_tax, get_state_name
from takehome.tax.year_config import FilingStatus, TaxYearConfig, resolve_config

logger = get_logger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")

MONTHS_PER_YEAR = 12
BIWEEKLY_PERIODS_PER_YEAR = 26
WEEKS_PER_YEAR = 52
WORKING_DAYS_PER_YEAR = 260
WORKING_HOURS_PER_YEAR = 2080

# Percentages are not amounts and are carried through unscaled.
_UNSCALED_FIELDS = frozenset({"effective_tax_rate", "marginal_tax_rate"})


@dataclass(frozen=True)
class TaxBreakdown:
    """Itemized taxes and take-home pay for one period.

    Attributes:
        gross_income: Salary plus bonus.
        adjusted_gross_income: Gross income after pre-tax reductions.
        standard_deduction: Federal standard deduction.
        taxable_income: Federal taxable income.
        federal_tax: Federal income tax.
        state_tax: State income tax.
        local_tax: Local income tax (0 unless requested).
        social_security: Employee Social Security.
        medicare: Employee Medicare at the base rate.
        additional_medicare: Additional Medicare surtax.
        retirement_401k: Pre-tax 401(k) contribution.
        hsa_contribution: Pre-tax HSA contribution.
        total_federal_deductions: Federal tax plus FICA.
        total_state_deductions: State plus local tax.
        total_tax: All taxes.
        total_deductions: All taxes plus pre-tax contributions.
        take_home_pay: Gross income less total deductions.
        effective_tax_rate: Total tax as a percent of gross income.
        marginal_tax_rate: Federal bracket rate of the last dollar, whole percent.
    """

    gross_income: Decimal
    adjusted_gross_income: Decimal
    standard_deduction: Decimal
    taxable_income: Decimal
    federal_tax: Decimal
    state_tax: Decimal
    local_tax: Decimal
    social_security: Decimal
    medicare: Decimal
    additional_medicare: Decimal
    retirement_401k: Decimal
    hsa_contribution: Decimal
    total_federal_deductions: Decimal
    total_state_deductions: Decimal
    total_tax: Decimal
    total_deductions: Decimal
    take_home_pay: Decimal
    effective_tax_rate: Decimal
    marginal_tax_rate: Decimal

    def scaled(self, periods: int) -> TaxBreakdown:
        """Per-period view: every amount divided by ``periods``."""
        divisor = Decimal(periods)
        changes = {
            f.name: getattr(self, f.name) / divisor
            for f in fields(self)
            if f.name not in _UNSCALED_FIELDS
        }
        return replace(self, **changes)


@dataclass(frozen=True)
class SalaryResult:
    """Breakdown at every cadence plus the inputs that shaped it."""

    yearly: TaxBreakdown
    monthly: TaxBreakdown
    biweekly: TaxBreakdown
    weekly: TaxBreakdown
    daily: TaxBreakdown
    hourly: TaxBreakdown
    tax_year: int
    filing_status: FilingStatus
    state: str
    state_name: str


def _warn_over_limits(salary_input: SalaryInput, config: TaxYearConfig) -> None:
    """Log contributions above the statutory limits; they are still applied."""
    limit_401k = config.retirement_401k_employee_limit
    if salary_input.age_50_or_over:
        limit_401k += config.retirement_401k_catch_up_limit
    if config.retirement_401k_employee_limit > ZERO and salary_input.retirement_401k > limit_401k:
        logger.warning(
            "retirement_401k_over_limit",
            contribution=str(salary_input.retirement_401k),
            limit=str(limit_401k),
            age_50_or_over=salary_input.age_50_or_over,
            tax_year=config.tax_year,
        )

    if salary_input.hsa_coverage == "family":
        limit_hsa = config.hsa_family_limit
    else:
        limit_hsa = config.hsa_self_only_limit
    if limit_hsa > ZERO and salary_input.hsa_contribution > limit_hsa:
        logger.warning(
            "hsa_contribution_over_limit",
            contribution=str(salary_input.hsa_contribution),
            limit=str(limit_hsa),
            coverage=salary_input.hsa_coverage,
            tax_year=config.tax_year,
        )


def calculate_salary(
    salary_input: SalaryInput,
    config: TaxYearConfig | None = None,
) -> SalaryResult:
    """Calculate take-home pay for a gross salary.

    Args:
        salary_input: Validated salary input.
        config: Tax year configuration; defaults to the input's year.

    Returns:
        SalaryResult with yearly, monthly, biweekly, weekly, daily and hourly
        breakdowns.

    Example:
        >>> result = calculate_salary(SalaryInput(gross_salary=Decimal("75000"), state="TX"))
        >>> result.yearly.take_home_pay
        Decimal('61148.5000')
    """
    config = resolve_config(config, salary_input.tax_year)
    _warn_over_limits(salary_input, config)

    status = salary_input.filing_status
    gross_income = salary_input.gross_salary + salary_input.bonus
    retirement_401k = salary_input.retirement_401k
    hsa_contribution = salary_input.hsa_contribution
    pre_tax_reductions = retirement_401k + hsa_contribution

    adjusted_gross_income = max(ZERO, gross_income - pre_tax_reductions)
    standard_deduction = config.standard_deduction[status]
    taxable_income = max(ZERO, adjusted_gross_income - standard_deduction)

    federal = evaluate_brackets(config.federal_brackets[status], ZERO, taxable_income)

    state_rule = config.state_rule(salary_input.state)
    if state_rule is None:
        logger.warning("unknown_state_no_income_tax", state=salary_input.state)
        state_tax = local_tax = ZERO
    else:
        state_amount = calculate_state_tax(
            state_rule, adjusted_gross_income, salary_input.include_local_tax
        )
        state_tax = state_amount.state_tax
        local_tax = state_amount.local_tax

    payroll = calculate_payroll_tax(gross_income, ZERO, status, config)

    total_federal_deductions = federal.tax + payroll.total
    total_state_deductions = state_tax + local_tax
    total_tax = total_federal_deductions + total_state_deductions
    total_deductions = total_tax + pre_tax_reductions
    take_home_pay = gross_income - total_deductions

    effective_tax_rate = total_tax / gross_income * HUNDRED if gross_income > ZERO else ZERO

    yearly = TaxBreakdown(
        gross_income=gross_income,
        adjusted_gross_income=adjusted_gross_income,
        standard_deduction=standard_deduction,
        taxable_income=taxable_income,
        federal_tax=federal.tax,
        state_tax=state_tax,
        local_tax=local_tax,
        social_security=payroll.social_security,
        medicare=payroll.medicare,
        additional_medicare=payroll.additional_medicare,
        retirement_401k=retirement_401k,
        hsa_contribution=hsa_contribution,
        total_federal_deductions=total_federal_deductions,
        total_state_deductions=total_state_deductions,
        total_tax=total_tax,
        total_deductions=total_deductions,
        take_home_pay=take_home_pay,
        effective_tax_rate=effective_tax_rate,
        marginal_tax_rate=as_whole_percent(federal.marginal_rate),
    )

    return SalaryResult(
        yearly=yearly,
        monthly=yearly.scaled(MONTHS_PER_YEAR),
        biweekly=yearly.scaled(BIWEEKLY_PERIODS_PER_YEAR),
        weekly=yearly.scaled(WEEKS_PER_YEAR),
        daily=yearly.scaled(WORKING_DAYS_PER_YEAR),
        hourly=yearly.scaled(WORKING_HOURS_PER_YEAR),
        tax_year=config.tax_year,
        filing_status=status,
        state=salary_input.state,
        state_name=get_state_name(salary_input.state, config.states),
    )


def take_home_pay(
    gross_salary: Decimal,
    filing_status: FilingStatus,
    state: str,
    config: TaxYearConfig,
) -> Decimal:
    """Yearly take-home for a plain salary; the function the solver inverts."""
    salary_input = SalaryInput(gross_salary=gross_salary, filing_status=filing_status, state=state)
    return calculate_salary(salary_input, config).yearly.take_home_pay


@dataclass(frozen=True)
class MarginalDiff:
    """Two forward runs: without and with an extra slice of ordinary income."""

    base: SalaryResult
    combined: SalaryResult

    def delta(self, field_name: str) -> Decimal:
        """Yearly increase in one ``TaxBreakdown`` field caused by the extra income."""
        return getattr(self.combined.yearly, field_name) - getattr(self.base.yearly, field_name)


def marginal_diff(
    base_input: SalaryInput,
    extra_income: Decimal,
    config: TaxYearConfig | None = None,
) -> MarginalDiff:
    """Tax an extra slice of ordinary income by running the engine twice.

    The slice (a bonus, a short-term gain, ordinary dividends) is added to
    the base salary and both runs are returned, so the tax on the slice is
    the difference of any component. This reuses the forward engine's exact
    bracket-crossing behavior instead of re-deriving it.

    Args:
        base_input: Income the slice stacks on.
        extra_income: The slice (>= 0).
        config: Tax year configuration; defaults to the input's year.

    Returns:
        MarginalDiff holding both results.

    Example:
        >>> diff = marginal_diff(SalaryInput(gross_salary=Decimal("100000")), Decimal("10000"))
        >>> diff.delta("federal_tax")
        Decimal('2200.00')
    """
    if extra_income < ZERO:
        raise ValueError(f"extra_income must be >= 0, got {extra_income}")
    config = resolve_config(config, base_input.tax_year)
    combined_input = base_input.model_copy(
        update={"gross_salary": base_input.gross_salary + extra_income}
    )
    return MarginalDiff(
        base=calculate_salary(base_input, config),
        combined=calculate_salary(combined_input, config),
    )
