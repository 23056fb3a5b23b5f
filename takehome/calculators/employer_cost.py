"""Total cost of employing someone at a given salary.

Employer cost = salary + 401(k) match + employer Social Security + employer
Medicare + FUTA + SUTA. SUTA uses a typical new-employer rate unless the
caller supplies the employer's assigned rate; real SUTA rates are
experience-rated per state, so the default is an approximation.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from takehome.calculators.models import EmployerCostInput
from takehome.calculators.payroll import calculate_employer_payroll_tax
from takehome.tax.year_config import TaxYearConfig, resolve_config

ZERO = Decimal("0")
HUNDRED = Decimal("100")

MONTHS_PER_YEAR = Decimal("12")
WORKING_DAYS_PER_YEAR = Decimal("260")


@dataclass(frozen=True)
class EmployerCostResult:
    """Employer-side costs of a salary.

    Attributes:
        gross_salary: Annual gross salary.
        employer_social_security: Employer Social Security.
        employer_medicare: Employer Medicare (no surtax).
        employer_futa: Federal unemployment tax.
        employer_suta: State unemployment tax.
        employer_401k_match: Employer 401(k) match in dollars.
        total_employer_taxes: Social Security + Medicare + FUTA + SUTA.
        total_cost: Salary, match and employer taxes.
        cost_per_month: Total cost / 12.
        cost_per_day: Total cost / 260 working days.
        overhead_percent: Cost above salary as a percent of salary.
        tax_year: Year of the configuration used.
    """

    gross_salary: Decimal
    employer_social_security: Decimal
    employer_medicare: Decimal
    employer_futa: Decimal
    employer_suta: Decimal
    employer_401k_match: Decimal
    total_employer_taxes: Decimal
    total_cost: Decimal
    cost_per_month: Decimal
    cost_per_day: Decimal
    overhead_percent: Decimal
    tax_year: int


def calculate_employer_cost(
    cost_input: EmployerCostInput,
    config: TaxYearConfig | None = None,
) -> EmployerCostResult:
    """Calculate what a salary costs the employer.

    Args:
        cost_input: Salary, state, match percent and optional SUTA rate.
        config: Tax year configuration; defaults to the input's year.

    Returns:
        EmployerCostResult.

    Example:
        >>> result = calculate_employer_cost(EmployerCostInput(gross_salary=Decimal("100000")))
        >>> result.employer_futa
        Decimal('42.000')
    """
    config = resolve_config(config, cost_input.tax_year)
    gross_salary = cost_input.gross_salary

    payroll = calculate_employer_payroll_tax(gross_salary, config)

    futa = min(gross_salary, config.futa_wage_base) * config.futa_rate
    suta_rate = cost_input.suta_rate if cost_input.suta_rate is not None else config.suta_default_rate
    suta = min(gross_salary, config.suta_wage_base) * suta_rate

    match = gross_salary * cost_input.employer_401k_match / HUNDRED

    total_employer_taxes = payroll.social_security + payroll.medicare + futa + suta
    total_cost = gross_salary + match + total_employer_taxes
    overhead_percent = (
        (total_cost - gross_salary) / gross_salary * HUNDRED if gross_salary > ZERO else ZERO
    )

    return EmployerCostResult(
        gross_salary=gross_salary,
        employer_social_security=payroll.social_security,
        employer_medicare=payroll.medicare,
        employer_futa=futa,
        employer_suta=suta,
        employer_401k_match=match,
        total_employer_taxes=total_employer_taxes,
        total_cost=total_cost,
        cost_per_month=total_cost / MONTHS_PER_YEAR,
        cost_per_day=total_cost / WORKING_DAYS_PER_YEAR,
        overhead_percent=overhead_percent,
        tax_year=config.tax_year,
    )
