"""Several jobs in one year: per-employer withholding versus combined tax.

Each employer withholds as if its job were the only income: federal and
state tax on that salary alone, and FICA with its own Social Security wage
base. The taxpayer owes tax on the sum of the salaries, which lands in
higher brackets, while Social Security is capped once. The result shows the
federal and state underpayment and the excess Social Security that comes
back as a credit at filing time.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from takehome.calculators.models import MultipleJobsInput, SalaryInput
from takehome.calculators.payroll import calculate_payroll_tax
from takehome.calculators.salary import calculate_salary
from takehome.core.logging import calculation_ctx, get_logger, tax_year_ctx
from takehome.tax.year_config import FilingStatus, TaxYearConfig, resolve_config

logger = get_logger(__name__)

ZERO = Decimal("0")


@dataclass(frozen=True)
class JobWithholding:
    """What one employer withholds over the year."""

    name: str
    salary: Decimal
    federal_withholding: Decimal
    state_withholding: Decimal
    social_security_withholding: Decimal
    medicare_withholding: Decimal
    total_withholding: Decimal
    take_home: Decimal


@dataclass(frozen=True)
class MultipleJobsResult:
    """Withholding across all jobs reconciled with the combined liability.

    Attributes:
        jobs: Per-employer withholding, in input order.
        total_income: Sum of all salaries.
        total_withholding: Everything withheld by all employers.
        actual_total_tax: Federal, state and FICA owed on the combined income.
        federal_underpayment: Actual federal tax less federal withholding.
        state_underpayment: Actual state tax less state withholding.
        medicare_underpayment: Actual Medicare (with surtax) less withholding.
        excess_social_security: Social Security withheld above the single
            wage-base cap; refundable when filing.
        withholding_vs_actual: Positive means over-withheld (refund),
            negative means under-withheld (balance due).
        highest_paying_job: Name of the job with the largest salary.
    """

    jobs: tuple[JobWithholding, ...]
    total_income: Decimal
    total_federal_withholding: Decimal
    total_state_withholding: Decimal
    total_social_security_withholding: Decimal
    total_medicare_withholding: Decimal
    total_withholding: Decimal
    actual_federal_tax: Decimal
    actual_state_tax: Decimal
    actual_social_security: Decimal
    actual_medicare: Decimal
    actual_total_tax: Decimal
    federal_underpayment: Decimal
    state_underpayment: Decimal
    medicare_underpayment: Decimal
    excess_social_security: Decimal
    withholding_vs_actual: Decimal
    combined_take_home: Decimal
    highest_paying_job: str
    tax_year: int


def _job_withholding(
    name: str,
    salary: Decimal,
    jobs_input: MultipleJobsInput,
    config: TaxYearConfig,
) -> JobWithholding:
    alone = calculate_salary(
        SalaryInput(
            gross_salary=salary,
            filing_status=jobs_input.filing_status,
            state=jobs_input.state,
        ),
        config,
    ).yearly
    # Employers withhold the Medicare surtax above the single threshold
    # whatever the employee's filing status.
    payroll = calculate_payroll_tax(salary, ZERO, FilingStatus.SINGLE, config)
    medicare = payroll.medicare + payroll.additional_medicare
    total = alone.federal_tax + alone.state_tax + payroll.social_security + medicare
    return JobWithholding(
        name=name,
        salary=salary,
        federal_withholding=alone.federal_tax,
        state_withholding=alone.state_tax,
        social_security_withholding=payroll.social_security,
        medicare_withholding=medicare,
        total_withholding=total,
        take_home=salary - total,
    )


def calculate_multiple_jobs(
    jobs_input: MultipleJobsInput,
    config: TaxYearConfig | None = None,
) -> MultipleJobsResult:
    """Reconcile per-employer withholding with the tax on combined income.

    Args:
        jobs_input: Jobs, filing status and state.
        config: Tax year configuration; defaults to the input's year.

    Returns:
        MultipleJobsResult with per-job withholding and the reconciliation.
    """
    config = resolve_config(config, jobs_input.tax_year)
    token = calculation_ctx.set("multiple_jobs")
    year_token = tax_year_ctx.set(config.tax_year)
    try:
        jobs = tuple(
            _job_withholding(job.name, job.salary, jobs_input, config)
            for job in jobs_input.jobs
        )
        total_income = sum((job.salary for job in jobs), ZERO)

        combined = calculate_salary(
            SalaryInput(
                gross_salary=total_income,
                filing_status=jobs_input.filing_status,
                state=jobs_input.state,
            ),
            config,
        ).yearly
        actual_medicare = combined.medicare + combined.additional_medicare

        federal_withheld = sum((job.federal_withholding for job in jobs), ZERO)
        state_withheld = sum((job.state_withholding for job in jobs), ZERO)
        social_security_withheld = sum((job.social_security_withholding for job in jobs), ZERO)
        medicare_withheld = sum((job.medicare_withholding for job in jobs), ZERO)
        total_withheld = sum((job.total_withholding for job in jobs), ZERO)

        excess_social_security = max(ZERO, social_security_withheld - combined.social_security)
        withholding_vs_actual = total_withheld - combined.total_tax
        highest = max(jobs_input.jobs, key=lambda job: job.salary)

        if withholding_vs_actual < ZERO:
            logger.info(
                "multiple_jobs_under_withheld",
                jobs=len(jobs),
                total_income=str(total_income),
                balance_due=str(-withholding_vs_actual),
            )

        return MultipleJobsResult(
            jobs=jobs,
            total_income=total_income,
            total_federal_withholding=federal_withheld,
            total_state_withholding=state_withheld,
            total_social_security_withholding=social_security_withheld,
            total_medicare_withholding=medicare_withheld,
            total_withholding=total_withheld,
            actual_federal_tax=combined.federal_tax,
            actual_state_tax=combined.state_tax,
            actual_social_security=combined.social_security,
            actual_medicare=actual_medicare,
            actual_total_tax=combined.total_tax,
            federal_underpayment=combined.federal_tax - federal_withheld,
            state_underpayment=combined.state_tax - state_withheld,
            medicare_underpayment=actual_medicare - medicare_withheld,
            excess_social_security=excess_social_security,
            withholding_vs_actual=withholding_vs_actual,
            combined_take_home=combined.take_home_pay,
            highest_paying_job=highest.name,
            tax_year=config.tax_year,
        )
    finally:
        tax_year_ctx.reset(year_token)
        calculation_ctx.reset(token)
