"""Salary and tax calculators.

Forward engine:
- calculate_salary: Gross salary to itemized take-home at every pay cadence
- marginal_diff: Two forward runs with and without an extra income slice

Payroll and self-employment:
- calculate_payroll_tax: Employee Social Security and Medicare on a wage slice
- calculate_employer_payroll_tax: Employer Social Security and Medicare
- calculate_self_employment_tax: SE tax on net earnings
- calculate_self_employed_income: Sole-proprietor federal picture

Derived calculators:
- calculate_employer_cost: Total cost of employment
- calculate_capital_gains_tax / calculate_dividend_tax / calculate_niit
- calculate_bonus_tax: Supplemental withholding versus actual liability
- calculate_multiple_jobs: Per-employer withholding versus tax on combined income
- find_gross_for_net: Bisection inverse of the forward engine

Inputs:
- Pydantic models validated at the boundary; build_input wraps validation
  failures in InvalidInputError
"""

from takehome.calculators.bonus import (
    BonusTaxResult,
    calculate_bonus_tax,
    supplemental_federal_withholding,
)
from takehome.calculators.capital_gains import (
    CapitalGainsResult,
    DividendResult,
    calculate_capital_gains_tax,
    calculate_dividend_tax,
    calculate_niit,
)
from takehome.calculators.employer_cost import EmployerCostResult, calculate_employer_cost
from takehome.calculators.models import (
    BonusInput,
    CapitalGainsInput,
    DividendInput,
    EmployerCostInput,
    JobInput,
    MultipleJobsInput,
    InvalidInputError,
    NetToGrossInput,
    SalaryInput,
    SelfEmployedIncomeInput,
    SelfEmploymentInput,
    build_input,
)
from takehome.calculators.multiple_jobs import (
    JobWithholding,
    MultipleJobsResult,
    calculate_multiple_jobs,
)
from takehome.calculators.net_to_gross import find_gross_for_net
from takehome.calculators.payroll import (
    PayrollTaxResult,
    calculate_employer_payroll_tax,
    calculate_payroll_tax,
)
from takehome.calculators.salary import (
    MarginalDiff,
    SalaryResult,
    TaxBreakdown,
    calculate_salary,
    marginal_diff,
)
from takehome.calculators.self_employment import (
    SelfEmployedIncomeResult,
    SelfEmploymentResult,
    calculate_self_employed_income,
    calculate_self_employment_tax,
)

__all__ = [
    # Inputs
    "InvalidInputError",
    "build_input",
    "SalaryInput",
    "EmployerCostInput",
    "SelfEmploymentInput",
    "SelfEmployedIncomeInput",
    "CapitalGainsInput",
    "DividendInput",
    "BonusInput",
    "JobInput",
    "MultipleJobsInput",
    "NetToGrossInput",
    # Forward engine
    "TaxBreakdown",
    "SalaryResult",
    "MarginalDiff",
    "calculate_salary",
    "marginal_diff",
    # Payroll and self-employment
    "PayrollTaxResult",
    "calculate_payroll_tax",
    "calculate_employer_payroll_tax",
    "SelfEmploymentResult",
    "SelfEmployedIncomeResult",
    "calculate_self_employment_tax",
    "calculate_self_employed_income",
    # Derived calculators
    "EmployerCostResult",
    "calculate_employer_cost",
    "CapitalGainsResult",
    "DividendResult",
    "calculate_capital_gains_tax",
    "calculate_dividend_tax",
    "calculate_niit",
    "BonusTaxResult",
    "calculate_bonus_tax",
    "supplemental_federal_withholding",
    "JobWithholding",
    "MultipleJobsResult",
    "calculate_multiple_jobs",
    "find_gross_for_net",
]
