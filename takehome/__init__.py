"""US salary and tax computation engine.

Pure, deterministic calculators: a gross income plus a tax-year
configuration in, an itemized tax and take-home breakdown out.
"""

from takehome.calculators import (
    calculate_bonus_tax,
    calculate_capital_gains_tax,
    calculate_dividend_tax,
    calculate_employer_cost,
    calculate_multiple_jobs,
    calculate_salary,
    calculate_self_employed_income,
    calculate_self_employment_tax,
    find_gross_for_net,
)
from takehome.formatting import format_currency
from takehome.tax import current_tax_config, get_all_states, get_tax_year_config

__version__ = "0.1.0"

__all__ = [
    "calculate_salary",
    "calculate_employer_cost",
    "calculate_self_employment_tax",
    "calculate_self_employed_income",
    "calculate_capital_gains_tax",
    "calculate_dividend_tax",
    "calculate_bonus_tax",
    "calculate_multiple_jobs",
    "find_gross_for_net",
    "format_currency",
    "get_all_states",
    "current_tax_config",
    "get_tax_year_config",
]
