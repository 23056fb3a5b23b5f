"""Tax schedules, year-specific configurations and bracket evaluation."""

from takehome.tax.brackets import (
    Bracket,
    BracketEvaluation,
    BracketRow,
    bracket_breakdown,
    describe_brackets,
    evaluate_brackets,
)
from takehome.tax.states import (
    STATE_TAX_RULES,
    StateTaxRule,
    calculate_state_tax,
    get_all_states,
    get_state_name,
    get_state_rule,
    get_states_with_flat_tax,
    get_states_with_no_income_tax,
)
from takehome.tax.year_config import (
    AVAILABLE_TAX_YEARS,
    TAX_YEAR_2024,
    TAX_YEAR_2025,
    TAX_YEAR_CONFIGS,
    FilingStatus,
    TaxYearConfig,
    current_tax_config,
    get_tax_year_config,
)

__all__ = [
    # Year configuration
    "FilingStatus",
    "TaxYearConfig",
    "TAX_YEAR_2024",
    "TAX_YEAR_2025",
    "TAX_YEAR_CONFIGS",
    "AVAILABLE_TAX_YEARS",
    "current_tax_config",
    "get_tax_year_config",
    # Brackets
    "Bracket",
    "BracketEvaluation",
    "BracketRow",
    "evaluate_brackets",
    "bracket_breakdown",
    "describe_brackets",
    # States
    "STATE_TAX_RULES",
    "StateTaxRule",
    "calculate_state_tax",
    "get_all_states",
    "get_state_name",
    "get_state_rule",
    "get_states_with_flat_tax",
    "get_states_with_no_income_tax",
]
