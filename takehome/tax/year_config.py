"""Tax year-specific constants, schedules and thresholds.

This module centralizes tax year-specific values like bracket schedules,
wage bases, deduction amounts and rate thresholds so no calculator hardcodes
them. Configurations are frozen and their mappings are read-only, so one
config can be shared freely and several years can coexist.

Example:
    >>> from takehome.tax.year_config import get_tax_year_config
    >>> config = get_tax_year_config(2025)
    >>> print(f"SS wage base: {config.ss_wage_base}")
    SS wage base: 176100
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from takehome.core.config import settings
from takehome.tax.brackets import Schedule, schedule, validate_schedule
from takehome.tax.states import STATE_TAX_RULES, StateTaxRule, get_state_rule


class FilingStatus(str, Enum):
    """Federal filing status."""

    SINGLE = "single"
    MARRIED_JOINTLY = "married_jointly"
    MARRIED_SEPARATELY = "married_separately"
    HEAD_OF_HOUSEHOLD = "head_of_household"


def by_status(
    single: str,
    married_jointly: str,
    married_separately: str,
    head_of_household: str,
) -> Mapping[FilingStatus, Decimal]:
    """Read-only per-filing-status amounts."""
    return MappingProxyType(
        {
            FilingStatus.SINGLE: Decimal(single),
            FilingStatus.MARRIED_JOINTLY: Decimal(married_jointly),
            FilingStatus.MARRIED_SEPARATELY: Decimal(married_separately),
            FilingStatus.HEAD_OF_HOUSEHOLD: Decimal(head_of_household),
        }
    )


def _schedules(**by_name: Schedule) -> Mapping[FilingStatus, Schedule]:
    return MappingProxyType({FilingStatus(name): value for name, value in by_name.items()})


# Preferential rates for long-term gains and qualified dividends. The same
# table is used for every bundled year.
LTCG_BRACKETS: Mapping[FilingStatus, Schedule] = _schedules(
    single=schedule(("47025", "0"), ("518900", "0.15"), (None, "0.20")),
    married_jointly=schedule(("94050", "0"), ("583750", "0.15"), (None, "0.20")),
    married_separately=schedule(("47025", "0"), ("291850", "0.15"), (None, "0.20")),
    head_of_household=schedule(("63000", "0"), ("551350", "0.15"), (None, "0.20")),
)


@dataclass(frozen=True)
class TaxYearConfig:
    """Tax year-specific constants and thresholds.

    All monetary values are Decimal for precision in tax calculations.
    This dataclass is frozen and its mappings are read-only.

    Attributes:
        tax_year: The tax year these values apply to.
        label: Display label, e.g. "2025 Tax Year".
        federal_brackets: Ordinary income schedule per filing status.
        standard_deduction: Federal standard deduction per filing status.
        ss_wage_base: Social Security wage base limit.
        ss_rate: Social Security rate for each of employee and employer (6.2%).
        medicare_rate: Medicare rate for each of employee and employer (1.45%).
        additional_medicare_rate: Employee-only surtax above the threshold (0.9%).
        additional_medicare_threshold: Surtax threshold per filing status.
        ltcg_brackets: Long-term gain / qualified dividend schedule per status.
        states: State income tax rules by postal code.
    """

    tax_year: int
    label: str
    federal_brackets: Mapping[FilingStatus, Schedule]
    standard_deduction: Mapping[FilingStatus, Decimal]

    # Social Security / Medicare
    ss_wage_base: Decimal
    ss_rate: Decimal = Decimal("0.062")
    medicare_rate: Decimal = Decimal("0.0145")
    additional_medicare_rate: Decimal = Decimal("0.009")
    additional_medicare_threshold: Mapping[FilingStatus, Decimal] = field(
        default_factory=lambda: by_status("200000", "250000", "125000", "200000")
    )

    # Self-employment tax (combined employer + employee rates)
    se_ss_rate: Decimal = Decimal("0.124")  # 12.4% (6.2% x 2)
    se_medicare_rate: Decimal = Decimal("0.029")  # 2.9% (1.45% x 2)
    se_net_earnings_factor: Decimal = Decimal("0.9235")  # 92.35% of net SE income

    # Unemployment taxes (employer only)
    futa_rate: Decimal = Decimal("0.006")  # 6.0% less the 5.4% state credit
    futa_wage_base: Decimal = Decimal("7000")
    suta_default_rate: Decimal = Decimal("0.027")  # typical new-employer rate
    suta_wage_base: Decimal = Decimal("10000")

    # Investment income
    ltcg_brackets: Mapping[FilingStatus, Schedule] = field(default_factory=lambda: LTCG_BRACKETS)
    niit_rate: Decimal = Decimal("0.038")
    niit_threshold: Mapping[FilingStatus, Decimal] = field(
        default_factory=lambda: by_status("200000", "250000", "125000", "200000")
    )
    primary_residence_exclusion: Mapping[FilingStatus, Decimal] = field(
        default_factory=lambda: by_status("250000", "500000", "250000", "250000")
    )

    # Supplemental wage (bonus) withholding
    supplemental_withholding_rate: Decimal = Decimal("0.22")
    supplemental_withholding_rate_high: Decimal = Decimal("0.37")
    supplemental_high_threshold: Decimal = Decimal("1000000")

    # Retirement and HSA limits (informational; not enforced)
    retirement_401k_employee_limit: Decimal = Decimal("0")
    retirement_401k_catch_up_limit: Decimal = Decimal("7500")
    retirement_401k_total_limit: Decimal = Decimal("0")
    sep_ira_rate: Decimal = Decimal("0.25")
    sep_ira_limit: Decimal = Decimal("0")
    hsa_self_only_limit: Decimal = Decimal("0")
    hsa_family_limit: Decimal = Decimal("0")

    states: Mapping[str, StateTaxRule] = field(default_factory=lambda: STATE_TAX_RULES)

    def __post_init__(self) -> None:
        for status in FilingStatus:
            if status not in self.federal_brackets:
                raise ValueError(f"{self.tax_year}: missing federal brackets for {status.value}")
            if status not in self.standard_deduction:
                raise ValueError(
                    f"{self.tax_year}: missing standard deduction for {status.value}"
                )
            validate_schedule(
                self.federal_brackets[status], f"{self.tax_year} federal {status.value}"
            )
            validate_schedule(self.ltcg_brackets[status], f"{self.tax_year} LTCG {status.value}")

    @property
    def se_tax_deduction_rate(self) -> Decimal:
        """Deductible portion of SE tax (50%)."""
        return Decimal("0.5")

    def state_rule(self, code: str) -> StateTaxRule | None:
        """Rule for a state code, or None if the code is not in the table."""
        return get_state_rule(code, self.states)


# 2024 Configuration - IRS published values
TAX_YEAR_2024 = TaxYearConfig(
    tax_year=2024,
    label="2024 Tax Year",
    federal_brackets=_schedules(
        single=schedule(
            ("11600", "0.10"), ("47150", "0.12"), ("100525", "0.22"),
            ("191950", "0.24"), ("243725", "0.32"), ("609350", "0.35"),
            (None, "0.37"),
        ),
        married_jointly=schedule(
            ("23200", "0.10"), ("94300", "0.12"), ("201050", "0.22"),
            ("383900", "0.24"), ("487450", "0.32"), ("731200", "0.35"),
            (None, "0.37"),
        ),
        married_separately=schedule(
            ("11600", "0.10"), ("47150", "0.12"), ("100525", "0.22"),
            ("191950", "0.24"), ("243725", "0.32"), ("365600", "0.35"),
            (None, "0.37"),
        ),
        head_of_household=schedule(
            ("16550", "0.10"), ("63100", "0.12"), ("100500", "0.22"),
            ("191950", "0.24"), ("243700", "0.32"), ("609350", "0.35"),
            (None, "0.37"),
        ),
    ),
    standard_deduction=by_status("14600", "29200", "14600", "21900"),
    ss_wage_base=Decimal("168600"),
    retirement_401k_employee_limit=Decimal("23000"),
    retirement_401k_total_limit=Decimal("69000"),
    sep_ira_limit=Decimal("69000"),
    hsa_self_only_limit=Decimal("4150"),
    hsa_family_limit=Decimal("8300"),
)

# 2025 Configuration - IRS published values
TAX_YEAR_2025 = TaxYearConfig(
    tax_year=2025,
    label="2025 Tax Year",
    federal_brackets=_schedules(
        single=schedule(
            ("11925", "0.10"), ("48475", "0.12"), ("103350", "0.22"),
            ("197300", "0.24"), ("250500", "0.32"), ("626350", "0.35"),
            (None, "0.37"),
        ),
        married_jointly=schedule(
            ("23850", "0.10"), ("96950", "0.12"), ("206700", "0.22"),
            ("394600", "0.24"), ("501050", "0.32"), ("751600", "0.35"),
            (None, "0.37"),
        ),
        married_separately=schedule(
            ("11925", "0.10"), ("48475", "0.12"), ("103350", "0.22"),
            ("197300", "0.24"), ("250500", "0.32"), ("375800", "0.35"),
            (None, "0.37"),
        ),
        head_of_household=schedule(
            ("17000", "0.10"), ("64850", "0.12"), ("103350", "0.22"),
            ("197300", "0.24"), ("250500", "0.32"), ("626350", "0.35"),
            (None, "0.37"),
        ),
    ),
    standard_deduction=by_status("15000", "30000", "15000", "22500"),
    ss_wage_base=Decimal("176100"),
    retirement_401k_employee_limit=Decimal("23500"),
    retirement_401k_total_limit=Decimal("70000"),
    sep_ira_limit=Decimal("70000"),
    hsa_self_only_limit=Decimal("4300"),
    hsa_family_limit=Decimal("8550"),
)

# Registry of available tax year configurations
TAX_YEAR_CONFIGS: Mapping[int, TaxYearConfig] = MappingProxyType(
    {
        2024: TAX_YEAR_2024,
        2025: TAX_YEAR_2025,
    }
)

AVAILABLE_TAX_YEARS: tuple[int, ...] = tuple(sorted(TAX_YEAR_CONFIGS, reverse=True))


def get_tax_year_config(year: int) -> TaxYearConfig:
    """Get configuration for a specific tax year.

    Args:
        year: The tax year (e.g., 2025).

    Returns:
        TaxYearConfig for the specified year.

    Raises:
        ValueError: If no configuration exists for the requested year.

    Example:
        >>> config = get_tax_year_config(2024)
        >>> print(config.ss_wage_base)
        168600
    """
    if year not in TAX_YEAR_CONFIGS:
        available = sorted(TAX_YEAR_CONFIGS.keys())
        raise ValueError(
            f"No tax configuration for year {year}. Available years: {available}"
        )
    return TAX_YEAR_CONFIGS[year]


def current_tax_config() -> TaxYearConfig:
    """Configuration for the engine's default tax year."""
    return get_tax_year_config(settings.default_tax_year)


def resolve_config(config: TaxYearConfig | None, tax_year: int | None = None) -> TaxYearConfig:
    """Pick the config a calculation should use.

    An explicit ``config`` wins; otherwise ``tax_year`` selects from the
    registry, falling back to the default year.
    """
    if config is not None:
        return config
    if tax_year is not None:
        return get_tax_year_config(tax_year)
    return current_tax_config()
