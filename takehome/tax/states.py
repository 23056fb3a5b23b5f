"""State income tax rules.

Each state is either "no income tax", a flat rate, or a progressive bracket
schedule, optionally with its own standard deduction and personal exemption,
and for a few states a local (city/county) rate applied to the same base.

These schedules are simplified single-filer approximations of the real state
codes: one schedule per state regardless of filing status.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType
from typing import Mapping

from takehome.tax.brackets import (
    Schedule,
    evaluate_brackets,
    flat_schedule,
    schedule,
    validate_schedule,
)

ZERO = Decimal("0")


@dataclass(frozen=True)
class StateTaxRule:
    """Income tax rule for one state.

    Attributes:
        code: Two-letter postal code.
        name: Display name.
        has_income_tax: False for states with no wage income tax.
        brackets: Progressive schedule (empty for flat-rate or no-tax states).
        flat_rate: Single rate on all state taxable income, if flat.
        standard_deduction: State standard deduction.
        personal_exemption: State personal exemption.
        local_tax_rate: Typical local income tax rate (NYC, MD counties).
    """

    code: str
    name: str
    has_income_tax: bool = True
    brackets: Schedule = ()
    flat_rate: Decimal | None = None
    standard_deduction: Decimal = ZERO
    personal_exemption: Decimal = ZERO
    local_tax_rate: Decimal | None = None

    def __post_init__(self) -> None:
        if not self.has_income_tax:
            return
        if self.flat_rate is None and not self.brackets:
            raise ValueError(f"{self.code}: income tax state needs brackets or a flat rate")
        if self.flat_rate is not None and self.brackets:
            raise ValueError(f"{self.code}: cannot have both brackets and a flat rate")
        validate_schedule(self.schedule, f"state {self.code}")

    @property
    def is_flat(self) -> bool:
        return self.has_income_tax and self.flat_rate is not None

    @property
    def schedule(self) -> Schedule:
        """Schedule to evaluate; a flat rate is a single unbounded bracket."""
        if not self.has_income_tax:
            return flat_schedule(ZERO)
        if self.flat_rate is not None:
            return flat_schedule(self.flat_rate)
        return self.brackets

    def taxable_income(self, adjusted_gross_income: Decimal) -> Decimal:
        """State taxable income after the state deduction and exemption."""
        return max(
            ZERO,
            adjusted_gross_income - self.standard_deduction - self.personal_exemption,
        )


def _no_tax(code: str, name: str) -> StateTaxRule:
    return StateTaxRule(code=code, name=name, has_income_tax=False)


def _flat(code: str, name: str, rate: str, deduction: str = "0", exemption: str = "0") -> StateTaxRule:
    return StateTaxRule(
        code=code,
        name=name,
        flat_rate=Decimal(rate),
        standard_deduction=Decimal(deduction),
        personal_exemption=Decimal(exemption),
    )


def _progressive(
    code: str,
    name: str,
    brackets: Schedule,
    deduction: str = "0",
    local_rate: str | None = None,
) -> StateTaxRule:
    return StateTaxRule(
        code=code,
        name=name,
        brackets=brackets,
        standard_deduction=Decimal(deduction),
        local_tax_rate=None if local_rate is None else Decimal(local_rate),
    )


_RULES: list[StateTaxRule] = [
    # No income tax
    _no_tax("AK", "Alaska"),
    _no_tax("FL", "Florida"),
    _no_tax("NV", "Nevada"),
    _no_tax("NH", "New Hampshire"),
    _no_tax("SD", "South Dakota"),
    _no_tax("TN", "Tennessee"),
    _no_tax("TX", "Texas"),
    _no_tax("WA", "Washington"),
    _no_tax("WY", "Wyoming"),
    # Flat rate
    _flat("AZ", "Arizona", "0.025", deduction="14600"),
    _flat("CO", "Colorado", "0.044", deduction="14600"),
    _flat("ID", "Idaho", "0.058", deduction="14600"),
    _flat("IL", "Illinois", "0.0495"),
    _flat("IN", "Indiana", "0.0305"),
    _flat("KY", "Kentucky", "0.04", deduction="3160"),
    _flat("MA", "Massachusetts", "0.05"),
    _flat("MI", "Michigan", "0.0425", exemption="5600"),
    _flat("MS", "Mississippi", "0.05", deduction="2300"),
    _flat("NC", "North Carolina", "0.0475", deduction="12750"),
    _flat("ND", "North Dakota", "0.0195", deduction="14600"),
    _flat("PA", "Pennsylvania", "0.0307"),
    _flat("UT", "Utah", "0.0465"),
    # Progressive
    _progressive(
        "AL", "Alabama",
        schedule(("500", "0.02"), ("3000", "0.04"), (None, "0.05")),
        deduction="3000",
    ),
    _progressive(
        "AR", "Arkansas",
        schedule(
            ("5099", "0.0"), ("10299", "0.02"), ("14699", "0.03"),
            ("24299", "0.034"), ("87000", "0.039"), (None, "0.044"),
        ),
        deduction="2340",
    ),
    _progressive(
        "CA", "California",
        schedule(
            ("10412", "0.01"), ("24684", "0.02"), ("38959", "0.04"),
            ("54081", "0.06"), ("68350", "0.08"), ("349137", "0.093"),
            ("418961", "0.103"), ("698271", "0.113"), ("1000000", "0.123"),
            (None, "0.133"),
        ),
        deduction="5540",
    ),
    _progressive(
        "CT", "Connecticut",
        schedule(
            ("10000", "0.02"), ("50000", "0.045"), ("100000", "0.055"),
            ("200000", "0.06"), ("250000", "0.065"), ("500000", "0.069"),
            (None, "0.0699"),
        ),
    ),
    _progressive(
        "DE", "Delaware",
        schedule(
            ("2000", "0.0"), ("5000", "0.022"), ("10000", "0.039"),
            ("20000", "0.048"), ("25000", "0.052"), ("60000", "0.0555"),
            (None, "0.066"),
        ),
        deduction="3250",
    ),
    _progressive(
        "GA", "Georgia",
        schedule(("7000", "0.01"), ("10000", "0.02"), (None, "0.055")),
        deduction="12000",
    ),
    _progressive(
        "HI", "Hawaii",
        schedule(
            ("2400", "0.014"), ("4800", "0.032"), ("9600", "0.055"),
            ("14400", "0.064"), ("19200", "0.068"), ("24000", "0.072"),
            ("36000", "0.076"), ("48000", "0.079"), ("150000", "0.0825"),
            ("175000", "0.09"), ("200000", "0.10"), (None, "0.11"),
        ),
        deduction="2200",
    ),
    _progressive(
        "IA", "Iowa",
        schedule(("6210", "0.044"), ("31050", "0.0482"), (None, "0.057")),
        deduction="14600",
    ),
    _progressive(
        "KS", "Kansas",
        schedule(("15000", "0.031"), ("30000", "0.0525"), (None, "0.057")),
        deduction="3500",
    ),
    _progressive(
        "LA", "Louisiana",
        schedule(("12500", "0.0185"), ("50000", "0.035"), (None, "0.0425")),
        deduction="4500",
    ),
    _progressive(
        "ME", "Maine",
        schedule(("26050", "0.058"), ("61600", "0.0675"), (None, "0.0715")),
        deduction="14600",
    ),
    _progressive(
        "MD", "Maryland",
        schedule(
            ("1000", "0.02"), ("2000", "0.03"), ("3000", "0.04"),
            ("100000", "0.0475"), ("125000", "0.05"), ("150000", "0.0525"),
            ("250000", "0.055"), (None, "0.0575"),
        ),
        deduction="2550",
        local_rate="0.032",
    ),
    _progressive(
        "MN", "Minnesota",
        schedule(
            ("31690", "0.0535"), ("104090", "0.068"), ("193240", "0.0785"),
            (None, "0.0985"),
        ),
        deduction="14575",
    ),
    _progressive(
        "MO", "Missouri",
        schedule(
            ("1207", "0.0"), ("2414", "0.02"), ("3621", "0.025"),
            ("4828", "0.03"), ("6035", "0.035"), ("7242", "0.04"),
            ("8449", "0.045"), (None, "0.048"),
        ),
        deduction="14600",
    ),
    _progressive(
        "MT", "Montana",
        schedule(("20500", "0.047"), (None, "0.059")),
        deduction="14600",
    ),
    _progressive(
        "NE", "Nebraska",
        schedule(
            ("3700", "0.0246"), ("22170", "0.0351"), ("35730", "0.0501"),
            (None, "0.0584"),
        ),
        deduction="8000",
    ),
    _progressive(
        "NJ", "New Jersey",
        schedule(
            ("20000", "0.014"), ("35000", "0.0175"), ("40000", "0.035"),
            ("75000", "0.05525"), ("500000", "0.0637"), ("1000000", "0.0897"),
            (None, "0.1075"),
        ),
    ),
    _progressive(
        "NM", "New Mexico",
        schedule(
            ("5500", "0.017"), ("11000", "0.032"), ("16000", "0.047"),
            ("210000", "0.049"), (None, "0.059"),
        ),
        deduction="14600",
    ),
    _progressive(
        "NY", "New York",
        schedule(
            ("8500", "0.04"), ("11700", "0.045"), ("13900", "0.0525"),
            ("80650", "0.0585"), ("215400", "0.0625"), ("1077550", "0.0685"),
            ("5000000", "0.0965"), ("25000000", "0.103"), (None, "0.109"),
        ),
        deduction="8000",
        local_rate="0.03876",
    ),
    _progressive(
        "OH", "Ohio",
        schedule(("26050", "0.0"), ("100000", "0.02765"), (None, "0.035")),
    ),
    _progressive(
        "OK", "Oklahoma",
        schedule(
            ("1000", "0.0025"), ("2500", "0.0075"), ("3750", "0.0175"),
            ("4900", "0.0275"), ("7200", "0.0375"), (None, "0.0475"),
        ),
        deduction="6350",
    ),
    _progressive(
        "OR", "Oregon",
        schedule(
            ("4300", "0.0475"), ("10750", "0.0675"), ("125000", "0.0875"),
            (None, "0.099"),
        ),
        deduction="2745",
    ),
    _progressive(
        "RI", "Rhode Island",
        schedule(("77450", "0.0375"), ("176050", "0.0475"), (None, "0.0599")),
        deduction="10550",
    ),
    _progressive(
        "SC", "South Carolina",
        schedule(("3460", "0.0"), ("17330", "0.03"), (None, "0.064")),
        deduction="14600",
    ),
    _progressive(
        "VT", "Vermont",
        schedule(
            ("45400", "0.0335"), ("110050", "0.066"), ("229550", "0.076"),
            (None, "0.0875"),
        ),
        deduction="7000",
    ),
    _progressive(
        "VA", "Virginia",
        schedule(("3000", "0.02"), ("5000", "0.03"), ("17000", "0.05"), (None, "0.0575")),
        deduction="8500",
    ),
    _progressive(
        "WV", "West Virginia",
        schedule(
            ("10000", "0.0236"), ("25000", "0.0315"), ("40000", "0.0354"),
            ("60000", "0.0472"), (None, "0.0512"),
        ),
    ),
    _progressive(
        "WI", "Wisconsin",
        schedule(
            ("14320", "0.0354"), ("28640", "0.0465"), ("315310", "0.053"),
            (None, "0.0765"),
        ),
        deduction="13230",
    ),
    _progressive(
        "DC", "District of Columbia",
        schedule(
            ("10000", "0.04"), ("40000", "0.06"), ("60000", "0.065"),
            ("250000", "0.085"), ("500000", "0.0925"), ("1000000", "0.0975"),
            (None, "0.1075"),
        ),
        deduction="14600",
    ),
]

STATE_TAX_RULES: Mapping[str, StateTaxRule] = MappingProxyType(
    {rule.code: rule for rule in _RULES}
)


def is_known_state(code: str, rules: Mapping[str, StateTaxRule] = STATE_TAX_RULES) -> bool:
    return code.upper() in rules


def get_state_rule(
    code: str, rules: Mapping[str, StateTaxRule] = STATE_TAX_RULES
) -> StateTaxRule | None:
    """Rule for a state code, or None when the code is not in the table."""
    return rules.get(code.upper())


def get_state_name(code: str, rules: Mapping[str, StateTaxRule] = STATE_TAX_RULES) -> str:
    """Display name for a state code, falling back to the code itself."""
    rule = rules.get(code.upper())
    return rule.name if rule else code


def get_all_states(
    rules: Mapping[str, StateTaxRule] = STATE_TAX_RULES,
) -> list[tuple[str, str]]:
    """All ``(code, name)`` pairs sorted by state name."""
    return sorted(((code, rule.name) for code, rule in rules.items()), key=lambda item: item[1])


def get_states_with_no_income_tax(
    rules: Mapping[str, StateTaxRule] = STATE_TAX_RULES,
) -> list[str]:
    return [code for code, rule in rules.items() if not rule.has_income_tax]


def get_states_with_flat_tax(
    rules: Mapping[str, StateTaxRule] = STATE_TAX_RULES,
) -> list[str]:
    return [code for code, rule in rules.items() if rule.is_flat]


@dataclass(frozen=True)
class StateTaxAmount:
    """State and local tax owed on an adjusted gross income."""

    taxable_income: Decimal
    state_tax: Decimal
    local_tax: Decimal = field(default=ZERO)


def calculate_state_tax(
    rule: StateTaxRule,
    adjusted_gross_income: Decimal,
    include_local_tax: bool = False,
) -> StateTaxAmount:
    """Compute state (and optionally local) income tax.

    Args:
        rule: The state's rule.
        adjusted_gross_income: Income after pre-tax reductions.
        include_local_tax: Add the state's typical local rate, if it has one.

    Returns:
        StateTaxAmount with the state taxable base and the tax owed.
    """
    if not rule.has_income_tax:
        return StateTaxAmount(taxable_income=ZERO, state_tax=ZERO)

    taxable = rule.taxable_income(adjusted_gross_income)
    state_tax = evaluate_brackets(rule.schedule, ZERO, taxable).tax

    local_tax = ZERO
    if include_local_tax and rule.local_tax_rate is not None:
        local_tax = taxable * rule.local_tax_rate

    return StateTaxAmount(taxable_income=taxable, state_tax=state_tax, local_tax=local_tax)
