"""Progressive bracket evaluation.

A schedule is an ordered tuple of ``Bracket(upper_bound, rate)`` pairs sorted
ascending by upper bound, where the last bracket has ``upper_bound=None``
(no limit). The same evaluator is used for federal income tax, state income
tax, and for stacking preferential-rate income (long-term gains, qualified
dividends) on top of ordinary income.

All arithmetic uses Decimal.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import NamedTuple

ZERO = Decimal("0")
HUNDRED = Decimal("100")


class Bracket(NamedTuple):
    """One bracket of a progressive schedule.

    Attributes:
        upper_bound: Top of the bracket (exclusive of the next), None if unbounded.
        rate: Rate applied to income inside the bracket.
    """

    upper_bound: Decimal | None
    rate: Decimal


Schedule = tuple[Bracket, ...]


@dataclass(frozen=True)
class BracketEvaluation:
    """Tax owed on an income slice and the rate of its last dollar."""

    tax: Decimal
    marginal_rate: Decimal


@dataclass(frozen=True)
class BracketRow:
    """Per-bracket detail of an evaluation.

    Attributes:
        lower_bound: Bottom of the bracket.
        upper_bound: Top of the bracket, None if unbounded.
        rate: Bracket rate.
        amount_taxed: Portion of income that fell inside the bracket.
        tax_in_bracket: Tax owed on that portion.
    """

    lower_bound: Decimal
    upper_bound: Decimal | None
    rate: Decimal
    amount_taxed: Decimal
    tax_in_bracket: Decimal


def schedule(*pairs: tuple[str | None, str]) -> Schedule:
    """Build a schedule from ``(upper_bound, rate)`` string pairs.

    Example:
        >>> schedule(("10000", "0.10"), (None, "0.20"))
        (Bracket(upper_bound=Decimal('10000'), rate=Decimal('0.10')), ...)
    """
    return tuple(
        Bracket(None if upper is None else Decimal(upper), Decimal(rate))
        for upper, rate in pairs
    )


def flat_schedule(rate: Decimal) -> Schedule:
    """Single unbounded bracket at ``rate``."""
    return (Bracket(None, rate),)


def validate_schedule(brackets: Schedule, name: str, progressive: bool = True) -> None:
    """Check the structural invariants of a bracket schedule.

    Args:
        brackets: Schedule to check.
        name: Label used in error messages.
        progressive: Also require non-decreasing rates.

    Raises:
        ValueError: If the schedule is empty, not strictly increasing, not
            unbounded at the top, has a negative rate, or (when
            ``progressive``) has a rate lower than the one before it.
    """
    if not brackets:
        raise ValueError(f"{name}: schedule must contain at least one bracket")
    if brackets[-1].upper_bound is not None:
        raise ValueError(f"{name}: last bracket must be unbounded")

    previous_bound: Decimal | None = None
    previous_rate = ZERO
    for index, bracket in enumerate(brackets):
        if bracket.rate < ZERO:
            raise ValueError(f"{name}: negative rate {bracket.rate} in bracket {index}")
        if progressive and bracket.rate < previous_rate:
            raise ValueError(
                f"{name}: rate {bracket.rate} in bracket {index} is lower than {previous_rate}"
            )

        if bracket.upper_bound is None:
            if index != len(brackets) - 1:
                raise ValueError(f"{name}: only the last bracket may be unbounded")
        else:
            if bracket.upper_bound <= ZERO:
                raise ValueError(
                    f"{name}: upper bound must be positive, got {bracket.upper_bound}"
                )
            if previous_bound is not None and bracket.upper_bound <= previous_bound:
                raise ValueError(
                    f"{name}: upper bounds must be strictly increasing "
                    f"({bracket.upper_bound} after {previous_bound})"
                )
            previous_bound = bracket.upper_bound

        previous_rate = bracket.rate


def _rate_at(brackets: Schedule, income: Decimal) -> Decimal:
    """Rate of the bracket that the next dollar above ``income`` falls in."""
    for bracket in brackets:
        if bracket.upper_bound is None or income < bracket.upper_bound:
            return bracket.rate
    return brackets[-1].rate


def evaluate_brackets(
    brackets: Schedule,
    income_start: Decimal,
    income_delta: Decimal,
) -> BracketEvaluation:
    """Tax an income slice that sits on top of income already earned.

    Walks the schedule in order. For each bracket the free space above the
    running income is filled with as much of the remaining slice as fits,
    and that amount is taxed at the bracket rate. ``income_start=0`` taxes a
    whole income; a positive ``income_start`` stacks the slice on top of
    other income.

    Args:
        brackets: Ascending schedule with an unbounded last bracket.
        income_start: Income already taxed before this slice (>= 0).
        income_delta: The slice being taxed (>= 0).

    Returns:
        BracketEvaluation with the tax on the slice and the rate of the
        bracket containing the slice's last dollar. For an empty slice the
        marginal rate is the rate the next dollar above ``income_start``
        would pay.

    Raises:
        ValueError: If ``income_start`` or ``income_delta`` is negative.

    Example:
        >>> brackets = schedule(("10000", "0.10"), (None, "0.20"))
        >>> evaluate_brackets(brackets, Decimal("0"), Decimal("15000")).tax
        Decimal('2000.00')
    """
    if income_start < ZERO:
        raise ValueError(f"income_start must be >= 0, got {income_start}")
    if income_delta < ZERO:
        raise ValueError(f"income_delta must be >= 0, got {income_delta}")

    marginal_rate = _rate_at(brackets, income_start)
    current_income = income_start
    remaining = income_delta
    tax = ZERO

    for bracket in brackets:
        if remaining <= ZERO:
            break

        if bracket.upper_bound is None:
            space_in_bracket = remaining
        else:
            space_in_bracket = max(ZERO, bracket.upper_bound - current_income)

        amount_taxed_here = min(remaining, space_in_bracket)
        if amount_taxed_here > ZERO:
            tax += amount_taxed_here * bracket.rate
            marginal_rate = bracket.rate
            current_income += amount_taxed_here
            remaining -= amount_taxed_here

    if remaining > ZERO:
        # Only reachable with a malformed schedule lacking an unbounded top.
        tax += remaining * brackets[-1].rate
        marginal_rate = brackets[-1].rate

    return BracketEvaluation(tax=tax, marginal_rate=marginal_rate)


def bracket_breakdown(brackets: Schedule, income: Decimal) -> list[BracketRow]:
    """Split ``income`` across the schedule, one row per bracket touched."""
    rows: list[BracketRow] = []
    lower = ZERO
    remaining = max(ZERO, income)

    for bracket in brackets:
        if remaining <= ZERO:
            break
        if bracket.upper_bound is None:
            size = remaining
        else:
            size = min(remaining, bracket.upper_bound - lower)
        if size > ZERO:
            rows.append(
                BracketRow(
                    lower_bound=lower,
                    upper_bound=bracket.upper_bound,
                    rate=bracket.rate,
                    amount_taxed=size,
                    tax_in_bracket=size * bracket.rate,
                )
            )
        remaining -= size
        if bracket.upper_bound is not None:
            lower = bracket.upper_bound

    return rows


def describe_brackets(brackets: Schedule) -> list[dict[str, str]]:
    """Human-readable rate/range rows for a schedule.

    Example:
        >>> describe_brackets(schedule(("11925", "0.10"), (None, "0.12")))
        [{'rate': '10%', 'range': '$0 - $11,925'}, {'rate': '12%', 'range': 'Over $11,925'}]
    """
    rows: list[dict[str, str]] = []
    lower = ZERO
    for bracket in brackets:
        percent = (bracket.rate * 100).normalize()
        rate_text = f"{percent:f}%"
        if bracket.upper_bound is None:
            range_text = f"Over ${lower:,.0f}"
        else:
            range_text = f"${lower:,.0f} - ${bracket.upper_bound:,.0f}"
            lower = bracket.upper_bound
        rows.append({"rate": rate_text, "range": range_text})
    return rows


def as_whole_percent(rate: Decimal) -> Decimal:
    """Express a bracket rate as a whole-number percent (0.22 -> 22)."""
    return (rate * HUNDRED).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
