"""Net-to-gross solver: the gross salary that yields a target take-home.

Take-home pay is monotonically non-decreasing in gross salary (the marginal
keep-rate is always positive), so the inverse is found by bisection over
the forward engine:

1. ``low = target`` (take-home never exceeds gross), ``high = 2 * target``.
2. Grow ``high`` by 1.5x while its take-home is still below the target,
   up to a configured ceiling.
3. Bisect within a fixed iteration budget, stopping as soon as the
   take-home of the midpoint is within the tolerance of the target.

Candidate grosses are whole cents, so the returned value is exactly the one
whose take-home was checked. The keep-rate is below 1, so take-home moves by
less than a cent between neighbouring candidates and the default one-cent
tolerance is always reachable.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from takehome.calculators.models import NetToGrossInput
from takehome.calculators.salary import take_home_pay
from takehome.core.config import settings
from takehome.core.logging import calculation_ctx, get_logger, tax_year_ctx
from takehome.tax.year_config import TaxYearConfig, resolve_config

logger = get_logger(__name__)

ZERO = Decimal("0")
CENT = Decimal("0.01")
GROWTH_FACTOR = Decimal("1.5")


def _to_cents(amount: Decimal) -> Decimal:
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def find_gross_for_net(
    net_input: NetToGrossInput,
    config: TaxYearConfig | None = None,
    *,
    max_iterations: int | None = None,
    tolerance: Decimal = CENT,
) -> Decimal:
    """Find the gross yearly salary whose take-home pay matches a target.

    Args:
        net_input: Target yearly take-home, filing status and state.
        config: Tax year configuration; defaults to the input's year.
        max_iterations: Bisection budget; defaults to
            ``settings.net_to_gross_max_iterations``.
        tolerance: Stop once take-home is within this many dollars of target.

    Returns:
        Gross yearly salary in cents. If the budget runs out, the last
        midpoint is returned as a best-effort answer and a warning is logged.

    Example:
        >>> gross = find_gross_for_net(NetToGrossInput(target_net_yearly=Decimal("36000")))
        >>> abs(calculate_salary(SalaryInput(gross_salary=gross)).yearly.take_home_pay - 36000) < 1
        True
    """
    config = resolve_config(config, net_input.tax_year)
    budget = settings.net_to_gross_max_iterations if max_iterations is None else max_iterations
    ceiling = settings.net_to_gross_max_gross
    target = net_input.target_net_yearly

    if target <= ZERO:
        return _to_cents(ZERO)

    def net_for(gross: Decimal) -> Decimal:
        return take_home_pay(gross, net_input.filing_status, net_input.state, config)

    token = calculation_ctx.set("net_to_gross")
    year_token = tax_year_ctx.set(config.tax_year)
    try:
        low = _to_cents(target)
        high = _to_cents(target * 2)
        while net_for(high) < target and high < ceiling:
            high = _to_cents(min(high * GROWTH_FACTOR, ceiling))

        if net_for(high) < target:
            logger.warning(
                "net_to_gross_target_above_ceiling",
                target=str(target),
                ceiling=str(ceiling),
            )

        mid = _to_cents((low + high) / 2)
        for iteration in range(budget):
            mid = _to_cents((low + high) / 2)
            difference = net_for(mid) - target
            if abs(difference) < tolerance:
                logger.debug(
                    "net_to_gross_converged",
                    target=str(target),
                    gross=str(mid),
                    iterations=iteration + 1,
                )
                return mid
            if difference < ZERO:
                low = mid
            else:
                high = mid

        logger.warning(
            "net_to_gross_not_converged",
            target=str(target),
            gross=str(mid),
            max_iterations=budget,
        )
        return mid
    finally:
        tax_year_ctx.reset(year_token)
        calculation_ctx.reset(token)
