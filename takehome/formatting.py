"""Display formatting for money amounts."""

from decimal import ROUND_HALF_UP, Decimal


def format_currency(amount: Decimal | int | float, decimals: int = 2) -> str:
    """Format an amount as US dollars.

    Rounds half away from zero to ``decimals`` places, groups thousands
    with commas and puts the sign before the dollar sign.

    Args:
        amount: Amount to format.
        decimals: Number of decimal places (>= 0).

    Returns:
        Formatted string.

    Raises:
        ValueError: If ``decimals`` is negative.

    Example:
        >>> format_currency(Decimal("1234.565"))
        '$1,234.57'
        >>> format_currency(Decimal("-1234.5"), decimals=0)
        '-$1,235'
    """
    if decimals < 0:
        raise ValueError(f"decimals must be >= 0, got {decimals}")

    value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    quantum = Decimal(1).scaleb(-decimals)
    rounded = value.quantize(quantum, rounding=ROUND_HALF_UP)

    sign = "-" if rounded < 0 else ""
    return f"{sign}${abs(rounded):,.{decimals}f}"
