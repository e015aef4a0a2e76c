"""Amount parsing utilities.

Money is handled as Decimal rounded to cents everywhere so that comparisons
such as "remaining debt is zero" are exact.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
import re

CENTS = Decimal("0.01")
ZERO = Decimal("0.00")


def quantize_amount(value) -> Decimal:
    """Round a number to cents.

    Floats go through ``str`` first so 0.1 becomes 0.10 rather than
    0.1000000000000000055...

    Raises:
        ValueError: If the value is not numeric
    """
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, float):
        amount = Decimal(str(value))
    else:
        try:
            amount = Decimal(value)
        except (InvalidOperation, TypeError) as e:
            raise ValueError(f"Not a valid amount: {value!r}") from e
    if not amount.is_finite():
        raise ValueError(f"Not a valid amount: {value!r}")
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal rounded to cents.

    Handles various formats:
    - "123.45"
    - "S/123.45", "$123.45"
    - "-123.45", "-S/ 123.45"
    - "1,234.56"
    - "(123.45)" (negative in parentheses)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    # Currency symbols, including the sol prefix
    amount_str = re.sub(r"S/|[$€£¥]", "", amount_str)
    amount_str = amount_str.replace(",", "").replace(" ", "")

    try:
        amount = quantize_amount(amount_str)
    except ValueError:
        raise ValueError(f"Could not parse amount '{amount_str}'")
    return -amount if is_negative else amount


def format_amount(amount: Decimal) -> str:
    """Render an amount the way the reports show it."""
    return f"S/{amount:,.2f}"
