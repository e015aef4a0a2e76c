"""Input checks shared by domain services.

All of these run before any store call and raise ValidationError.
"""

from decimal import Decimal
from typing import Optional

from pocketbook.domain.errors import ValidationError
from pocketbook.utils.amount_parser import quantize_amount


def require_positive_amount(amount, field: str = "Amount") -> Decimal:
    """Return ``amount`` as cents, rejecting non-numeric and non-positive values."""
    if amount is None:
        raise ValidationError(f"{field} is required")
    try:
        value = quantize_amount(amount)
    except ValueError as exc:
        raise ValidationError(f"{field} is not a valid number: {amount!r}") from exc
    if value <= 0:
        raise ValidationError(f"{field} must be greater than 0")
    return value


def require_text(value: Optional[str], field: str) -> str:
    """Return the stripped text, rejecting empty values."""
    if value is None or not value.strip():
        raise ValidationError(f"{field} is required")
    return value.strip()
