"""Amount and percentage parsing utilities."""

from decimal import Decimal, InvalidOperation
import re


def parse_amount(amount_str: str) -> Decimal:
    """Parse a money amount into a non-negative Decimal.

    Handles "45", "45.50", "€45.50", "1,200.00" and the decimal comma
    "45,50".

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If the string is empty, malformed or negative
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    text = re.sub(r"[€$£\s]", "", amount_str)

    # A single comma followed by one or two digits is a decimal comma
    if re.fullmatch(r"-?\d+,\d{1,2}", text):
        text = text.replace(",", ".")
    else:
        text = text.replace(",", "")

    try:
        amount = Decimal(text)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if amount < 0:
        raise ValueError(f"Amount cannot be negative: '{amount_str}'")
    return amount


def parse_percentage(value: str) -> Decimal:
    """Parse a percentage such as "40" or "37.5%" into a Decimal in [0, 100].

    Raises:
        ValueError: If the value is malformed or out of range
    """
    text = (value or "").strip().rstrip("%").strip()
    try:
        rate = Decimal(text)
    except InvalidOperation:
        raise ValueError(f"Could not parse percentage '{value}'")
    if not rate.is_finite() or not Decimal("0") <= rate <= Decimal("100"):
        raise ValueError(f"Percentage must be between 0 and 100, got '{value}'")
    return rate
