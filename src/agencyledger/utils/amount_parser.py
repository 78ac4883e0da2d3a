"""Amount parsing utilities.

Ledger values are integers in minor currency units (centavos). These helpers
convert between that representation and what people type and read.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
import re

THOUSANDS_GROUPING = re.compile(r"^-?[1-9]\d{0,2}(\.\d{3})+$")


def parse_amount(amount_str: str) -> int:
    """Parse an amount string into minor units.

    Handles various formats:
    - "1234.56" / "1234,56"
    - "R$ 1.234,56" (Brazilian grouping)
    - "1.500" / "1.234.567" (Brazilian grouping, whole units)
    - "1,234.56" (US grouping)
    - "1500" (whole units)

    A lone "." followed by exactly three digits is a thousands separator,
    never a decimal point.

    Args:
        amount_str: Amount string

    Returns:
        Amount in minor units (centavos)

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = re.sub(r"(R\$|[$€£])", "", amount_str.strip()).strip()

    # The last separator is the decimal one when followed by 1-2 digits
    if "," in amount_str and "." in amount_str:
        if amount_str.rfind(",") > amount_str.rfind("."):
            amount_str = amount_str.replace(".", "").replace(",", ".")
        else:
            amount_str = amount_str.replace(",", "")
    elif "," in amount_str:
        amount_str = amount_str.replace(",", ".")
    elif "." in amount_str:
        # "1.500" and "1.234.567" are Brazilian thousands grouping
        integer_part, _, fraction = amount_str.rpartition(".")
        if amount_str.count(".") > 1 or (len(fraction) == 3 and integer_part.lstrip("-")):
            if not THOUSANDS_GROUPING.match(amount_str):
                raise ValueError(f"Could not parse amount '{amount_str}': ambiguous separators")
            amount_str = amount_str.replace(".", "")

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e}")

    return round_half_up(amount * 100)


def format_amount(value: int) -> str:
    """Format minor units as a Brazilian currency string (e.g., 'R$ 1.234,56')."""
    sign = "-" if value < 0 else ""
    whole, cents = divmod(abs(value), 100)
    grouped = f"{whole:,}".replace(",", ".")
    return f"{sign}R$ {grouped},{cents:02d}"


def round_half_up(value: Decimal) -> int:
    """Round to the nearest minor unit, halves away from zero."""
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def percent_of(part: int | Decimal, whole: int) -> float:
    """Return part as a percentage of whole, rounded to two decimals (0 when whole <= 0)."""
    if whole <= 0:
        return 0.0
    ratio = Decimal(part) * 100 / Decimal(whole)
    return float(ratio.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))
