from decimal import ROUND_FLOOR, ROUND_HALF_UP, Decimal, InvalidOperation

from retailbill.constants import CURRENCY_CODE, CURRENCY_DECIMALS

_FILS = Decimal(1).scaleb(-CURRENCY_DECIMALS)


def _to_fils_decimal(amount: float) -> Decimal:
    # str() gives the shortest repr, so 5.4995 is treated as the literal the user typed.
    return Decimal(str(amount)).quantize(_FILS, rounding=ROUND_HALF_UP)


def round_currency(amount: float) -> float:
    """Round an amount to the fils (3 decimals), half-up: 1.0005 -> 1.001"""
    return float(_to_fils_decimal(amount))


def split_currency(amount: float) -> tuple[int, str]:
    """Split an amount into whole dinars and a 3-digit fils string.

    Rounds half-up to the fils first, so the whole part carries when the
    fraction rounds up: 5.4995 -> (5, '500'), 5.9996 -> (6, '000').
    """
    value = _to_fils_decimal(amount)
    whole = value.to_integral_value(rounding=ROUND_FLOOR)
    fils = int((value - whole).scaleb(CURRENCY_DECIMALS))
    return int(whole), str(fils).zfill(CURRENCY_DECIMALS)


def format_amount(amount: float) -> str:
    """Format an amount with exactly 3 decimals: 4.5 -> '4.500', -0.25 -> '-0.250'"""
    return f"{_to_fils_decimal(amount):.{CURRENCY_DECIMALS}f}"


def format_kwd(amount: float) -> str:
    """Format an amount as KWD string: 1234.5 -> '1,234.500 KWD'"""
    return f"{_to_fils_decimal(amount):,.{CURRENCY_DECIMALS}f} {CURRENCY_CODE}"


def parse_kwd(text: str) -> float | None:
    """Parse a KWD amount string. Returns None on invalid input.

    Accepts formats like '12', '12.5', '1,234.500', '0.750 KWD'.
    """
    text = text.strip()
    if text.upper().endswith(CURRENCY_CODE):
        text = text[: -len(CURRENCY_CODE)].strip()
    if not text:
        return None
    text = text.replace(",", "")
    try:
        return round_currency(float(Decimal(text)))
    except (InvalidOperation, ValueError):
        return None
