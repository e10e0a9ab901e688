"""
Money helpers for the Settlement Engine.

All monetary values are Decimal, rounded half-up to cents.
"""

import logging
import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
CENT = Decimal("0.01")
# Inputs at or above this coerce to 0 so derived sums fit the 28-digit context
MAX_AMOUNT = Decimal("1e15")

_BRL_THOUSANDS = re.compile(r"^-?\d{1,3}(\.\d{3})+(,\d+)?$")


def round2(value) -> Decimal:
    """Round to 2 decimal places (ROUND_HALF_UP)."""
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def to_money(value: Decimal) -> float:
    """Convert Decimal to float with 2 decimal places."""
    return round(float(value), 2)


def coerce_money(raw) -> Decimal:
    """
    Coerce a raw form/API value into a non-negative monetary Decimal.

    Anything unparsable, non-finite, negative or at least MAX_AMOUNT becomes
    zero. Strings may use the plain "1234.56" form or the Brazilian
    "R$ 1.234,56" form.
    """
    if raw is None or isinstance(raw, bool):
        return ZERO

    if isinstance(raw, str):
        text = raw.strip().replace("R$", "").replace(" ", "")
        if not text:
            return ZERO
        if _BRL_THOUSANDS.match(text) or ("," in text and "." not in text):
            text = text.replace(".", "").replace(",", ".")
        raw = text

    try:
        value = Decimal(str(raw))
    except (InvalidOperation, ValueError):
        logger.debug("Coercing unparsable monetary value %r to 0", raw)
        return ZERO

    if not value.is_finite() or value < 0 or value >= MAX_AMOUNT:
        logger.debug("Coercing out-of-domain monetary value %r to 0", raw)
        return ZERO
    if value == 0:
        return ZERO

    return round2(value)


def coerce_bool(raw) -> bool:
    """Interpret checkbox-style values ("true", "on", 1) as booleans."""
    if isinstance(raw, str):
        return raw.strip().lower() in ("1", "true", "yes", "on", "sim")
    return bool(raw)


def format_brl(value) -> str:
    """Format a number as Brazilian currency, e.g. R$ 1.234,56."""
    amount = round2(Decimal(str(value)))
    sign = "-" if amount < 0 else ""
    text = f"{abs(amount):,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{sign}R$ {text}"
