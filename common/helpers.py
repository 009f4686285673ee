"""
Boutique - Shared Helpers
==========================
Pure utility functions with NO database or module dependencies.
"""

import math
import re
from decimal import Decimal
from typing import Any, Optional

CURRENCY_MARKER = "€"

_NOT_NUMERIC = re.compile(r"[^0-9.]")
_FLOAT_PREFIX = re.compile(r"[0-9]+(?:\.[0-9]*)?|\.[0-9]+")
_WHITESPACE = re.compile(r"\s")


def is_non_empty_string(value: Any) -> bool:
    """True for a string that is not blank once trimmed ("  " -> False)."""
    return isinstance(value, str) and len(value.strip()) > 0


def strip_whitespace(value: Optional[str]) -> str:
    """Remove every whitespace character ("06 12 34 56 78" -> "0612345678")."""
    if value is None:
        return ""
    return _WHITESPACE.sub("", value)


# ==========================================
# Prices
# ==========================================

def normalize_price(raw) -> float:
    """
    Convert a price in any of the catalog representations into a float.

    Accepts plain numbers (25000, 59.99) and currency strings ("59,99 €",
    " 59.99€ "). Anything that cannot be read as a price gives 0.
    """
    if raw is None:
        return 0.0

    if isinstance(raw, (int, float, Decimal)) and not isinstance(raw, bool):
        # Fixed-point so 1e+20 or 1e-07 never reach the text rules below
        text = format(Decimal(str(raw)), "f")
    else:
        text = str(raw)

    if not text:
        return 0.0

    text = text.replace(CURRENCY_MARKER, "", 1)
    text = text.replace(",", ".", 1)
    text = _NOT_NUMERIC.sub("", text)

    match = _FLOAT_PREFIX.match(text)
    if not match:
        return 0.0
    try:
        value = float(match.group(0))
    except ValueError:
        return 0.0
    # Digit strings past the float range parse as inf
    return value if math.isfinite(value) else 0.0


def format_price(raw) -> str:
    """Display form of a price: appends € unless it is already there."""
    if raw is None:
        return ""
    text = str(raw).strip()
    if not text:
        return ""
    if CURRENCY_MARKER in text:
        return text
    return f"{text}{CURRENCY_MARKER}"
