"""
Display-string conversion for arbitrary JSON values.
"""

import json
import math
from decimal import Decimal
from typing import Any

from metaview.logger import get_logger
from metaview.meta.models import ValueKind, classify_value

logger = get_logger(__name__)


def _coerce(value: Any) -> str:
    try:
        return str(value)
    except Exception as e:
        # e.g. ints beyond sys.get_int_max_str_digits()
        logger.debug(f"String coercion failed for {type(value).__name__}: {e}")
        return object.__repr__(value)


def _float_literal(value: float) -> str:
    """Shortest round-trip form, laid out the way JSON producers print numbers."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    text = repr(value)
    if "e" not in text:
        return text
    if 1e-6 <= abs(value) < 1e21:
        return format(Decimal(text), "f")
    mantissa, exponent = text.split("e")
    exp = int(exponent)
    return f"{mantissa}e{'+' if exp >= 0 else '-'}{abs(exp)}"


def stringify_value(value: Any) -> str:
    """
    Convert any value into a display string. Never raises.

    None becomes "", strings are returned as-is, booleans use their JSON
    literal form. Integral floats print without a fractional part and
    exponents only appear outside [1e-6, 1e21). Objects and arrays are
    serialized as compact JSON in their own key order; when serialization
    or number formatting fails (cycles, unserializable members, oversized
    ints) the generic string coercion is used instead.

    Args:
        value: Any decoded JSON value (or arbitrary Python object)

    Returns:
        Display string
    """
    kind = classify_value(value)
    if kind is ValueKind.NULL:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return _coerce(value)
    if isinstance(value, float):
        return _float_literal(value)

    try:
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError, OverflowError, RecursionError) as e:
        logger.debug(f"JSON serialization failed for {type(value).__name__}: {e}")
        return _coerce(value)
