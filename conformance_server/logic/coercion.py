"""Primitive coercion from raw query/path text.

Each coercer returns the typed value, or ``None`` when the text does not
parse for that kind. Failure is absence, never an exception: validation of
unset fields belongs to the API service.

Integer policy: lenient leading-integer parse. Trailing text (including a
fractional part) is truncated, so ``"1.9"`` binds as ``1`` and ``"12abc"``
as ``12``. Values outside the signed 32/64-bit range are unset.
"""

from __future__ import annotations

import math
import re
from decimal import Decimal, InvalidOperation
from typing import Callable, Optional

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

INT32_MIN, INT32_MAX = -(2**31), 2**31 - 1
INT64_MIN, INT64_MAX = -(2**63), 2**63 - 1


def coerce_string(raw: Optional[str]) -> Optional[str]:
    return raw if raw else None


def coerce_boolean(raw: Optional[str]) -> Optional[bool]:
    if raw is None:
        return None
    lowered = raw.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    return None


def _coerce_int(raw: Optional[str], low: int, high: int) -> Optional[int]:
    if raw is None:
        return None
    m = _LEADING_INT.match(raw)
    if not m:
        return None
    value = int(m.group(1))
    if value < low or value > high:
        return None
    return value


def coerce_int32(raw: Optional[str]) -> Optional[int]:
    return _coerce_int(raw, INT32_MIN, INT32_MAX)


def coerce_int64(raw: Optional[str]) -> Optional[int]:
    return _coerce_int(raw, INT64_MIN, INT64_MAX)


def coerce_double(raw: Optional[str]) -> Optional[float]:
    """Parse with ``float()``; NaN and infinities are unset (not JSON-representable)."""
    if raw is None:
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


# Decimals whose exponent leaves the double range are unset; larger
# exponents expand into huge integers when rendered
DECIMAL_MAX_ADJUSTED = 308


def coerce_decimal(raw: Optional[str]) -> Optional[Decimal]:
    if raw is None:
        return None
    try:
        value = Decimal(raw.strip())
    except InvalidOperation:
        return None
    if not value.is_finite() or abs(value.adjusted()) > DECIMAL_MAX_ADJUSTED:
        return None
    return value


def coerce_enum(raw: Optional[str]) -> Optional[str]:
    # Membership is the API service's call
    return raw if raw else None


def coerce_datetime(raw: Optional[str]) -> Optional[str]:
    # ISO-8601 text is forwarded unchanged
    return raw if raw else None


COERCERS: dict[str, Callable[[Optional[str]], object]] = {
    "string": coerce_string,
    "boolean": coerce_boolean,
    "double": coerce_double,
    "int32": coerce_int32,
    "int64": coerce_int64,
    "decimal": coerce_decimal,
    "enum": coerce_enum,
    "datetime": coerce_datetime,
}


def coerce(kind: str, raw: Optional[str]) -> object:
    """Coerce ``raw`` to the primitive ``kind`` (one of ``COERCERS``)."""
    try:
        coercer = COERCERS[kind]
    except KeyError:
        raise ValueError(f"unknown primitive kind: {kind}") from None
    return coercer(raw)


__all__ = [
    "COERCERS",
    "DECIMAL_MAX_ADJUSTED",
    "coerce",
    "coerce_string",
    "coerce_boolean",
    "coerce_int32",
    "coerce_int64",
    "coerce_double",
    "coerce_decimal",
    "coerce_enum",
    "coerce_datetime",
]
