"""Table rows."""

from __future__ import annotations

import datetime
import math
from decimal import Decimal


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    number = Decimal(repr(value))
    if number == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"
    sign, digits, exponent = number.normalize().as_tuple()
    decimal_exponent = len(digits) + exponent - 1
    prefix = "-" if sign else ""
    if decimal_exponent < -4 or decimal_exponent >= 21:
        text = "".join(map(str, digits))
        mantissa = text[0] + ("." + text[1:] if len(text) > 1 else "")
        exp_sign = "-" if decimal_exponent < 0 else "+"
        return f"{prefix}{mantissa}e{exp_sign}{abs(decimal_exponent):02d}"
    return format(number.normalize(), "f")


def _format_value(value: object) -> str:
    if value is None:
        return "<nil>"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _format_float(value)
    if isinstance(value, datetime.datetime):
        return value.strftime("%Y-%m-%d %H:%M:%S") + " +0000 UTC"
    if isinstance(value, datetime.date):
        return f"{value.isoformat()} 00:00:00 +0000 UTC"
    return str(value)


class Row(dict):
    """A record mapping column names to values."""

    def __str__(self) -> str:
        fields = ", ".join(f"{name}: {_format_value(value)}" for name, value in self.items())
        return "{" + fields + "}"