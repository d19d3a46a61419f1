"""Environment variables and service drop-ins generated from configuration.

Configuration objects are dataclasses whose fields name their environment
variable in the field metadata under the key ``"env"``.
"""

from __future__ import annotations

import dataclasses
import math
from decimal import Decimal
from typing import Any


def _is_zero(value: Any) -> bool:
    if value is None or value is False:
        return True
    if isinstance(value, (str, bytes, list, tuple, dict, set)):
        return len(value) == 0
    if isinstance(value, (int, float)):
        return value == 0
    return False


def _format_float(value: float) -> str:
    """Format a float in its shortest form, using an exponent for very small or large values."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"

    number = Decimal(repr(value)).normalize()
    sign, digit_tuple, exponent = number.as_tuple()
    digits = "".join(str(d) for d in digit_tuple)
    prefix = "-" if sign else ""
    decimal_exponent = len(digits) + exponent - 1

    if decimal_exponent < -4 or decimal_exponent >= 6:
        mantissa = digits[0] + ("." + digits[1:] if len(digits) > 1 else "")
        exp_sign = "+" if decimal_exponent >= 0 else "-"
        return f"{prefix}{mantissa}e{exp_sign}{abs(decimal_exponent):02d}"
    return prefix + format(abs(number), "f")


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _format_float(value)
    if isinstance(value, (list, tuple)):
        return "[" + " ".join(_format_value(item) for item in value) + "]"
    return str(value)


def get_env_vars(config: Any) -> list[str]:
    """Return ``KEY=value`` strings for every non-empty field with an env name."""
    if not dataclasses.is_dataclass(config) or isinstance(config, type):
        raise TypeError(f"expected a dataclass instance, got {type(config).__name__}")

    result = []
    for field in dataclasses.fields(config):
        key = field.metadata.get("env")
        if key is None:
            continue
        value = getattr(config, field.name)
        if _is_zero(value):
            continue
        result.append(f"{key}={_format_value(value)}")
    return result


def service_contents(config: Any) -> str:
    """Return a ``[Service]`` drop-in setting the configured environment, or ""."""
    env_vars = get_env_vars(config)
    if not env_vars:
        return ""
    lines = "".join(f'Environment="{var}"\n' for var in env_vars)
    return "[Service]\n" + lines