# Argtrail Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Contains value coercion utilities for Argtrail type nodes.

Coercion here never raises for user input: an unparsable number becomes the
NaN sentinel and validation decides later whether that is a failure.

Functions:
- coerce_bool: Convert a string to a boolean.
- coerce_number: Convert a string to an int or float, NaN on failure.
- coerce_scalar: Convert a token for a given scalar `TypeKind`.
- is_nan: Check for the NaN sentinel.
- display_value: Render a coerced value for failure messages.
- json_safe: Prepare a converted value for strict JSON output.
"""
from __future__ import annotations

import math
import re
from typing import Any

from argtrail.exceptions import TypeNodeError
from argtrail.parser.type_kind import TypeKind

DECIMAL_PATTERN = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
RADIX_PATTERN = re.compile(r"0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)")
INFINITY_PATTERN = re.compile(r"([+-]?)Infinity")


def coerce_bool(value: str | bool) -> bool:
    """
    Convert a string to a boolean.

    Accepts various truthy and falsy representations such as 'true', 'yes', '0', 'off', etc.

    Args:
        value (str | bool): The input string or boolean.

    Returns:
        bool: Parsed boolean result.
    """
    if isinstance(value, bool):
        return value
    value = value.strip().lower()
    if value in {"true", "t", "1", "yes", "on"}:
        return True
    elif value in {"false", "f", "0", "no", "off"}:
        return False
    return bool(value)


def coerce_number(value: str) -> int | float:
    """
    Convert a string to a number.

    Accepts ASCII decimal literals with an optional sign, fraction and
    exponent, `0x`/`0o`/`0b` radix literals and `Infinity`. Integer literals
    become `int`, other decimals `float`, and everything else `math.nan`
    (digit separators and non-ASCII digits included).

    Args:
        value (str): The input string.

    Returns:
        int | float: The parsed number or NaN.
    """
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    text = value.strip()
    if not text:
        return math.nan
    if INTEGER_PATTERN.fullmatch(text):
        return int(text)
    if DECIMAL_PATTERN.fullmatch(text):
        return float(text)
    if RADIX_PATTERN.fullmatch(text):
        return int(text, 0)
    infinity = INFINITY_PATTERN.fullmatch(text)
    if infinity:
        return -math.inf if infinity.group(1) == "-" else math.inf
    return math.nan


def coerce_scalar(value: str, kind: TypeKind) -> Any:
    """
    Convert one token fragment for a scalar kind.

    Args:
        value (str): The token fragment.
        kind (TypeKind): Target scalar kind.

    Returns:
        Any: The coerced value.

    Raises:
        TypeNodeError: If `kind` is not a scalar kind.
    """
    if kind == TypeKind.NUMBER:
        return coerce_number(value)
    if kind == TypeKind.BOOLEAN:
        return coerce_bool(value)
    if kind in (TypeKind.STRING, TypeKind.ENUM) or kind.is_path_like:
        return value
    raise TypeNodeError(f"Cannot coerce a scalar value for kind '{kind}'")


def is_nan(value: Any) -> bool:
    return isinstance(value, float) and math.isnan(value)


def display_value(value: Any) -> str:
    if is_nan(value):
        return "NaN"
    return str(value)


def json_safe(value: Any) -> Any:
    """
    Make a converted value strict-JSON serializable.

    NaN sentinels become `None` and infinities become the strings `"Infinity"`
    and `"-Infinity"`, at any depth.
    """
    if isinstance(value, list):
        return [json_safe(item) for item in value]
    if isinstance(value, dict):
        return {key: json_safe(item) for key, item in value.items()}
    if is_nan(value):
        return None
    if isinstance(value, float) and math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    return value
