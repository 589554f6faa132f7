"""Exact scalar values carried by circuit nodes.

Values are never rounded: integers stay Python ``int`` (arbitrary precision)
and everything else becomes a ``fractions.Fraction``.
"""

import math
from decimal import Decimal
from fractions import Fraction
from typing import Any

type Scalar = int | Fraction


def normalize(value: Fraction) -> Scalar:
    """Collapse a fraction with denominator 1 into an ``int``."""
    if value.denominator == 1:
        return value.numerator
    return value


def as_scalar(value: Any) -> Scalar:  # noqa: ANN401
    """Coerce a user-supplied value into an exact scalar.

    Args:
        value: An ``int``, ``Fraction``, ``float``, ``Decimal`` or numeric string.

    Returns:
        The exact value as ``int`` or ``Fraction``.

    Raises:
        TypeError: If the value is a ``bool`` or of an unsupported type.
        ValueError: If the value is not finite or the string is not a number.

    Example:
        >>> as_scalar(0.5)
        Fraction(1, 2)
        >>> as_scalar("6/3")
        2

    """
    match value:
        case bool():
            msg = f"Booleans are not circuit values: {value!r}"
            raise TypeError(msg)
        case int():
            return value
        case Fraction():
            return normalize(value)
        case float() | Decimal():
            if not (value.is_finite() if isinstance(value, Decimal) else math.isfinite(value)):
                msg = f"Non-finite value cannot be represented exactly: {value!r}"
                raise ValueError(msg)
            return normalize(Fraction(value))
        case str():
            return parse_scalar(value)
        case _:
            msg = f"Unsupported value type {type(value).__name__}: {value!r}"
            raise TypeError(msg)


def parse_scalar(text: str) -> Scalar:
    """Parse ``"5"``, ``"-2"``, ``"3/4"`` or ``"1.25"`` into an exact scalar."""
    try:
        return normalize(Fraction(text.strip()))
    except (ValueError, ZeroDivisionError) as e:
        msg = f"Not a number: {text!r}"
        raise ValueError(msg) from e


def add(lhs: Scalar, rhs: Scalar) -> Scalar:
    return as_scalar(lhs + rhs)


def mul(lhs: Scalar, rhs: Scalar) -> Scalar:
    return as_scalar(lhs * rhs)
