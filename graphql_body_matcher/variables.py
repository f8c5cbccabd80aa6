"""Structural comparison of GraphQL variable payloads."""

from decimal import Decimal
from numbers import Number
from typing import Any


def variables_equal(a: Any, b: Any) -> bool:
    """
    Compare two JSON-like value trees.

    Objects match on key set and values regardless of key order; arrays
    match element by element in order. Numbers compare by value, so ``1``,
    ``1.0`` and ``Decimal("1.00")`` are equal, but booleans never equal numbers.

    Args:
        a: Decoded JSON value (``None`` is treated as an empty object at the top level)
        b: Decoded JSON value

    Returns:
        True if both trees are structurally equal
    """
    return _equal({} if a is None else a, {} if b is None else b)


def _equal(a: Any, b: Any) -> bool:
    if isinstance(a, dict) or isinstance(b, dict):
        if not (isinstance(a, dict) and isinstance(b, dict)):
            return False
        if a.keys() != b.keys():
            return False
        return all(_equal(a[key], b[key]) for key in a)

    if isinstance(a, (list, tuple)) or isinstance(b, (list, tuple)):
        if not (isinstance(a, (list, tuple)) and isinstance(b, (list, tuple))):
            return False
        if len(a) != len(b):
            return False
        return all(_equal(x, y) for x, y in zip(a, b))

    # bool is an int subclass; keep True != 1
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b

    if _is_number(a) or _is_number(b):
        return _is_number(a) and _is_number(b) and _as_decimal(a) == _as_decimal(b)

    if a is None or b is None:
        return a is None and b is None

    return type(a) is type(b) and a == b


def _is_number(value: Any) -> bool:
    return isinstance(value, Number) and not isinstance(value, bool)


def _as_decimal(value: Any) -> Decimal:
    if isinstance(value, float):
        # repr keeps 0.1 as 0.1 rather than its binary expansion
        return Decimal(repr(value))
    return Decimal(value)
