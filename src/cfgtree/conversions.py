"""Scalar narrowing and typed list coercion.

Integral kinds follow fixed-width two's complement semantics: integers wrap to the
target width, floats truncate toward zero and saturate (NaN becomes 0). Byte, short
and character narrowing from a float goes through the 32-bit range first.
"""

from __future__ import annotations

import logging
import math
import re
import struct
from collections.abc import Mapping, Sequence
from typing import Any, Callable, Dict, Iterable, List, Optional

_INTEGRAL_TEXT = re.compile(r"[+-]?[0-9]+")
_BOOLEAN_TEXT: Dict[str, bool] = {"true": True, "false": False}
_CHAR_BITS = 16
LOGGER = logging.getLogger("cfgtree.conversions")

INT_BITS = 32
LONG_BITS = 64
SHORT_BITS = 16
BYTE_BITS = 8


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_scalar(value: Any) -> bool:
    return isinstance(value, (str, bool, int, float))


def is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def fits_bits(value: int, bits: int) -> bool:
    return -(1 << (bits - 1)) <= value < (1 << (bits - 1))


def to_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _wrap(value: int, bits: int) -> int:
    value &= (1 << bits) - 1
    if value >= 1 << (bits - 1):
        value -= 1 << bits
    return value


def _saturate(value: float, bits: int) -> int:
    if math.isnan(value):
        return 0
    low, high = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    if value <= low:
        return low
    if value >= high:
        return high
    return int(value)


def _to_integral(value: Any, bits: int) -> int:
    if isinstance(value, float):
        if bits >= INT_BITS:
            return _saturate(value, bits)
        value = _saturate(value, INT_BITS)
    return _wrap(int(value), bits)


def to_int(value: Any) -> int:
    return _to_integral(value, INT_BITS)


def to_long(value: Any) -> int:
    return _to_integral(value, LONG_BITS)


def to_short(value: Any) -> int:
    return _to_integral(value, SHORT_BITS)


def to_byte(value: Any) -> int:
    return _to_integral(value, BYTE_BITS)


def to_double(value: Any) -> float:
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf


def to_float(value: Any) -> float:
    """Round `value` to the nearest single-precision float, keeping Python's float type."""
    double = to_double(value)
    try:
        return struct.unpack("f", struct.pack("f", double))[0]
    except OverflowError:
        return math.copysign(math.inf, double)


def to_char(value: Any) -> str:
    code = _to_integral(value, INT_BITS) & ((1 << _CHAR_BITS) - 1)
    return chr(code)


def parse_integral(text: str, bits: int) -> int:
    if not _INTEGRAL_TEXT.fullmatch(text):
        raise ValueError(f"Not an integral numeral: {text!r}")
    value = int(text)
    if not fits_bits(value, bits):
        raise ValueError(f"Numeral {text!r} does not fit in {bits} bits")
    return value


def parse_double(text: str) -> float:
    if "_" in text:
        raise ValueError(f"Not a decimal numeral: {text!r}")
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"Numeral {text!r} is not a finite double")
    return value


def _integral_element(bits: int) -> Callable[[Any], int]:
    def convert(value: Any) -> int:
        if is_number(value):
            return _to_integral(value, bits)
        if isinstance(value, str):
            return parse_integral(value, bits)
        raise TypeError(f"{type(value).__name__} is not numeric")

    return convert


def _double_element(value: Any) -> float:
    if is_number(value):
        return to_double(value)
    if isinstance(value, str):
        return parse_double(value)
    raise TypeError(f"{type(value).__name__} is not numeric")


def _float_element(value: Any) -> float:
    if isinstance(value, str):
        result = to_float(parse_double(value))
        if math.isinf(result):
            raise ValueError(f"Numeral {value!r} does not fit in a float")
        return result
    return to_float(_double_element(value))


def _string_element(value: Any) -> str:
    if not is_scalar(value):
        raise TypeError(f"{type(value).__name__} has no text form")
    return to_text(value)


def _boolean_element(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value in _BOOLEAN_TEXT:
        return _BOOLEAN_TEXT[value]
    raise ValueError(f"{value!r} is not a boolean")


def _character_element(value: Any) -> str:
    if isinstance(value, str):
        if len(value) != 1:
            raise ValueError(f"{value!r} is not a single character")
        return value
    if is_number(value):
        return to_char(value)
    raise TypeError(f"{type(value).__name__} is not a character")


def _map_element(value: Any) -> Mapping:
    if not isinstance(value, Mapping):
        raise TypeError(f"{type(value).__name__} is not a mapping")
    return value


_ELEMENT_CONVERTERS: Dict[str, Callable[[Any], Any]] = {
    "string": _string_element,
    "integer": _integral_element(INT_BITS),
    "long": _integral_element(LONG_BITS),
    "short": _integral_element(SHORT_BITS),
    "byte": _integral_element(BYTE_BITS),
    "double": _double_element,
    "float": _float_element,
    "boolean": _boolean_element,
    "character": _character_element,
    "map": _map_element,
}
LIST_KINDS = tuple(_ELEMENT_CONVERTERS)


def coerce_list(values: Optional[Iterable[Any]], kind: str) -> List[Any]:
    """Convert every element of `values` to `kind`, dropping those that do not convert.

    Args:
        values (Optional[Iterable[Any]]): Source elements; `None` yields an empty list.
        kind (str): One of `LIST_KINDS`.

    Returns:
        List[Any]: A new list with the converted elements in source order.

    Raises:
        ValueError: If `kind` is not a known list kind.

    Side Effects / I/O:
        - Logs each dropped element at DEBUG level.

    Examples:
        >>> from cfgtree.conversions import coerce_list
        >>> coerce_list(["1", 2, "bad", 3.9], "integer")
        [1, 2, 3]

    """
    try:
        convert = _ELEMENT_CONVERTERS[kind]
    except KeyError:
        raise ValueError(f"Unknown list kind: {kind!r}") from None

    result: List[Any] = []
    if values is None:
        return result
    for value in values:
        try:
            result.append(convert(value))
        except (TypeError, ValueError) as err:
            LOGGER.debug("Dropping %s list element %r: %s", kind, value, err)
    return result
